"""Result exporters."""
