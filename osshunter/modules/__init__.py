"""Probe primitives: fetcher, extractor, renderer and write-probe."""
