"""
Input validation utilities.
"""

import re
from pathlib import Path
from typing import Iterable, Optional


_URL_PATTERN = re.compile(
    r"^https?://"  # http:// or https://
    r"(?:(?:[A-Z0-9](?:[A-Z0-9-]{0,61}[A-Z0-9])?\.)+[A-Z]{2,63}\.?|"  # domain
    r"localhost|"  # localhost
    r"\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3})"  # or IP
    r"(?::\d+)?"  # optional port
    r"(?:/?|[/?]\S+)$",
    re.IGNORECASE,
)


def is_valid_url(url: str) -> bool:
    """Check if a string is a valid http(s) URL."""
    return bool(url) and bool(_URL_PATTERN.match(url))


def parse_targets(lines: Iterable[str]) -> list[str]:
    """
    Normalize raw target lines.

    Whitespace is trimmed, blank lines and '#' comments are skipped,
    and duplicates are dropped keeping the first occurrence.
    """
    targets: dict[str, None] = {}
    for line in lines:
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        targets.setdefault(line, None)
    return list(targets)


def load_targets(url: Optional[str] = None, list_file: Optional[Path] = None) -> list[str]:
    """
    Collect targets from a single URL and/or a newline-delimited file.

    Raises:
        OSError: If the list file cannot be read
    """
    lines: list[str] = []
    if url:
        lines.append(url)
    if list_file:
        with open(list_file, encoding="utf-8", errors="replace") as f:
            lines.extend(f.read().splitlines())
    return parse_targets(lines)
