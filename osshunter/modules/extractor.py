"""
Bucket hostname extraction.

Scans arbitrary text (HTML, JavaScript, request URLs) for Aliyun OSS
bucket endpoints of the form ``scheme://<name>.oss-<region>.aliyuncs.com``.
"""

import re
from typing import Optional


BUCKET_PATTERN = re.compile(
    r"https?://[a-zA-Z0-9.-]+\.oss-[a-zA-Z0-9.-]+\.aliyuncs\.com"
)


def extract_buckets(text: Optional[str]) -> list[str]:
    """
    Extract distinct bucket URLs from text.

    Args:
        text: Any text to scan

    Returns:
        De-duplicated bucket URLs in first-seen order
    """
    if not text:
        return []
    return list(dict.fromkeys(BUCKET_PATTERN.findall(text)))


def is_bucket_url(value: str) -> bool:
    """Check if a string is exactly a bucket URL."""
    return BUCKET_PATTERN.fullmatch(value) is not None
