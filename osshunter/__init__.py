"""
OSS Hunter - Aliyun OSS bucket discovery

Finds Alibaba Cloud OSS bucket endpoints referenced by target websites
and optionally tests them for anonymous write access.
"""

__version__ = "0.1.0"
__author__ = "Security Team"

from osshunter.core.models import (
    ProbeLevel,
    FetchResult,
    RenderResult,
    WriteProbeResult,
    ProbeRecord,
    TargetResult,
    ScanSession,
)

__all__ = [
    "ProbeLevel",
    "FetchResult",
    "RenderResult",
    "WriteProbeResult",
    "ProbeRecord",
    "TargetResult",
    "ScanSession",
]
