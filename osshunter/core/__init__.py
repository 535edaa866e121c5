"""Core modules for OSS Hunter."""

from osshunter.core.models import (
    ProbeLevel,
    ScanStatus,
    FetchResult,
    RenderResult,
    WriteProbeResult,
    ProbeRecord,
    TargetResult,
    ScanSession,
)
from osshunter.core.orchestrator import Orchestrator

__all__ = [
    "ProbeLevel",
    "ScanStatus",
    "FetchResult",
    "RenderResult",
    "WriteProbeResult",
    "ProbeRecord",
    "TargetResult",
    "ScanSession",
    "Orchestrator",
]
