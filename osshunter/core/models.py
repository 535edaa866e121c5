"""
Pydantic data models for OSS Hunter.

These models carry the results of every probe stage, from a single
fetch up to the aggregated scan session.
"""

from datetime import datetime
from enum import Enum, IntEnum
from typing import Optional
from pydantic import BaseModel, ConfigDict, Field
import uuid


class ProbeLevel(IntEnum):
    """Probe strategy selector."""
    STATIC = 1  # HTTP fetch only
    SMART = 2   # HTTP fetch, render only when nothing was found
    RENDER = 3  # Headless browser render only


class ScanStatus(str, Enum):
    """Scan session status."""
    PENDING = "pending"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


def generate_id() -> str:
    """Generate a unique ID."""
    return str(uuid.uuid4())[:8]


class FetchResult(BaseModel):
    """Outcome of a plain HTTP fetch. Failures carry a reason instead of raising."""
    url: str
    content: str = ""
    status_code: Optional[int] = None
    error: str = ""

    @property
    def ok(self) -> bool:
        return not self.error


class RenderResult(BaseModel):
    """Outcome of a headless browser render."""
    url: str
    buckets: list[str] = Field(default_factory=list)
    timed_out: bool = False
    error: str = ""


class WriteProbeResult(BaseModel):
    """Outcome of an anonymous PUT against a bucket."""
    bucket: str
    object_url: str = ""
    writable: bool = False
    status_code: Optional[int] = None
    error: str = ""


class ProbeRecord(BaseModel):
    """A bucket discovered under a target."""
    model_config = ConfigDict(frozen=True)

    target: str
    bucket: str
    writable: bool = False


class TargetResult(BaseModel):
    """Complete pipeline output for one target."""
    target: str
    records: list[ProbeRecord] = Field(default_factory=list)
    probes: list[WriteProbeResult] = Field(default_factory=list)
    rendered: bool = False
    render_error: str = ""
    error: str = ""
    started_at: datetime = Field(default_factory=datetime.utcnow)
    completed_at: Optional[datetime] = None

    @property
    def buckets(self) -> list[str]:
        return [record.bucket for record in self.records]


class ScanSession(BaseModel):
    """Represents a complete discovery run."""
    id: str = Field(default_factory=generate_id)
    created_at: datetime = Field(default_factory=datetime.utcnow)
    updated_at: datetime = Field(default_factory=datetime.utcnow)
    status: ScanStatus = ScanStatus.PENDING

    # Input
    targets: list[str] = Field(default_factory=list)
    level: ProbeLevel = ProbeLevel.SMART
    write_test: bool = False

    # Results
    buckets: list[str] = Field(default_factory=list, description="Global bucket set, in discovery order")
    records: list[ProbeRecord] = Field(default_factory=list)
    target_results: list[TargetResult] = Field(default_factory=list)

    # Statistics
    total_targets: int = 0
    total_buckets: int = 0
    total_records: int = 0
    writable_records: int = 0
    failed_targets: int = 0

    def records_for(self, target: str) -> list[ProbeRecord]:
        """Records discovered under a single target, in discovery order."""
        return [r for r in self.records if r.target == target]

    def update_statistics(self) -> None:
        """Update all statistics based on current data."""
        self.total_targets = len(self.targets)
        self.total_buckets = len(self.buckets)
        self.total_records = len(self.records)
        self.writable_records = sum(1 for r in self.records if r.writable)
        self.failed_targets = sum(1 for t in self.target_results if t.error)

        self.updated_at = datetime.utcnow()
