"""
Result exporters.

Each exporter takes a finished ScanSession and writes one file format.
All of them return the number of entries written.
"""

import csv
import json
from pathlib import Path

from osshunter.core.models import ScanSession


PUT_OK = "PUT_OK"
CHECK_MARK = "✅"


def _prepare(path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    return path


def export_bucket_list(session: ScanSession, path: Path) -> int:
    """Write the global bucket set, one URL per line."""
    path = _prepare(path)
    with open(path, "w", encoding="utf-8") as f:
        for bucket in session.buckets:
            f.write(f"{bucket}\n")
    return len(session.buckets)


def export_csv(session: ScanSession, path: Path) -> int:
    """Write one row per (target, bucket) record."""
    path = _prepare(path)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(["target", "bucket", "put_status"])
        for record in session.records:
            writer.writerow([record.target, record.bucket, PUT_OK if record.writable else ""])
    return len(session.records)


def export_markdown(session: ScanSession, path: Path) -> int:
    """Write the records as a Markdown table."""
    path = _prepare(path)
    lines = [
        "| Target | Bucket | PUT |",
        "|------|------|------|",
    ]
    for record in session.records:
        put = CHECK_MARK if record.writable else ""
        lines.append(f"| {record.target} | {record.bucket} | {put} |")

    with open(path, "w", encoding="utf-8") as f:
        f.write("\n".join(lines) + "\n")
    return len(session.records)


def build_json_report(session: ScanSession) -> dict[str, list[dict]]:
    """Map every input target, in input order, to its discovered buckets."""
    report: dict[str, list[dict]] = {target: [] for target in session.targets}
    for record in session.records:
        report.setdefault(record.target, []).append(
            {"bucket": record.bucket, "put": record.writable}
        )
    return report


def export_json(session: ScanSession, path: Path) -> int:
    """Write the per-target JSON report."""
    path = _prepare(path)
    report = build_json_report(session)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(report, f, indent=2, ensure_ascii=False)
    return len(report)
