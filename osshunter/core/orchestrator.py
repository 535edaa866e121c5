"""
Orchestrator for the OSS Hunter discovery pipeline.

Runs a fixed number of workers over the target list. Each worker takes
one target at a time through fetch, optional render fallback and optional
write-probe, then hands the finished result to a single aggregator that
owns the session-wide bucket set and record list.
"""

import asyncio
from datetime import datetime
from typing import Any, Awaitable, Callable, Optional
from rich.console import Console
from rich.markup import escape

from osshunter.config import HunterConfig, get_config
from osshunter.core.models import (
    FetchResult,
    ProbeLevel,
    ProbeRecord,
    RenderResult,
    ScanSession,
    ScanStatus,
    TargetResult,
    WriteProbeResult,
)
from osshunter.modules.extractor import extract_buckets
from osshunter.modules.fetcher import fetch_url
from osshunter.modules.renderer import BrowserRenderer
from osshunter.modules.write_probe import probe_write
from osshunter.utils.http_client import HTTPClientPool


# Type aliases for injectable collaborators
Fetcher = Callable[[str], Awaitable[FetchResult]]
Prober = Callable[[str], Awaitable[WriteProbeResult]]


class Orchestrator:
    """
    Orchestrates per-target discovery pipelines.

    Manages worker scheduling, result aggregation and resource cleanup.
    """

    def __init__(
        self,
        config: Optional[HunterConfig] = None,
        console: Optional[Console] = None,
        fetcher: Optional[Fetcher] = None,
        renderer: Optional[Any] = None,
        prober: Optional[Prober] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            config: Configuration. If None, loads from default locations.
            console: Rich console for output. If None, creates a new one.
            fetcher: Coroutine function url -> FetchResult. Defaults to a shared httpx client.
            renderer: Object with render(url) and close(). Defaults to BrowserRenderer.
            prober: Coroutine function bucket -> WriteProbeResult. Defaults to an httpx PUT.
        """
        self.config = config or get_config()
        self.console = console or Console()
        self.session: Optional[ScanSession] = None

        self.http_pool = HTTPClientPool(
            timeout=self.config.scan.timeout,
            user_agent=self.config.scan.user_agent,
            verify=self.config.scan.verify_tls,
            follow_redirects=self.config.scan.follow_redirects,
        )
        self.renderer = renderer or BrowserRenderer(
            timeout=self.config.render.timeout,
            console=self.console,
            headless=self.config.render.headless,
            browser_args=self.config.render.browser_args,
        )
        self._fetch = fetcher or self._default_fetch
        self._probe = prober or self._default_probe

        # Event callbacks
        self._on_target_start: list[Callable[[str], None]] = []
        self._on_target_complete: list[Callable[[TargetResult], None]] = []
        self._on_bucket: list[Callable[[str], None]] = []

        # Aggregator-owned lookup for idempotent bucket inserts
        self._known_buckets: set[str] = set()

    def on_target_start(self, callback: Callable[[str], None]) -> None:
        """Register a callback fired when a worker picks up a target."""
        self._on_target_start.append(callback)

    def on_target_complete(self, callback: Callable[[TargetResult], None]) -> None:
        """Register a callback fired once per finished target."""
        self._on_target_complete.append(callback)

    def on_bucket(self, callback: Callable[[str], None]) -> None:
        """Register a callback fired once per newly discovered bucket."""
        self._on_bucket.append(callback)

    async def _default_fetch(self, url: str) -> FetchResult:
        client = await self.http_pool.get_client()
        return await fetch_url(url, client)

    async def _default_probe(self, bucket: str) -> WriteProbeResult:
        client = await self.http_pool.get_client()
        return await probe_write(
            bucket,
            client,
            suffix=self.config.probe.object_suffix,
            payload_bytes=self.config.probe.payload_bytes,
            content_type=self.config.probe.content_type,
        )

    def create_session(
        self,
        targets: list[str],
        level: ProbeLevel = ProbeLevel.SMART,
        write_test: bool = False,
    ) -> ScanSession:
        """
        Create a new scan session.

        Args:
            targets: Target URLs, in input order
            level: Probe strategy
            write_test: Run the write-probe on every discovered bucket

        Returns:
            Created ScanSession object
        """
        self.session = ScanSession(
            targets=list(targets),
            level=ProbeLevel(level),
            write_test=write_test,
            status=ScanStatus.PENDING,
        )
        self._known_buckets = set()
        return self.session

    async def run(self) -> ScanSession:
        """
        Run every target's pipeline with bounded concurrency.

        Returns:
            Completed ScanSession with all discovered buckets and records
        """
        if not self.session:
            raise ValueError("No session created. Call create_session first.")

        self.session.status = ScanStatus.RUNNING

        pending: asyncio.Queue[str] = asyncio.Queue()
        for target in self.session.targets:
            pending.put_nowait(target)

        results: asyncio.Queue[Optional[TargetResult]] = asyncio.Queue()
        aggregator = asyncio.create_task(self._aggregate(results))

        worker_count = min(self.config.scan.concurrency, len(self.session.targets))
        workers = [
            asyncio.create_task(self._worker(pending, results))
            for _ in range(worker_count)
        ]

        try:
            await asyncio.gather(*workers)
            await results.put(None)
            await aggregator

            self.session.update_statistics()
            self.session.status = ScanStatus.COMPLETED

        except BaseException:
            for task in workers:
                task.cancel()
            aggregator.cancel()
            self.session.status = ScanStatus.FAILED
            raise

        finally:
            await self.close()

        return self.session

    async def _worker(
        self,
        pending: asyncio.Queue,
        results: asyncio.Queue,
    ) -> None:
        """Pull targets until none are left, one full pipeline at a time."""
        while True:
            try:
                target = pending.get_nowait()
            except asyncio.QueueEmpty:
                return

            for callback in self._on_target_start:
                callback(target)

            result = await self._run_pipeline(target)
            await results.put(result)

    async def _run_pipeline(self, target: str) -> TargetResult:
        """Run one target's stages. Exceptions never leave this method."""
        try:
            return await self._execute_stages(target)
        except Exception as e:
            self.console.print(f"[red][!] Error processing {escape(target)}: {escape(str(e))}[/red]")
            return TargetResult(
                target=target,
                error=str(e) or type(e).__name__,
                completed_at=datetime.utcnow(),
            )

    async def _execute_stages(self, target: str) -> TargetResult:
        """FETCH -> EXTRACT -> [RENDER -> EXTRACT] -> PROBE."""
        level = self.session.level
        result = TargetResult(target=target)
        buckets: list[str] = []

        if level in (ProbeLevel.STATIC, ProbeLevel.SMART):
            fetched = await self._fetch(target)
            buckets = extract_buckets(fetched.content)

        if level == ProbeLevel.RENDER or (level == ProbeLevel.SMART and not buckets):
            result.rendered = True
            rendered: RenderResult = await self.renderer.render(target)
            buckets = list(dict.fromkeys(rendered.buckets))
            result.render_error = rendered.error

        for bucket in buckets:
            writable = False
            if self.session.write_test:
                probe = await self._probe(bucket)
                result.probes.append(probe)
                writable = probe.writable
            result.records.append(ProbeRecord(target=target, bucket=bucket, writable=writable))

        result.completed_at = datetime.utcnow()
        return result

    async def _aggregate(self, results: asyncio.Queue) -> None:
        """Single consumer of finished pipelines; sole writer of session results."""
        while True:
            result = await results.get()
            if result is None:
                return
            self._merge_target_result(result)

    def _merge_target_result(self, result: TargetResult) -> None:
        """Merge a finished target into the session."""
        self.session.target_results.append(result)

        for record in result.records:
            if record.bucket not in self._known_buckets:
                self._known_buckets.add(record.bucket)
                self.session.buckets.append(record.bucket)
                for callback in self._on_bucket:
                    callback(record.bucket)
            self.session.records.append(record)

        for callback in self._on_target_complete:
            callback(result)

    async def close(self) -> None:
        """Release the shared browser and HTTP client."""
        try:
            await self.renderer.close()
        except Exception as e:
            self.console.print(f"[yellow][!] Browser shutdown failed: {escape(str(e))}[/yellow]")
        await self.http_pool.close()
