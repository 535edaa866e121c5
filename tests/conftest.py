"""Shared fakes for the probe pipeline."""

import asyncio

import pytest
from rich.console import Console

from osshunter.config import HunterConfig
from osshunter.core.models import FetchResult, RenderResult, WriteProbeResult


class FakeFetcher:
    """Serves canned page bodies and tracks how many fetches run at once."""

    def __init__(self, pages=None, delays=None, failures=None):
        self.pages = pages or {}
        self.delays = delays or {}
        self.failures = failures or {}
        self.calls: list[str] = []
        self.in_flight = 0
        self.max_in_flight = 0

    async def __call__(self, url: str) -> FetchResult:
        self.calls.append(url)
        self.in_flight += 1
        self.max_in_flight = max(self.max_in_flight, self.in_flight)
        try:
            await asyncio.sleep(self.delays.get(url, 0))
            if url in self.failures:
                raise self.failures[url]
            return FetchResult(url=url, content=self.pages.get(url, ""), status_code=200)
        finally:
            self.in_flight -= 1


class FakeRenderer:
    """Returns canned render results and counts close() calls."""

    def __init__(self, results=None):
        self.results = results or {}
        self.calls: list[str] = []
        self.close_calls = 0

    async def render(self, url: str) -> RenderResult:
        self.calls.append(url)
        await asyncio.sleep(0)
        return RenderResult(url=url, buckets=list(self.results.get(url, [])))

    async def close(self) -> None:
        self.close_calls += 1


class FakeProber:
    """Marks the listed buckets writable."""

    def __init__(self, writable=()):
        self.writable = set(writable)
        self.calls: list[str] = []

    async def __call__(self, bucket: str) -> WriteProbeResult:
        self.calls.append(bucket)
        await asyncio.sleep(0)
        ok = bucket in self.writable
        return WriteProbeResult(
            bucket=bucket,
            object_url=f"{bucket}/0123456789abcdef.ppa",
            writable=ok,
            status_code=200 if ok else 403,
        )


@pytest.fixture
def config():
    return HunterConfig()


@pytest.fixture
def quiet_console():
    return Console(quiet=True)
