"""
Headless browser rendering.

Loads a target in Chromium (Playwright), records every outgoing request
that hits a bucket endpoint, and scans the rendered document as well.
One browser is shared by all targets of a run; each render gets its own
browser context.
"""

import asyncio
from typing import Any, Awaitable, Callable, Optional

from rich.console import Console
from rich.markup import escape

from osshunter.core.models import RenderResult
from osshunter.modules.extractor import BUCKET_PATTERN, extract_buckets


BrowserLauncher = Callable[[], Awaitable[Any]]


class BrowserRenderer:
    """
    Renders targets with a lazily launched, shared browser.

    Usage:
        renderer = BrowserRenderer(timeout=15.0)
        result = await renderer.render("https://example.com")
        await renderer.close()
    """

    def __init__(
        self,
        timeout: float = 15.0,
        launcher: Optional[BrowserLauncher] = None,
        console: Optional[Console] = None,
        headless: bool = True,
        browser_args: Optional[list[str]] = None,
    ):
        """
        Args:
            timeout: Navigation timeout in seconds
            launcher: Coroutine function returning a browser. Defaults to Playwright Chromium.
            console: Console for warnings
            headless: Run Chromium headless
            browser_args: Extra Chromium command-line arguments
        """
        self.timeout = timeout
        self.console = console or Console(stderr=True)
        self.headless = headless
        self.browser_args = browser_args or []
        self._launcher = launcher or self._launch_chromium
        self._playwright = None
        self._browser = None
        self._launch_error = ""
        self._launched = False
        self._lock = asyncio.Lock()

    @property
    def launch_error(self) -> str:
        return self._launch_error

    async def _launch_chromium(self):
        from playwright.async_api import async_playwright

        self._playwright = await async_playwright().start()
        try:
            return await self._playwright.chromium.launch(
                headless=self.headless,
                args=self.browser_args,
            )
        except Exception:
            await self._playwright.stop()
            self._playwright = None
            raise

    async def get_browser(self):
        """
        Return the shared browser, launching it on first use.

        Concurrent callers wait for the one launch in progress. A failed
        launch is remembered and None is returned until close().
        """
        if self._launched:
            return self._browser

        async with self._lock:
            if not self._launched:
                try:
                    self._browser = await self._launcher()
                except Exception as e:
                    self._launch_error = str(e) or type(e).__name__
                    self.console.print(f"[yellow][!] Browser launch failed: {escape(self._launch_error)}[/yellow]")
                finally:
                    self._launched = True

        return self._browser

    async def render(self, url: str) -> RenderResult:
        """
        Render a URL and collect bucket endpoints.

        A navigation timeout keeps whatever was observed so far, even when the
        document can no longer be read. Any other failure yields an empty
        result with the error recorded.
        """
        browser = await self.get_browser()
        if browser is None:
            return RenderResult(url=url, error=self._launch_error or "browser unavailable")

        from playwright.async_api import TimeoutError as PlaywrightTimeoutError

        found: dict[str, None] = {}
        timed_out = False

        def on_request(request):
            for bucket in BUCKET_PATTERN.findall(request.url):
                found.setdefault(bucket, None)

        context = None
        try:
            context = await browser.new_context(ignore_https_errors=True)
            page = await context.new_page()
            page.on("request", on_request)

            try:
                await page.goto(url, wait_until="networkidle", timeout=self.timeout * 1000)
            except PlaywrightTimeoutError:
                timed_out = True

            try:
                html = await page.content()
            except Exception as e:
                # A page still navigating after the timeout may refuse content()
                if not timed_out:
                    raise
                self.console.print(f"    [dim]content unavailable after timeout: {escape(str(e))}[/dim]")
                html = ""

            for bucket in extract_buckets(html):
                found.setdefault(bucket, None)

        except Exception as e:
            self.console.print(f"    [yellow]\\[render error] {escape(url)}: {escape(str(e))}[/yellow]")
            return RenderResult(url=url, error=str(e) or type(e).__name__)
        finally:
            if context is not None:
                try:
                    await context.close()
                except Exception as e:
                    self.console.print(f"    [dim]context close failed: {escape(str(e))}[/dim]")

        return RenderResult(url=url, buckets=list(found), timed_out=timed_out)

    async def close(self) -> None:
        """
        Close the shared browser. Safe to call more than once.

        The renderer returns to its unlaunched state, so a later render
        launches a fresh browser.
        """
        async with self._lock:
            browser, playwright = self._browser, self._playwright
            self._browser = None
            self._playwright = None
            self._launched = False
            self._launch_error = ""

            try:
                if browser is not None:
                    await browser.close()
            finally:
                if playwright is not None:
                    await playwright.stop()
