"""Shared headless browser with a paced, strictly sequential page queue."""

import asyncio
import contextlib
from typing import Any, Awaitable, Callable, Optional, Tuple, TypeVar

from playwright.async_api import async_playwright
from rich.console import Console

from .site_configs import IPHONE_USER_AGENT, MOBILE_VIEWPORT

console = Console()

T = TypeVar("T")
PageJob = Callable[[Any], Awaitable[T]]

CHROMIUM_ARGS = [
    "--disable-dev-shm-usage",
    "--disable-gpu",
    "--disable-features=TranslateUI",
    "--disable-renderer-backgrounding",
    "--disable-backgrounding-occluded-windows",
    "--disable-background-timer-throttling",
    "--disable-blink-features=AutomationControlled",
    "--disable-extensions",
    "--no-first-run",
    "--no-default-browser-check",
]


class ChromiumHandle:
    """A running Playwright Chromium with one mobile-emulated context."""

    def __init__(self, playwright, browser, context) -> None:
        self.playwright = playwright
        self.browser = browser
        self.context = context

    async def new_page(self):
        return await self.context.new_page()

    async def close(self) -> None:
        try:
            await self.context.close()
            await self.browser.close()
        finally:
            await self.playwright.stop()


async def launch_mobile_chromium(headless: bool = True) -> ChromiumHandle:
    """Start Playwright and a Chromium context emulating a phone."""
    playwright = await async_playwright().start()
    try:
        browser = await playwright.chromium.launch(headless=headless, args=CHROMIUM_ARGS)
        context = await browser.new_context(
            user_agent=IPHONE_USER_AGENT,
            viewport=MOBILE_VIEWPORT,
            is_mobile=True,
            has_touch=True,
        )
    except Exception:
        await playwright.stop()
        raise
    return ChromiumHandle(playwright, browser, context)


class BrowserSession:
    """
    Owns at most one browser process per scan.

    Every page operation goes through :meth:`with_page`, which appends it to
    a FIFO queue. A single worker drains the queue one job at a time and
    waits ``request_delay`` seconds before each job, whatever the number of
    callers. A failing job only fails its own caller.

    The browser is launched lazily by the first job and shut down by
    :meth:`close`.
    """

    def __init__(
        self,
        request_delay: float = 1.0,
        headless: bool = True,
        launcher: Optional[Callable[[], Awaitable[Any]]] = None,
    ) -> None:
        self.request_delay = request_delay
        self.headless = headless
        self._launcher = launcher
        self._handle: Optional[Any] = None
        self._queue: Optional[asyncio.Queue] = None
        self._worker: Optional[asyncio.Task] = None

    @property
    def is_running(self) -> bool:
        """Whether a browser process is currently live."""
        return self._handle is not None

    async def with_page(self, job: PageJob) -> T:
        """Run ``job(page)`` on a fresh page once its turn in the queue comes."""
        if self._queue is None:
            self._queue = asyncio.Queue()
            self._worker = asyncio.create_task(self._drain())

        future: asyncio.Future = asyncio.get_running_loop().create_future()
        await self._queue.put((job, future))
        return await future

    async def _launch(self) -> Any:
        if self._handle is None:
            if self._launcher is not None:
                self._handle = await self._launcher()
            else:
                console.print("[dim]Launching headless browser...[/dim]")
                self._handle = await launch_mobile_chromium(headless=self.headless)
        return self._handle

    async def _run(self, job: PageJob) -> Any:
        handle = await self._launch()
        page = await handle.new_page()
        try:
            return await job(page)
        finally:
            await page.close()

    async def _drain(self) -> None:
        while True:
            item: Tuple[PageJob, asyncio.Future] = await self._queue.get()
            job, future = item
            try:
                await asyncio.sleep(self.request_delay)
                if future.cancelled():
                    continue
                try:
                    result = await self._run(job)
                except asyncio.CancelledError:
                    if not future.done():
                        future.set_exception(RuntimeError("Browser session closed"))
                    raise
                except Exception as e:
                    if not future.done():
                        future.set_exception(e)
                else:
                    if not future.done():
                        future.set_result(result)
            finally:
                self._queue.task_done()

    async def close(self) -> None:
        """Stop the queue worker and the browser; pending jobs fail."""
        if self._worker is not None:
            self._worker.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await self._worker
            self._worker = None

        if self._queue is not None:
            while not self._queue.empty():
                _, future = self._queue.get_nowait()
                if not future.done():
                    future.set_exception(RuntimeError("Browser session closed"))
            self._queue = None

        if self._handle is not None:
            handle, self._handle = self._handle, None
            try:
                await handle.close()
            except Exception as e:
                console.print(f"[yellow]Error closing browser: {e}[/yellow]")
