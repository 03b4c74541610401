from __future__ import annotations
import logging
import time
from dataclasses import dataclass
from enum import Enum

import httpx
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError
from playwright.sync_api import sync_playwright

from jobsearch.core.config import Settings, settings as default_settings

logger = logging.getLogger(__name__)

STATIC = "static"
RENDERED = "rendered"

BROWSER_ARGS = [
    "--disable-blink-features=AutomationControlled",
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-gpu",
    "--disable-dev-shm-usage",
]

# Hide the usual automation markers before any page script runs.
STEALTH_SCRIPT = """
Object.defineProperty(navigator, 'webdriver', { get: () => undefined });
Object.defineProperty(navigator, 'plugins', { get: () => [1, 2, 3, 4, 5] });
Object.defineProperty(navigator, 'languages', { get: () => ['es-ES', 'es', 'en-US', 'en'] });
"""


class FetchFailure(str, Enum):
    TIMEOUT = "timeout"
    HTTP_STATUS = "http_status"
    NETWORK = "network"
    BROWSER = "browser"


@dataclass
class FetchResult:
    url: str
    markup: str | None = None
    failure: FetchFailure | None = None
    detail: str = ""

    @property
    def ok(self) -> bool:
        return self.failure is None and self.markup is not None

    @classmethod
    def success(cls, url: str, markup: str) -> "FetchResult":
        return cls(url=url, markup=markup)

    @classmethod
    def failed(cls, url: str, failure: FetchFailure, detail: str = "") -> "FetchResult":
        return cls(url=url, failure=failure, detail=detail)


class Fetcher:
    """Static (httpx) and rendered (headless Chromium) page retrieval.

    Neither method raises: every error ends up as a failed ``FetchResult``.
    """

    def __init__(self, config: Settings | None = None, transport: httpx.BaseTransport | None = None, sleep=time.sleep):
        self.config = config or default_settings
        self.transport = transport
        self.sleep = sleep

    def fetch(self, url: str, mode: str = STATIC) -> FetchResult:
        if mode == RENDERED:
            return self.fetch_rendered(url)
        return self.fetch_static(url)

    def fetch_static(self, url: str) -> FetchResult:
        cfg = self.config
        self.sleep(cfg.static_delay_seconds)
        headers = {"User-Agent": cfg.user_agent}
        try:
            with httpx.Client(
                timeout=cfg.static_timeout_seconds,
                follow_redirects=True,
                headers=headers,
                transport=self.transport,
            ) as client:
                resp = client.get(url)
        except httpx.TimeoutException as exc:
            logger.warning("static fetch timed out after %ss url=%s: %s", cfg.static_timeout_seconds, url, exc)
            return FetchResult.failed(url, FetchFailure.TIMEOUT, str(exc))
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning("static fetch failed url=%s: %s", url, exc)
            return FetchResult.failed(url, FetchFailure.NETWORK, str(exc))

        if not resp.is_success:
            body = resp.text[:200]
            logger.warning("static fetch got HTTP %s url=%s body=%s...", resp.status_code, url, body)
            return FetchResult.failed(url, FetchFailure.HTTP_STATUS, f"{resp.status_code} {body}")
        return FetchResult.success(url, resp.text)

    def fetch_rendered(self, url: str) -> FetchResult:
        cfg = self.config
        try:
            with sync_playwright() as pw:
                browser = pw.chromium.launch(
                    headless=True,
                    executable_path=cfg.resolved_browser_path,
                    args=BROWSER_ARGS,
                )
                try:
                    context = browser.new_context(user_agent=cfg.user_agent, locale="es-ES")
                    context.add_init_script(STEALTH_SCRIPT)
                    page = context.new_page()
                    page.goto(url, wait_until="domcontentloaded", timeout=cfg.rendered_timeout_seconds * 1000)
                    page.wait_for_timeout(cfg.rendered_settle_seconds * 1000)
                    html = page.content()
                finally:
                    browser.close()
        except PlaywrightTimeoutError as exc:
            logger.warning("rendered fetch timed out url=%s: %s", url, exc)
            return FetchResult.failed(url, FetchFailure.TIMEOUT, str(exc))
        except PlaywrightError as exc:
            logger.warning("rendered fetch failed url=%s: %s", url, exc)
            return FetchResult.failed(url, FetchFailure.BROWSER, str(exc))
        except Exception as exc:  # noqa: BLE001
            logger.exception("rendered fetch crashed url=%s", url)
            return FetchResult.failed(url, FetchFailure.BROWSER, str(exc))
        return FetchResult.success(url, html)
