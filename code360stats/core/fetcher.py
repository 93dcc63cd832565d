"""Playwright-based page extractor for Code360 profiles."""

from dataclasses import dataclass

from playwright.async_api import (
    async_playwright,
    Browser,
    BrowserContext,
    Page,
    Error as PlaywrightError,
    TimeoutError as PlaywrightTimeoutError,
)

from code360stats.config import ScraperConfig
from code360stats.core.parser import parse_page
from code360stats.exceptions import FetchError, NavigationTimeoutError, ProfileNotFoundError
from code360stats.logging import get_logger
from code360stats.models.stats import RawProfileStats

log = get_logger("fetcher")

EXTRA_HEADERS = {
    "Accept-Language": "en-US,en;q=0.9",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,image/apng,*/*;q=0.8",
    "Upgrade-Insecure-Requests": "1",
}


@dataclass(frozen=True)
class WaitStep:
    """A bounded wait for one dynamically loaded page section."""

    name: str
    selector: str
    timeout_ms: int
    required: bool = True


@dataclass
class PageSnapshot:
    """Rendered page state captured after the waits."""

    html: str
    title: str | None
    url: str


def build_wait_steps(config: ScraperConfig) -> list[WaitStep]:
    """Layered waits for the profile page, processed in order."""
    return [
        WaitStep("problems_solved", ".problems-solved", config.stats_wait_timeout_ms),
        WaitStep("streak", ".current-and-longest-text-container", config.streak_wait_timeout_ms),
        WaitStep("xp_points", ".xp-points", config.xp_wait_timeout_ms, required=False),
    ]


async def run_wait_steps(page: Page, steps: list[WaitStep], username: str | None = None) -> None:
    """
    Wait for each step's selector in turn.

    Raises:
        NavigationTimeoutError: If a required step times out
    """
    for step in steps:
        try:
            await page.wait_for_selector(step.selector, timeout=step.timeout_ms)
        except PlaywrightTimeoutError as e:
            if step.required:
                log.warning("wait_step_timeout", username=username, step=step.name, required=True)
                raise NavigationTimeoutError(
                    f"Page element {step.selector!r} not found or timed out after {step.timeout_ms}ms"
                ) from e
            log.warning("wait_step_timeout", username=username, step=step.name, required=False)
            continue
        log.debug("wait_step_done", username=username, step=step.name)


async def fetch_profile_page(username: str, config: ScraperConfig | None = None) -> PageSnapshot:
    """
    Render a Code360 profile page in a fresh headless browser.

    Args:
        username: Code360 username
        config: ScraperConfig instance, uses defaults if None

    Returns:
        PageSnapshot with the rendered HTML, title and resolved URL

    Raises:
        NavigationTimeoutError: Page load or a required wait timed out
        FetchError: Any other browser failure
    """
    config = config or ScraperConfig()
    url = config.profile_url(username)
    log.info("extraction_start", username=username, url=url)

    async with async_playwright() as p:
        try:
            browser: Browser = await p.chromium.launch(
                headless=config.headless,
                args=config.browser_args,
            )
        except PlaywrightError as e:
            raise FetchError(f"Browser launch failed: {e}") from e

        try:
            # Isolated context per call, nothing shared between requests
            context: BrowserContext = await browser.new_context(
                user_agent=config.user_agent,
                viewport={"width": config.viewport_width, "height": config.viewport_height},
                extra_http_headers=EXTRA_HEADERS,
                ignore_https_errors=True,
            )
            page: Page = await context.new_page()

            try:
                await page.goto(url, wait_until="networkidle", timeout=config.navigation_timeout_ms)
            except PlaywrightTimeoutError as e:
                raise NavigationTimeoutError(
                    f"Navigation timeout after {config.navigation_timeout_ms}ms: {url}"
                ) from e

            await run_wait_steps(page, build_wait_steps(config), username)

            return PageSnapshot(
                html=await page.content(),
                title=await page.title(),
                url=page.url,
            )

        except PlaywrightError as e:
            raise FetchError(f"Browser error: {e}") from e
        finally:
            await browser.close()


async def extract_profile(username: str, config: ScraperConfig | None = None) -> RawProfileStats:
    """
    Fetch and parse a profile page into raw statistic strings.

    Raises:
        NavigationTimeoutError: Page load or a required wait timed out
        ProfileNotFoundError: Page reports the profile does not exist
        FetchError: Any other browser failure
    """
    config = config or ScraperConfig()
    snapshot = await fetch_profile_page(username, config)

    try:
        return parse_page(
            snapshot.html,
            username=username,
            page_title=snapshot.title,
            url=snapshot.url,
            joined_date_selectors=config.joined_date_selectors,
            content_chars=config.page_content_chars,
        )
    except ProfileNotFoundError:
        log.warning("profile_not_found", username=username, url=snapshot.url)
        raise
