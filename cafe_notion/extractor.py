"""High-level orchestration for extracting a post from the cafe site."""

from __future__ import annotations

import logging
from typing import Iterable, Mapping, Optional
from urllib.parse import urlparse

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Frame, Page, async_playwright

from .config import ExtractConfig
from .errors import ContentNotFound
from .fields import extract_fields
from .frames import resolve_frames
from .models import ExtractedPost, FieldResult
from .session import require_storage_state
from .utils import best_effort

logger = logging.getLogger("cafe_notion")


def to_mobile_url(url: str, mobile_hosts: Mapping[str, str]) -> Optional[str]:
    """Rewrite a desktop post URL to its mobile equivalent, if the host is known."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return None
    mobile_host = mobile_hosts.get(parsed.hostname or "")
    if not mobile_host:
        return None
    parts = [part for part in parsed.path.split("/") if part]
    if len(parts) < 2:
        return None
    return f"https://{mobile_host}/{parts[0]}/{parts[1]}"


def pick_best(results: Iterable[FieldResult]) -> FieldResult:
    """Keep the result with the longest body; ties keep the earlier one."""
    best = FieldResult()
    for result in results:
        if result.content_text and len(result.content_text) > len(best.content_text):
            best = result
    return best


async def _attempt(frame: Frame, config: ExtractConfig) -> FieldResult:
    try:
        return await extract_fields(frame, config)
    except PlaywrightError as exc:
        logger.debug("Skipping frame %s: %s", frame.url, exc)
        return FieldResult()


async def _extract_desktop(page: Page, url: str, config: ExtractConfig) -> FieldResult:
    logger.info("Loading %s", url)
    await page.goto(url, wait_until="domcontentloaded")
    candidates = await resolve_frames(page, config)
    results = []
    for frame in candidates:
        results.append(await _attempt(frame, config))
    return pick_best(results)


async def _extract_mobile(page: Page, url: str, config: ExtractConfig) -> FieldResult:
    logger.info("Retrying with mobile layout %s", url)
    await page.goto(url, wait_until="domcontentloaded")
    await best_effort(
        page.wait_for_load_state(
            "networkidle", timeout=config.network_idle_timeout * 1000
        ),
        "network idle",
    )
    return await _attempt(page.main_frame, config)


async def extract_from_page(page: Page, url: str, config: ExtractConfig) -> FieldResult:
    """Run the desktop attempt and, if it finds no body, the mobile one."""
    best = await _extract_desktop(page, url, config)
    if best.content_text:
        return best

    mobile_url = to_mobile_url(url, config.mobile_hosts)
    if not mobile_url:
        logger.info("No mobile equivalent for %s", url)
        return best
    return await _extract_mobile(page, mobile_url, config)


async def extract_post(url: str, config: Optional[ExtractConfig] = None) -> ExtractedPost:
    """Navigate to ``url`` with the saved session and return the extracted post."""
    config = config or ExtractConfig()
    storage_state = require_storage_state(config.storage_state)

    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(headless=config.headless)
        try:
            context = await browser.new_context(storage_state=str(storage_state))
            try:
                page = await context.new_page()
                page.set_default_navigation_timeout(config.navigation_timeout * 1000)
                try:
                    best = await extract_from_page(page, url, config)
                finally:
                    await page.close()
            finally:
                await context.close()
        finally:
            await browser.close()

    if not best.content_text:
        raise ContentNotFound(
            "Could not find the post body; check the selectors and iframe layout."
        )
    logger.info(
        "Extracted %d chars and %d image(s) from %s",
        len(best.content_text),
        len(best.image_urls),
        url,
    )
    return ExtractedPost(
        url=url,
        title=best.title or "",
        content_text=best.content_text,
        date_text=best.date_text or "",
        image_urls=best.image_urls,
    )
