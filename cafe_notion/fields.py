"""Read post fields from a frame using ordered fallback selectors."""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, List, Optional, Sequence, TypeVar

from playwright.async_api import Error as PlaywrightError
from playwright.async_api import Frame

from .config import IMAGE_SOURCE_ATTRIBUTES, ExtractConfig
from .models import FieldResult
from .utils import best_effort, unique_ordered

logger = logging.getLogger("cafe_notion")

T = TypeVar("T")

_IMAGE_SOURCES_SCRIPT = """
(images, attributes) => images
  .map((img) => {
    for (const name of attributes) {
      const value = (img.getAttribute(name) || "").trim();
      if (value) return value;
    }
    return "";
  })
  .filter(Boolean)
"""


async def first_match(
    selectors: Sequence[str],
    read: Callable[[str], Awaitable[Optional[T]]],
    accept: Callable[[T], bool],
) -> Optional[T]:
    """Return the first value read from ``selectors`` that passes ``accept``.

    A selector that raises a Playwright error (missing, detached, navigated
    away) counts as no match.
    """
    for selector in selectors:
        try:
            value = await read(selector)
        except PlaywrightError as exc:
            logger.debug("Selector %s failed: %s", selector, exc)
            continue
        if value is not None and accept(value):
            return value
    return None


def _text_reader(frame: Frame) -> Callable[[str], Awaitable[Optional[str]]]:
    async def read(selector: str) -> Optional[str]:
        element = await frame.query_selector(selector)
        if element is None:
            return None
        return (await element.inner_text()).strip()

    return read


def _image_reader(frame: Frame) -> Callable[[str], Awaitable[Optional[List[str]]]]:
    async def read(selector: str) -> Optional[List[str]]:
        urls = await frame.eval_on_selector_all(
            selector, _IMAGE_SOURCES_SCRIPT, list(IMAGE_SOURCE_ATTRIBUTES)
        )
        return [url for url in (urls or []) if url]

    return read


async def extract_fields(frame: Frame, config: ExtractConfig) -> FieldResult:
    """Extract title, body, date and image URLs from one frame."""
    try:
        ready = await best_effort(
            frame.wait_for_selector("body", timeout=config.root_wait_timeout * 1000),
            "frame body",
        )
    except PlaywrightError as exc:
        logger.debug("Frame %s unusable: %s", frame.url, exc)
        return FieldResult()
    if not ready:
        return FieldResult()

    selectors = config.selectors
    read_text = _text_reader(frame)

    title = await first_match(selectors.title, read_text, bool)
    content_text = await first_match(
        selectors.body, read_text, lambda text: len(text) >= config.min_body_chars
    )
    date_text = await first_match(selectors.date, read_text, bool)
    image_urls = await first_match(selectors.images, _image_reader(frame), bool)

    return FieldResult(
        title=title or "",
        content_text=content_text or "",
        date_text=date_text or "",
        image_urls=tuple(unique_ordered(image_urls or [])),
    )
