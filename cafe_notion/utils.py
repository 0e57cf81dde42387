"""Small helpers shared across the pipeline."""

from __future__ import annotations

import logging
import re
from typing import Awaitable, Hashable, Iterable, List, TypeVar
from urllib.parse import urlparse

from playwright.async_api import TimeoutError as PlaywrightTimeoutError

logger = logging.getLogger("cafe_notion")

SLUG_PATTERN = re.compile(r"[^a-z0-9]+")

T = TypeVar("T", bound=Hashable)


def slugify(value: str, fallback: str = "image") -> str:
    """Generate a filesystem-friendly slug using ASCII characters only."""
    normalized = value.encode("ascii", "ignore").decode("ascii")
    normalized = normalized.lower()
    normalized = SLUG_PATTERN.sub("-", normalized).strip("-")
    return normalized or fallback


def unique_ordered(items: Iterable[T]) -> List[T]:
    """Drop duplicates while keeping first-seen order."""
    seen = set()
    result: List[T] = []
    for item in items:
        if item in seen:
            continue
        seen.add(item)
        result.append(item)
    return result


def is_valid_http_url(value: object) -> bool:
    if not value or not isinstance(value, str):
        return False
    try:
        parsed = urlparse(value)
    except ValueError:
        return False
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


async def best_effort(awaitable: Awaitable[object], description: str) -> bool:
    """Wait up to the awaitable's own timeout; on timeout, proceed anyway.

    Returns ``True`` when the wait completed and ``False`` when it timed out.
    Other Playwright errors propagate.
    """
    try:
        await awaitable
    except PlaywrightTimeoutError:
        logger.debug("Timed out waiting for %s; continuing", description)
        return False
    return True
