"""Choose which frames of a rendered page are worth extracting from."""

from __future__ import annotations

import logging
import re
from typing import List, Sequence, TypeVar

from playwright.async_api import Frame, Page

from .config import ExtractConfig
from .utils import best_effort

logger = logging.getLogger("cafe_notion")

BLANK_URL = "about:blank"

FrameT = TypeVar("FrameT")


def _is_blank(frame: object) -> bool:
    url = getattr(frame, "url", "") or ""
    return not url or url == BLANK_URL


def rank_frames(
    frames: Sequence[FrameT],
    content_frame_name: str = "cafe_main",
    article_pattern: str = r"ArticleRead|articleid|Article",
) -> List[FrameT]:
    """Order frames most-promising first.

    Any object exposing ``url`` and ``name`` attributes can be ranked, so both
    Playwright frames and :class:`~cafe_notion.models.FrameCandidate`
    snapshots work.
    """
    pattern = re.compile(article_pattern, re.IGNORECASE)
    usable = [frame for frame in frames if not _is_blank(frame)]

    ordered: List[FrameT] = [frame for frame in usable if pattern.search(frame.url)]
    for frame in usable:
        if getattr(frame, "name", "") == content_frame_name:
            if frame not in ordered:
                ordered.append(frame)
            break
    ordered.extend(frame for frame in usable if frame not in ordered)
    return ordered


async def resolve_frames(page: Page, config: ExtractConfig) -> List[Frame]:
    """Let the content iframe settle, then rank a snapshot of the page's frames."""
    await best_effort(
        page.wait_for_selector(
            config.content_iframe_selector,
            timeout=config.content_frame_timeout * 1000,
        ),
        "content iframe",
    )
    await page.wait_for_timeout(config.settle_delay * 1000)
    await best_effort(
        page.wait_for_load_state(
            "networkidle", timeout=config.network_idle_timeout * 1000
        ),
        "network idle",
    )

    snapshot = list(page.frames)
    for frame in snapshot:
        logger.debug("Frame %r -> %s", frame.name, frame.url)
    candidates = rank_frames(
        snapshot,
        content_frame_name=config.content_frame_name,
        article_pattern=config.article_frame_pattern,
    )
    logger.debug("Ranked %d of %d frame(s) for extraction", len(candidates), len(snapshot))
    return candidates
