"""Request handlers shared by the CLI and the MCP server."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Dict, Optional

from .config import ExtractConfig, NotionConfig, load_notion_config
from .errors import error_payload
from .extractor import extract_post
from .images import fetch_images
from .models import ExtractedPost
from .publisher import publish_post
from .utils import is_valid_http_url

logger = logging.getLogger("cafe_notion.service")

INVALID_URL = {
    "code": "INVALID_URL",
    "message": "url is missing or does not start with http(s).",
}


def failure(exc: BaseException) -> Dict[str, Any]:
    mapped = error_payload(exc)
    return {
        "ok": False,
        "status": mapped["status"],
        "error": {"code": mapped["code"], "message": mapped["message"]},
    }


async def handle_extract(url: Any, config: Optional[ExtractConfig] = None) -> Dict[str, Any]:
    """Extract one post and wrap the outcome as ``{ok, data|error}``."""
    if not is_valid_http_url(url):
        return {"ok": False, "status": 400, "error": dict(INVALID_URL)}
    try:
        post = await extract_post(url, config)
    except Exception as exc:  # pylint: disable=broad-except
        logger.exception("Extraction failed for %s", url)
        return failure(exc)
    return {"ok": True, "data": post.to_dict()}


async def handle_save(
    post: ExtractedPost,
    config: Optional[ExtractConfig] = None,
    notion_config: Optional[NotionConfig] = None,
    with_images: bool = True,
) -> Dict[str, Any]:
    """Re-host the post's images and publish it to Notion."""
    try:
        notion_config = notion_config or load_notion_config()
        images = []
        if with_images and post.image_urls:
            images = await fetch_images(list(post.image_urls), config)
        page = await asyncio.to_thread(publish_post, post, images, notion_config)
    except Exception as exc:  # pylint: disable=broad-except
        logger.exception("Publishing failed for %s", post.url or post.title)
        return failure(exc)
    return {"ok": True, "notionPageId": page.id, "notionUrl": page.url}


async def handle_extract_and_save(
    url: Any,
    config: Optional[ExtractConfig] = None,
    notion_config: Optional[NotionConfig] = None,
    with_images: bool = True,
) -> Dict[str, Any]:
    extracted = await handle_extract(url, config)
    if not extracted["ok"]:
        return extracted
    post = ExtractedPost.from_dict(extracted["data"])
    return await handle_save(post, config, notion_config, with_images)
