"""Image downloading through the authenticated session."""

from __future__ import annotations

import logging
import time
from pathlib import PurePosixPath
from typing import List, Optional, Sequence
from urllib.parse import urlparse

from filetype import guess
from playwright.async_api import APIRequestContext
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import async_playwright

from .config import ExtractConfig
from .models import ImagePayload
from .session import require_storage_state
from .utils import slugify, unique_ordered

logger = logging.getLogger("cafe_notion")

DEFAULT_CONTENT_TYPE = "application/octet-stream"


def infer_image_extension(content_type: Optional[str], data: bytes) -> Optional[str]:
    """Guess an image file extension from the file signature or HTTP metadata."""
    kind = guess(data)
    if kind and kind.mime.startswith("image/"):
        ext = kind.extension.lower()
        return "jpg" if ext == "jpeg" else ext
    if not content_type:
        return None
    parts = content_type.split(";")[0].split("/")
    if len(parts) == 2 and parts[0].strip() == "image":
        ext = parts[1].strip().lower()
        return "jpg" if ext == "jpeg" else ext
    return None


def build_filename(url: str, index: int, extension: Optional[str]) -> str:
    stem = PurePosixPath(urlparse(url).path).stem
    name = f"image-{int(time.time() * 1000)}-{index:02d}-{slugify(stem)}"[:80]
    return f"{name}.{extension}" if extension else name


async def download_images(
    request: APIRequestContext,
    urls: Sequence[str],
    config: ExtractConfig,
) -> List[ImagePayload]:
    """Download up to ``config.max_images`` unique images, skipping failures."""
    unique = unique_ordered(urls)
    if len(unique) > config.max_images:
        logger.info(
            "Keeping the first %d of %d image(s)", config.max_images, len(unique)
        )
    payloads: List[ImagePayload] = []
    for url in unique[: config.max_images]:
        try:
            response = await request.get(url)
            if not response.ok:
                logger.warning("Skipping %s: HTTP %s", url, response.status)
                continue
            data = await response.body()
        except PlaywrightError as exc:
            logger.warning("Failed to fetch image %s: %s", url, exc)
            continue

        if not data:
            logger.warning("Skipping %s: empty response", url)
            continue
        if len(data) > config.max_image_bytes:
            logger.warning(
                "Skipping %s: image larger than %s bytes", url, config.max_image_bytes
            )
            continue

        content_type = response.headers.get("content-type") or DEFAULT_CONTENT_TYPE
        extension = infer_image_extension(content_type, data)
        payloads.append(
            ImagePayload(
                buffer=data,
                content_type=content_type,
                filename=build_filename(url, len(payloads) + 1, extension),
            )
        )
    logger.info(
        "Downloaded %d of %d image(s)",
        len(payloads),
        min(len(unique), config.max_images),
    )
    return payloads


async def fetch_images(
    urls: Sequence[str], config: Optional[ExtractConfig] = None
) -> List[ImagePayload]:
    """Re-download image URLs with the saved session's cookies."""
    if not urls:
        return []
    config = config or ExtractConfig()
    storage_state = require_storage_state(config.storage_state)

    async with async_playwright() as playwright:
        request = await playwright.request.new_context(storage_state=str(storage_state))
        try:
            return await download_images(request, urls, config)
        finally:
            await request.dispose()
