"""Two-phase upload of downloaded images to Notion."""

from __future__ import annotations

import logging
from typing import Iterable, List

import requests

from .errors import CafeNotionError
from .models import ImagePayload, UploadedFileHandle
from .notion import NotionClient

logger = logging.getLogger("cafe_notion")


def upload_image(client: NotionClient, image: ImagePayload) -> UploadedFileHandle:
    """Reserve an upload slot, then send the bytes to it."""
    init = client.create_file_upload()
    client.send_file_upload(init["upload_url"], image)
    return UploadedFileHandle(id=init["id"])


def upload_images(client: NotionClient, images: Iterable[ImagePayload]) -> List[str]:
    """Upload every image, skipping failures; returns ids in submission order."""
    file_ids: List[str] = []
    for image in images:
        try:
            handle = upload_image(client, image)
        except (CafeNotionError, requests.RequestException) as exc:
            logger.warning("Failed to upload image %s: %s", image.filename, exc)
            continue
        file_ids.append(handle.id)
    return file_ids
