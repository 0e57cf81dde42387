"""Thin wrapper around the Notion REST endpoints used for publishing."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import requests

from .config import NotionConfig
from .errors import DestinationApiError, FileUploadInitFailed
from .models import ImagePayload

logger = logging.getLogger("cafe_notion")


def raise_for_notion_error(response: requests.Response) -> None:
    """Turn a non-success response into :class:`DestinationApiError`."""
    if response.ok:
        return
    try:
        payload = response.json()
    except ValueError:
        payload = None
    if not isinstance(payload, dict):
        payload = None
    message = (payload or {}).get("message") or "Notion API error"
    code = (payload or {}).get("code") or "NOTION_API_ERROR"
    logger.debug("Notion responded %s: %s", response.status_code, payload)
    raise DestinationApiError(
        message, code=code, status=response.status_code, details=payload
    )


class NotionClient:
    """Session-backed client for databases, pages and file uploads."""

    def __init__(
        self, config: NotionConfig, session: Optional[requests.Session] = None
    ) -> None:
        self.config = config
        self.session = session or requests.Session()

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "NotionClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _auth_headers(self) -> Dict[str, str]:
        return {
            "Authorization": f"Bearer {self.config.token}",
            "Notion-Version": self.config.api_version,
        }

    def _json_headers(self) -> Dict[str, str]:
        return {**self._auth_headers(), "Content-Type": "application/json"}

    def _url(self, path: str) -> str:
        return f"{self.config.api_base.rstrip('/')}/{path.lstrip('/')}"

    def get_database(self, database_id: str) -> Dict[str, Any]:
        response = self.session.get(
            self._url(f"databases/{database_id}"),
            headers=self._json_headers(),
            timeout=self.config.request_timeout,
        )
        raise_for_notion_error(response)
        return response.json()

    def create_page(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        response = self.session.post(
            self._url("pages"),
            headers=self._json_headers(),
            json=payload,
            timeout=self.config.request_timeout,
        )
        raise_for_notion_error(response)
        return response.json()

    def create_file_upload(self) -> Dict[str, Any]:
        """Reserve an upload slot; the reply carries ``id`` and ``upload_url``."""
        response = self.session.post(
            self._url("file_uploads"), headers=self._json_headers(), json={}
        )
        raise_for_notion_error(response)
        init = response.json()
        if not isinstance(init, dict) or not init.get("id") or not init.get("upload_url"):
            raise FileUploadInitFailed("Failed to init file upload", details=init)
        return init

    def send_file_upload(self, upload_url: str, image: ImagePayload) -> Dict[str, Any]:
        response = self.session.post(
            upload_url,
            headers=self._auth_headers(),
            files={
                "file": (
                    image.filename or "image",
                    image.buffer,
                    image.content_type or "application/octet-stream",
                )
            },
        )
        raise_for_notion_error(response)
        return response.json()
