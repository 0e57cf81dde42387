"""Typed failures surfaced by extraction and publishing."""

from __future__ import annotations

from typing import Any, Dict, Optional


class CafeNotionError(Exception):
    """Base error carrying a stable code and a suggested response status."""

    code = "INTERNAL_ERROR"
    status = 500

    def __init__(
        self,
        message: str,
        *,
        code: Optional[str] = None,
        status: Optional[int] = None,
        details: Any = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        if code:
            self.code = code
        if status:
            self.status = status
        self.details = details

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message, "status": self.status}


class SessionStateMissing(CafeNotionError):
    code = "STORAGE_STATE_NOT_FOUND"
    status = 400


class ContentNotFound(CafeNotionError):
    code = "CONTENT_NOT_FOUND"
    status = 500


class DestinationConfigMissing(CafeNotionError):
    code = "NOTION_ENV_MISSING"
    status = 500


class DestinationSchemaInvalid(CafeNotionError):
    code = "TITLE_PROPERTY_NOT_FOUND"
    status = 400


class DestinationApiError(CafeNotionError):
    """Non-success response from Notion; ``details`` holds the upstream payload."""

    code = "NOTION_API_ERROR"


class FileUploadInitFailed(CafeNotionError):
    code = "FILE_UPLOAD_INIT_FAILED"
    status = 500


def error_payload(exc: BaseException) -> Dict[str, Any]:
    """Map any exception to ``{code, message, status}`` without leaking internals."""
    if isinstance(exc, CafeNotionError):
        return exc.to_dict()
    return {
        "code": "INTERNAL_ERROR",
        "message": "Server error occurred.",
        "status": 500,
    }
