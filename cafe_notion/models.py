"""Data models used throughout the extraction and publishing pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Mapping, Tuple

from .utils import unique_ordered


@dataclass(frozen=True)
class ExtractedPost:
    """Normalized post returned by a successful extraction."""

    url: str
    title: str
    content_text: str
    date_text: str = ""
    image_urls: Tuple[str, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "image_urls", tuple(unique_ordered(self.image_urls)))

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "title": self.title,
            "contentText": self.content_text,
            "dateText": self.date_text,
            "imageUrls": list(self.image_urls),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ExtractedPost":
        """Build a post from the wire shape used by the front doors."""
        image_urls: Iterable[str] = data.get("imageUrls") or ()
        return cls(
            url=data.get("url") or "",
            title=data.get("title") or "",
            content_text=data.get("contentText") or "",
            date_text=data.get("dateText") or "",
            image_urls=tuple(u for u in image_urls if isinstance(u, str)),
        )


@dataclass(frozen=True)
class FrameCandidate:
    """Point-in-time identity of a frame considered for extraction."""

    url: str
    name: str = ""


@dataclass
class FieldResult:
    """Fields read from one frame; any of them may be empty."""

    title: str = ""
    content_text: str = ""
    date_text: str = ""
    image_urls: Tuple[str, ...] = field(default_factory=tuple)


@dataclass
class ImagePayload:
    """Downloaded image bytes ready for upload."""

    buffer: bytes
    content_type: str
    filename: str


@dataclass(frozen=True)
class UploadedFileHandle:
    """File upload that completed both phases."""

    id: str


@dataclass(frozen=True)
class PublishedPage:
    """Identity of the Notion page created for a post."""

    id: str
    url: str
