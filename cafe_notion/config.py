"""Configuration objects and constants for extraction and publishing."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Optional, Tuple

from .errors import DestinationConfigMissing

DEFAULT_STORAGE_STATE = Path("storage/naver-state.json")
DEFAULT_NOTION_VERSION = "2022-06-28"
DEFAULT_URL_PROPERTY = "원문 링크"
DEFAULT_DATE_PROPERTY = "후기 작성일"


@dataclass(frozen=True)
class SelectorSet:
    """Ordered CSS selector candidates for every extracted field."""

    title: Tuple[str, ...]
    body: Tuple[str, ...]
    date: Tuple[str, ...]
    images: Tuple[str, ...]


DEFAULT_SELECTORS = SelectorSet(
    title=("h3.title_text", "h2.title_text", "div.title_text", "h1"),
    body=(
        "div.article_viewer",
        "div.se-main-container",
        "div#postViewArea",
        "div.ArticleContentBox",
        "div.ContentRenderer",
    ),
    date=("span.date", "span.article_info_date", "div.date"),
    images=(
        "div.article_viewer img",
        "div.se-main-container img",
        "div#postViewArea img",
        "div.ArticleContentBox img",
        "div.ContentRenderer img",
    ),
)

# Lazy-load attributes win over the live src.
IMAGE_SOURCE_ATTRIBUTES = ("data-src", "data-lazy-src", "data-original", "src")


def _default_mobile_hosts() -> Dict[str, str]:
    return {"cafe.naver.com": "m.cafe.naver.com"}


@dataclass
class ExtractConfig:
    """Settings that control navigation, frame resolution and image downloads."""

    storage_state: Path = DEFAULT_STORAGE_STATE
    navigation_timeout: float = 30.0
    content_frame_timeout: float = 15.0
    settle_delay: float = 0.8
    network_idle_timeout: float = 15.0
    root_wait_timeout: float = 8.0
    min_body_chars: int = 20
    content_frame_name: str = "cafe_main"
    content_iframe_selector: str = (
        "iframe#iframe, iframe#cafe_main, iframe[name='cafe_main']"
    )
    article_frame_pattern: str = r"ArticleRead|articleid|Article"
    mobile_hosts: Dict[str, str] = field(default_factory=_default_mobile_hosts)
    selectors: SelectorSet = DEFAULT_SELECTORS
    max_images: int = 10
    max_image_bytes: int = 20 * 1024 * 1024
    headless: bool = True

    @classmethod
    def from_env(cls, storage_state: Optional[Path] = None) -> "ExtractConfig":
        """Build a config, honouring ``CAFE_STORAGE_STATE`` when no path is given."""
        if storage_state is None:
            override = os.getenv("CAFE_STORAGE_STATE")
            storage_state = Path(override) if override else DEFAULT_STORAGE_STATE
        return cls(storage_state=Path(storage_state).expanduser())


@dataclass
class NotionConfig:
    """Credentials and schema hints for the destination database."""

    token: str
    database_id: str
    api_version: str = DEFAULT_NOTION_VERSION
    url_property: str = DEFAULT_URL_PROPERTY
    date_property: str = DEFAULT_DATE_PROPERTY
    api_base: str = "https://api.notion.com/v1"
    request_timeout: float = 30.0
    chunk_size: int = 1800
    utc_offset_hours: int = 9


def load_notion_config() -> NotionConfig:
    """Read Notion settings from the environment, failing fast on gaps."""
    required = ("NOTION_TOKEN", "NOTION_DATABASE_ID")
    missing = [key for key in required if not os.getenv(key)]
    if missing:
        raise DestinationConfigMissing(f"Missing env: {', '.join(missing)}")
    return NotionConfig(
        token=os.environ["NOTION_TOKEN"],
        database_id=os.environ["NOTION_DATABASE_ID"],
        api_version=os.getenv("NOTION_VERSION") or DEFAULT_NOTION_VERSION,
        url_property=os.getenv("NOTION_URL_PROPERTY") or DEFAULT_URL_PROPERTY,
        date_property=os.getenv("NOTION_DATE_PROPERTY") or DEFAULT_DATE_PROPERTY,
    )
