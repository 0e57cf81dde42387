"""Build Notion block payloads for a post body."""

from __future__ import annotations

import re
from typing import Any, Dict, Iterable, List, Optional, Sequence

Block = Dict[str, Any]

DEFAULT_CHUNK_SIZE = 1800
_HTTP_URL = re.compile(r"^https?://", re.IGNORECASE)


def chunk_text(text: Optional[str], size: int = DEFAULT_CHUNK_SIZE) -> List[str]:
    """Split text into ``size``-character chunks; the last one may be shorter."""
    if size <= 0:
        raise ValueError("chunk size must be positive")
    text = text or ""
    return [text[index : index + size] for index in range(0, len(text), size)]


def paragraph_blocks(lines: Iterable[str]) -> List[Block]:
    return [
        {
            "object": "block",
            "type": "paragraph",
            "paragraph": {"rich_text": [{"type": "text", "text": {"content": line}}]},
        }
        for line in lines
        if line and line.strip()
    ]


def external_image_blocks(urls: Iterable[str]) -> List[Block]:
    return [
        {
            "object": "block",
            "type": "image",
            "image": {"type": "external", "external": {"url": url}},
        }
        for url in urls or ()
        if url and _HTTP_URL.match(url)
    ]


def uploaded_image_blocks(file_ids: Iterable[str]) -> List[Block]:
    return [
        {
            "object": "block",
            "type": "image",
            "image": {"type": "file_upload", "file_upload": {"id": file_id}},
        }
        for file_id in file_ids or ()
    ]


def build_blocks(
    content_text: str,
    source_url: Optional[str] = None,
    image_urls: Sequence[str] = (),
    file_ids: Sequence[str] = (),
    include_url: bool = True,
    chunk_size: int = DEFAULT_CHUNK_SIZE,
) -> List[Block]:
    """Assemble the page body.

    Order: the source URL paragraph (only when ``include_url``), then images,
    uploaded files taking precedence over external links, then the body text.
    """
    blocks: List[Block] = []
    if source_url and include_url:
        blocks.extend(paragraph_blocks([source_url]))
    if file_ids:
        blocks.extend(uploaded_image_blocks(file_ids))
    else:
        blocks.extend(external_image_blocks(image_urls))
    blocks.extend(paragraph_blocks(chunk_text(content_text, chunk_size)))
    return blocks
