"""Compose a Notion page from an extracted post."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Sequence

from .blocks import build_blocks
from .config import NotionConfig, load_notion_config
from .dates import to_notion_date
from .models import ExtractedPost, ImagePayload, PublishedPage
from .notion import NotionClient
from .schema import SchemaMapping, map_schema
from .uploads import upload_images

logger = logging.getLogger("cafe_notion")

UNTITLED = "Untitled"


def build_properties(
    post: ExtractedPost, mapping: SchemaMapping, date_value: Optional[str]
) -> Dict[str, Any]:
    properties: Dict[str, Any] = {
        mapping.title: {
            "title": [{"type": "text", "text": {"content": post.title or UNTITLED}}]
        }
    }
    if post.url and mapping.url:
        properties[mapping.url] = {"url": post.url}
    if date_value and mapping.date:
        properties[mapping.date] = {"date": {"start": date_value}}
    return properties


def publish_post(
    post: ExtractedPost,
    images: Sequence[ImagePayload] = (),
    config: Optional[NotionConfig] = None,
    client: Optional[NotionClient] = None,
) -> PublishedPage:
    """Create a database page for ``post`` and return its id and URL.

    Schema and API failures propagate; image uploads are best-effort.
    """
    config = config or load_notion_config()
    owns_client = client is None
    client = client or NotionClient(config)
    try:
        database = client.get_database(config.database_id)
        mapping = map_schema(database, config.url_property, config.date_property)
        logger.debug("Resolved schema mapping %s", mapping)

        date_value = to_notion_date(post.date_text, config.utc_offset_hours)
        properties = build_properties(post, mapping, date_value)

        file_ids = upload_images(client, images) if images else []
        if images:
            logger.info("Uploaded %d of %d image(s)", len(file_ids), len(images))

        children = build_blocks(
            post.content_text,
            source_url=post.url,
            image_urls=post.image_urls,
            file_ids=file_ids,
            include_url=mapping.url is None,
            chunk_size=config.chunk_size,
        )
        page = client.create_page(
            {
                "parent": {"database_id": config.database_id},
                "properties": properties,
                "children": children,
            }
        )
    finally:
        if owns_client:
            client.close()

    published = PublishedPage(id=page.get("id", ""), url=page.get("url", ""))
    logger.info("Created Notion page %s", published.url or published.id)
    return published
