"""MCP server exposing the extract and save tools."""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from mcp.server.fastmcp import FastMCP

from .config import ExtractConfig
from .models import ExtractedPost
from .service import handle_extract, handle_save

logger = logging.getLogger("cafe_notion.mcp")
logger.setLevel(logging.ERROR)

mcp = FastMCP(name="cafe-notion")


@mcp.tool()
async def health() -> Dict[str, Any]:
    """Report that the server is up."""
    return {"ok": True}


@mcp.tool()
async def extract(url: str) -> Dict[str, Any]:
    """Extract title, body, date and image URLs from a cafe post."""
    result = await handle_extract(url, ExtractConfig.from_env())
    result.pop("status", None)
    return result


@mcp.tool()
async def save(
    title: str = "",
    contentText: str = "",
    url: str = "",
    dateText: str = "",
    imageUrls: Optional[List[str]] = None,
) -> Dict[str, Any]:
    """Save an extracted post as a page in the configured Notion database."""
    post = ExtractedPost(
        url=url,
        title=title,
        content_text=contentText,
        date_text=dateText,
        image_urls=tuple(imageUrls or ()),
    )
    result = await handle_save(post, ExtractConfig.from_env())
    result.pop("status", None)
    return result


def main() -> None:
    """Entry point for running the MCP server."""
    load_dotenv()
    logging.basicConfig(level=logging.ERROR)
    mcp.run()


if __name__ == "__main__":
    main()
