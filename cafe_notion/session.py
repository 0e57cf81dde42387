"""Access to the persisted, authenticated browsing session."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path

from playwright.async_api import async_playwright

from .errors import SessionStateMissing

logger = logging.getLogger("cafe_notion")

LOGIN_URL = "https://nid.naver.com/nidlogin.login"


def require_storage_state(path: Path) -> Path:
    """Return the session file path, or fail before any browser is started."""
    if not Path(path).is_file():
        raise SessionStateMissing(
            f"{path} does not exist. Run `cafe-notion login` to save a session first."
        )
    return Path(path)


async def save_storage_state(path: Path, login_url: str = LOGIN_URL) -> Path:
    """Open a visible browser, let the user sign in, then persist cookies and storage."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    async with async_playwright() as playwright:
        browser = await playwright.chromium.launch(headless=False)
        try:
            context = await browser.new_context()
            page = await context.new_page()
            await page.goto(login_url)
            print("Finish signing in in the browser window, then press Enter here.")
            await asyncio.to_thread(input)
            await context.storage_state(path=str(path))
        finally:
            await browser.close()
    logger.info("Saved session state to %s", path)
    return path
