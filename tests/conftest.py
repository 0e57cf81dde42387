"""Fakes standing in for Playwright pages, frames and responses."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pytest
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from cafe_notion.config import ExtractConfig


class FakeElement:
    def __init__(self, text: Any) -> None:
        self._text = text

    async def inner_text(self) -> str:
        if isinstance(self._text, Exception):
            raise self._text
        return self._text


class FakeFrame:
    """Frame whose selectors resolve from dictionaries."""

    def __init__(
        self,
        url: str,
        name: str = "",
        texts: Optional[Dict[str, Any]] = None,
        images: Optional[Dict[str, Any]] = None,
        ready: bool = True,
    ) -> None:
        self.url = url
        self.name = name
        self.texts = texts or {}
        self.images = images or {}
        self.ready = ready
        self.queried: List[str] = []

    def __repr__(self) -> str:
        return f"FakeFrame({self.url!r}, name={self.name!r})"

    async def wait_for_selector(self, selector: str, timeout: float = 0) -> None:
        if not self.ready:
            raise PlaywrightTimeoutError(f"Timeout {timeout}ms waiting for {selector}")

    async def query_selector(self, selector: str) -> Optional[FakeElement]:
        self.queried.append(selector)
        value = self.texts.get(selector)
        if isinstance(value, Exception):
            raise value
        if value is None:
            return None
        return FakeElement(value)

    async def eval_on_selector_all(self, selector: str, script: str, arg: Any = None):
        value = self.images.get(selector, [])
        if isinstance(value, Exception):
            raise value
        return list(value)


class FakePage:
    """Page serving a fixed set of frames per navigated URL."""

    def __init__(
        self,
        layouts: Dict[str, List[FakeFrame]],
        waits_time_out: bool = False,
    ) -> None:
        self.layouts = layouts
        self.waits_time_out = waits_time_out
        self.visited: List[str] = []
        self.waits: List[str] = []
        self._current: List[FakeFrame] = []

    async def goto(self, url: str, wait_until: str = "load") -> None:
        self.visited.append(url)
        self._current = self.layouts.get(url, [FakeFrame(url)])

    @property
    def frames(self) -> List[FakeFrame]:
        return list(self._current)

    @property
    def main_frame(self) -> FakeFrame:
        return self._current[0]

    async def wait_for_selector(self, selector: str, timeout: float = 0) -> None:
        self.waits.append(f"selector:{selector}")
        if self.waits_time_out:
            raise PlaywrightTimeoutError("Timeout waiting for iframe")

    async def wait_for_timeout(self, timeout: float) -> None:
        self.waits.append(f"delay:{timeout}")

    async def wait_for_load_state(self, state: str = "load", timeout: float = 0) -> None:
        self.waits.append(f"load:{state}")
        if self.waits_time_out:
            raise PlaywrightTimeoutError("Timeout waiting for network idle")


class FakeResponse:
    def __init__(
        self,
        body: bytes = b"",
        status: int = 200,
        headers: Optional[Dict[str, str]] = None,
    ) -> None:
        self._body = body
        self.status = status
        self.ok = 200 <= status < 300
        self.headers = headers or {}

    async def body(self) -> bytes:
        return self._body


class FakeRequestContext:
    """APIRequestContext replacement keyed by URL."""

    def __init__(self, responses: Dict[str, Any], default: Any = None) -> None:
        self.responses = responses
        self.default = default
        self.requested: List[str] = []

    async def get(self, url: str) -> FakeResponse:
        self.requested.append(url)
        value = self.responses.get(url, self.default)
        if isinstance(value, Exception):
            raise value
        if value is None:
            return FakeResponse(PNG_BYTES, headers={"content-type": "image/png"})
        return value


PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 64


@pytest.fixture
def config(tmp_path) -> ExtractConfig:
    return ExtractConfig(
        storage_state=tmp_path / "state.json",
        settle_delay=0,
        mobile_hosts={"cafe.example.com": "m.cafe.example.com"},
    )


@pytest.fixture
def storage_state(config) -> ExtractConfig:
    config.storage_state.write_text('{"cookies": [], "origins": []}', encoding="utf-8")
    return config


def fake_playwright_runtime():
    """Build an ``async_playwright`` stand-in with awaitable browser methods."""
    from unittest.mock import AsyncMock, MagicMock

    page = MagicMock(name="page")
    page.close = AsyncMock()
    context = MagicMock(name="context")
    context.new_page = AsyncMock(return_value=page)
    context.close = AsyncMock()
    browser = MagicMock(name="browser")
    browser.new_context = AsyncMock(return_value=context)
    browser.close = AsyncMock()
    request = MagicMock(name="request")
    request.dispose = AsyncMock()

    runtime = MagicMock(name="playwright")
    runtime.chromium.launch = AsyncMock(return_value=browser)
    runtime.request.new_context = AsyncMock(return_value=request)

    manager = MagicMock(name="manager")
    manager.__aenter__.return_value = runtime
    factory = MagicMock(return_value=manager)
    return factory, {
        "runtime": runtime,
        "browser": browser,
        "context": context,
        "page": page,
        "request": request,
    }
