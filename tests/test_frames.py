import asyncio

from cafe_notion.frames import rank_frames, resolve_frames
from cafe_notion.models import FrameCandidate

from conftest import FakeFrame, FakePage


def test_article_frames_come_first_then_cafe_main_then_rest():
    blank = FrameCandidate("about:blank")
    article = FrameCandidate("https://cafe.example.com/ArticleRead.nhn?articleid=1")
    cafe_main = FrameCandidate("https://cafe.example.com/MyCafeIntro.nhn", "cafe_main")
    other = FrameCandidate("https://cafe.example.com/other")

    ranked = rank_frames([blank, article, cafe_main, other])

    assert ranked == [article, cafe_main, other]


def test_empty_urls_are_dropped():
    ranked = rank_frames([FrameCandidate(""), FrameCandidate("https://a.example/x")])
    assert [frame.url for frame in ranked] == ["https://a.example/x"]


def test_article_pattern_is_case_insensitive_and_keeps_discovery_order():
    first = FrameCandidate("https://cafe.example.com/ca-fe/articles/7")
    second = FrameCandidate("https://cafe.example.com/ARTICLEREAD?id=9")
    top = FrameCandidate("https://cafe.example.com/club/1")

    assert rank_frames([top, first, second]) == [first, second, top]


def test_cafe_main_already_ranked_is_not_repeated():
    both = FrameCandidate("https://cafe.example.com/ArticleRead?id=1", "cafe_main")
    other = FrameCandidate("https://cafe.example.com/side")

    assert rank_frames([other, both]) == [both, other]


def test_resolve_frames_proceeds_when_waits_time_out(config):
    article = FakeFrame("https://cafe.example.com/ArticleRead?id=3")
    top = FakeFrame("https://cafe.example.com/club/3")
    page = FakePage({"u": [top, FakeFrame("about:blank"), article]}, waits_time_out=True)

    async def run():
        await page.goto("u")
        return await resolve_frames(page, config)

    ranked = asyncio.run(run())

    assert ranked == [article, top]
    assert page.waits[0].startswith("selector:")
    assert page.waits[-1] == "load:networkidle"
