from unittest.mock import Mock

import pytest

from cafe_notion.config import NotionConfig
from cafe_notion.errors import DestinationApiError, DestinationSchemaInvalid
from cafe_notion.models import ExtractedPost, ImagePayload
from cafe_notion.publisher import publish_post

SCHEMA = {
    "properties": {
        "Name": {"type": "title"},
        "원문 링크": {"type": "url"},
        "후기 작성일": {"type": "date"},
    }
}


@pytest.fixture
def notion_config():
    return NotionConfig(token="secret", database_id="db-1")


@pytest.fixture
def post():
    return ExtractedPost(
        url="https://cafe.example.com/club/1",
        title="후기",
        content_text="c" * 2000,
        date_text="2024.3.5 오후 2:30",
        image_urls=("https://img/1.png",),
    )


def _client(schema=SCHEMA):
    client = Mock()
    client.get_database.return_value = schema
    client.create_page.return_value = {"id": "page-1", "url": "https://notion.so/page-1"}
    return client


def test_publish_maps_properties_and_returns_page(post, notion_config):
    client = _client()

    page = publish_post(post, config=notion_config, client=client)

    assert (page.id, page.url) == ("page-1", "https://notion.so/page-1")
    client.get_database.assert_called_once_with("db-1")
    payload = client.create_page.call_args.args[0]
    assert payload["parent"] == {"database_id": "db-1"}
    assert payload["properties"]["Name"]["title"][0]["text"]["content"] == "후기"
    assert payload["properties"]["원문 링크"] == {"url": post.url}
    assert payload["properties"]["후기 작성일"] == {
        "date": {"start": "2024-03-05T14:30:00+09:00"}
    }
    kinds = [block["type"] for block in payload["children"]]
    assert kinds == ["image", "paragraph", "paragraph"]
    assert payload["children"][0]["image"]["type"] == "external"


def test_url_goes_to_body_when_schema_has_no_url_property(post, notion_config):
    client = _client({"properties": {"Title": {"type": "title"}}})

    publish_post(post, config=notion_config, client=client)

    payload = client.create_page.call_args.args[0]
    assert set(payload["properties"]) == {"Title"}
    first = payload["children"][0]
    assert first["paragraph"]["rich_text"][0]["text"]["content"] == post.url


def test_missing_title_defaults_to_untitled(notion_config):
    client = _client()
    post = ExtractedPost(url="", title="", content_text="body text long enough")

    publish_post(post, config=notion_config, client=client)

    properties = client.create_page.call_args.args[0]["properties"]
    assert properties["Name"]["title"][0]["text"]["content"] == "Untitled"
    assert "원문 링크" not in properties
    assert "후기 작성일" not in properties


def test_uploaded_images_are_embedded(post, notion_config):
    client = _client()
    client.create_file_upload.side_effect = [
        {"id": "file-1", "upload_url": "https://upload/1"},
        DestinationApiError("quota", status=429),
    ]
    images = [ImagePayload(b"a", "image/png", "a.png"), ImagePayload(b"b", "image/png", "b.png")]

    publish_post(post, images, config=notion_config, client=client)

    children = client.create_page.call_args.args[0]["children"]
    assert children[0]["image"] == {"type": "file_upload", "file_upload": {"id": "file-1"}}
    assert children[1]["type"] == "paragraph"


def test_schema_without_title_fails_before_page_creation(post, notion_config):
    client = _client({"properties": {"원문 링크": {"type": "url"}}})

    with pytest.raises(DestinationSchemaInvalid):
        publish_post(post, config=notion_config, client=client)

    client.create_page.assert_not_called()
    client.create_file_upload.assert_not_called()


def test_destination_error_propagates(post, notion_config):
    client = _client()
    client.create_page.side_effect = DestinationApiError("unauthorized", status=401)

    with pytest.raises(DestinationApiError):
        publish_post(post, config=notion_config, client=client)
