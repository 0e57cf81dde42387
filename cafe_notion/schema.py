"""Resolve title, URL and date properties on the destination database."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .errors import DestinationSchemaInvalid


@dataclass(frozen=True)
class SchemaMapping:
    """Property names a page payload should use; ``None`` means omit."""

    title: str
    url: Optional[str] = None
    date: Optional[str] = None


def _properties(database: Mapping[str, Any]) -> Mapping[str, Any]:
    return (database or {}).get("properties") or {}


def find_title_property(database: Mapping[str, Any]) -> Optional[str]:
    for name, prop in _properties(database).items():
        if (prop or {}).get("type") == "title":
            return name
    return None


def find_property(
    database: Mapping[str, Any], name: str, prop_type: Optional[str] = None
) -> Optional[str]:
    """Match ``name`` exactly, then trimmed and case-insensitively."""
    properties = _properties(database)

    def type_matches(prop: Any) -> bool:
        return prop_type is None or (prop or {}).get("type") == prop_type

    if name in properties and type_matches(properties[name]):
        return name
    target = name.strip().lower()
    for key, prop in properties.items():
        if key.strip().lower() == target and type_matches(prop):
            return key
    return None


def map_schema(
    database: Mapping[str, Any], url_property: str, date_property: str
) -> SchemaMapping:
    title = find_title_property(database)
    if not title:
        raise DestinationSchemaInvalid("No title property found on database")
    return SchemaMapping(
        title=title,
        url=find_property(database, url_property, "url"),
        date=find_property(database, date_property, "date"),
    )
