# wikiclient/datatypes.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, NamedTuple, Union

logger = logging.getLogger(__name__)

CATEGORY_PREFIX = "Category: "


@dataclass(frozen=True, slots=True)
class ByTitle:
    """A page addressed by its title."""

    title: str

    def query_param(self) -> tuple[str, str]:
        return ("titles", self.title)


@dataclass(frozen=True, slots=True)
class ById:
    """A page addressed by its numeric page id (kept as a string)."""

    pageid: str

    def query_param(self) -> tuple[str, str]:
        return ("pageids", self.pageid)


PageIdentifier = Union[ByTitle, ById]


class Coordinates(NamedTuple):
    lat: float
    lon: float


def _first_object(value: Any) -> dict | None:
    if isinstance(value, list) and value and isinstance(value[0], dict):
        return value[0]
    return None


def _str_field(obj: dict, key: str) -> str | None:
    value = obj.get(key)
    return value if isinstance(value, str) else None


@dataclass(frozen=True, slots=True)
class Image:
    """
    An image used on a page.
    Fields the server leaves out are exposed as empty strings.
    """

    url: str
    title: str
    description_url: str

    @classmethod
    def from_value(cls, value: Any) -> Image | None:
        if not isinstance(value, dict):
            return None
        info = _first_object(value.get("imageinfo")) or {}
        return cls(
            url=_str_field(info, "url") or "",
            title=_str_field(value, "title") or "",
            description_url=_str_field(info, "descriptionurl") or "",
        )


@dataclass(frozen=True, slots=True)
class Reference:
    """An external link cited by a page."""

    url: str

    @classmethod
    def from_value(cls, value: Any) -> Reference | None:
        if not isinstance(value, dict):
            return None
        url = _str_field(value, "*")
        if url is None:
            return None
        # protocol-relative, e.g. "//example.com/x"
        if url.startswith("//"):
            url = f"http:{url}"
        return cls(url=url)


@dataclass(frozen=True, slots=True)
class Link:
    title: str

    @classmethod
    def from_value(cls, value: Any) -> Link | None:
        if not isinstance(value, dict):
            return None
        title = _str_field(value, "title")
        return cls(title=title) if title is not None else None


@dataclass(frozen=True, slots=True)
class LangLink:
    """
    The same page in another language.
    title is None when the server does not know the translated title.
    """

    lang: str
    title: str | None

    @classmethod
    def from_value(cls, value: Any) -> LangLink | None:
        if not isinstance(value, dict):
            return None
        lang = _str_field(value, "lang")
        if lang is None:
            logger.warning("Dropping language link without 'lang': %r", value)
            return None
        return cls(lang=lang, title=_str_field(value, "*"))


@dataclass(frozen=True, slots=True)
class Category:
    title: str

    @classmethod
    def from_value(cls, value: Any) -> Category | None:
        if not isinstance(value, dict):
            return None
        title = _str_field(value, "title")
        if title is None:
            return None
        if title.startswith(CATEGORY_PREFIX):
            title = title[len(CATEGORY_PREFIX) :]
        return cls(title=title)


CollectionItem = Union[Image, Reference, Link, LangLink, Category]
