# wikiclient/page.py
from __future__ import annotations

import re
from typing import TYPE_CHECKING, Any, Callable, Optional, TypeVar

from wikiclient import queries
from wikiclient.datatypes import (
    ById,
    ByTitle,
    Category,
    Coordinates,
    Image,
    LangLink,
    Link,
    PageIdentifier,
    Reference,
)
from wikiclient.errors import JSONPathError
from wikiclient.pagination import ContinuationIterator, RequestTemplate
from wikiclient.redirects import RedirectTrail, pageid_shortcut, title_shortcut
from wikiclient.resources import (
    CATEGORIES,
    IMAGES,
    LANGLINKS,
    LINKS,
    REFERENCES,
    Resource,
)
from wikiclient.responses import (
    find_redirect,
    first_page,
    first_page_id,
    page_field,
    sections_of,
)

if TYPE_CHECKING:
    from wikiclient.wikipedia import Wikipedia

T = TypeVar("T")

_HEADING = re.compile(r"^(=+)[^=\n].*?\1[ \t]*$", re.M)


def _text(data: dict, *path: str | int) -> str:
    value = page_field(data, *path)
    if not isinstance(value, str):
        raise JSONPathError("query.pages[0]." + ".".join(map(str, path)))
    return value


def extract_content(data: dict) -> str:
    return _text(data, "extract")


def extract_html(data: dict) -> str:
    return _text(data, "revisions", 0, "*")


def extract_title(data: dict) -> str:
    return _text(data, "title")


def extract_coordinates(data: dict) -> Optional[Coordinates]:
    """
    First coordinate pair of the page, or None when it has none.
    A pair without a numeric lat/lon is a JSONPathError.
    """
    coords = first_page(data).get("coordinates")
    if not isinstance(coords, list) or not coords or not isinstance(coords[0], dict):
        return None
    lat, lon = coords[0].get("lat"), coords[0].get("lon")
    for name, value in (("lat", lat), ("lon", lon)):
        if isinstance(value, bool) or not isinstance(value, (int, float)):
            raise JSONPathError(f"query.pages[0].coordinates[0].{name}")
    return Coordinates(float(lat), float(lon))


def section_text(content: str, title: str) -> Optional[str]:
    """
    Text between the heading named `title` and the next heading of any
    level in a plain-text extract, or None when there is no such heading.
    """
    wanted = title.strip()
    for match in _HEADING.finditer(content):
        heading = match.group(0).strip().strip("=").strip()
        if heading != wanted:
            continue
        following = _HEADING.search(content, match.end())
        end = following.start() if following else len(content)
        return content[match.end() : end].strip()
    return None


class Page:
    """
    A page on a Wikipedia site, addressed by title or by page id.

    Single-value getters follow redirects reported by the server; every
    collection getter returns a lazy iterator that pages through results.
    """

    def __init__(self, wikipedia: Wikipedia, identifier: PageIdentifier) -> None:
        self.wikipedia = wikipedia
        self.identifier = identifier

    @classmethod
    def from_title(cls, wikipedia: Wikipedia, title: str) -> Page:
        return cls(wikipedia, ByTitle(title))

    @classmethod
    def from_pageid(cls, wikipedia: Wikipedia, pageid: str) -> Page:
        return cls(wikipedia, ById(str(pageid)))

    def _resolve(
        self,
        operation: tuple[tuple[str, str], ...],
        extract: Callable[[dict], T],
        shortcut: Callable[[PageIdentifier], Optional[T]] | None = None,
    ) -> T:
        """
        Run one query, re-running it against the redirect target for as
        long as the server reports a redirect, then extract the answer.
        `shortcut` answers without a request when the identifier allows it.
        """
        identifier = self.identifier
        trail = RedirectTrail(identifier)
        while True:
            if shortcut is not None:
                known = shortcut(identifier)
                if known is not None:
                    return known
            data = self.wikipedia.query(queries.page_query(operation, identifier))
            target = find_redirect(data)
            if target is None:
                return extract(data)
            identifier = trail.follow(target)

    def get_pageid(self) -> str:
        """
        Page id of this page. For a title the redirect chain is resolved and
        the first key of query.pages is returned.
        """
        return self._resolve(queries.INFO, first_page_id, pageid_shortcut)

    def get_title(self) -> str:
        return self._resolve(queries.INFO, extract_title, title_shortcut)

    def get_content(self) -> str:
        """Plain-text content of the whole page."""
        return self._resolve(queries.CONTENT, extract_content)

    def get_html_content(self) -> str:
        return self._resolve(queries.HTML_CONTENT, extract_html)

    def get_summary(self) -> str:
        """Plain-text introduction (the part before the first section)."""
        return self._resolve(queries.SUMMARY, extract_content)

    def get_coordinates(self) -> Optional[Coordinates]:
        return self._resolve(queries.COORDINATES, extract_coordinates)

    def get_sections(self) -> list[str]:
        pageid = self.get_pageid()
        return sections_of(self.wikipedia.query(queries.sections_query(pageid)))

    def get_section_content(self, title: str) -> Optional[str]:
        return section_text(self.get_content(), title)

    def _iterate(self, resource: Resource[T]) -> ContinuationIterator[T]:
        template = RequestTemplate(
            base_url=self.wikipedia.base_url,
            params=tuple(resource.params(self.wikipedia, self.identifier)),
        )
        return ContinuationIterator(self.wikipedia.client, template, resource)

    def get_images(self) -> ContinuationIterator[Image]:
        return self._iterate(IMAGES)

    def get_references(self) -> ContinuationIterator[Reference]:
        return self._iterate(REFERENCES)

    def get_links(self) -> ContinuationIterator[Link]:
        return self._iterate(LINKS)

    def get_langlinks(self) -> ContinuationIterator[LangLink]:
        return self._iterate(LANGLINKS)

    def get_categories(self) -> ContinuationIterator[Category]:
        return self._iterate(CATEGORIES)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, Page):
            return NotImplemented
        return self.identifier == other.identifier

    def __hash__(self) -> int:
        return hash(self.identifier)

    def __repr__(self) -> str:
        return f"Page({self.identifier!r})"
