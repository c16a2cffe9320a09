# wikiclient/aio/wikipedia.py
from __future__ import annotations

import logging
from typing import Any, Callable, Optional, TypeVar

from wikiclient import config, queries
from wikiclient.aio.http import AsyncHttpClient
from wikiclient.aio.pagination import AsyncContinuationIterator, AsyncExecutor
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
from wikiclient.page import (
    extract_content,
    extract_coordinates,
    extract_html,
    extract_title,
    section_text,
)
from wikiclient.pagination import RequestTemplate
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
    decode,
    find_redirect,
    first_page_id,
    languages_of,
    sections_of,
    titles_of,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AsyncWikipedia:
    """
    Async entry point for one MediaWiki site; same settings as Wikipedia.
    Every coroutine performs its requests one after the other.
    """

    def __init__(
        self,
        client: Optional[AsyncExecutor] = None,
        language: str = config.DEFAULT_LANGUAGE,
        base_url: str = config.DEFAULT_BASE_URL,
    ) -> None:
        self.client = client if client is not None else AsyncHttpClient()
        self.language = language
        self.url_template = base_url
        self.search_results = config.DEFAULT_SEARCH_RESULTS
        self.images_results = config.DEFAULT_IMAGES_RESULTS
        self.links_results = config.DEFAULT_LINKS_RESULTS
        self.categories_results = config.DEFAULT_CATEGORIES_RESULTS

    @property
    def base_url(self) -> str:
        return self.url_template.replace(config.LANGUAGE_URL_MARKER, self.language)

    def set_base_url(self, base_url: str) -> None:
        self.url_template = base_url
        if config.LANGUAGE_URL_MARKER not in base_url:
            self.language = ""

    async def query(self, params: queries.Params) -> dict:
        logger.debug("Query %s: %s", self.base_url, params)
        return decode(await self.client.get(self.base_url, params))

    async def search(self, query: str) -> list[str]:
        data = await self.query(queries.search_query(query, self.search_results))
        return titles_of(data, "search")

    async def geosearch(self, latitude: float, longitude: float, radius: int) -> list[str]:
        # validation happens before anything is awaited
        params = queries.geosearch_query(latitude, longitude, radius, self.search_results)
        return titles_of(await self.query(params), "geosearch")

    async def random_count(self, count: int) -> list[str]:
        return titles_of(await self.query(queries.random_query(count)), "random")

    async def random(self) -> Optional[str]:
        return next(iter(await self.random_count(1)), None)

    async def get_languages(self) -> list[tuple[str, str]]:
        return languages_of(await self.query(queries.languages_query()))

    def page_from_title(self, title: str) -> AsyncPage:
        return AsyncPage(self, ByTitle(title))

    def page_from_pageid(self, pageid: str) -> AsyncPage:
        return AsyncPage(self, ById(str(pageid)))


class AsyncPage:
    def __init__(self, wikipedia: AsyncWikipedia, identifier: PageIdentifier) -> None:
        self.wikipedia = wikipedia
        self.identifier = identifier

    async def _resolve(
        self,
        operation: tuple[tuple[str, str], ...],
        extract: Callable[[dict], T],
        shortcut: Callable[[PageIdentifier], Optional[T]] | None = None,
    ) -> T:
        identifier = self.identifier
        trail = RedirectTrail(identifier)
        while True:
            if shortcut is not None:
                known = shortcut(identifier)
                if known is not None:
                    return known
            data = await self.wikipedia.query(queries.page_query(operation, identifier))
            target = find_redirect(data)
            if target is None:
                return extract(data)
            identifier = trail.follow(target)

    async def get_pageid(self) -> str:
        return await self._resolve(queries.INFO, first_page_id, pageid_shortcut)

    async def get_title(self) -> str:
        return await self._resolve(queries.INFO, extract_title, title_shortcut)

    async def get_content(self) -> str:
        return await self._resolve(queries.CONTENT, extract_content)

    async def get_html_content(self) -> str:
        return await self._resolve(queries.HTML_CONTENT, extract_html)

    async def get_summary(self) -> str:
        return await self._resolve(queries.SUMMARY, extract_content)

    async def get_coordinates(self) -> Optional[Coordinates]:
        return await self._resolve(queries.COORDINATES, extract_coordinates)

    async def get_sections(self) -> list[str]:
        pageid = await self.get_pageid()
        return sections_of(await self.wikipedia.query(queries.sections_query(pageid)))

    async def get_section_content(self, title: str) -> Optional[str]:
        return section_text(await self.get_content(), title)

    async def _iterate(self, resource: Resource[T]) -> AsyncContinuationIterator[T]:
        template = RequestTemplate(
            base_url=self.wikipedia.base_url,
            params=tuple(resource.params(self.wikipedia, self.identifier)),
        )
        return await AsyncContinuationIterator.create(self.wikipedia.client, template, resource)

    async def get_images(self) -> AsyncContinuationIterator[Image]:
        return await self._iterate(IMAGES)

    async def get_references(self) -> AsyncContinuationIterator[Reference]:
        return await self._iterate(REFERENCES)

    async def get_links(self) -> AsyncContinuationIterator[Link]:
        return await self._iterate(LINKS)

    async def get_langlinks(self) -> AsyncContinuationIterator[LangLink]:
        return await self._iterate(LANGLINKS)

    async def get_categories(self) -> AsyncContinuationIterator[Category]:
        return await self._iterate(CATEGORIES)

    def __eq__(self, other: Any) -> bool:
        if not isinstance(other, AsyncPage):
            return NotImplemented
        return self.identifier == other.identifier

    def __hash__(self) -> int:
        return hash(self.identifier)

    def __repr__(self) -> str:
        return f"AsyncPage({self.identifier!r})"
