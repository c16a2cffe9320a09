# wikiclient/wikipedia.py
from __future__ import annotations

import logging
from typing import Optional

from wikiclient import config, queries
from wikiclient.http import HttpClient
from wikiclient.page import Page
from wikiclient.pagination import Executor
from wikiclient.responses import decode, languages_of, titles_of

logger = logging.getLogger(__name__)


class Wikipedia:
    """
    Entry point for one MediaWiki site.

    Holds the API URL template, the language it is filled with, and the
    result sizes used by searches and collection iterators. Treat it as
    read-only once pages start issuing queries.
    """

    def __init__(
        self,
        client: Optional[Executor] = None,
        language: str = config.DEFAULT_LANGUAGE,
        base_url: str = config.DEFAULT_BASE_URL,
    ) -> None:
        self.client = client if client is not None else HttpClient()
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
        """
        Use another API endpoint. `{language}` in the URL is replaced with
        the current language; a URL without it is used as-is.
        """
        self.url_template = base_url
        if config.LANGUAGE_URL_MARKER not in base_url:
            self.language = ""

    def query(self, params: queries.Params) -> dict:
        """One round trip to the API, returning the decoded JSON tree."""
        logger.debug("Query %s: %s", self.base_url, params)
        return decode(self.client.get(self.base_url, params))

    def search(self, query: str) -> list[str]:
        """Titles of the pages matching a free-form query."""
        data = self.query(queries.search_query(query, self.search_results))
        return titles_of(data, "search")

    def geosearch(self, latitude: float, longitude: float, radius: int) -> list[str]:
        """Titles of the pages within `radius` meters of a point."""
        params = queries.geosearch_query(latitude, longitude, radius, self.search_results)
        return titles_of(self.query(params), "geosearch")

    def random_count(self, count: int) -> list[str]:
        return titles_of(self.query(queries.random_query(count)), "random")

    def random(self) -> Optional[str]:
        return next(iter(self.random_count(1)), None)

    def get_languages(self) -> list[tuple[str, str]]:
        """
        Languages known to the site as (code, name) pairs,
        e.g. [("en", "English"), ("es", "español")].
        """
        return languages_of(self.query(queries.languages_query()))

    def page_from_title(self, title: str) -> Page:
        return Page.from_title(self, title)

    def page_from_pageid(self, pageid: str) -> Page:
        return Page.from_pageid(self, pageid)
