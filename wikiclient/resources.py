# wikiclient/resources.py
from __future__ import annotations

from typing import Any, Generic, Protocol, TypeVar

from wikiclient.datatypes import (
    Category,
    Image,
    LangLink,
    Link,
    PageIdentifier,
    Reference,
)
from wikiclient.errors import JSONPathError
from wikiclient.queries import Params, api_params
from wikiclient.responses import pages_of

T = TypeVar("T")


class ResultSizes(Protocol):
    """The per-request page sizes a Wikipedia client is configured with."""

    images_results: str
    links_results: str
    categories_results: str


class Resource(Generic[T]):
    """
    One paginated collection attached to a page.

    A resource knows which parameters select it, where its raw elements
    live in a response, and how to turn one raw element into an item.
    The buffering and continuation handling live in the iterators.
    """

    name: str = ""
    field: str = ""
    item_type: Any = None

    def fixed_params(self, sizes: ResultSizes) -> tuple[tuple[str, str], ...]:
        raise NotImplementedError

    def params(self, sizes: ResultSizes, identifier: PageIdentifier) -> Params:
        return [*api_params(*self.fixed_params(sizes)), identifier.query_param()]

    def items(self, data: dict, first: bool = False) -> list[Any]:
        """
        Raw elements of one page of results.
        A response without query.pages means the page does not exist, which
        only counts as an error on the first fetch; later it is an empty page.
        """
        try:
            pages = pages_of(data)
        except JSONPathError:
            if first:
                raise
            return []
        return self.select(pages)

    def select(self, pages: list[Any]) -> list[Any]:
        if not pages or not isinstance(pages[0], dict):
            return []
        elements = pages[0].get(self.field)
        return list(elements) if isinstance(elements, list) else []

    def extract(self, value: Any) -> T | None:
        return self.item_type.from_value(value)

    def __repr__(self) -> str:
        return f"<Resource {self.name}>"


class ImageResource(Resource[Image]):
    name = "images"
    item_type = Image

    def fixed_params(self, sizes):
        return (
            ("generator", "images"),
            ("gimlimit", sizes.images_results),
            ("prop", "imageinfo"),
            ("iiprop", "url"),
        )

    def select(self, pages):
        # generator=images: every page in the result is one image
        return pages


class ReferenceResource(Resource[Reference]):
    name = "references"
    field = "extlinks"
    item_type = Reference

    def fixed_params(self, sizes):
        return (("prop", "extlinks"), ("ellimit", sizes.links_results))


class LinkResource(Resource[Link]):
    name = "links"
    field = "links"
    item_type = Link

    def fixed_params(self, sizes):
        return (("prop", "links"), ("plnamespace", "0"), ("pllimit", sizes.links_results))


class LangLinkResource(Resource[LangLink]):
    name = "langlinks"
    field = "langlinks"
    item_type = LangLink

    def fixed_params(self, sizes):
        return (("prop", "langlinks"), ("lllimit", sizes.links_results))


class CategoryResource(Resource[Category]):
    name = "categories"
    field = "categories"
    item_type = Category

    def fixed_params(self, sizes):
        return (("prop", "categories"), ("cllimit", sizes.categories_results))


IMAGES = ImageResource()
REFERENCES = ReferenceResource()
LINKS = LinkResource()
LANGLINKS = LangLinkResource()
CATEGORIES = CategoryResource()
