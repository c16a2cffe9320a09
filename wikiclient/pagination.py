# wikiclient/pagination.py
from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from typing import Any, Generic, Iterator, Protocol, TypeVar

from wikiclient.errors import WikiError
from wikiclient.queries import Params
from wikiclient.resources import Resource
from wikiclient.responses import Continuation, decode, parse_continuation

logger = logging.getLogger(__name__)

T = TypeVar("T")

# sent instead of a continuation on the first request of a sequence
START_MARKER = ("continue", "")


class Executor(Protocol):
    def get(self, base_url: str, params: Params) -> str: ...


@dataclass(frozen=True, slots=True)
class RequestTemplate:
    """
    Everything needed to request one more page of a resource, captured once
    when the iterator is built: the API URL and the resource's fixed
    parameters, identifier included.
    """

    base_url: str
    params: tuple[tuple[str, str], ...]

    def params_for(self, continuation: Continuation | None) -> Params:
        """
        Fixed parameters plus either the start marker (first request) or the
        server's continuation pairs, verbatim. A continuation key that
        collides with a fixed one replaces it, so no key is sent twice.
        """
        if continuation is None:
            return [*self.params, START_MARKER]
        merged = dict(self.params)
        merged.update(continuation)
        return list(merged.items())


class ContinuationIterator(Generic[T]):
    """
    Forward-only iterator over every item of a paginated resource.

    The first page is fetched when the iterator is created, and errors from
    that request propagate. Later pages are fetched one request at a time,
    only once the buffered items run out. A failing follow-up request ends
    the iteration instead of raising. An exhausted iterator stays exhausted.

    Not safe to advance from several threads at once.
    """

    def __init__(self, client: Executor, template: RequestTemplate, resource: Resource[T]) -> None:
        self._client = client
        self._template = template
        self._resource = resource
        data = self._fetch(None)
        self._buffer: deque[Any] = deque(resource.items(data, first=True))
        self._continuation = parse_continuation(data)

    @property
    def resource(self) -> Resource[T]:
        return self._resource

    def _fetch(self, continuation: Continuation | None) -> dict:
        params = self._template.params_for(continuation)
        logger.debug("Fetching %s page: %s", self._resource.name, params)
        return decode(self._client.get(self._template.base_url, params))

    def _refill(self) -> None:
        try:
            data = self._fetch(self._continuation)
            items = self._resource.items(data)
            continuation = parse_continuation(data)
        except WikiError as exc:
            logger.warning("Stopping %s iteration early: %s", self._resource.name, exc)
            self._buffer.clear()
            self._continuation = None
            return
        self._buffer = deque(items)
        self._continuation = continuation

    def __iter__(self) -> Iterator[T]:
        return self

    def __next__(self) -> T:
        while True:
            while self._buffer:
                item = self._resource.extract(self._buffer.popleft())
                if item is not None:
                    return item
            if self._continuation is None:
                raise StopIteration
            self._refill()
