# wikiclient/aio/pagination.py
from __future__ import annotations

import logging
from collections import deque
from typing import Any, AsyncIterator, Generic, Protocol, TypeVar

from wikiclient.errors import WikiError
from wikiclient.pagination import RequestTemplate
from wikiclient.queries import Params
from wikiclient.resources import Resource
from wikiclient.responses import Continuation, decode, parse_continuation

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AsyncExecutor(Protocol):
    async def get(self, base_url: str, params: Params) -> str: ...


class AsyncContinuationIterator(Generic[T]):
    """
    Async counterpart of ContinuationIterator, consumed with `async for`.

    Build it with `await AsyncContinuationIterator.create(...)`, which issues
    the first request. Requests stay strictly sequential: a new page is
    awaited only after the buffered items are used up.
    """

    def __init__(self, client: AsyncExecutor, template: RequestTemplate, resource: Resource[T]) -> None:
        self._client = client
        self._template = template
        self._resource = resource
        self._buffer: deque[Any] = deque()
        self._continuation: Continuation | None = None

    @classmethod
    async def create(
        cls, client: AsyncExecutor, template: RequestTemplate, resource: Resource[T]
    ) -> AsyncContinuationIterator[T]:
        iterator = cls(client, template, resource)
        data = await iterator._fetch(None)
        iterator._buffer = deque(resource.items(data, first=True))
        iterator._continuation = parse_continuation(data)
        return iterator

    @property
    def resource(self) -> Resource[T]:
        return self._resource

    async def _fetch(self, continuation: Continuation | None) -> dict:
        params = self._template.params_for(continuation)
        logger.debug("Fetching %s page: %s", self._resource.name, params)
        return decode(await self._client.get(self._template.base_url, params))

    async def _refill(self) -> None:
        try:
            data = await self._fetch(self._continuation)
            items = self._resource.items(data)
            continuation = parse_continuation(data)
        except WikiError as exc:
            logger.warning("Stopping %s iteration early: %s", self._resource.name, exc)
            self._buffer.clear()
            self._continuation = None
            return
        self._buffer = deque(items)
        self._continuation = continuation

    def __aiter__(self) -> AsyncIterator[T]:
        return self

    async def __anext__(self) -> T:
        while True:
            while self._buffer:
                item = self._resource.extract(self._buffer.popleft())
                if item is not None:
                    return item
            if self._continuation is None:
                raise StopAsyncIteration
            await self._refill()
