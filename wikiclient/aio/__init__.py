# wikiclient/aio/__init__.py
from __future__ import annotations
from wikiclient.aio.http import AsyncHttpClient
from wikiclient.aio.pagination import AsyncContinuationIterator
from wikiclient.aio.wikipedia import AsyncPage, AsyncWikipedia

__all__ = ["AsyncHttpClient", "AsyncContinuationIterator", "AsyncPage", "AsyncWikipedia"]
