# wikiclient/aio/http.py
from __future__ import annotations

import logging
from typing import Optional

import httpx

from wikiclient import config
from wikiclient.errors import TransportError
from wikiclient.http import build_headers
from wikiclient.queries import Params

logger = logging.getLogger(__name__)


class AsyncHttpClient:
    """
    Async query executor built on httpx.
    Each call opens its own AsyncClient and performs exactly one GET.
    """

    def __init__(
        self,
        user_agent: str = config.DEFAULT_UA,
        token: Optional[str] = None,
        timeout: float = config.DEFAULT_TIMEOUT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.user_agent = user_agent
        self.token = token
        self.timeout = timeout
        self.transport = transport

    async def get(self, base_url: str, params: Params) -> str:
        logger.debug("GET %s %s", base_url, params)
        async with httpx.AsyncClient(
            timeout=self.timeout, follow_redirects=True, transport=self.transport
        ) as client:
            try:
                resp = await client.get(
                    base_url,
                    params=params,
                    headers=build_headers(self.user_agent, self.token),
                )
                resp.raise_for_status()
            except httpx.HTTPStatusError as exc:
                raise TransportError(
                    f"GET {base_url} failed: {exc}",
                    status_code=exc.response.status_code,
                ) from exc
            except httpx.HTTPError as exc:
                raise TransportError(f"GET {base_url} failed: {exc}") from exc
            return resp.text
