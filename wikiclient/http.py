# wikiclient/http.py
from __future__ import annotations

import logging
from typing import Optional

import requests

from wikiclient import config
from wikiclient.errors import TransportError
from wikiclient.queries import Params

logger = logging.getLogger(__name__)


def build_headers(user_agent: str, token: Optional[str] = None) -> dict[str, str]:
    """
    Request headers for the API.
    Wikimedia asks every client to identify itself with a descriptive UA.
    """
    headers = {
        "User-Agent": user_agent,
        "Accept": "application/json",
    }
    if token:
        headers["Authorization"] = f"Bearer {token}"
    return headers


class HttpClient:
    """
    Default query executor: one blocking GET per call on a shared
    requests.Session, returning the response body as text.
    """

    def __init__(
        self,
        user_agent: str = config.DEFAULT_UA,
        token: Optional[str] = None,
        timeout: float = config.DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.user_agent = user_agent
        self.token = token
        self.timeout = timeout
        self.session = session or requests.Session()

    def get(self, base_url: str, params: Params) -> str:
        logger.debug("GET %s %s", base_url, params)
        try:
            resp = self.session.get(
                base_url,
                params=params,
                headers=build_headers(self.user_agent, self.token),
                timeout=self.timeout,
            )
            resp.raise_for_status()
        except requests.HTTPError as exc:
            status = exc.response.status_code if exc.response is not None else None
            raise TransportError(f"GET {base_url} failed: {exc}", status_code=status) from exc
        except requests.RequestException as exc:
            raise TransportError(f"GET {base_url} failed: {exc}") from exc
        return resp.text

    def close(self) -> None:
        self.session.close()
