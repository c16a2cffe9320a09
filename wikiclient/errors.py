# wikiclient/errors.py
from __future__ import annotations


class WikiError(Exception):
    """Base class for every error raised by wikiclient."""


class TransportError(WikiError):
    """
    The HTTP round trip failed: connection problem, timeout,
    or a non-success status code.
    """

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class MalformedResponse(WikiError):
    """The response body is not valid JSON."""


class JSONPathError(WikiError):
    """An expected key or shape is missing from the response tree."""

    def __init__(self, path: str) -> None:
        super().__init__(f"missing or malformed JSON at {path!r}")
        self.path = path


class InvalidParameter(WikiError):
    def __init__(self, name: str, value: object) -> None:
        super().__init__(f"invalid value for {name}: {value!r}")
        self.name = name
        self.value = value


class TooManyRedirects(WikiError):
    """The redirect chain did not settle within the hop limit."""

    def __init__(self, chain: list[str], message: str | None = None) -> None:
        super().__init__(
            message or f"gave up after {len(chain)} redirects: {' -> '.join(chain)}"
        )
        self.chain = chain


class RedirectCycle(TooManyRedirects):
    def __init__(self, chain: list[str]) -> None:
        super().__init__(chain, f"redirect cycle: {' -> '.join(chain)}")
