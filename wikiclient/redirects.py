# wikiclient/redirects.py
from __future__ import annotations

import logging

from wikiclient import config
from wikiclient.datatypes import ById, ByTitle, PageIdentifier
from wikiclient.errors import RedirectCycle, TooManyRedirects

logger = logging.getLogger(__name__)


class RedirectTrail:
    """
    Bookkeeping for one redirect resolution.
    Each hop becomes a new ByTitle identifier; the original is left alone.
    """

    def __init__(self, start: PageIdentifier, max_hops: int = config.MAX_REDIRECT_HOPS) -> None:
        self.max_hops = max_hops
        self.chain: list[str] = [
            start.title if isinstance(start, ByTitle) else f"pageid:{start.pageid}"
        ]
        self._seen: set[str] = {start.title} if isinstance(start, ByTitle) else set()

    @property
    def hops(self) -> int:
        return len(self.chain) - 1

    def follow(self, target: str) -> ByTitle:
        if target in self._seen:
            raise RedirectCycle([*self.chain, target])
        if self.hops >= self.max_hops:
            raise TooManyRedirects([*self.chain, target])
        logger.debug("Redirect %s -> %s", self.chain[-1], target)
        self.chain.append(target)
        self._seen.add(target)
        return ByTitle(target)


def pageid_shortcut(identifier: PageIdentifier) -> str | None:
    return identifier.pageid if isinstance(identifier, ById) else None


def title_shortcut(identifier: PageIdentifier) -> str | None:
    return identifier.title if isinstance(identifier, ByTitle) else None
