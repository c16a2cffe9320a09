# wikiclient/queries.py
from __future__ import annotations

from wikiclient import config
from wikiclient.datatypes import PageIdentifier
from wikiclient.errors import InvalidParameter

Params = list[tuple[str, str]]

# Operation-specific parameters of the single-page queries
CONTENT = (("prop", "extracts|revisions"), ("explaintext", ""), ("rvprop", "ids"))
HTML_CONTENT = (
    ("prop", "revisions"),
    ("rvprop", "content"),
    ("rvlimit", "1"),
    ("rvparse", ""),
)
SUMMARY = (("prop", "extracts"), ("explaintext", ""), ("exintro", ""))
INFO = (("prop", "info|pageprops"), ("inprop", "url"), ("ppprop", "disambiguation"))
COORDINATES = (("prop", "coordinates"), ("colimit", "max"))


def api_params(*params: tuple[str, str], action: str = "query") -> Params:
    return [*params, ("format", "json"), ("action", action)]


def page_query(
    operation: tuple[tuple[str, str], ...], identifier: PageIdentifier
) -> Params:
    """
    Parameters for one single-page query.
    Always asks the server to resolve redirects so the response reports them.
    """
    return [
        *api_params(*operation, ("redirects", "")),
        identifier.query_param(),
    ]


def sections_query(pageid: str) -> Params:
    return [("prop", "sections"), ("format", "json"), ("action", "parse"), ("pageid", pageid)]


def search_query(query: str, limit: int) -> Params:
    return api_params(
        ("list", "search"),
        ("srprop", ""),
        ("srlimit", str(limit)),
        ("srsearch", query),
    )


def geosearch_query(latitude: float, longitude: float, radius: int, limit: int) -> Params:
    """
    Validate the coordinates and radius (meters) before building the query.
    Raises InvalidParameter naming the first out-of-range argument.
    """
    if not -90.0 <= latitude <= 90.0:
        raise InvalidParameter("latitude", latitude)
    if not -180.0 <= longitude <= 180.0:
        raise InvalidParameter("longitude", longitude)
    if not config.GEOSEARCH_MIN_RADIUS <= radius <= config.GEOSEARCH_MAX_RADIUS:
        raise InvalidParameter("radius", radius)
    return api_params(
        ("list", "geosearch"),
        ("gsradius", str(radius)),
        ("gscoord", f"{latitude}|{longitude}"),
        ("gslimit", str(limit)),
    )


def random_query(count: int) -> Params:
    return api_params(("list", "random"), ("rnnamespace", "0"), ("rnlimit", str(count)))


def languages_query() -> Params:
    return api_params(("meta", "siteinfo"), ("siprop", "languages"))
