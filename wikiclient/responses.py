# wikiclient/responses.py
from __future__ import annotations

import json
from typing import Any

from wikiclient.errors import JSONPathError, MalformedResponse

Continuation = tuple[tuple[str, str], ...]


def decode(body: str) -> dict:
    """
    Parse a response body into a JSON tree.
    The API always answers with an object at the top level.
    """
    try:
        data = json.loads(body)
    except ValueError as exc:
        raise MalformedResponse(f"response is not valid JSON: {exc}") from exc
    if not isinstance(data, dict):
        raise MalformedResponse(
            f"expected a JSON object, got {type(data).__name__}"
        )
    return data


def _query(data: dict) -> dict:
    query = data.get("query")
    if not isinstance(query, dict):
        raise JSONPathError("query")
    return query


def _pages_container(data: dict) -> dict | list:
    pages = _query(data).get("pages")
    if not isinstance(pages, (dict, list)):
        raise JSONPathError("query.pages")
    return pages


def find_redirect(data: dict) -> str | None:
    """
    Return the title the first entry of query.redirects points to, if any.
    Only the first entry is consulted; longer chains are followed
    one round trip at a time by the caller.
    """
    query = data.get("query")
    if not isinstance(query, dict):
        return None
    redirects = query.get("redirects")
    if not isinstance(redirects, list) or not redirects:
        return None
    first = redirects[0]
    if not isinstance(first, dict):
        return None
    target = first.get("to")
    return target if isinstance(target, str) else None


def pages_of(data: dict) -> list[Any]:
    """
    query.pages as a list of page objects.
    Accepts both wire forms: an object keyed by page id (formatversion=1)
    and a plain array (formatversion=2).
    """
    pages = _pages_container(data)
    if isinstance(pages, dict):
        return list(pages.values())
    return list(pages)


def first_page(data: dict) -> dict:
    """
    The first page object of query.pages.
    Single-title queries get exactly one entry back; with several entries
    the result follows the order of the wire JSON, which is not guaranteed.
    """
    pages = pages_of(data)
    if not pages or not isinstance(pages[0], dict):
        raise JSONPathError("query.pages[0]")
    return pages[0]


def first_page_id(data: dict) -> str:
    """First key of query.pages (same ordering caveat as first_page)."""
    pages = _pages_container(data)
    if isinstance(pages, dict):
        for key in pages:
            return key
        raise JSONPathError("query.pages[0]")
    page = first_page(data)
    pageid = page.get("pageid")
    if pageid is None or isinstance(pageid, (dict, list)):
        raise JSONPathError("query.pages[0].pageid")
    return str(pageid)


def page_field(data: dict, *path: str | int) -> Any:
    """
    Walk `path` (object keys and array indexes) starting at the first page.

        page_field(data, "revisions", 0, "*")
    """
    node: Any = first_page(data)
    walked = "query.pages[0]"
    for step in path:
        walked += f"[{step}]" if isinstance(step, int) else f".{step}"
        if isinstance(step, int):
            if not isinstance(node, list) or len(node) <= step:
                raise JSONPathError(walked)
        elif not isinstance(node, dict) or step not in node:
            raise JSONPathError(walked)
        node = node[step]
    return node


def titles_of(data: dict, field: str) -> list[str]:
    """Titles out of query.<field>[], skipping entries without one."""
    entries = _query(data).get(field)
    if not isinstance(entries, list):
        raise JSONPathError(f"query.{field}")
    return [
        entry["title"]
        for entry in entries
        if isinstance(entry, dict) and isinstance(entry.get("title"), str)
    ]


def _stringify(key: str, value: Any) -> str:
    # bool before int/float: bool is a subclass of int
    if isinstance(value, bool):
        return "1" if value else "0"
    if isinstance(value, str):
        return value
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return str(int(value)) if value.is_integer() else repr(value)
    raise JSONPathError(f"continue.{key}")


def parse_continuation(data: dict) -> Continuation | None:
    """
    The top-level `continue` object as ordered (key, value) string pairs,
    or None when the server reports no further pages.
    Its keys are defined by the server and are sent back verbatim.
    """
    cont = data.get("continue")
    if not isinstance(cont, dict):
        return None
    return tuple((key, _stringify(key, value)) for key, value in cont.items())


def languages_of(data: dict) -> list[tuple[str, str]]:
    """(code, name) pairs out of a meta=siteinfo&siprop=languages response."""
    entries = _query(data).get("languages")
    if not isinstance(entries, list):
        raise JSONPathError("query.languages")
    languages = []
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        code, name = entry.get("code"), entry.get("*")
        if isinstance(code, str) and isinstance(name, str):
            languages.append((code, name))
    return languages


def sections_of(data: dict) -> list[str]:
    """Section headings out of an action=parse&prop=sections response."""
    parse = data.get("parse")
    sections = parse.get("sections") if isinstance(parse, dict) else None
    if not isinstance(sections, list):
        raise JSONPathError("parse.sections")
    return [
        section["line"]
        for section in sections
        if isinstance(section, dict) and isinstance(section.get("line"), str)
    ]
