# wikiclient/cli/page.py
from __future__ import annotations

import json
from dataclasses import asdict, fields
from itertools import islice
from typing import Any, Iterable, Optional

import typer
from rich import print
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from wikiclient import config
from wikiclient.errors import WikiError
from wikiclient.page import Page
from wikiclient.utils import fail, make_wikipedia

page_app = typer.Typer(add_completion=False, no_args_is_help=True)

TargetArgument = typer.Argument(..., help="Page title (or page id with --id)")
ByIdOption = typer.Option(False, "--id", help="Treat the argument as a page id")
LangOption = typer.Option(config.DEFAULT_LANGUAGE, "--lang", help="Language code, e.g., en, ko, es")
TokenOption = typer.Option(
    None, "--token", envvar=config.TOKEN_ENV_VAR, help="Bearer token sent with every request"
)
LimitOption = typer.Option(50, "--limit", help="Stop after N items (0 = no limit)")
JsonOption = typer.Option(False, "--json", help="Emit JSON instead of table")


def _page(target: str, by_id: bool, lang: str, token: Optional[str]) -> Page:
    wiki = make_wikipedia(lang, token)
    return wiki.page_from_pageid(target) if by_id else wiki.page_from_title(target)


def _show_text(heading: str, text: Optional[str], json_out: bool) -> None:
    if json_out:
        typer.echo(json.dumps({"page": heading, "text": text}, indent=2, ensure_ascii=False))
    elif text is None:
        print(Panel.fit(f"[bold yellow]Nothing found for:[/bold yellow] {escape(heading)}"))
    else:
        print(Panel(Text(text), title=escape(heading)))


def _show_items(heading: str, items: Iterable[Any], limit: int, json_out: bool) -> None:
    """
    Drain (at most `limit` items of) a collection iterator into a table.
    Later pages are only requested as the table fills up.
    """
    rows = list(islice(items, limit) if limit > 0 else items)
    if json_out:
        typer.echo(json.dumps([asdict(row) for row in rows], indent=2, ensure_ascii=False))
        return

    if not rows:
        print(Panel.fit(f"[bold yellow]No {heading}[/bold yellow]"))
        return

    table = Table(title=f"{heading} ({len(rows)})")
    table.add_column("#", justify="right", style="bold")
    names = [f.name for f in fields(rows[0])]
    for name in names:
        table.add_column(name, overflow="fold")
    for i, row in enumerate(rows, start=1):
        table.add_row(str(i), *[escape(str(getattr(row, name) or "")) for name in names])
    print(table)


@page_app.command()
def summary(
    target: str = TargetArgument,
    by_id: bool = ByIdOption,
    lang: str = LangOption,
    token: Optional[str] = TokenOption,
    json_out: bool = JsonOption,
) -> None:
    """
    Show the introduction of a page (redirects are followed).
    """
    try:
        text = _page(target, by_id, lang, token).get_summary()
    except WikiError as exc:
        fail(exc)
    _show_text(target, text, json_out)


@page_app.command()
def content(
    target: str = TargetArgument,
    by_id: bool = ByIdOption,
    lang: str = LangOption,
    token: Optional[str] = TokenOption,
    json_out: bool = JsonOption,
) -> None:
    """
    Show the full plain-text content of a page.
    """
    try:
        text = _page(target, by_id, lang, token).get_content()
    except WikiError as exc:
        fail(exc)
    _show_text(target, text, json_out)


@page_app.command()
def html(
    target: str = TargetArgument,
    by_id: bool = ByIdOption,
    lang: str = LangOption,
    token: Optional[str] = TokenOption,
) -> None:
    """
    Print the rendered HTML of the latest revision.
    """
    try:
        text = _page(target, by_id, lang, token).get_html_content()
    except WikiError as exc:
        fail(exc)
    typer.echo(text)


@page_app.command()
def coords(
    target: str = TargetArgument,
    by_id: bool = ByIdOption,
    lang: str = LangOption,
    token: Optional[str] = TokenOption,
    json_out: bool = JsonOption,
) -> None:
    """
    Show the coordinates of a page, if it has any.
    """
    try:
        found = _page(target, by_id, lang, token).get_coordinates()
    except WikiError as exc:
        fail(exc)

    if json_out:
        typer.echo(json.dumps(found._asdict() if found else None))
    elif found is None:
        print(Panel.fit(f"[bold yellow]No coordinates for:[/bold yellow] {escape(target)}"))
    else:
        print(f"[bold]{escape(target)}[/bold]: {found.lat}, {found.lon}")


@page_app.command()
def sections(
    target: str = TargetArgument,
    by_id: bool = ByIdOption,
    lang: str = LangOption,
    token: Optional[str] = TokenOption,
    json_out: bool = JsonOption,
) -> None:
    """
    List the section headings of a page.
    """
    try:
        headings = _page(target, by_id, lang, token).get_sections()
    except WikiError as exc:
        fail(exc)

    if json_out:
        typer.echo(json.dumps(headings, indent=2, ensure_ascii=False))
        return
    table = Table(title=f"Sections of {target}")
    table.add_column("#", justify="right", style="bold")
    table.add_column("Heading")
    for i, heading in enumerate(headings, start=1):
        table.add_row(str(i), escape(heading))
    print(table)


@page_app.command()
def section(
    target: str = TargetArgument,
    heading: str = typer.Argument(..., help="Section heading, e.g. History"),
    by_id: bool = ByIdOption,
    lang: str = LangOption,
    token: Optional[str] = TokenOption,
    json_out: bool = JsonOption,
) -> None:
    """
    Show the text of one section of a page.
    """
    try:
        text = _page(target, by_id, lang, token).get_section_content(heading)
    except WikiError as exc:
        fail(exc)
    _show_text(f"{target} > {heading}", text, json_out)


@page_app.command()
def images(
    target: str = TargetArgument,
    by_id: bool = ByIdOption,
    lang: str = LangOption,
    token: Optional[str] = TokenOption,
    limit: int = LimitOption,
    json_out: bool = JsonOption,
) -> None:
    """
    List the images used on a page.
    """
    try:
        _show_items("images", _page(target, by_id, lang, token).get_images(), limit, json_out)
    except WikiError as exc:
        fail(exc)


@page_app.command()
def links(
    target: str = TargetArgument,
    by_id: bool = ByIdOption,
    lang: str = LangOption,
    token: Optional[str] = TokenOption,
    limit: int = LimitOption,
    json_out: bool = JsonOption,
) -> None:
    """
    List the article links on a page.
    """
    try:
        _show_items("links", _page(target, by_id, lang, token).get_links(), limit, json_out)
    except WikiError as exc:
        fail(exc)


@page_app.command()
def categories(
    target: str = TargetArgument,
    by_id: bool = ByIdOption,
    lang: str = LangOption,
    token: Optional[str] = TokenOption,
    limit: int = LimitOption,
    json_out: bool = JsonOption,
) -> None:
    """
    List the categories a page belongs to.
    """
    try:
        _show_items(
            "categories", _page(target, by_id, lang, token).get_categories(), limit, json_out
        )
    except WikiError as exc:
        fail(exc)


@page_app.command()
def references(
    target: str = TargetArgument,
    by_id: bool = ByIdOption,
    lang: str = LangOption,
    token: Optional[str] = TokenOption,
    limit: int = LimitOption,
    json_out: bool = JsonOption,
) -> None:
    """
    List the external links cited by a page.
    """
    try:
        _show_items(
            "references", _page(target, by_id, lang, token).get_references(), limit, json_out
        )
    except WikiError as exc:
        fail(exc)


@page_app.command()
def langlinks(
    target: str = TargetArgument,
    by_id: bool = ByIdOption,
    lang: str = LangOption,
    token: Optional[str] = TokenOption,
    limit: int = LimitOption,
    json_out: bool = JsonOption,
) -> None:
    """
    List the same page in other languages.
    """
    try:
        _show_items(
            "language links", _page(target, by_id, lang, token).get_langlinks(), limit, json_out
        )
    except WikiError as exc:
        fail(exc)
