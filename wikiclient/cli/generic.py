# wikiclient/cli/generic.py
from __future__ import annotations

import json
from typing import Optional

import typer
from rich import print
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from wikiclient import config
from wikiclient.errors import WikiError
from wikiclient.utils import fail, make_wikipedia, setup_logging

app = typer.Typer(add_completion=False, no_args_is_help=True)

LangOption = typer.Option(config.DEFAULT_LANGUAGE, "--lang", help="Language code, e.g., en, ko, es")
TokenOption = typer.Option(
    None, "--token", envvar=config.TOKEN_ENV_VAR, help="Bearer token sent with every request"
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log every request"),
) -> None:
    """
    Query a MediaWiki site: search it, read pages, walk their collections.
    """
    setup_logging(verbose)


def _print_titles(titles: list[str], heading: str, json_out: bool) -> None:
    if json_out:
        typer.echo(json.dumps(titles, indent=2, ensure_ascii=False))
        return

    if not titles:
        print(Panel.fit(f"[bold red]No results for:[/bold red] {escape(heading)}"))
        return

    table = Table(title=heading)
    table.add_column("#", justify="right", style="bold")
    table.add_column("Title")
    for i, title in enumerate(titles, start=1):
        table.add_row(str(i), escape(title))
    print(table)


@app.command()
def search(
    query: str = typer.Argument(..., help="Free-form query to search for"),
    lang: str = LangOption,
    k: int = typer.Option(config.DEFAULT_SEARCH_RESULTS, "--k", help="Number of results"),
    token: Optional[str] = TokenOption,
    json_out: bool = typer.Option(False, "--json", help="Emit JSON instead of table"),
) -> None:
    """
    Search the site and list matching page titles.
    """
    wiki = make_wikipedia(lang, token)
    wiki.search_results = k
    try:
        titles = wiki.search(query)
    except WikiError as exc:
        fail(exc)
    _print_titles(titles, f"Search results for: {query!r} [{lang}]", json_out)


@app.command()
def geosearch(
    latitude: float = typer.Argument(..., help="Latitude in degrees"),
    longitude: float = typer.Argument(..., help="Longitude in degrees"),
    radius: int = typer.Option(1000, help="Search radius in meters (10..10000)"),
    lang: str = LangOption,
    token: Optional[str] = TokenOption,
    json_out: bool = typer.Option(False, "--json", help="Emit JSON instead of table"),
) -> None:
    """
    List pages located within RADIUS meters of a point.
    """
    wiki = make_wikipedia(lang, token)
    try:
        titles = wiki.geosearch(latitude, longitude, radius)
    except WikiError as exc:
        fail(exc)
    _print_titles(titles, f"Pages near {latitude}, {longitude} ({radius} m)", json_out)


@app.command()
def random(
    count: int = typer.Option(1, "--count", help="How many random pages"),
    lang: str = LangOption,
    token: Optional[str] = TokenOption,
    json_out: bool = typer.Option(False, "--json", help="Emit JSON instead of table"),
) -> None:
    """
    Pick random article titles.
    """
    wiki = make_wikipedia(lang, token)
    try:
        titles = wiki.random_count(count)
    except WikiError as exc:
        fail(exc)
    _print_titles(titles, f"Random pages [{lang}]", json_out)


@app.command()
def languages(
    lang: str = LangOption,
    token: Optional[str] = TokenOption,
    json_out: bool = typer.Option(False, "--json", help="Emit JSON instead of table"),
) -> None:
    """
    List the languages the site knows about.
    """
    wiki = make_wikipedia(lang, token)
    try:
        langs = wiki.get_languages()
    except WikiError as exc:
        fail(exc)

    if json_out:
        typer.echo(json.dumps(dict(langs), indent=2, ensure_ascii=False))
        return

    table = Table(title=f"Languages known to {wiki.base_url}")
    table.add_column("Code", style="bold")
    table.add_column("Name")
    for code, name in langs:
        table.add_row(code, escape(name))
    print(table)
