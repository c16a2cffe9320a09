# wikiclient/utils.py
from __future__ import annotations

import logging
from typing import NoReturn, Optional

import typer
from rich import print
from rich.logging import RichHandler
from rich.markup import escape
from rich.panel import Panel

from wikiclient.errors import WikiError
from wikiclient.http import HttpClient
from wikiclient.wikipedia import Wikipedia


def setup_logging(verbose: bool = False) -> None:
    """
    Route library logs through rich. The library itself never installs
    handlers, so this is only called by the command line front-end.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )


def make_wikipedia(lang: str, token: Optional[str] = None) -> Wikipedia:
    return Wikipedia(client=HttpClient(token=token), language=lang)


def fail(exc: WikiError) -> NoReturn:
    """Report a library error the way every command does, then exit 1."""
    print(Panel.fit(f"[bold red]{type(exc).__name__}:[/bold red] {escape(str(exc))}"))
    raise typer.Exit(code=1)
