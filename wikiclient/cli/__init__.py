# wikiclient/cli/__init__.py
from __future__ import annotations
from wikiclient.cli.generic import app
from wikiclient.cli.page import page_app

app.add_typer(page_app, name="page", help="Read one page and walk its collections")

# Expose the main app only
__all__ = ["app"]
