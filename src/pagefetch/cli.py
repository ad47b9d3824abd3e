"""CLI interface using typer."""

import asyncio
import logging

import typer

from .config import settings
from .core import HttpFetcher, Response
from .errors import FetchError
from .render import show

app = typer.Typer(
    name="pagefetch",
    help="Fetch a single URL over raw HTTP/1.1",
    no_args_is_help=True,
)


async def _fetch(url: str, max_redirects: int) -> Response:
    fetcher = HttpFetcher(
        user_agent=settings.user_agent,
        max_redirects=max_redirects,
        accept_gzip=settings.accept_gzip,
        connect_timeout=settings.connect_timeout,
    )
    return await fetcher.fetch(url)


@app.command()
def fetch(
    url: str = typer.Argument(..., help="URL to fetch (http, https, file, data or view-source:)"),
    raw: bool = typer.Option(False, "-r", "--raw", help="Print status and headers instead of rendering"),
    max_redirects: int = typer.Option(settings.max_redirects, "--max-redirects", help="Maximum requests per fetch"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Show debug logging"),
):
    """Fetch a single URL and print it."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        response = asyncio.run(_fetch(url, max_redirects))
    except FetchError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1)

    if raw:
        typer.echo(str(response))
    else:
        typer.echo(show(response))


@app.command()
def version():
    """Show version."""
    from . import __version__

    typer.echo(f"pagefetch {__version__}")


if __name__ == "__main__":
    app()
