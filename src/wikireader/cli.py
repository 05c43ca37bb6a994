"""CLI interface for wikireader."""

import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.table import Table

from wikireader import __version__
from wikireader.fetch.urls import build_article_url
from wikireader.fetch.wiki_api import ArticleFetchError, WikiApiClient
from wikireader.model.reader_options import DEFAULT_SITE_ORIGIN, ReaderOptions
from wikireader.navigation.history import NavigationHistory
from wikireader.navigation.store import JsonFileSessionStore
from wikireader.render.templating import render_reader_page
from wikireader.transform.html_transformer import HtmlTransformer

DEFAULT_STORE = Path(".wikireader-session.json")

app = typer.Typer(
    name="wikireader",
    help="Transform encyclopedia article markup into an interactive reading surface.",
    no_args_is_help=True,
)
history_app = typer.Typer(help="Inspect and edit the session navigation history.")
app.add_typer(history_app, name="history")

StoreOption = Annotated[
    Path,
    typer.Option("--store", help="Session store file holding the navigation history"),
]


def _options(site: str) -> ReaderOptions:
    try:
        return ReaderOptions.from_cli(site=site)
    except ValueError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(1) from exc


def _emit(html: str, output: Path | None) -> None:
    if output is None:
        typer.echo(html)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(html, encoding="utf-8")
    typer.echo(f"✅ Wrote {output}")


@app.command()
def render(
    source: Annotated[
        Path,
        typer.Argument(
            help="Path to raw article HTML",
            exists=True,
            file_okay=True,
            dir_okay=False,
            readable=True,
        ),
    ],
    open_table: Annotated[
        list[str] | None,
        typer.Option("--open-table", help="Id of a table to render expanded (repeatable)"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the result here instead of stdout"),
    ] = None,
    standalone: Annotated[
        bool,
        typer.Option("--standalone/--fragment", help="Wrap the markup in a full reading page"),
    ] = False,
    site: Annotated[
        str,
        typer.Option("--site", help="Canonical site origin used to resolve relative URLs"),
    ] = DEFAULT_SITE_ORIGIN,
) -> None:
    """Transform a local article HTML file."""

    options = _options(site)
    document = source.read_text(encoding="utf-8")
    result = HtmlTransformer(options).transform_with_report(document, set(open_table or []))
    html = result.html
    if standalone:
        html = render_reader_page(source.stem, result.html, result.sections)
    _emit(html, output)


@app.command()
def fetch(
    url: Annotated[str, typer.Argument(help="Article URL, e.g. https://en.wikipedia.org/wiki/Cat")],
    output: Annotated[
        Path | None,
        typer.Option("--output", "-o", help="Write the result here instead of stdout"),
    ] = None,
    standalone: Annotated[
        bool,
        typer.Option("--standalone/--fragment", help="Wrap the markup in a full reading page"),
    ] = False,
    store: StoreOption = DEFAULT_STORE,
    site: Annotated[
        str,
        typer.Option("--site", help="Canonical site origin used for API requests"),
    ] = DEFAULT_SITE_ORIGIN,
) -> None:
    """Fetch an article, record the visit and print the transformed markup."""

    options = _options(site)
    console = Console(stderr=True)
    try:
        with console.status(f"Fetching {url}…"):
            article = WikiApiClient(options).fetch_article(url)
    except ArticleFetchError as exc:
        typer.echo(f"Error: {exc}", err=True)
        if exc.title:
            typer.echo(f"View the original: {build_article_url(exc.title, options)}", err=True)
        raise typer.Exit(1) from exc

    NavigationHistory.load(JsonFileSessionStore(store), article.title, key=options.history_key)

    result = HtmlTransformer(options).transform_with_report(article.html_content)
    html = result.html
    if standalone:
        html = render_reader_page(article.title, result.html, result.sections, extract=article.extract)
    _emit(html, output)


@history_app.command("show")
def history_show(store: StoreOption = DEFAULT_STORE) -> None:
    """List the navigation history, oldest first."""

    history = NavigationHistory.restore(JsonFileSessionStore(store))
    if not history.entries:
        typer.echo("No navigation history.")
        return
    table = Table(title="Navigation history")
    table.add_column("#", justify="right")
    table.add_column("Article")
    for idx, title in enumerate(history.entries, start=1):
        marker = " (current)" if idx == len(history) else ""
        table.add_row(str(idx), f"{title}{marker}")
    Console().print(table)


@history_app.command("visit")
def history_visit(
    title: Annotated[str, typer.Argument(help="Article title")],
    store: StoreOption = DEFAULT_STORE,
) -> None:
    """Record a visit, truncating the branch when the title is already present."""

    history = NavigationHistory.restore(JsonFileSessionStore(store))
    history.visit(title)
    typer.echo(" → ".join(history.entries))


@history_app.command("back")
def history_back(store: StoreOption = DEFAULT_STORE) -> None:
    """Step back one article and print its title."""

    history = NavigationHistory.restore(JsonFileSessionStore(store))
    if not history.can_go_back():
        typer.echo("Error: no previous article in history", err=True)
        raise typer.Exit(1)
    typer.echo(history.go_back())


@history_app.command("clear")
def history_clear(store: StoreOption = DEFAULT_STORE) -> None:
    """Forget the navigation history."""

    NavigationHistory.restore(JsonFileSessionStore(store)).clear()
    typer.echo("Navigation history cleared.")


@app.command()
def version() -> None:
    """Show version information."""
    typer.echo(f"wikireader version {__version__}")


def version_callback(value: bool) -> None:
    """Version callback for --version flag."""
    if value:
        typer.echo(f"wikireader version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log transformation and history details"),
    ] = False,
) -> None:
    """
    wikireader - Render encyclopedia articles for a custom reading surface.

    Raw article markup is transformed into markup whose data attributes carry
    all interactive behavior:
    - Internal links tagged with their target article
    - Images wrapped with refresh and zoom affordances
    - Content tables collapsed behind disclosure headers
    - Stable heading anchors for the table of contents

    For detailed usage, run: wikireader render --help
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


if __name__ == "__main__":  # pragma: no cover - executed only via `python -m`
    app()
