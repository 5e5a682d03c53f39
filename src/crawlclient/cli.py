"""Command line front end for crawlclient."""

import asyncio
import json
import logging
from dataclasses import asdict
from typing import Annotated, Any, Awaitable, Callable, Optional, TypeVar

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from crawlclient import __version__
from crawlclient.client import CrawlClient
from crawlclient.core.errors import CrawlClientError
from crawlclient.core.models import (
    CrawlOptions,
    CrawlStatus,
    Document,
    MapOptions,
    ScrapeOptions,
    SearchOptions,
)

console = Console()

T = TypeVar("T")


class _State:
    api_key: Optional[str] = None
    api_url: Optional[str] = None
    api_version: str = "v1"


state = _State()


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold]crawlclient[/bold] version {__version__}")
        raise typer.Exit()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _run(operation: Callable[[CrawlClient], Awaitable[T]]) -> T:
    """Run one client operation, turning client errors into exit code 1."""

    async def _main() -> T:
        async with CrawlClient(
            api_key=state.api_key,
            api_url=state.api_url,
            version=state.api_version,
        ) as client:
            return await operation(client)

    try:
        return asyncio.run(_main())
    except CrawlClientError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted.[/yellow]")
        raise typer.Exit(1)


def _to_json(value: Any) -> str:
    return json.dumps(asdict(value), indent=2, default=str)


def _split_csv(values: Optional[list[str]]) -> Optional[list[str]]:
    """Accept both repeated options and comma separated lists."""
    if not values:
        return None
    items = [item.strip() for value in values for item in value.split(",")]
    return [item for item in items if item]


def _document_title(doc: Document) -> str:
    return doc.metadata.title or doc.url or "(untitled)"


def _print_document(doc: Document) -> None:
    console.print(
        Panel(
            f"[bold cyan]URL:[/bold cyan] {doc.url or '-'}\n"
            f"[bold green]Title:[/bold green] {_document_title(doc)}\n"
            f"[bold yellow]Status:[/bold yellow] {doc.metadata.status_code or '-'}",
            title="[bold]scrape[/bold]",
            border_style="blue",
        )
    )
    body = doc.markdown or doc.content or doc.html or ""
    if body:
        console.print(body)


def _documents_table(title: str, documents: list[Document]) -> Table:
    table = Table(
        title=f"{title} ({len(documents)} documents)",
        show_header=True,
        header_style="bold cyan",
    )
    table.add_column("URL", style="cyan")
    table.add_column("Title", style="green")
    table.add_column("Status", style="yellow")

    for doc in documents:
        table.add_row(
            doc.url or "-", _document_title(doc), str(doc.metadata.status_code or "-")
        )
    return table


def _print_crawl(result: CrawlStatus) -> None:
    documents = result.data or []
    console.print()
    console.print(_documents_table(f"[bold]Crawl {result.status}[/bold]", documents))
    console.print(
        f"[dim]credits used: {result.credits_used}, "
        f"expires at: {result.expires_at or '-'}[/dim]"
    )


app = typer.Typer(
    name="crawlclient",
    help="Scrape, crawl and map sites through the hosted crawling API.",
    add_completion=False,
    rich_markup_mode="rich",
    no_args_is_help=True,
)


@app.callback()
def main_options(
    api_key: Annotated[
        Optional[str],
        typer.Option("--api-key", help="API key [default: $FIRECRAWL_API_KEY]"),
    ] = None,
    api_url: Annotated[
        Optional[str],
        typer.Option("--api-url", help="API base URL [default: $FIRECRAWL_API_URL]"),
    ] = None,
    api_version: Annotated[
        str,
        typer.Option("--api-version", help="API version (v1 or v0)"),
    ] = "v1",
    verbose: Annotated[
        bool,
        typer.Option("-v", "--verbose", help="Verbose output"),
    ] = False,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
) -> None:
    """Global options shared by every command."""
    state.api_key = api_key
    state.api_url = api_url
    state.api_version = api_version
    _configure_logging(verbose)


@app.command()
def scrape(
    url: Annotated[str, typer.Argument(help="Page to scrape")],
    formats: Annotated[
        Optional[list[str]],
        typer.Option("-f", "--format", help="Output format (markdown, html, rawHtml, links, screenshot)"),
    ] = None,
    main_only: Annotated[
        Optional[bool],
        typer.Option("--main-only/--full-page", help="Only keep the main content"),
    ] = None,
    as_json: Annotated[
        bool, typer.Option("--json", help="Print the raw result as JSON")
    ] = False,
) -> None:
    """Scrape a single page.

    \b
    Examples:
        crawlclient scrape https://example.com
        crawlclient scrape https://example.com -f markdown -f links --json
    """
    options = ScrapeOptions(formats=_split_csv(formats), only_main_content=main_only)
    doc = _run(lambda client: client.scrape_url(url, options))

    if as_json:
        console.print_json(_to_json(doc))
    else:
        _print_document(doc)


@app.command()
def crawl(
    url: Annotated[str, typer.Argument(help="Site to crawl")],
    limit: Annotated[
        Optional[int], typer.Option("-m", "--limit", help="Maximum pages to crawl")
    ] = None,
    max_depth: Annotated[
        Optional[int], typer.Option("--max-depth", help="Maximum link depth")
    ] = None,
    include: Annotated[
        Optional[list[str]],
        typer.Option("-i", "--include", help="Path patterns to include"),
    ] = None,
    exclude: Annotated[
        Optional[list[str]],
        typer.Option("-e", "--exclude", help="Path patterns to exclude"),
    ] = None,
    poll_interval: Annotated[
        float, typer.Option("--poll-interval", help="Seconds between status checks (min 2)")
    ] = 2.0,
    timeout: Annotated[
        Optional[float],
        typer.Option("--timeout", help="Give up waiting after this many seconds"),
    ] = None,
    idempotency_key: Annotated[
        Optional[str],
        typer.Option("--idempotency-key", help="Deduplicate resubmissions of this job"),
    ] = None,
    wait: Annotated[
        bool, typer.Option("--wait/--no-wait", help="Wait for the crawl to finish")
    ] = True,
    as_json: Annotated[
        bool, typer.Option("--json", help="Print the raw result as JSON")
    ] = False,
) -> None:
    """Crawl a site.

    \b
    Examples:
        crawlclient crawl https://example.com -m 20
        crawlclient crawl https://example.com --no-wait
    """
    options = CrawlOptions(
        limit=limit,
        max_depth=max_depth,
        include_paths=_split_csv(include),
        exclude_paths=_split_csv(exclude),
    )

    if not wait:
        job = _run(lambda client: client.async_crawl_url(url, options, idempotency_key))
        if as_json:
            console.print_json(_to_json(job))
        else:
            console.print(f"[bold green]Started crawl job:[/bold green] {job.id}")
        return

    with console.status(f"Crawling {url}..."):
        result = _run(
            lambda client: client.crawl_url(
                url,
                options,
                idempotency_key=idempotency_key,
                poll_interval=poll_interval,
                timeout=timeout,
            )
        )

    if as_json:
        console.print_json(_to_json(result))
    else:
        _print_crawl(result)


@app.command()
def status(
    job_id: Annotated[str, typer.Argument(help="Crawl job ID")],
) -> None:
    """Show the current status of a crawl job."""
    result = _run(lambda client: client.check_crawl_status(job_id))
    console.print(
        f"[bold]{job_id}[/bold]: {result.status} "
        f"({result.completed}/{result.total} pages)"
    )
    if result.next:
        console.print(f"[dim]more results at {result.next}[/dim]")


@app.command()
def cancel(
    job_id: Annotated[str, typer.Argument(help="Crawl job ID")],
) -> None:
    """Cancel a running crawl job."""
    result = _run(lambda client: client.cancel_crawl(job_id))
    console.print(f"[bold]{job_id}[/bold]: {result}")


@app.command("map")
def map_site(
    url: Annotated[str, typer.Argument(help="Site to map")],
    search: Annotated[
        Optional[str], typer.Option("-s", "--search", help="Only return links matching this term")
    ] = None,
    limit: Annotated[
        Optional[int], typer.Option("-m", "--limit", help="Maximum number of links")
    ] = None,
    subdomains: Annotated[
        Optional[bool],
        typer.Option("--subdomains/--no-subdomains", help="Include subdomains"),
    ] = None,
) -> None:
    """List the links of a site."""
    options = MapOptions(search=search, limit=limit, include_subdomains=subdomains)
    result = _run(lambda client: client.map_url(url, options))
    for link in result.links:
        console.print(link)
    console.print(f"[dim]{len(result.links)} links[/dim]")


@app.command()
def search(
    query: Annotated[str, typer.Argument(help="Search query")],
    limit: Annotated[
        Optional[int], typer.Option("-m", "--limit", help="Maximum number of results")
    ] = None,
    as_json: Annotated[
        bool, typer.Option("--json", help="Print the raw results as JSON")
    ] = False,
) -> None:
    """Search the web and scrape the results (v0 API only).

    \b
    Examples:
        crawlclient --api-version v0 search "web scraping" -m 5
    """
    options = SearchOptions(limit=limit)
    results = _run(lambda client: client.search(query, options))

    if as_json:
        console.print_json(json.dumps([asdict(doc) for doc in results], default=str))
        return
    console.print(_documents_table(f"[bold]Search[/bold] {query!r}", results))


def main() -> None:
    """Entry point: load a .env file, then dispatch."""
    load_dotenv(override=False)
    app()


if __name__ == "__main__":
    main()
