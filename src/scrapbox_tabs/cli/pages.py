"""CLI: scrapbox-tabs pages PROJECT"""

import asyncio
import json
from datetime import datetime
from typing import Optional

import click
from rich.console import Console
from rich.table import Table

from scrapbox_tabs.errors import RemoteRejected, ScrapboxTabsError
from scrapbox_tabs.models.page import Page
from scrapbox_tabs.pages import DEFAULT_LIMIT, DEFAULT_SKIP, DEFAULT_SORT, SORT_KEYS

console = Console()


def _get_client():
    from scrapbox_tabs.cli.main import _get_client
    return _get_client()


def _run(coro):
    from scrapbox_tabs.cli.main import _run
    return _run(coro)


def _when(ts: Optional[int]) -> str:
    return datetime.fromtimestamp(ts).strftime("%Y-%m-%d %H:%M") if ts else ""


@click.command("pages")
@click.argument("project")
@click.option("--skip", default=DEFAULT_SKIP, type=int)
@click.option("--limit", default=DEFAULT_LIMIT, type=int)
@click.option("--sort", default=DEFAULT_SORT, type=click.Choice(sorted(SORT_KEYS)))
@click.option("--all", "fetch_all", is_flag=True, help="Follow pagination to the last page")
@click.option("--timeout", default=None, type=float, help="Give up after this many seconds")
@click.option("--json-output", "--json", is_flag=True)
def pages_cmd(project, skip, limit, sort, fetch_all, timeout, json_output):
    """List the pages of a project."""

    async def _list():
        async with _get_client() as client:
            await client.open_session(client.bridge.primary_key, client.project_url(project))
            if fetch_all:
                credentials = await client.harvest()
                pages = [p async for p in client.pages.iter_pages(
                    project, limit=limit, sort=sort, credentials=credentials,
                )]
                return pages, len(pages)
            result = await client.fetch_project_pages(project, skip=skip, limit=limit, sort=sort)
            return result.pages, result.count

    try:
        pages, total = _run(asyncio.wait_for(_list(), timeout))
    except RemoteRejected as e:
        console.print(str(e), style="red", markup=False)
        if not e.authenticated:
            console.print("[dim]Run `scrapbox-tabs auth login` to use a saved cookie.[/dim]")
        raise SystemExit(1)
    except (ScrapboxTabsError, TimeoutError) as e:
        console.print(str(e) or "Timed out", style="red", markup=False)
        raise SystemExit(1)

    if json_output:
        click.echo(json.dumps([p.model_dump(by_alias=True, exclude_none=True) for p in pages], indent=2))
        return
    _print_table(project, pages, total)


def _print_table(project: str, pages: list[Page], total: int) -> None:
    table = Table(title=f"{project} ({total} pages)")
    table.add_column("Title", style="bold")
    table.add_column("Views", justify="right")
    table.add_column("Linked", justify="right")
    table.add_column("Updated")
    for p in pages:
        title = f"📌 {p.title}" if p.is_pinned else p.title
        table.add_row(title, str(p.views or 0), str(p.linked or 0), _when(p.updated))
    console.print(table)
