"""CLI: scrapbox-tabs auth login|status|logout"""

from typing import Optional

import click
from rich.console import Console

from scrapbox_tabs.transport.http import DEFAULT_BASE_URL

console = Console()

SESSION_COOKIE = "connect.sid"


def _load_config() -> dict:
    from scrapbox_tabs.cli.main import _load_config
    return _load_config()


def _save_config(cfg: dict) -> None:
    from scrapbox_tabs.cli.main import _save_config
    _save_config(cfg)


@click.group()
def auth():
    """Authentication commands."""


@auth.command("login")
@click.option("--base-url", default=None, help="Scrapbox base URL")
def auth_login(base_url: Optional[str]):
    """Save the connect.sid cookie of a logged-in browser."""
    cfg = _load_config()
    url = base_url or cfg.get("base_url", DEFAULT_BASE_URL)
    console.print(f"[dim]Copy the {SESSION_COOKIE} cookie from a browser logged in to {url}[/dim]")
    sid = click.prompt(SESSION_COOKIE, hide_input=True).strip()
    if not sid:
        console.print("[red]Empty cookie, nothing saved.[/red]")
        raise SystemExit(1)
    _save_config({**cfg, "base_url": url, "cookies": {SESSION_COOKIE: sid}})
    console.print("[green]Cookie saved.[/green]")


@auth.command("status")
def auth_status():
    """Show current auth status."""
    cfg = _load_config()
    cookies = cfg.get("cookies") or {}
    url = cfg.get("base_url", DEFAULT_BASE_URL)
    if cookies:
        names = ", ".join(sorted(cookies))
        console.print(f"[green]Authenticated[/green] for {url} ({names})")
    else:
        console.print("[yellow]No cookie saved. Run `scrapbox-tabs auth login`.[/yellow]")


@auth.command("logout")
def auth_logout():
    """Clear saved credentials."""
    cfg = _load_config()
    cfg.pop("cookies", None)
    _save_config(cfg)
    console.print("[green]Logged out.[/green]")
