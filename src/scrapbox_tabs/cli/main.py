"""
scrapbox-tabs CLI — `scrapbox-tabs` command.

Commands:
  scrapbox-tabs auth login       Save a connect.sid cookie
  scrapbox-tabs auth status      Show whether a cookie is saved
  scrapbox-tabs pages PROJECT    List a project's pages
"""

import asyncio
import json
import logging
from pathlib import Path
from typing import Optional

try:
    import click
    from rich.console import Console
    from rich.logging import RichHandler
except ImportError:
    raise SystemExit("CLI requires extras: pip install scrapbox-tabs[cli]")

import httpx

from scrapbox_tabs import __version__
from scrapbox_tabs.client import AsyncScrapboxTabs
from scrapbox_tabs.host import StaticCookieHost
from scrapbox_tabs.transport.http import DEFAULT_BASE_URL

CONFIG_FILE = Path.home() / ".scrapbox-tabs" / "config.json"


def _load_config() -> dict:
    try:
        return json.loads(CONFIG_FILE.read_text())
    except (FileNotFoundError, json.JSONDecodeError):
        return {}


def _save_config(cfg: dict) -> None:
    CONFIG_FILE.parent.mkdir(parents=True, exist_ok=True)
    CONFIG_FILE.write_text(json.dumps(cfg, indent=2))


def _get_client(transport: Optional[httpx.AsyncBaseTransport] = None) -> AsyncScrapboxTabs:
    cfg = _load_config()
    base_url = cfg.get("base_url", DEFAULT_BASE_URL)
    host = StaticCookieHost(cookies=cfg.get("cookies") or {}, origin=base_url)
    return AsyncScrapboxTabs(host, base_url=base_url, transport=transport)


def _run(coro):
    return asyncio.run(coro)


@click.group()
@click.version_option(__version__)
@click.option("-v", "--verbose", is_flag=True, help="Debug logging")
def main(verbose: bool):
    """scrapbox-tabs CLI — browse Scrapbox projects with a saved login."""
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            format="%(message)s",
            handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        )


# Register subcommands from separate modules
from scrapbox_tabs.cli.auth import auth
from scrapbox_tabs.cli.pages import pages_cmd

main.add_command(auth)
main.add_command(pages_cmd)


if __name__ == "__main__":
    main()
