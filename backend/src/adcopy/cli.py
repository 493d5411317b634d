"""Click CLI entry point.

Usage:
    adcopy scrape https://www.example.de/de/produkte
    adcopy scrape https://example.dk --no-cache --signals
    adcopy usage 203.0.113.7
    adcopy serve --port 8000
"""

from __future__ import annotations

import asyncio
import json

import click

from adcopy.utils.logging import BOLD, DIM, GREEN, RESET, YELLOW, get_logger

log = get_logger()


@click.group()
def cli() -> None:
    """Landing page scraping and ad copy generation CLI."""
    pass


@cli.command()
@click.argument("url")
@click.option("--no-cache", is_flag=True, help="Skip the scrape cache and fetch live")
@click.option("--signals", is_flag=True, help="Print every language signal considered")
def scrape(url: str, no_cache: bool, signals: bool) -> None:
    """Scrape page metadata and resolve the page language."""
    asyncio.run(_scrape(url, no_cache, signals))


async def _scrape(url: str, no_cache: bool, show_signals: bool) -> None:
    from adcopy.pipeline import AcquisitionPipeline

    pipeline = AcquisitionPipeline()
    page = await (pipeline.scrape(url) if no_cache else pipeline.acquire(url))

    source = f"{DIM}(cached){RESET}" if page.cached else f"{DIM}(live){RESET}"
    click.echo(f"\n{BOLD}{page.language}{RESET} [{page.detected_code or '—'}] {source}\n")
    if page.error:
        click.echo(f"  {YELLOW}Scrape failed:{RESET} {page.error}\n")

    for label, value in (
        ("Title", page.title),
        ("Site name", page.site_name),
        ("Description", page.meta_description),
        ("H1", page.h1),
    ):
        click.echo(f"  {label:<12} {value or '—'}")

    if show_signals and page.signals:
        from adcopy.text.language import LanguageResolver

        click.echo(f"\n  {BOLD}Signals{RESET}")
        click.echo(json.dumps(page.signals.model_dump(), indent=2, ensure_ascii=False))
        click.echo(f"\n  {BOLD}Precedence{RESET}")
        for i, candidate in enumerate(LanguageResolver().candidates(page.signals), 1):
            marker = f"{GREEN}▸{RESET}" if i == 1 else " "
            click.echo(f"  {marker} {candidate.source:<16} {candidate.code}")
    click.echo("")


@cli.command()
@click.argument("identity")
def usage(identity: str) -> None:
    """Show how many free generations a client has used."""
    asyncio.run(_usage(identity))


async def _usage(identity: str) -> None:
    from adcopy.gate import RateGate
    from adcopy.store import CounterStore

    gate = RateGate(CounterStore())
    count = await gate.usage(identity)
    if count is None:
        click.echo("Error: usage store not configured or unreachable")
        raise SystemExit(1)
    click.echo(f"{identity}: {count}/{gate.limit} free generations used")


@cli.command()
@click.option("--host", default="127.0.0.1", help="Bind address")
@click.option("--port", default=8000, help="Bind port")
@click.option("--reload", is_flag=True, help="Auto-reload on code changes")
def serve(host: str, port: int, reload: bool) -> None:
    """Run the HTTP API with uvicorn."""
    import uvicorn

    log.info(f"{BOLD}adcopy API{RESET} on http://{host}:{port}")
    uvicorn.run("adcopy.main:app", host=host, port=port, reload=reload)


if __name__ == "__main__":
    cli()
