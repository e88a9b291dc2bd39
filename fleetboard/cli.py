from __future__ import annotations

import logging
from enum import Enum

import typer
from rich.console import Console
from rich.panel import Panel

from .logging import setup_logging
from .models import RecordDecodeError
from .repositories import fetch_devices, fetch_workers
from .seed import seed_store
from .settings import Settings, load_settings
from .store import Store, StoreError
from .tui.components import devices_table, stats_table, workers_table

logger = logging.getLogger(__name__)

app = typer.Typer(
    add_completion=False,
    help="fleetboard: worker and device dashboard",
    rich_markup_mode="rich",
)
console = Console()
err_console = Console(stderr=True)


class Namespace(str, Enum):
    workers = "workers"
    devices = "devices"


# ═══════════════════════════════════════════════════════════════════════════════
# HELPERS
# ═══════════════════════════════════════════════════════════════════════════════

def _fatal(exc: Exception) -> typer.Exit:
    """Log (with traceback) and print a one-line diagnostic; the caller raises the result.

    Only called from `except` blocks.
    """
    logger.exception("fatal: %s", exc)
    err_console.print(f"[bold red]fleetboard:[/bold red] {exc}", highlight=False)
    return typer.Exit(code=1)


def _open_store(settings: Settings) -> Store:
    try:
        return Store.open(settings.FLEETBOARD_DB_PATH)
    except StoreError as exc:
        raise _fatal(exc) from exc


def _launch_dashboard() -> None:
    """Seed the store and run the full-screen dashboard."""
    from .tui import AppContext, run_tui

    settings = load_settings()
    setup_logging(settings)

    with _open_store(settings) as store:
        try:
            seed_store(store)
        except StoreError as exc:
            raise _fatal(exc) from exc

        ctx = AppContext(settings=settings, store=store)
        code = run_tui(ctx)

    if code != 0:
        err_console.print(
            f"[bold red]fleetboard:[/bold red] {ctx.state.fatal_error or 'aborted'}",
            highlight=False,
        )
        raise typer.Exit(code=code)


# ═══════════════════════════════════════════════════════════════════════════════
# MAIN CALLBACK
# ═══════════════════════════════════════════════════════════════════════════════

@app.callback(invoke_without_command=True)
def _root(ctx: typer.Context):
    """
    [bold]fleetboard[/bold]: worker and device lists in a terminal dashboard.

    [dim]Run without arguments to launch the dashboard.[/dim]

    [bold]Keys:[/bold]
      a   Show the worker list
      b   Show the device list
      q   Quit
    """
    if ctx.invoked_subcommand is None:
        _launch_dashboard()
        raise typer.Exit(code=0)


# ═══════════════════════════════════════════════════════════════════════════════
# COMMANDS
# ═══════════════════════════════════════════════════════════════════════════════

@app.command("tui", help="Launch the interactive dashboard")
def tui():
    _launch_dashboard()


@app.command("seed", help="Write the placeholder workers and devices")
def seed():
    settings = load_settings()
    setup_logging(settings)

    with _open_store(settings) as store:
        try:
            written = seed_store(store)
        except StoreError as exc:
            raise _fatal(exc) from exc

    for name, n in written.items():
        console.print(f"[green]✓[/green] {name}: {n} rows written")


@app.command("list", help="Print the workers or devices bucket as a table")
def list_records(
    namespace: Namespace = typer.Argument(..., help="Bucket to list"),
):
    settings = load_settings()
    setup_logging(settings)

    with _open_store(settings) as store:
        try:
            if namespace is Namespace.workers:
                table = workers_table(fetch_workers(store))
            else:
                table = devices_table(fetch_devices(store))
        except (StoreError, RecordDecodeError) as exc:
            raise _fatal(exc) from exc

    console.print(table)


@app.command("status", help="Show configuration and bucket row counts")
def status():
    """Show configuration and per-bucket row counts."""
    s = load_settings()
    setup_logging(s)

    console.print(Panel.fit(
        "\n".join([
            f"[bold]Database:[/bold]   {s.FLEETBOARD_DB_PATH}",
            f"[bold]Log dir:[/bold]    {s.FLEETBOARD_LOG_DIR}",
            f"[bold]Log level:[/bold]  {s.FLEETBOARD_LOG_LEVEL}",
        ]),
        title="[bold]Configuration[/bold]",
    ))

    # Opening would create the file; status must not write anything.
    if not s.FLEETBOARD_DB_PATH.exists():
        console.print("[yellow]Store is empty.[/yellow] Run [cyan]fleetboard seed[/cyan] first.")
        return

    with _open_store(s) as store:
        try:
            with store.view() as tx:
                counts: dict[str, str | int] = {}
                for name in tx.bucket_names():
                    bucket = tx.bucket(name)
                    counts[name] = bucket.count() if bucket is not None else 0
        except StoreError as exc:
            raise _fatal(exc) from exc

    if not counts:
        console.print("[yellow]Store is empty.[/yellow] Run [cyan]fleetboard seed[/cyan] first.")
        return
    console.print(stats_table(counts, title="Buckets"))


def main():
    app()
