"""Rendering helpers shared by the dashboard and the CLI."""
from __future__ import annotations

from collections.abc import Iterable, Sequence
from typing import TYPE_CHECKING

from rich.table import Table
from rich.text import Text

from ..models import DeviceRecord, WorkerRecord

if TYPE_CHECKING:
    from textual.widgets import DataTable


HEADER_STYLE = "yellow"
MENU_STYLE = "green"

WORKER_COLUMNS = ("ID", "Name", "Type")
DEVICE_COLUMNS = ("ID", "Host", "Name")

MENU_TEXT = "(a) Show Worker List\n(b) Show Device List\n(q) Quit"


def _worker_cells(w: WorkerRecord) -> tuple[str, str, str]:
    return str(w.id), w.name, w.type


def _device_cells(d: DeviceRecord) -> tuple[str, str, str]:
    return str(d.id), d.host, d.name


def _fill_grid(
    table: DataTable,
    columns: Sequence[str],
    rows: Iterable[tuple[str, ...]],
) -> int:
    """Clear the grid and write a styled header plus one row per entry."""
    table.clear(columns=True)
    table.add_columns(*(Text(col, style=HEADER_STYLE) for col in columns))
    n = 0
    for row in rows:
        table.add_row(*row)
        n += 1
    return n


def render_workers(table: DataTable, workers: Sequence[WorkerRecord]) -> int:
    """Redraw ``table`` with the worker list. Returns rows written."""
    return _fill_grid(table, WORKER_COLUMNS, (_worker_cells(w) for w in workers))


def render_devices(table: DataTable, devices: Sequence[DeviceRecord]) -> int:
    """Redraw ``table`` with the device list. Returns rows written."""
    return _fill_grid(table, DEVICE_COLUMNS, (_device_cells(d) for d in devices))


def _rich_table(title: str, columns: Sequence[str], rows: Iterable[tuple[str, ...]]) -> Table:
    table = Table(title=f"[bold]{title}[/bold]", header_style=HEADER_STYLE)
    for col in columns:
        table.add_column(col, justify="right" if col == "ID" else "left")
    for row in rows:
        table.add_row(*row)
    return table


def workers_table(workers: Sequence[WorkerRecord]) -> Table:
    return _rich_table("Workers", WORKER_COLUMNS, (_worker_cells(w) for w in workers))


def devices_table(devices: Sequence[DeviceRecord]) -> Table:
    return _rich_table("Devices", DEVICE_COLUMNS, (_device_cells(d) for d in devices))


def stats_table(stats: dict[str, str | int], title: str = "Stats") -> Table:
    """Two-column statistics table.

    Args:
        stats: Statistics to display
        title: Table title
    """
    table = Table(title=f"[bold]{title}[/bold]", show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", style="cyan", justify="right")

    for key, value in stats.items():
        if isinstance(value, int):
            table.add_row(key, f"{value:,}")
        else:
            table.add_row(key, str(value))

    return table
