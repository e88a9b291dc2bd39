"""Key handlers for the dashboard menu."""
from __future__ import annotations

from typing import TYPE_CHECKING

from ..repositories import fetch_devices, fetch_workers
from .components import render_devices, render_workers
from .router import register_command

if TYPE_CHECKING:
    from .router import Router


@register_command("a")
def show_workers(router: Router) -> str:
    workers = fetch_workers(router.ctx.store)
    router.ctx.state.last_row_count = render_workers(router.host.table("workers"), workers)
    return "workers"


@register_command("b")
def show_devices(router: Router) -> str:
    devices = fetch_devices(router.ctx.store)
    router.ctx.state.last_row_count = render_devices(router.host.table("devices"), devices)
    return "devices"


@register_command("q")
def quit_app(router: Router) -> str:
    return "exit"
