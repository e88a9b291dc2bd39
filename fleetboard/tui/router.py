"""Key command registry and dispatch for the dashboard."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Protocol

if TYPE_CHECKING:
    from textual.widgets import DataTable

    from .state import AppContext

logger = logging.getLogger(__name__)


class PageHost(Protocol):
    """Owner of the page widgets (the running app, or a test double)."""

    def table(self, page: str) -> DataTable: ...


class Router:
    """Dispatches single-key commands to registered handlers.

    Handlers return a page ID to show, "exit" to end the session, or None
    to leave the screen as it is. The router applies the result to the
    navigator and session state; the host app makes the page visible.
    """

    def __init__(self, ctx: AppContext, host: PageHost):
        """Initialize router with dependencies.

        Args:
            ctx: Application context (settings, store, navigator, state)
            host: Provides the grid widget for each page
        """
        self.ctx = ctx
        self.host = host

    def dispatch(self, key: str | None) -> str | None:
        """Run the handler bound to ``key``.

        Unbound keys (and any key after the session stopped) are ignored.
        Store and decode errors from the handler propagate unchanged.
        """
        if self.ctx.nav.stopped or not key:
            return None

        handler = COMMANDS.get(key)
        if handler is None:
            logger.debug("ignored key %r", key)
            return None

        logger.debug("dispatch key %r -> %s", key, handler.__name__)
        result = handler(self)

        if result == "exit":
            self.ctx.nav.stop()
        elif result:
            self.ctx.nav.show(result)
            self.ctx.state.add_to_history(result)
        return result


# Command registry - maps keys (case-sensitive) to handler functions
COMMANDS: dict[str, Callable[[Router], str | None]] = {}


def register_command(key: str):
    """Decorator to bind a handler to a single key.

    Usage:
        @register_command("a")
        def show_workers(router: Router) -> str | None:
            ...
    """
    def decorator(fn: Callable[[Router], str | None]):
        COMMANDS[key] = fn
        return fn
    return decorator
