"""Full-screen dashboard: a static menu above two switchable grid pages."""
from __future__ import annotations

import logging

from rich.text import Text
from textual import events
from textual.app import App, ComposeResult
from textual.widgets import ContentSwitcher, DataTable, Static

from ..models import RecordDecodeError
from ..store import StoreError
from .components import MENU_STYLE, MENU_TEXT
from .router import Router
from .state import AppContext

logger = logging.getLogger(__name__)


class DashboardApp(App[None]):
    """Workers/devices dashboard.

    Every keypress goes through the router; the app only owns the widget
    tree and makes the router's chosen page visible. Textual's own key
    actions (command palette, ctrl+q quit) are switched off so that only
    the registered commands change state.
    """

    TITLE = "fleetboard"
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    #crumbs {
        height: 1;
        background: $primary;
    }
    #menu {
        height: 3;
    }
    #margin {
        height: 2;
    }
    #pages {
        height: 1fr;
    }
    """

    def __init__(self, ctx: AppContext):
        super().__init__()
        self.ctx = ctx
        self.router = Router(ctx, self)

    def compose(self) -> ComposeResult:
        yield Static("", id="crumbs")
        yield Static(Text(MENU_TEXT, style=MENU_STYLE), id="menu")
        yield Static("", id="margin")
        # No page is shown until the first command.
        with ContentSwitcher(id="pages"):
            yield DataTable(id="workers")
            yield DataTable(id="devices")

    def on_mount(self) -> None:
        self._show_breadcrumbs()

    def _show_breadcrumbs(self) -> None:
        self.sub_title = self.ctx.nav.breadcrumbs()
        self.query_one("#crumbs", Static).update(f"{self.title} | {self.sub_title}")

    def action_quit(self) -> None:
        """Ignore the built-in ctrl+q binding; `q` quits through the router."""
        logger.debug("ignored built-in quit binding")

    def table(self, page: str) -> DataTable:
        return self.query_one(f"#{page}", DataTable)

    def on_key(self, event: events.Key) -> None:
        try:
            result = self.router.dispatch(event.character)
        except (StoreError, RecordDecodeError) as exc:
            logger.exception("fatal error while handling key %r", event.key)
            self.ctx.state.fatal_error = str(exc)
            self.ctx.nav.stop()
            self.exit(return_code=1)
            return

        if result == "exit":
            self.exit()
        elif result:
            self.query_one("#pages", ContentSwitcher).current = result
            self.table(result).focus()
            self._show_breadcrumbs()


def run_tui(ctx: AppContext) -> int:
    """Run the dashboard until quit or a fatal error. Returns the exit code."""
    app = DashboardApp(ctx)
    app.run(mouse=True)
    return app.return_code or 0
