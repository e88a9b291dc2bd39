"""Session state and the application context shared by key handlers."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .navigator import Navigator

if TYPE_CHECKING:
    from ..settings import Settings
    from ..store import Store


@dataclass
class UIState:
    """UI session state for a single dashboard run."""

    # Pages shown, in order (one entry per successful render)
    page_history: list[str] = field(default_factory=list)

    # Rows rendered on the last page shown
    last_row_count: int = 0

    # Set when a fatal error ends the session
    fatal_error: str | None = None

    def add_to_history(self, page: str) -> None:
        """Record a page visit in session history.

        Args:
            page: Page identifier that was shown
        """
        self.page_history.append(page)


@dataclass
class AppContext:
    """Everything the navigation handlers need, built once at startup."""

    settings: Settings
    store: Store
    nav: Navigator = field(default_factory=Navigator)
    state: UIState = field(default_factory=UIState)
