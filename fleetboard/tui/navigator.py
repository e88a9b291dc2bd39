"""Page state for the dashboard: nothing shown, workers, or devices."""
from __future__ import annotations


class Navigator:
    """Tracks which page is visible and whether the session has ended.

    States:
    - None: no page shown (startup)
    - "workers" / "devices": that page is shown
    - stopped: terminal state, nothing further is rendered
    """

    HOME_LABEL = "Home"

    # Page ID to human-readable label mapping
    PAGE_LABELS = {
        "workers": "Worker List",
        "devices": "Device List",
    }

    def __init__(self):
        self.page: str | None = None
        self.stopped = False

    def show(self, page: str) -> None:
        if page not in self.PAGE_LABELS:
            raise ValueError(f"unknown page: {page!r}")
        if self.stopped:
            return
        self.page = page

    def stop(self) -> None:
        self.stopped = True

    def current(self) -> str | None:
        return self.page

    def breadcrumbs(self) -> str:
        """Breadcrumb string like "Home > Worker List"."""
        if self.page is None:
            return self.HOME_LABEL
        return f"{self.HOME_LABEL} > {self.PAGE_LABELS[self.page]}"
