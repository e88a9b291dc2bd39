"""Terminal dashboard for the workers and devices buckets.

Importing this package registers the key commands with the router.
"""
from . import commands  # noqa: F401
from .app import DashboardApp, run_tui
from .navigator import Navigator
from .router import Router
from .state import AppContext, UIState

__all__ = ["AppContext", "DashboardApp", "Navigator", "Router", "UIState", "run_tui"]
