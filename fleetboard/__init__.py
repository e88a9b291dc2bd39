"""fleetboard: terminal dashboard over an embedded key-value store."""

__version__ = "0.1.0"
