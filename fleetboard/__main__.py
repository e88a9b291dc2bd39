"""Entrypoint for `python -m fleetboard`."""

from .cli import main


if __name__ == "__main__":
    main()
