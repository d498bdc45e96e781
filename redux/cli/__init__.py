"""Command-line interface for the Redux client."""

from redux.cli.main import cli


__all__ = ["cli"]
