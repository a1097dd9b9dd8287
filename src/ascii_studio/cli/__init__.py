"""Command-line interface."""

from ascii_studio.cli.app import create_app

__all__ = ["create_app"]
