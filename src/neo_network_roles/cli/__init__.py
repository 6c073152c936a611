"""Command line interface for neo-network-roles."""

from .main import cli, main

__all__ = ["cli", "main"]
