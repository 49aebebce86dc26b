"""Command line interface for helmet"""

from .main import cli, main

__all__ = ["cli", "main"]
