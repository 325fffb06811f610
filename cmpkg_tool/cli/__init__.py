"""Command line interface for cmpkg-tool"""

from .main import cli, main

__all__ = ["cli", "main"]
