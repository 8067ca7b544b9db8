"""
popindex command-line front end.

Thin presentation layer over popindex_core: argument parsing, colored
output, human-readable sizes and dates.
"""

from .cli import cli, main

__all__ = ["cli", "main"]
