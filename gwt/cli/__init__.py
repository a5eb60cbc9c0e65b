"""Command-line interface for gwt.

This package provides the CLI entry point and argument parsing.
"""

from .main import main, dispatch
from .args import parse_args

__all__ = ["main", "dispatch", "parse_args"]
