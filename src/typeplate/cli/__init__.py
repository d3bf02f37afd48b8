"""Command-line interface for typeplate.

This module provides the CLI using Typer with rich output for
user-friendly feedback.

Key features:
- All mesh parameters as options
- Mesh export by file suffix
- Quiet output mode
- Detailed error reporting
"""

from typeplate.cli.app import cli, main

__all__ = ["cli", "main"]
