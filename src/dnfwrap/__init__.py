"""
dnfwrap - A thin Python wrapper around the dnf command-line tool.

Modules:
- client: The Dnf client, command options and output parsing.
- locator: Finding the dnf binary.
- runner: Process execution backend used by the client.
- config: Configuration management.
- cli: Command-line interface entry point.
"""

from .client import Dnf, Options, Package, new, parse_deplist, process_options
from .errors import ArgumentError, BinaryNotFoundError, CommandError, DnfError
from .locator import binary_from, detect_binary

__all__ = [
    "Dnf",
    "Options",
    "Package",
    "new",
    "parse_deplist",
    "process_options",
    "ArgumentError",
    "BinaryNotFoundError",
    "CommandError",
    "DnfError",
    "binary_from",
    "detect_binary",
]
