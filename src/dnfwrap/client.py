from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, TextIO

from .errors import ArgumentError, BinaryNotFoundError
from .locator import detect_binary
from .runner import CommandRunner, default_runner, format_argv
from .logger import setup_logger

_logger = setup_logger()

PACKAGE_NAME_NOT_SPECIFIED = "packageName was not specified."


@dataclass(frozen=True)
class Package:
    """A package reported by dnf. Only ``name`` is filled in today."""

    name: str
    version: str = ""
    path: str = ""


@dataclass
class Options:
    """Per-command settings, each one toggles a single dnf flag."""

    verbose: bool = False
    dry_run: bool = False
    output: Optional[TextIO] = None
    not_assume_yes: bool = False
    destdir: str = ""


def process_options(opt: Optional[Options]) -> List[str]:
    """Return the command-line flags to be passed to dnf for ``opt``."""
    opt = opt or Options()
    args: List[str] = []
    if opt.dry_run:
        args += ["--setopt", "tsflags=test"]
    if opt.verbose:
        args.append("--verbose")
    if not opt.not_assume_yes:
        args.append("--assumeyes")
    if opt.destdir:
        args += ["--destdir", opt.destdir]
    return args


def parse_deplist(output: str) -> List[Package]:
    """
    Parse ``dnf repoquery --deplist`` output into the list of providers.

    Parsing stops at the first blank line: dnf prints one block per
    available version of the package and only the first one is kept.
    """
    dependencies: List[Package] = []
    for line in output.split("\n"):
        trimmed = line.strip()
        if not trimmed:
            return dependencies
        if trimmed.startswith("provider:"):
            parts = trimmed.split(": ")
            if len(parts) == 2:
                dependencies.append(Package(name=parts[1]))
    return dependencies


def _no_output(_: str) -> None:
    return None


def _require_name(operation: str, package_name: str) -> None:
    if not package_name or not package_name.strip():
        raise ArgumentError(f"{operation}: {PACKAGE_NAME_NOT_SPECIFIED}")


class Dnf:
    """
    DNF client.

    An empty ``binary_path`` means "find dnf on $PATH"; a non-empty one is
    used as given, without checking that it exists.
    """

    def __init__(self, binary_path: str = "", runner: Optional[CommandRunner] = None) -> None:
        self._runner = runner or default_runner()
        if not binary_path:
            binary_path = detect_binary(self._runner)
        self._binary_path = str(binary_path)

    @property
    def binary_path(self) -> str:
        return self._binary_path

    def __repr__(self) -> str:
        return f"Dnf(binary_path={self._binary_path!r})"

    # -----
    # Operations
    # -----
    def install(self, package_name: str, opt: Optional[Options] = None) -> None:
        """Install a package by name."""
        _require_name("Install", package_name)
        self._run(["install", package_name], _no_output, opt)

    def update(self, package_name: str = "", opt: Optional[Options] = None) -> None:
        """Update a package; with no name, update every package on the system."""
        if not package_name or not package_name.strip():
            args = ["update"]
        else:
            args = ["update", package_name]
        self._run(args, _no_output, opt)

    def remove(self, package_name: str, opt: Optional[Options] = None) -> None:
        _require_name("Remove", package_name)
        self._run(["remove", package_name], _no_output, opt)

    def search(self, package_name: str, opt: Optional[Options] = None) -> None:
        _require_name("Search", package_name)
        self._run(["search", package_name], _no_output, opt)

    def list(self, opt: Optional[Options] = None) -> None:
        """List installed packages."""
        self._run(["list", "installed"], _no_output, opt)

    def depends(self, package_name: str, opt: Optional[Options] = None) -> List[Package]:
        """Return the providers of every dependency of ``package_name``."""
        _require_name("Depends", package_name)
        return self._run(["repoquery", "--deplist", package_name], parse_deplist, opt)

    # -----
    # Execution
    # -----
    def _run(self, arguments: Sequence[str], parser: Callable[[str], object], opt: Optional[Options]):
        opt = opt or Options()
        argv = [self._binary_path, *arguments, *process_options(opt)]
        _logger.debug("Running: %s", format_argv(argv))
        stdout = self._runner.run(argv, output=opt.output)
        return parser(stdout)


def new(binary_path: str = "", runner: Optional[CommandRunner] = None) -> Optional[Dnf]:
    """Build a client, or return None when dnf cannot be detected."""
    try:
        return Dnf(binary_path, runner=runner)
    except BinaryNotFoundError as e:
        _logger.debug("dnf not available: %s", e)
        return None
