from typing import Optional, Sequence


class DnfError(Exception):
    """Base class for every error raised by dnfwrap."""


class ArgumentError(DnfError, ValueError):
    """A required argument (usually the package name) is missing."""


class BinaryNotFoundError(DnfError, FileNotFoundError):
    """No dnf executable could be located."""


class CommandError(DnfError, RuntimeError):
    """The dnf process could not be spawned or exited with a non-zero status."""

    def __init__(
        self,
        message: str,
        argv: Sequence[str] = (),
        returncode: Optional[int] = None,
        stderr: str = "",
    ) -> None:
        super().__init__(message)
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
