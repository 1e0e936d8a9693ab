import os
import re
from pathlib import Path
from typing import Callable, List, Optional, Union

from .errors import BinaryNotFoundError
from .runner import CommandRunner, default_runner

DNF = "dnf"

# Same naming convention as the pip3 wrappers: pip3, pip3.9, pip3.10.2 ...
DNF_FILE_RE = re.compile(r"^pip3(\.\d\d?)?\.?(\.\d\d?)?$")


def looks_like_dnf(name: str) -> bool:
    """Return True if the given filename looks like a dnf executable."""
    return DNF_FILE_RE.match(name) is not None


def execs_in_path(directory: Union[str, Path], predicate: Callable[[str], bool]) -> List[str]:
    """
    List executable regular files in ``directory`` accepted by ``predicate``.

    Entries are returned as full paths, sorted by filename.
    OSError from reading the directory is propagated.
    """
    directory = Path(directory)
    out: List[str] = []
    for entry in sorted(directory.iterdir(), key=lambda p: p.name):
        if not entry.is_file() or not os.access(entry, os.X_OK):
            continue
        if predicate(entry.name):
            out.append(str(entry))
    return out


def detect_binary(runner: Optional[CommandRunner] = None) -> str:
    """Find the dnf binary on the search path."""
    runner = runner or default_runner()
    path = runner.look_path(DNF)
    if not path:
        raise BinaryNotFoundError(f"executable file '{DNF}' not found in $PATH")
    return path


def binary_from(directory: Union[str, Path]) -> str:
    """Return the first dnf-looking executable in ``directory``."""
    execs = execs_in_path(directory, looks_like_dnf)
    if not execs:
        raise BinaryNotFoundError("No dnf found.")
    return execs[0]
