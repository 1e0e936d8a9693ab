"""
Process execution seam used by the dnf client.

The client never calls ``subprocess`` directly; it talks to a
``CommandRunner`` handed to it at construction time. ``SubprocessRunner``
is the real implementation, tests pass their own.
"""

from __future__ import annotations

import codecs
import shutil
import subprocess
import threading
from concurrent.futures import ThreadPoolExecutor
from typing import BinaryIO, List, Optional, Protocol, Sequence, TextIO

from .errors import CommandError
from .logger import setup_logger

_logger = setup_logger()

READ_SIZE = 8192


class CommandRunner(Protocol):
    def look_path(self, name: str) -> Optional[str]: ...

    def run(self, argv: Sequence[str], output: Optional[TextIO] = None) -> str: ...


class SubprocessRunner:
    """Runs commands with ``subprocess`` and resolves names with ``shutil.which``."""

    def look_path(self, name: str) -> Optional[str]:
        return shutil.which(name)

    def run(self, argv: Sequence[str], output: Optional[TextIO] = None) -> str:
        """
        Run ``argv`` to completion and return its stdout.

        When ``output`` is given, stdout and stderr are copied to it as they
        arrive, so prompts and progress show up while dnf is running.
        Without it stderr is discarded.
        """
        argv = [str(a) for a in argv]
        try:
            proc = subprocess.Popen(
                argv,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE if output is not None else subprocess.DEVNULL,
            )
        except OSError as e:
            _logger.error("Could not start %s: %s", argv[0], e)
            raise CommandError(f"failed to start {argv[0]}: {e}", argv) from e

        lock = threading.Lock()
        out_chunks: List[str] = []
        err_chunks: List[str] = []
        with ThreadPoolExecutor(max_workers=2) as pool:
            futures = [pool.submit(_pump, proc.stdout, output, out_chunks, lock)]
            if proc.stderr is not None:
                futures.append(pool.submit(_pump, proc.stderr, output, err_chunks, lock))
            try:
                for future in futures:
                    future.result()
            except Exception:
                proc.kill()
                raise
            finally:
                returncode = proc.wait()

        stdout = "".join(out_chunks)
        if returncode != 0:
            _logger.error("%s exited with status %d", format_argv(argv), returncode)
            raise CommandError(
                f"{argv[0]} exited with status {returncode}",
                argv,
                returncode=returncode,
                stderr="".join(err_chunks),
            )
        return stdout


def _pump(pipe: BinaryIO, output: Optional[TextIO], chunks: List[str], lock: threading.Lock) -> None:
    """Read ``pipe`` until EOF, keeping the text and copying it to ``output``."""
    decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")
    with pipe:
        while True:
            data = pipe.read1(READ_SIZE)
            text = decoder.decode(data, final=not data)
            if text:
                chunks.append(text)
                if output is not None:
                    with lock:
                        output.write(text)
                        output.flush()
            if not data:
                return


def default_runner() -> CommandRunner:
    return SubprocessRunner()


def format_argv(argv: Sequence[str]) -> str:
    return " ".join(str(a) for a in argv)
