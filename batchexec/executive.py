"""Batch executive object.

Wraps the chores every batch script repeats (run a command and check it,
remove a file and make sure it is gone, stamp a generated file) behind one
object whose attributes decide how loud it is and how failures are treated.

Every operational failure goes through :meth:`BatchExec.cough`, which either
raises :class:`FatalError` or logs a warning and lets the script carry on,
depending on the ``fatal`` attribute.
"""

from __future__ import annotations

import itertools
import logging
import os
import re
import shutil
import sys
import time
from enum import IntEnum
from pathlib import Path
from typing import Any, Iterable, MutableSequence, Optional, Protocol, TextIO

from pydantic import ValidationError

from .core.attributes import ATTRIBUTE_NAMES, ExecAttributes
from .core.command_runner import CommandResult, CommandRunner
from .core.config import BatchSettings, get_settings
from .core.errors import FatalError, UnknownAttributeError, UsageError

_ids = itertools.count(1)

_NEWLINES = re.compile(r"\n+")


class Outcome(IntEnum):
    """Return value of operations that did not raise."""

    OK = 0
    WARNED = 1


class Runner(Protocol):
    def run(self, command: str) -> CommandResult: ...


def split_output(stdout: str) -> list[str]:
    """Split captured stdout into lines, collapsing runs of newlines.

    Blank lines disappear: ``"a\\nb\\n\\nc"`` gives ``["a", "b", "c"]``.
    Trailing empty fragments are dropped; a leading one is kept.
    """
    lines = _NEWLINES.split(stdout)
    while lines and lines[-1] == "":
        lines.pop()
    return lines


def _attribute(name: str, doc: str) -> property:
    return property(
        lambda self: self.get(name),
        lambda self, value: self.set(name, value),
        doc=doc,
    )


class BatchExec:
    """Batch executive: command execution, deletion and headers.

    Attributes can be given at construction either as ordered
    ``(name, value)`` pairs or as keywords; pairs are applied first, in
    order, so a later pair overrides an earlier one with the same name.

    Example:
        bx = BatchExec(("retry", 3), echo=True)
        lines = []
        bx.execute("ls", "-1", "/tmp", output=lines)
    """

    echo = _attribute("echo", "Log captured command stdout at info level.")
    fatal = _attribute("fatal", "Raise on operational failures instead of warning.")
    prefix = _attribute("prefix", "Program label written into generated headers.")
    retry = _attribute("retry", "Maximum attempts per command.")

    def __init__(
        self,
        *pairs: tuple[str, Any],
        logger: Optional[logging.Logger] = None,
        runner: Optional[Runner] = None,
        settings: Optional[BatchSettings] = None,
        **overrides: Any,
    ):
        settings = settings or get_settings()

        self._log = logger or logging.getLogger(__name__)
        self._runner = runner or CommandRunner(timeout=settings.timeout)
        self._id = next(_ids)
        self._start_dir = Path.cwd()
        self._attrs = ExecAttributes(
            echo=settings.echo,
            fatal=settings.fatal,
            prefix=settings.prefix,
            retry=settings.retry,
        )

        for pair in pairs:
            if not isinstance(pair, tuple) or len(pair) != 2:
                raise UsageError(f"SYNTAX {type(self).__name__}((name, value), ...) got [{pair!r}]")

        for name, value in itertools.chain(pairs, overrides.items()):
            if value is None:
                raise UsageError(
                    f"SYNTAX {type(self).__name__}({name}=value) value not specified",
                    data={"attribute": name},
                )
            self._log.debug(f"attribute [{name}] value [{value!r}]")
            self.set(name, value)

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, Any]], **kwargs: Any) -> "BatchExec":
        """Build an instance from an ordered sequence of (name, value) pairs."""
        return cls(*pairs, **kwargs)

    def __repr__(self) -> str:
        attrs = ", ".join(f"{k}={v!r}" for k, v in self.attributes().items())
        return f"{type(self).__name__}(id={self._id}, {attrs})"

    @property
    def id(self) -> int:
        return self._id

    @property
    def start_dir(self) -> Path:
        """Working directory at the time the object was created."""
        return self._start_dir

    @property
    def log(self) -> logging.Logger:
        return self._log

    # ---- attribute access ----

    def _check_name(self, name: str) -> None:
        if name not in ATTRIBUTE_NAMES:
            raise UnknownAttributeError(
                f"no attribute [{name}] in class [{type(self).__name__}]",
                data={"attribute": name},
            )

    def get(self, name: str) -> Any:
        self._check_name(name)
        return getattr(self._attrs, name)

    def set(self, name: str, value: Any) -> Any:
        """Store ``value`` under ``name`` and return the stored value."""
        self._check_name(name)
        try:
            setattr(self._attrs, name, value)
        except ValidationError as e:
            raise UsageError(
                f"invalid value [{value!r}] for attribute [{name}]",
                data={"attribute": name, "errors": e.errors()},
            ) from e
        return getattr(self._attrs, name)

    def attributes(self) -> dict[str, Any]:
        return self._attrs.model_dump()

    # ---- error policy ----

    def cough(self, message: str) -> Outcome:
        """Report an operational failure.

        Raises FatalError when ``fatal`` is set, otherwise logs a warning
        and returns ``Outcome.WARNED``.
        """
        if self.fatal:
            self._log.critical(f"FATAL {message}")
            raise FatalError(message)

        self._log.warning(f"WARNING {message}")
        return Outcome.WARNED

    # ---- operations ----

    def execute(
        self,
        *parts: Any,
        retry: Optional[int] = None,
        output: Optional[MutableSequence[str]] = None,
    ) -> Outcome:
        """
        Run a shell command, retrying until it succeeds.

        Args:
            parts: Command words, joined with single spaces
            retry: Attempts for this call only (defaults to the retry attribute)
            output: Optional list that receives captured stdout lines

        Returns:
            Outcome.OK, or the result of cough() if every attempt failed
        """
        command = " ".join(str(part) for part in parts)

        self._log.info(f"about to execute [{command}]")

        attempts = self.retry if retry is None else retry
        if isinstance(attempts, bool) or not isinstance(attempts, int) or attempts < 1:
            raise UsageError(f"SYNTAX execute(retry=N) needs N >= 1, got [{attempts!r}]")

        self._log.debug(f"retry [{attempts}] command [{command}]")

        result: Optional[CommandResult] = None
        for attempt in range(attempts):
            self._log.debug(f"attempt [{attempt}]")
            result = self._runner.run(command)
            if result.success:
                break

        self._log.info("command output:")

        for line in split_output(result.stdout):
            if self.echo:
                self._log.info(f"stdout: {line}")

            if output is not None:
                output.append(line)

        if not result.success:
            return self.cough(f"command [{command}] failed after {attempts} retries")

        return Outcome.OK

    def rmdir(self, path: str | os.PathLike) -> Outcome:
        """Remove a directory tree.

        Anything that is not a real directory (a file, a symlink, even one
        pointing at a directory) is handed to delete() instead.
        """
        if path is None:
            raise UsageError("SYNTAX: rmdir(path)")

        if os.path.islink(path) or not os.path.isdir(path):
            return self.delete(path)

        if not sys.is_finalizing():
            self._log.info(f"removing directory [{path}]")

        try:
            shutil.rmtree(path)
        except OSError as e:
            self.cough(f"rmtree({path}) failed: {e}")

        if os.path.isdir(path):
            return self.cough(f"could not remove directory [{path}]")

        return Outcome.OK

    def delete(self, path: str | os.PathLike) -> Outcome:
        """Remove a file or symlink, or a directory via rmdir()."""
        if path is None:
            raise UsageError("SYNTAX: delete(path)")

        if os.path.islink(path):
            self._unlink(path, "link")
        elif os.path.isdir(path):
            return self.rmdir(path)
        elif os.path.isfile(path):
            self._unlink(path, "file")

        if os.path.islink(path) or os.path.isfile(path):
            return self.cough(f"could not remove file [{path}]")

        return Outcome.OK

    def _unlink(self, path: str | os.PathLike, kind: str) -> None:
        # logging may already be torn down at interpreter exit
        if not sys.is_finalizing():
            self._log.info(f"removing {kind} [{path}]")

        try:
            os.unlink(path)
        except OSError as e:
            self.cough(f"unlink({path}) failed: {e}")

    def header(self, stream: TextIO) -> None:
        """Write a generated-by banner and a timestamp line to an open stream."""
        if (
            stream is None
            or not callable(getattr(stream, "write", None))
            or getattr(stream, "closed", False)
        ):
            raise UsageError("SYNTAX: header(stream) needs an open file handle")

        writable = getattr(stream, "writable", None)
        if callable(writable) and not writable():
            raise UsageError("SYNTAX: header(stream) needs a writable file handle")

        stream.write(f"# ---- automatically generated by {self.prefix} ----\n")
        stream.write(f"# ---- timestamp {time.ctime()} ---- \n")
