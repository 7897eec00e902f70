"""Batch executive: checked command execution, file removal and logging for batch scripts."""

from .common.logging import setup_logging
from .core import (
    BatchError,
    BatchSettings,
    CommandResult,
    CommandRunner,
    FatalError,
    UnknownAttributeError,
    UsageError,
    get_settings,
)
from .executive import BatchExec, Outcome, split_output

__version__ = "0.1.0"

__all__ = [
    "BatchError",
    "BatchExec",
    "BatchSettings",
    "CommandResult",
    "CommandRunner",
    "FatalError",
    "Outcome",
    "UnknownAttributeError",
    "UsageError",
    "get_settings",
    "setup_logging",
    "split_output",
]
