"""Exception types for the batch executive.

Two tiers:

- ``UsageError`` marks a defect in the calling code (unknown attribute,
  missing argument, bad handle). It is always raised, whatever ``fatal`` says.
- ``FatalError`` is what an operational failure becomes once the error
  policy decides it cannot be tolerated.
"""

from __future__ import annotations

from typing import Any


class BatchError(Exception):
    """Base class for all batch executive errors."""

    def __init__(self, message: str, data: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.data = data

    def __str__(self) -> str:
        return self.message


class UsageError(BatchError):
    pass


class UnknownAttributeError(UsageError, AttributeError):
    pass


class FatalError(BatchError):
    pass
