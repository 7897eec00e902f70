from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from .config import program_name


class ExecAttributes(BaseModel):
    """User-settable attributes of a batch executive object.

    echo: log captured command stdout at info level
    fatal: escalate operational failures as fatal instead of warning
    prefix: label written into generated headers
    retry: maximum execution attempts per command (at least 1)
    """

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    echo: bool = False
    fatal: bool = True
    prefix: str = Field(default_factory=program_name)
    retry: int = Field(default=1, ge=1, strict=True)


ATTRIBUTE_NAMES: frozenset[str] = frozenset(ExecAttributes.model_fields)
