"""Core utilities and configuration.

Re-exports convenience types from submodules for nicer imports if desired.
"""

from .attributes import ATTRIBUTE_NAMES, ExecAttributes  # noqa: F401
from .command_runner import CommandResult, CommandRunner  # noqa: F401
from .config import BatchSettings, get_settings  # noqa: F401
from .errors import BatchError, FatalError, UnknownAttributeError, UsageError  # noqa: F401
