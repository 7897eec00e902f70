"""
Fake implementations for testing.

Fakes are simplified working implementations that behave like real
components but avoid external dependencies.

Key fakes:
- FakeCommandRunner: Command execution without subprocess
"""

from tests.fakes.command_runner import FakeCommandRunner, ConfiguredResult

__all__ = [
    "FakeCommandRunner",
    "ConfiguredResult",
]
