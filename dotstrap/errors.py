"""
Exception types used across dotstrap.

Every error is terminal for the run. ``main()`` is the only place that
turns them into a message and an exit code.
"""

from __future__ import annotations

from typing import Sequence


class DotstrapError(Exception):
    """Base class for all dotstrap specific errors."""

    exit_code = 1


class PrivilegeError(DotstrapError):
    """Raised when the process lacks the privileges it needs."""


class ConfigError(DotstrapError):
    """Raised when the provisioning configuration file is invalid."""


class PromptCancelled(DotstrapError):
    """Raised when the user cancels or escapes a dialog."""

    def __init__(self, message: str, answers: Sequence[str] = ()) -> None:
        super().__init__(message)
        self.answers = list(answers)


class ConfigurationRefused(DotstrapError):
    """Raised when the user explicitly refuses the configuration recap."""


class ConfigurationAborted(DotstrapError):
    """Raised when the recap dialog is escaped instead of answered."""


class MalformedRecord(DotstrapError):
    """Raised when the persisted answer record cannot be parsed."""


class DestinationError(DotstrapError):
    """Raised when a clone target exists but is not a directory."""


class CommandError(DotstrapError):
    """Raised when an external command fails."""

    def __init__(self, message: str, *, argv: Sequence[str], returncode: int, stderr: str = "") -> None:
        super().__init__(message)
        self.argv = list(argv)
        self.returncode = returncode
        self.stderr = stderr
