"""Standardized CLI exit codes for chordnet.

Exit code scheme:

    0  SUCCESS        -- command completed
    1  GENERAL_ERROR  -- unexpected failure, crash, unhandled exception
    2  USAGE_ERROR    -- invalid arguments, bad flags, unknown command (Click default)
    3  INPUT_ERROR    -- input file unreadable, malformed, or empty
"""

from __future__ import annotations

import click

# ---------------------------------------------------------------------------
# Exit code constants
# ---------------------------------------------------------------------------

EXIT_SUCCESS: int = 0
EXIT_ERROR: int = 1
EXIT_USAGE: int = 2
EXIT_INPUT: int = 3

DESCRIPTIONS: dict[int, str] = {
    EXIT_SUCCESS: "success",
    EXIT_ERROR: "unexpected error",
    EXIT_USAGE: "invalid usage (bad arguments or flags)",
    EXIT_INPUT: "invalid input (unreadable, malformed or empty chord data)",
}

# ---------------------------------------------------------------------------
# Custom exceptions (caught by Click's error handler)
# ---------------------------------------------------------------------------


class ChordnetError(click.ClickException):
    """Base class for chordnet errors with exit codes."""

    def __init__(self, message: str, exit_code: int = EXIT_ERROR):
        super().__init__(message)
        self.exit_code = exit_code

    def format_message(self) -> str:
        return self.message


class InputError(ChordnetError):
    """Raised when an input file cannot be turned into a chord graph."""

    def __init__(self, message: str = "Invalid chord input."):
        super().__init__(message, EXIT_INPUT)
