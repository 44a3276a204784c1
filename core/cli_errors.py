"""Standardized CLI error codes and error handling.

Provides consistent error codes across all assistant commands.
"""
from __future__ import annotations

import json
import sys
from dataclasses import dataclass
from enum import IntEnum
from typing import Optional


class ExitCode(IntEnum):
    """Standard CLI exit codes."""
    SUCCESS = 0
    ERROR = 1
    USAGE = 2
    CONFIG_ERROR = 3
    AUTH_ERROR = 4
    NETWORK_ERROR = 5
    NOT_FOUND = 6
    PERMISSION_DENIED = 7
    INTERRUPTED = 130  # Standard for Ctrl+C


@dataclass
class CLIError(Exception):
    """CLI error with exit code and message."""
    message: str
    code: ExitCode = ExitCode.ERROR
    hint: Optional[str] = None

    def __str__(self) -> str:
        return self.message


class ConfigError(CLIError):
    """Configuration-related error."""
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.CONFIG_ERROR, hint)


class AuthError(CLIError):
    """Authentication-related error."""
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.AUTH_ERROR, hint)


class NetworkError(CLIError):
    """Network-related error."""
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.NETWORK_ERROR, hint)


class NotFoundError(CLIError):
    """Resource not found error."""
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.NOT_FOUND, hint)


class PermissionDeniedError(CLIError):
    """Graph refused the operation for the signed-in account."""
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.PERMISSION_DENIED, hint)


class UsageError(CLIError):
    """Usage/argument error."""
    def __init__(self, message: str, hint: Optional[str] = None):
        super().__init__(message, ExitCode.USAGE, hint)


LOGIN_HINT = "Run `outlook-assistant login` to authenticate."


def handle_error(error: Exception, verbose: bool = False, as_json: bool = False) -> int:
    """Handle an exception and return appropriate exit code.

    Args:
        error: The exception to handle.
        verbose: If True, print stack trace for unexpected errors.
        as_json: If True, write ``{"error": ...}`` to stdout instead of stderr text.

    Returns:
        Exit code to use.
    """
    if isinstance(error, KeyboardInterrupt):
        print("\nInterrupted.", file=sys.stderr)
        return ExitCode.INTERRUPTED

    message = error.message if isinstance(error, CLIError) else str(error)
    hint = error.hint if isinstance(error, CLIError) else None
    code = error.code if isinstance(error, CLIError) else ExitCode.ERROR

    if as_json:
        print(json.dumps({"error": message}, indent=2))
        return code

    print(f"Error: {message}", file=sys.stderr)
    if hint:
        print(f"Hint: {hint}", file=sys.stderr)
    if verbose and not isinstance(error, CLIError):
        import traceback
        traceback.print_exc()
    return code
