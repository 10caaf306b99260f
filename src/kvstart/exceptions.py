"""Exception hierarchy for kvstart."""

from __future__ import annotations


class KvstartError(Exception):
    """Base exception for all kvstart errors.

    Attributes:
        message: Human-readable error message
        exit_code: Suggested exit code for CLI (default 1)
    """

    def __init__(self, message: str, exit_code: int = 1):
        self.message = message
        self.exit_code = exit_code
        super().__init__(message)


class ConfigError(KvstartError):
    """Configuration-related errors (member file, defaults file)."""

    pass


class ValidationError(KvstartError):
    """Input validation errors (CLI flags, names, timeouts)."""

    pass


class TemplateError(KvstartError):
    """Script fragment failed to substitute (malformed fragment text)."""

    pass
