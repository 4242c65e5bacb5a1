"""
Base exception for user-facing errors.

All expected errors that should be displayed to the user
as clean messages (without stack traces) must inherit from StylefixUserError.

Programming errors and bugs should NOT inherit from StylefixUserError;
they will propagate with full tracebacks.
"""

from __future__ import annotations


class StylefixUserError(Exception):
    """
    Base class for all user-facing errors in stylefix.

    These errors indicate problems that the user can fix:
    configuration issues, unknown rules, missing paths, etc.
    """
    pass


class UnknownRuleError(StylefixUserError):
    """A rule name from configuration or the command line is not registered."""

    def __init__(self, name: str, known: list[str]):
        self.name = name
        self.known = known
        super().__init__(f"Unknown rule '{name}'. Known rules: {', '.join(known) or '(none)'}")


__all__ = ["StylefixUserError", "UnknownRuleError"]
