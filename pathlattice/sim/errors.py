"""Errors raised when the search core is driven out of order."""

from __future__ import annotations


class InvalidSearchState(RuntimeError):
    """Raised when a command does not fit the current search state."""
