"""
Errors raised by the account and client services.
"""


class SubManagerError(Exception):
    """Base class for expected, user-facing failures."""


class ValidationError(SubManagerError):
    """Required input is missing or malformed; nothing was changed."""
