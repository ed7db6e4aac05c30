"""Errors raised inside the checkVat pipeline.

None of these leave the public entry points; they are turned into
error-shaped ServiceResponse rows.
"""


class ViesError(Exception):
    """Base error for this package."""


class ViesParseError(ViesError):
    """Raised when a checkVat response cannot be read as a SOAP envelope."""
