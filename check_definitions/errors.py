"""Errors raised while decoding check definitions."""

from typing import Any, Optional


class MalformedValueError(ValueError):
    """A field of a check definition holds a value that cannot be decoded."""

    def __init__(self, field: Optional[str], value: Any, reason: str = ""):
        """Initialize the error.

        Args:
            field: The document key holding the bad value, or None for the document itself.
            value: The offending raw value.
            reason: Why the value was rejected.
        """
        self.field = field
        self.value = value
        self.reason = reason

        target = field if field is not None else "check definition"
        message = f"Invalid value for {target}: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)
