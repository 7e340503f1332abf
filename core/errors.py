"""Engine exceptions."""

from __future__ import annotations


class PatternValidationError(ValueError):
    """Example addresses or pattern parameters failed validation.

    The message is human-readable and may combine several problems;
    ``errors`` keeps them as a list.
    """

    def __init__(self, message: str, errors: list[str] | None = None):
        super().__init__(message)
        self.errors = errors or [message]
