"""Exceptions raised by the passforge core.

All of them derive from :class:`ValueError`, so callers that already guard
generation with ``except ValueError`` keep working.
"""


class ValidationError(ValueError):
    """One or more rule violations on user-supplied options or strings."""

    def __init__(self, errors: list[str] | str) -> None:
        if isinstance(errors, str):
            errors = [errors]
        self.errors = list(errors)
        super().__init__(", ".join(self.errors))


class NoCharacterTypesError(ValidationError):
    """No character category was selected, so the pool is empty."""


class MalformedPatternError(ValueError):
    """A generation pattern does not match ``(<count><u|l|n|s>)+``."""


class RangeError(ValueError):
    """A numeric argument fell outside its allowed range."""
