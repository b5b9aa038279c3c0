"""Exception hierarchy for atlas-search-builders."""


class AtlasSearchError(Exception):
    """Base exception for all atlas-search-builders errors.

    Callers can catch every error raised while building or rendering a
    search definition with a single except clause.
    """

    pass


# Construction errors
class InvalidArgumentError(AtlasSearchError, ValueError):
    """A builder received an argument it cannot accept."""

    def __init__(self, argument: str, value: object, reason: str) -> None:
        self.argument = argument
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid {argument}: {reason}")


class ArgumentOutOfRangeError(InvalidArgumentError):
    """A numeric argument lies outside its documented domain."""

    pass


# Render errors
class SchemaMismatchError(AtlasSearchError):
    """A field reference cannot be mapped against the document schema."""

    def __init__(self, field: object, reason: str) -> None:
        self.field = field
        self.reason = reason
        super().__init__(f"Cannot resolve field {field!r}: {reason}")
