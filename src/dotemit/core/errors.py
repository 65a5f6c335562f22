"""Error types raised while emitting DOT text."""

from __future__ import annotations


class DotError(Exception):
    """Base class for all dotemit errors."""


class InvalidIdentifier(DotError, ValueError):
    """An identifier, attribute key or label cannot be written as valid DOT."""

    def __init__(self, value: str, reason: str, entity: str | None = None):
        self.value = value
        self.reason = reason
        self.entity = entity
        where = f" for {entity}" if entity else ""
        super().__init__(f"Invalid DOT identifier {value!r}{where}: {reason}")

    def with_entity(self, entity: str) -> InvalidIdentifier:
        """Return a copy of this error bound to the given graph entity."""
        return InvalidIdentifier(self.value, self.reason, entity)


class SinkWriteFailure(DotError, OSError):
    """The output sink rejected a write."""

    def __init__(self, message: str):
        super().__init__(message)
