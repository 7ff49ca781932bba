"""Error kinds for manifest lookups and edits.

Lookup and edit failures are values, not exceptions: they travel inside
``ErrorResult`` objects back to whoever asked for the edit. The only
exception raised by the manifest package is ``IgnoredLineError``, which
signals a caller bug rather than a problem with the file.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class FindError(Enum):
    """Why a package could not be pinned to a single manifest line."""

    MISSING = "missing"  # No line declares the package
    OCCURS_MANY = "occurs_many"  # More than one line declares it


class ChangeErrorKind(Enum):
    """Why a manifest edit could not be applied."""

    ALREADY_EXISTS = "already_exists"
    MISSING = "missing"
    OCCURS_MANY = "occurs_many"
    IO = "io"


@dataclass(frozen=True)
class ChangeError:
    """A failed manifest edit.

    Attributes:
        kind: What went wrong
        cause: The underlying OSError or decoding error, only set for kind IO
    """

    kind: ChangeErrorKind
    cause: OSError | UnicodeError | None = None

    @classmethod
    def from_find_error(cls, error: FindError) -> ChangeError:
        """Surface a lookup failure during a mutating operation."""
        if error is FindError.MISSING:
            return cls(ChangeErrorKind.MISSING)
        return cls(ChangeErrorKind.OCCURS_MANY)

    @classmethod
    def io(cls, cause: OSError | UnicodeError) -> ChangeError:
        """Wrap a failure from reading, decoding or writing the manifest."""
        return cls(ChangeErrorKind.IO, cause)

    @property
    def is_ambiguous(self) -> bool:
        return self.kind is ChangeErrorKind.OCCURS_MANY


class IgnoredLineError(TypeError):
    """A toggle or update was attempted on a line with no declaration."""

    def __init__(self, operation: str, text: str) -> None:
        super().__init__(f"Cannot {operation} a line without a package declaration: {text!r}")
        self.operation = operation
        self.text = text
