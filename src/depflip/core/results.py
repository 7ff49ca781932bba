"""Result types for manifest operations.

This module defines the result classes returned by every manifest edit:
- Result - Base result for all operations
- ErrorResult - Result for failed operations, carrying a ChangeError
- BatchResult - Aggregate result when one edit is applied to many manifests
"""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Iterator

if TYPE_CHECKING:
    from depflip.manifest.errors import ChangeError


@dataclass
class Result:
    """Base result for all operations.

    Operations never raise for missing or ambiguous packages, or for I/O
    failures. Instead, they return Result objects that indicate success or
    failure.

    Attributes:
        success: Whether the operation succeeded
        message: Human-readable description of what happened
        files_changed: Manifests that were modified (or would be, in dry-run)
        data: Optional payload for operations that return data
        diff: Unified diff of the change (if any)
    """

    success: bool
    message: str
    files_changed: list[Path] = field(default_factory=list)
    data: Any = None
    diff: str | None = None

    def __bool__(self) -> bool:
        return self.success

    def is_error(self) -> bool:
        """Check if this result represents an error."""
        return not self.success


@dataclass
class ErrorResult(Result):
    """Result for failed operations - never raises automatically.

    Attributes:
        error: The ChangeError describing why the operation failed
        operation: Name of the attempted operation
        target_repr: String representation of the target
    """

    success: bool = field(default=False, init=False)
    error: ChangeError | None = None
    operation: str = ""
    target_repr: str = ""

    def raise_if_error(self) -> None:
        """Explicitly re-raise the underlying I/O error if the caller wants to."""
        if self.error is not None and self.error.cause is not None:
            raise self.error.cause
        raise RuntimeError(self.message)


@dataclass
class BatchResult:
    """Aggregate result for one operation applied to several manifests."""

    results: list[Result] = field(default_factory=list)

    @property
    def success(self) -> bool:
        """True if all operations succeeded."""
        return all(r.success for r in self.results)

    @property
    def failed(self) -> list[Result]:
        """Results that failed."""
        return [r for r in self.results if not r.success]

    @property
    def files_changed(self) -> list[Path]:
        """All manifests changed across all operations, in order."""
        files: list[Path] = []
        for r in self.results:
            files.extend(f for f in r.files_changed if f not in files)
        return files

    @property
    def diffs(self) -> dict[Path, str]:
        """Diff of each changed manifest, keyed by path."""
        return {
            r.files_changed[0]: r.diff
            for r in self.results
            if r.diff and r.files_changed
        }

    def __bool__(self) -> bool:
        return self.success

    def __len__(self) -> int:
        return len(self.results)

    def __iter__(self) -> Iterator[Result]:
        return iter(self.results)
