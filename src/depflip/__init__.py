"""
depflip - toggle and bump dependency declarations in manifest files.

Works on manifests where each dependency is a ``name = "version"`` line
(such as the ``[dependencies]`` table of a ``Cargo.toml``). Declarations
can be commented out, uncommented, or moved to a new version without
touching any other byte of the file.

Example
-------
>>> from depflip import ManifestTarget
>>>
>>> manifest = ManifestTarget("Cargo.toml")
>>> manifest.disable("serde")
>>> manifest.update("tokio", "1.38")
>>>
>>> # Preview changes without modifying files
>>> manifest = ManifestTarget("Cargo.toml", dry_run=True)
>>> print(manifest.enable("serde").diff)

Classes
-------
ManifestTarget
    Main entry point for editing one manifest.

Result
    Result class for all operations. Contains success status, message, and
    list of changed files.

ErrorResult
    Result class for failed operations, carrying a ChangeError.

Line
    Typed representation of one manifest line.
"""
from __future__ import annotations

from depflip.core.results import BatchResult, ErrorResult, Result
from depflip.manifest import (
    ChangeError,
    ChangeErrorKind,
    ChangeEvent,
    Disabled,
    Enabled,
    FindError,
    Ignored,
    IgnoredLineError,
    Line,
    ManifestTarget,
    Package,
    parse_line,
    parse_lines,
)

__version__ = "0.1.0"

__all__ = [
    "ManifestTarget",
    "Result",
    "ErrorResult",
    "BatchResult",
    "Package",
    "Enabled",
    "Disabled",
    "Ignored",
    "Line",
    "ChangeEvent",
    "FindError",
    "ChangeError",
    "ChangeErrorKind",
    "IgnoredLineError",
    "parse_line",
    "parse_lines",
]
