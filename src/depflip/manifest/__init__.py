"""Dependency manifest line model and editing.

This package reads manifests made of ``name = "version"`` declaration
lines, toggles declarations between enabled and commented out, updates
declared versions, and writes the file back with every untouched byte
preserved.

Classes
-------
Package
    A package name pinned to a version.

Enabled / Disabled / Ignored
    What a manifest line holds: an active declaration, a commented-out
    declaration, or unrelated text.

Line
    One manifest line, with enable/disable/update transitions.

ManifestTarget
    Edits one manifest file, returning Result objects.

FindError / ChangeError
    Why a lookup or an edit failed.

Examples
--------
>>> from depflip.manifest import parse_lines, locate_package
>>> lines = parse_lines('[dependencies]\\nserde = "1.0"\\n')
>>> index = locate_package(lines, "serde")
>>> lines[index] = lines[index].disable("serde", "Cargo.toml")
>>> lines[index].render()
'# serde = "1.0"\\n'
"""

from depflip.manifest.errors import (
    ChangeError,
    ChangeErrorKind,
    FindError,
    IgnoredLineError,
)
from depflip.manifest.events import ChangeAction, ChangeEvent, EventSink
from depflip.manifest.finder import FindResult, Match, find_package, locate_package
from depflip.manifest.models import (
    COMMENT_MARKER,
    Declaration,
    Disabled,
    Enabled,
    Ignored,
    Line,
    Package,
    render_lines,
)
from depflip.manifest.parser import parse_line, parse_lines
from depflip.manifest.target import ManifestTarget

__all__ = [
    # Models
    "Package",
    "Enabled",
    "Disabled",
    "Ignored",
    "Line",
    "Declaration",
    "COMMENT_MARKER",
    "render_lines",
    # Events
    "ChangeAction",
    "ChangeEvent",
    "EventSink",
    # Errors
    "FindError",
    "ChangeError",
    "ChangeErrorKind",
    "IgnoredLineError",
    # Parsing and lookup
    "parse_line",
    "parse_lines",
    "FindResult",
    "Match",
    "find_package",
    "locate_package",
    # Files
    "ManifestTarget",
]
