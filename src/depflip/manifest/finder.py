"""Locate package declarations among parsed manifest lines."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator

from depflip.manifest.errors import FindError
from depflip.manifest.models import Line


@dataclass
class Match:
    """
    A single declaration of the requested package.

    Attributes
    ----------
    index : int
        Position of the line in the parsed line list (0-indexed).
    line : Line
        The matching line. Always an enabled or disabled declaration.
    """

    index: int
    line: Line

    @property
    def line_number(self) -> int:
        """Line number in the manifest (1-indexed)."""
        return self.index + 1


@dataclass
class FindResult:
    """
    Every declaration of one package in a manifest.

    Attributes
    ----------
    name : str
        The package name that was looked up.
    matches : list[Match]
        Matching declarations, in file order.
    """

    name: str
    matches: list[Match] = field(default_factory=list)

    def __bool__(self) -> bool:
        """True if any declaration was found."""
        return len(self.matches) > 0

    def __len__(self) -> int:
        return len(self.matches)

    def __iter__(self) -> Iterator[Match]:
        return iter(self.matches)

    def unique(self) -> int | FindError:
        """Index of the single declaration, or the reason there isn't one."""
        if not self.matches:
            return FindError.MISSING
        if len(self.matches) > 1:
            return FindError.OCCURS_MANY
        return self.matches[0].index


def find_package(lines: list[Line], name: str) -> FindResult:
    """Find every enabled or disabled declaration of ``name``.

    Names are compared exactly; ignored lines never match.
    """
    result = FindResult(name)
    for index, line in enumerate(lines):
        package = line.package
        if package is not None and package.name == name:
            result.matches.append(Match(index, line))
    return result


def locate_package(lines: list[Line], name: str) -> int | FindError:
    """Index of the one line declaring ``name``.

    Returns ``FindError.MISSING`` when no line declares it and
    ``FindError.OCCURS_MANY`` when several do. Neither case is resolved
    here; the caller decides what to do.
    """
    return find_package(lines, name).unique()
