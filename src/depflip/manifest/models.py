"""Data models for manifest lines.

A manifest is read as one ``Line`` per physical line. Each line holds
exactly one of three contents:

- ``Enabled`` - an active ``name = "version"`` declaration
- ``Disabled`` - the same declaration, commented out
- ``Ignored`` - any other text, kept verbatim

Declarations keep the literal text before (``pre``) and after (``post``)
the rendered package, so rendering every line reproduces the file
byte-for-byte until a line is toggled or updated.
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Union

from depflip.manifest.errors import IgnoredLineError
from depflip.manifest.events import ChangeAction, ChangeEvent, EventSink, PathLike, emit

# Prefix written in front of a declaration when it is disabled
COMMENT_MARKER = "# "


@dataclass
class Package:
    """A package name pinned to a version.

    The name is fixed once the package is created; only the version is
    ever changed.

    Examples
    --------
    >>> str(Package("serde", "1.0"))
    'serde = "1.0"'
    """

    name: str
    version: str

    def update(self, version: str, file_path: PathLike, sink: EventSink | None = None) -> None:
        """Set a new version, emitting an event only if it differs."""
        if self.version == version:
            return
        self.version = version
        emit(ChangeEvent(ChangeAction.UPDATE, self.name, version, file_path), sink)

    def render(self) -> str:
        return f'{self.name} = "{self.version}"'

    def __str__(self) -> str:
        return self.render()


@dataclass
class Enabled:
    """An active declaration and the text surrounding it on its line."""

    pre: str
    package: Package
    post: str

    def disable(self) -> Disabled:
        """Comment the declaration out.

        The original ``pre`` text is replaced by ``COMMENT_MARKER``. The
        returned value holds its own copy of the package.
        """
        return Disabled(pre=COMMENT_MARKER, package=replace(self.package), post=self.post)

    def update(self, version: str, file_path: PathLike, sink: EventSink | None = None) -> None:
        self.package.update(version, file_path, sink)

    def render(self) -> str:
        return f"{self.pre}{self.package.render()}{self.post}"

    def __str__(self) -> str:
        return self.render()


@dataclass
class Disabled:
    """A commented-out declaration and the text surrounding it on its line."""

    pre: str
    package: Package
    post: str

    def enable(self) -> Enabled:
        """Uncomment the declaration.

        ``pre`` is always reset to the empty string, whatever comment
        syntax or indentation the line had, so ``enable(disable(x))`` keeps
        the package and ``post`` of ``x`` but not its ``pre``.
        """
        return Enabled(pre="", package=replace(self.package), post=self.post)

    def update(self, version: str, file_path: PathLike, sink: EventSink | None = None) -> None:
        self.package.update(version, file_path, sink)

    def render(self) -> str:
        return f"{self.pre}{self.package.render()}{self.post}"

    def __str__(self) -> str:
        return self.render()


@dataclass
class Ignored:
    """A line with no recognised declaration."""

    text: str

    def render(self) -> str:
        return self.text

    def __str__(self) -> str:
        return self.text


Declaration = Union[Enabled, Disabled]
LineContent = Union[Enabled, Disabled, Ignored]


@dataclass
class Line:
    """One physical manifest line.

    ``enable`` and ``disable`` return a new ``Line`` and leave the old one
    for the caller to discard; ``update`` changes the declared version in
    place. All three require a declaration: calling them on an ``Ignored``
    line raises ``IgnoredLineError``.

    Parameters
    ----------
    content : Enabled | Disabled | Ignored
        What the line holds.

    Examples
    --------
    >>> line = Line(Enabled("", Package("serde", "1.0"), "\\n"))
    >>> line = line.disable("serde", "Cargo.toml", sink=print)
    Disabling package serde at version 1.0 in file Cargo.toml
    >>> line.render()
    '# serde = "1.0"\\n'
    """

    content: LineContent

    @classmethod
    def ignored(cls, text: str) -> Line:
        return cls(Ignored(text))

    @property
    def is_enabled(self) -> bool:
        return isinstance(self.content, Enabled)

    @property
    def is_disabled(self) -> bool:
        return isinstance(self.content, Disabled)

    @property
    def is_ignored(self) -> bool:
        return isinstance(self.content, Ignored)

    @property
    def package(self) -> Package | None:
        """The declared package, or None for an ignored line."""
        if isinstance(self.content, Ignored):
            return None
        return self.content.package

    def declaration(self, operation: str = "edit") -> Declaration:
        """Return the line's declaration, enforcing that it has one."""
        if isinstance(self.content, Ignored):
            raise IgnoredLineError(operation, self.content.text)
        return self.content

    def enable(self, package_name: str, file_path: PathLike, sink: EventSink | None = None) -> Line:
        decl = self.declaration("enable")
        if isinstance(decl, Enabled):
            return self
        emit(ChangeEvent(ChangeAction.ENABLE, package_name, decl.package.version, file_path), sink)
        return Line(decl.enable())

    def disable(self, package_name: str, file_path: PathLike, sink: EventSink | None = None) -> Line:
        decl = self.declaration("disable")
        if isinstance(decl, Disabled):
            return self
        emit(ChangeEvent(ChangeAction.DISABLE, package_name, decl.package.version, file_path), sink)
        return Line(decl.disable())

    def update(self, version: str, file_path: PathLike, sink: EventSink | None = None) -> None:
        self.declaration("update").update(version, file_path, sink)

    def render(self) -> str:
        return self.content.render()

    def __str__(self) -> str:
        return self.render()


def render_lines(lines: list[Line]) -> str:
    """Reconstruct manifest text; line separators live inside each line."""
    return "".join(line.render() for line in lines)
