"""ManifestTarget for edits on one dependency manifest file."""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from depflip.core.diff import generate_diff
from depflip.core.results import ErrorResult, Result
from depflip.manifest.errors import ChangeError, ChangeErrorKind, FindError
from depflip.manifest.events import ChangeAction, ChangeEvent, EventSink, emit
from depflip.manifest.finder import FindResult, find_package, locate_package
from depflip.manifest.models import (
    COMMENT_MARKER,
    Disabled,
    Enabled,
    Line,
    Package,
    render_lines,
)
from depflip.manifest.parser import parse_lines

logger = logging.getLogger(__name__)


class ManifestTarget:
    """Target for a dependency manifest file.

    Every edit reads the manifest, applies the change to the single line
    declaring the package, and writes the reconstructed text back. Lines
    that are not touched are written back byte-for-byte.

    Edits never raise for a missing or ambiguous package or for I/O
    failures. They return an ``ErrorResult`` whose ``error`` holds the
    ``ChangeError``, and the file is left untouched.

    Parameters
    ----------
    path : str | Path
        Path to the manifest.
    dry_run : bool
        Compute and report changes without writing them.
    sink : EventSink | None
        Receives a ``ChangeEvent`` for every change that was written (or
        would be, in dry-run mode). Defaults to logging them.

    Examples
    --------
    >>> manifest = ManifestTarget("Cargo.toml")
    >>> manifest.disable("serde").success
    True
    >>> manifest.update("tokio", "1.38").message
    'Completed update tokio in Cargo.toml'
    >>> result = manifest.enable("missing")
    >>> result.error.kind
    <ChangeErrorKind.MISSING: 'missing'>
    """

    def __init__(
        self,
        path: str | Path,
        dry_run: bool = False,
        sink: EventSink | None = None,
    ) -> None:
        self.path = Path(path) if isinstance(path, str) else path
        self.dry_run = dry_run
        self.sink = sink

    def __repr__(self) -> str:
        return f"ManifestTarget({self.path})"

    def exists(self) -> bool:
        """Check if the manifest exists."""
        return self.path.exists() and self.path.is_file()

    # ===== Reading =====

    def _read(self) -> str:
        # newline="" keeps \r\n separators intact
        with open(self.path, encoding="utf-8", newline="") as f:
            return f.read()

    def get_content(self) -> Result:
        """Get the raw content of the manifest.

        Returns
        -------
        Result
            Result with file content in ``data`` if successful.
        """
        try:
            return Result(success=True, message="OK", data=self._read())
        except (OSError, UnicodeError) as e:
            return self._io_failed("get_content", "Failed to read", e)

    def lines(self) -> list[Line] | ErrorResult:
        """Parse the manifest into lines, or an ErrorResult if it can't be read."""
        content = self.get_content()
        if isinstance(content, ErrorResult):
            return content
        return parse_lines(content.data)

    def find(self, name: str) -> FindResult:
        """Find every declaration of ``name``; unreadable files have none."""
        lines = self.lines()
        if isinstance(lines, ErrorResult):
            logger.debug("Could not read %s: %s", self.path, lines.message)
            return FindResult(name)
        return find_package(lines, name)

    def locate(self, name: str) -> int | FindError | ErrorResult:
        """Index of the single line declaring ``name``."""
        lines = self.lines()
        if isinstance(lines, ErrorResult):
            return lines
        return locate_package(lines, name)

    def packages(self) -> list[tuple[Package, bool]] | ErrorResult:
        """Every declared package with whether it is enabled, in file order."""
        lines = self.lines()
        if isinstance(lines, ErrorResult):
            return lines
        return [
            (line.package, line.is_enabled)
            for line in lines
            if line.package is not None
        ]

    # ===== Editing =====

    def enable(self, name: str) -> Result:
        """Uncomment the declaration of ``name``."""
        return self._apply(
            "enable",
            name,
            lambda line, sink: line.enable(name, self.path, sink),
        )

    def disable(self, name: str) -> Result:
        """Comment out the declaration of ``name``."""
        return self._apply(
            "disable",
            name,
            lambda line, sink: line.disable(name, self.path, sink),
        )

    def update(self, name: str, version: str) -> Result:
        """Set the declared version of ``name``, enabled or not."""

        def apply(line: Line, sink: EventSink) -> Line:
            line.update(version, self.path, sink)
            return line

        return self._apply("update", name, apply)

    def add(self, name: str, version: str, disabled: bool = False) -> Result:
        """Declare a new package.

        The declaration goes right after the last existing declaration,
        or at the end of the file if there is none. Fails with
        ``ALREADY_EXISTS`` if ``name`` is declared anywhere, enabled or
        not.
        """
        operation = "add"
        lines = self.lines()
        if isinstance(lines, ErrorResult):
            return lines

        if find_package(lines, name):
            return self._change_failed(
                operation,
                f"Package {name} already exists in file {self.path}",
                ChangeError(ChangeErrorKind.ALREADY_EXISTS),
            )

        original = render_lines(lines)
        separator = _line_separator(lines)
        package = Package(name, version)
        if disabled:
            new_line = Line(Disabled(pre=COMMENT_MARKER, package=package, post=separator))
        else:
            new_line = Line(Enabled(pre="", package=package, post=separator))

        declared = [i for i, line in enumerate(lines) if line.package is not None]
        position = declared[-1] + 1 if declared else len(lines)
        if position > 0 and not lines[position - 1].render().endswith(("\n", "\r")):
            lines.insert(position, Line.ignored(separator))
            position += 1
        lines.insert(position, new_line)

        events = [ChangeEvent(ChangeAction.ADD, name, version, self.path)]
        return self._write(operation, name, original, render_lines(lines), events)

    def _apply(
        self,
        operation: str,
        name: str,
        change: Callable[[Line, EventSink], Line],
    ) -> Result:
        """Apply ``change`` to the one line declaring ``name`` and write back."""
        lines = self.lines()
        if isinstance(lines, ErrorResult):
            return lines

        index = locate_package(lines, name)
        if isinstance(index, FindError):
            return self._not_found(operation, name, index)

        original = render_lines(lines)
        events: list[ChangeEvent] = []
        lines[index] = change(lines[index], events.append)
        return self._write(operation, name, original, render_lines(lines), events)

    def _write(
        self,
        operation: str,
        name: str,
        original: str,
        new_content: str,
        events: list[ChangeEvent],
    ) -> Result:
        """Write new content with a diff; events are delivered once it lands."""
        if new_content == original:
            return Result(success=True, message=f"No changes needed to {operation} {name} in {self.path}")

        diff = generate_diff(original, new_content, self.path)

        if self.dry_run:
            for event in events:
                emit(event, self.sink)
            return Result(
                success=True,
                message=f"[DRY RUN] Would {operation} {name} in {self.path}",
                files_changed=[self.path],
                diff=diff,
            )

        try:
            data = new_content.encode("utf-8")
            with open(self.path, "wb") as f:
                f.write(data)
        except (OSError, UnicodeError) as e:
            return self._io_failed(operation, "Write failed", e)

        for event in events:
            emit(event, self.sink)
        return Result(
            success=True,
            message=f"Completed {operation} {name} in {self.path}",
            files_changed=[self.path],
            diff=diff,
        )

    # ===== Failures =====

    def _not_found(self, operation: str, name: str, error: FindError) -> ErrorResult:
        if error is FindError.MISSING:
            message = f"Package {name} not found in file {self.path}"
        else:
            message = f"Package {name} occurs multiple times in file {self.path}"
        return self._change_failed(operation, message, ChangeError.from_find_error(error))

    def _io_failed(self, operation: str, message: str, exception: OSError | UnicodeError) -> ErrorResult:
        return self._change_failed(
            operation,
            f"{message} {self.path}: {exception}",
            ChangeError.io(exception),
        )

    def _change_failed(self, operation: str, message: str, error: ChangeError) -> ErrorResult:
        """Return ErrorResult for an edit that could not be applied."""
        return ErrorResult(
            message=message,
            operation=operation,
            target_repr=repr(self),
            error=error,
        )


def _line_separator(lines: list[Line]) -> str:
    """Separator used by the manifest, judged from its first line."""
    if lines and lines[0].render().endswith("\r\n"):
        return "\r\n"
    return "\n"
