"""Unified diff helpers for manifest edits."""
from __future__ import annotations

import difflib
from pathlib import Path


def _diff_lines(content: str) -> list[str]:
    """Split for difflib; a missing final newline is supplied."""
    lines = content.splitlines(keepends=True)
    if lines and not lines[-1].endswith(("\n", "\r")):
        lines[-1] += "\n"
    return lines


def generate_diff(original: str, modified: str, path: Path, context_lines: int = 3) -> str:
    """Unified diff of a manifest edit, empty if nothing changed.

    Examples
    --------
    >>> print(generate_diff('foo = "1.0"\\n', '# foo = "1.0"\\n', Path("Cargo.toml")), end="")
    --- a/Cargo.toml
    +++ b/Cargo.toml
    @@ -1 +1 @@
    -foo = "1.0"
    +# foo = "1.0"
    """
    if original == modified:
        return ""
    return "".join(
        difflib.unified_diff(
            _diff_lines(original),
            _diff_lines(modified),
            fromfile=f"a/{path}",
            tofile=f"b/{path}",
            n=context_lines,
        )
    )


def combine_diffs(diffs: dict[Path, str]) -> str:
    """Join per-manifest diffs into one string, ordered by path."""
    return "".join(diffs[path] for path in sorted(diffs) if diffs[path])
