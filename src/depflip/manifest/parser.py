"""Manifest line parser.

Classifies raw manifest lines into ``Line`` values. A line is only treated
as a declaration when rendering it back yields exactly the original text;
everything else (tables, inline tables, odd spacing, single-quoted
versions) is kept as ``Ignored``.
"""
from __future__ import annotations

import re

from depflip.manifest.models import Disabled, Enabled, Line, Package

# <pre><name> = "<version>"<post>
DECLARATION_RE = re.compile(
    r"""
    (?P<pre>[^\r\n]*?)
    (?P<name>[A-Za-z0-9_][A-Za-z0-9_.\-]*)
    \x20=\x20
    "(?P<version>[^"\\\r\n]*)"
    (?P<post>[^\r\n]*(?:\r\n|\n|\r)?)
    """,
    re.VERBOSE,
)

ENABLED_PRE_RE = re.compile(r"^[ \t]*$")
DISABLED_PRE_RE = re.compile(r"^[ \t]*#+[ \t]*$")
POST_RE = re.compile(r"^[ \t]*(?:#[^\r\n]*)?(?:\r\n|\n|\r)?$")


def parse_line(text: str) -> Line:
    """Parse one raw line, including its line separator.

    Parameters
    ----------
    text : str
        The raw line as read from the manifest.

    Returns
    -------
    Line
        ``Enabled``, ``Disabled`` or ``Ignored`` line. ``parse_line(t).render()``
        always equals ``t``.

    Examples
    --------
    >>> parse_line('serde = "1.0"\\n').content
    Enabled(pre='', package=Package(name='serde', version='1.0'), post='\\n')
    >>> parse_line('# serde = "1.0"\\n').is_disabled
    True
    >>> parse_line('[dependencies]\\n').is_ignored
    True
    """
    match = DECLARATION_RE.fullmatch(text)
    if match is None or not POST_RE.match(match["post"]):
        return Line.ignored(text)

    pre = match["pre"]
    package = Package(match["name"], match["version"])
    if ENABLED_PRE_RE.match(pre):
        return Line(Enabled(pre=pre, package=package, post=match["post"]))
    if DISABLED_PRE_RE.match(pre):
        return Line(Disabled(pre=pre, package=package, post=match["post"]))
    return Line.ignored(text)


def parse_lines(content: str) -> list[Line]:
    """Parse manifest content into lines, keeping every line separator."""
    return [parse_line(raw) for raw in content.splitlines(keepends=True)]
