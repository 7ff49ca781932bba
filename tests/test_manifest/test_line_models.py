"""
Tests for depflip.manifest.models.

This module tests the manifest line state model:
- Package: rendering and version updates
- Enabled / Disabled: transitions and rendering
- Line: enable/disable/update dispatch, idempotence, and the contract
  that ignored lines cannot be edited

Coverage targets:
- Exactly one change event per real change, none for no-ops
- pre/post text preserved on render
- disable then enable resets pre to "# " then ""
"""
from __future__ import annotations

from pathlib import Path

import pytest

from depflip.manifest import (
    COMMENT_MARKER,
    ChangeAction,
    ChangeEvent,
    Disabled,
    Enabled,
    Ignored,
    IgnoredLineError,
    Line,
    Package,
    render_lines,
)

CARGO = Path("Cargo.toml")


# =============================================================================
# Package Tests
# =============================================================================

class TestPackage:
    """Tests for the Package class."""

    def test_render(self):
        """
        A package renders as name = "version" with single spaces around =.
        """
        assert Package("foo", "1.0").render() == 'foo = "1.0"'
        assert str(Package("foo", "1.0")) == 'foo = "1.0"'

    def test_update_to_new_version(self, events: list[ChangeEvent]):
        """
        Updating to a different version changes it and emits one event.
        """
        package = Package("foo", "1.0")

        package.update("2.0", CARGO, events.append)

        assert package.version == "2.0"
        assert package.name == "foo"
        assert events == [ChangeEvent(ChangeAction.UPDATE, "foo", "2.0", CARGO)]
        assert events[0].message == "Updating package foo to version 2.0 in file Cargo.toml"

    def test_update_to_same_version_is_noop(self, events: list[ChangeEvent]):
        """
        Updating to the current version changes nothing and emits nothing.
        """
        package = Package("foo", "1.0")

        package.update("1.0", CARGO, events.append)

        assert package.version == "1.0"
        assert events == []

    def test_update_accepts_any_version_string(self, events: list[ChangeEvent]):
        """
        Versions are opaque strings; no validation happens.
        """
        package = Package("foo", "1.0")

        package.update("not a version", CARGO, events.append)

        assert package.version == "not a version"
        assert len(events) == 1

    def test_update_without_sink_logs(self, caplog: pytest.LogCaptureFixture):
        """
        Without a sink the event message goes to the logger.
        """
        package = Package("foo", "1.0")

        with caplog.at_level("INFO", logger="depflip.manifest.events"):
            package.update("1.1", CARGO)

        assert "Updating package foo to version 1.1 in file Cargo.toml" in caplog.text


# =============================================================================
# Enabled / Disabled Tests
# =============================================================================

class TestEnabledDisabled:
    """Tests for the declaration variants."""

    def test_render_is_pre_package_post(self):
        enabled = Enabled("    ", Package("foo", "1.0"), "  # pinned\n")
        disabled = Disabled("#", Package("bar", "0.1"), "\r\n")

        assert enabled.render() == '    foo = "1.0"  # pinned\n'
        assert str(enabled) == enabled.pre + enabled.package.render() + enabled.post
        assert disabled.render() == '#bar = "0.1"\r\n'

    def test_disable_scenario(self):
        """
        Disabling a plain declaration prefixes the comment marker and keeps
        the package and post text.
        """
        enabled = Enabled(pre="", package=Package("foo", "1.0"), post="\n")

        disabled = enabled.disable()

        assert disabled == Disabled(pre="# ", package=Package("foo", "1.0"), post="\n")
        assert disabled.render() == '# foo = "1.0"\n'

    def test_disable_discards_pre(self):
        disabled = Enabled(pre="\t", package=Package("foo", "1.0"), post="\n").disable()

        assert disabled.pre == COMMENT_MARKER

    def test_enable_resets_pre_to_empty(self):
        """
        Enabling drops whatever pre text the disabled line had, including
        unusual comment styles and indentation.
        """
        disabled = Disabled(pre="  ## ", package=Package("foo", "1.0"), post=" # old\n")

        enabled = disabled.enable()

        assert enabled == Enabled(pre="", package=Package("foo", "1.0"), post=" # old\n")

    def test_update_delegates_to_package(self, events: list[ChangeEvent]):
        enabled = Enabled("", Package("foo", "1.0"), "\n")
        disabled = Disabled("# ", Package("bar", "1.0"), "\n")

        enabled.update("1.1", CARGO, events.append)
        disabled.update("1.2", CARGO, events.append)

        assert enabled.render() == 'foo = "1.1"\n'
        assert disabled.render() == '# bar = "1.2"\n'
        assert [e.package for e in events] == ["foo", "bar"]


# =============================================================================
# Line Tests
# =============================================================================

class TestLine:
    """Tests for Line transitions."""

    def test_disable_enabled_line(self, events: list[ChangeEvent]):
        line = Line(Enabled("", Package("foo", "1.0"), "\n"))

        result = line.disable("foo", CARGO, events.append)

        assert result.is_disabled
        assert result.render() == '# foo = "1.0"\n'
        assert [e.message for e in events] == [
            "Disabling package foo at version 1.0 in file Cargo.toml"
        ]

    def test_enable_disabled_line(self, events: list[ChangeEvent]):
        line = Line(Disabled("# ", Package("foo", "1.0"), "\n"))

        result = line.enable("foo", CARGO, events.append)

        assert result.is_enabled
        assert result.render() == 'foo = "1.0"\n'
        assert [e.message for e in events] == [
            "Enabling package foo at version 1.0 in file Cargo.toml"
        ]

    def test_enable_already_enabled_is_identity(self, events: list[ChangeEvent]):
        """
        Enabling an enabled line returns it unchanged with no event.
        """
        line = Line(Enabled("  ", Package("foo", "1.0"), "\n"))

        result = line.enable("foo", CARGO, events.append)

        assert result is line
        assert result == Line(Enabled("  ", Package("foo", "1.0"), "\n"))
        assert events == []

    def test_disable_already_disabled_is_identity(self, events: list[ChangeEvent]):
        line = Line(Disabled("#", Package("foo", "1.0"), "\n"))

        result = line.disable("foo", CARGO, events.append)

        assert result is line
        assert result.render() == '#foo = "1.0"\n'
        assert events == []

    def test_disable_then_enable_keeps_package_not_pre(self, events: list[ChangeEvent]):
        """
        A disable/enable round trip restores the package and post text but
        pre becomes "# " and then "", whatever it was originally.
        """
        line = Line(Enabled("    ", Package("foo", "1.0"), "  # keep\n"))

        disabled = line.disable("foo", CARGO, events.append)
        assert disabled.content.pre == "# "

        enabled = disabled.enable("foo", CARGO, events.append)
        assert enabled.content.pre == ""
        assert enabled.package == Package("foo", "1.0")
        assert enabled.content.post == "  # keep\n"
        assert enabled.render() != line.render()
        assert len(events) == 2

    def test_transition_leaves_old_line_unchanged(self, events: list[ChangeEvent]):
        """
        The line returned by a transition owns its package; updating it
        does not reach the line it came from.
        """
        line = Line(Enabled("", Package("foo", "1.0"), "\n"))

        disabled = line.disable("foo", CARGO, events.append)
        disabled.update("2.0", CARGO, events.append)
        enabled = disabled.enable("foo", CARGO, events.append)
        enabled.update("3.0", CARGO, events.append)

        assert line.render() == 'foo = "1.0"\n'
        assert disabled.render() == '# foo = "2.0"\n'
        assert enabled.render() == 'foo = "3.0"\n'
        assert disabled.package is not line.package

    def test_update_in_place(self, events: list[ChangeEvent]):
        line = Line(Disabled("# ", Package("foo", "1.0"), "\n"))

        line.update("2.0", CARGO, events.append)
        line.update("2.0", CARGO, events.append)

        assert line.render() == '# foo = "2.0"\n'
        assert len(events) == 1

    def test_event_reports_version_before_transition(self, events: list[ChangeEvent]):
        line = Line(Enabled("", Package("foo", "3.1"), "\n"))

        line.disable("foo", CARGO, events.append)

        assert events[0].version == "3.1"
        assert events[0].action is ChangeAction.DISABLE

    @pytest.mark.parametrize("operation", ["enable", "disable"])
    def test_toggle_ignored_line_raises(self, operation: str):
        """
        Ignored lines must never reach the mutators; doing so is a caller bug.
        """
        line = Line.ignored("[dependencies]\n")

        with pytest.raises(IgnoredLineError) as exc_info:
            getattr(line, operation)("foo", CARGO)

        assert exc_info.value.operation == operation
        assert exc_info.value.text == "[dependencies]\n"

    def test_update_ignored_line_raises(self):
        line = Line(Ignored("# just a comment\n"))

        with pytest.raises(IgnoredLineError):
            line.update("1.0", CARGO)

        assert line.render() == "# just a comment\n"

    def test_ignored_line_renders_verbatim(self):
        line = Line.ignored('clap = { version = "4" }\r\n')

        assert line.is_ignored
        assert line.package is None
        assert str(line) == 'clap = { version = "4" }\r\n'

    def test_render_lines_concatenates(self):
        lines = [
            Line.ignored("[dependencies]\n"),
            Line(Enabled("", Package("foo", "1.0"), "\n")),
            Line(Disabled("# ", Package("bar", "2.0"), "")),
        ]

        assert render_lines(lines) == '[dependencies]\nfoo = "1.0"\n# bar = "2.0"'
