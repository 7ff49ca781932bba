"""
Shared pytest fixtures for the depflip test suite.

This module provides:
- Sample manifest content strings
- Temporary manifest files on disk
- An event sink that records change events

Fixture Naming Convention:
- tmp_* : Fixtures that create temporary directories/files
- sample_* : Fixtures that provide sample content strings
"""
from __future__ import annotations

import textwrap
from pathlib import Path

import pytest

from depflip.manifest import ChangeEvent


# =============================================================================
# Sample Manifest Fixtures
# =============================================================================

@pytest.fixture
def sample_manifest() -> str:
    """
    Sample Cargo-style manifest.

    Contains:
    - A [package] table and a [dependencies] table
    - Enabled declarations, one with a trailing comment
    - A disabled declaration
    - An inline-table dependency (not a simple declaration)
    """
    return textwrap.dedent('''\
        [package]
        name = "demo"
        edition = "2021"

        [dependencies]
        serde = "1.0"
        tokio = "1.37"  # async runtime
        # rand = "0.8"
        clap = { version = "4.5", features = ["derive"] }
    ''')


@pytest.fixture
def sample_duplicate_manifest() -> str:
    """Manifest declaring ``foo`` twice, once enabled and once disabled."""
    return textwrap.dedent('''\
        [dependencies]
        foo = "1.0"
        # foo = "2.0"
        bar-baz = "0.3"
    ''')


# =============================================================================
# Temporary File Fixtures
# =============================================================================

@pytest.fixture
def tmp_manifest(tmp_path: Path, sample_manifest: str) -> Path:
    """
    Create a temporary Cargo.toml with the sample manifest.

    Returns the path to the manifest.
    """
    file_path = tmp_path / "Cargo.toml"
    file_path.write_text(sample_manifest)
    return file_path


@pytest.fixture
def tmp_duplicate_manifest(tmp_path: Path, sample_duplicate_manifest: str) -> Path:
    """Create a temporary manifest that declares ``foo`` twice."""
    file_path = tmp_path / "dup.toml"
    file_path.write_text(sample_duplicate_manifest)
    return file_path


# =============================================================================
# Event Fixtures
# =============================================================================

@pytest.fixture
def events() -> list[ChangeEvent]:
    """
    List that collects change events.

    Pass ``events.append`` wherever an event sink is expected.
    """
    return []
