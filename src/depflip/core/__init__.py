"""
Core module.

Example
-------
>>> from depflip import ManifestTarget
>>>
>>> result = ManifestTarget("Cargo.toml").disable("serde")
>>> if not result:
...     print(result.message)
"""
from __future__ import annotations

from .diff import combine_diffs, generate_diff
from .results import BatchResult, ErrorResult, Result

__all__ = [
    "Result",
    "ErrorResult",
    "BatchResult",
    "generate_diff",
    "combine_diffs",
]
