"""
Test fixtures package for hashtree tests.

Usage:
    from fixtures import make_tree, DEMO_VALUES

    def test_something():
        tree = make_tree(DEMO_VALUES)
"""

from .common import (
    DEMO_VALUES,
    SAMPLE_VALUES,
    hex_compare,
    make_md5_policy,
    make_tree,
    make_values,
    md5_hash,
)

__all__ = [
    "DEMO_VALUES",
    "SAMPLE_VALUES",
    "hex_compare",
    "make_md5_policy",
    "make_tree",
    "make_values",
    "md5_hash",
]
