"""Test harness for mdmarks: fake syntax trees and pass helpers.

Re-exports the public API for convenient imports:
    from tests.harness import md, render, virt, on_row, ...
"""

from tests.harness import markdown as md
from tests.harness.passes import on_row, render, signs, virt, virt_line, with_anchor
from tests.harness.tree import FakeNode, node

__all__ = [
    "md",
    "render",
    "virt",
    "virt_line",
    "on_row",
    "with_anchor",
    "signs",
    "FakeNode",
    "node",
]
