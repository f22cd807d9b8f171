from __future__ import annotations

"""
Module Tree Renderer.

Converts a ModuleNode hierarchy into the text of the crate aggregation file.
Every level is emitted in lexicographic order of the raw names, so the
output depends only on the set of generated files.
"""

from typing import Iterable, List

from protocrate.domain.constants import AGGREGATION_PREAMBLE
from protocrate.domain.module_models import ModuleNode

INDENT = "    "

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def render_aggregation_file(tree: ModuleNode) -> str:
    """
    Render the complete aggregation file for the root of the tree.

    Args:
        tree: Root ModuleNode.

    Returns:
        str: Preamble, a blank line and the namespace declarations.
    """
    lines: List[str] = list(AGGREGATION_PREAMBLE)
    lines.append("")
    render_module_tree(tree, lines)
    return "\n".join(lines) + "\n"


def render_module_tree(node: ModuleNode, lines: List[str], indent: str = "") -> None:
    """
    Recursively append the declarations of `node` to `lines`.

    Order inside one scope: private unit declarations, public child
    modules, then wildcard re-exports of sibling units.

    Args:
        node: Current tree level.
        lines: Accumulator list for output strings.
        indent: Indentation prefix for the current recursion level.
    """
    for unit in _sorted_units(node, node.internal_units):
        lines.append(f"{indent}mod {unit};")

    for key in sorted(node.children, key=lambda k: (node.children[k].name, k)):
        lines.append(f"{indent}pub mod {key} {{")
        render_module_tree(node.children[key], lines, indent + INDENT)
        lines.append(f"{indent}}}")

    for unit in _sorted_units(node, node.exported_units):
        lines.append(f"{indent}pub use super::{unit}::*;")

# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _sorted_units(node: ModuleNode, units: Iterable[str]) -> List[str]:
    return sorted(units, key=lambda u: (node.raw_names.get(u, u), u))
