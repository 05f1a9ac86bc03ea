from __future__ import annotations
import json
from typing import Any, Dict, List

from .model import ViewNode


def export_outline(root: ViewNode) -> str:
    """
    Render the subtree as an indented text outline, one node per line:
        Container VStack [spacing: 20] .padding .frame(maxWidth: .infinity)
    Branch and If nodes carry no props, so only kind and name are shown.
    """
    lines: List[str] = []
    _write_node_outline(root, lines, 0)
    return "\n".join(lines) + "\n"


def _indent(n: int) -> str:
    return "  " * n


def _write_node_outline(node: ViewNode, out: List[str], level: int):
    parts = [node.kind.value, node.name]
    if node.props:
        parts.append("[" + ", ".join(node.props) + "]")
    parts.extend("." + m if not m.startswith("/*") else m for m in node.modifiers)
    out.append(_indent(level) + " ".join(parts))
    for ch in node.children:
        _write_node_outline(ch, out, level + 1)


def to_dict(node: ViewNode) -> Dict[str, Any]:
    return {
        "kind": node.kind.value,
        "name": node.name,
        "props": list(node.props),
        "modifiers": list(node.modifiers),
        "children": [to_dict(c) for c in node.children],
    }


def export_json(root: ViewNode, indent: int = 2) -> str:
    return json.dumps(to_dict(root), indent=indent, ensure_ascii=False) + "\n"
