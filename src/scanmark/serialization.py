"""Tree serialization — JSON round-trip for ParseTree.

Converts a ParseTree to/from a JSON-compatible dict. The arena layout is
kept as-is: nodes are listed by index and children refer to nodes by
index, with text children inlined as ``{"text": ..., "span": [a, b]}``.

All output is deterministic (sorted keys) for cache-key stability.
``info`` values are stored untouched; they must be JSON-compatible for
``to_json`` to succeed. Tuples in ``info`` come back as lists.

Example:
    from scanmark.serialization import to_json, from_json

    tree = parser.parse("[p]Hello[p.]")
    restored = from_json(to_json(tree))
    assert restored.outline() == tree.outline()

Thread Safety:
    All functions are pure — safe to call from any thread.

"""

import json
from typing import Any

from scanmark.nodes import ROOT_INDEX, Node, ParseTree, Span, Text


def to_dict(tree: ParseTree) -> dict[str, Any]:
    """Convert a ParseTree to a JSON-compatible dict."""
    return {
        "_type": "ParseTree",
        "text": tree.text,
        "nodes": [_node_to_dict(node) for node in tree.nodes],
    }


def _node_to_dict(node: Node) -> dict[str, Any]:
    return {
        "index": node.index,
        "token": node.token,
        "info": node.info,
        "parent": node.parent,
        "unit": node.unit,
        "open_span": _span(node.open_span),
        "outer_range": _span(node.outer_range),
        "inner_range": _span(node.inner_range),
        "children": [
            {"text": c.content, "span": [c.span.start, c.span.stop]} if isinstance(c, Text) else c
            for c in node.children
        ],
    }


def _span(span: Span | None) -> list[int] | None:
    return None if span is None else [span.start, span.stop]


def from_dict(data: dict[str, Any]) -> ParseTree:
    """Rebuild a ParseTree from a dict produced by ``to_dict``.

    Raises:
        ValueError: If the dict does not describe a ParseTree
    """
    if data.get("_type") != "ParseTree":
        msg = f"Expected ParseTree, got {data.get('_type')!r}"
        raise ValueError(msg)

    nodes: list[Node] = []
    for position, raw in enumerate(data.get("nodes", [])):
        if raw.get("index") != position:
            msg = f"Node at position {position} has index {raw.get('index')!r}"
            raise ValueError(msg)
        nodes.append(
            Node(
                index=position,
                token=raw.get("token"),
                info=raw.get("info"),
                parent=raw.get("parent"),
                children=[_child(c) for c in raw.get("children", [])],
                open_span=_unspan(raw.get("open_span")),
                outer_range=_unspan(raw.get("outer_range")),
                inner_range=_unspan(raw.get("inner_range")),
                unit=bool(raw.get("unit", False)),
            )
        )
    if not nodes or nodes[ROOT_INDEX].token is not None:
        msg = "Serialized tree has no root node"
        raise ValueError(msg)
    return ParseTree(data["text"], nodes)


def _child(value: Any) -> Text | int:
    if isinstance(value, int):
        return value
    start, stop = value["span"]
    return Text(value["text"], Span(start, stop))


def _unspan(value: list[int] | None) -> Span | None:
    return None if value is None else Span(*value)


def to_json(tree: ParseTree, *, indent: int | None = None) -> str:
    """Serialize a ParseTree to a JSON string."""
    return json.dumps(to_dict(tree), sort_keys=True, indent=indent)


def from_json(data: str) -> ParseTree:
    """Deserialize a ParseTree from a JSON string."""
    return from_dict(json.loads(data))
