"""Span tree serialization: JSON round-trip for SpanNode trees.

Useful for caching scan results, golden-file tests and debugging.
All output is deterministic (sorted keys).

Example:
    from mathflow import parse
    from mathflow.serialization import to_json, from_json

    doc = parse("$$\\nx\\n$$")
    json_str = to_json(doc.tree, doc.source)
    assert from_json(json_str) == doc.tree

Thread Safety:
    All functions are pure and safe to call from any thread.

"""

import json
from typing import Any

from mathflow.location import Point
from mathflow.tokens import SpanType
from mathflow.tree import SpanNode


def to_dict(node: SpanNode, source: str | None = None) -> dict[str, Any]:
    """Convert a span tree to a JSON-compatible dict.

    Args:
        node: Root of the tree to convert.
        source: When given, leaf spans carry their ``text``.

    Returns:
        Dict with ``type``, ``start``, ``end`` and ``children``.

    """
    result: dict[str, Any] = {
        "type": node.type.value,
        "start": _point_to_dict(node.start),
        "end": _point_to_dict(node.end),
        "children": [to_dict(child, source) for child in node.children],
    }
    if source is not None and not node.children:
        result["text"] = node.text(source)
    return result


def from_dict(data: dict[str, Any]) -> SpanNode:
    """Reconstruct a span tree from a dict produced by ``to_dict``."""
    return SpanNode(
        type=SpanType(data["type"]),
        start=_point_from_dict(data["start"]),
        end=_point_from_dict(data["end"]),
        children=tuple(from_dict(child) for child in data.get("children", ())),
    )


def to_json(node: SpanNode, source: str | None = None, *, indent: int | None = None) -> str:
    return json.dumps(to_dict(node, source), sort_keys=True, indent=indent)


def from_json(json_str: str) -> SpanNode:
    return from_dict(json.loads(json_str))


def _point_to_dict(point: Point) -> dict[str, int]:
    return {"line": point.line, "column": point.column, "offset": point.offset}


def _point_from_dict(data: dict[str, int]) -> Point:
    return Point(line=data["line"], column=data["column"], offset=data["offset"])
