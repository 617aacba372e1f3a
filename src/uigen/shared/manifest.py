"""Component-list manifest loading.

The manifest is a JSON object whose first non-``metadata`` key names the
root component::

    {
      "Dashboard": {
        "type": "layout",
        "description": "Main shell",
        "children": {
          "ProductList": {"type": "display"},
          "ProductForm": {"type": "form", "database": {"table": "products", "operations": ["write"]}}
        }
      },
      "metadata": {"version": "1.0"}
    }

Child names come from mapping keys. A missing ``type`` defaults to
``layout`` and a missing description to ``"<Name> component"``.
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from uigen.schemas.components import ComponentNode

logger = logging.getLogger(__name__)

_RESERVED_KEYS = {"metadata"}


class ManifestError(Exception):
    """The manifest file is missing, unreadable, or has no root component."""


def _node_payload(name: str, data: dict[str, Any]) -> dict[str, Any]:
    children = data.get("children") or {}
    if not isinstance(children, dict):
        raise ManifestError(f"'children' of {name} must be an object, got {type(children).__name__}")

    payload = {
        key: value
        for key, value in data.items()
        if key not in ("name", "children") and value is not None
    }
    payload["name"] = name
    payload.setdefault("type", "layout")
    payload["description"] = data.get("description") or f"{name} component"
    payload["children"] = {}
    for child_name, child in children.items():
        if child is not None and not isinstance(child, dict):
            raise ManifestError(f"Component {child_name} must be an object, got {type(child).__name__}")
        payload["children"][child_name] = _node_payload(child_name, child or {})
    return payload


def component_tree_from_dict(data: dict[str, Any]) -> ComponentNode:
    """Build the component tree from an already-parsed manifest object."""
    root_key = next((key for key in data if key not in _RESERVED_KEYS), None)
    if root_key is None:
        raise ManifestError("Manifest has no root component")

    root = data[root_key]
    if not isinstance(root, dict):
        raise ManifestError(f"Root component {root_key} must be an object")

    try:
        return ComponentNode.model_validate(_node_payload(root_key, root))
    except ValidationError as exc:
        raise ManifestError(f"Invalid component manifest: {exc}") from exc


def load_component_tree(path: str | Path) -> ComponentNode:
    path = Path(path)
    if not path.exists():
        raise ManifestError(f"Component manifest not found: {path}")
    try:
        data = json.loads(path.read_text())
    except json.JSONDecodeError as exc:
        raise ManifestError(f"Component manifest is not valid JSON: {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ManifestError(f"Component manifest must be a JSON object, got {type(data).__name__}")

    tree = component_tree_from_dict(data)
    logger.debug("Loaded component tree %s from %s", tree.name, path)
    return tree


def find_duplicate_names(root: ComponentNode) -> list[str]:
    """Names that appear more than once; the compiler keeps only the first."""
    counts = Counter(node.name for node in root.iter_tree())
    return sorted(name for name, count in counts.items() if count > 1)


def find_unnamed_paths(root: ComponentNode) -> list[str]:
    """Tree paths of nodes with an empty name."""
    paths: list[str] = []

    def walk(node: ComponentNode, trail: list[str]) -> None:
        here = [*trail, node.name or "<unnamed>"]
        if not node.name.strip():
            paths.append(" > ".join(here))
        for child in node.children.values():
            walk(child, here)

    walk(root, [])
    return paths
