"""Route resolver: derives app routes from a component's place in the tree.

Rules are applied independently, so one component can receive routes from
several of them:

- level 0                         -> root page at ``/``
- layout at level 1               -> feature page at ``<parent>/<kebab-name>``
- form                            -> ``<parent>/<base>/new`` + ``<parent>/<base>/[id]/edit``
- name contains Detail/View, or a
  declared action takes an ``id`` -> ``<parent>/<base>/[id]``
"""

from __future__ import annotations

from collections.abc import Sequence

from uigen.architecture.naming import base_name, kebab_case
from uigen.schemas.architecture import ComponentReference, RouteDefinition, RouteMetadata
from uigen.schemas.components import ActionType, ComponentNode, ComponentType


def parent_path(ancestry: Sequence[ComponentReference]) -> str:
    """Path of the nearest parent, built from its own ancestry chain.

    The root (level 0) owns ``/`` and contributes no segment, so children of
    the root get ``""`` and a level-1 ``Product`` yields ``/product``.
    """
    return "".join(
        f"/{kebab_case(ref.name)}"
        for ref in ancestry
        if ref.relationship == "parent" and ref.level > 0
    )


def resolve_routes(node: ComponentNode, level: int, parent: str = "") -> list[RouteDefinition]:
    """Return every route ``node`` contributes at ``level`` under ``parent``."""
    routes: list[RouteDefinition] = []

    if level == 0:
        routes.append(_root_route(node))

    if node.type == ComponentType.LAYOUT and level == 1:
        routes.append(_feature_route(node, parent))

    if node.type == ComponentType.FORM:
        routes.extend(_form_routes(node, parent))

    if needs_dynamic_route(node):
        routes.append(_dynamic_route(node, parent))

    return routes


def needs_dynamic_route(node: ComponentNode) -> bool:
    if "Detail" in node.name or "View" in node.name:
        return True
    return any("id" in action.parameters for action in node.actions)


def collect_component_names(node: ComponentNode) -> tuple[str, ...]:
    return tuple(n.name for n in node.iter_tree())


def _action_names(node: ComponentNode, action_type: ActionType | None = None) -> tuple[str, ...]:
    return tuple(
        a.name for a in node.actions if action_type is None or a.type == action_type
    )


def _root_route(node: ComponentNode) -> RouteDefinition:
    return RouteDefinition(
        path="/",
        type="page",
        page=node.name,
        layout="RootLayout",
        components=(node.name,),
        metadata=RouteMetadata(
            title=node.description or node.name,
            description=f"{node.name} - Main Application",
        ),
    )


def _feature_route(node: ComponentNode, parent: str) -> RouteDefinition:
    return RouteDefinition(
        path=f"{parent}/{kebab_case(node.name)}",
        type="page",
        page=node.name,
        layout=f"{node.name}Layout",
        components=collect_component_names(node),
        actions=_action_names(node),
        metadata=RouteMetadata(
            title=node.description or node.name,
            description=node.description,
        ),
    )


def _form_routes(node: ComponentNode, parent: str) -> list[RouteDefinition]:
    base = base_name(node.name)
    segment = f"{parent}/{kebab_case(base)}"
    form_actions = _action_names(node, ActionType.FORM_ACTION)

    create = RouteDefinition(
        path=f"{segment}/new",
        type="page",
        page=node.name,
        layout=f"{base}Layout",
        components=(node.name,),
        actions=form_actions,
        metadata=RouteMetadata(title=f"Create {base}", description=f"Create new {base}"),
    )
    edit = RouteDefinition(
        path=f"{segment}/[id]/edit",
        type="dynamic",
        page=node.name,
        layout=f"{base}Layout",
        components=(node.name,),
        actions=form_actions,
        metadata=RouteMetadata(title=f"Edit {base}", description=f"Edit existing {base}"),
    )
    return [create, edit]


def _dynamic_route(node: ComponentNode, parent: str) -> RouteDefinition:
    base = base_name(node.name)
    return RouteDefinition(
        path=f"{parent}/{kebab_case(base)}/[id]",
        type="dynamic",
        page=node.name,
        layout=f"{base}Layout",
        components=collect_component_names(node),
        actions=_action_names(node, ActionType.SERVER_ACTION),
        metadata=RouteMetadata(title=f"{base} Details", description=f"View {base} details"),
    )
