"""Self-documentation blocks prepended to every generated component.

Deterministic string formatting only; no model calls happen here.
"""

from __future__ import annotations

from collections.abc import Sequence

from uigen.schemas.architecture import (
    ActionDefinition,
    ComponentDocumentation,
    ComponentReference,
    RouteDefinition,
    ServerActionDefinition,
)
from uigen.schemas.components import ActionType, ComponentNode, ComponentType

USER_EXPECTATIONS: dict[ComponentType, tuple[str, ...]] = {
    ComponentType.FORM: (
        "Users expect clear validation messages",
        "Users expect loading states during submission",
        "Users expect success/error feedback",
        "Users expect form data persistence on errors",
    ),
    ComponentType.DISPLAY: (
        "Users expect accurate and up-to-date information",
        "Users expect loading states while data fetches",
        "Users expect empty states when no data available",
        "Users expect consistent styling and layout",
    ),
    ComponentType.INTERACTIVE: (
        "Users expect immediate visual feedback on interactions",
        "Users expect consistent behavior across actions",
        "Users expect clear error handling",
        "Users expect accessibility features (keyboard navigation, etc.)",
    ),
    ComponentType.LAYOUT: (
        "Users expect consistent spacing and alignment",
        "Users expect responsive design across devices",
        "Users expect smooth transitions and animations",
        "Users expect proper content hierarchy",
    ),
}

LEVEL_DESCRIPTIONS: dict[int, str] = {
    0: "Root Application Container",
    1: "Feature Module",
    2: "Sub-feature Component",
    3: "Atomic Component",
    4: "Utility Component",
}


def level_description(level: int) -> str:
    return LEVEL_DESCRIPTIONS.get(level, f"Level {level} Component")


def _parents(ancestry: Sequence[ComponentReference]) -> list[ComponentReference]:
    return [ref for ref in ancestry if ref.relationship == "parent"]


def integration_notes(
    node: ComponentNode,
    ancestry: Sequence[ComponentReference],
    actions: Sequence[ActionDefinition],
    server_actions: Sequence[ServerActionDefinition],
) -> list[str]:
    notes: list[str] = []

    parents = _parents(ancestry)
    if parents:
        notes.append(f"Receives data and callbacks from {', '.join(p.name for p in parents)}")

    if server_actions:
        notes.append(f"Integrates with server actions: {', '.join(sa.name for sa in server_actions)}")

    if any(a.type == ActionType.FORM_ACTION for a in actions):
        notes.append("Handles form submissions with optimistic updates")

    if node.database:
        notes.append(f"Interacts with database table: {node.database.table}")
        notes.append(f"Database operations: {', '.join(node.database.operations)}")

    return notes


def data_flow(
    node: ComponentNode,
    ancestry: Sequence[ComponentReference],
    server_actions: Sequence[ServerActionDefinition],
) -> list[str]:
    """Edges of the chain ``parent -> node -> server action -> database``."""
    flow = [f"{parent.name} → {node.name} (props/data)" for parent in _parents(ancestry)]
    for sa in server_actions:
        params = ", ".join(p.name for p in sa.parameters)
        flow.append(f"{node.name} → {sa.name} ({params})")
    for sa in server_actions:
        if sa.database:
            flow.append(f"{sa.name} → Database.{sa.database} ({sa.returns})")
    return flow


def usage_example(node: ComponentNode, actions: Sequence[ActionDefinition]) -> str:
    props: list[str] = []
    if node.type == ComponentType.DISPLAY:
        props.append("  data={data}")
    for action in actions:
        if action.type == ActionType.EVENT_HANDLER:
            props.append(f"  {action.name}={{{action.name}}}")
    return "\n".join([f"<{node.name}", *props, "/>"])


def build_documentation(
    node: ComponentNode,
    level: int,
    ancestry: Sequence[ComponentReference],
    actions: Sequence[ActionDefinition],
    routes: Sequence[RouteDefinition],
    server_actions: Sequence[ServerActionDefinition],
) -> ComponentDocumentation:
    return ComponentDocumentation(
        purpose=node.description or f"{node.name} component",
        user_expectations=list(USER_EXPECTATIONS.get(node.type, ())),
        integration_notes=integration_notes(node, ancestry, actions, server_actions),
        data_flow=data_flow(node, ancestry, server_actions),
        usage_example=usage_example(node, actions),
        dependencies=list(ancestry),
        related_actions=[a.name for a in actions],
        related_routes=[r.path for r in routes],
    )


def format_documentation(
    node: ComponentNode,
    level: int,
    doc: ComponentDocumentation,
    server_actions: Sequence[ServerActionDefinition],
) -> str:
    """Render ``doc`` as a JSDoc-style block comment."""

    def bullets(items: list[str], empty: str) -> list[str]:
        return [f" *   - {item}" for item in items] or [f" *   - {empty}"]

    lines = [
        "/**",
        f" * Component: {node.name}",
        f" * Level: {level} ({level_description(level)})",
        f" * Type: {node.type.value}",
        " *",
        " * Dependencies:",
        *(
            [f" *   {'  ' * dep.level}- {dep.name}" for dep in doc.dependencies]
            or [" *   - None"]
        ),
        " *",
        " * Routes:",
        *bullets(doc.related_routes, "None (used within parent)"),
        " *",
        " * Actions:",
        *bullets(doc.related_actions, "None"),
        " *",
        " * Server Actions:",
        *bullets([f"{sa.name}: {sa.description}" for sa in server_actions], "None"),
        " *",
        f" * Purpose: {doc.purpose}",
        " *",
        " * User Expectations:",
        *(f" * - {e}" for e in doc.user_expectations),
        " *",
        " * Integration Notes:",
        *(f" * - {n}" for n in doc.integration_notes),
        " *",
        " * Data Flow:",
        *(f" * {f}" for f in doc.data_flow),
        " *",
        " * Usage Example:",
        " * ```tsx",
        *(f" * {line}" for line in doc.usage_example.splitlines()),
        " * ```",
        " */",
    ]
    return "\n".join(lines)


def synthesize(
    node: ComponentNode,
    level: int,
    ancestry: Sequence[ComponentReference],
    actions: Sequence[ActionDefinition],
    routes: Sequence[RouteDefinition],
    server_actions: Sequence[ServerActionDefinition],
) -> str:
    """Build and format the documentation block for one component."""
    doc = build_documentation(node, level, ancestry, actions, routes, server_actions)
    return format_documentation(node, level, doc, server_actions)
