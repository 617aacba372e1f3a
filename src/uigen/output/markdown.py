"""Markdown report builder: renders an ArchitecturePlan to a structured document."""

from __future__ import annotations

from collections.abc import Sequence

from uigen.schemas.architecture import ArchitecturePlan, GenerationQueueItem
from uigen.schemas.components import ComponentNode


def render_plan_markdown(plan: ArchitecturePlan, queue: Sequence[GenerationQueueItem] = ()) -> str:
    """Render an ArchitecturePlan (and optionally its queue) into a Markdown string."""
    sections: list[str] = []

    sections.append(f"# Architecture Plan: {plan.project.name}\n")
    if plan.project.description:
        sections.append(f"{plan.project.description}\n")
    sections.append(f"*Architecture: {plan.project.architecture}*\n")

    # Summary
    meta = plan.metadata
    sections.append("## Summary\n")
    sections.append(f"- **Components:** {meta.total_components}")
    sections.append(f"- **Routes:** {meta.total_routes}")
    sections.append(f"- **API endpoints:** {meta.total_api_endpoints}")
    sections.append(f"- **Server actions:** {meta.total_server_actions}")
    sections.append(f"- **Strategy:** {meta.generation_strategy} ({meta.documentation_level} docs)")
    sections.append("")

    # Hierarchy
    sections.append("## Component Hierarchy\n")
    for root in plan.hierarchy.values():
        sections.extend(_render_tree(root, 0))
    sections.append("")

    # Generation order
    if queue:
        sections.append("## Generation Order\n")
        sections.append("| # | Component | Type | Level | Order key |")
        sections.append("|---|-----------|------|-------|-----------|")
        for i, item in enumerate(queue, 1):
            sections.append(
                f"| {i} | {item.component.name} | {item.component.type.value} "
                f"| {item.level} | {item.generation_order} |"
            )
        sections.append("")

    # Routes
    if plan.routes:
        sections.append("## Routes\n")
        sections.append("| Path | Type | Page | Layout |")
        sections.append("|------|------|------|--------|")
        for path in sorted(plan.routes):
            route = plan.routes[path]
            sections.append(f"| `{path}` | {route.type} | {route.page} | {route.layout or '-'} |")
        sections.append("")

    # API
    if plan.api:
        sections.append("## API Endpoints\n")
        for path in sorted(plan.api):
            entry = plan.api[path]
            sections.append(f"- `{path}`: {', '.join(entry.methods)}: {', '.join(entry.actions)}")
        sections.append("")

    # Server actions
    if plan.server_actions:
        sections.append("## Server Actions\n")
        for group_name, group in plan.server_actions.items():
            sections.append(f"### {group_name}\n")
            for sa in group.actions:
                params = ", ".join(p.name for p in sa.parameters)
                line = f"- `{sa.name}({params})` → `{sa.returns}`"
                if sa.database:
                    line += f" (table: {sa.database})"
                sections.append(line)
            sections.append("")

    return "\n".join(sections)


def _render_tree(node: ComponentNode, depth: int) -> list[str]:
    lines = [f"{'  ' * depth}- **{node.name}** ({node.type.value})"]
    for child in node.children.values():
        lines.extend(_render_tree(child, depth + 1))
    return lines
