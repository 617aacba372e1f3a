"""Scaffold writer: turns a generation queue into route, action and component files."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path

from uigen.architecture.naming import kebab_case
from uigen.schemas.architecture import GenerationQueueItem, RouteDefinition, ServerActionDefinition

logger = logging.getLogger(__name__)

_SERVER_ACTION_IMPORTS = """\
'use server';

import { db } from '@/lib/db';
import { z } from 'zod';
import { revalidatePath } from 'next/cache';
"""


def render_server_action(action: ServerActionDefinition) -> str:
    params = ", ".join(
        f"{p.name}{'' if p.required else '?'}: {p.type}" for p in action.parameters
    )
    param_types = ", ".join(p.type for p in action.parameters)
    param_names = ", ".join(p.name for p in action.parameters)

    body: list[str] = [f"    // TODO: Implement {action.name}"]
    if action.database:
        body.append(f"    // Database: {action.database}")
    if action.validation:
        body.append(f"    // Validation: {action.validation}")
    if action.middleware:
        body.append(f"    // Middleware: {', '.join(action.middleware)}")

    return "\n".join([
        "/**",
        f" * {action.description}",
        " *",
        f" * @param {{{param_types}}} {param_names}",
        f" * @returns {{Promise<{action.returns}>}}",
        " */",
        f"export async function {action.name}({params}): Promise<{action.returns}> {{",
        "  try {",
        *body,
        "",
        "    throw new Error('Not implemented');",
        "  } catch (error) {",
        f"    console.error('Error in {action.name}:', error);",
        "    throw error;",
        "  }",
        "}",
    ])


def render_server_action_file(component_name: str, actions: Sequence[ServerActionDefinition]) -> str:
    """Render the ``'use server'`` module holding every action of one component."""
    rendered = "\n\n".join(render_server_action(a) for a in actions)
    return f"{_SERVER_ACTION_IMPORTS}\n{rendered}\n"


def _component_import(name: str) -> str:
    return f"import {{ {name} }} from '@/components/{kebab_case(name)}/{name}';"


def render_page_file(
    route: RouteDefinition, server_actions: Sequence[ServerActionDefinition] = ()
) -> str:
    """Render ``page.tsx`` for ``route``.

    ``server_actions`` are those of the route's owning component; they are
    imported from its actions module. Declared client actions stay inside
    the component itself.
    """
    page = route.components[0] if route.components else route.page
    is_dynamic = route.type == "dynamic"
    params = "{ params }: { params: { id: string } }" if is_dynamic else ""

    lines = [_component_import(page)]
    if server_actions:
        names = ", ".join(sa.name for sa in server_actions)
        lines.append(f"import {{ {names} }} from '@/actions/{kebab_case(route.page or page)}Actions';")
    lines.append("")
    lines.append(f"export default async function Page({params}) {{")
    if is_dynamic and server_actions:
        fetcher = next((sa for sa in server_actions if sa.name.startswith("get")), server_actions[0])
        lines.append(f"  // Fetch data using {fetcher.name}(params.id)")
    lines.extend([
        "  return (",
        '    <div className="container mx-auto py-8">',
        f"      <{page} />",
        "    </div>",
        "  );",
        "}",
    ])
    return "\n".join(lines) + "\n"


def render_layout_file(route: RouteDefinition) -> str:
    layout = route.layout or "Layout"
    return "\n".join([
        "import { ReactNode } from 'react';",
        "",
        f"export default function {layout}({{ children }}: {{ children: ReactNode }}) {{",
        "  return (",
        f'    <div className="{kebab_case(layout)}">',
        "      {children}",
        "    </div>",
        "  );",
        "}",
    ]) + "\n"


def collect_route_files(queue: Sequence[GenerationQueueItem]) -> dict[str, RouteDefinition]:
    """Unique routes by path; the first definition wins and later owners are appended.

    Items carry inherited routes too, so a route's ``page`` (the component
    that contributed it) identifies its owner rather than the carrying item.
    """
    merged: dict[str, RouteDefinition] = {}
    for item in queue:
        for route in item.routes:
            existing = merged.get(route.path)
            if existing is None:
                merged[route.path] = route.model_copy(update={"components": (route.page,)})
            elif route.page not in existing.components:
                merged[route.path] = existing.model_copy(
                    update={"components": existing.components + (route.page,)}
                )
    return merged


def route_directory(app_dir: Path, path: str) -> Path:
    return app_dir if path == "/" else app_dir.joinpath(*path.strip("/").split("/"))


def write_scaffold(
    queue: Sequence[GenerationQueueItem],
    *,
    app_dir: Path,
    components_dir: Path,
    actions_dir: Path,
    component_code: Mapping[str, str] | None = None,
) -> list[Path]:
    """Write every scaffold file and return the paths in write order.

    ``component_code`` maps component names to generated source; components
    without an entry get an empty body under their documentation header.
    """
    component_code = component_code or {}
    written: list[Path] = []

    for item in queue:
        name = item.component.name
        target = components_dir / kebab_case(name) / f"{name}.tsx"
        target.parent.mkdir(parents=True, exist_ok=True)
        code = component_code.get(name, "")
        target.write_text(f"{item.self_documentation}\n\n{code}".rstrip() + "\n")
        written.append(target)

    for item in queue:
        if not item.server_actions:
            continue
        target = actions_dir / f"{kebab_case(item.component.name)}Actions.ts"
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(render_server_action_file(item.component.name, item.server_actions))
        written.append(target)

    server_actions = {item.component.name: item.server_actions for item in queue}
    for path, route in collect_route_files(queue).items():
        route_dir = route_directory(app_dir, path)
        route_dir.mkdir(parents=True, exist_ok=True)
        page = route_dir / "page.tsx"
        page.write_text(render_page_file(route, server_actions.get(route.page, ())))
        written.append(page)
        if route.layout:
            layout = route_dir / "layout.tsx"
            layout.write_text(render_layout_file(route))
            written.append(layout)

    logger.info("Wrote %d scaffold files", len(written))
    return written
