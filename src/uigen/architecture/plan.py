"""Project a generation queue into an ArchitecturePlan (routes, API, server actions)."""

from __future__ import annotations

from collections.abc import Sequence

from uigen.architecture.actions import ActionSynthesizer
from uigen.schemas.architecture import (
    ApiRoute,
    ArchitecturePlan,
    GenerationQueueItem,
    PlanMetadata,
    ProjectInfo,
    RouteDefinition,
    ServerActionGroup,
)
from uigen.schemas.components import ComponentNode


def build_plan(
    queue: Sequence[GenerationQueueItem],
    root: ComponentNode,
    project: ProjectInfo,
    synthesizer: ActionSynthesizer | None = None,
) -> ArchitecturePlan:
    """Aggregate ``queue`` into map-keyed tables.

    Routes are keyed by path and the last item in queue order wins a
    collision. Because items carry their inherited routes too, a route is
    re-written by every descendant with an identical value.
    """
    synthesizer = synthesizer or ActionSynthesizer()
    routes: dict[str, RouteDefinition] = {}
    api: dict[str, ApiRoute] = {}
    server_actions: dict[str, ServerActionGroup] = {}

    for item in queue:
        for route in item.routes:
            routes[route.path] = route

        for sa in item.server_actions:
            endpoint = synthesizer.generate_api_endpoint(sa, item.component)
            entry = api.setdefault(endpoint.path, ApiRoute())
            if endpoint.method not in entry.methods:
                entry.methods.append(endpoint.method)
            entry.actions.append(endpoint.action)

        if item.server_actions:
            server_actions[f"{item.component.name}Actions"] = ServerActionGroup(
                description=f"Server actions for {item.component.name}",
                actions=list(item.server_actions),
            )

    return ArchitecturePlan(
        project=project,
        hierarchy={root.name: root},
        routes=routes,
        api=api,
        server_actions=server_actions,
        metadata=PlanMetadata(
            total_components=len(queue),
            total_routes=len(routes),
            total_api_endpoints=len(api),
            total_server_actions=sum(len(g.actions) for g in server_actions.values()),
        ),
    )


def plan_overview(queue: Sequence[GenerationQueueItem]) -> dict[str, int]:
    """Counts shown after compiling; routes are de-duplicated by path."""
    return {
        "components": len(queue),
        "server_actions": sum(len(item.server_actions) for item in queue),
        "routes": len({route.path for item in queue for route in item.routes}),
        "client_actions": sum(len(item.actions) for item in queue),
    }
