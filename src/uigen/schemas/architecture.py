"""Pydantic models produced by the architecture compiler.

Field names are snake_case in Python and camelCase on the wire
(``model_dump(by_alias=True)``) so plan files keep the shape downstream
emitters and the manifest tooling expect.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from uigen.schemas.components import ActionType, ComponentNode

HttpMethod = Literal["GET", "POST", "PUT", "DELETE", "PATCH"]
ArchitectureType = Literal["nextjs-app-router", "nextjs-pages", "react-spa", "custom"]


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class FrozenCamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class ComponentReference(FrozenCamelModel):
    """Ancestry breadcrumb recorded for every ancestor of a queued node."""

    name: str
    level: int
    relationship: Literal["parent"] = "parent"


class RouteMetadata(FrozenCamelModel):
    title: str = ""
    description: str = ""


class RouteDefinition(FrozenCamelModel):
    """A filesystem-style app route (``/``, ``/feature``, ``/feature/[id]/edit``)."""

    path: str
    type: Literal["page", "dynamic"] = "page"
    page: str = ""
    layout: str = ""
    components: tuple[str, ...] = ()
    actions: tuple[str, ...] = ()
    metadata: RouteMetadata = RouteMetadata()


class ActionDefinition(FrozenCamelModel):
    """Client-side action: a declared node action or a wrapper around a server action."""

    name: str
    type: ActionType
    description: str = ""
    parameters: tuple[str, ...] = ()
    server_action: str | None = None


class ServerActionParameter(FrozenCamelModel):
    name: str
    type: str
    required: bool = True
    description: str = ""


class CachingPolicy(FrozenCamelModel):
    strategy: Literal["no-cache", "force-cache", "revalidate"] = "no-cache"
    revalidate: int | None = None


class ServerActionDefinition(FrozenCamelModel):
    """Server-side action synthesized for a component."""

    name: str
    description: str = ""
    parameters: tuple[ServerActionParameter, ...] = ()
    returns: str = "void"
    database: str | None = None
    validation: str | None = None
    middleware: tuple[str, ...] = ()
    error_handling: tuple[str, ...] = ()
    caching: CachingPolicy = CachingPolicy()


class ApiEndpoint(FrozenCamelModel):
    """One endpoint derived from one server action."""

    path: str
    method: HttpMethod
    action: str


class ApiRoute(CamelModel):
    """Aggregate of every endpoint sharing a path."""

    methods: list[HttpMethod] = []
    actions: list[str] = []


class ComponentDocumentation(CamelModel):
    purpose: str
    user_expectations: list[str] = []
    integration_notes: list[str] = []
    data_flow: list[str] = []
    usage_example: str = ""
    dependencies: list[ComponentReference] = []
    related_actions: list[str] = []
    related_routes: list[str] = []


class GenerationQueueItem(FrozenCamelModel):
    """Build instructions for one component, created once during traversal."""

    component: ComponentNode
    level: int
    dependencies: tuple[ComponentReference, ...] = ()
    routes: tuple[RouteDefinition, ...] = ()
    actions: tuple[ActionDefinition, ...] = ()
    server_actions: tuple[ServerActionDefinition, ...] = ()
    generation_order: int
    self_documentation: str = ""


class ProjectInfo(CamelModel):
    name: str
    description: str = ""
    architecture: ArchitectureType = "nextjs-app-router"


class ServerActionGroup(CamelModel):
    description: str
    actions: list[ServerActionDefinition] = []


class PlanMetadata(CamelModel):
    total_components: int = 0
    total_routes: int = 0
    total_api_endpoints: int = 0
    total_server_actions: int = 0
    generation_strategy: str = "complete-architecture"
    documentation_level: Literal["basic", "standard", "comprehensive"] = "comprehensive"


class ArchitecturePlan(CamelModel):
    """Aggregate projection of a generation queue. Built once, read-only afterward."""

    project: ProjectInfo
    hierarchy: dict[str, ComponentNode]
    routes: dict[str, RouteDefinition] = {}
    api: dict[str, ApiRoute] = {}
    server_actions: dict[str, ServerActionGroup] = {}
    metadata: PlanMetadata = PlanMetadata()
