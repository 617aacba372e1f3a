"""Component tree models: the declarative input to the architecture compiler."""

from __future__ import annotations

from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class ComponentType(str, Enum):
    """Structural role of a component. Unknown values are treated as DISPLAY."""

    LAYOUT = "layout"
    FORM = "form"
    DISPLAY = "display"
    INTERACTIVE = "interactive"


class ActionType(str, Enum):
    SERVER_ACTION = "server-action"
    CLIENT_ACTION = "client-action"
    EVENT_HANDLER = "event-handler"
    FORM_ACTION = "form-action"
    API_ROUTE = "api-route"
    MIDDLEWARE = "middleware"


DatabaseOperation = Literal["read", "write", "update", "delete"]


class ComponentAction(BaseModel):
    """An action declared directly on a component in the manifest."""

    name: str
    type: ActionType = ActionType.EVENT_HANDLER
    description: str = ""
    parameters: list[str] = []


class DatabaseBinding(BaseModel):
    """Table a component reads from or writes to."""

    table: str
    operations: list[DatabaseOperation] = []


class ComponentNode(BaseModel):
    """A node in the component tree.

    ``children`` is keyed by child name; the tree owns its children and
    subtrees are never shared. ``depends_on`` lists names of other nodes
    that must be generated before this one (cross-references outside the
    parent/child relationship).
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    name: str
    type: ComponentType = ComponentType.DISPLAY
    description: str = ""
    children: dict[str, ComponentNode] = {}
    actions: list[ComponentAction] = []
    database: DatabaseBinding | None = None
    depends_on: list[str] = []

    @field_validator("type", mode="before")
    @classmethod
    def coerce_unknown_type(cls, value: object) -> object:
        if isinstance(value, ComponentType):
            return value
        if isinstance(value, str):
            try:
                return ComponentType(value.strip().lower())
            except ValueError:
                return ComponentType.DISPLAY
        return ComponentType.DISPLAY

    def iter_tree(self):
        """Yield this node and every descendant in pre-order."""
        yield self
        for child in self.children.values():
            yield from child.iter_tree()
