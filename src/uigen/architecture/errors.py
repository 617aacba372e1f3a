"""Exceptions raised while compiling a component tree into a generation queue."""

from __future__ import annotations


class CompilerError(Exception):
    """Base class; carries the offending node's name and tree path."""

    def __init__(self, message: str, *, node_name: str = "", node_path: str = "") -> None:
        self.node_name = node_name
        self.node_path = node_path
        location = node_path or node_name
        super().__init__(f"{message} (at {location})" if location else message)


class MalformedComponentError(CompilerError):
    """A node cannot be compiled, e.g. it has no name."""


class ActionSynthesisError(CompilerError):
    """The action synthesizer failed for a node; the plan would be incomplete."""


class DependencyCycleError(CompilerError):
    """Declared cross-references form a cycle, so no generation order exists."""

    def __init__(self, names: list[str]) -> None:
        self.names = names
        super().__init__(f"Dependency cycle between components: {', '.join(names)}")
