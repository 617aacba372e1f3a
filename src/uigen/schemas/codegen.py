"""Pydantic models for the component code generation agent output."""

from pydantic import BaseModel


class GeneratedComponent(BaseModel):
    """Source for one component, as returned by the model."""

    component_name: str
    file_name: str = ""
    code: str
    notes: list[str] = []
