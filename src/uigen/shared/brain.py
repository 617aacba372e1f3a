"""Living Brain: persisted JSON project state.

Stored under the ``brain`` key of ``<state dir>/context.json``; any other
keys in that file belong to other tools and are preserved on save.
"""

from __future__ import annotations

import json
import logging
import time
import uuid
from pathlib import Path
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

logger = logging.getLogger(__name__)

BrainStatus = Literal["idle", "planning", "generating", "done", "error"]
UpdateType = Literal["thought", "action", "error", "completion"]


class BrainError(Exception):
    """The state file exists but cannot be read."""


def _now_ms() -> int:
    return int(time.time() * 1000)


class BrainUpdate(BaseModel):
    id: str = Field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: int = Field(default_factory=_now_ms)
    agent: str
    type: UpdateType
    message: str
    metadata: dict[str, Any] = {}


class BrainArtifact(BaseModel):
    path: str
    version: int = 1
    last_updated: int = Field(default_factory=_now_ms)


class LivingBrain(BaseModel):
    version: str = "1.0.0"
    status: BrainStatus = "idle"
    narrative: str = ""
    updates: list[BrainUpdate] = []
    artifacts: dict[str, BrainArtifact] = {}


def increment_version(version: str) -> str:
    """Bump the patch component; anything that isn't ``X.Y.Z`` is returned as-is."""
    parts = version.split(".")
    if len(parts) != 3 or not all(p.isdigit() for p in parts):
        return version
    parts[2] = str(int(parts[2]) + 1)
    return ".".join(parts)


class BrainStore:
    """Read/modify/write access to the Living Brain of one project."""

    def __init__(self, state_dir: str | Path) -> None:
        self.path = Path(state_dir) / "context.json"

    def _read_context(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            context = json.loads(self.path.read_text())
        except json.JSONDecodeError as exc:
            raise BrainError(f"Project state is not valid JSON: {self.path}: {exc}") from exc
        if not isinstance(context, dict):
            raise BrainError(f"Project state must be a JSON object: {self.path}")
        return context

    def load(self) -> LivingBrain:
        raw = self._read_context().get("brain")
        if raw is None:
            return LivingBrain()
        try:
            return LivingBrain.model_validate(raw)
        except ValidationError as exc:
            raise BrainError(f"Project state has an invalid brain section: {exc}") from exc

    def save(self, brain: LivingBrain) -> LivingBrain:
        """Persist ``brain`` with its patch version bumped; returns the saved copy."""
        saved = brain.model_copy(update={"version": increment_version(brain.version)})
        context = self._read_context()
        context["brain"] = saved.model_dump(mode="json")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps(context, indent=2))
        logger.debug("Saved project state v%s to %s", saved.version, self.path)
        return saved

    def add_update(
        self,
        agent: str,
        type: UpdateType,
        message: str,
        metadata: dict[str, Any] | None = None,
    ) -> LivingBrain:
        brain = self.load()
        brain.updates.append(
            BrainUpdate(agent=agent, type=type, message=message, metadata=metadata or {})
        )
        return self.save(brain)

    def update_artifact(self, kind: str, path: str | Path) -> LivingBrain:
        brain = self.load()
        existing = brain.artifacts.get(kind)
        if existing is None:
            brain.artifacts[kind] = BrainArtifact(path=str(path))
        else:
            brain.artifacts[kind] = BrainArtifact(path=str(path), version=existing.version + 1)
        return self.save(brain)

    def set_status(self, status: BrainStatus) -> LivingBrain:
        brain = self.load()
        brain.status = status
        return self.save(brain)
