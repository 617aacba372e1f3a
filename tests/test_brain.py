"""Tests for the persisted project state."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from uigen.shared.brain import BrainError, BrainStore, LivingBrain, increment_version


class TestIncrementVersion:
    def test_patch_bumped(self) -> None:
        assert increment_version("1.0.0") == "1.0.1"
        assert increment_version("2.3.9") == "2.3.10"

    def test_unparseable_kept(self) -> None:
        assert increment_version("beta") == "beta"
        assert increment_version("1.0") == "1.0"


class TestBrainStore:
    def test_load_missing_returns_fresh(self, tmp_path: Path) -> None:
        brain = BrainStore(tmp_path).load()
        assert brain == LivingBrain()
        assert brain.status == "idle"

    def test_save_bumps_version(self, tmp_path: Path) -> None:
        store = BrainStore(tmp_path / "state")
        saved = store.save(LivingBrain())
        assert saved.version == "1.0.1"
        assert store.load().version == "1.0.1"
        assert store.save(store.load()).version == "1.0.2"

    def test_other_keys_preserved(self, tmp_path: Path) -> None:
        path = tmp_path / "context.json"
        path.write_text(json.dumps({"session": {"id": "abc"}}))
        BrainStore(tmp_path).set_status("planning")

        context = json.loads(path.read_text())
        assert context["session"] == {"id": "abc"}
        assert context["brain"]["status"] == "planning"

    def test_add_update(self, tmp_path: Path) -> None:
        store = BrainStore(tmp_path)
        store.add_update("Architecture Compiler", "completion", "Planned 5 components", {"components": 5})
        store.add_update("Scaffold", "action", "Wrote files")

        updates = store.load().updates
        assert [u.message for u in updates] == ["Planned 5 components", "Wrote files"]
        assert updates[0].metadata == {"components": 5}
        assert updates[0].id != updates[1].id
        assert updates[0].timestamp > 0

    def test_update_artifact_versions(self, tmp_path: Path) -> None:
        store = BrainStore(tmp_path)
        store.update_artifact("architecture-plan", "a.json")
        brain = store.update_artifact("architecture-plan", "b.json")
        artifact = brain.artifacts["architecture-plan"]
        assert artifact.path == "b.json"
        assert artifact.version == 2

    def test_invalid_json_raises(self, tmp_path: Path) -> None:
        (tmp_path / "context.json").write_text("{broken")
        with pytest.raises(BrainError, match="not valid JSON"):
            BrainStore(tmp_path).load()

    def test_invalid_brain_section_raises(self, tmp_path: Path) -> None:
        (tmp_path / "context.json").write_text(json.dumps({"brain": {"status": "sleeping"}}))
        with pytest.raises(BrainError, match="invalid brain section"):
            BrainStore(tmp_path).load()
