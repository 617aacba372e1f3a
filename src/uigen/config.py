"""YAML config loader: reads uigen.yml into ProjectConfig."""

from pathlib import Path

import yaml

from uigen.schemas.config import ProjectConfig


def load_config(path: str | Path) -> ProjectConfig:
    """Load and validate a project config file.

    Raises ``FileNotFoundError`` if the path doesn't exist and
    ``pydantic.ValidationError`` if the YAML content is invalid.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    raw = yaml.safe_load(path.read_text())
    if not isinstance(raw, dict):
        raise ValueError(f"Config file must be a YAML mapping, got {type(raw).__name__}")

    # Keys left blank in YAML load as None; fall back to the schema defaults.
    raw = {key: value for key, value in raw.items() if value is not None}
    raw.setdefault("base_directory", str(path.parent.resolve()))

    return ProjectConfig(**raw)
