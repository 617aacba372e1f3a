"""Configuration schema: validates uigen.yml."""

from pathlib import Path

from pydantic import BaseModel, model_validator

from uigen.schemas.architecture import ArchitectureType, ProjectInfo


class ProjectConfig(BaseModel):
    """Top-level configuration loaded from uigen.yml.

    Relative paths are resolved against ``base_directory`` (the directory
    holding the config file) by ``load_config``.
    """

    project_name: str
    description: str = ""
    architecture: ArchitectureType = "nextjs-app-router"

    # Inputs
    manifest_path: str = ".uigen/component-list.json"

    # Outputs
    output_directory: str = "."
    app_directory: str = "app"
    components_directory: str = "components"
    actions_directory: str = "actions"
    state_directory: str = ".uigen"

    # Model used for component code generation
    model: str = "gpt-4o"

    base_directory: str = "."

    @model_validator(mode="after")
    def check_project_name(self) -> "ProjectConfig":
        if not self.project_name.strip():
            raise ValueError("project_name must not be empty")
        return self

    def resolve(self, path: str) -> Path:
        p = Path(path)
        return p if p.is_absolute() else Path(self.base_directory) / p

    @property
    def manifest_file(self) -> Path:
        return self.resolve(self.manifest_path)

    @property
    def output_root(self) -> Path:
        return self.resolve(self.output_directory)

    @property
    def state_root(self) -> Path:
        return self.resolve(self.state_directory)

    def project_info(self) -> ProjectInfo:
        return ProjectInfo(
            name=self.project_name,
            description=self.description,
            architecture=self.architecture,
        )
