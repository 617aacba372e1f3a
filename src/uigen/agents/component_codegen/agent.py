"""Component Generator agent: writes component source for one queue item."""

from __future__ import annotations

from typing import Any

from uigen.agents.base import BaseAgent, extract_json
from uigen.agents.component_codegen.prompts import SYSTEM_PROMPT, USER_MESSAGE_TEMPLATE
from uigen.schemas.architecture import GenerationQueueItem
from uigen.schemas.codegen import GeneratedComponent


def _bullets(items: list[str]) -> str:
    return "\n".join(f"- {item}" for item in items) or "- None"


class ComponentCodegenAgent(BaseAgent):
    """Generates the .tsx source for a single GenerationQueueItem."""

    @property
    def name(self) -> str:
        return "Component Generator"

    def get_system_prompt(self) -> str:
        return SYSTEM_PROMPT

    def build_user_message(self, item: GenerationQueueItem) -> str:
        return USER_MESSAGE_TEMPLATE.format(
            name=item.component.name,
            type=item.component.type.value,
            level=item.level,
            documentation=item.self_documentation.strip(),
            routes=_bullets([f"{r.path} ({r.type})" for r in item.routes]),
            actions=_bullets([
                f"{a.name} ({a.type.value})" + (f" -> {a.server_action}" if a.server_action else "")
                for a in item.actions
            ]),
            server_actions=_bullets([
                f"{sa.name}({', '.join(p.name for p in sa.parameters)}): {sa.returns}"
                for sa in item.server_actions
            ]),
        )

    def parse_output(self, raw_text: str) -> GeneratedComponent:
        data = extract_json(raw_text)
        return GeneratedComponent(**data)

    async def generate(
        self, item: GenerationQueueItem, *, on_progress: Any | None = None
    ) -> GeneratedComponent:
        result = await self.run(self.build_user_message(item), on_progress=on_progress)
        if not result.file_name:
            result.file_name = f"{item.component.name}.tsx"
        return result
