"""Base agent ABC: defines the pattern every generation agent follows."""

from __future__ import annotations

import json
import logging
import re
from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, ValidationError

from uigen.shared.llm_client import LLMClient

logger = logging.getLogger(__name__)


class BaseAgent(ABC):
    """Abstract base class for agents that turn one request into one model.

    Subclasses implement:
    - ``name``: human-readable agent name
    - ``get_system_prompt()``: returns the system prompt string
    - ``parse_output(raw_text)``: parses the model's text into a Pydantic model
    """

    def __init__(self, client: LLMClient) -> None:
        self.client = client

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name for progress display."""

    @abstractmethod
    def get_system_prompt(self) -> str:
        """Return the system prompt for this agent."""

    @abstractmethod
    def parse_output(self, raw_text: str) -> BaseModel:
        """Parse the model's final text response into a Pydantic model."""

    async def run(self, user_message: str, *, on_progress: Any | None = None) -> BaseModel:
        """Request a completion and parse it, asking once for a re-format on failure."""
        if on_progress:
            on_progress("Waiting for model…")
        raw = await self.client.simple_completion(
            system=self.get_system_prompt(), user_message=user_message,
        )
        logger.debug("Agent %s raw output:\n%s", self.name, raw[:500])

        try:
            return self.parse_output(raw)
        except (ValueError, json.JSONDecodeError, KeyError, ValidationError) as first_err:
            logger.warning(
                "Agent %s output was not valid JSON, requesting re-format. Error: %s",
                self.name, first_err,
            )

        if on_progress:
            on_progress("Re-formatting output as JSON…")
        retry_message = (
            f"{user_message}\n\n"
            "Your previous response could not be parsed:\n"
            f"{raw[:2000]}\n\n"
            "Respond with a single JSON object (no markdown, no explanation) "
            "matching the schema described in your instructions."
        )
        raw_retry = await self.client.simple_completion(
            system=self.get_system_prompt(), user_message=retry_message,
        )
        logger.debug("Agent %s retry output:\n%s", self.name, raw_retry[:500])
        return self.parse_output(raw_retry)


def extract_json(text: str) -> dict[str, Any]:
    """Extract a JSON object from text that may contain markdown fences."""
    text = text.strip()

    # 1. Direct parse (clean JSON response), tolerating trailing text
    if text.startswith("{"):
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            try:
                obj, _ = json.JSONDecoder().raw_decode(text)
                return obj
            except json.JSONDecodeError:
                pass

    # 2. ```json ... ``` or ``` ... ``` fenced blocks
    match = re.search(r"```(?:json)?\s*\n?(.*?)\n?```", text, re.DOTALL)
    if match:
        return json.loads(match.group(1).strip())

    # 3. First { onwards
    try:
        start = text.index("{")
        obj, _ = json.JSONDecoder().raw_decode(text, idx=start)
        return obj
    except (ValueError, json.JSONDecodeError):
        pass

    raise ValueError(
        f"Could not extract JSON from model response (length={len(text)}). "
        f"First 300 chars: {text[:300]!r}"
    )
