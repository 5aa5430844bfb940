"""One-shot generation provider backed by an LLM.

Generates (or revises) the whole five-section bundle in a single model
call constrained by the strict bundle schema. Stepwise generation is not
offered here; the orchestrator checks for ``generate_bundle`` instead.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

from ideaforge.ai.bundle_schema import BUNDLE_SCHEMA_NAME, build_bundle_schema
from ideaforge.ai.providers.base import Language
from ideaforge.ai.schemas import SECTION_KEYS
from ideaforge.llm.models import Message, ResponseFormat
from ideaforge.llm.output_parser import parse_json_object, unwrap_json_string
from ideaforge.llm.providers.base import BaseLLMProvider

logger = logging.getLogger(__name__)

GENERATE_PROMPT = "bundle_generate.txt"
REVISE_PROMPT = "bundle_revise.txt"


class PromptNotFound(FileNotFoundError):
    pass


def render_prompt(template: str, variables: Dict[str, str]) -> str:
    """Replace every ``{{name}}`` placeholder with its value."""
    for name, value in variables.items():
        template = template.replace("{{" + name + "}}", value)
    return template


class LLMGenerationProvider:
    """
    Bundle provider over any LLM transport.

    Args:
        llm: Transport provider (OpenAIProvider in production)
        model: Model identifier passed through to the transport
        prompts_dir: Directory holding the prompt templates
    """

    name = "openai"

    def __init__(self, llm: BaseLLMProvider, model: str, prompts_dir: Path):
        self._llm = llm
        self._model = model
        self._prompts_dir = Path(prompts_dir)

    def _load_prompt(self, file_name: str) -> str:
        path = self._prompts_dir / file_name
        if not path.is_file():
            raise PromptNotFound(f"Prompt not found: {path}")
        return path.read_text(encoding="utf-8")

    async def _complete_bundle(self, prompt: str) -> Dict[str, Any]:
        response = await self._llm.complete_with_retry(
            messages=[Message.user(prompt)],
            model=self._model,
            temperature=0.0,
            response_format=ResponseFormat(
                name=BUNDLE_SCHEMA_NAME,
                schema=build_bundle_schema(),
            ),
        )
        logger.info(
            f"Bundle completion from {self._llm.provider_name}: model={response.model}, "
            f"tokens={response.total_tokens}, latency_ms={response.latency_ms:.0f}"
        )

        parsed = parse_json_object(response.content)
        # Models sometimes return a section as a JSON-encoded string
        for key in SECTION_KEYS:
            if key in parsed:
                parsed[key] = unwrap_json_string(parsed[key], key)
        return parsed

    async def generate_bundle(self, idea_text: str, language: Language) -> Dict[str, Any]:
        prompt = render_prompt(
            self._load_prompt(GENERATE_PROMPT),
            {"language": language, "ideaText": idea_text},
        )
        return await self._complete_bundle(prompt)

    async def revise_bundle(
        self,
        instruction: str,
        base_json: Any,
        language: Language,
    ) -> Dict[str, Any]:
        prompt = render_prompt(
            self._load_prompt(REVISE_PROMPT),
            {
                "language": language,
                "instruction": instruction,
                "baseJson": json.dumps(base_json, ensure_ascii=False),
            },
        )
        return await self._complete_bundle(prompt)
