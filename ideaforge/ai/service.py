"""
Generation orchestrator.

Drives a generation provider through bundle or stepwise generation,
validates every section at the boundary, persists results as versioned
artifacts, and serves artifact reads, revisions and approvals.
"""

import copy
import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, Optional, Union

from ideaforge.ai.cache import TTLCache, build_cache_key
from ideaforge.ai.diff import compute_json_diff
from ideaforge.ai.exceptions import ArtifactNotFound, ProviderUnsupportedOperation
from ideaforge.ai.providers.base import (
    BundleProvider,
    StepwiseProvider,
    normalize_language,
    normalize_preset,
    supports_bundle,
    supports_revision,
    supports_stepwise,
)
from ideaforge.ai.schemas import validate_bundle, validate_section
from ideaforge.persistence.models import ArtifactType, StoredArtifact
from ideaforge.persistence.repositories import ArtifactRepository

logger = logging.getLogger(__name__)

DEFAULT_LIST_LIMIT = 20
MAX_LIST_LIMIT = 100


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _iso(value: datetime) -> str:
    return value.isoformat()


def clamp_limit(limit: Optional[int]) -> int:
    if limit is None:
        return DEFAULT_LIST_LIMIT
    return min(max(int(limit), 1), MAX_LIST_LIMIT)


def _primary_language(content: Any) -> Any:
    """project_meta.primary_language of a stored bundle, None if absent."""
    node = content
    for key in ("ideaNormalized", "project_meta", "primary_language"):
        if not isinstance(node, dict):
            return None
        node = node.get(key)
    return node


def _with_content(artifact: StoredArtifact) -> Dict[str, Any]:
    return {**artifact.to_meta(), "contentJson": artifact.content}


class GenerationOrchestrator:
    """
    Coordinates provider, validators, cache and artifact store.

    Args:
        provider: Generation provider (stepwise and/or bundle capable)
        repository: Artifact store
        cache: Optional result cache; None disables caching
        clock: Returns the current UTC datetime (injectable for tests)
    """

    def __init__(
        self,
        provider: Union[StepwiseProvider, BundleProvider],
        repository: ArtifactRepository,
        cache: Optional[TTLCache] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._provider = provider
        self._repository = repository
        self._cache = cache
        self._clock = clock or _utcnow

    @property
    def provider_name(self) -> str:
        return self._provider.name

    # ------------------------------------------------------------------
    # Generation
    # ------------------------------------------------------------------

    async def generate(
        self,
        idea_text: str,
        language: Any = "ko",
        preset: Any = "medium",
        project_id: Optional[str] = None,
    ) -> Dict[str, Any]:
        """
        Generate, validate and persist a bundle for an idea.

        Returns:
            The five sections plus meta {provider, preset, artifactId, savedAt}

        Raises:
            SectionValidationFailed: a section failed validation
            ProviderOutputMalformed: model output could not be parsed
            LLMException: the model call failed
        """
        language = normalize_language(language)
        preset = normalize_preset(preset)

        cache_key = None
        if self._cache is not None:
            cache_key = build_cache_key(
                self.provider_name, language, preset, idea_text, project_id
            )
            cached = self._cache.get(cache_key)
            if cached is not None:
                logger.info(f"Generation cache hit ({self.provider_name}, {language}, {preset})")
                return copy.deepcopy(cached)
            logger.debug(f"Generation cache miss ({self.provider_name}, {language}, {preset})")

        if supports_bundle(self._provider):
            raw = await self._provider.generate_bundle(idea_text, language)
            bundle = validate_bundle(raw)
            prompt_hash = f"llm:{self.provider_name}:v1"
        elif supports_stepwise(self._provider):
            bundle = await self._generate_stepwise(idea_text, language, preset)
            prompt_hash = f"fixtures:{preset}:v1"
        else:
            raise ProviderUnsupportedOperation(self.provider_name, "Generation")

        now = self._clock()
        artifact = await self._repository.create(
            StoredArtifact.create(
                content=bundle,
                artifact_type=ArtifactType.OTHER,
                prompt_hash=prompt_hash,
                project_id=project_id,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info(
            f"Generated artifact {artifact.id} via {self.provider_name} "
            f"(language={language}, preset={preset})"
        )

        result = {
            **bundle,
            "meta": {
                "provider": self.provider_name,
                "preset": preset,
                "artifactId": artifact.id,
                "savedAt": _iso(artifact.created_at),
            },
        }
        if cache_key is not None:
            self._cache.set(cache_key, copy.deepcopy(result))
        return result

    async def _generate_stepwise(
        self, idea_text: str, language: str, preset: str
    ) -> Dict[str, Any]:
        # Each step consumes the validated output of the previous ones
        provider = self._provider
        idea = validate_section(
            "ideaNormalized", await provider.normalize_idea(idea_text, language, preset)
        )
        screens = validate_section(
            "screens", await provider.generate_screens(idea, preset)
        )
        api_spec = validate_section(
            "apiSpec", await provider.generate_api_spec(idea, screens, preset)
        )
        erd = validate_section("erd", await provider.generate_erd(idea, preset))
        questions = validate_section(
            "questions",
            await provider.generate_clarifying_questions(idea, screens, api_spec, erd, preset),
        )
        return {
            "ideaNormalized": idea,
            "screens": screens,
            "apiSpec": api_spec,
            "erd": erd,
            "questions": questions,
        }

    # ------------------------------------------------------------------
    # Revision and approval
    # ------------------------------------------------------------------

    async def revise_artifact(
        self,
        artifact_id: str,
        instruction: str,
        language: Any = None,
    ) -> Dict[str, Any]:
        """
        Revise an artifact into the next version of its chain.

        Raises:
            ArtifactNotFound: no artifact with this id
            ProviderUnsupportedOperation: provider cannot revise
            SectionValidationFailed: revised bundle failed validation
        """
        base = await self._repository.get(artifact_id)
        if base is None:
            raise ArtifactNotFound(artifact_id=artifact_id)

        if not supports_revision(self._provider):
            raise ProviderUnsupportedOperation(
                self.provider_name,
                "Revision",
                "Revision is not supported by current AI provider",
            )

        root_id = base.root_id
        if language is None:
            language = _primary_language(base.content)
        language = normalize_language(language)

        raw = await self._provider.revise_bundle(instruction, base.content, language)
        bundle = validate_bundle(raw)
        diff = compute_json_diff(base.content, bundle)

        now = self._clock()
        content = {
            **bundle,
            "revision": {
                "baseArtifactId": root_id,
                "revisedFromId": base.id,
                "instruction": instruction,
                "revisedAt": _iso(now),
                "diff": diff,
            },
        }
        created = await self._repository.create_revision(
            StoredArtifact.create(
                content=content,
                artifact_type=base.type,
                prompt_hash=f"llm:{self.provider_name}:revise:v1",
                revision_base_id=root_id,
                project_id=base.project_id,
                created_at=now,
                updated_at=now,
            )
        )
        logger.info(
            f"Revised artifact {base.id} -> {created.id} "
            f"(chain {root_id}, version {created.version}, {len(diff)} changes)"
        )

        return {
            **content,
            "meta": {
                "provider": self.provider_name,
                "artifactId": created.id,
                "baseArtifactId": root_id,
                "version": created.version,
                "savedAt": _iso(created.created_at),
            },
        }

    async def approve_artifact(
        self, artifact_id: str, note: Optional[str] = None
    ) -> Dict[str, Any]:
        """Record an approval inside the artifact content, replacing any earlier one."""
        artifact = await self._repository.get(artifact_id)
        if artifact is None:
            raise ArtifactNotFound(artifact_id=artifact_id)

        approval = {"approvedAt": _iso(self._clock()), "note": note}
        merged = {**(artifact.content or {}), "approval": approval}

        updated = await self._repository.update_content(artifact_id, merged)
        if updated is None:
            raise ArtifactNotFound(artifact_id=artifact_id)

        logger.info(f"Approved artifact {artifact_id}")
        return {
            "meta": {"id": updated.id, "updatedAt": _iso(updated.updated_at)},
            "approval": approval,
        }

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    async def get_artifact(self, artifact_id: str) -> Dict[str, Any]:
        artifact = await self._repository.get(artifact_id)
        if artifact is None:
            raise ArtifactNotFound(artifact_id=artifact_id)
        return {"meta": artifact.to_meta(), "contentJson": artifact.content}

    async def get_latest_artifact(self, project_id: Optional[str] = None) -> Dict[str, Any]:
        artifact = await self._repository.latest(project_id=project_id)
        if artifact is None:
            raise ArtifactNotFound(project_id=project_id)
        return {"meta": artifact.to_meta(), "contentJson": artifact.content}

    async def list_artifacts(
        self, limit: Optional[int] = DEFAULT_LIST_LIMIT, project_id: Optional[str] = None
    ) -> Dict[str, Any]:
        take = clamp_limit(limit)
        items = await self._repository.list(limit=take, project_id=project_id)
        return {
            "meta": {"count": len(items), "limit": take, "projectId": project_id},
            "items": [_with_content(a) for a in items],
        }

    async def list_artifact_revisions(self, artifact_id: str) -> Dict[str, Any]:
        """The whole chain the artifact belongs to, oldest first."""
        base = await self._repository.get(artifact_id)
        if base is None:
            raise ArtifactNotFound(artifact_id=artifact_id)

        chain = await self._repository.list_chain(base.root_id)
        return {
            "meta": {"baseArtifactId": base.root_id, "count": len(chain)},
            "items": [_with_content(a) for a in chain],
        }
