"""Repository protocol and in-memory implementation."""

import asyncio
import copy
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Protocol, runtime_checkable

from ideaforge.persistence.models import StoredArtifact


class TransactionFailure(Exception):
    """An artifact store operation failed; details are logged, not exposed."""

    def __init__(self, message: str = "Artifact store transaction failed"):
        super().__init__(message)


@runtime_checkable
class ArtifactRepository(Protocol):
    """Protocol for artifact storage."""

    async def create(self, artifact: StoredArtifact) -> StoredArtifact:
        """Insert an artifact as given."""
        ...

    async def create_revision(self, artifact: StoredArtifact) -> StoredArtifact:
        """
        Insert a revision with the next version of its chain.

        The chain is resolved from artifact.revision_base_id. Reading the
        current max and inserting happen atomically, so concurrent
        revisions of one chain never share a version.
        """
        ...

    async def get(self, artifact_id: str) -> Optional[StoredArtifact]:
        """Get artifact by ID."""
        ...

    async def latest(self, project_id: Optional[str] = None) -> Optional[StoredArtifact]:
        """Most recently created artifact, optionally within a project."""
        ...

    async def list(self, limit: int, project_id: Optional[str] = None) -> List[StoredArtifact]:
        """Artifacts newest first."""
        ...

    async def list_chain(self, root_id: str) -> List[StoredArtifact]:
        """Root plus its revisions, oldest first."""
        ...

    async def max_chain_version(self, root_id: str) -> Optional[int]:
        """Highest version within the chain, None if the chain is empty."""
        ...

    async def update_content(
        self, artifact_id: str, content: Dict[str, Any]
    ) -> Optional[StoredArtifact]:
        """Replace an artifact's content. Returns None if not found."""
        ...


class InMemoryArtifactRepository:
    """In-memory artifact repository for testing."""

    def __init__(self):
        self._artifacts: Dict[str, StoredArtifact] = {}
        self._sequence: Dict[str, int] = {}
        self._chain_locks: Dict[str, asyncio.Lock] = {}

    def _insert(self, artifact: StoredArtifact) -> StoredArtifact:
        stored = copy.deepcopy(artifact)
        self._artifacts[stored.id] = stored
        self._sequence[stored.id] = len(self._sequence)
        return copy.deepcopy(stored)

    def _newest_first(self, artifacts: List[StoredArtifact]) -> List[StoredArtifact]:
        # Insertion order breaks created_at ties
        return sorted(
            artifacts,
            key=lambda a: (a.created_at, self._sequence[a.id]),
            reverse=True,
        )

    def _chain(self, root_id: str) -> List[StoredArtifact]:
        return [
            a for a in self._artifacts.values()
            if a.id == root_id or a.revision_base_id == root_id
        ]

    async def create(self, artifact: StoredArtifact) -> StoredArtifact:
        return self._insert(artifact)

    async def create_revision(self, artifact: StoredArtifact) -> StoredArtifact:
        root_id = artifact.revision_base_id or artifact.id
        lock = self._chain_locks.setdefault(root_id, asyncio.Lock())
        async with lock:
            current = await self.max_chain_version(root_id)
            artifact.version = (current or 1) + 1
            return self._insert(artifact)

    async def get(self, artifact_id: str) -> Optional[StoredArtifact]:
        artifact = self._artifacts.get(artifact_id)
        return copy.deepcopy(artifact) if artifact else None

    async def latest(self, project_id: Optional[str] = None) -> Optional[StoredArtifact]:
        items = await self.list(limit=1, project_id=project_id)
        return items[0] if items else None

    async def list(self, limit: int, project_id: Optional[str] = None) -> List[StoredArtifact]:
        candidates = [
            a for a in self._artifacts.values()
            if project_id is None or a.project_id == project_id
        ]
        return [copy.deepcopy(a) for a in self._newest_first(candidates)[:limit]]

    async def list_chain(self, root_id: str) -> List[StoredArtifact]:
        chain = list(reversed(self._newest_first(self._chain(root_id))))
        return [copy.deepcopy(a) for a in chain]

    async def max_chain_version(self, root_id: str) -> Optional[int]:
        versions = [a.version for a in self._chain(root_id)]
        return max(versions) if versions else None

    async def update_content(
        self, artifact_id: str, content: Dict[str, Any]
    ) -> Optional[StoredArtifact]:
        artifact = self._artifacts.get(artifact_id)
        if artifact is None:
            return None
        artifact.content = copy.deepcopy(content)
        artifact.updated_at = datetime.now(timezone.utc)
        return copy.deepcopy(artifact)

    def clear(self) -> None:
        """Clear all artifacts (for testing)."""
        self._artifacts.clear()
        self._sequence.clear()
        self._chain_locks.clear()
