"""SQLAlchemy repository implementation (PostgreSQL in production, SQLite in dev)."""

import logging
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Optional

from sqlalchemy import func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ideaforge.persistence.models import ArtifactType, StoredArtifact
from ideaforge.persistence.orm import AiArtifactORM
from ideaforge.persistence.repositories import TransactionFailure

logger = logging.getLogger(__name__)


def _orm_to_stored_artifact(orm_artifact: AiArtifactORM) -> StoredArtifact:
    """Convert ORM AiArtifact to StoredArtifact domain model."""
    return StoredArtifact(
        id=orm_artifact.id,
        type=ArtifactType(orm_artifact.type),
        version=orm_artifact.version,
        content=orm_artifact.content_json,
        prompt_hash=orm_artifact.prompt_hash,
        revision_base_id=orm_artifact.revision_base_id,
        project_id=orm_artifact.project_id,
        created_by_id=orm_artifact.created_by_id,
        created_at=orm_artifact.created_at,
        updated_at=orm_artifact.updated_at,
    )


def _stored_to_orm_artifact(stored: StoredArtifact) -> AiArtifactORM:
    """Convert StoredArtifact to ORM AiArtifact."""
    return AiArtifactORM(
        id=stored.id,
        type=stored.type.value,
        version=stored.version,
        content_json=stored.content,
        prompt_hash=stored.prompt_hash,
        revision_base_id=stored.revision_base_id,
        project_id=stored.project_id,
        created_by_id=stored.created_by_id,
        created_at=stored.created_at,
        updated_at=stored.updated_at,
    )


def _chain_filter(root_id: str):
    return or_(AiArtifactORM.id == root_id, AiArtifactORM.revision_base_id == root_id)


class SqlAlchemyArtifactRepository:
    """SQLAlchemy implementation of ArtifactRepository."""

    def __init__(self, session_factory: Callable[[], AsyncSession]):
        """
        Initialize repository.

        Args:
            session_factory: Callable that returns an AsyncSession
        """
        self._session_factory = session_factory

    async def create(self, artifact: StoredArtifact) -> StoredArtifact:
        """Insert an artifact as given."""
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    orm_artifact = _stored_to_orm_artifact(artifact)
                    session.add(orm_artifact)
                return _orm_to_stored_artifact(orm_artifact)
        except SQLAlchemyError as e:
            logger.error(f"Artifact insert failed: {e}", exc_info=True)
            raise TransactionFailure() from e

    async def create_revision(self, artifact: StoredArtifact) -> StoredArtifact:
        """
        Insert a revision at max(chain version) + 1 in one transaction.

        The chain root row is locked FOR UPDATE before the max is read, so
        concurrent revisions of the same chain serialize on PostgreSQL.
        """
        root_id = artifact.revision_base_id or artifact.id
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    await session.execute(
                        select(AiArtifactORM.id)
                        .where(AiArtifactORM.id == root_id)
                        .with_for_update()
                    )
                    current = await session.scalar(
                        select(func.max(AiArtifactORM.version)).where(_chain_filter(root_id))
                    )
                    artifact.version = (current or 1) + 1
                    orm_artifact = _stored_to_orm_artifact(artifact)
                    session.add(orm_artifact)
                return _orm_to_stored_artifact(orm_artifact)
        except SQLAlchemyError as e:
            logger.error(f"Revision insert failed for chain {root_id}: {e}", exc_info=True)
            raise TransactionFailure() from e

    async def get(self, artifact_id: str) -> Optional[StoredArtifact]:
        """Get artifact by ID."""
        try:
            async with self._session_factory() as session:
                orm_artifact = await session.get(AiArtifactORM, artifact_id)
                if orm_artifact is None:
                    return None
                return _orm_to_stored_artifact(orm_artifact)
        except SQLAlchemyError as e:
            logger.error(f"Artifact read failed for {artifact_id}: {e}", exc_info=True)
            raise TransactionFailure("Artifact store read failed") from e

    async def latest(self, project_id: Optional[str] = None) -> Optional[StoredArtifact]:
        items = await self.list(limit=1, project_id=project_id)
        return items[0] if items else None

    async def list(self, limit: int, project_id: Optional[str] = None) -> List[StoredArtifact]:
        """Artifacts newest first."""
        query = select(AiArtifactORM)
        if project_id is not None:
            query = query.where(AiArtifactORM.project_id == project_id)
        query = query.order_by(AiArtifactORM.created_at.desc()).limit(limit)
        try:
            async with self._session_factory() as session:
                result = await session.execute(query)
                return [_orm_to_stored_artifact(a) for a in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Artifact list failed: {e}", exc_info=True)
            raise TransactionFailure("Artifact store read failed") from e

    async def list_chain(self, root_id: str) -> List[StoredArtifact]:
        """Root plus revisions, oldest first."""
        try:
            async with self._session_factory() as session:
                result = await session.execute(
                    select(AiArtifactORM)
                    .where(_chain_filter(root_id))
                    .order_by(AiArtifactORM.created_at.asc(), AiArtifactORM.version.asc())
                )
                return [_orm_to_stored_artifact(a) for a in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error(f"Chain read failed for {root_id}: {e}", exc_info=True)
            raise TransactionFailure("Artifact store read failed") from e

    async def max_chain_version(self, root_id: str) -> Optional[int]:
        try:
            async with self._session_factory() as session:
                return await session.scalar(
                    select(func.max(AiArtifactORM.version)).where(_chain_filter(root_id))
                )
        except SQLAlchemyError as e:
            logger.error(f"Chain version read failed for {root_id}: {e}", exc_info=True)
            raise TransactionFailure("Artifact store read failed") from e

    async def update_content(
        self, artifact_id: str, content: Dict[str, Any]
    ) -> Optional[StoredArtifact]:
        """Replace an artifact's content. Returns None if not found."""
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    orm_artifact = await session.get(AiArtifactORM, artifact_id)
                    if orm_artifact is None:
                        return None
                    # Assign a new object so the JSON column is flagged dirty
                    orm_artifact.content_json = dict(content)
                    orm_artifact.updated_at = datetime.now(timezone.utc)
                return _orm_to_stored_artifact(orm_artifact)
        except SQLAlchemyError as e:
            logger.error(f"Artifact update failed for {artifact_id}: {e}", exc_info=True)
            raise TransactionFailure() from e
