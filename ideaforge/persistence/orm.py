"""SQLAlchemy ORM model for AI artifacts."""

from sqlalchemy import Column, DateTime, Index, Integer, JSON, String, UniqueConstraint
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.sql import func

from ideaforge.core.database import Base


class AiArtifactORM(Base):
    """ORM model for generated bundles and their revisions."""

    __tablename__ = "ai_artifacts"

    id = Column(String(36), primary_key=True)
    type = Column(String(20), nullable=False, default="OTHER")
    version = Column(Integer, nullable=False, default=1)
    content_json = Column(JSON().with_variant(JSONB, "postgresql"), nullable=False)
    prompt_hash = Column(String(200), nullable=True)
    revision_base_id = Column(String(36), nullable=True)
    project_id = Column(String(100), nullable=True)
    created_by_id = Column(String(100), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())
    updated_at = Column(DateTime(timezone=True), nullable=False, server_default=func.now())

    __table_args__ = (
        # Roots have a NULL base, so only revisions are constrained here
        UniqueConstraint("revision_base_id", "version", name="uq_ai_artifacts_chain_version"),
        Index("idx_ai_artifacts_project", "project_id"),
        Index("idx_ai_artifacts_revision_base", "revision_base_id"),
        Index("idx_ai_artifacts_created_at", "created_at"),
    )
