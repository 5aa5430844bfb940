"""
Persistence layer for IdeaForge.

Domain models, repository protocol, and in-memory plus SQLAlchemy
implementations for AI artifacts.
"""

from ideaforge.persistence.models import ArtifactType, StoredArtifact
from ideaforge.persistence.repositories import (
    ArtifactRepository,
    InMemoryArtifactRepository,
    TransactionFailure,
)
from ideaforge.persistence.sql_repositories import SqlAlchemyArtifactRepository

__all__ = [
    # Models
    "ArtifactType",
    "StoredArtifact",
    # Protocols
    "ArtifactRepository",
    # Implementations
    "InMemoryArtifactRepository",
    "SqlAlchemyArtifactRepository",
    # Errors
    "TransactionFailure",
]
