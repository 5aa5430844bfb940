"""
Core infrastructure for IdeaForge.

Shared components used across all modules:
- Configuration management
- Logging setup
- Database engine and sessions
"""

from ideaforge.core.config import settings
from ideaforge.core.logging import configure_logging

__all__ = [
    "settings",
    "configure_logging",
]
