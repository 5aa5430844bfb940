"""IdeaForge: AI-assisted project bootstrapping backend."""

__version__ = "0.1.0"
