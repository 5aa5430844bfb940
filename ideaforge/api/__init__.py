"""HTTP surface for IdeaForge (FastAPI)."""
