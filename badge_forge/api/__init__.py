"""HTTP surface for Badge Forge (FastAPI)."""

from badge_forge.api.app import create_app

__all__ = ["create_app"]
