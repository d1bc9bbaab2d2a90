"""Application lifecycle events."""

from recipe_service.core.events.lifespan import lifespan


__all__ = ["lifespan"]
