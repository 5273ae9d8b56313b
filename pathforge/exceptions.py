"""Exceptions raised by the learning-path engine."""

from __future__ import annotations


class PathforgeError(Exception):
    """Base class for all engine errors."""


class NotFoundError(PathforgeError, LookupError):
    """A referenced entity was never created."""

    entity = "entity"

    def __init__(self, entity_id: str):
        self.entity_id = entity_id
        super().__init__(f"{self.entity} not found: {entity_id}")


class ProfileNotFoundError(NotFoundError):
    entity = "Learning profile"


class PathNotFoundError(NotFoundError):
    entity = "Learning path"


class RecommendationNotFoundError(NotFoundError):
    entity = "Recommendation"


class InvalidTransitionError(PathforgeError, ValueError):
    """A lifecycle change was requested from a terminal state."""
