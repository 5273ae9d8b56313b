"""
Pathforge - adaptive learning-path engine.

Builds personalized, ordered curricula from a content catalog and a learner
profile, tracks progress through them, adapts content and pacing to observed
performance, and emits explainable recommendations and interventions.
"""

from .engines import (
    CurrentProgress,
    GenerationConstraints,
    ModulePerformance,
    ModuleProgress,
    PerformanceSnapshot,
)
from .exceptions import (
    InvalidTransitionError,
    NotFoundError,
    PathforgeError,
    PathNotFoundError,
    ProfileNotFoundError,
    RecommendationNotFoundError,
)
from .orchestrator import LearningPathOrchestrator
from .utils.catalog import ContentItem, InMemoryCatalog, load_catalog
from .utils.persistence import InMemoryPersistence, JsonFilePersistence, PersistenceAdapter

__version__ = "0.1.0"

__all__ = [
    "LearningPathOrchestrator",
    "CurrentProgress",
    "GenerationConstraints",
    "ModulePerformance",
    "ModuleProgress",
    "PerformanceSnapshot",
    "ContentItem",
    "InMemoryCatalog",
    "load_catalog",
    "InMemoryPersistence",
    "JsonFilePersistence",
    "PersistenceAdapter",
    "InvalidTransitionError",
    "NotFoundError",
    "PathforgeError",
    "PathNotFoundError",
    "ProfileNotFoundError",
    "RecommendationNotFoundError",
]
