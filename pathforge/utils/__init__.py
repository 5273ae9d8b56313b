"""
Utility modules for Pathforge.

This module contains utility functions:
- catalog: Read-only content catalog
- persistence: Snapshot persistence adapters
- validation: JSON Schema validation for persisted records
- progress: Mastery and velocity analytics helpers
- log_setup: loguru sink configuration
"""

from .catalog import ContentCatalog, ContentItem, InMemoryCatalog, load_catalog
from .persistence import (
    InMemoryPersistence,
    JsonFilePersistence,
    PersistenceAdapter,
    empty_snapshot,
)
from .validation import (
    LearningPathValidator,
    LearningProfileValidator,
    SchemaValidator,
    ValidationResult,
    validate_learning_path,
    validate_learning_profile,
)
from .progress import (
    learning_velocity,
    mastery_level_for_score,
    mastery_summary,
    predicted_completion_days,
)
from .log_setup import configure_logging

__all__ = [
    # Catalog
    "ContentCatalog",
    "ContentItem",
    "InMemoryCatalog",
    "load_catalog",
    # Persistence
    "InMemoryPersistence",
    "JsonFilePersistence",
    "PersistenceAdapter",
    "empty_snapshot",
    # Validation
    "LearningPathValidator",
    "LearningProfileValidator",
    "SchemaValidator",
    "ValidationResult",
    "validate_learning_path",
    "validate_learning_profile",
    # Progress analytics
    "learning_velocity",
    "mastery_level_for_score",
    "mastery_summary",
    "predicted_completion_days",
    # Logging
    "configure_logging",
]
