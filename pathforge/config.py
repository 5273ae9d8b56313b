"""
Configuration management for Pathforge.

This module centralizes all configuration settings following 12-factor app principles:
- Paths and log level loaded from environment variables
- Sensible defaults for development
- Type hints for IDE support
- Single source of truth for every engine threshold
"""

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


@dataclass
class PathConfig:
    """File system paths - single source of truth for all directories."""

    # Base paths
    project_root: Path = field(default_factory=lambda: Path(__file__).parent.parent)
    data_dir: Path = field(
        default_factory=lambda: Path(
            os.getenv("PATHFORGE_DATA_DIR", str(Path(__file__).parent.parent / "data"))
        )
    )

    # Computed from data_dir / package dir
    store_file: Path = field(init=False)
    schemas_dir: Path = field(init=False)
    profile_schema: Path = field(init=False)
    path_schema: Path = field(init=False)

    def __post_init__(self):
        """Initialize computed paths."""
        self.data_dir = Path(self.data_dir)
        self.store_file = self.data_dir / "learning_store.json"
        self.schemas_dir = Path(__file__).parent / "schemas"
        self.profile_schema = self.schemas_dir / "learning_profile.schema.json"
        self.path_schema = self.schemas_dir / "learning_path.schema.json"

    def prepare_filesystem(self):
        """
        Create the data directory if it doesn't exist.

        Separated from __post_init__ to avoid side-effects on import.
        Call this explicitly from your app entrypoint.
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)


@dataclass
class AssessmentConfig:
    """Defaults for generated module assessments."""

    min_questions: int = 5
    minutes_per_question: int = 10
    points_per_question: int = 10
    passing_score: float = 80.0
    max_retakes: int = 2
    weight: float = 0.8

    # Module-level
    max_attempts: int = 3
    completion_threshold: float = 80.0


@dataclass
class AdaptiveConfig:
    """Thresholds for adaptation, recommendations and metric updates."""

    # Content adaptation
    remediation_score: float = 0.6  # score < 0.6 → remediation fragment
    hint_time_factor: float = 1.5  # time > 1.5x estimate → hint fragment

    # Recommendations & interventions
    review_score: float = 0.7
    support_score: float = 0.5
    low_engagement: float = 0.4

    # Pacing
    accelerate_engagement: float = 0.8
    accelerate_completion: float = 0.9
    relax_engagement: float = 0.5
    relax_completion: float = 0.7

    # Adaptive settings defaults
    intervention_threshold: float = 0.3
    mastery_threshold: float = 0.8

    # Metrics
    engagement_step: float = 0.1
    initial_success_probability: float = 0.7
    strength_score: float = 0.75
    weakness_score: float = 0.6


@dataclass
class LoggingConfig:
    """Logging configuration (consumed by utils.log_setup)."""

    log_level: str = field(
        default_factory=lambda: os.getenv("PATHFORGE_LOG_LEVEL", "INFO").upper()
    )
    log_format: str = (
        "<dim>{time:HH:mm:ss}</dim> | <level>{level: <8}</level> | "
        "<cyan>{name}</cyan> - {message}"
    )


class Config:
    """
    Main configuration class. Singleton pattern.

    Usage:
        from pathforge.config import config

        # Access settings
        passing = config.assessment.passing_score
        step = config.adaptive.engagement_step

        # Prepare filesystem (call once at startup)
        config.prepare_fs()
    """

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance.paths = PathConfig()
            cls._instance.assessment = AssessmentConfig()
            cls._instance.adaptive = AdaptiveConfig()
            cls._instance.logging = LoggingConfig()

        return cls._instance

    def prepare_fs(self):
        """Prepare filesystem (create directories). Call once at startup."""
        self.paths.prepare_filesystem()

    def validate(self) -> list[str]:
        """
        Validate configuration and return list of errors.

        Returns:
            List of error messages (empty if valid)
        """
        errors = []

        # Assessment validation
        if self.assessment.min_questions < 1:
            errors.append(
                f"Assessment min_questions must be >= 1, got {self.assessment.min_questions}"
            )

        if self.assessment.minutes_per_question <= 0:
            errors.append(
                f"Assessment minutes_per_question must be > 0, got {self.assessment.minutes_per_question}"
            )

        if not (0 <= self.assessment.passing_score <= 100):
            errors.append(
                f"Assessment passing_score must be in [0, 100], got {self.assessment.passing_score}"
            )

        if self.assessment.max_attempts < 1:
            errors.append(
                f"Assessment max_attempts must be >= 1, got {self.assessment.max_attempts}"
            )

        # Adaptive validation: every ratio threshold lives in [0, 1]
        for name in (
            "remediation_score",
            "review_score",
            "support_score",
            "low_engagement",
            "accelerate_engagement",
            "accelerate_completion",
            "relax_engagement",
            "relax_completion",
            "intervention_threshold",
            "mastery_threshold",
            "engagement_step",
            "initial_success_probability",
            "strength_score",
            "weakness_score",
        ):
            value = getattr(self.adaptive, name)
            if not (0 <= value <= 1):
                errors.append(f"Adaptive {name} must be in [0, 1], got {value}")

        if self.adaptive.hint_time_factor <= 0:
            errors.append(
                f"Adaptive hint_time_factor must be > 0, got {self.adaptive.hint_time_factor}"
            )

        # Logging validation
        if self.logging.log_level not in {
            "TRACE", "DEBUG", "INFO", "SUCCESS", "WARNING", "ERROR", "CRITICAL"
        }:
            errors.append(f"Unknown log level: {self.logging.log_level}")

        # Path validation
        for schema in (self.paths.profile_schema, self.paths.path_schema):
            if not schema.exists():
                errors.append(f"Schema not found: {schema}")

        return errors


# Global config instance
config = Config()
