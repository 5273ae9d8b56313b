"""
Decision engines for adaptive learning paths.

- path_generator: Catalog selection, ordering and path assembly
- assessment_builder: Template quizzes per module
- adaptive_engine: Adaptive fragments, question retuning, pacing, personalization
- recommendations: Next steps, interventions, predictions and gap detection
- progress_tracker: Module state machine and metric recompute
"""

from .assessment_builder import AssessmentBuilder
from .path_generator import GenerationConstraints, PathGenerator
from .adaptive_engine import AdaptiveEngine, ModulePerformance
from .recommendations import (
    CurrentProgress,
    PerformanceSnapshot,
    RecommendationEngine,
    assess_mastery,
    detect_learning_gaps,
    predict_performance,
)
from .progress_tracker import ModuleProgress, ProgressTracker

__all__ = [
    "AssessmentBuilder",
    "GenerationConstraints",
    "PathGenerator",
    "AdaptiveEngine",
    "ModulePerformance",
    "CurrentProgress",
    "PerformanceSnapshot",
    "RecommendationEngine",
    "assess_mastery",
    "detect_learning_gaps",
    "predict_performance",
    "ModuleProgress",
    "ProgressTracker",
]
