"""
Data models for adaptive learning paths.

This module contains core data models:
- LearningProfile / ProfileStore: learner traits with merge-only updates
- LearningPath and its modules, assessments and adaptive state
- AIRecommendation with tagged payloads
- LearningSession: session history records
"""

from .learning_profile import (
    BehavioralProfile,
    CognitiveProfile,
    KnowledgeProfile,
    LearningProfile,
    LearningStyle,
    MotivationProfile,
    ProfileStore,
)
from .learning_path import (
    AdaptiveCondition,
    AdaptiveContent,
    AdaptiveSettings,
    AssessmentQuestion,
    CompletionCriteria,
    LearningModule,
    LearningPath,
    Milestone,
    ModuleAssessment,
    PerformanceMetrics,
)
from .recommendation import (
    AIRecommendation,
    ContentPreferencePayload,
    InterventionPayload,
    NextStepPayload,
    PacingPayload,
)
from .learning_session import LearningSession

__all__ = [
    "BehavioralProfile",
    "CognitiveProfile",
    "KnowledgeProfile",
    "LearningProfile",
    "LearningStyle",
    "MotivationProfile",
    "ProfileStore",
    "AdaptiveCondition",
    "AdaptiveContent",
    "AdaptiveSettings",
    "AssessmentQuestion",
    "CompletionCriteria",
    "LearningModule",
    "LearningPath",
    "Milestone",
    "ModuleAssessment",
    "PerformanceMetrics",
    "AIRecommendation",
    "ContentPreferencePayload",
    "InterventionPayload",
    "NextStepPayload",
    "PacingPayload",
    "LearningSession",
]
