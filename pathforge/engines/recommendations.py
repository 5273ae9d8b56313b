"""
Recommendation & Intervention Engine.

Rule-based, explainable suggestions computed from explicit profile fields:
- Seed recommendations attached to every generated path (pacing, content)
- Next-step recommendation from the current module's score
- Urgent interventions from score/engagement snapshots
- Performance prediction, mastery estimate and knowledge-gap detection
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, List, Optional

from ..config import AdaptiveConfig, config
from ..models.learning_profile import LearningProfile, utc_now
from ..models.recommendation import (
    AIRecommendation,
    ContentPreferencePayload,
    InterventionPayload,
    NextStepPayload,
    PacingPayload,
)

PREDICTION_BASE = 0.7
MASTERY_BASE = 0.6


@dataclass(frozen=True)
class CurrentProgress:
    """Where the learner stands right now inside a path."""

    current_module_id: Optional[str] = None
    current_module_score: Optional[float] = None  # 0-1
    next_module_id: Optional[str] = None


@dataclass(frozen=True)
class PerformanceSnapshot:
    """Latest observed score and engagement (both 0-1)."""

    score: float
    engagement_score: float


def _profile_formula(profile: LearningProfile, base: float) -> float:
    cognitive_bonus = profile.cognitive_profile.logical_reasoning * 0.2
    motivation_bonus = profile.motivation_profile.intrinsic_motivation * 0.1
    experience_bonus = min(profile.knowledge_profile.current_level / 100, 0.2)
    return min(base + cognitive_bonus + motivation_bonus + experience_bonus, 1.0)


def predict_performance(profile: LearningProfile) -> float:
    """
    Expected success on upcoming work, in [0, 1].

    0.7 + 0.2*logical_reasoning + 0.1*intrinsic_motivation
    + min(current_level/100, 0.2), capped at 1.0. The formula is module-agnostic.
    """
    return _profile_formula(profile, PREDICTION_BASE)


def assess_mastery(profile: LearningProfile) -> float:
    """Same formula family as predict_performance with a 0.6 base."""
    return _profile_formula(profile, MASTERY_BASE)


def detect_learning_gaps(profile: LearningProfile) -> List[str]:
    """Gap labels in fixed order: fundamentals, memory, confidence."""
    gaps = []
    if profile.knowledge_profile.current_level < 50:
        gaps.append("Fundamental concepts")
    if profile.cognitive_profile.memory_capacity < 0.6:
        gaps.append("Memory retention strategies")
    if profile.motivation_profile.self_efficacy < 0.7:
        gaps.append("Confidence building")
    return gaps


class RecommendationEngine:
    """
    Emits ranked, explained recommendations and interventions.

    All timestamps come from the injected clock so tests can pin them.
    """

    def __init__(
        self,
        settings: Optional[AdaptiveConfig] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.settings = settings or config.adaptive
        self._clock = clock or utc_now

    def _now(self) -> str:
        return self._clock().isoformat()

    # ==================== Seed recommendations ====================

    def pacing_recommendation(self, profile: LearningProfile) -> AIRecommendation:
        behavior = profile.behavioral_profile
        return AIRecommendation(
            category="pacing",
            title="Optimal Learning Pacing",
            description=(
                f"Based on your learning style, we recommend "
                f"{behavior.optimal_session_length:g}-minute sessions with "
                f"{behavior.break_frequency:g}-minute breaks"
            ),
            confidence=0.85,
            reasoning=["Learning style analysis", "Behavioral patterns", "Cognitive capacity"],
            payload=PacingPayload(
                session_length=behavior.optimal_session_length,
                break_frequency=behavior.break_frequency,
            ),
            priority="high",
            created_at=self._now(),
        )

    def content_recommendation(self, profile: LearningProfile) -> AIRecommendation:
        dominant = profile.learning_style.dominant
        return AIRecommendation(
            category="content",
            title="Content Preference",
            description=(
                f"You prefer {dominant} content. "
                f"We'll prioritize this format in your learning path"
            ),
            confidence=0.9,
            reasoning=["Learning style assessment", "Historical preferences"],
            payload=ContentPreferencePayload(preferred_type=dominant),
            priority="high",
            created_at=self._now(),
        )

    def seed_recommendations(self, profile: LearningProfile) -> List[AIRecommendation]:
        """The two recommendations every new path starts with."""
        return [self.pacing_recommendation(profile), self.content_recommendation(profile)]

    # ==================== Next step ====================

    def recommend_next_step(
        self, profile: LearningProfile, progress: CurrentProgress
    ) -> AIRecommendation:
        """
        Review the current module or move on.

        Args:
            profile: Learner profile (must exist)
            progress: Current module id/score and the next module id

        Returns:
            A next_step recommendation with a review or proceed payload
        """
        score = progress.current_module_score
        if progress.current_module_id is not None and score is not None and score < self.settings.review_score:
            description = "Review the current module before proceeding"
            confidence = 0.9
            reasoning = ["Low performance on current module", "Mastery threshold not met"]
            payload = NextStepPayload(action="review", module_id=progress.current_module_id)
        else:
            description = "Proceed to the next module in your learning path"
            confidence = 0.8
            reasoning = ["Good performance", "Ready for next challenge"]
            payload = NextStepPayload(
                action="proceed",
                module_id=progress.current_module_id,
                next_module_id=progress.next_module_id,
            )

        return AIRecommendation(
            category="next_step",
            title="Recommended Next Step",
            description=description,
            confidence=confidence,
            reasoning=reasoning,
            payload=payload,
            priority="high",
            created_at=self._now(),
        )

    # ==================== Interventions ====================

    def suggest_interventions(
        self, profile: LearningProfile, snapshot: PerformanceSnapshot
    ) -> List[AIRecommendation]:
        """Score intervention first, then engagement; either, both or neither."""
        interventions = []

        if snapshot.score < self.settings.support_score:
            interventions.append(
                AIRecommendation(
                    category="support",
                    title="Performance Support Needed",
                    description=(
                        "Your performance suggests you need additional support. "
                        "Consider reviewing foundational concepts."
                    ),
                    confidence=0.8,
                    reasoning=["Low performance score", "Potential knowledge gaps"],
                    payload=InterventionPayload(intervention_type="remediation", priority="high"),
                    priority="urgent",
                    created_at=self._now(),
                )
            )

        if snapshot.engagement_score < self.settings.low_engagement:
            interventions.append(
                AIRecommendation(
                    category="support",
                    title="Engagement Boost Needed",
                    description=(
                        "Your engagement is low. Try different content formats "
                        "or take more frequent breaks."
                    ),
                    confidence=0.7,
                    reasoning=["Low engagement score", "Potential motivation issues"],
                    payload=InterventionPayload(intervention_type="engagement", priority="medium"),
                    priority="high",
                    created_at=self._now(),
                )
            )

        return interventions
