"""
Adaptive Engine - reacts to live performance signals.

Features:
- Remediation/hint fragments from score and time signals
- One-step-easier retuning of adaptive questions
- Pacing re-evaluation from path metrics
- Profile-driven content personalization flags
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import dataclass, replace
from typing import Any, Dict, List, Optional

from ..config import AdaptiveConfig, config
from ..models.learning_path import (
    QUESTION_DIFFICULTY_ORDER,
    AdaptiveCondition,
    AdaptiveContent,
    AdaptiveSettings,
    LearningModule,
    PerformanceMetrics,
)
from ..models.learning_profile import LearningProfile

REMEDIATION_TEXT = "Let me provide additional explanation for this concept..."
HINT_TEXT = "Take your time with this material. Here are some helpful hints..."


@dataclass(frozen=True)
class ModulePerformance:
    """
    Observed performance on one module.

    Attributes:
        score: Latest score in [0, 1] (None if not assessed yet)
        time_spent: Minutes spent so far
        estimated_time: Expected minutes (falls back to the module's estimate)
    """

    score: Optional[float] = None
    time_spent: float = 0.0
    estimated_time: Optional[float] = None


class AdaptiveEngine:
    """Turns performance signals into adaptive fragments and pacing decisions."""

    def __init__(self, settings: Optional[AdaptiveConfig] = None):
        self.settings = settings or config.adaptive

    def build_fragments(
        self, performance: ModulePerformance, estimated_time: Optional[float] = None
    ) -> List[AdaptiveContent]:
        """
        Evaluate both triggers independently.

        Args:
            performance: Observed score and time
            estimated_time: Module estimate used when the performance carries none

        Returns:
            Zero, one or two fragments (remediation first, then hint)
        """
        fragments = []
        threshold = self.settings.remediation_score

        if performance.score is not None and performance.score < threshold:
            fragments.append(
                AdaptiveContent(
                    condition=AdaptiveCondition(
                        type="performance",
                        operator="less_than",
                        value=threshold,
                        threshold=threshold,
                    ),
                    content=REMEDIATION_TEXT,
                    type="remediation",
                    difficulty="easier",
                    triggers=["low_performance", "confusion"],
                )
            )

        estimate = performance.estimated_time
        if estimate is None:
            estimate = estimated_time
        if estimate is not None:
            limit = estimate * self.settings.hint_time_factor
            if performance.time_spent > limit:
                fragments.append(
                    AdaptiveContent(
                        condition=AdaptiveCondition(
                            type="time",
                            operator="greater_than",
                            value=limit,
                            threshold=estimate,
                        ),
                        content=HINT_TEXT,
                        type="hint",
                        difficulty="same",
                        triggers=["slow_pacing", "need_support"],
                    )
                )

        return fragments

    @staticmethod
    def retune_questions(module: LearningModule) -> int:
        """
        Move every adaptive question one difficulty step easier, in place.

        Returns:
            Number of questions whose difficulty changed
        """
        changed = 0
        for question in module.assessment.questions:
            if not question.adaptive:
                continue
            rank = QUESTION_DIFFICULTY_ORDER.index(question.difficulty)
            if rank > 0:
                question.difficulty = QUESTION_DIFFICULTY_ORDER[rank - 1]
                changed += 1
        return changed

    def pacing_for(self, metrics: PerformanceMetrics) -> str:
        engagement = metrics.engagement_score
        completion = metrics.completion_rate
        if engagement > self.settings.accelerate_engagement and completion > self.settings.accelerate_completion:
            return "accelerated"
        if engagement < self.settings.relax_engagement or completion < self.settings.relax_completion:
            return "relaxed"
        return "normal"

    def optimize_pacing(
        self, settings: AdaptiveSettings, metrics: PerformanceMetrics
    ) -> AdaptiveSettings:
        """Return a new settings value with re-evaluated pacing; inputs are untouched."""
        return replace(settings, pacing_adjustment=self.pacing_for(metrics))

    @staticmethod
    def personalize(profile: LearningProfile, base_content: Dict[str, Any]) -> Dict[str, Any]:
        """
        Add presentation flags to a copy of ``base_content``.

        Never removes or rewrites existing keys other than the flags it sets.
        """
        content = deepcopy(base_content)

        if profile.learning_style.dominant == "visual":
            content["visual_elements"] = True
            content["diagrams"] = True

        if profile.cognitive_profile.attention_span < 30:
            content["chunked"] = True
            content["break_points"] = True

        if profile.motivation_profile.goal_orientation == "mastery":
            content["deep_dive"] = True
            content["practice_exercises"] = True

        return content
