"""
Assessment Builder - derives a per-module quiz from a catalog item.

This is a deterministic template generator: prompts are placeholders meant to
be replaced by authored content upstream. What callers rely on is the question
count as a function of content duration and the fixed assessment defaults.
"""

from __future__ import annotations

import uuid
from typing import List, Optional

from ..config import AssessmentConfig, config
from ..models.learning_path import AssessmentQuestion, CompletionCriteria, ModuleAssessment
from ..utils.catalog import ContentItem

PLACEHOLDER_OPTIONS = ("Option A", "Option B", "Option C", "Option D")


class AssessmentBuilder:
    """
    Builds module assessments from content items.

    Usage:
        builder = AssessmentBuilder()
        assessment = builder.build(item)
        len(assessment.questions)  # max(5, duration // 10)
    """

    def __init__(self, settings: Optional[AssessmentConfig] = None):
        """
        Initialize the builder.

        Args:
            settings: Assessment defaults (uses global config if None)
        """
        self.settings = settings or config.assessment

    def question_count(self, duration: float) -> int:
        """Number of questions for a piece of content lasting ``duration`` minutes."""
        return max(
            self.settings.min_questions,
            int(duration // self.settings.minutes_per_question),
        )

    def build_questions(self, item: ContentItem) -> List[AssessmentQuestion]:
        questions = []
        for i in range(self.question_count(item.duration)):
            questions.append(
                AssessmentQuestion(
                    id=f"q-{uuid.uuid4()}",
                    type="multiple_choice",
                    prompt=f"Question {i + 1} about {item.title}",
                    options=list(PLACEHOLDER_OPTIONS),
                    correct_answer=PLACEHOLDER_OPTIONS[0],
                    explanation="This is the correct answer because...",
                    difficulty="medium",
                    points=self.settings.points_per_question,
                    tags=list(item.tags),
                    adaptive=True,
                )
            )
        return questions

    def build(self, item: ContentItem) -> ModuleAssessment:
        """
        Generate the quiz attached to a module.

        Args:
            item: Catalog item the module is built from

        Returns:
            ModuleAssessment with time limit equal to the content duration
        """
        return ModuleAssessment(
            type="quiz",
            passing_score=self.settings.passing_score,
            questions=self.build_questions(item),
            time_limit=item.duration,
            allow_retakes=True,
            max_retakes=self.settings.max_retakes,
            weight=self.settings.weight,
        )

    def completion_criteria(self) -> CompletionCriteria:
        return CompletionCriteria(
            type="score",
            threshold=self.settings.completion_threshold,
            required=True,
            weight=1.0,
        )
