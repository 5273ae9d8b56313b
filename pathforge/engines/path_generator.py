"""
Path Generator - builds a personalized, ordered learning path.

Pipeline:
1. Filter the catalog (relevant to a goal, difficulty-appropriate, interesting)
2. Build one module per surviving item, with an assessment
3. Stable sort by difficulty rank, then by learning-style affinity
4. Apply caller constraints, then assign 1-based order
5. Derive path aggregates, milestones, adaptive settings and seed recommendations
"""

from __future__ import annotations

import math
import uuid
from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Iterable, List, Optional, Sequence

from loguru import logger

from ..models.learning_path import (
    DIFFICULTY_RANK,
    AdaptiveSettings,
    LearningModule,
    LearningPath,
    Milestone,
    PerformanceMetrics,
)
from ..models.learning_profile import LearningProfile, unique_tags, utc_now
from ..config import config
from ..utils.catalog import ContentCatalog, ContentItem
from .assessment_builder import AssessmentBuilder
from .recommendations import RecommendationEngine

# Medium → learning-style weight used for ordering
MEDIUM_STYLE = {
    "video": "visual",
    "reading": "reading",
    "interactive": "kinesthetic",
    "discussion": "auditory",
}
DEFAULT_STYLE_AFFINITY = 0.5

# Goal keyword → path category, first match wins
CATEGORY_KEYWORDS = (
    ("technology", "technology"),
    ("business", "business"),
    ("health", "healthcare"),
)

MAX_MILESTONES = 4


@dataclass(frozen=True)
class GenerationConstraints:
    """
    Optional caps applied after ordering.

    Attributes:
        max_modules: Keep at most this many modules
        max_hours: Keep modules while the cumulative duration fits
        allowed_types: Only keep these media types
    """

    max_modules: Optional[int] = None
    max_hours: Optional[float] = None
    allowed_types: Optional[frozenset[str]] = None

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> GenerationConstraints:
        data = data or {}
        allowed = data.get("allowed_types")
        return cls(
            max_modules=data.get("max_modules"),
            max_hours=data.get("max_hours"),
            allowed_types=frozenset(allowed) if allowed is not None else None,
        )


# ==================== Selection predicates ====================


def is_relevant(item: ContentItem, goals: Iterable[str]) -> bool:
    """A goal is a case-insensitive substring of the title, category or a tag."""
    haystacks = [item.title.lower(), item.category.lower()] + [t.lower() for t in item.tags]
    for goal in goals:
        needle = goal.lower()
        if needle and any(needle in text for text in haystacks):
            return True
    return False


def is_difficulty_appropriate(difficulty: str, current_level: float) -> bool:
    """
    Whether a learner at ``current_level`` may take content of ``difficulty``.

    The buckets overlap at their edges (level 25 fits beginner and
    intermediate). Unknown difficulty labels are accepted.
    """
    if difficulty == "beginner":
        return current_level <= 30
    if difficulty == "intermediate":
        return 20 < current_level <= 70
    if difficulty == "advanced":
        return 50 < current_level <= 90
    if difficulty == "expert":
        return current_level > 80
    return True


def is_interesting(item: ContentItem, interests: Sequence[str]) -> bool:
    """Some tag contains some interest; no interests means everything qualifies."""
    if not interests:
        return True
    tags = [t.lower() for t in item.tags]
    return any(interest.lower() in tag for interest in interests for tag in tags)


def style_affinity(module_type: str, profile: LearningProfile) -> float:
    style = MEDIUM_STYLE.get(module_type)
    if style is None:
        return DEFAULT_STYLE_AFFINITY
    return profile.learning_style.weight_for(style)


def determine_category(goals: Iterable[str]) -> str:
    lowered = [g.lower() for g in goals]
    for keyword, category in CATEGORY_KEYWORDS:
        if any(keyword in goal for goal in lowered):
            return category
    return "general"


def most_common_difficulty(modules: Sequence[LearningModule]) -> str:
    """Most frequent module difficulty; ties go to the first encountered."""
    if not modules:
        return "intermediate"
    return Counter(m.difficulty for m in modules).most_common(1)[0][0]


def derive_adaptive_settings(profile: LearningProfile) -> AdaptiveSettings:
    motivation = profile.motivation_profile
    return AdaptiveSettings(
        difficulty_adjustment="automatic",
        pacing_adjustment="accelerated" if motivation.persistence > 0.7 else "normal",
        content_preference=profile.learning_style.dominant,
        support_level="extensive" if motivation.self_efficacy < 0.6 else "moderate",
        challenge_level="challenging" if profile.cognitive_profile.processing_speed > 0.7 else "moderate",
        feedback_frequency="immediate",
        intervention_threshold=config.adaptive.intervention_threshold,
        mastery_threshold=config.adaptive.mastery_threshold,
    )


def build_milestones(modules: Sequence[LearningModule]) -> List[Milestone]:
    """Group ordered modules into at most four milestones of ceil(N/4) modules."""
    if not modules:
        return []

    size = math.ceil(len(modules) / MAX_MILESTONES)
    milestones = []
    for index, start in enumerate(range(0, len(modules), size), start=1):
        chunk = modules[start:start + size]
        milestones.append(
            Milestone(
                id=f"ms-{uuid.uuid4()}",
                title=f"Milestone {index}",
                description=f"Complete {', '.join(m.title for m in chunk)}",
                module_ids=[m.id for m in chunk],
                skills=unique_tags(tag for m in chunk for tag in m.tags),
                estimated_time=sum(m.duration for m in chunk),
            )
        )
    return milestones


class PathGenerator:
    """
    Generates learning paths from a read-only content catalog.

    Usage:
        generator = PathGenerator(catalog)
        path = generator.generate(profile, ["python"])
    """

    def __init__(
        self,
        catalog: ContentCatalog,
        assessment_builder: Optional[AssessmentBuilder] = None,
        recommendation_engine: Optional[RecommendationEngine] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.catalog = catalog
        self.assessment_builder = assessment_builder or AssessmentBuilder()
        self._clock = clock or utc_now
        self.recommendation_engine = recommendation_engine or RecommendationEngine(clock=self._clock)

    def select_content(self, goals: Sequence[str], profile: LearningProfile) -> List[ContentItem]:
        """Catalog items passing all three filters, in catalog order."""
        knowledge = profile.knowledge_profile
        return [
            item
            for item in self.catalog.items()
            if is_relevant(item, goals)
            and is_difficulty_appropriate(item.difficulty, knowledge.current_level)
            and is_interesting(item, knowledge.interests)
        ]

    def build_module(self, item: ContentItem) -> LearningModule:
        return LearningModule(
            id=f"mod-{uuid.uuid4()}",
            title=item.title,
            description=f"Personalized module for {item.title}",
            type=item.type,
            duration=item.duration,
            difficulty=item.difficulty,
            order=0,
            content_id=item.id,
            assessment=self.assessment_builder.build(item),
            estimated_time=item.duration,
            prerequisites=list(item.prerequisites),
            learning_objectives=list(item.learning_objectives),
            tags=list(item.tags),
            completion_criteria=self.assessment_builder.completion_criteria(),
            max_attempts=self.assessment_builder.settings.max_attempts,
        )

    def order_modules(
        self, modules: List[LearningModule], profile: LearningProfile
    ) -> List[LearningModule]:
        """Stable sort: difficulty rank ascending, style affinity descending."""
        return sorted(
            modules,
            key=lambda m: (
                DIFFICULTY_RANK.get(m.difficulty, len(DIFFICULTY_RANK) + 1),
                -style_affinity(m.type, profile),
            ),
        )

    def apply_constraints(
        self, modules: List[LearningModule], constraints: GenerationConstraints
    ) -> List[LearningModule]:
        if constraints.allowed_types is not None:
            modules = [m for m in modules if m.type in constraints.allowed_types]

        kept: List[LearningModule] = []
        minutes = 0.0
        for module in modules:
            if constraints.max_modules is not None and len(kept) >= constraints.max_modules:
                break
            if constraints.max_hours is not None and (minutes + module.duration) / 60 > constraints.max_hours:
                break
            kept.append(module)
            minutes += module.duration
        return kept

    @staticmethod
    def link_prerequisites(modules: List[LearningModule]) -> None:
        """Rewrite content-id prerequisites to module ids where the content is in the path."""
        module_by_content = {m.content_id: m.id for m in modules}
        for module in modules:
            module.prerequisites = unique_tags(
                module_by_content.get(prereq, prereq) for prereq in module.prerequisites
            )

    def generate(
        self,
        profile: LearningProfile,
        goals: Sequence[str],
        constraints: Optional[GenerationConstraints] = None,
    ) -> LearningPath:
        """
        Build a learning path for ``profile`` covering ``goals``.

        Args:
            profile: Learner profile (already resolved by the caller)
            goals: Free-text goals matched against catalog titles/categories/tags
            constraints: Optional caps on module count, hours and media types

        Returns:
            A new LearningPath (zero modules when nothing in the catalog fits)
        """
        constraints = constraints or GenerationConstraints()
        goals = list(goals)

        items = self.select_content(goals, profile)
        modules = self.order_modules([self.build_module(item) for item in items], profile)
        modules = self.apply_constraints(modules, constraints)
        for position, module in enumerate(modules, start=1):
            module.order = position
        self.link_prerequisites(modules)

        now = self._clock().isoformat()
        path = LearningPath(
            learner_id=profile.learner_id,
            title=f"Personalized Path: {', '.join(goals)}",
            description="Learning path tailored to your goals and learning style",
            category=determine_category(goals),
            difficulty=most_common_difficulty(modules),
            estimated_duration=sum(m.duration for m in modules) / 60,
            created_at=now,
            last_accessed=now,
            modules=modules,
            goals=goals,
            prerequisites=unique_tags(p for m in modules for p in m.prerequisites),
            learning_objectives=unique_tags(o for m in modules for o in m.learning_objectives),
            skills=unique_tags(
                tag for m in modules for q in m.assessment.questions for tag in q.tags
            ),
            tags=unique_tags(tag for m in modules for tag in m.tags),
            milestones=build_milestones(modules),
            adaptive_settings=derive_adaptive_settings(profile),
            performance_metrics=PerformanceMetrics(
                success_probability=config.adaptive.initial_success_probability
            ),
        )
        path.ai_recommendations = self.recommendation_engine.seed_recommendations(profile)

        if not modules:
            logger.warning(f"No catalog content matched goals {goals} for {profile.learner_id}")
        logger.info(
            f"Generated path {path.id} for {profile.learner_id}: "
            f"{len(modules)} modules, {path.estimated_duration:.2f}h"
        )
        return path
