"""
Learning Path data model: paths, modules, assessments and adaptive state.

A LearningPath is produced once by the path generator; afterwards its module
ordering is fixed and only module status/score/adaptive content and the
path-level aggregates change.
"""

from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass, field
from typing import Any, Literal, Optional

from .recommendation import AIRecommendation

# Type aliases for clarity
Difficulty = Literal["beginner", "intermediate", "advanced", "expert"]
MediumType = Literal["video", "reading", "interactive", "quiz", "project", "discussion"]
ModuleStatus = Literal["not_started", "in_progress", "completed", "skipped"]
PathStatus = Literal["active", "paused", "completed", "abandoned"]
QuestionDifficulty = Literal["easy", "medium", "hard"]
MasteryLevel = Literal["novice", "beginner", "intermediate", "advanced", "expert"]
AssessmentType = Literal["quiz", "project", "discussion", "peer_review", "self_assessment"]
QuestionType = Literal["multiple_choice", "true_false", "fill_blank", "essay", "matching", "drag_drop"]
SignalType = Literal["performance", "time", "engagement", "error_pattern", "learning_style"]
ConditionOperator = Literal["less_than", "greater_than", "equals", "contains", "not_contains"]
FragmentType = Literal["explanation", "example", "hint", "challenge", "remediation"]
DifficultyShift = Literal["easier", "same", "harder"]
PacingAdjustment = Literal["accelerated", "normal", "relaxed"]

DIFFICULTY_RANK: dict[str, int] = {"beginner": 1, "intermediate": 2, "advanced": 3, "expert": 4}
QUESTION_DIFFICULTY_ORDER: tuple[str, ...] = ("easy", "medium", "hard")

TERMINAL_MODULE_STATUSES = frozenset({"completed", "skipped"})
MODULE_STATUSES = ("not_started", "in_progress", "completed", "skipped")
PATH_STATUSES = ("active", "paused", "completed", "abandoned")


@dataclass
class AssessmentQuestion:
    id: str
    type: QuestionType
    prompt: str
    correct_answer: str | list[str]
    explanation: str
    difficulty: QuestionDifficulty = "medium"
    points: int = 10
    options: Optional[list[str]] = None
    tags: list[str] = field(default_factory=list)
    adaptive: bool = True


@dataclass
class ModuleAssessment:
    type: AssessmentType = "quiz"
    passing_score: float = 80.0
    questions: list[AssessmentQuestion] = field(default_factory=list)
    time_limit: Optional[float] = None  # minutes
    allow_retakes: bool = True
    max_retakes: int = 2
    weight: float = 0.8

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ModuleAssessment:
        data = dict(data)
        data["questions"] = [AssessmentQuestion(**q) for q in data.get("questions", [])]
        return cls(**data)


@dataclass
class AdaptiveCondition:
    """Signal that triggered an adaptive fragment (numeric comparison)."""

    type: SignalType
    operator: ConditionOperator
    value: float
    threshold: float


@dataclass
class AdaptiveContent:
    condition: AdaptiveCondition
    content: str
    type: FragmentType
    difficulty: DifficultyShift
    triggers: list[str] = field(default_factory=list)
    id: str = field(default_factory=lambda: f"adp-{uuid.uuid4()}")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AdaptiveContent:
        data = dict(data)
        data["condition"] = AdaptiveCondition(**data["condition"])
        return cls(**data)


@dataclass
class CompletionCriteria:
    type: Literal["score", "time", "engagement", "completion", "mastery"] = "score"
    threshold: float = 80.0
    required: bool = True
    weight: float = 1.0


@dataclass
class LearningModule:
    """One content-backed unit of study inside a path."""

    id: str
    title: str
    description: str
    type: MediumType
    duration: float  # minutes
    difficulty: Difficulty
    order: int
    content_id: str
    assessment: ModuleAssessment
    estimated_time: float  # minutes
    status: ModuleStatus = "not_started"
    prerequisites: list[str] = field(default_factory=list)  # module ids
    learning_objectives: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    adaptive_content: list[AdaptiveContent] = field(default_factory=list)
    completion_criteria: CompletionCriteria = field(default_factory=CompletionCriteria)
    actual_time: Optional[float] = None
    started_at: Optional[str] = None
    completed_at: Optional[str] = None
    score: Optional[float] = None
    attempts: int = 0
    max_attempts: int = 3

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_MODULE_STATUSES

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LearningModule:
        data = dict(data)
        data["assessment"] = ModuleAssessment.from_dict(data["assessment"])
        data["adaptive_content"] = [
            AdaptiveContent.from_dict(item) for item in data.get("adaptive_content", [])
        ]
        data["completion_criteria"] = CompletionCriteria(**data.get("completion_criteria", {}))
        return cls(**data)


@dataclass
class AdaptiveSettings:
    difficulty_adjustment: Literal["automatic", "manual", "hybrid"] = "automatic"
    pacing_adjustment: PacingAdjustment = "normal"
    content_preference: Literal["visual", "auditory", "reading", "kinesthetic", "mixed"] = "mixed"
    support_level: Literal["minimal", "moderate", "extensive"] = "moderate"
    challenge_level: Literal["easy", "moderate", "challenging", "expert"] = "moderate"
    feedback_frequency: Literal["immediate", "periodic", "on_demand"] = "immediate"
    intervention_threshold: float = 0.3
    mastery_threshold: float = 0.8


@dataclass
class PerformanceMetrics:
    overall_score: float = 0.0  # 0-100
    time_spent: float = 0.0  # minutes
    engagement_score: float = 0.0  # 0-1
    completion_rate: float = 0.0  # 0-1
    retention_rate: float = 0.0  # 0-1
    difficulty_progression: list[float] = field(default_factory=list)
    learning_velocity: float = 0.0  # modules per week
    mastery_level: MasteryLevel = "novice"
    strengths: list[str] = field(default_factory=list)
    weaknesses: list[str] = field(default_factory=list)
    improvement_areas: list[str] = field(default_factory=list)
    predicted_completion: float = 0.0  # days
    success_probability: float = 0.7


@dataclass
class Milestone:
    id: str
    title: str
    description: str
    module_ids: list[str]
    skills: list[str]
    estimated_time: float  # minutes
    completed: bool = False
    completed_at: Optional[str] = None


@dataclass
class LearningPath:
    """
    Ordered, learner-specific curriculum instance.

    ``current_progress`` is always 100 * completed / total, recomputed by the
    progress tracker and never set by hand.
    """

    learner_id: str
    title: str
    description: str
    category: str
    difficulty: Difficulty
    estimated_duration: float  # hours
    created_at: str
    last_accessed: str
    modules: list[LearningModule] = field(default_factory=list)
    id: str = field(default_factory=lambda: f"path-{uuid.uuid4()}")
    current_progress: float = 0.0
    status: PathStatus = "active"
    completion_date: Optional[str] = None
    goals: list[str] = field(default_factory=list)
    prerequisites: list[str] = field(default_factory=list)
    learning_objectives: list[str] = field(default_factory=list)
    skills: list[str] = field(default_factory=list)
    tags: list[str] = field(default_factory=list)
    milestones: list[Milestone] = field(default_factory=list)
    ai_recommendations: list[AIRecommendation] = field(default_factory=list)
    adaptive_settings: AdaptiveSettings = field(default_factory=AdaptiveSettings)
    performance_metrics: PerformanceMetrics = field(default_factory=PerformanceMetrics)

    def find_module(self, module_id: str) -> Optional[LearningModule]:
        for module in self.modules:
            if module.id == module_id:
                return module
        return None

    def completed_count(self) -> int:
        return sum(1 for m in self.modules if m.status == "completed")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LearningPath:
        data = dict(data)
        data["modules"] = [LearningModule.from_dict(m) for m in data.get("modules", [])]
        data["milestones"] = [Milestone(**m) for m in data.get("milestones", [])]
        data["ai_recommendations"] = [
            AIRecommendation.from_dict(r) for r in data.get("ai_recommendations", [])
        ]
        data["adaptive_settings"] = AdaptiveSettings(**data.get("adaptive_settings", {}))
        data["performance_metrics"] = PerformanceMetrics(**data.get("performance_metrics", {}))
        return cls(**data)
