"""
Learning Profile: per-learner style, cognitive, motivation, knowledge and habit traits.

This module provides:
- Nested profile dataclasses with clamped numeric fields
- Dominant learning-style derivation
- ProfileStore: lazy creation with fixed defaults and field-wise merge updates
"""

from __future__ import annotations

from copy import deepcopy
from dataclasses import asdict, dataclass, field, fields
from datetime import datetime, timezone
from typing import Any, Callable, Iterable, Literal, Optional

from loguru import logger

from ..exceptions import ProfileNotFoundError

# Type aliases for clarity
StyleName = Literal["visual", "auditory", "reading", "kinesthetic", "mixed"]
GoalOrientation = Literal["mastery", "performance", "avoidance"]

# Tie-break order for the dominant style
STYLE_PRIORITY: tuple[str, ...] = ("visual", "auditory", "reading", "kinesthetic")
GOAL_ORIENTATIONS = ("mastery", "performance", "avoidance")


def clamp(value: float, low: float = 0.0, high: float = 1.0) -> float:
    """Clamp a number into [low, high]."""
    return max(low, min(high, float(value)))


def unique_tags(values: Iterable[str] | str) -> list[str]:
    """
    Deduplicate free-text tags, keeping first-seen order.

    A bare string is one tag, not a sequence of characters.
    """
    if isinstance(values, str):
        values = [values]
    seen: dict[str, None] = {}
    for value in values:
        if value and value not in seen:
            seen[str(value)] = None
    return list(seen)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class LearningStyle:
    """VARK weights in [0, 1] and the derived dominant style."""

    visual: float = 0.7
    auditory: float = 0.6
    reading: float = 0.8
    kinesthetic: float = 0.5
    dominant: StyleName = "reading"

    def __post_init__(self):
        self.normalize()

    def normalize(self) -> None:
        """Clamp weights and recompute the dominant style."""
        for name in STYLE_PRIORITY:
            setattr(self, name, clamp(getattr(self, name)))
        self.dominant = self.compute_dominant()

    def compute_dominant(self) -> StyleName:
        """
        Argmax over the four weights.

        Ties go to the earlier style in STYLE_PRIORITY. A profile with no
        signal at all (every weight 0) is "mixed".
        """
        best = max(getattr(self, name) for name in STYLE_PRIORITY)
        if best <= 0:
            return "mixed"
        for name in STYLE_PRIORITY:
            if getattr(self, name) == best:
                return name  # type: ignore[return-value]
        return "mixed"

    def weight_for(self, style: str) -> float:
        return getattr(self, style)


@dataclass
class CognitiveProfile:
    attention_span: float = 45  # minutes
    memory_capacity: float = 0.7
    processing_speed: float = 0.6
    logical_reasoning: float = 0.8
    creativity: float = 0.6

    def __post_init__(self):
        self.normalize()

    def normalize(self) -> None:
        self.attention_span = max(0.0, float(self.attention_span))
        for name in ("memory_capacity", "processing_speed", "logical_reasoning", "creativity"):
            setattr(self, name, clamp(getattr(self, name)))


@dataclass
class MotivationProfile:
    intrinsic_motivation: float = 0.8
    extrinsic_motivation: float = 0.6
    goal_orientation: GoalOrientation = "mastery"
    self_efficacy: float = 0.7
    persistence: float = 0.8

    def __post_init__(self):
        self.normalize()

    def normalize(self) -> None:
        for name in ("intrinsic_motivation", "extrinsic_motivation", "self_efficacy", "persistence"):
            setattr(self, name, clamp(getattr(self, name)))


@dataclass
class KnowledgeProfile:
    current_level: float = 30  # 0-100
    knowledge_gaps: list[str] = field(default_factory=list)
    strengths: list[str] = field(default_factory=list)
    interests: list[str] = field(default_factory=list)
    career_goals: list[str] = field(default_factory=list)

    def __post_init__(self):
        self.normalize()

    def normalize(self) -> None:
        self.current_level = clamp(self.current_level, 0.0, 100.0)
        for name in ("knowledge_gaps", "strengths", "interests", "career_goals"):
            setattr(self, name, unique_tags(getattr(self, name)))


@dataclass
class BehavioralProfile:
    study_habits: list[str] = field(default_factory=lambda: ["morning study", "note-taking"])
    preferred_times: list[str] = field(default_factory=lambda: ["09:00", "14:00"])
    optimal_session_length: float = 45  # minutes
    break_frequency: float = 15  # minutes
    social_learning: bool = True
    independent_learning: bool = True

    def __post_init__(self):
        self.normalize()

    def normalize(self) -> None:
        self.study_habits = unique_tags(self.study_habits)
        self.preferred_times = unique_tags(self.preferred_times)
        self.optimal_session_length = max(0.0, float(self.optimal_session_length))
        self.break_frequency = max(0.0, float(self.break_frequency))
        self.social_learning = bool(self.social_learning)
        self.independent_learning = bool(self.independent_learning)


# Section name → dataclass, in serialization order
PROFILE_SECTIONS: dict[str, type] = {
    "learning_style": LearningStyle,
    "cognitive_profile": CognitiveProfile,
    "motivation_profile": MotivationProfile,
    "knowledge_profile": KnowledgeProfile,
    "behavioral_profile": BehavioralProfile,
}


@dataclass
class LearningProfile:
    """
    Durable per-learner record that drives every personalization decision.

    Created with fixed defaults on first reference; mutated only through
    ProfileStore.update.
    """

    learner_id: str
    learning_style: LearningStyle = field(default_factory=LearningStyle)
    cognitive_profile: CognitiveProfile = field(default_factory=CognitiveProfile)
    motivation_profile: MotivationProfile = field(default_factory=MotivationProfile)
    knowledge_profile: KnowledgeProfile = field(default_factory=KnowledgeProfile)
    behavioral_profile: BehavioralProfile = field(default_factory=BehavioralProfile)
    last_updated: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Export profile as a plain dictionary."""
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LearningProfile:
        """Rebuild a profile from its dictionary form (unknown keys ignored)."""
        sections = {}
        for name, section_cls in PROFILE_SECTIONS.items():
            raw = data.get(name) or {}
            known = {f.name for f in fields(section_cls)}
            sections[name] = section_cls(**{k: v for k, v in raw.items() if k in known})
        return cls(
            learner_id=data["learner_id"],
            last_updated=data.get("last_updated", ""),
            **sections,
        )


class ProfileStore:
    """
    Owns the learner-id → LearningProfile table.

    Profiles are never deleted here; deletion belongs to the caller's
    data-retention layer.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None):
        self._profiles: dict[str, LearningProfile] = {}
        self._clock = clock or utc_now

    def _stamp(self, profile: LearningProfile) -> None:
        profile.last_updated = self._clock().isoformat()

    def __contains__(self, learner_id: str) -> bool:
        return learner_id in self._profiles

    def __len__(self) -> int:
        return len(self._profiles)

    def get(self, learner_id: str) -> Optional[LearningProfile]:
        """Return the live profile or None (internal use)."""
        return self._profiles.get(learner_id)

    def require(self, learner_id: str) -> LearningProfile:
        """Return the live profile or raise ProfileNotFoundError."""
        profile = self._profiles.get(learner_id)
        if profile is None:
            raise ProfileNotFoundError(learner_id)
        return profile

    def get_or_create(self, learner_id: str) -> LearningProfile:
        """
        Return the learner's profile, creating it with defaults if absent.

        Idempotent: an existing profile is returned untouched.
        """
        profile = self._profiles.get(learner_id)
        if profile is None:
            profile = LearningProfile(learner_id=learner_id)
            self._stamp(profile)
            self._profiles[learner_id] = profile
            logger.debug(f"Created default learning profile for {learner_id}")
        return profile

    def update(self, learner_id: str, partial: dict[str, Any]) -> LearningProfile:
        """
        Merge partial data into an existing profile, field by field.

        Each value is converted on a scratch copy of its section first; a
        value that cannot be converted (``"high"`` for a weight, a number
        for a tag list) is skipped with a warning. Accepted values are
        committed together once the whole partial has been processed.

        Args:
            learner_id: Learner identifier (must have been created before)
            partial: ``{section: {field: value}}``; omitted fields keep their value

        Returns:
            The updated live profile

        Raises:
            ProfileNotFoundError: If the learner was never referenced
        """
        profile = self.require(learner_id)
        staged: dict[str, Any] = {}

        for section_name, values in (partial or {}).items():
            if section_name not in PROFILE_SECTIONS or not isinstance(values, dict):
                logger.warning(f"Ignoring unknown profile section '{section_name}' for {learner_id}")
                continue

            section = staged.get(section_name) or deepcopy(getattr(profile, section_name))
            known = {f.name for f in fields(section)}
            for key, value in values.items():
                if key not in known or key == "dominant":
                    logger.warning(f"Ignoring unknown profile field '{section_name}.{key}'")
                    continue
                if key == "goal_orientation" and value not in GOAL_ORIENTATIONS:
                    logger.warning(f"Ignoring invalid goal orientation '{value}' for {learner_id}")
                    continue

                trial = deepcopy(section)
                setattr(trial, key, deepcopy(value))
                try:
                    trial.normalize()
                except (TypeError, ValueError):
                    logger.warning(
                        f"Ignoring malformed value {value!r} for '{section_name}.{key}' of {learner_id}"
                    )
                    continue
                section = trial
            staged[section_name] = section

        for section_name, section in staged.items():
            setattr(profile, section_name, section)
        self._stamp(profile)
        logger.debug(f"Updated learning profile for {learner_id}")
        return profile

    # ==================== Persistence ====================

    def to_dict(self) -> dict[str, dict[str, Any]]:
        """Serialize the whole table keyed by learner id."""
        return {learner_id: p.to_dict() for learner_id, p in self._profiles.items()}

    def load(self, records: dict[str, dict[str, Any]]) -> None:
        """Replace the table with deserialized records."""
        self._profiles = {
            learner_id: LearningProfile.from_dict(record)
            for learner_id, record in records.items()
        }

    def __repr__(self) -> str:
        return f"ProfileStore(profiles={len(self._profiles)})"
