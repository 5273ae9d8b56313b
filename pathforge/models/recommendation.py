"""
Recommendations and their tagged payloads.

Each recommendation category carries a payload whose shape is fixed by its
``kind`` tag, so consumers never inspect an untyped blob.
"""

from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass, field
from typing import Any, Literal, Optional, Union

RecommendationCategory = Literal["content", "path", "difficulty", "pacing", "support", "next_step"]
Priority = Literal["low", "medium", "high", "urgent"]


@dataclass
class PacingPayload:
    session_length: float
    break_frequency: float
    kind: Literal["pacing"] = "pacing"


@dataclass
class ContentPreferencePayload:
    preferred_type: str
    kind: Literal["content_preference"] = "content_preference"


@dataclass
class NextStepPayload:
    action: Literal["review", "proceed"]
    module_id: Optional[str] = None
    next_module_id: Optional[str] = None
    kind: Literal["next_step"] = "next_step"


@dataclass
class InterventionPayload:
    intervention_type: Literal["remediation", "engagement"]
    priority: Priority
    kind: Literal["intervention"] = "intervention"


RecommendationPayload = Union[
    PacingPayload, ContentPreferencePayload, NextStepPayload, InterventionPayload
]

_PAYLOAD_TYPES: dict[str, type] = {
    "pacing": PacingPayload,
    "content_preference": ContentPreferencePayload,
    "next_step": NextStepPayload,
    "intervention": InterventionPayload,
}


def payload_from_dict(data: dict[str, Any]) -> RecommendationPayload:
    """Rebuild a payload from its tagged dictionary form."""
    kind = data.get("kind")
    payload_cls = _PAYLOAD_TYPES.get(kind)
    if payload_cls is None:
        raise ValueError(f"Unknown recommendation payload kind: {kind!r}")
    return payload_cls(**data)


@dataclass
class AIRecommendation:
    """
    Explainable, confidence-scored suggestion.

    Attributes:
        id: Unique identifier
        category: What the recommendation is about
        title: Short headline
        description: Human-readable explanation
        confidence: 0-1
        reasoning: Ordered reasons behind the decision
        payload: Tagged, category-specific data
        priority: low | medium | high | urgent
        created_at: ISO 8601 timestamp
        is_applied: Whether the learner/operator acted on it
        applied_at: When it was applied
        effectiveness: Optional 0-1 feedback after applying
    """

    category: RecommendationCategory
    title: str
    description: str
    confidence: float
    payload: RecommendationPayload
    priority: Priority
    created_at: str
    reasoning: list[str] = field(default_factory=list)
    id: str = field(default_factory=lambda: f"rec-{uuid.uuid4()}")
    is_applied: bool = False
    applied_at: Optional[str] = None
    effectiveness: Optional[float] = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AIRecommendation:
        data = dict(data)
        data["payload"] = payload_from_dict(data["payload"])
        return cls(**data)
