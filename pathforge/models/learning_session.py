"""
Learning session records kept in the per-learner session history.
"""

from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass, field
from typing import Any, Optional


@dataclass
class LearningSession:
    """
    One study session.

    Attributes:
        learner_id: Learner who studied
        started_at: ISO 8601 timestamp
        duration: Minutes spent
        completion_rate: 0-100, share of the planned work finished
        score: Optional 0-1 score achieved
        engagement_score: Optional 0-1 engagement estimate
        path_id: Path the session belonged to (if any)
        module_id: Module the session belonged to (if any)
        status: Module status reported with the session
        session_id: Unique identifier
    """

    learner_id: str
    started_at: str
    duration: float = 0.0
    completion_rate: float = 0.0
    score: Optional[float] = None
    engagement_score: Optional[float] = None
    path_id: Optional[str] = None
    module_id: Optional[str] = None
    status: Optional[str] = None
    session_id: str = field(default_factory=lambda: f"ls-{uuid.uuid4()}")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> LearningSession:
        return cls(**data)
