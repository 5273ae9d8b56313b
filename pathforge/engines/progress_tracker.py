"""
Progress Tracker - applies module progress events to a path.

Module state machine:
    not_started → in_progress | completed | skipped
    in_progress → in_progress | completed | skipped
    completed, skipped: terminal

After each accepted event the path's progress, performance metrics,
milestones and (when every module is terminal) its status are recomputed.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Optional

from loguru import logger

from ..config import AdaptiveConfig, config
from ..models.learning_path import LearningModule, LearningPath
from ..models.learning_profile import unique_tags, utc_now
from ..utils.progress import learning_velocity, mastery_level_for_score, predicted_completion_days

ALLOWED_TRANSITIONS = {
    "not_started": frozenset({"in_progress", "completed", "skipped"}),
    "in_progress": frozenset({"in_progress", "completed", "skipped"}),
    "completed": frozenset(),
    "skipped": frozenset(),
}


@dataclass(frozen=True)
class ModuleProgress:
    """
    One progress event for a module.

    Attributes:
        status: New module status
        score: Score in [0, 1], if the event carries one
        time_spent: Minutes spent during this event
    """

    status: str
    score: Optional[float] = None
    time_spent: float = 0.0


def can_transition(current: str, new: str) -> bool:
    return new in ALLOWED_TRANSITIONS.get(current, frozenset())


class ProgressTracker:
    """Mutates a live path in response to progress events."""

    def __init__(
        self,
        settings: Optional[AdaptiveConfig] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.settings = settings or config.adaptive
        self._clock = clock or utc_now

    def apply(self, path: LearningPath, module_id: str, progress: ModuleProgress) -> bool:
        """
        Apply one event to ``path`` in place.

        Args:
            path: Live path owned by the caller
            module_id: Module inside the path
            progress: Status, optional score and minutes spent

        Returns:
            False (and nothing mutated) if the module is unknown or the
            transition is not allowed; True otherwise
        """
        module = path.find_module(module_id)
        if module is None:
            logger.warning(f"Ignoring progress for unknown module {module_id} in path {path.id}")
            return False

        if not can_transition(module.status, progress.status):
            logger.warning(
                f"Ignoring illegal transition {module.status} -> {progress.status} "
                f"for module {module_id}"
            )
            return False

        now = self._clock()
        stamp = now.isoformat()

        self._update_module(module, progress, stamp)

        path.current_progress = 100 * path.completed_count() / len(path.modules)
        path.last_accessed = stamp

        self._update_metrics(path, progress, now)
        self._update_milestones(path, stamp)

        if path.status != "completed" and all(m.is_terminal for m in path.modules):
            path.status = "completed"
            path.completion_date = stamp
            logger.info(f"Path {path.id} completed")

        return True

    @staticmethod
    def _update_module(module: LearningModule, progress: ModuleProgress, stamp: str) -> None:
        if progress.status == "in_progress" and module.started_at is None:
            module.started_at = stamp
        module.status = progress.status

        if progress.score is not None:
            module.score = progress.score
            module.attempts += 1

        module.actual_time = progress.time_spent

        if progress.status == "completed":
            module.completed_at = stamp

    def _update_metrics(self, path: LearningPath, progress: ModuleProgress, now: datetime) -> None:
        metrics = path.performance_metrics
        scored = [m for m in path.modules if m.score is not None]

        if scored:
            metrics.overall_score = sum(m.score for m in scored) / len(scored) * 100
        else:
            metrics.overall_score = 0.0

        metrics.time_spent += progress.time_spent
        metrics.engagement_score = min(metrics.engagement_score + self.settings.engagement_step, 1.0)

        completed = path.completed_count()
        metrics.completion_rate = completed / len(path.modules)

        created_at = datetime.fromisoformat(path.created_at)
        metrics.learning_velocity = learning_velocity(completed, created_at, now)
        metrics.mastery_level = mastery_level_for_score(metrics.overall_score)

        if progress.score is not None:
            metrics.difficulty_progression.append(progress.score)

        metrics.strengths = [m.title for m in scored if m.score >= self.settings.strength_score]
        weak = [m for m in scored if m.score < self.settings.weakness_score]
        metrics.weaknesses = [m.title for m in weak]
        metrics.improvement_areas = unique_tags(tag for m in weak for tag in m.tags)

        remaining = sum(1 for m in path.modules if not m.is_terminal)
        metrics.predicted_completion = predicted_completion_days(remaining, metrics.learning_velocity)

    @staticmethod
    def _update_milestones(path: LearningPath, stamp: str) -> None:
        status_by_id = {m.id: m.status for m in path.modules}
        for milestone in path.milestones:
            if milestone.completed:
                continue
            if all(status_by_id.get(mid) == "completed" for mid in milestone.module_ids):
                milestone.completed = True
                milestone.completed_at = stamp
