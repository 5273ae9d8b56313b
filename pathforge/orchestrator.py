"""
Learning Path Orchestrator - the public entry point of the engine.

Owns the three engine tables (profiles, paths, session history) as instance
state and wires the engines together:
1. Profile management (lazy creation, merge updates)
2. Path generation from the content catalog
3. Content adaptation, pacing and personalization
4. Recommendations, interventions, predictions
5. Progress events, path lifecycle and session analytics
6. Snapshot persistence after every mutation

Every value handed back to callers is a deep copy; engine state only changes
through the named operations below.
"""

from __future__ import annotations

import threading
from copy import deepcopy
from dataclasses import fields
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional, Sequence, Union

import numpy as np
from loguru import logger

from .engines.adaptive_engine import AdaptiveEngine, ModulePerformance
from .engines.path_generator import GenerationConstraints, PathGenerator
from .engines.progress_tracker import ModuleProgress, ProgressTracker
from .engines.recommendations import (
    CurrentProgress,
    PerformanceSnapshot,
    RecommendationEngine,
    assess_mastery,
    detect_learning_gaps,
    predict_performance,
)
from .config import config
from .exceptions import InvalidTransitionError, PathNotFoundError, RecommendationNotFoundError
from .models.learning_path import AdaptiveContent, AdaptiveSettings, LearningPath
from .models.learning_profile import LearningProfile, ProfileStore, utc_now
from .models.learning_session import LearningSession
from .models.recommendation import AIRecommendation
from .utils.catalog import ContentCatalog
from .utils.persistence import InMemoryPersistence, PersistenceAdapter
from .utils.progress import mastery_summary
from .utils.validation import LearningPathValidator, LearningProfileValidator

# ==================== Configuration Constants ====================
SETTABLE_PATH_STATUSES = ("active", "paused", "abandoned")
FINAL_PATH_STATUSES = ("completed", "abandoned")
COMPLETED_SESSION_RATE = 80.0  # session completion_rate (0-100) counted as finished
RECENT_SESSION_WINDOW = 5
LONG_SESSION_MINUTES = 90
LOW_COMPLETION_RATE = 70
CONSISTENT_SESSION_COUNT = 10


def _coerce(value: Any, cls: type) -> Any:
    """Accept either a value object or a plain dict of its fields."""
    if isinstance(value, cls):
        return value
    if isinstance(value, dict):
        known = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in value.items() if k in known})
    raise TypeError(f"Expected {cls.__name__} or dict, got {type(value).__name__}")


class LearningPathOrchestrator:
    """
    Adaptive learning-path engine.

    Usage:
        engine = LearningPathOrchestrator(catalog, JsonFilePersistence(path))
        path = engine.generate_learning_path("learner-1", ["python"])
        engine.update_module_progress(path.id, path.modules[0].id,
                                      ModuleProgress(status="completed", score=0.9))

    Mutating operations hold an internal re-entrant lock for the
    read-modify-write and the snapshot flush.
    """

    def __init__(
        self,
        catalog: ContentCatalog,
        persistence: Optional[PersistenceAdapter] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        """
        Initialize the engine and load persisted state.

        Args:
            catalog: Read-only content catalog
            persistence: Snapshot adapter (in-memory if None)
            clock: Source of timestamps (UTC now if None)
        """
        self.catalog = catalog
        self.persistence = persistence or InMemoryPersistence()
        self._clock = clock or utc_now
        self._lock = threading.RLock()

        self.profiles = ProfileStore(clock=self._clock)
        self.paths: Dict[str, LearningPath] = {}
        self.sessions: Dict[str, List[LearningSession]] = {}

        self.recommender = RecommendationEngine(clock=self._clock)
        self.generator = PathGenerator(
            catalog, recommendation_engine=self.recommender, clock=self._clock
        )
        self.adaptive = AdaptiveEngine()
        self.tracker = ProgressTracker(clock=self._clock)

        self._load()

    # ==================== Persistence ====================

    def _load(self) -> None:
        try:
            snapshot = self.persistence.load()
        except Exception as e:
            logger.warning(f"Failed to load persisted state, starting empty: {e}")
            return

        profile_validator = LearningProfileValidator()
        valid_profiles = {}
        for learner_id, record in (snapshot.get("profiles") or {}).items():
            result = profile_validator.validate(record)
            if not result:
                logger.warning(f"Skipping invalid profile {learner_id}: {result.errors}")
                continue
            valid_profiles[learner_id] = record
        self.profiles.load(valid_profiles)

        path_validator = LearningPathValidator()
        for path_id, record in (snapshot.get("paths") or {}).items():
            result = path_validator.validate(record)
            if not result:
                logger.warning(f"Skipping invalid path {path_id}: {result.errors}")
                continue
            try:
                self.paths[path_id] = LearningPath.from_dict(record)
            except (TypeError, KeyError, ValueError) as e:
                logger.warning(f"Skipping unreadable path {path_id}: {e}")

        for learner_id, records in (snapshot.get("sessions") or {}).items():
            history = []
            for record in records or []:
                try:
                    history.append(LearningSession.from_dict(record))
                except TypeError as e:
                    logger.warning(f"Skipping unreadable session for {learner_id}: {e}")
            self.sessions[learner_id] = history

        logger.debug(
            f"Loaded {len(self.profiles)} profiles, {len(self.paths)} paths, "
            f"{sum(len(h) for h in self.sessions.values())} sessions"
        )

    def snapshot(self) -> Dict[str, Dict[str, Any]]:
        """Serialize all three tables keyed by id."""
        with self._lock:
            return {
                "paths": {path_id: path.to_dict() for path_id, path in self.paths.items()},
                "profiles": self.profiles.to_dict(),
                "sessions": {
                    learner_id: [s.to_dict() for s in history]
                    for learner_id, history in self.sessions.items()
                },
            }

    def _flush(self) -> None:
        try:
            self.persistence.save(self.snapshot())
        except Exception as e:
            logger.warning(f"Failed to persist state, keeping in-memory tables: {e}")

    def _require_path(self, path_id: str) -> LearningPath:
        path = self.paths.get(path_id)
        if path is None:
            raise PathNotFoundError(path_id)
        return path

    # ==================== Profiles ====================

    def get_or_create_learning_profile(self, learner_id: str) -> LearningProfile:
        with self._lock:
            created = learner_id not in self.profiles
            profile = self.profiles.get_or_create(learner_id)
            if created:
                self._flush()
            return deepcopy(profile)

    def update_learning_profile(self, learner_id: str, partial: Dict[str, Any]) -> LearningProfile:
        """
        Merge ``partial`` into the learner's profile.

        Raises:
            ProfileNotFoundError: If the learner was never referenced
        """
        with self._lock:
            profile = self.profiles.update(learner_id, partial)
            self._flush()
            return deepcopy(profile)

    def get_learning_profile(self, learner_id: str) -> Optional[LearningProfile]:
        with self._lock:
            profile = self.profiles.get(learner_id)
            return deepcopy(profile) if profile is not None else None

    # ==================== Paths ====================

    def generate_learning_path(
        self,
        learner_id: str,
        goals: Sequence[str],
        constraints: Union[GenerationConstraints, Dict[str, Any], None] = None,
    ) -> LearningPath:
        """
        Generate and register a new learning path.

        Args:
            learner_id: Learner (profile created with defaults if unknown)
            goals: Free-text goals
            constraints: Optional GenerationConstraints or dict of its fields

        Returns:
            Copy of the registered path
        """
        if not isinstance(constraints, GenerationConstraints):
            constraints = GenerationConstraints.from_dict(constraints)

        with self._lock:
            profile = self.profiles.get_or_create(learner_id)
            path = self.generator.generate(profile, goals, constraints)
            self.paths[path.id] = path
            self._flush()
            return deepcopy(path)

    def get_learning_path(self, path_id: str) -> Optional[LearningPath]:
        with self._lock:
            path = self.paths.get(path_id)
            return deepcopy(path) if path is not None else None

    def get_user_learning_paths(self, learner_id: str) -> List[LearningPath]:
        with self._lock:
            return [deepcopy(p) for p in self.paths.values() if p.learner_id == learner_id]

    def set_path_status(self, path_id: str, status: str) -> LearningPath:
        """
        Pause, resume or abandon a path.

        Raises:
            PathNotFoundError: If the path does not exist
            ValueError: If ``status`` is not active/paused/abandoned
            InvalidTransitionError: If the path is already completed or abandoned
        """
        if status not in SETTABLE_PATH_STATUSES:
            raise ValueError(f"Path status must be one of {SETTABLE_PATH_STATUSES}, got {status!r}")

        with self._lock:
            path = self._require_path(path_id)
            if path.status in FINAL_PATH_STATUSES:
                raise InvalidTransitionError(
                    f"Path {path_id} is {path.status}; cannot change status to {status}"
                )
            path.status = status
            path.last_accessed = self._clock().isoformat()
            self._flush()
            return deepcopy(path)

    # ==================== Adaptation ====================

    def adapt_content(
        self,
        learner_id: str,
        module_id: str,
        performance: Union[ModulePerformance, Dict[str, Any]],
    ) -> List[AdaptiveContent]:
        """
        Emit remediation/hint fragments for a module.

        When the module belongs to one of the learner's paths the fragments
        are appended to it, and a remediation also retunes its adaptive
        questions one step easier.

        Returns:
            New fragments (empty when the learner has no profile)
        """
        performance = _coerce(performance, ModulePerformance)

        with self._lock:
            if learner_id not in self.profiles:
                return []

            module = None
            for path in self.paths.values():
                if path.learner_id == learner_id:
                    module = path.find_module(module_id)
                    if module is not None:
                        break

            estimated = module.estimated_time if module is not None else None
            fragments = self.adaptive.build_fragments(performance, estimated)

            if module is not None and fragments:
                module.adaptive_content.extend(deepcopy(fragments))
                if any(f.type == "remediation" for f in fragments):
                    changed = self.adaptive.retune_questions(module)
                    logger.debug(f"Retuned {changed} questions easier in module {module_id}")
                self._flush()

            return fragments

    def optimize_pacing(self, learner_id: str, path_id: str) -> AdaptiveSettings:
        """
        Re-evaluate pacing from the path's metrics without applying it.

        Raises:
            ProfileNotFoundError: If the learner has no profile
            PathNotFoundError: If the path does not exist
        """
        with self._lock:
            self.profiles.require(learner_id)
            path = self._require_path(path_id)
            return self.adaptive.optimize_pacing(
                deepcopy(path.adaptive_settings), path.performance_metrics
            )

    def apply_adaptive_settings(
        self, path_id: str, settings: Union[AdaptiveSettings, Dict[str, Any]]
    ) -> LearningPath:
        settings = _coerce(settings, AdaptiveSettings)
        with self._lock:
            path = self._require_path(path_id)
            path.adaptive_settings = deepcopy(settings)
            self._flush()
            return deepcopy(path)

    def generate_personalized_content(
        self, learner_id: str, base_content: Dict[str, Any]
    ) -> Dict[str, Any]:
        with self._lock:
            profile = self.profiles.get(learner_id)
            if profile is None:
                return deepcopy(base_content)
            return self.adaptive.personalize(profile, base_content)

    # ==================== Recommendations ====================

    def recommend_next_step(
        self,
        learner_id: str,
        current_progress: Union[CurrentProgress, Dict[str, Any]],
    ) -> AIRecommendation:
        """
        Recommend reviewing the current module or proceeding.

        Raises:
            ProfileNotFoundError: If the learner has no profile
        """
        current_progress = _coerce(current_progress, CurrentProgress)
        with self._lock:
            profile = self.profiles.require(learner_id)
            return self.recommender.recommend_next_step(profile, current_progress)

    def suggest_interventions(
        self,
        learner_id: str,
        snapshot: Union[PerformanceSnapshot, Dict[str, Any]],
    ) -> List[AIRecommendation]:
        snapshot = _coerce(snapshot, PerformanceSnapshot)
        with self._lock:
            profile = self.profiles.get(learner_id)
            if profile is None:
                return []
            return self.recommender.suggest_interventions(profile, snapshot)

    def apply_recommendation(
        self, path_id: str, recommendation_id: str, effectiveness: Optional[float] = None
    ) -> AIRecommendation:
        """
        Mark one of the path's recommendations as applied.

        Raises:
            PathNotFoundError: If the path does not exist
            RecommendationNotFoundError: If the path has no such recommendation
        """
        with self._lock:
            path = self._require_path(path_id)
            for recommendation in path.ai_recommendations:
                if recommendation.id == recommendation_id:
                    recommendation.is_applied = True
                    recommendation.applied_at = self._clock().isoformat()
                    if effectiveness is not None:
                        recommendation.effectiveness = max(0.0, min(1.0, effectiveness))
                    self._flush()
                    return deepcopy(recommendation)
            raise RecommendationNotFoundError(recommendation_id)

    # `module_id` is accepted for interface symmetry; the formulas are module-agnostic.

    def predict_performance(self, learner_id: str, module_id: str) -> float:
        with self._lock:
            profile = self.profiles.get(learner_id)
            return predict_performance(profile) if profile is not None else 0.5

    def assess_mastery(self, learner_id: str, module_id: str) -> float:
        with self._lock:
            profile = self.profiles.get(learner_id)
            return assess_mastery(profile) if profile is not None else 0.0

    def detect_learning_gaps(self, learner_id: str, content_id: str) -> List[str]:
        with self._lock:
            profile = self.profiles.get(learner_id)
            return detect_learning_gaps(profile) if profile is not None else []

    # ==================== Progress ====================

    def update_module_progress(
        self,
        path_id: str,
        module_id: str,
        progress: Union[ModuleProgress, Dict[str, Any]],
    ) -> bool:
        """
        Apply a progress event to a module.

        Unknown path/module ids and illegal transitions are soft failures:
        the call returns False and mutates nothing.

        Returns:
            True if the event was applied
        """
        progress = _coerce(progress, ModuleProgress)

        with self._lock:
            path = self.paths.get(path_id)
            if path is None:
                logger.warning(f"Ignoring progress for unknown path {path_id}")
                return False

            if not self.tracker.apply(path, module_id, progress):
                return False

            module = path.find_module(module_id)
            self.sessions.setdefault(path.learner_id, []).append(
                LearningSession(
                    learner_id=path.learner_id,
                    started_at=self._clock().isoformat(),
                    duration=progress.time_spent,
                    completion_rate=100.0 if module.status == "completed" else 0.0,
                    score=progress.score,
                    engagement_score=path.performance_metrics.engagement_score,
                    path_id=path_id,
                    module_id=module_id,
                    status=module.status,
                )
            )
            self._flush()
            return True

    # ==================== Session analytics ====================

    def record_learning_session(
        self,
        learner_id: str,
        duration: float,
        completion_rate: float,
        score: Optional[float] = None,
        engagement_score: Optional[float] = None,
        path_id: Optional[str] = None,
        module_id: Optional[str] = None,
    ) -> LearningSession:
        """
        Log a free-standing study session.

        Raises:
            ProfileNotFoundError: If the learner has no profile
        """
        with self._lock:
            self.profiles.require(learner_id)
            session = LearningSession(
                learner_id=learner_id,
                started_at=self._clock().isoformat(),
                duration=duration,
                completion_rate=completion_rate,
                score=score,
                engagement_score=engagement_score,
                path_id=path_id,
                module_id=module_id,
            )
            self.sessions.setdefault(learner_id, []).append(session)
            self._flush()
            return deepcopy(session)

    def get_learning_sessions(self, learner_id: str) -> List[LearningSession]:
        with self._lock:
            return deepcopy(self.sessions.get(learner_id, []))

    def get_learning_analytics(self, learner_id: str) -> Dict[str, Any]:
        """
        Summarize the learner's session history.

        Returns:
            Dict with:
            - session_count
            - progress: % of sessions with completion >= 80
            - average_session_minutes
            - engagement: 0-100, average session length relative to an hour
            - performance: mean completion rate of the last 5 sessions
            - recent_score: mean score of the last 5 scored sessions (0-1)
            - score_summary: statistics over all session scores (0-100)
            - insights / recommendations: rule-based messages

        Raises:
            ProfileNotFoundError: If the learner has no profile
        """
        with self._lock:
            self.profiles.require(learner_id)
            history = list(self.sessions.get(learner_id, []))

        count = len(history)
        completion = np.array([s.completion_rate for s in history], dtype=float)
        minutes = np.array([s.duration for s in history], dtype=float)
        scores = [s.score for s in history if s.score is not None]

        average_minutes = float(minutes.mean()) if count else 0.0
        average_completion = float(completion.mean()) if count else 0.0
        recent_completion = completion[-RECENT_SESSION_WINDOW:]
        recent_scores = scores[-RECENT_SESSION_WINDOW:]

        insights = []
        if count and average_completion < LOW_COMPLETION_RATE:
            insights.append("Consider breaking study sessions into shorter, more focused periods")
        if count and average_minutes > LONG_SESSION_MINUTES:
            insights.append("Long study sessions detected - consider taking more frequent breaks")
        if count > CONSISTENT_SESSION_COUNT:
            insights.append("Consistent learning pattern detected - great progress!")

        recent_score = float(np.mean(recent_scores)) if recent_scores else 0.0

        recommendations = []
        if recent_scores and recent_score < config.adaptive.remediation_score:
            recommendations.append("Consider reviewing foundational concepts before proceeding")
        if count < 5:
            recommendations.append(
                "Try engaging more with interactive elements for better retention"
            )

        return {
            "session_count": count,
            "progress": float(np.sum(completion >= COMPLETED_SESSION_RATE)) / max(count, 1) * 100,
            "average_session_minutes": round(average_minutes, 2),
            "engagement": min(100.0, average_minutes / 60 * 100),
            "performance": float(recent_completion.mean()) if count else 0.0,
            "recent_score": recent_score,
            "score_summary": mastery_summary(s * 100 for s in scores),
            "insights": insights,
            "recommendations": recommendations,
        }

    def __repr__(self) -> str:
        return (
            f"LearningPathOrchestrator(profiles={len(self.profiles)}, "
            f"paths={len(self.paths)}, persistence={self.persistence!r})"
        )
