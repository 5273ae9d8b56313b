"""
Progress analytics helpers shared by the progress tracker and analytics report.

Provides:
- Mastery level buckets from a 0-100 score
- Summary statistics (mean, median, min, max, std_dev)
- Learning velocity and completion forecasts
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, Iterable, Tuple

import numpy as np

# Lower bound (inclusive) of each mastery level, highest first
MASTERY_THRESHOLDS: Tuple[Tuple[float, str], ...] = (
    (90.0, "expert"),
    (80.0, "advanced"),
    (70.0, "intermediate"),
    (50.0, "beginner"),
)

SECONDS_PER_DAY = 24 * 60 * 60


def mastery_level_for_score(overall_score: float) -> str:
    """
    Map an overall score (0-100) to a mastery level.

    Score ranges:
    - 90+: expert
    - 80-90: advanced
    - 70-80: intermediate
    - 50-70: beginner
    - below 50: novice
    """
    for threshold, level in MASTERY_THRESHOLDS:
        if overall_score >= threshold:
            return level
    return "novice"


def mastery_summary(scores: Iterable[float]) -> Dict[str, float]:
    """
    Calculate summary statistics for a set of scores.

    Args:
        scores: Score values (any scale)

    Returns:
        Dict with mean, median, min, max, std_dev, count

    Example:
        >>> mastery_summary([85, 72, 45])["mean"]
        67.33
    """
    values = np.asarray(list(scores), dtype=float)
    if values.size == 0:
        return {
            "mean": 0.0,
            "median": 0.0,
            "min": 0.0,
            "max": 0.0,
            "std_dev": 0.0,
            "count": 0,
        }

    return {
        "mean": round(float(np.mean(values)), 2),
        "median": round(float(np.median(values)), 2),
        "min": round(float(np.min(values)), 2),
        "max": round(float(np.max(values)), 2),
        "std_dev": round(float(np.std(values)), 2),
        "count": int(values.size),
    }


def learning_velocity(completed_modules: int, created_at: datetime, now: datetime) -> float:
    """
    Modules completed per week since the path was created.

    Paths younger than a week are measured over one full week.
    """
    days = (now - created_at).total_seconds() / SECONDS_PER_DAY
    return completed_modules / max(days / 7, 1)


def predicted_completion_days(remaining_modules: int, velocity: float) -> float:
    """Days left at the current velocity (0 when nothing is left or no velocity yet)."""
    if remaining_modules <= 0 or velocity <= 0:
        return 0.0
    return round(remaining_modules / velocity * 7, 2)
