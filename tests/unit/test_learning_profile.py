"""
Unit tests for learning profiles: defaults, dominant style, clamping and merge updates.
"""

import unittest
from datetime import datetime, timezone

import pytest

from pathforge.exceptions import NotFoundError, ProfileNotFoundError
from pathforge.models.learning_profile import (
    CognitiveProfile,
    KnowledgeProfile,
    LearningProfile,
    LearningStyle,
    ProfileStore,
)


def fixed_clock():
    return datetime(2024, 1, 1, tzinfo=timezone.utc)


class TestProfileDefaults:
    """Test default profile values."""

    def test_default_learning_style(self):
        style = LearningStyle()
        assert (style.visual, style.auditory, style.reading, style.kinesthetic) == (0.7, 0.6, 0.8, 0.5)
        assert style.dominant == "reading"

    def test_default_sections(self):
        profile = LearningProfile(learner_id="learner-1")
        assert profile.cognitive_profile.attention_span == 45
        assert profile.motivation_profile.goal_orientation == "mastery"
        assert profile.knowledge_profile.current_level == 30
        assert profile.knowledge_profile.interests == []
        assert profile.behavioral_profile.study_habits == ["morning study", "note-taking"]
        assert profile.behavioral_profile.preferred_times == ["09:00", "14:00"]
        assert profile.behavioral_profile.optimal_session_length == 45
        assert profile.behavioral_profile.break_frequency == 15

    def test_default_lists_are_not_shared(self):
        a = LearningProfile(learner_id="a")
        b = LearningProfile(learner_id="b")
        a.behavioral_profile.study_habits.append("flashcards")
        assert "flashcards" not in b.behavioral_profile.study_habits


class TestDominantStyle:
    """Test dominant style derivation."""

    def test_argmax(self):
        assert LearningStyle(visual=0.2, auditory=0.9, reading=0.1, kinesthetic=0.3).dominant == "auditory"

    def test_tie_breaks_by_priority(self):
        style = LearningStyle(visual=0.5, auditory=0.9, reading=0.9, kinesthetic=0.9)
        assert style.dominant == "auditory"

    def test_all_zero_is_mixed(self):
        style = LearningStyle(visual=0, auditory=0, reading=0, kinesthetic=0)
        assert style.dominant == "mixed"

    def test_dominant_argument_is_recomputed(self):
        style = LearningStyle(visual=1.0, auditory=0, reading=0, kinesthetic=0, dominant="reading")
        assert style.dominant == "visual"


class TestClamping:
    """Test normalized fields stay in range."""

    def test_unit_fields_clamped(self):
        cognitive = CognitiveProfile(memory_capacity=1.7, processing_speed=-0.2)
        assert cognitive.memory_capacity == 1.0
        assert cognitive.processing_speed == 0.0

    def test_current_level_clamped(self):
        assert KnowledgeProfile(current_level=140).current_level == 100
        assert KnowledgeProfile(current_level=-5).current_level == 0

    def test_tags_deduplicated(self):
        knowledge = KnowledgeProfile(interests=["python", "python", "ml"])
        assert knowledge.interests == ["python", "ml"]

    def test_single_string_is_one_tag(self):
        knowledge = KnowledgeProfile(interests="python", strengths="algebra")
        assert knowledge.interests == ["python"]
        assert knowledge.strengths == ["algebra"]


class TestProfileStore(unittest.TestCase):
    """Test lazy creation and merge updates."""

    def setUp(self):
        self.store = ProfileStore(clock=fixed_clock)

    def test_get_or_create_creates_defaults(self):
        profile = self.store.get_or_create("learner-1")
        self.assertEqual(profile.learner_id, "learner-1")
        self.assertEqual(profile.last_updated, fixed_clock().isoformat())
        self.assertIn("learner-1", self.store)
        self.assertEqual(len(self.store), 1)

    def test_get_or_create_is_idempotent(self):
        first = self.store.get_or_create("learner-1")
        first_state = first.to_dict()
        second = self.store.get_or_create("learner-1")
        self.assertIs(first, second)
        self.assertEqual(second.to_dict(), first_state)

    def test_get_or_create_does_not_reset(self):
        self.store.get_or_create("learner-1")
        self.store.update("learner-1", {"knowledge_profile": {"current_level": 75}})
        profile = self.store.get_or_create("learner-1")
        self.assertEqual(profile.knowledge_profile.current_level, 75)

    def test_update_unknown_learner_raises(self):
        with self.assertRaises(ProfileNotFoundError) as ctx:
            self.store.update("ghost", {})
        self.assertEqual(ctx.exception.entity_id, "ghost")
        self.assertIsInstance(ctx.exception, NotFoundError)
        self.assertIsInstance(ctx.exception, LookupError)

    def test_update_merges_field_wise(self):
        self.store.get_or_create("learner-1")
        profile = self.store.update(
            "learner-1",
            {"learning_style": {"visual": 0.95}, "knowledge_profile": {"interests": ["python"]}},
        )
        self.assertEqual(profile.learning_style.visual, 0.95)
        self.assertEqual(profile.learning_style.reading, 0.8)
        self.assertEqual(profile.learning_style.dominant, "visual")
        self.assertEqual(profile.knowledge_profile.interests, ["python"])
        self.assertEqual(profile.knowledge_profile.current_level, 30)

    def test_update_clamps_values(self):
        self.store.get_or_create("learner-1")
        profile = self.store.update("learner-1", {"motivation_profile": {"self_efficacy": 3}})
        self.assertEqual(profile.motivation_profile.self_efficacy, 1.0)

    def test_update_ignores_unknown_keys(self):
        self.store.get_or_create("learner-1")
        before = self.store.get("learner-1").to_dict()
        profile = self.store.update(
            "learner-1",
            {
                "astrology": {"sign": "leo"},
                "cognitive_profile": {"shoe_size": 42},
                "learning_style": {"dominant": "visual"},
                "motivation_profile": {"goal_orientation": "fame"},
            },
        )
        after = profile.to_dict()
        after.pop("last_updated")
        before.pop("last_updated")
        self.assertEqual(after, before)

    def test_update_skips_malformed_values(self):
        self.store.get_or_create("learner-1")
        profile = self.store.update(
            "learner-1",
            {
                "cognitive_profile": {"memory_capacity": "high", "creativity": 0.9},
                "behavioral_profile": {"study_habits": 7, "break_frequency": None},
            },
        )
        self.assertEqual(profile.cognitive_profile.memory_capacity, 0.7)
        self.assertEqual(profile.cognitive_profile.creativity, 0.9)
        self.assertEqual(profile.behavioral_profile.study_habits, ["morning study", "note-taking"])
        self.assertEqual(profile.behavioral_profile.break_frequency, 15)
        self.assertEqual(profile.last_updated, fixed_clock().isoformat())

    def test_update_wraps_string_tags(self):
        self.store.get_or_create("learner-1")
        profile = self.store.update("learner-1", {"knowledge_profile": {"interests": "python"}})
        self.assertEqual(profile.knowledge_profile.interests, ["python"])

    def test_update_stamps_last_updated(self):
        times = iter(
            [datetime(2024, 1, 1, tzinfo=timezone.utc), datetime(2024, 2, 1, tzinfo=timezone.utc)]
        )
        store = ProfileStore(clock=lambda: next(times))
        store.get_or_create("learner-1")
        profile = store.update("learner-1", {})
        self.assertTrue(profile.last_updated.startswith("2024-02-01"))

    def test_round_trip_through_dict(self):
        self.store.get_or_create("learner-1")
        self.store.update("learner-1", {"behavioral_profile": {"social_learning": False}})
        records = self.store.to_dict()

        restored = ProfileStore(clock=fixed_clock)
        restored.load(records)
        self.assertEqual(restored.get("learner-1").to_dict(), records["learner-1"])

    def test_require_missing(self):
        with pytest.raises(ProfileNotFoundError):
            self.store.require("nobody")
