"""
Unit tests for the adaptive engine: fragments, question retuning, pacing and personalization.
"""

import pytest

from pathforge.engines.adaptive_engine import AdaptiveEngine, ModulePerformance
from pathforge.engines.assessment_builder import AssessmentBuilder
from pathforge.models.learning_path import AdaptiveSettings, LearningModule, PerformanceMetrics
from pathforge.models.learning_profile import LearningProfile
from pathforge.utils.catalog import ContentItem


@pytest.fixture
def engine():
    return AdaptiveEngine()


@pytest.fixture
def module():
    content = ContentItem(id="c-1", title="Loops", type="reading", difficulty="beginner", duration=50)
    return LearningModule(
        id="mod-1",
        title="Loops",
        description="",
        type="reading",
        duration=50,
        difficulty="beginner",
        order=1,
        content_id="c-1",
        assessment=AssessmentBuilder().build(content),
        estimated_time=50,
    )


class TestFragments:
    """Test remediation and hint triggers."""

    def test_no_trigger(self, engine):
        fragments = engine.build_fragments(ModulePerformance(score=0.9, time_spent=40, estimated_time=40))
        assert fragments == []

    def test_low_score_remediation(self, engine):
        fragments = engine.build_fragments(ModulePerformance(score=0.4, time_spent=10, estimated_time=40))

        assert len(fragments) == 1
        fragment = fragments[0]
        assert fragment.type == "remediation"
        assert fragment.difficulty == "easier"
        assert fragment.condition.type == "performance"
        assert fragment.condition.operator == "less_than"
        assert fragment.condition.threshold == 0.6
        assert fragment.triggers == ["low_performance", "confusion"]
        assert fragment.id.startswith("adp-")

    def test_score_at_threshold_does_not_trigger(self, engine):
        assert engine.build_fragments(ModulePerformance(score=0.6)) == []

    def test_slow_pacing_hint(self, engine):
        fragments = engine.build_fragments(ModulePerformance(score=0.8, time_spent=61, estimated_time=40))

        assert [f.type for f in fragments] == ["hint"]
        hint = fragments[0]
        assert hint.difficulty == "same"
        assert hint.condition.value == 60
        assert hint.condition.threshold == 40
        assert hint.triggers == ["slow_pacing", "need_support"]

    def test_both_triggers_remediation_first(self, engine):
        fragments = engine.build_fragments(ModulePerformance(score=0.2, time_spent=100, estimated_time=40))
        assert [f.type for f in fragments] == ["remediation", "hint"]

    def test_fallback_estimate(self, engine):
        fragments = engine.build_fragments(ModulePerformance(score=0.9, time_spent=80), estimated_time=50)
        assert [f.type for f in fragments] == ["hint"]

    def test_no_estimate_skips_time_check(self, engine):
        assert engine.build_fragments(ModulePerformance(score=0.9, time_spent=1000)) == []


class TestRetuning:
    def test_one_step_easier(self, engine, module):
        questions = module.assessment.questions
        questions[0].difficulty = "hard"
        questions[1].difficulty = "easy"
        questions[2].adaptive = False

        changed = engine.retune_questions(module)

        assert questions[0].difficulty == "medium"
        assert questions[1].difficulty == "easy"
        assert questions[2].difficulty == "medium"
        assert all(q.difficulty == "easy" for q in questions[3:])
        assert changed == 1 + len(questions[3:])


class TestPacing:
    @pytest.mark.parametrize(
        "engagement,completion,expected",
        [
            (0.9, 0.95, "accelerated"),
            (0.8, 0.95, "normal"),
            (0.4, 1.0, "relaxed"),
            (0.7, 0.6, "relaxed"),
            (0.6, 0.8, "normal"),
        ],
    )
    def test_pacing_rules(self, engine, engagement, completion, expected):
        metrics = PerformanceMetrics(engagement_score=engagement, completion_rate=completion)
        assert engine.pacing_for(metrics) == expected

    def test_optimize_returns_new_value(self, engine):
        settings = AdaptiveSettings(pacing_adjustment="accelerated", support_level="extensive")
        result = engine.optimize_pacing(settings, PerformanceMetrics())

        assert result.pacing_adjustment == "relaxed"
        assert result.support_level == "extensive"
        assert settings.pacing_adjustment == "accelerated"
        assert result is not settings


class TestPersonalization:
    def test_default_profile_is_mastery_oriented(self, engine):
        profile = LearningProfile(learner_id="learner-1")
        content = engine.personalize(profile, {"title": "Loops"})

        assert content == {"title": "Loops", "deep_dive": True, "practice_exercises": True}

    def test_visual_short_attention(self, engine):
        profile = LearningProfile(learner_id="learner-1")
        profile.learning_style.visual = 1.0
        profile.learning_style.normalize()
        profile.cognitive_profile.attention_span = 20
        profile.motivation_profile.goal_orientation = "performance"

        content = engine.personalize(profile, {"title": "Loops"})

        assert content["visual_elements"] and content["diagrams"]
        assert content["chunked"] and content["break_points"]
        assert "deep_dive" not in content

    def test_base_content_untouched(self, engine):
        base = {"title": "Loops", "sections": ["a"]}
        content = engine.personalize(LearningProfile(learner_id="x"), base)
        content["sections"].append("b")
        assert base == {"title": "Loops", "sections": ["a"]}
