"""
Complete workflow example: Profile → Path → Progress → Adaptation → Analytics

Demonstrates end-to-end use of the engine:
1. Create and tune a learner profile
2. Generate a personalized learning path from a catalog file
3. Report module progress
4. Adapt content and pacing to performance
5. Ask for next steps and interventions
6. Inspect session analytics
"""

from pathlib import Path

from pathforge import (
    CurrentProgress,
    JsonFilePersistence,
    LearningPathOrchestrator,
    ModulePerformance,
    ModuleProgress,
    PerformanceSnapshot,
    load_catalog,
)
from pathforge.config import config
from pathforge.utils.log_setup import configure_logging

CATALOG_FILE = Path(__file__).parent / "data" / "catalog.json"


def main():
    configure_logging()

    config.prepare_fs()
    store = JsonFilePersistence()
    engine = LearningPathOrchestrator(load_catalog(CATALOG_FILE), store)

    # ==================== Step 1: Learner Profile ====================
    print("=" * 60)
    print("STEP 1: Creating Learner Profile")
    print("=" * 60)

    engine.get_or_create_learning_profile("learner-alice")
    profile = engine.update_learning_profile(
        "learner-alice",
        {
            "learning_style": {"visual": 0.9},
            "knowledge_profile": {"current_level": 25, "interests": ["python"]},
        },
    )
    print(f"✓ Dominant style: {profile.learning_style.dominant}")
    print(f"  Current level: {profile.knowledge_profile.current_level}")
    print()

    # ==================== Step 2: Generate Path ====================
    print("=" * 60)
    print("STEP 2: Generating Learning Path")
    print("=" * 60)

    path = engine.generate_learning_path("learner-alice", ["python"], {"max_hours": 6})
    print(f"✓ {path.title} ({path.difficulty}, {path.estimated_duration:.1f}h)")
    for module in path.modules:
        print(f"  {module.order}. {module.title} [{module.type}, {module.difficulty}] "
              f"- {len(module.assessment.questions)} questions")
    for rec in path.ai_recommendations:
        print(f"  💡 {rec.title}: {rec.description}")
    print()

    # ==================== Step 3: Progress ====================
    print("=" * 60)
    print("STEP 3: Reporting Progress")
    print("=" * 60)

    first, second = path.modules[0], path.modules[1]
    engine.update_module_progress(path.id, first.id, ModuleProgress("completed", score=0.9, time_spent=35))
    engine.update_module_progress(path.id, second.id, ModuleProgress("in_progress", score=0.45, time_spent=95))

    path = engine.get_learning_path(path.id)
    metrics = path.performance_metrics
    print(f"✓ Progress: {path.current_progress:.0f}%")
    print(f"  Overall score: {metrics.overall_score:.1f} ({metrics.mastery_level})")
    print(f"  Engagement: {metrics.engagement_score:.1f}")
    print()

    # ==================== Step 4: Adaptation ====================
    print("=" * 60)
    print("STEP 4: Adapting Content and Pacing")
    print("=" * 60)

    fragments = engine.adapt_content("learner-alice", second.id, ModulePerformance(score=0.45, time_spent=95))
    for fragment in fragments:
        print(f"  ↳ {fragment.type} ({fragment.difficulty}): {fragment.content}")

    settings = engine.optimize_pacing("learner-alice", path.id)
    engine.apply_adaptive_settings(path.id, settings)
    print(f"✓ Pacing now: {settings.pacing_adjustment}")
    print()

    # ==================== Step 5: Recommendations ====================
    print("=" * 60)
    print("STEP 5: Next Step and Interventions")
    print("=" * 60)

    next_step = engine.recommend_next_step(
        "learner-alice",
        CurrentProgress(current_module_id=second.id, current_module_score=0.45),
    )
    print(f"✓ {next_step.description} (confidence {next_step.confidence})")

    for intervention in engine.suggest_interventions("learner-alice", PerformanceSnapshot(0.45, 0.2)):
        print(f"  ⚠ [{intervention.priority}] {intervention.title}")
    print(f"  Gaps: {engine.detect_learning_gaps('learner-alice', second.content_id)}")
    print(f"  Predicted performance: {engine.predict_performance('learner-alice', second.id):.2f}")
    print()

    # ==================== Step 6: Analytics ====================
    print("=" * 60)
    print("STEP 6: Session Analytics")
    print("=" * 60)

    analytics = engine.get_learning_analytics("learner-alice")
    print(f"✓ Sessions: {analytics['session_count']}, progress {analytics['progress']:.0f}%")
    for insight in analytics["insights"]:
        print(f"  • {insight}")
    print(f"\n💾 State saved to: {store.filepath}")


if __name__ == "__main__":
    main()
