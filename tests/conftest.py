"""
Shared pytest fixtures and configuration for Pathforge tests.

This file is automatically discovered by pytest and provides
fixtures available to all tests.
"""

import json
import sys
from datetime import datetime, timedelta, timezone
from pathlib import Path

import pytest
from loguru import logger

# Add project root to path for all tests
sys.path.insert(0, str(Path(__file__).parent.parent))

from pathforge.orchestrator import LearningPathOrchestrator
from pathforge.utils.catalog import InMemoryCatalog
from pathforge.utils.persistence import InMemoryPersistence


class FixedClock:
    """Deterministic clock; call ``advance`` to move time forward."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


@pytest.fixture
def clock():
    """Clock pinned to 2024-01-01 09:00 UTC."""
    return FixedClock(datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc))


@pytest.fixture
def catalog_records():
    """
    Fixture providing a small mixed catalog.

    Returns:
        list[dict]: Catalog records in catalog order
    """
    return [
        {
            "id": "c-ml-intro",
            "title": "Intro to ML",
            "type": "video",
            "difficulty": "beginner",
            "duration": 45,
            "category": "technology",
            "tags": ["machine learning", "AI"],
            "prerequisites": [],
            "learning_objectives": ["Understand basic ML concepts"],
        },
        {
            "id": "c-nn-advanced",
            "title": "Advanced Neural Networks",
            "type": "interactive",
            "difficulty": "advanced",
            "duration": 90,
            "category": "technology",
            "tags": ["machine learning", "AI"],
            "prerequisites": ["c-ml-intro"],
            "learning_objectives": ["Build neural networks"],
        },
        {
            "id": "c-py-reading",
            "title": "Python Basics Handbook",
            "type": "reading",
            "difficulty": "beginner",
            "duration": 60,
            "category": "technology",
            "tags": ["python", "programming"],
            "learning_objectives": ["Write simple scripts"],
        },
        {
            "id": "c-py-video",
            "title": "Python Basics Video",
            "type": "video",
            "difficulty": "beginner",
            "duration": 30,
            "category": "technology",
            "tags": ["python"],
        },
        {
            "id": "c-py-data",
            "title": "Python Data Structures",
            "type": "discussion",
            "difficulty": "intermediate",
            "duration": 120,
            "category": "technology",
            "tags": ["python", "data structures"],
            "prerequisites": ["c-py-reading"],
        },
        {
            "id": "c-py-project",
            "title": "Python Mini Project",
            "type": "project",
            "difficulty": "intermediate",
            "duration": 90,
            "category": "technology",
            "tags": ["python", "projects"],
        },
    ]


@pytest.fixture
def catalog(catalog_records):
    return InMemoryCatalog(catalog_records)


@pytest.fixture
def persistence():
    return InMemoryPersistence()


@pytest.fixture
def orchestrator(catalog, persistence, clock):
    """Engine backed by the sample catalog, in-memory persistence and a fixed clock."""
    return LearningPathOrchestrator(catalog, persistence, clock=clock)


@pytest.fixture
def python_path(orchestrator):
    """A four-module path (level 30 learner, goal 'python')."""
    return orchestrator.generate_learning_path("learner-1", ["python"])


@pytest.fixture
def temp_schema_file(tmp_path):
    """
    Fixture providing a temporary schema file for testing.

    Args:
        tmp_path: pytest's tmp_path fixture

    Returns:
        Path: Path to temporary schema file
    """
    schema = {
        "$schema": "http://json-schema.org/draft-07/schema#",
        "type": "object",
        "properties": {"test": {"type": "string"}},
        "required": ["test"],
    }

    schema_file = tmp_path / "test.schema.json"
    with open(schema_file, "w") as f:
        json.dump(schema, f)

    return schema_file


@pytest.fixture
def log_messages():
    """
    Capture loguru output for assertions.

    Returns:
        list[str]: Formatted "LEVEL message" lines, appended as they are logged
    """
    messages = []
    handler_id = logger.add(
        lambda message: messages.append(message.record["level"].name + " " + message.record["message"]),
        level="DEBUG",
    )
    yield messages
    logger.remove(handler_id)


# Pytest hooks for better test output


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: mark test as a unit test")
    config.addinivalue_line("markers", "integration: mark test as an integration test")
    config.addinivalue_line("markers", "slow: mark test as slow running")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        # Mark tests in unit/ directory as unit tests
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)

        # Mark tests in integration/ directory as integration tests
        if "integration" in str(item.fspath):
            item.add_marker(pytest.mark.integration)
