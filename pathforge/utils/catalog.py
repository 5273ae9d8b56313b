"""
Read-only content catalog consumed by the path generator.

Features:
- ContentItem records (id, title, medium, difficulty, duration, tags, ...)
- ContentCatalog interface with an in-memory implementation
- JSON loader for catalog files
"""

from __future__ import annotations

import json
from abc import ABC, abstractmethod
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Iterable, Optional


@dataclass(frozen=True)
class ContentItem:
    """
    One catalog entry.

    Attributes:
        id: Catalog identifier
        title: Display title
        type: Medium, usually video/reading/interactive/quiz/project/discussion
        difficulty: Usually beginner/intermediate/advanced/expert; other labels pass through
        duration: Minutes
        category: Free-text category
        tags: Topic tags
        prerequisites: Catalog ids that should come first
        learning_objectives: What the learner should be able to do afterwards
    """

    id: str
    title: str
    type: str
    difficulty: str
    duration: float
    category: str = "general"
    tags: tuple[str, ...] = field(default_factory=tuple)
    prerequisites: tuple[str, ...] = field(default_factory=tuple)
    learning_objectives: tuple[str, ...] = field(default_factory=tuple)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ContentItem:
        """Build an item from a catalog record (unknown keys ignored)."""
        known = {f.name for f in fields(cls)}
        record = {k: v for k, v in data.items() if k in known}
        for key in ("tags", "prerequisites", "learning_objectives"):
            record[key] = tuple(record.get(key) or ())
        return cls(**record)

    def __repr__(self) -> str:
        return f"ContentItem(id={self.id}, title='{self.title}', difficulty={self.difficulty})"


class ContentCatalog(ABC):
    """Read-only lookup over content items, in catalog order."""

    @abstractmethod
    def items(self) -> list[ContentItem]:
        """All items, in catalog order."""

    def get(self, content_id: str) -> Optional[ContentItem]:
        for item in self.items():
            if item.id == content_id:
                return item
        return None

    def __len__(self) -> int:
        return len(self.items())


class InMemoryCatalog(ContentCatalog):
    def __init__(self, items: Iterable[ContentItem | dict[str, Any]] = ()):
        self._items: tuple[ContentItem, ...] = tuple(
            item if isinstance(item, ContentItem) else ContentItem.from_dict(item)
            for item in items
        )

    def items(self) -> list[ContentItem]:
        return list(self._items)


def load_catalog(filepath: Path | str) -> InMemoryCatalog:
    """
    Load a catalog from a JSON file holding a list of content records.

    Args:
        filepath: Path to the JSON file

    Returns:
        InMemoryCatalog preserving file order

    Raises:
        FileNotFoundError: If the file doesn't exist
        ValueError: If the document is not a JSON list
    """
    with open(filepath, "r", encoding="utf-8") as f:
        records = json.load(f)

    if not isinstance(records, list):
        raise ValueError(f"Catalog {filepath} must contain a JSON list, got {type(records).__name__}")

    return InMemoryCatalog(records)
