"""Pytest configuration.

The repository uses a flat `src/` layout without an installed package. This conftest ensures tests
can import from the `src.*` namespace when running `pytest` locally, and provides a recording event
logger so tests can assert on what the skill core logged.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Ensure `import src...` works when running pytest without installing the package.
REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from src.config.logging import SkillEvent  # noqa: E402


class RecordingEventLogger:
    def __init__(self) -> None:
        self.events: list[SkillEvent] = []

    def log(self, event: SkillEvent) -> None:
        """Record the event instead of writing it to a logger."""
        self.events.append(event)

    def names(self) -> list[str]:
        return [event.name for event in self.events]


@pytest.fixture
def events() -> RecordingEventLogger:
    return RecordingEventLogger()
