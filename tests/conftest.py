"""Shared fixtures: clean environment, configuration and logging per test."""
from __future__ import annotations

import os
import sys
from collections.abc import Iterator

import pytest

# Add parent to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from structkit.config import ToolConfig, set_config
from structkit.logging_config import reset_logging


class ScriptedRandom:
    """Stand-in random source returning a fixed script of draws in [0, 1)."""

    def __init__(self, *draws: float):
        self._draws = list(draws)
        self.calls = 0

    def random(self) -> float:
        value = self._draws[self.calls % len(self._draws)]
        self.calls += 1
        return value


@pytest.fixture
def scripted():
    return ScriptedRandom


@pytest.fixture(autouse=True)
def clean_env_and_reset(monkeypatch) -> Iterator[None]:
    """Clear STRUCTKIT_* variables and start every test from a fresh config."""
    for key in list(os.environ.keys()):
        if key.startswith("STRUCTKIT_"):
            monkeypatch.delenv(key, raising=False)

    set_config(ToolConfig())
    reset_logging("structkit")
    yield
    set_config(ToolConfig())
    reset_logging("structkit")
