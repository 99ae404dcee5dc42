import json
import sys
import os
from types import SimpleNamespace

import pytest

# Adjust the python path to import the project modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from config import AnswersConfig, ResolverConfig


def _write_answers(path, answers: dict):
    """Write a backing file the way the bot does (flat object, indented)."""
    path.write_text(json.dumps(answers, indent=2, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def write_answers():
    """Helper writing a dict as an answers file; returns the path."""
    return _write_answers


@pytest.fixture
def answers_dir(tmp_path):
    """Directory holding the three backing files, free-text file pre-created empty."""
    _write_answers(tmp_path / "answers.json", {})
    return tmp_path


@pytest.fixture
def make_app_config(answers_dir):
    """
    Factory for a minimal app config whose answer files live in a temp dir.
    Polling is made fast so resolver tests do not sleep for real seconds.
    """
    def _make(vocabulary_path=None, **resolver_overrides):
        resolver_settings = {
            "binary_poll_interval": 0.001,
            "dropdown_poll_interval": 0.001,
            "operator_timeout": 0.05,
        }
        resolver_settings.update(resolver_overrides)
        return SimpleNamespace(
            answers=AnswersConfig(
                free_text_path=answers_dir / "answers.json",
                binary_path=answers_dir / "binary_response.json",
                single_choice_path=answers_dir / "dropdown_response.json",
                vocabulary_path=vocabulary_path,
            ),
            resolver=ResolverConfig(**resolver_settings),
        )
    return _make
