"""Unit tests for AnswerMemory, the facade used by the form handlers."""

import json
from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError

from answer_memory import AnswerMemory, QuestionCategory
from answer_memory.exceptions import AnswerStoreMissingError
from config import AnswersConfig


@pytest.fixture
def memory(make_app_config, answers_dir, write_answers):
    write_answers(answers_dir / "answers.json", {"How many years of experience with Java?": "5"})
    write_answers(answers_dir / "binary_response.json", {"Are you willing to relocate?": "Yes"})
    return AnswerMemory.from_config(make_app_config(), prompt=AsyncMock(return_value="3"))


class TestFromConfig:

    def test_missing_free_text_file_is_fatal(self, make_app_config, answers_dir):
        (answers_dir / "answers.json").unlink()
        with pytest.raises(AnswerStoreMissingError):
            AnswerMemory.from_config(make_app_config())

    def test_optional_files_are_created(self, make_app_config, answers_dir):
        memory = AnswerMemory.from_config(make_app_config())
        assert (answers_dir / "binary_response.json").exists()
        assert (answers_dir / "dropdown_response.json").exists()
        assert len(memory.store("single_choice")) == 0

    def test_settings_reach_matcher_and_resolver(self, make_app_config):
        memory = AnswerMemory.from_config(make_app_config(operator_timeout=7.5))
        assert memory.matcher.acceptance_floor == 0.4
        assert memory.matcher.reuse_threshold == 0.7
        assert memory.matcher.keyword_boost == 1.2
        assert memory.resolver.timeout == 7.5

    def test_vocabulary_override(self, make_app_config, answers_dir):
        vocabulary = answers_dir / "vocabulary.yaml"
        vocabulary.write_text(
            "keywords:\n  - cobol\nprefixes:\n  - please rate your\n", encoding="utf-8"
        )
        memory = AnswerMemory.from_config(make_app_config(vocabulary_path=vocabulary))
        assert memory.matcher.keywords.keywords == ["cobol"]
        assert memory.normalize("Please rate your COBOL") == "cobol"

    def test_empty_vocabulary_override_disables_defaults(self, make_app_config, answers_dir):
        vocabulary = answers_dir / "vocabulary.yaml"
        vocabulary.write_text("keywords: []\nprefixes: []\n", encoding="utf-8")
        memory = AnswerMemory.from_config(make_app_config(vocabulary_path=vocabulary))
        assert len(memory.matcher.keywords) == 0
        assert not memory.matcher.keywords.contains_keyword("Years of experience with Java")
        assert memory.normalize("How many years of do you have with Java?").startswith("how mani")

    def test_all_stores_are_required(self, memory):
        stores = dict(memory.stores)
        del stores[QuestionCategory.BINARY]
        with pytest.raises(ValueError, match="binary"):
            AnswerMemory(stores, memory.matcher, memory.resolver)


class TestGetAnswer:

    def test_similar_question_reuses_answer(self, memory):
        assert memory.get_answer("Years of experience with Java", "free_text") == "5"

    def test_exact_binary_question(self, memory):
        assert memory.get_answer("Are you willing to relocate?", QuestionCategory.BINARY) == "Yes"

    def test_categories_do_not_share_answers(self, memory):
        assert memory.get_answer("Are you willing to relocate?", "free_text") is None

    def test_ambiguous_match_is_not_reused(self, memory):
        # Matched above the acceptance floor but not above the reuse threshold
        result = memory.match("Rate your Java", "free_text")
        assert 0.4 <= result.similarity <= 0.7
        assert memory.get_answer("Rate your Java", "free_text") is None

    def test_unrelated_question(self, memory):
        assert memory.get_answer("What is your expected salary?", "free_text") is None

    def test_score_and_normalize(self, memory):
        assert memory.normalize("How many years of work experience do you have with Java?") == "java"
        assert memory.score("Java", "java") > 0


class TestAnswer:

    @pytest.mark.asyncio
    async def test_known_question_does_not_prompt(self, memory):
        assert await memory.answer("Years of experience with Java", "free_text") == "5"
        memory.resolver.prompt.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_unknown_question_is_captured_and_persisted(self, memory, answers_dir):
        assert await memory.answer("What is your expected salary?", "free_text") == "3"

        on_disk = json.loads((answers_dir / "answers.json").read_text(encoding="utf-8"))
        assert on_disk["What is your expected salary?"] == "3"
        assert memory.get_answer("What is your expected salary?", "free_text") == "3"

    @pytest.mark.asyncio
    async def test_resolve_and_store_free_text(self, memory):
        assert await memory.resolve_and_store("Notice period?") == "3"
        memory.resolver.prompt.assert_awaited_once_with('Answer for "Notice period?": ')
        assert memory.store("free_text").get("Notice period?") == "3"

    @pytest.mark.asyncio
    async def test_resolve_with_probe(self, memory):
        probe = AsyncMock(return_value="No")
        assert await memory.resolve("Do you need sponsorship?", "binary", probe=probe) == "No"
        assert memory.store("binary").get("Do you need sponsorship?") == "No"


class TestAnswersConfig:

    def test_floor_must_not_exceed_reuse_threshold(self):
        with pytest.raises(ValidationError):
            AnswersConfig(acceptance_floor=0.8, reuse_threshold=0.7)

    def test_boost_below_one_is_rejected(self):
        with pytest.raises(ValidationError):
            AnswersConfig(keyword_boost=0.9)
