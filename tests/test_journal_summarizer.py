"""
日次サマリー生成（summarize/analyze/JournalSummarizer）のテスト
"""

import itertools
from unittest.mock import MagicMock

import pytest

from src.journal.summarizer import (
    EMPTY_DAY_SUMMARY,
    JournalSummarizer,
    analyze,
    summarize,
)
from src.records import Record
from src.settings import AppSettings


def make_record(text: str, record_id: int = 1, day: str = "2023-08-15") -> Record:
    return Record(id=record_id, text=text, timestamp=f"{day} 08:30", date=day)


class TestSummarize:
    """ローカルサマリーのテスト"""

    def test_empty_day(self):
        assert summarize([]) == "No activities recorded for this day."
        assert EMPTY_DAY_SUMMARY == "No activities recorded for this day."

    def test_single_walk(self):
        """1件の散歩: balanced/productive、推奨文なし"""
        result = summarize([make_record("Morning walk for 30 minutes")])
        assert result == (
            "Today was a balanced day with 1 recorded activities. "
            "You were physically active with 1 activity. "
            "Your day had a productive energy. "
        )

    def test_two_physical_records_make_an_active_day(self):
        result = summarize([make_record("Morning walk"), make_record("Evening run", 2)])
        assert result == (
            "Today was a active day with 2 recorded activities. "
            "You were physically active with 2 activities. "
            "Your day had a productive energy. "
        )

    def test_accepts_plain_strings_and_dicts(self):
        records = ["Morning walk", {"text": "Evening run"}]
        assert summarize(records).startswith("Today was a active day with 2 recorded")

    def test_physical_suggestion_wins_over_affirmation(self):
        """身体活動なし・3件以上なら、インサイトが3つ以上でも運動を提案する"""
        summary = analyze(["Meditation session", "Read a book", "Cooked dinner"])
        assert summary.category_counts["wellness"] == 1
        assert summary.category_counts["mental"] == 1
        assert summary.category_counts["health"] == 1
        # "dinner" は social のキーワード
        assert summary.category_counts["social"] == 1
        assert summary.day_type == "balanced"
        assert summary.mood == "social"
        assert len(summary.insights) == 4
        assert summary.text == (
            "Today was a balanced day with 3 recorded activities. "
            "You invested in learning with 1 intellectual pursuit. "
            "You prioritized mental wellbeing. "
            "You connected with others socially. "
            "Your day had a social energy. "
            "Consider adding some physical activity tomorrow for better balance."
        )

    def test_mindfulness_suggestion(self):
        result = summarize(["Gym session", "Client meeting", "Project review"])
        assert result == (
            "Today was a productive day with 3 recorded activities. "
            "You were physically active with 1 activity. "
            "You made progress on 2 work-related tasks. "
            "Your day had a focused energy. "
            "A moment of mindfulness could enhance your day."
        )

    def test_affirmation_when_three_insights(self):
        result = summarize(["Yoga and a walk", "Team meeting"])
        assert result == (
            "Today was a balanced day with 2 recorded activities. "
            "You were physically active with 1 activity. "
            "You prioritized mental wellbeing. "
            "You made progress on 1 work-related task. "
            "Your day had a focused energy. "
            "Great job maintaining a well-rounded lifestyle!"
        )

    def test_only_first_three_insights_are_rendered(self):
        summary = analyze(["Walk, read, yoga, work, call friends, paint"])
        assert len(summary.insights) == 6
        assert "You expressed your creativity" not in summary.text
        assert "You connected with others socially" not in summary.text
        assert summary.mood == "inspired"
        assert summary.text.endswith(
            "Your day had a inspired energy. Great job maintaining a well-rounded lifestyle!"
        )

    def test_no_category_match(self):
        assert summarize(["Bought groceries"]) == (
            "Today was a balanced day with 1 recorded activities. "
            "Your day had a productive energy. "
        )

    def test_matching_is_case_insensitive(self):
        assert analyze(["HIT THE GYM"]).category_counts["physical"] == 1

    def test_social_day(self):
        summary = analyze(["Dinner with family", "Call with a friend"])
        assert summary.day_type == "social"
        assert summary.mood == "social"
        assert summary.text == (
            "Today was a social day with 2 recorded activities. "
            "You connected with others socially. "
            "Your day had a social energy. "
        )

    def test_day_type_later_threshold_overrides_earlier(self):
        """physical=2, work=2 の場合は後から判定する productive が採用される"""
        summary = analyze(["Run", "Bike ride", "Meeting", "Deadline"])
        assert summary.category_counts["physical"] == 2
        assert summary.category_counts["work"] == 2
        assert summary.day_type == "productive"

    def test_mindful_day_type(self):
        summary = analyze(["Yoga class", "Breathing exercise"])
        assert summary.day_type == "mindful"
        assert summary.mood == "balanced"

    def test_health_does_not_change_mood(self):
        assert analyze(["Drank water"]).mood == "productive"

    def test_output_starts_with_prefix_and_is_idempotent(self):
        records = ["Read a book", "Painted", "Swim at the pool"]
        first = summarize(records)
        assert first.startswith("Today was a ")
        assert summarize(records) == first

    def test_order_independent(self):
        records = ["Morning walk", "Client call", "Wrote a poem", "Yoga"]
        expected = summarize(records)
        for permutation in itertools.permutations(records):
            assert summarize(list(permutation)) == expected

    def test_input_is_not_mutated(self):
        records = [make_record("Morning walk")]
        summarize(records)
        assert records[0].text == "Morning walk"

    def test_empty_text_record_still_counts(self):
        """画像のみの記録（本文なし）も件数に含まれる"""
        result = summarize([Record(id=1, text="", timestamp="", date="2023-08-15", image_data="x")])
        assert result.startswith("Today was a balanced day with 1 recorded activities. ")


class TestJournalSummarizer:
    """JournalSummarizerのテストクラス"""

    @pytest.fixture
    def mock_repository(self):
        repo = MagicMock()
        repo.list_by_date.return_value = [
            make_record("Morning walk for 30 minutes"),
            make_record("Read 20 pages of 'Atomic Habits'", 2),
        ]
        return repo

    @pytest.fixture
    def ai_settings(self):
        return AppSettings(ai_enabled=True, ai_api_key="secret")

    def test_local_summary_without_settings(self, mock_repository):
        summarizer = JournalSummarizer(mock_repository)

        result = summarizer.generate_daily_summary(date="2023-08-15")

        assert result["date"] == "2023-08-15"
        assert result["source"] == "local"
        assert result["summary"].startswith("Today was a balanced day with 2 recorded")
        assert result["statistics"]["record_count"] == 2
        assert result["statistics"]["category_counts"]["physical"] == 1
        mock_repository.list_by_date.assert_called_once_with("2023-08-15")

    def test_empty_day(self, mock_repository):
        mock_repository.list_by_date.return_value = []
        factory = MagicMock()
        summarizer = JournalSummarizer(
            mock_repository,
            settings_provider=lambda: AppSettings(ai_enabled=True, ai_api_key="k"),
            ollama_client_factory=factory,
        )

        result = summarizer.generate_daily_summary(date="2023-08-20")

        assert result["summary"] == "No activities recorded for this day."
        assert result["statistics"]["record_count"] == 0
        factory.assert_not_called()

    def test_llm_summary(self, mock_repository, ai_settings):
        client = MagicMock()
        client.chat.return_value = "  You had a lovely, active and curious day.  "
        factory = MagicMock(return_value=client)
        summarizer = JournalSummarizer(
            mock_repository,
            settings_provider=lambda: ai_settings,
            ollama_client_factory=factory,
        )

        result = summarizer.generate_daily_summary(date="2023-08-15")

        assert result["source"] == "llm"
        assert result["summary"] == "You had a lovely, active and curious day."
        factory.assert_called_once_with(ai_settings)
        messages = client.chat.call_args[0][0]
        assert "Morning walk for 30 minutes" in messages[1]["content"]

    def test_llm_failure_falls_back_to_local(self, mock_repository, ai_settings):
        client = MagicMock()
        client.chat.side_effect = Exception("connection refused")
        summarizer = JournalSummarizer(
            mock_repository,
            settings_provider=lambda: ai_settings,
            ollama_client_factory=MagicMock(return_value=client),
        )

        result = summarizer.generate_daily_summary(date="2023-08-15")

        assert result["source"] == "local"
        assert result["summary"].startswith("Today was a ")
        assert "connection refused" in result["error"]

    @pytest.mark.parametrize(
        "settings",
        [
            AppSettings(ai_enabled=False, ai_api_key="secret"),
            AppSettings(ai_enabled=True, ai_api_key=None),
            AppSettings(ai_enabled=True, ai_api_key="secret", ai_summary_enabled=False),
        ],
    )
    def test_llm_not_used_unless_fully_configured(self, mock_repository, settings):
        factory = MagicMock()
        summarizer = JournalSummarizer(
            mock_repository, settings_provider=lambda: settings, ollama_client_factory=factory
        )

        result = summarizer.generate_daily_summary(date="2023-08-15")

        assert result["source"] == "local"
        factory.assert_not_called()

    def test_default_date_is_today(self, mock_repository):
        from datetime import date

        summarizer = JournalSummarizer(mock_repository)
        result = summarizer.generate_daily_summary()

        assert result["date"] == date.today().isoformat()
