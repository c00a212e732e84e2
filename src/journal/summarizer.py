"""
JournalSummarizer: 日次活動サマリー生成器

設計方針:
- summarize()/analyze() はキーワード分類による決定的なローカルサマリー（純粋関数）
- JournalSummarizer はレコードストアから対象日の記録を取得し、
  AIサマリー設定が有効な場合のみOllamaで自然言語サマリーを生成する
- LLMが無効・未設定・失敗のいずれの場合もローカルサマリーにフォールバック

関連:
- src/journal/categories.py: カテゴリ分類テーブル
- src/records/repository.py: 記録の取得
- src/life_tracker/ollama_client.py: LLM推論
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date as date_type
from typing import Any, Callable, Dict, List, Optional, Sequence

from .categories import CategoryMatches, classify

logger = logging.getLogger(__name__)

EMPTY_DAY_SUMMARY = "No activities recorded for this day."

RECOMMEND_PHYSICAL = "Consider adding some physical activity tomorrow for better balance."
RECOMMEND_MINDFULNESS = "A moment of mindfulness could enhance your day."
RECOMMEND_AFFIRMATION = "Great job maintaining a well-rounded lifestyle!"

MAX_INSIGHTS = 3


@dataclass
class DaySummary:
    """1日分の記録から導出したサマリー（永続化しない）"""

    record_count: int
    day_type: str = "balanced"
    mood: str = "productive"
    category_counts: Dict[str, int] = field(default_factory=dict)
    insights: List[str] = field(default_factory=list)
    recommendation: Optional[str] = None
    text: str = EMPTY_DAY_SUMMARY

    def statistics(self) -> Dict[str, Any]:
        return {
            "record_count": self.record_count,
            "day_type": self.day_type,
            "mood": self.mood,
            "category_counts": dict(self.category_counts),
        }


def _record_text(record: Any) -> str:
    if isinstance(record, str):
        return record
    if isinstance(record, dict):
        return record.get("text") or ""
    return getattr(record, "text", "") or ""


def _plural(count: int, singular: str, plural: str) -> str:
    return plural if count > 1 else singular


def _build_insights(matches: CategoryMatches) -> List[str]:
    insights: List[str] = []

    physical = matches.count("physical")
    if physical > 0:
        insights.append(
            f"You were physically active with {physical} "
            f"{_plural(physical, 'activity', 'activities')}"
        )

    mental = matches.count("mental")
    if mental > 0:
        insights.append(
            f"You invested in learning with {mental} intellectual "
            f"{_plural(mental, 'pursuit', 'pursuits')}"
        )

    if matches.count("wellness") > 0:
        insights.append("You prioritized mental wellbeing")

    work = matches.count("work")
    if work > 0:
        insights.append(
            f"You made progress on {work} work-related {_plural(work, 'task', 'tasks')}"
        )

    if matches.count("social") > 0:
        insights.append("You connected with others socially")

    if matches.count("creative") > 0:
        insights.append("You expressed your creativity")

    if matches.count("health") > 0:
        insights.append("You took care of your health")

    return insights


def _derive_mood(matches: CategoryMatches) -> str:
    # 後勝ち（最後に成立した条件が採用される）
    mood = "productive"
    if matches.count("wellness") > 0:
        mood = "balanced"
    if matches.count("work") > 0:
        mood = "focused"
    if matches.count("social") > 0:
        mood = "social"
    if matches.count("creative") > 0:
        mood = "inspired"
    return mood


def _derive_day_type(matches: CategoryMatches) -> str:
    # moodと同じく後勝ち
    day_type = "balanced"
    if matches.count("physical") >= 2:
        day_type = "active"
    if matches.count("work") >= 2:
        day_type = "productive"
    if matches.count("wellness") >= 2:
        day_type = "mindful"
    if matches.count("social") >= 2:
        day_type = "social"
    return day_type


def _choose_recommendation(
    matches: CategoryMatches, insights: Sequence[str]
) -> Optional[str]:
    if matches.count("physical") == 0 and matches.total > 2:
        return RECOMMEND_PHYSICAL
    if matches.count("wellness") == 0 and matches.total > 2:
        return RECOMMEND_MINDFULNESS
    if len(insights) >= MAX_INSIGHTS:
        return RECOMMEND_AFFIRMATION
    return None


def analyze(records: Sequence[Any]) -> DaySummary:
    """
    1日分の記録を分析してDaySummaryを返す

    Args:
        records: 同一日の記録（Record、{"text": ...}辞書、または文字列）

    Returns:
        DaySummary: day_type/mood/カテゴリ件数/インサイト/整形済みテキスト
    """
    records = list(records)
    if not records:
        return DaySummary(record_count=0)

    matches = classify(_record_text(record) for record in records)
    insights = _build_insights(matches)
    mood = _derive_mood(matches)
    day_type = _derive_day_type(matches)
    recommendation = _choose_recommendation(matches, insights)

    text = f"Today was a {day_type} day with {len(records)} recorded activities. "
    for insight in insights[:MAX_INSIGHTS]:
        text += f"{insight}. "
    text += f"Your day had a {mood} energy. "
    if recommendation:
        text += recommendation

    return DaySummary(
        record_count=len(records),
        day_type=day_type,
        mood=mood,
        category_counts=matches.counts(),
        insights=insights,
        recommendation=recommendation,
        text=text,
    )


def summarize(records: Sequence[Any]) -> str:
    """同一日の記録からローカルサマリー文を生成する（ネットワーク非依存）"""
    return analyze(records).text


class JournalSummarizer:
    """レコードストアと連携する日次サマリー生成器"""

    def __init__(
        self,
        repository: Any,
        settings_provider: Optional[Callable[[], Any]] = None,
        ollama_client_factory: Optional[Callable[[Any], Any]] = None,
    ):
        """
        初期化

        Args:
            repository: RecordRepository（list_by_dateを持つもの）
            settings_provider: 現在のAppSettingsを返す関数（未指定時はLLM無効）
            ollama_client_factory: AppSettingsからOllamaClientを生成する関数
        """
        self.repository = repository
        self.settings_provider = settings_provider
        self.ollama_client_factory = ollama_client_factory

    def _llm_client(self) -> Any:
        if self.settings_provider is None or self.ollama_client_factory is None:
            return None
        settings = self.settings_provider()
        if not (settings.ai_summary_enabled and settings.ai_enabled and settings.ai_api_key):
            return None
        return self.ollama_client_factory(settings)

    def generate_daily_summary(self, date: Optional[str] = None) -> Dict[str, Any]:
        """
        日次サマリー生成

        Args:
            date: 対象日付（YYYY-MM-DD形式、Noneの場合は今日）

        Returns:
            サマリー辞書
            - date: 対象日付
            - summary: サマリー文
            - source: "local" または "llm"
            - statistics: 統計情報
            - error: LLM失敗時のみ
        """
        if date is None:
            date = date_type.today().isoformat()

        logger.info(f"Generating summary for {date}")

        records = self.repository.list_by_date(date)
        local = analyze(records)
        result: Dict[str, Any] = {
            "date": date,
            "summary": local.text,
            "source": "local",
            "statistics": local.statistics(),
        }

        if not records:
            return result

        client = self._llm_client()
        if client is None:
            return result

        try:
            result["summary"] = self._generate_llm_summary(client, date, records, local)
            result["source"] = "llm"
        except Exception as e:
            logger.error(f"Error generating LLM summary: {e}")
            result["error"] = f"LLM summary failed: {e}"

        return result

    def _generate_llm_summary(
        self, client: Any, date: str, records: Sequence[Any], local: DaySummary
    ) -> str:
        """
        LLMで自然言語サマリー生成

        Args:
            client: OllamaClient
            date: 対象日付
            records: 対象日の記録
            local: ローカル分析結果（カテゴリ情報をヒントとして渡す）

        Returns:
            サマリー文字列
        """
        system_prompt = (
            "You are an assistant that writes a short, encouraging summary of a "
            "person's day from their activity journal. Reply in 2-4 sentences."
        )
        activities = "\n".join(f"- {_record_text(record)}" for record in records)
        user_prompt = (
            f"Date: {date}\n"
            f"Activities:\n{activities}\n\n"
            f"Detected day type: {local.day_type}, mood: {local.mood}."
        )
        messages = [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ]

        response = client.chat(messages)
        text = str(response).strip()
        if not text:
            raise ValueError("empty response from LLM")
        return text
