"""
活動カテゴリ分類テーブル

記録テキストをキーワード部分一致でカテゴリに振り分ける。
カテゴリは静的な設定値であり、ユーザーデータではない。

関連:
- src/journal/summarizer.py: 分類結果からサマリー文を組み立てる
- src/assistant/responder.py: チャット応答の傾向分析で再利用
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, List, Tuple


@dataclass(frozen=True)
class Category:
    """キーワードで定義された活動カテゴリ"""

    name: str
    keywords: Tuple[str, ...]

    def matches(self, text: str) -> bool:
        """小文字化済みテキストがいずれかのキーワードを含むか"""
        return any(keyword in text for keyword in self.keywords)


# 判定順序はサマリー文の並び順を決めるため固定
CATEGORIES: Tuple[Category, ...] = (
    Category(
        "physical",
        ("walk", "run", "exercise", "workout", "gym", "sport", "bike", "swim", "dance"),
    ),
    Category("mental", ("read", "book", "study", "learn", "course", "research")),
    Category("wellness", ("meditat", "mindful", "yoga", "breath", "relax", "rest")),
    Category(
        "work", ("work", "project", "meeting", "deadline", "client", "presentation")
    ),
    Category("social", ("friend", "family", "dinner", "party", "call", "visit")),
    Category("creative", ("write", "draw", "paint", "music", "design", "craft")),
    Category("health", ("cook", "meal", "sleep", "doctor", "vitamin", "water")),
)

CATEGORY_NAMES: Tuple[str, ...] = tuple(category.name for category in CATEGORIES)


class CategoryMatches:
    """カテゴリ毎に一致した記録テキストを保持する"""

    def __init__(self, matched: Dict[str, List[str]], total: int):
        self._matched = matched
        self.total = total

    def count(self, name: str) -> int:
        return len(self._matched.get(name, []))

    def texts(self, name: str) -> List[str]:
        return list(self._matched.get(name, []))

    def counts(self) -> Dict[str, int]:
        """全カテゴリの一致件数（テーブル順）"""
        return {name: self.count(name) for name in CATEGORY_NAMES}

    def matched_names(self) -> List[str]:
        return [name for name in CATEGORY_NAMES if self.count(name) > 0]


def classify(texts: Iterable[str]) -> CategoryMatches:
    """
    テキスト群をカテゴリ分類する

    1件の記録は複数カテゴリに同時に属しうる（排他ではない）。

    Args:
        texts: 記録テキストのシーケンス

    Returns:
        CategoryMatches: カテゴリ名 → 一致した小文字化テキスト
    """
    lowered = [(text or "").lower() for text in texts]
    matched: Dict[str, List[str]] = {}
    for category in CATEGORIES:
        matched[category.name] = [text for text in lowered if category.matches(text)]
    return CategoryMatches(matched, total=len(lowered))
