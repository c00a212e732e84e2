"""
ルールベースのアシスタント応答生成

各メッセージを独立にキーワード判定して定型文を返す（会話状態は持たない）。
分岐は上から順に評価し、最初に一致したものを採用する。
"""

from __future__ import annotations

from typing import Any, List, Sequence

GREETING = (
    "Hello! I'm your AI assistant. How can I help you with tracking your activities today?"
)

RECENT_LIMIT = 5

_PATTERN_RULES = (
    # (キーワード, 必要件数の下限（超過で成立）, メッセージ)
    (("walk", "exercise", "workout"), 1, "You tend to be physically active"),
    (("read", "book", "study"), 1, "You prioritize learning"),
    (("meditat", "mindful"), 0, "You practice mindfulness"),
)


def _text(record: Any) -> str:
    if isinstance(record, str):
        return record
    if isinstance(record, dict):
        return record.get("text") or ""
    return getattr(record, "text", "") or ""


def _contains_any(text: str, keywords: Sequence[str]) -> bool:
    return any(keyword in text for keyword in keywords)


def detect_patterns(records: Sequence[Any]) -> List[str]:
    """記録全体から習慣の傾向を抽出"""
    activities = [_text(record).lower() for record in records]
    patterns = []
    for keywords, threshold, message in _PATTERN_RULES:
        hits = sum(1 for activity in activities if _contains_any(activity, keywords))
        if hits > threshold:
            patterns.append(message)
    return patterns


def _records_response(records: Sequence[Any]) -> str:
    if not records:
        return (
            "I don't see any recorded activities yet. Start by adding some activities "
            "to your tracker, and I'll be able to provide insights and suggestions!"
        )
    recent = ", ".join(_text(record) for record in records[:RECENT_LIMIT])
    response = f"Based on your records, your recent activities include: {recent}. "
    patterns = detect_patterns(records)
    if patterns:
        response += f"I've noticed some patterns: {', '.join(patterns)}. "
    response += "Would you like me to analyze specific aspects or suggest improvements?"
    return response


def respond(message: str, records: Sequence[Any] = ()) -> str:
    """
    ユーザーメッセージに対する応答文を返す

    Args:
        message: ユーザーの入力
        records: ユーザーの記録（新しい順）

    Returns:
        応答文（必ず非空）
    """
    text = (message or "").lower()
    records = list(records)

    if _contains_any(text, ("record", "activity", "what did i do", "my day")):
        return _records_response(records)

    if _contains_any(text, ("hello", "hi", "hey")):
        return (
            "Hello! I'm your AI assistant, ready to help you track and analyze your "
            "activities. How can I assist you today?"
        )

    if _contains_any(text, ("help", "what can you do")):
        return (
            "I can help you analyze your activities, identify patterns in your habits, "
            "suggest improvements, answer questions about your records, and provide "
            "personalized insights. What would you like to explore?"
        )

    if _contains_any(text, ("habit", "routine", "pattern")):
        if len(records) > 2:
            return (
                "Great question! Based on your records, I can see you're building good "
                "habits. To strengthen them, try scheduling activities at consistent "
                "times and tracking your progress. What area would you like to focus on?"
            )
        return (
            "I'm still learning about your habits. As you add more activities, I'll be "
            "able to identify patterns and suggest ways to build stronger routines. "
            "Keep tracking your daily activities!"
        )

    if _contains_any(text, ("progress", "improvement", "how am i doing")):
        if records:
            return (
                f"You're making good progress! With {len(records)} total activities "
                "recorded, you're building a solid foundation. To improve further, "
                "consider setting specific goals and tracking your consistency. What "
                "area would you like to focus on?"
            )
        return (
            "You're just getting started! The first step is to begin recording your "
            "activities. Once you have some data, I can help you track progress and "
            "suggest improvements."
        )

    if _contains_any(text, ("suggest", "recommendation", "idea")):
        if records:
            return (
                "Based on your current activities, I'd recommend adding more variety - "
                "perhaps some physical activity, learning pursuits, or mindfulness "
                "practices. These additions could help create a more balanced lifestyle. "
                "What interests you most?"
            )
        return (
            "Since you're just starting, I recommend beginning with simple activities "
            'like "morning walk", "read for 15 minutes", or "meditate for 5 minutes". '
            "Start small and build from there!"
        )

    if "thank" in text:
        return (
            "You're welcome! I'm here to help you track your progress and build better "
            "habits. Feel free to ask me anything about your activities or how to "
            "improve your routine."
        )

    if _contains_any(text, ("goal", "target")):
        return (
            "Setting goals is a great way to stay motivated! Consider setting SMART goals "
            "(Specific, Measurable, Achievable, Relevant, Time-bound). For example, "
            '"Read 3 books this month" or "Exercise 4 times per week". What type of goal '
            "interests you?"
        )

    if _contains_any(text, ("motivation", "inspire")):
        return (
            "Remember, every great journey starts with a single step. You're already "
            "taking action by tracking your activities, which puts you ahead of most "
            "people. Focus on progress, not perfection. What small step can you take today?"
        )

    return (
        "That's an interesting question! I'd be happy to help you analyze your activity "
        "patterns, suggest habit improvements, or discuss your goals. What would you "
        "like to focus on?"
    )
