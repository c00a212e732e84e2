"""カテゴリ分類テーブルのテスト"""

from src.journal.categories import CATEGORIES, CATEGORY_NAMES, classify


def test_category_table_order():
    assert CATEGORY_NAMES == (
        "physical",
        "mental",
        "wellness",
        "work",
        "social",
        "creative",
        "health",
    )
    wellness = next(c for c in CATEGORIES if c.name == "wellness")
    assert "meditat" in wellness.keywords


def test_record_can_belong_to_several_categories():
    matches = classify(["Cooked dinner with friends"])
    assert matches.count("health") == 1
    assert matches.count("social") == 1
    assert matches.matched_names() == ["social", "health"]


def test_record_counted_once_per_category():
    matches = classify(["Walk then run then swim"])
    assert matches.count("physical") == 1


def test_counts_cover_every_category():
    matches = classify([])
    assert matches.total == 0
    assert matches.counts() == {name: 0 for name in CATEGORY_NAMES}


def test_substring_matching():
    """'meditat' は meditation/meditated の両方に一致する"""
    matches = classify(["Meditated", "meditation", "Interest rates"])
    assert matches.count("wellness") == 3
    assert matches.texts("wellness")[0] == "meditated"


def test_none_text_is_treated_as_empty():
    matches = classify([None, "yoga"])
    assert matches.total == 2
    assert matches.count("wellness") == 1
