"""Unit tests for the local word-frequency analysis."""

from __future__ import annotations

from docbench.services.word_frequency import top_terms


def _pairs(text: str, limit: int = 20) -> list[tuple[str, int]]:
    return [(w.name, w.value) for w in top_terms(text, limit)]


def test_short_words_dropped() -> None:
    assert _pairs("the cat sat on the mat the cat ran") == []


def test_sorted_by_count() -> None:
    assert _pairs("elephant elephant tiger tiger tiger lion") == [
        ("tiger", 3),
        ("elephant", 2),
        ("lion", 1),
    ]


def test_ties_keep_first_encounter_order() -> None:
    assert _pairs("zebra apple mango apple zebra mango") == [
        ("zebra", 2),
        ("apple", 2),
        ("mango", 2),
    ]


def test_punctuation_and_case_normalised() -> None:
    assert _pairs("Drug, DRUG! drug. (drug)") == [("drug", 4)]


def test_hyphens_and_underscores_removed_not_split() -> None:
    assert _pairs("follow-up follow_up") == [("followup", 2)]


def test_stop_words_dropped() -> None:
    assert _pairs("that this with from have were will your they could which label") == [("label", 1)]


def test_limit() -> None:
    text = " ".join(f"word{i:02d}" for i in range(30))
    assert len(top_terms(text)) == 20
    assert len(top_terms(text, limit=5)) == 5
