import pytest

from customer_match.steps import levenshtein, similarity


def test_levenshtein_counts_single_character_edits() -> None:
    assert levenshtein("kitten", "sitting") == 3
    assert levenshtein("", "abc") == 3
    assert levenshtein("abc", "") == 3
    assert levenshtein("same", "same") == 0


def test_similarity_compares_normalized_names() -> None:
    assert similarity("Acme", "ACME Ltd.") == 1.0
    assert similarity("", None) == 1.0
    assert similarity("abcde", "abxye") == pytest.approx(0.6)
    assert similarity("abcd", "wxyz") == 0.0


@pytest.mark.parametrize(
    ("left", "right"),
    [
        ("Sumber Makmur", "Sumber Makmor"),
        ("Acme Trading", "Acme Global"),
        ("Northwind", ""),
        ("PT Jaya Abadi", "Jaya Abadi Tbk"),
    ],
)
def test_similarity_is_symmetric_and_reflexive(left: str, right: str) -> None:
    assert similarity(left, right) == similarity(right, left)
    assert similarity(left, left) == 1.0
    assert 0.0 <= similarity(left, right) <= 1.0
