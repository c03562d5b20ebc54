import pytest

from customer_match.steps import normalize, search_key


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("ACME CORP.", "acme"),
        ("Acme Corp", "acme"),
        ("  PT  Sumber   Makmur  ", "sumber makmur"),
        ("Maju Jaya Sdn. Bhd.", "maju jaya"),
        ("Golden Bridge Pte Ltd", "golden bridge"),
        ("Johnson & Johnson", "johnson johnson"),
        ("Costco Wholesale", "costco wholesale"),
        ("Incorporated", ""),
        ("", ""),
        (None, ""),
    ],
)
def test_normalize_canonical_forms(raw: str | None, expected: str) -> None:
    assert normalize(raw) == expected


@pytest.mark.parametrize(
    "raw",
    [
        "ACME CORP.",
        "PT. Sinar Terang Tbk",
        "c.o",
        "Sdn PT Bhd Holdings",
        "Evergreen   Supplies,   Inc.",
        "  ",
        "A-1 Co. (Private) Limited",
    ],
)
def test_normalize_is_idempotent(raw: str) -> None:
    once = normalize(raw)

    assert normalize(once) == once
    assert once == once.strip()
    assert "  " not in once


def test_search_key_drops_leading_legal_prefixes() -> None:
    assert search_key("PT. Sumber Makmur") == "sumber makmur"
    assert search_key("CV Maju Bersama") == "maju bersama"
    assert search_key("PT CV Abadi") == "abadi"
    assert search_key("Ptolemy Ltd") == "ptolemy ltd"
    assert search_key(None) == ""
