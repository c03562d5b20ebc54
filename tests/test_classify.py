from customer_match.config import MatchSettings
from customer_match.models import Confidence, CustomerRecord, MatchType
from customer_match.steps import CompanyNameMatcher, classify, email_domain, find_best_match, group_by_type


def _customer(customer_id: str, company_name: str, email: str | None = None) -> CustomerRecord:
    return CustomerRecord(customer_id=customer_id, company_name=company_name, email=email)


def test_exact_match_after_suffix_removal() -> None:
    results = classify("Acme Corp", [_customer("1", "ACME CORP.")])

    assert len(results) == 1
    assert results[0].match_type == MatchType.EXACT
    assert results[0].score == 100
    assert results[0].confidence == Confidence.HIGH


def test_legal_prefix_only_difference_is_exact() -> None:
    results = classify("Sumber Makmur", [_customer("1", "PT Sumber Makmur")])

    assert results[0].match_type == MatchType.EXACT


def test_contains_scores_by_position() -> None:
    results = classify("Sumber Makmur", [_customer("1", "PT Sumber Makmur Abadi")])

    assert results[0].match_type == MatchType.CONTAINS
    assert results[0].score == 75 - 2 * 3
    assert results[0].confidence == Confidence.LOW


def test_starts_with_penalizes_extra_length() -> None:
    results = classify("Acme", [_customer("1", "Acme Trading")])

    assert results[0].match_type == MatchType.STARTS_WITH
    assert results[0].score == 90 - (len("acme trading") - len("acme"))
    assert results[0].confidence == Confidence.MEDIUM


def test_long_starts_with_candidate_is_clamped_at_zero() -> None:
    results = classify("Acme", [_customer("1", "Acme " + "x" * 120)])

    assert results[0].score == 0
    assert results[0].confidence == Confidence.LOW


def test_fuzzy_boundary_is_inclusive() -> None:
    candidate = _customer("1", "a" * 100)

    included = classify("a" * 60 + "b" * 40, [candidate])
    excluded = classify("a" * 59 + "b" * 41, [candidate])

    assert len(included) == 1
    assert included[0].match_type == MatchType.FUZZY
    assert included[0].score == 42
    assert included[0].confidence == Confidence.LOW
    assert excluded == []


def test_fuzzy_score_rounds_half_up() -> None:
    results = classify("abcd", [_customer("1", "abxd")])

    assert results[0].match_type == MatchType.FUZZY
    assert results[0].score == 53


def test_email_domain_bonus_keeps_match_type() -> None:
    same_domain = _customer("1", "info@acme.com Trading", email="Sales@ACME.com")
    other_domain = _customer("2", "info@acme.com Trading", email="x@other.com")

    results = classify("info@acme.com", [other_domain, same_domain])

    assert [r.customer.customer_id for r in results] == ["1", "2"]
    assert results[0].match_type == MatchType.STARTS_WITH
    assert results[0].score == 82 + 15
    assert results[0].confidence == Confidence.HIGH
    assert results[1].score == 82


def test_bonus_on_exact_match_is_clamped() -> None:
    results = classify("orders@acme.com", [_customer("1", "ORDERS@ACME.COM", email="ap@acme.com")])

    assert results[0].score == 100


def test_results_sorted_descending_and_ties_keep_input_order() -> None:
    candidates = [
        _customer("first", "Acme Trading2"),
        _customer("exact", "Acme Trading Ltd"),
        _customer("second", "Acme Trading3"),
    ]

    results = classify("Acme Trading", candidates)

    assert [r.customer.customer_id for r in results] == ["exact", "first", "second"]
    assert [r.score for r in results] == [100, 89, 89]


def test_empty_inputs_return_no_results() -> None:
    candidates = [_customer("1", "Acme")]

    assert classify("", candidates) == []
    assert classify("   ", candidates) == []
    assert classify(None, candidates) == []
    assert classify("Acme", []) == []


def test_find_best_match_requires_ninety_points() -> None:
    assert find_best_match("Acme Trading", [_customer("1", "Acme Trading2")]) is None

    best = find_best_match("Acme Trading", [_customer("1", "Acme Trading2"), _customer("2", "Acme Trading Co.")])
    assert best is not None
    assert best.customer.customer_id == "2"


def test_group_by_type_preserves_order() -> None:
    results = classify(
        "Acme",
        [
            _customer("exact", "ACME Ltd"),
            _customer("prefix", "Acme Trading"),
            _customer("inside", "The Acme Group"),
            _customer("fuzzy", "Acne"),
        ],
    )

    groups = group_by_type(results)

    assert [r.customer.customer_id for r in groups.exact] == ["exact"]
    assert [r.customer.customer_id for r in groups.similar] == ["prefix", "inside"]
    assert [r.customer.customer_id for r in groups.other] == ["fuzzy"]


def test_custom_settings_change_thresholds() -> None:
    matcher = CompanyNameMatcher(MatchSettings(high_confidence=80, fuzzy_min_similarity=0.5))

    prefix = matcher.classify("Acme", [_customer("1", "Acme Trading")])
    fuzzy = matcher.classify("a" * 59 + "b" * 41, [_customer("2", "a" * 100)])

    assert prefix[0].confidence == Confidence.HIGH
    assert len(fuzzy) == 1


def test_email_domain_uses_last_at_sign() -> None:
    assert email_domain("Billing ap@Acme.COM ") == "acme.com"
    assert email_domain("odd@name@example.org") == "example.org"
    assert email_domain("no-at-sign") == ""
    assert email_domain(None) == ""


def test_empty_term_domain_never_earns_bonus() -> None:
    candidates = [_customer("1", "foo@ bar"), _customer("2", "foo@ bar", email="billing@")]

    results = classify("foo@", candidates)

    assert [r.score for r in results] == [86, 86]
