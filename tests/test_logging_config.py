from collections.abc import Iterator

import pytest
import structlog

from customer_match.logging_config import configure_logging
from customer_match.models import CustomerRecord
from customer_match.steps import classify


@pytest.fixture(autouse=True)
def _reset_logging() -> Iterator[None]:
    yield
    structlog.reset_defaults()


def test_classification_is_silent_at_info(customers: list[CustomerRecord], capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging("INFO")

    classify("Sumber Makmur", customers)

    captured = capsys.readouterr()
    assert captured.out == ""
    assert captured.err == ""


def test_debug_events_go_to_stderr_without_search_term(
    customers: list[CustomerRecord],
    capsys: pytest.CaptureFixture[str],
) -> None:
    configure_logging("DEBUG", json=True)

    classify("Sumber Makmur", customers)

    captured = capsys.readouterr()
    assert captured.out == ""
    assert "classification_complete" in captured.err
    assert "Sumber Makmur" not in captured.err
