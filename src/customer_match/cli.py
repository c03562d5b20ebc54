from __future__ import annotations

import argparse
import csv
import json
import sys
from collections import Counter
from dataclasses import asdict
from pathlib import Path
from typing import Any

import structlog

from customer_match.config import get_settings
from customer_match.datasets import INTAKE_COLUMNS, ReferenceDatasetGenerator
from customer_match.exceptions import CustomerMatchError
from customer_match.logging_config import configure_logging
from customer_match.models import MatchResult
from customer_match.runners import AutoAcceptPolicy, BatchOutcome, ResolutionWorkflow, resolve_batch
from customer_match.schema import field_label
from customer_match.steps import CompanyNameMatcher, group_by_type, search_key
from customer_match.stores import InMemoryCustomerStore, load_customers_csv, read_rows_csv, write_customers_csv

logger = structlog.get_logger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)
    configure_logging(level=args.log_level, json=args.log_json)

    try:
        if args.command == "match":
            run_match(term=args.term, customers_csv=args.customers, limit=args.limit, group=args.group)
            return 0
        if args.command == "resolve-batch":
            run_resolve_batch(
                customers_csv=args.customers,
                intake_csv=args.intake,
                threshold=args.threshold,
                apply_updates=args.apply_updates,
                output_dir=args.output_dir,
            )
            return 0
        if args.command == "generate":
            run_generate(
                size=args.size,
                intake_size=args.intake_size,
                variant_rate=args.variant_rate,
                seed=args.seed,
                output_dir=args.output_dir,
            )
            return 0
    except (CustomerMatchError, OSError) as exc:
        logger.error("command_failed", command=args.command, error=str(exc))
        print(f"error: {exc}", file=sys.stderr)
        return 1

    parser.print_help()
    return 2


def run_match(*, term: str, customers_csv: Path, limit: int, group: bool) -> None:
    customers = load_customers_csv(customers_csv)
    results = CompanyNameMatcher().classify(term, customers)[:limit]

    if group:
        groups = group_by_type(results)
        payload: Any = {
            "exact": [_result_payload(result) for result in groups.exact],
            "similar": [_result_payload(result) for result in groups.similar],
            "other": [_result_payload(result) for result in groups.other],
        }
    else:
        payload = [_result_payload(result) for result in results]
    print(json.dumps(payload, indent=2))


def run_resolve_batch(
    *,
    customers_csv: Path,
    intake_csv: Path,
    threshold: int,
    apply_updates: bool,
    output_dir: Path,
) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)

    store = InMemoryCustomerStore(load_customers_csv(customers_csv))
    rows = read_rows_csv(intake_csv)
    workflow = ResolutionWorkflow(store)
    policy = AutoAcceptPolicy(threshold=threshold, apply_updates=apply_updates)
    outcomes = resolve_batch(workflow, rows, policy)

    outcomes_path = output_dir / "outcomes.json"
    summary_path = output_dir / "summary.json"
    customers_path = output_dir / "customers.csv"

    _write_json(outcomes_path, [asdict(outcome) for outcome in outcomes])
    summary = _build_summary(outcomes=outcomes, rows=rows, customer_count=len(store))
    _write_json(summary_path, summary)
    write_customers_csv(customers_path, sorted(store.list_candidates(), key=lambda c: search_key(c.company_name)))

    print(f"Outcomes: {outcomes_path}")
    print(f"Summary: {summary_path}")
    print(f"Customers: {customers_path}")
    print("---")
    print(f"rows={summary['row_count']}")
    for outcome, count in summary["outcome_counts"].items():
        print(f"{outcome}={count}")
    if summary["expected_count"]:
        print(f"accuracy={summary['accuracy']}")


def run_generate(*, size: int, intake_size: int, variant_rate: float, seed: int, output_dir: Path) -> None:
    output_dir.mkdir(parents=True, exist_ok=True)
    generator = ReferenceDatasetGenerator(seed=seed)
    customers = generator.generate_customers(size)
    intake = generator.generate_intake(customers, size=intake_size, variant_rate=variant_rate)

    customers_path = output_dir / "customers.csv"
    intake_path = output_dir / "intake.csv"
    write_customers_csv(customers_path, customers)
    with intake_path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=INTAKE_COLUMNS)
        writer.writeheader()
        writer.writerows(intake)

    print(f"Customers: {customers_path}")
    print(f"Intake: {intake_path}")


def _build_summary(
    *,
    outcomes: list[BatchOutcome],
    rows: list[dict[str, str]],
    customer_count: int,
) -> dict[str, object]:
    counts = Counter(outcome.outcome for outcome in outcomes)
    field_counts = Counter(field_label(name) for outcome in outcomes for name in outcome.changed_fields)

    # Rows carrying ground truth (generated datasets) get an accuracy figure.
    expected = [
        (outcome, rows[outcome.row]["expected_customer_id"])
        for outcome in outcomes
        if "expected_customer_id" in rows[outcome.row]
    ]
    correct = 0
    for outcome, expected_id in expected:
        if expected_id and outcome.customer_id == expected_id:
            correct += 1
        elif not expected_id and outcome.outcome == "created":
            correct += 1

    return {
        "row_count": len(outcomes),
        "outcome_counts": dict(sorted(counts.items())),
        "changed_fields": dict(sorted(field_counts.items())),
        "customer_count": customer_count,
        "expected_count": len(expected),
        "accuracy": round(correct / len(expected), 3) if expected else None,
    }


def _result_payload(result: MatchResult) -> dict[str, Any]:
    return {
        "customer_id": result.customer.customer_id,
        "company_name": result.customer.company_name,
        "score": result.score,
        "match_type": result.match_type.value,
        "match_label": result.match_type.label,
        "confidence": result.confidence.value,
    }


def _build_parser() -> argparse.ArgumentParser:
    settings = get_settings()
    parser = argparse.ArgumentParser(prog="customer-match", description="Customer name matching CLI")
    parser.add_argument("--log-level", default=settings.log_level)
    parser.add_argument("--log-json", action="store_true", default=settings.log_json)
    subparsers = parser.add_subparsers(dest="command")

    match_parser = subparsers.add_parser("match", help="Rank stored customers against a company name")
    match_parser.add_argument("term")
    match_parser.add_argument("--customers", type=Path, required=True)
    match_parser.add_argument("--limit", type=int, default=10)
    match_parser.add_argument("--group", action="store_true", help="Group results by match type")

    batch_parser = subparsers.add_parser(
        "resolve-batch",
        help="Resolve intake rows against customers with automatic decisions",
    )
    batch_parser.add_argument("--customers", type=Path, required=True)
    batch_parser.add_argument("--intake", type=Path, required=True)
    batch_parser.add_argument("--threshold", type=int, default=settings.auto_accept_threshold)
    batch_parser.add_argument("--apply-updates", action="store_true")
    batch_parser.add_argument("--output-dir", type=Path, default=Path("data/cli_output"))

    generate_parser = subparsers.add_parser("generate", help="Write a synthetic customer and intake dataset")
    generate_parser.add_argument("--size", type=int, default=200)
    generate_parser.add_argument("--intake-size", type=int, default=100)
    generate_parser.add_argument("--variant-rate", type=float, default=0.7)
    generate_parser.add_argument("--seed", type=int, default=42)
    generate_parser.add_argument("--output-dir", type=Path, default=Path("data/reference"))

    return parser


def _write_json(path: Path, payload: object) -> None:
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2)


if __name__ == "__main__":
    sys.exit(main())
