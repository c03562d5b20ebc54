from __future__ import annotations

import argparse
import csv
from pathlib import Path

from customer_match.datasets import INTAKE_COLUMNS, ReferenceDatasetGenerator
from customer_match.stores import write_customers_csv


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate synthetic company customers and intake rows")
    parser.add_argument("--size", type=int, default=1000)
    parser.add_argument("--intake-size", type=int, default=500)
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--variant-rate", type=float, default=0.7)
    parser.add_argument("--output-dir", type=Path, default=Path("data/reference"))
    args = parser.parse_args()

    generator = ReferenceDatasetGenerator(seed=args.seed)
    customers = generator.generate_customers(args.size)
    intake = generator.generate_intake(customers, size=args.intake_size, variant_rate=args.variant_rate)

    args.output_dir.mkdir(parents=True, exist_ok=True)
    write_customers_csv(args.output_dir / "customers.csv", customers)
    with (args.output_dir / "intake.csv").open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=INTAKE_COLUMNS)
        writer.writeheader()
        writer.writerows(intake)


if __name__ == "__main__":
    main()
