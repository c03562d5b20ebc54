from customer_match.datasets import INTAKE_COLUMNS, ReferenceDatasetGenerator


def test_generation_is_deterministic_per_seed() -> None:
    first = ReferenceDatasetGenerator(seed=3).generate_customers(25)
    second = ReferenceDatasetGenerator(seed=3).generate_customers(25)

    assert first == second
    assert len({record.company_name.lower() for record in first}) == len(first)


def test_intake_rows_reference_existing_customers() -> None:
    generator = ReferenceDatasetGenerator(seed=11)
    customers = generator.generate_customers(20)
    ids = {customer.customer_id for customer in customers}

    rows = generator.generate_intake(customers, size=40, variant_rate=0.5)

    assert len(rows) == 40
    for row in rows:
        assert set(row) == set(INTAKE_COLUMNS)
        assert row["company_name"]
        assert row["expected_customer_id"] == "" or row["expected_customer_id"] in ids


def test_empty_sizes() -> None:
    generator = ReferenceDatasetGenerator()

    assert generator.generate_customers(0) == []
    assert generator.generate_intake([], size=3, variant_rate=1.0)[0]["expected_customer_id"] == ""
