from __future__ import annotations

import csv
from collections.abc import Iterable, Mapping
from dataclasses import replace
from pathlib import Path

from customer_match.models import CustomerRecord
from customer_match.schema import CUSTOMER_SCHEMA, FieldTag, RecordSchema

_WRITABLE_FIELDS = ("company_name", "contact_person", "email", "phone")


class InMemoryCustomerStore:
    """Reference customer store keeping records in insertion order.

    ``list_candidates`` returns a copy, so a pending classification keeps
    working on its snapshot while the store changes.
    """

    def __init__(self, records: Iterable[CustomerRecord] = ()) -> None:
        self._records: dict[str, CustomerRecord] = {}
        for record in records:
            self._records[record.customer_id] = record
        self._next_id = len(self._records) + 1

    def list_candidates(self) -> list[CustomerRecord]:
        return list(self._records.values())

    def get(self, customer_id: str) -> CustomerRecord:
        return self._records[customer_id]

    def create_customer(self, fields: Mapping[str, str]) -> CustomerRecord:
        company_name = (fields.get("company_name") or "").strip()
        if not company_name:
            raise ValueError("company_name is required")

        customer_id = self._allocate_id()
        record = CustomerRecord(
            customer_id=customer_id,
            company_name=company_name,
            contact_person=fields.get("contact_person") or None,
            email=fields.get("email") or None,
            phone=fields.get("phone") or None,
        )
        self._records[customer_id] = record
        return record

    def update_customer(self, customer_id: str, fields: Mapping[str, str]) -> CustomerRecord:
        if customer_id not in self._records:
            raise KeyError(f"unknown customer '{customer_id}'")
        unknown = set(fields) - set(_WRITABLE_FIELDS)
        if unknown:
            raise ValueError(f"cannot update fields: {', '.join(sorted(unknown))}")

        record = replace(self._records[customer_id], **dict(fields))
        self._records[customer_id] = record
        return record

    def _allocate_id(self) -> str:
        while True:
            customer_id = f"cust_{self._next_id:07d}"
            self._next_id += 1
            if customer_id not in self._records:
                return customer_id

    def __len__(self) -> int:
        return len(self._records)


def load_customers_csv(path: Path, schema: RecordSchema = CUSTOMER_SCHEMA) -> list[CustomerRecord]:
    records: list[CustomerRecord] = []
    with path.open("r", newline="", encoding="utf-8") as handle:
        reader = csv.DictReader(handle)
        for row in reader:
            customer_id = schema.joined_value(row, FieldTag.CUSTOMER_ID)
            company_name = schema.joined_value(row, FieldTag.COMPANY_NAME)
            if not customer_id or not company_name:
                continue
            records.append(
                CustomerRecord(
                    customer_id=customer_id,
                    company_name=company_name,
                    contact_person=schema.joined_value(row, FieldTag.CONTACT_PERSON) or None,
                    email=schema.joined_value(row, FieldTag.EMAIL) or None,
                    phone=schema.joined_value(row, FieldTag.PHONE) or None,
                )
            )
    return records


def write_customers_csv(path: Path, records: Iterable[CustomerRecord]) -> None:
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.DictWriter(handle, fieldnames=["id", *_WRITABLE_FIELDS])
        writer.writeheader()
        for record in records:
            writer.writerow(
                {
                    "id": record.customer_id,
                    "company_name": record.company_name,
                    "contact_person": record.contact_person or "",
                    "email": record.email or "",
                    "phone": record.phone or "",
                }
            )


def read_rows_csv(path: Path) -> list[dict[str, str]]:
    with path.open("r", newline="", encoding="utf-8") as handle:
        return [dict(row) for row in csv.DictReader(handle)]
