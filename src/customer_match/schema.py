from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Mapping, Sequence


class FieldTag(StrEnum):
    COMPANY_NAME = "COMPANY_NAME"
    CONTACT_PERSON = "CONTACT_PERSON"
    CUSTOMER_ID = "CUSTOMER_ID"
    EMAIL = "EMAIL"
    PHONE = "PHONE"


class ContactField(StrEnum):
    """Contact fields compared by the change detector, in reporting order."""

    EMAIL = "email"
    PHONE = "phone"
    CONTACT_PERSON = "contact_person"


_FIELD_LABELS = {
    "email": "Email",
    "phone": "Phone",
    "contact_person": "Contact Person",
    "address": "Address",
    "city": "City",
    "country": "Country",
}


def field_label(name: str) -> str:
    return _FIELD_LABELS.get(name, name)


@dataclass(frozen=True)
class RecordSchema:
    """Maps source-system columns to stable semantic tags."""

    tag_to_columns: Mapping[FieldTag, tuple[str, ...]]

    @classmethod
    def from_mapping(cls, mapping: Mapping[FieldTag, Sequence[str]]) -> "RecordSchema":
        frozen = {tag: tuple(columns) for tag, columns in mapping.items()}
        return cls(tag_to_columns=frozen)

    def columns_for(self, tag: FieldTag) -> tuple[str, ...]:
        return self.tag_to_columns.get(tag, ())

    def values_for(self, attributes: Mapping[str, object], tag: FieldTag) -> list[str]:
        values: list[str] = []
        for column in self.columns_for(tag):
            value = attributes.get(column)
            if value is None:
                continue
            text = str(value).strip()
            if text:
                values.append(text)
        return values

    def joined_value(self, attributes: Mapping[str, object], tag: FieldTag, sep: str = " ") -> str:
        return sep.join(self.values_for(attributes, tag)).strip()


CUSTOMER_SCHEMA = RecordSchema.from_mapping(
    {
        FieldTag.CUSTOMER_ID: ["id"],
        FieldTag.COMPANY_NAME: ["company_name"],
        FieldTag.EMAIL: ["email"],
        FieldTag.PHONE: ["phone"],
        FieldTag.CONTACT_PERSON: ["contact_person"],
    }
)

# Intake rows as captured by the inquiry form.
INTAKE_SCHEMA = RecordSchema.from_mapping(
    {
        FieldTag.COMPANY_NAME: ["company_name"],
        FieldTag.EMAIL: ["contact_email"],
        FieldTag.PHONE: ["contact_phone"],
        FieldTag.CONTACT_PERSON: ["contact_person"],
    }
)
