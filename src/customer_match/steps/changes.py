from __future__ import annotations

import re
from collections.abc import Callable, Mapping

from customer_match.models import ChangeSet, ContactFields, CustomerRecord
from customer_match.schema import ContactField

_NON_DIGIT = re.compile(r"\D")

ContactSource = ContactFields | CustomerRecord | Mapping[str, object] | None


def normalize_email(value: str) -> str:
    return value.strip().lower()


def normalize_phone(value: str) -> str:
    return _NON_DIGIT.sub("", value)


def normalize_contact_person(value: str) -> str:
    return value.strip()


DEFAULT_FIELD_TRANSFORMS: dict[ContactField, Callable[[str], str]] = {
    ContactField.EMAIL: normalize_email,
    ContactField.PHONE: normalize_phone,
    ContactField.CONTACT_PERSON: normalize_contact_person,
}


class ChangeDetector:
    """Compares submitted contact fields against a stored customer, field by field.

    A field counts as changed only when both sides carry a value and the
    normalized values differ. A value missing on either side is no signal.
    """

    def __init__(self, field_transforms: Mapping[ContactField, Callable[[str], str]] | None = None) -> None:
        self._field_transforms = dict(field_transforms or DEFAULT_FIELD_TRANSFORMS)

    def detect(self, submitted: ContactSource, existing: ContactSource) -> ChangeSet:
        new_fields = as_contact_fields(submitted)
        old_fields = as_contact_fields(existing)

        changed: list[str] = []
        old_values: dict[str, str] = {}
        new_values: dict[str, str] = {}

        for contact_field, transform in self._field_transforms.items():
            new_value = getattr(new_fields, contact_field.value)
            old_value = getattr(old_fields, contact_field.value)
            if not _has_value(new_value) or not _has_value(old_value):
                continue

            new_norm = transform(new_value)
            old_norm = transform(old_value)
            if not new_norm or not old_norm or new_norm == old_norm:
                continue

            changed.append(contact_field.value)
            old_values[contact_field.value] = old_value
            new_values[contact_field.value] = new_value

        return ChangeSet(changed_fields=tuple(changed), old_values=old_values, new_values=new_values)


def detect_changes(submitted: ContactSource, existing: ContactSource) -> ChangeSet:
    return ChangeDetector().detect(submitted, existing)


def as_contact_fields(source: ContactSource) -> ContactFields:
    if source is None:
        return ContactFields()
    if isinstance(source, ContactFields):
        return source
    if isinstance(source, CustomerRecord):
        return source.contact_fields()
    return ContactFields.from_mapping(source)


def _has_value(value: str | None) -> bool:
    return value is not None and bool(value.strip())
