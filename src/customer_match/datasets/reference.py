from __future__ import annotations

import random

from customer_match.models import CustomerRecord

_STEMS = [
    "Sumber Makmur",
    "Acme",
    "Jaya Abadi",
    "Harbour Freight",
    "Maju Bersama",
    "Northwind Traders",
    "Sinar Terang",
    "Bluewater Logistics",
    "Cahaya Sentosa",
    "Golden Bridge",
    "Mitra Sejahtera",
    "Evergreen Supplies",
]
_QUALIFIERS = ["Trading", "Pharma", "Medika", "Industries", "Global", "Indonesia", "Holdings", ""]
_PREFIXES = ["PT", "CV", ""]
_SUFFIXES = ["Ltd", "Tbk", "Inc.", "Pte Ltd", "Sdn Bhd", "Corp", ""]
_FIRST_NAMES = ["Budi", "Siti", "Andi", "Dewi", "Alex", "Maya", "Daniel", "Rina"]
_LAST_NAMES = ["Santoso", "Wijaya", "Hartono", "Smith", "Tan", "Lim", "Kusuma"]

INTAKE_COLUMNS = ["company_name", "contact_email", "contact_phone", "contact_person", "expected_customer_id"]


class ReferenceDatasetGenerator:
    """Generate synthetic customers plus intake rows that should (or should not) resolve to them."""

    def __init__(self, seed: int = 7) -> None:
        self._rng = random.Random(seed)

    def generate_customers(self, size: int) -> list[CustomerRecord]:
        if size <= 0:
            return []

        records: list[CustomerRecord] = []
        seen: set[str] = set()
        attempts = 0
        while len(records) < size and attempts < size * 50:
            attempts += 1
            name = self._company_name()
            if name.lower() in seen:
                continue
            seen.add(name.lower())
            records.append(self._customer(len(records) + 1, name))
        return records

    def generate_intake(
        self,
        customers: list[CustomerRecord],
        size: int,
        variant_rate: float = 0.7,
    ) -> list[dict[str, str]]:
        """Intake rows; ``expected_customer_id`` is empty for companies that do not exist yet."""

        rows: list[dict[str, str]] = []
        for _ in range(max(size, 0)):
            if customers and self._rng.random() < variant_rate:
                source = self._rng.choice(customers)
                rows.append(self._variant_row(source))
            else:
                rows.append(self._new_company_row())
        return rows

    def _company_name(self) -> str:
        parts = [
            self._rng.choice(_PREFIXES),
            self._rng.choice(_STEMS),
            self._rng.choice(_QUALIFIERS),
            self._rng.choice(_SUFFIXES),
        ]
        return " ".join(part for part in parts if part)

    def _customer(self, idx: int, name: str) -> CustomerRecord:
        first_name = self._rng.choice(_FIRST_NAMES)
        last_name = self._rng.choice(_LAST_NAMES)
        domain = "".join(ch for ch in name.lower() if ch.isalnum())[:18] + ".co.id"
        return CustomerRecord(
            customer_id=f"cust_{idx:07d}",
            company_name=name,
            contact_person=f"{first_name} {last_name}",
            email=f"{first_name.lower()}@{domain}",
            phone=f"+62 812-{idx % 10000:04d}-{self._rng.randint(1000, 9999)}",
        )

    def _variant_row(self, source: CustomerRecord) -> dict[str, str]:
        variant = self._rng.choice(["copy", "suffix", "case", "typo", "contact"])
        name = source.company_name
        email = source.email or ""
        phone = source.phone or ""
        person = source.contact_person or ""

        if variant == "suffix":
            name = self._suffix_variant(name)
        elif variant == "case":
            name = self._rng.choice([name.upper(), name.lower(), f"{name}."])
        elif variant == "typo":
            name = self._typo_variant(name)
        elif variant == "contact":
            person = f"{self._rng.choice(_FIRST_NAMES)} {self._rng.choice(_LAST_NAMES)}"
            if "@" in email:
                email = f"{person.split()[0].lower()}@{email.rpartition('@')[2]}"
            phone = phone.replace("-", " ")

        return {
            "company_name": name,
            "contact_email": email,
            "contact_phone": phone,
            "contact_person": person,
            "expected_customer_id": source.customer_id,
        }

    def _new_company_row(self) -> dict[str, str]:
        name = f"{self._rng.choice(_LAST_NAMES)} {self._rng.choice(['Kimia', 'Farma', 'Teknik', 'Labs'])} {self._rng.randint(100, 999)}"
        return {
            "company_name": name,
            "contact_email": "",
            "contact_phone": "",
            "contact_person": self._rng.choice(_FIRST_NAMES),
            "expected_customer_id": "",
        }

    def _suffix_variant(self, name: str) -> str:
        tokens = name.split()
        legal = {token.lower().rstrip(".") for token in _PREFIXES + _SUFFIXES if token}
        stripped = [token for token in tokens if token.lower().rstrip(".") not in legal]
        if len(stripped) != len(tokens):
            return " ".join(stripped)
        return f"{name} {self._rng.choice(['Ltd.', 'Co.', 'Inc'])}"

    def _typo_variant(self, name: str) -> str:
        letters = [i for i, ch in enumerate(name) if ch.isalpha()]
        if len(letters) < 6:
            return name
        idx = self._rng.choice(letters[1:-1])
        return name[:idx] + name[idx + 1 :]
