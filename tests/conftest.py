import pytest

from customer_match.config import MatchSettings
from customer_match.models import CustomerRecord
from customer_match.stores import InMemoryCustomerStore


@pytest.fixture
def customers() -> list[CustomerRecord]:
    return [
        CustomerRecord(
            customer_id="cust_0000001",
            company_name="PT Sumber Makmur",
            contact_person="Budi Santoso",
            email="budi@sumbermakmur.co.id",
            phone="+62 812-3456-7890",
        ),
        CustomerRecord(
            customer_id="cust_0000002",
            company_name="Acme Trading",
            contact_person="Alex Tan",
            email="sales@acme.com",
            phone="021 555 0101",
        ),
        CustomerRecord(
            customer_id="cust_0000003",
            company_name="Acme Trading Global",
            contact_person="Maya Lim",
            email="maya@acmeglobal.com",
        ),
    ]


@pytest.fixture
def store(customers: list[CustomerRecord]) -> InMemoryCustomerStore:
    return InMemoryCustomerStore(customers)


@pytest.fixture
def settings() -> MatchSettings:
    return MatchSettings()
