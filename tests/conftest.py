import pytest

from billbook.data.local_slot import LocalSlot
from billbook.data_store import BillStore, generate_id
from billbook.models import Bill, BillItem


@pytest.fixture
def slot(tmp_path):
    return LocalSlot(tmp_path / "data", "test_bills")


@pytest.fixture
def store(slot):
    return BillStore(slot)


@pytest.fixture
def dyeing_bill():
    bill = Bill(
        id=generate_id(),
        bill_no="1",
        date="2024-01-15",
        customer_name="Ramesh Textiles",
        customer_address="12 Mill Road, Jaipur",
        customer_gstin="08ABCDE1234F1Z5",
        customer_state="Rajasthan",
        state_code="08",
        items=[BillItem(description="Dyeing", quantity=10, rate=50)],
        cgst_percent="2.5",
        sgst_percent="2.5",
    )
    bill.recompute()
    return bill
