import uuid
from datetime import date

import pytest

from billbook.editor import BillEditor
from billbook.errors import NotFoundError, ValidationError
from billbook.models import Bill


def _fill_dyeing(editor):
    editor.set_customer(customer_name="Ramesh Textiles", customer_state="Rajasthan", state_code="08")
    editor.set_item(0, description="Dyeing", quantity="10", rate="50")
    editor.set_tax("cgst", "2.5")
    editor.set_tax("sgst", "2.5")


def test_new_bill_starts_blank(store):
    editor = BillEditor.new(store, today=date(2024, 1, 15))
    bill = editor.bill

    assert editor.is_new
    assert uuid.UUID(bill.id).version == 4
    assert bill.bill_no == "1"
    assert bill.date == "2024-01-15"
    assert len(bill.items) == 1
    assert bill.items[0].description == ""
    assert bill.cgst_percent == bill.sgst_percent == bill.igst_percent == "0"
    assert bill.total_amount == "0.00"
    assert bill.amount_in_words == "Zero Rupees Only"


def test_new_bill_takes_next_number(store, dyeing_bill):
    dyeing_bill.bill_no = "7"
    store.add(dyeing_bill)

    assert BillEditor.new(store).bill.bill_no == "8"


def test_every_edit_recomputes_totals(store):
    editor = BillEditor.new(store)

    _fill_dyeing(editor)

    bill = editor.bill
    assert bill.items[0].amount == "500.00"
    assert bill.net_amount == "500.00"
    assert bill.cgst_amount == "12.50"
    assert bill.sgst_amount == "12.50"
    assert bill.igst_amount == "0.00"
    assert bill.total_amount == "525.00"

    editor.add_item()
    editor.set_item(1, description="Printing", quantity=2, rate=25)
    assert bill.net_amount == "550.00"

    editor.remove_item(0)
    assert bill.net_amount == "50.00"
    assert bill.items[0].description == "Printing"


def test_non_numeric_input_counts_as_zero(store):
    editor = BillEditor.new(store)

    editor.set_item(0, quantity="ten", rate="50")
    editor.set_tax("igst", "lots")

    assert editor.bill.items[0].quantity == 0.0
    assert editor.bill.items[0].amount == "0.00"
    assert editor.bill.igst_amount == "0.00"
    assert editor.bill.total_amount == "0.00"


def test_last_row_cannot_be_removed(store):
    editor = BillEditor.new(store)
    assert editor.remove_item(0) is False
    assert len(editor.bill.items) == 1


def test_unknown_fields_are_rejected(store):
    editor = BillEditor.new(store)
    with pytest.raises(ValueError):
        editor.set_customer(customer_phone="123")
    with pytest.raises(ValueError):
        editor.set_tax("vat", "5")


def test_save_new_bill_adds_it(store):
    editor = BillEditor.new(store, today=date(2024, 1, 15))
    _fill_dyeing(editor)

    saved = editor.save()

    assert not editor.is_new
    assert store.bills == [saved]
    assert saved.total_amount == "525.00"
    assert saved.bill_no == "1"


def test_save_rejects_missing_details(store):
    editor = BillEditor.new(store)
    editor.set_customer(customer_name="Ramesh Textiles")
    editor.add_item()
    editor.set_item(0, description="Dyeing", quantity=1, rate=10)

    assert editor.problems() == ["Please enter a description for item 2"]
    with pytest.raises(ValidationError, match="item 2"):
        editor.save()
    assert store.bills == []


def test_save_rejects_missing_customer(store):
    editor = BillEditor.new(store)
    editor.set_item(0, description="Dyeing", quantity=1, rate=10)

    with pytest.raises(ValidationError):
        editor.save()
    assert len(store) == 0


def test_edit_updates_in_place(store, dyeing_bill):
    store.add(dyeing_bill)
    store.add(Bill.from_dict({**dyeing_bill.to_dict(), "id": "second", "billNo": "2"}))

    editor = BillEditor.edit(store, dyeing_bill.id)
    editor.set_item(0, rate="60")
    editor.set_date(date(2024, 2, 1))
    saved = editor.save()

    assert len(store) == 2
    assert saved.id == dyeing_bill.id
    assert saved.bill_no == dyeing_bill.bill_no
    assert saved.date == "2024-02-01"
    assert saved.net_amount == "600.00"
    assert saved.total_amount == "630.00"
    assert store.bills[0].id == dyeing_bill.id


def test_working_copy_is_isolated_until_saved(store, dyeing_bill):
    store.add(dyeing_bill)

    editor = BillEditor.edit(store, dyeing_bill.id)
    editor.set_item(0, rate="999")

    assert store.get(dyeing_bill.id).items[0].rate == 50


def test_edit_unknown_bill(store):
    with pytest.raises(NotFoundError):
        BillEditor.edit(store, "missing")


def test_saving_a_deleted_bill_is_reported(store, dyeing_bill):
    store.add(dyeing_bill)
    editor = BillEditor.edit(store, dyeing_bill.id)
    store.remove(dyeing_bill.id)

    with pytest.raises(NotFoundError):
        editor.save()
    assert len(store) == 0


def test_huge_quantities_are_computed_exactly(store):
    editor = BillEditor.new(store)

    editor.set_item(0, quantity="1e27", rate="10")

    assert editor.bill.items[0].amount == "1" + "0" * 28 + ".00"
    assert editor.bill.total_amount == "1" + "0" * 28 + ".00"


def test_rows_out_of_range_are_rejected(store):
    editor = BillEditor.new(store)
    editor.add_item()

    with pytest.raises(ValueError, match="row 5"):
        editor.remove_item(5)
    with pytest.raises(ValueError):
        editor.set_item(3, description="Printing")
    with pytest.raises(ValueError):
        editor.remove_item(-1)
    assert len(editor.bill.items) == 2
