"""Working copy of a bill while it is being created or edited."""

from __future__ import annotations

from datetime import date
from typing import Any, List, Optional

from billbook.calculator import parse_number
from billbook.data_store import BillStore, generate_id
from billbook.errors import NotFoundError
from billbook.models import CUSTOMER_FIELDS, TAX_KINDS, Bill, BillItem


class BillEditor:
    """Holds an editable bill and keeps its derived fields current.

    Every mutator recomputes the line amounts and totals before returning,
    so whatever the form shows is always what would be saved.
    """

    def __init__(self, store: BillStore, bill: Bill, is_new: bool) -> None:
        self.store = store
        self.bill = bill
        self.is_new = is_new
        self.bill.recompute()

    @classmethod
    def new(cls, store: BillStore, today: Optional[date] = None) -> "BillEditor":
        """Start a bill with a fresh id, the next bill number and one empty row."""
        bill = Bill(
            id=generate_id(),
            bill_no=str(store.next_bill_number()),
            date=(today or date.today()).isoformat(),
        )
        return cls(store, bill, is_new=True)

    @classmethod
    def edit(cls, store: BillStore, bill_id: str) -> "BillEditor":
        bill = store.get(bill_id)
        if bill is None:
            raise NotFoundError(f"Bill {bill_id} not found.")
        return cls(store, bill, is_new=False)

    def recompute(self) -> None:
        self.bill.recompute()

    def set_customer(self, **fields: Any) -> None:
        for name, value in fields.items():
            if name not in CUSTOMER_FIELDS:
                raise ValueError(f"Unknown customer field: {name}")
            setattr(self.bill, name, "" if value is None else str(value))

    def set_date(self, value: date | str) -> None:
        self.bill.date = value.isoformat() if isinstance(value, date) else str(value)

    def set_item(
        self,
        index: int,
        description: Optional[str] = None,
        quantity: Any = None,
        rate: Any = None,
    ) -> BillItem:
        self._check_row(index)
        item = self.bill.items[index]
        if description is not None:
            item.description = str(description)
        if quantity is not None:
            item.quantity = parse_number(quantity)
        if rate is not None:
            item.rate = parse_number(rate)
        self.recompute()
        return item

    def add_item(self) -> int:
        """Append an empty row and return its index."""
        self.bill.items.append(BillItem())
        self.recompute()
        return len(self.bill.items) - 1

    def _check_row(self, index: int) -> None:
        if not 0 <= index < len(self.bill.items):
            raise ValueError(f"No item at row {index}")

    def remove_item(self, index: int) -> bool:
        """Drop a row; the last remaining row is kept."""
        self._check_row(index)
        if len(self.bill.items) <= 1:
            return False
        del self.bill.items[index]
        self.recompute()
        return True

    def set_tax(self, kind: str, percent: Any) -> None:
        if kind not in TAX_KINDS:
            raise ValueError(f"Unknown tax kind: {kind}")
        setattr(self.bill, f"{kind}_percent", "" if percent is None else str(percent).strip())
        self.recompute()

    def problems(self) -> List[str]:
        return self.bill.problems()

    def save(self) -> Bill:
        """Validate and store the bill. Nothing is written when validation fails."""
        self.recompute()
        self.bill.validate()
        if self.is_new:
            saved = self.store.add(self.bill)
            self.is_new = False
            return saved
        if not self.store.update(self.bill):
            raise NotFoundError(f"Bill {self.bill.id} no longer exists.")
        return self.store.get(self.bill.id)
