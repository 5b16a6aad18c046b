"""Bill data models."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping

from billbook.calculator import compute_item_amount, compute_totals, parse_number
from billbook.errors import ValidationError

TAX_KINDS = ("cgst", "sgst", "igst")

CUSTOMER_FIELDS = (
    "customer_name",
    "customer_address",
    "customer_gstin",
    "customer_state",
    "state_code",
)


def _text(data: Mapping[str, Any], key: str, default: str = "") -> str:
    value = data.get(key)
    return default if value is None else str(value)


def _json_number(value: float):
    return int(value) if float(value).is_integer() else value


@dataclass
class BillItem:
    description: str = ""
    quantity: float = 0.0
    rate: float = 0.0
    amount: str = "0.00"

    def recompute(self) -> None:
        self.amount = compute_item_amount(self.quantity, self.rate)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "description": self.description,
            "quantity": _json_number(self.quantity),
            "rate": _json_number(self.rate),
            "amount": self.amount,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "BillItem":
        quantity = parse_number(data.get("quantity"))
        rate = parse_number(data.get("rate"))
        amount = data.get("amount")
        return cls(
            description=_text(data, "description"),
            quantity=quantity,
            rate=rate,
            amount=str(amount) if amount not in (None, "") else compute_item_amount(quantity, rate),
        )


@dataclass
class Bill:
    id: str
    bill_no: str
    date: str
    customer_name: str = ""
    customer_address: str = ""
    customer_gstin: str = ""
    customer_state: str = ""
    state_code: str = ""
    items: List[BillItem] = field(default_factory=lambda: [BillItem()])
    net_amount: str = "0.00"
    cgst_percent: str = "0"
    cgst_amount: str = "0.00"
    sgst_percent: str = "0"
    sgst_amount: str = "0.00"
    igst_percent: str = "0"
    igst_amount: str = "0.00"
    total_amount: str = "0.00"
    amount_in_words: str = "Zero Rupees Only"

    def recompute(self) -> None:
        """Refresh every derived field from the items and tax percentages."""
        for item in self.items:
            item.recompute()
        totals = compute_totals(self.items, self.cgst_percent, self.sgst_percent, self.igst_percent)
        self.net_amount = totals.net_amount
        self.cgst_amount = totals.cgst_amount
        self.sgst_amount = totals.sgst_amount
        self.igst_amount = totals.igst_amount
        self.total_amount = totals.total_amount
        self.amount_in_words = totals.amount_in_words

    def problems(self) -> List[str]:
        """Return user-facing messages for every field that blocks saving."""
        found: List[str] = []
        if not str(self.id).strip():
            found.append("Bill id is missing.")
        if not re.search(r"\d", str(self.bill_no)):
            found.append("Bill number must contain digits.")
        if not self.customer_name.strip():
            found.append("Please enter customer name")
        if not self.items:
            found.append("Add at least one item to the bill.")
        for index, item in enumerate(self.items, start=1):
            if not item.description.strip():
                found.append(f"Please enter a description for item {index}")
            if item.quantity < 0:
                found.append(f"Quantity for item {index} cannot be negative.")
            if item.rate < 0:
                found.append(f"Rate for item {index} cannot be negative.")
        return found

    def validate(self) -> None:
        """Raise ValidationError carrying the first problem, if any."""
        found = self.problems()
        if found:
            raise ValidationError(found[0])

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "billNo": self.bill_no,
            "date": self.date,
            "customerName": self.customer_name,
            "customerAddress": self.customer_address,
            "customerGstin": self.customer_gstin,
            "customerState": self.customer_state,
            "stateCode": self.state_code,
            "items": [item.to_dict() for item in self.items],
            "netAmount": self.net_amount,
            "cgstPercent": self.cgst_percent,
            "cgstAmount": self.cgst_amount,
            "sgstPercent": self.sgst_percent,
            "sgstAmount": self.sgst_amount,
            "igstPercent": self.igst_percent,
            "igstAmount": self.igst_amount,
            "totalAmount": self.total_amount,
            "amountInWords": self.amount_in_words,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Bill":
        """Build a bill from its stored record. Raises ValidationError on unusable input."""
        if not isinstance(data, Mapping):
            raise ValidationError("Bill record must be an object.")
        if not data.get("id"):
            raise ValidationError("Bill record has no id.")

        raw_items = data.get("items")
        if not isinstance(raw_items, list):
            raise ValidationError(f"Bill {data['id']} has no item list.")

        return cls(
            id=str(data["id"]),
            bill_no=_text(data, "billNo"),
            date=_text(data, "date"),
            customer_name=_text(data, "customerName"),
            customer_address=_text(data, "customerAddress"),
            customer_gstin=_text(data, "customerGstin"),
            customer_state=_text(data, "customerState"),
            state_code=_text(data, "stateCode"),
            items=[BillItem.from_dict(item) for item in raw_items if isinstance(item, Mapping)],
            net_amount=_text(data, "netAmount", "0.00"),
            cgst_percent=_text(data, "cgstPercent", "0"),
            cgst_amount=_text(data, "cgstAmount", "0.00"),
            sgst_percent=_text(data, "sgstPercent", "0"),
            sgst_amount=_text(data, "sgstAmount", "0.00"),
            igst_percent=_text(data, "igstPercent", "0"),
            igst_amount=_text(data, "igstAmount", "0.00"),
            total_amount=_text(data, "totalAmount", "0.00"),
            amount_in_words=_text(data, "amountInWords", "Zero Rupees Only"),
        )
