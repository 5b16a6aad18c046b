"""JSON-backed store for the bill collection."""

from __future__ import annotations

import copy
import json
import logging
import re
import uuid
from dataclasses import replace
from typing import Any, Iterable, List, Mapping, Optional

from billbook import config
from billbook.data.local_slot import LocalSlot
from billbook.errors import StorageCorruptionError, ValidationError
from billbook.models import Bill

logger = logging.getLogger(__name__)


def generate_id() -> str:
    """Return a random UUID4 string for a new bill."""
    return str(uuid.uuid4())


def bill_number_value(bill_no: Any) -> Optional[int]:
    """Return the integer formed by the digits of ``bill_no``, or None if it has none."""
    digits = re.sub(r"\D", "", str(bill_no))
    return int(digits) if digits else None


def _bill_no_of(bill: Any) -> Any:
    if isinstance(bill, Mapping):
        return bill.get("billNo", "")
    return bill.bill_no


def next_bill_number(bills: Iterable[Any]) -> int:
    """Return one more than the highest existing bill number, or 1 for an empty book."""
    numbers = [bill_number_value(_bill_no_of(bill)) for bill in bills]
    numbers = [number for number in numbers if number is not None]
    return max(numbers) + 1 if numbers else 1


def find_bill(bills: Iterable[Bill], bill_id: str) -> Optional[Bill]:
    for bill in bills:
        if bill.id == bill_id:
            return bill
    return None


def add_bill(bills: List[Bill], bill: Bill) -> List[Bill]:
    """Return a new collection with ``bill`` appended. Raises on a duplicate id."""
    if find_bill(bills, bill.id) is not None:
        raise ValidationError(f"A bill with id {bill.id} already exists.")
    return [*bills, bill]


def update_bill(bills: List[Bill], bill: Bill) -> List[Bill]:
    """Return a new collection with the bill of the same id replaced.

    The stored id and bill number are kept; an unknown id leaves the
    collection as it was.
    """
    updated = []
    for existing in bills:
        if existing.id == bill.id:
            updated.append(replace(bill, id=existing.id, bill_no=existing.bill_no))
        else:
            updated.append(existing)
    return updated


def remove_bill(bills: List[Bill], bill_id: str) -> List[Bill]:
    return [bill for bill in bills if bill.id != bill_id]


def serialize_collection(bills: Iterable[Bill]) -> str:
    return json.dumps([bill.to_dict() for bill in bills], ensure_ascii=False, indent=2)


def parse_collection(text: str) -> List[Bill]:
    """Parse a stored collection.

    Raises StorageCorruptionError when the payload is not a JSON list.
    Individual records that cannot be used are skipped with a warning.
    """
    try:
        payload = json.loads(text)
    except (TypeError, ValueError) as exc:
        raise StorageCorruptionError(f"Stored bills are not valid JSON: {exc}") from exc
    if not isinstance(payload, list):
        raise StorageCorruptionError("Stored bills must be a JSON list.")

    bills: List[Bill] = []
    for position, record in enumerate(payload):
        try:
            bill = Bill.from_dict(record)
        except ValidationError as exc:
            logger.warning("Skipping stored record %d: %s", position, exc)
            continue
        if bill_number_value(bill.bill_no) is None:
            logger.warning("Skipping bill %s: bill number %r has no digits", bill.id, bill.bill_no)
            continue
        if find_bill(bills, bill.id) is not None:
            logger.warning("Skipping duplicate bill id %s", bill.id)
            continue
        bills.append(bill)
    return bills


class BillStore:
    """Owns the bill collection and keeps it in sync with a local slot."""

    def __init__(self, slot: Optional[LocalSlot] = None) -> None:
        self.slot = slot or LocalSlot(config.DATA_DIR, config.STORAGE_KEY)
        self._bills: List[Bill] = []
        self.load()

    def __len__(self) -> int:
        return len(self._bills)

    def load(self) -> List[Bill]:
        """Read the collection from the slot; unreadable data gives an empty book."""
        try:
            raw = self.slot.read()
            self._bills = parse_collection(raw) if raw is not None else []
        except (OSError, StorageCorruptionError) as exc:
            logger.warning("Could not read stored bills from %s, starting empty: %s", self.slot.path, exc)
            self._bills = []
        logger.info("Loaded %d bills", len(self._bills))
        return self.bills

    def save(self) -> None:
        """Persist the whole collection, replacing what was stored."""
        self.slot.write(serialize_collection(self._bills))

    def _commit(self, bills: List[Bill]) -> None:
        self.slot.write(serialize_collection(bills))
        self._bills = bills

    @property
    def bills(self) -> List[Bill]:
        """Return copies of all bills in insertion order."""
        return copy.deepcopy(self._bills)

    def get(self, bill_id: str) -> Optional[Bill]:
        bill = find_bill(self._bills, bill_id)
        return copy.deepcopy(bill) if bill is not None else None

    def next_bill_number(self) -> int:
        return next_bill_number(self._bills)

    @staticmethod
    def _prepare(bill: Bill) -> Bill:
        prepared = copy.deepcopy(bill)
        prepared.recompute()
        prepared.validate()
        return prepared

    def add(self, bill: Bill) -> Bill:
        """Append a new bill whose id and bill number are already assigned."""
        prepared = self._prepare(bill)
        self._commit(add_bill(self._bills, prepared))
        logger.info("Added bill %s (%s)", prepared.bill_no, prepared.id)
        return copy.deepcopy(prepared)

    def update(self, bill: Bill) -> bool:
        """Replace the stored bill with the same id. Returns False if there is none."""
        if find_bill(self._bills, bill.id) is None:
            logger.warning("Update ignored, bill %s not found", bill.id)
            return False
        prepared = self._prepare(bill)
        self._commit(update_bill(self._bills, prepared))
        logger.info("Updated bill %s", bill.id)
        return True

    def remove(self, bill_id: str) -> bool:
        """Delete the bill with ``bill_id``. Returns False if there is none."""
        if find_bill(self._bills, bill_id) is None:
            logger.warning("Delete ignored, bill %s not found", bill_id)
            return False
        self._commit(remove_bill(self._bills, bill_id))
        logger.info("Deleted bill %s", bill_id)
        return True
