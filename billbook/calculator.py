"""Bill arithmetic: line amounts, GST totals and the amount in words.

All money is handled as ``Decimal`` and rounded half-up to two places, so a
line amount shown in the item table and the same figure inside a total are
always rounded the same way.
"""

from __future__ import annotations

import functools
import math
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Context, Decimal, localcontext
from typing import Any, Dict, Iterable, Mapping

from billbook import config

TWO_PLACES = Decimal("0.01")

# wide enough for the product of two maximal floats plus the paise digits
_MONEY_CONTEXT = Context(prec=1000, rounding=ROUND_HALF_UP)

_ONES = [
    "", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine",
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen",
    "Seventeen", "Eighteen", "Nineteen",
]
_TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]


def parse_number(value: Any, default: float = 0.0) -> float:
    """Return ``value`` as a float, or ``default`` when it is blank or not a number."""
    if value is None or value == "":
        return default
    try:
        number = float(value)
    except (TypeError, ValueError):
        return default
    if math.isnan(number) or math.isinf(number):
        return default
    return number


def _to_decimal(value: Any) -> Decimal:
    if isinstance(value, Decimal) and value.is_finite():
        return value
    return Decimal(repr(parse_number(value)))


def _in_money_context(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        with localcontext(_MONEY_CONTEXT):
            return func(*args, **kwargs)

    return wrapper


def _money(value: Decimal) -> Decimal:
    rounded = value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    if rounded.is_zero():
        return rounded.copy_abs()
    return rounded


def format_number(value: Any) -> str:
    """Render a quantity or rate without a trailing .0 (10.0 -> "10")."""
    number = parse_number(value)
    return str(int(number)) if number.is_integer() else str(number)


@_in_money_context
def format_currency(value: Any) -> str:
    """Return amount formatted to two decimals."""
    return format(_money(_to_decimal(value)), "f")


def format_inr(value: Any) -> str:
    """Return amount with the rupee sign and Indian digit grouping (1,23,456.78)."""
    amount = format_currency(value)
    sign = "-" if amount.startswith("-") else ""
    whole, fraction = amount.lstrip("-").split(".")
    if len(whole) > 3:
        head, tail = whole[:-3], whole[-3:]
        groups = []
        while len(head) > 2:
            groups.insert(0, head[-2:])
            head = head[:-2]
        if head:
            groups.insert(0, head)
        whole = ",".join(groups + [tail])
    return f"{sign}{config.CURRENCY_SYMBOL}{whole}.{fraction}"


def format_display_date(value: str) -> str:
    """Render an ISO date as DD/MM/YYYY; anything unparsable is returned as is."""
    try:
        return date.fromisoformat(str(value)).strftime("%d/%m/%Y")
    except ValueError:
        return str(value)


@_in_money_context
def compute_item_amount(quantity: Any, rate: Any) -> str:
    """Return ``quantity * rate`` as a two-decimal string."""
    return format(_money(_to_decimal(quantity) * _to_decimal(rate)), "f")


@dataclass(frozen=True)
class Totals:
    net_amount: str
    cgst_amount: str
    sgst_amount: str
    igst_amount: str
    total_amount: str
    amount_in_words: str

    def as_dict(self) -> Dict[str, str]:
        return {
            "netAmount": self.net_amount,
            "cgstAmount": self.cgst_amount,
            "sgstAmount": self.sgst_amount,
            "igstAmount": self.igst_amount,
            "totalAmount": self.total_amount,
            "amountInWords": self.amount_in_words,
        }


def _item_field(item: Any, name: str) -> Any:
    if isinstance(item, Mapping):
        return item.get(name)
    return getattr(item, name, None)


@_in_money_context
def compute_totals(
    items: Iterable[Any],
    cgst_percent: Any = "0",
    sgst_percent: Any = "0",
    igst_percent: Any = "0",
) -> Totals:
    """Derive every computed bill figure from the item rows and tax rates.

    The net amount is summed from each row's raw quantity and rate; a stored
    ``amount`` string on the row is never trusted. Each tax is applied to the
    net amount independently, and the total is the sum of the rounded figures
    so the printed columns always add up.
    """
    net = sum(
        (_to_decimal(_item_field(item, "quantity")) * _to_decimal(_item_field(item, "rate"))
         for item in items),
        Decimal("0"),
    )
    hundred = Decimal("100")
    net_amount = _money(net)
    cgst_amount = _money(net * _to_decimal(cgst_percent) / hundred)
    sgst_amount = _money(net * _to_decimal(sgst_percent) / hundred)
    igst_amount = _money(net * _to_decimal(igst_percent) / hundred)
    total_amount = net_amount + cgst_amount + sgst_amount + igst_amount

    return Totals(
        net_amount=format(net_amount, "f"),
        cgst_amount=format(cgst_amount, "f"),
        sgst_amount=format(sgst_amount, "f"),
        igst_amount=format(igst_amount, "f"),
        total_amount=format(total_amount, "f"),
        amount_in_words=f"{number_to_words(total_amount)} Rupees Only",
    )


def _below_hundred(n: int) -> str:
    if n < 20:
        return _ONES[n]
    return _TENS[n // 10] + (f" {_ONES[n % 10]}" if n % 10 else "")


def _whole_to_words(n: int) -> str:
    segments = []
    if n >= 100000:
        # counts of 100 lakh and above are spelled with hundreds
        segments.append(f"{_whole_to_words(n // 100000)} Lakh")
        n %= 100000
    if n >= 1000:
        segments.append(f"{_below_hundred(n // 1000)} Thousand")
        n %= 1000
    if n >= 100:
        segments.append(f"{_ONES[n // 100]} Hundred")
        n %= 100
    if n > 0:
        if segments:
            segments.append("and")
        segments.append(_below_hundred(n))
    return " ".join(segments)


@_in_money_context
def number_to_words(amount: Any) -> str:
    """Spell out an amount in the Indian numbering system.

    >>> number_to_words(250000)
    'Two Lakh Fifty Thousand'
    >>> number_to_words(1234.5)
    'One Thousand Two Hundred and Thirty Four and 50/100'
    """
    value = _money(_to_decimal(amount))
    if value < 0:
        return f"Minus {number_to_words(-value)}"

    whole = int(value)
    paise = int((value - whole) * 100)
    words = _whole_to_words(whole) if whole else "Zero"
    # paise are spelled even when the whole part is zero ("Zero and 50/100")
    if paise > 0:
        words += f" and {paise}/100"
    return words
