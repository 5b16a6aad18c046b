"""Export the bill register to an Excel workbook."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from openpyxl import Workbook
from openpyxl.styles import Font

from billbook import config
from billbook.calculator import format_display_date, parse_number
from billbook.models import Bill

logger = logging.getLogger(__name__)

REGISTER_COLUMNS = [
    "Bill No",
    "Date",
    "Customer",
    "GSTIN",
    "State",
    "State Code",
    "Net Amount",
    "CGST",
    "SGST",
    "IGST",
    "Total Amount",
]


def export_register(bills: Iterable[Bill], path: Path | str, sheet_name: Optional[str] = None) -> Path:
    """Write one row per bill, in listing order, and return the workbook path."""
    path = Path(path)
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = sheet_name or config.EXPORT_SHEET_NAME

    sheet.append(REGISTER_COLUMNS)
    for cell in sheet[1]:
        cell.font = Font(bold=True)

    count = 0
    for bill in bills:
        sheet.append(
            [
                bill.bill_no,
                format_display_date(bill.date),
                bill.customer_name,
                bill.customer_gstin,
                bill.customer_state,
                bill.state_code,
                parse_number(bill.net_amount),
                parse_number(bill.cgst_amount),
                parse_number(bill.sgst_amount),
                parse_number(bill.igst_amount),
                parse_number(bill.total_amount),
            ]
        )
        count += 1

    for row in sheet.iter_rows(min_row=2, min_col=7, max_col=len(REGISTER_COLUMNS)):
        for cell in row:
            cell.number_format = "0.00"

    path.parent.mkdir(parents=True, exist_ok=True)
    workbook.save(path)
    logger.info("Exported %d bills to %s", count, path)
    return path
