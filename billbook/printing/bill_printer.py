"""Bill printing via QTextDocument and the system print dialog."""

from __future__ import annotations

import logging
from typing import Optional

from PyQt5.QtGui import QTextDocument
from PyQt5.QtPrintSupport import QPrintDialog, QPrinter
from PyQt5.QtWidgets import QDialog, QWidget

from billbook.models import Bill
from billbook.printing.bill_html import render_bill_html

logger = logging.getLogger(__name__)


class BillPrinter:
    """Render bills as HTML and send them to a printer of the user's choice."""

    def __init__(self, printer_name: Optional[str] = None) -> None:
        self.printer_name = printer_name

    def _make_printer(self) -> QPrinter:
        printer = QPrinter(QPrinter.HighResolution)
        printer.setPageSize(QPrinter.A4)
        if self.printer_name:
            printer.setPrinterName(self.printer_name)
        return printer

    def print_bill(self, bill: Bill, parent: Optional[QWidget] = None) -> bool:
        """Ask for a printer and print the bill; returns False when cancelled or invalid."""
        printer = self._make_printer()
        dialog = QPrintDialog(printer, parent)
        dialog.setWindowTitle(f"Print Bill {bill.bill_no}")
        if dialog.exec_() != QDialog.Accepted:
            return False

        if not printer.isValid():
            logger.warning("Printer %s is not available", printer.printerName())
            return False

        doc = QTextDocument()
        doc.setHtml(render_bill_html(bill))
        doc.print_(printer)
        logger.info("Printed bill %s", bill.bill_no)
        return True
