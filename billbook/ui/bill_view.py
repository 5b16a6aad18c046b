"""Read-only, print-ready view of a saved bill."""

from __future__ import annotations

from typing import Optional

from PyQt5.QtWidgets import (
    QDialog,
    QHBoxLayout,
    QMessageBox,
    QPushButton,
    QTextBrowser,
    QVBoxLayout,
    QWidget,
)

from billbook.models import Bill
from billbook.printing.bill_html import render_bill_html
from billbook.printing.bill_printer import BillPrinter


class BillViewDialog(QDialog):
    """Shows the bill as it will print, with Print and Edit actions."""

    def __init__(self, bill: Bill, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.bill = bill
        self.edit_requested = False
        self.setWindowTitle(f"View Bill {bill.bill_no}")
        self.resize(820, 900)

        layout = QVBoxLayout()
        buttons = QHBoxLayout()
        buttons.addStretch()
        self.print_button = QPushButton("Print Bill")
        self.print_button.clicked.connect(self._on_print)
        self.edit_button = QPushButton("Edit")
        self.edit_button.clicked.connect(self._on_edit)
        self.back_button = QPushButton("Back")
        self.back_button.clicked.connect(self.reject)
        buttons.addWidget(self.print_button)
        buttons.addWidget(self.edit_button)
        buttons.addWidget(self.back_button)

        self.browser = QTextBrowser()
        self.browser.setHtml(render_bill_html(bill))

        layout.addLayout(buttons)
        layout.addWidget(self.browser, 1)
        self.setLayout(layout)

    def _on_print(self) -> None:
        if not BillPrinter().print_bill(self.bill, self):
            QMessageBox.information(self, "Not printed", "The bill was not sent to a printer.")

    def _on_edit(self) -> None:
        self.edit_requested = True
        self.accept()
