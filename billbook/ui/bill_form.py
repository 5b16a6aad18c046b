"""Create / edit form for a single bill."""

from __future__ import annotations

from typing import Optional

from PyQt5.QtCore import QDate, Qt
from PyQt5.QtGui import QFont
from PyQt5.QtWidgets import (
    QDateEdit,
    QDialog,
    QFormLayout,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMessageBox,
    QPlainTextEdit,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from billbook import config
from billbook.calculator import format_number
from billbook.editor import BillEditor
from billbook.errors import NotFoundError, ValidationError
from billbook.models import Bill

ITEM_HEADERS = ["S.No.", "Description", "Qty", "Rate", "Amount"]
COL_DESCRIPTION, COL_QTY, COL_RATE, COL_AMOUNT = 1, 2, 3, 4


class BillFormDialog(QDialog):
    """Form bound to a BillEditor; totals refresh on every edit."""

    def __init__(self, editor: BillEditor, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.editor = editor
        self.saved_bill: Optional[Bill] = None
        self._refreshing = False

        self.setWindowTitle("Create New Bill" if editor.is_new else "Edit Bill")
        self.resize(900, 720)

        self._build_ui()
        self._load_fields()
        self._refresh_items()
        self._refresh_totals()

    def _build_ui(self) -> None:
        layout = QVBoxLayout()

        header = QLabel(f"{config.BUSINESS_NAME}\n{config.BUSINESS_TAGLINE}\n{config.BUSINESS_ADDRESS}")
        header.setAlignment(Qt.AlignCenter)
        header_font = QFont()
        header_font.setBold(True)
        header.setFont(header_font)
        layout.addWidget(header)

        details = QHBoxLayout()
        left = QFormLayout()
        self.bill_no_input = QLineEdit()
        self.bill_no_input.setReadOnly(True)
        self.customer_name = QLineEdit()
        self.customer_address = QPlainTextEdit()
        self.customer_address.setFixedHeight(50)
        self.customer_gstin = QLineEdit()
        left.addRow("Bill No:", self.bill_no_input)
        left.addRow("Customer Name:", self.customer_name)
        left.addRow("Address:", self.customer_address)
        left.addRow("GSTIN:", self.customer_gstin)

        right = QFormLayout()
        self.date_input = QDateEdit()
        self.date_input.setCalendarPopup(True)
        self.date_input.setDisplayFormat("dd/MM/yyyy")
        self.date_input.dateChanged.connect(self._on_date_changed)
        self.customer_state = QLineEdit()
        self.state_code = QLineEdit()
        right.addRow("Date:", self.date_input)
        right.addRow("State:", self.customer_state)
        right.addRow("State Code:", self.state_code)

        details.addLayout(left, 1)
        details.addLayout(right, 1)
        layout.addLayout(details)

        self.table = QTableWidget(0, len(ITEM_HEADERS))
        self.table.setHorizontalHeaderLabels(ITEM_HEADERS)
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.itemChanged.connect(self._on_item_changed)
        layout.addWidget(self.table, 1)

        row_buttons = QHBoxLayout()
        self.add_row_button = QPushButton("+ Add Row")
        self.add_row_button.clicked.connect(self._on_add_row)
        self.remove_row_button = QPushButton("Remove Row")
        self.remove_row_button.clicked.connect(self._on_remove_row)
        row_buttons.addWidget(self.add_row_button)
        row_buttons.addWidget(self.remove_row_button)
        row_buttons.addStretch()
        layout.addLayout(row_buttons)

        bottom = QHBoxLayout()
        words_group = QGroupBox("Amount in Words")
        words_layout = QVBoxLayout()
        self.words_label = QLabel()
        self.words_label.setWordWrap(True)
        words_layout.addWidget(self.words_label)
        words_group.setLayout(words_layout)

        totals_group = QGroupBox("Totals")
        totals_layout = QGridLayout()
        self.net_label = QLabel("0.00")
        self.tax_inputs = {}
        self.tax_labels = {}
        totals_layout.addWidget(QLabel("Net Amount:"), 0, 0)
        totals_layout.addWidget(self.net_label, 0, 2, alignment=Qt.AlignRight)
        for row, kind in enumerate(("cgst", "sgst", "igst"), start=1):
            percent_input = QLineEdit()
            percent_input.setFixedWidth(60)
            percent_input.textChanged.connect(lambda text, kind=kind: self._on_tax_changed(kind, text))
            amount_label = QLabel("0.00")
            totals_layout.addWidget(QLabel(f"{kind.upper()} @ %:"), row, 0)
            totals_layout.addWidget(percent_input, row, 1)
            totals_layout.addWidget(amount_label, row, 2, alignment=Qt.AlignRight)
            self.tax_inputs[kind] = percent_input
            self.tax_labels[kind] = amount_label

        self.total_label = QLabel("0.00")
        total_font = QFont()
        total_font.setPointSize(14)
        total_font.setBold(True)
        self.total_label.setFont(total_font)
        totals_layout.addWidget(QLabel("TOTAL AMOUNT:"), 4, 0)
        totals_layout.addWidget(self.total_label, 4, 2, alignment=Qt.AlignRight)
        totals_group.setLayout(totals_layout)

        bottom.addWidget(words_group, 1)
        bottom.addWidget(totals_group, 1)
        layout.addLayout(bottom)

        buttons = QHBoxLayout()
        buttons.addStretch()
        self.save_button = QPushButton("Save Bill")
        self.save_button.clicked.connect(self._on_save)
        self.cancel_button = QPushButton("Cancel")
        self.cancel_button.clicked.connect(self.reject)
        buttons.addWidget(self.save_button)
        buttons.addWidget(self.cancel_button)
        layout.addLayout(buttons)

        self.setLayout(layout)

    def _load_fields(self) -> None:
        bill = self.editor.bill
        self._refreshing = True
        try:
            self.bill_no_input.setText(bill.bill_no)
            self.customer_name.setText(bill.customer_name)
            self.customer_address.setPlainText(bill.customer_address)
            self.customer_gstin.setText(bill.customer_gstin)
            self.customer_state.setText(bill.customer_state)
            self.state_code.setText(bill.state_code)
            date = QDate.fromString(bill.date, "yyyy-MM-dd")
            self.date_input.setDate(date if date.isValid() else QDate.currentDate())
            for kind, percent_input in self.tax_inputs.items():
                percent_input.setText(getattr(bill, f"{kind}_percent"))
        finally:
            self._refreshing = False

    def _read_only_cell(self, text: str, align: int = Qt.AlignCenter) -> QTableWidgetItem:
        cell = QTableWidgetItem(text)
        cell.setFlags(cell.flags() & ~Qt.ItemIsEditable)
        cell.setTextAlignment(align | Qt.AlignVCenter)
        return cell

    def _refresh_items(self) -> None:
        items = self.editor.bill.items
        self._refreshing = True
        try:
            self.table.setRowCount(len(items))
            for row, item in enumerate(items):
                self.table.setItem(row, 0, self._read_only_cell(str(row + 1)))
                self.table.setItem(row, COL_DESCRIPTION, QTableWidgetItem(item.description))
                self.table.setItem(row, COL_QTY, QTableWidgetItem(format_number(item.quantity)))
                self.table.setItem(row, COL_RATE, QTableWidgetItem(format_number(item.rate)))
                self.table.setItem(row, COL_AMOUNT, self._read_only_cell(item.amount, Qt.AlignRight))
            self.table.resizeColumnsToContents()
            self.table.horizontalHeader().setStretchLastSection(True)
        finally:
            self._refreshing = False
        self.remove_row_button.setEnabled(len(items) > 1)

    def _refresh_totals(self) -> None:
        bill = self.editor.bill
        self._refreshing = True
        try:
            for row, item in enumerate(bill.items):
                self.table.setItem(row, COL_AMOUNT, self._read_only_cell(item.amount, Qt.AlignRight))
        finally:
            self._refreshing = False
        self.net_label.setText(bill.net_amount)
        for kind, label in self.tax_labels.items():
            label.setText(getattr(bill, f"{kind}_amount"))
        self.total_label.setText(bill.total_amount)
        self.words_label.setText(bill.amount_in_words)

    def _on_item_changed(self, cell: QTableWidgetItem) -> None:
        if self._refreshing:
            return
        row, column = cell.row(), cell.column()
        if column == COL_DESCRIPTION:
            self.editor.set_item(row, description=cell.text())
        elif column == COL_QTY:
            self.editor.set_item(row, quantity=cell.text())
        elif column == COL_RATE:
            self.editor.set_item(row, rate=cell.text())
        else:
            return
        self._refresh_totals()

    def _on_date_changed(self, date: QDate) -> None:
        if not self._refreshing:
            self.editor.set_date(date.toString("yyyy-MM-dd"))

    def _on_tax_changed(self, kind: str, text: str) -> None:
        if self._refreshing:
            return
        self.editor.set_tax(kind, text)
        self._refresh_totals()

    def _on_add_row(self) -> None:
        row = self.editor.add_item()
        self._refresh_items()
        self._refresh_totals()
        self.table.setCurrentCell(row, COL_DESCRIPTION)

    def _on_remove_row(self) -> None:
        row = self.table.currentRow()
        if row < 0:
            row = len(self.editor.bill.items) - 1
        if self.editor.remove_item(row):
            self._refresh_items()
            self._refresh_totals()

    def _collect_customer(self) -> None:
        self.editor.set_customer(
            customer_name=self.customer_name.text(),
            customer_address=self.customer_address.toPlainText(),
            customer_gstin=self.customer_gstin.text(),
            customer_state=self.customer_state.text(),
            state_code=self.state_code.text(),
        )
        self.editor.set_date(self.date_input.date().toString("yyyy-MM-dd"))

    def _on_save(self) -> None:
        self._collect_customer()
        try:
            self.saved_bill = self.editor.save()
        except ValidationError as exc:
            QMessageBox.warning(self, "Missing details", str(exc))
            return
        except NotFoundError as exc:
            QMessageBox.warning(self, "Bill Not Found", str(exc))
            return
        except OSError as exc:
            QMessageBox.critical(self, "Storage Error", f"Could not save the bill:\n{exc}")
            return
        self.accept()
