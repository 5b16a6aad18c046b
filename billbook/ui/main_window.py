"""Main PyQt window for the GST Bill Book."""

from __future__ import annotations

from typing import Optional

from PyQt5.QtCore import Qt
from PyQt5.QtGui import QFont
from PyQt5.QtWidgets import (
    QAbstractItemView,
    QFileDialog,
    QHBoxLayout,
    QLabel,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from billbook.calculator import format_display_date, format_inr
from billbook.data.excel_register import export_register
from billbook.data_store import BillStore
from billbook.editor import BillEditor
from billbook.errors import NotFoundError
from billbook.ui.bill_form import BillFormDialog
from billbook.ui.bill_view import BillViewDialog

LIST_HEADERS = ["Bill No.", "Date", "Customer", "Total Amount"]


class MainWindow(QMainWindow):
    """Saved-bills list with the create, view, edit and delete commands."""

    def __init__(self, store: BillStore) -> None:
        super().__init__()
        self.store = store
        self.setWindowTitle("B.S. Dyeing - Bill Management System")
        self.setMinimumSize(900, 600)

        self._build_ui()
        self._refresh_table()

    def _build_ui(self) -> None:
        central = QWidget()
        root_layout = QVBoxLayout()

        header_layout = QHBoxLayout()
        title = QLabel("B.S. Dyeing - Bill Management System")
        title_font = QFont()
        title_font.setPointSize(16)
        title_font.setBold(True)
        title.setFont(title_font)
        self.new_button = QPushButton("+ New Bill")
        self.new_button.clicked.connect(self._on_new_clicked)
        header_layout.addWidget(title, 1)
        header_layout.addWidget(self.new_button)

        self.empty_label = QLabel("No Saved Bills\nClick + New Bill to create your first bill")
        self.empty_label.setAlignment(Qt.AlignCenter)

        self.table = QTableWidget(0, len(LIST_HEADERS))
        self.table.setHorizontalHeaderLabels(LIST_HEADERS)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SingleSelection)
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.doubleClicked.connect(lambda _index: self._on_view_clicked())

        actions = QHBoxLayout()
        self.view_button = QPushButton("View")
        self.view_button.clicked.connect(self._on_view_clicked)
        self.edit_button = QPushButton("Edit")
        self.edit_button.clicked.connect(self._on_edit_clicked)
        self.delete_button = QPushButton("Delete")
        self.delete_button.clicked.connect(self._on_delete_clicked)
        self.export_button = QPushButton("Export to Excel")
        self.export_button.clicked.connect(self._on_export_clicked)
        actions.addWidget(self.view_button)
        actions.addWidget(self.edit_button)
        actions.addWidget(self.delete_button)
        actions.addStretch()
        actions.addWidget(self.export_button)

        root_layout.addLayout(header_layout)
        root_layout.addWidget(QLabel("Saved Bills"))
        root_layout.addWidget(self.empty_label)
        root_layout.addWidget(self.table, 1)
        root_layout.addLayout(actions)

        central.setLayout(root_layout)
        self.setCentralWidget(central)

    def _refresh_table(self) -> None:
        bills = self.store.bills
        self.table.setRowCount(len(bills))
        for row, bill in enumerate(bills):
            values = [
                bill.bill_no,
                format_display_date(bill.date),
                bill.customer_name,
                format_inr(bill.total_amount),
            ]
            for col, value in enumerate(values):
                cell = QTableWidgetItem(value)
                cell.setData(Qt.UserRole, bill.id)
                self.table.setItem(row, col, cell)
        self.table.resizeColumnsToContents()
        self.table.horizontalHeader().setStretchLastSection(True)

        has_bills = bool(bills)
        self.empty_label.setVisible(not has_bills)
        self.table.setVisible(has_bills)
        for button in (self.view_button, self.edit_button, self.delete_button, self.export_button):
            button.setEnabled(has_bills)

    def _selected_bill_id(self) -> Optional[str]:
        row = self.table.currentRow()
        cell = self.table.item(row, 0) if row >= 0 else None
        if cell is None:
            QMessageBox.information(self, "Select bill", "Please select a bill first.")
            return None
        return cell.data(Qt.UserRole)

    def _open_form(self, editor: BillEditor) -> None:
        dialog = BillFormDialog(editor, self)
        if dialog.exec_() == BillFormDialog.Accepted:
            self._refresh_table()

    def _on_new_clicked(self) -> None:
        self._open_form(BillEditor.new(self.store))

    def _edit_bill(self, bill_id: str) -> None:
        try:
            editor = BillEditor.edit(self.store, bill_id)
        except NotFoundError as exc:
            QMessageBox.warning(self, "Bill Not Found", str(exc))
            self._refresh_table()
            return
        self._open_form(editor)

    def _on_edit_clicked(self) -> None:
        bill_id = self._selected_bill_id()
        if bill_id:
            self._edit_bill(bill_id)

    def _on_view_clicked(self) -> None:
        bill_id = self._selected_bill_id()
        if not bill_id:
            return
        bill = self.store.get(bill_id)
        if bill is None:
            QMessageBox.warning(self, "Bill Not Found", "The requested bill could not be found.")
            self._refresh_table()
            return
        dialog = BillViewDialog(bill, self)
        dialog.exec_()
        if dialog.edit_requested:
            self._edit_bill(bill_id)

    def _on_delete_clicked(self) -> None:
        bill_id = self._selected_bill_id()
        if not bill_id:
            return
        answer = QMessageBox.question(
            self,
            "Delete Bill",
            "Are you sure you want to delete this bill? This action cannot be undone.",
            QMessageBox.Yes | QMessageBox.Cancel,
            QMessageBox.Cancel,
        )
        if answer != QMessageBox.Yes:
            return
        try:
            self.store.remove(bill_id)
        except OSError as exc:
            QMessageBox.critical(self, "Storage Error", f"Could not delete the bill:\n{exc}")
            return
        self._refresh_table()

    def _on_export_clicked(self) -> None:
        path, _ = QFileDialog.getSaveFileName(
            self, "Export Bill Register", "bill_register.xlsx", "Excel Workbook (*.xlsx)"
        )
        if not path:
            return
        try:
            export_register(self.store.bills, path)
        except OSError as exc:
            QMessageBox.critical(self, "Excel Error", f"Failed to export bills:\n{exc}")
            return
        QMessageBox.information(self, "Exported", f"Bill register saved to {path}.")
