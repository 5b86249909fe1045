"""Main PyQt window: purchase invoice entry driven by the recalculation core."""

from __future__ import annotations

import logging
from typing import Dict, List, Optional

from PyQt5.QtCore import Qt
from PyQt5.QtGui import QFont
from PyQt5.QtWidgets import (
    QAbstractItemView,
    QCompleter,
    QFormLayout,
    QGridLayout,
    QGroupBox,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QMessageBox,
    QPushButton,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from pharmacy_pos import config
from pharmacy_pos.data.catalog_repo import ExcelCatalogRepository
from pharmacy_pos.exceptions import DocumentValidationError
from pharmacy_pos.formula.editing import add_line, remove_line, select_product, update_header, update_line
from pharmacy_pos.models.documents import PurchaseInvoice
from pharmacy_pos.models.product import Product
from pharmacy_pos.models.records import to_record
from pharmacy_pos.models.values import as_text
from pharmacy_pos.stock import ProductStock, apply_purchase
from pharmacy_pos.validation import validate_purchase_invoice

logger = logging.getLogger(__name__)

# (field, header, editable)
COLUMNS = [
    ("product_id", "Product", False),
    ("batch", "Batch", True),
    ("expiry", "Expiry", True),
    ("pack_size", "Pack Size", True),
    ("pack_quantity", "Pack Qty", True),
    ("unit_quantity", "Unit Qty", True),
    ("pack_purchase_price", "Pack P.Price", True),
    ("unit_purchase_price", "Unit P.Price", True),
    ("pack_sale_price", "Pack S.Price", True),
    ("unit_sale_price", "Unit S.Price", True),
    ("pack_bonus", "Pack Bonus", True),
    ("unit_bonus", "Unit Bonus", True),
    ("item_discount_percentage", "Disc %", True),
    ("quantity", "Qty", False),
    ("sub_total", "Sub Total", False),
    ("avg_price", "Avg", False),
    ("margin", "Margin %", False),
]

HEADER_FIELDS = ["discount_percentage", "discount_amount", "tax_percentage", "tax_amount"]


class MainWindow(QMainWindow):
    """UI controller that ties together the catalog, the invoice form and the core."""

    def __init__(self) -> None:
        super().__init__()
        self.setWindowTitle(config.WINDOW_TITLE)
        self.resize(1300, 650)

        self.repo: Optional[ExcelCatalogRepository] = None
        self.products_by_name: Dict[str, Product] = {}
        self.invoice = PurchaseInvoice()
        self.stock: Dict[str, ProductStock] = {}
        self._refreshing = False

        self._build_ui()
        self._load_catalog()
        self._refresh()

    def _build_ui(self) -> None:
        """Construct all widgets and layouts."""
        central = QWidget()
        root_layout = QVBoxLayout()

        # Product search
        search_layout = QHBoxLayout()
        self.search_input = QLineEdit()
        self.search_input.setPlaceholderText("Search product name...")
        self.search_input.returnPressed.connect(self._on_search_enter)
        search_layout.addWidget(QLabel("Product:"))
        search_layout.addWidget(self.search_input, 1)

        self.add_button = QPushButton("Add Line")
        self.add_button.clicked.connect(self._on_add_line)
        self.remove_button = QPushButton("Remove Line")
        self.remove_button.clicked.connect(self._on_remove_line)
        search_layout.addWidget(self.add_button)
        search_layout.addWidget(self.remove_button)

        # Lines
        self.table = QTableWidget(0, len(COLUMNS))
        self.table.setHorizontalHeaderLabels([header for _, header, _ in COLUMNS])
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.cellChanged.connect(self._on_cell_changed)

        # Footer
        footer_layout = QHBoxLayout()

        header_group = QGroupBox("Invoice")
        header_form = QFormLayout()
        self.invoice_amount_input = QLineEdit()
        self.invoice_amount_input.textEdited.connect(self._on_invoice_amount_edited)
        header_form.addRow("Invoice Amount", self.invoice_amount_input)
        header_group.setLayout(header_form)

        totals_group = QGroupBox("Totals")
        totals_layout = QGridLayout()
        self.gross_value = QLabel("0.00")
        self.header_inputs: Dict[str, QLineEdit] = {}
        totals_layout.addWidget(QLabel("Gross"), 0, 0)
        totals_layout.addWidget(self.gross_value, 0, 1)
        labels = ["Discount %", "Discount", "Tax %", "Tax"]
        for row, (name, label) in enumerate(zip(HEADER_FIELDS, labels), start=1):
            edit = QLineEdit()
            edit.textEdited.connect(lambda text, field_name=name: self._on_header_edited(field_name, text))
            self.header_inputs[name] = edit
            totals_layout.addWidget(QLabel(label), row, 0)
            totals_layout.addWidget(edit, row, 1)

        self.total_value = QLabel("0.00")
        total_font = QFont()
        total_font.setPointSize(16)
        total_font.setBold(True)
        self.total_value.setFont(total_font)
        totals_layout.addWidget(QLabel("Total"), len(HEADER_FIELDS) + 1, 0)
        totals_layout.addWidget(self.total_value, len(HEADER_FIELDS) + 1, 1)
        totals_group.setLayout(totals_layout)

        self.post_button = QPushButton("POST")
        self.post_button.setStyleSheet("font-size: 16px; padding: 10px;")
        self.post_button.clicked.connect(self._on_post_clicked)

        footer_layout.addWidget(header_group)
        footer_layout.addWidget(totals_group)
        footer_layout.addWidget(self.post_button, alignment=Qt.AlignBottom)

        root_layout.addLayout(search_layout)
        root_layout.addWidget(self.table, 1)
        root_layout.addLayout(footer_layout)

        central.setLayout(root_layout)
        self.setCentralWidget(central)

    def _load_catalog(self) -> None:
        """Load products from Excel and configure completer."""
        self.repo = None
        try:
            self.repo = ExcelCatalogRepository()
            products = self.repo.list_products()
        except Exception as exc:  # noqa: BLE001 - surface Excel issues to user
            logger.exception("Failed to load product catalog")
            QMessageBox.critical(self, "Error", f"Failed to load product catalog:\n{exc}")
            products = []

        self.products_by_name = {p.name: p for p in products}
        completer = QCompleter(list(self.products_by_name.keys()))
        completer.setCaseSensitivity(Qt.CaseInsensitive)
        completer.setFilterMode(Qt.MatchContains)
        completer.setCompletionMode(QCompleter.PopupCompletion)
        completer.activated[str].connect(self._on_product_selected)
        self.search_input.setCompleter(completer)

    def _current_row(self) -> int:
        row = self.table.currentRow()
        return row if row >= 0 else len(self.invoice.items) - 1

    def _on_search_enter(self) -> None:
        text = self.search_input.text().strip()
        if not text:
            return
        product = self.products_by_name.get(text) or (self.repo.find_by_name(text) if self.repo else None)
        if not product:
            QMessageBox.information(self, "Not found", "Product not found in catalog.")
            return
        self._on_product_selected(product.name)

    def _on_product_selected(self, name: str) -> None:
        product = self.products_by_name.get(name)
        if not product:
            return
        self.invoice = select_product(self.invoice, self._current_row(), product)
        self.search_input.clear()
        self._refresh()

    def _on_add_line(self) -> None:
        self.invoice = add_line(self.invoice)
        self._refresh()
        self.table.setCurrentCell(len(self.invoice.items) - 1, 0)

    def _on_remove_line(self) -> None:
        self.invoice = remove_line(self.invoice, self._current_row())
        self._refresh()

    def _on_cell_changed(self, row: int, column: int) -> None:
        if self._refreshing:
            return
        field_name, _, editable = COLUMNS[column]
        if not editable:
            return
        text = self.table.item(row, column).text()
        self.invoice = update_line(self.invoice, row, field_name, text)
        self._refresh(keep_cell=(row, column))

    def _on_header_edited(self, field_name: str, text: str) -> None:
        self.invoice = update_header(self.invoice, field_name, text)
        self._refresh(keep_header=field_name)

    def _on_invoice_amount_edited(self, text: str) -> None:
        self.invoice = update_header(self.invoice, "invoice_amount", text)

    def _refresh(self, keep_cell: Optional[tuple] = None, keep_header: Optional[str] = None) -> None:
        """Re-render the form from ``self.invoice``; the cell being typed in is left alone."""
        self._refreshing = True
        try:
            self.table.setRowCount(len(self.invoice.items))
            for row, line in enumerate(self.invoice.items):
                for column, (field_name, _, editable) in enumerate(COLUMNS):
                    if keep_cell == (row, column):
                        continue
                    cell = QTableWidgetItem(as_text(getattr(line, field_name)))
                    if not editable:
                        cell.setFlags(cell.flags() & ~Qt.ItemIsEditable)
                    self.table.setItem(row, column, cell)

            for name, edit in self.header_inputs.items():
                if name != keep_header:
                    edit.setText(as_text(getattr(self.invoice, name)))
            self.gross_value.setText(as_text(self.invoice.gross_total))
            self.total_value.setText(as_text(self.invoice.total))
        finally:
            self._refreshing = False

    def _on_post_clicked(self) -> None:
        try:
            validate_purchase_invoice(self.invoice)
        except DocumentValidationError as exc:
            QMessageBox.warning(self, "Cannot post invoice", "\n".join(exc.errors))
            return

        self._apply_stock(self.invoice.items)
        logger.info("Posted purchase invoice: %s", to_record(self.invoice))
        QMessageBox.information(self, "Posted", "Purchase invoice posted and stock updated.")
        self._reset_invoice()

    def _apply_stock(self, lines: List) -> None:
        for line in lines:
            if line.product_id in (None, ""):
                continue
            key = str(line.product_id)
            self.stock[key] = apply_purchase(self.stock.get(key, ProductStock()), line)
            logger.info(
                "Stock for product %s: quantity=%s avg_price=%.2f margin=%.2f%%",
                key,
                self.stock[key].quantity,
                self.stock[key].avg_price,
                self.stock[key].margin,
            )

    def _reset_invoice(self) -> None:
        self.invoice = PurchaseInvoice()
        self.invoice_amount_input.clear()
        self._refresh()
