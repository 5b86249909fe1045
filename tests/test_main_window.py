"""Tests for the stock bookkeeping done when the entry form posts an invoice."""

import logging
from types import SimpleNamespace

import pytest

pytest.importorskip("PyQt5.QtWidgets")

from pharmacy_pos.models.line_items import PurchaseInvoiceItem  # noqa: E402
from pharmacy_pos.stock import ProductStock  # noqa: E402
from pharmacy_pos.ui.main_window import MainWindow  # noqa: E402


class TestApplyStock:

    def test_posted_lines_update_and_log_stock(self, caplog):
        window = SimpleNamespace(stock={"7": ProductStock(quantity=10, avg_price=8, unit_sale_price=12)})
        lines = [
            PurchaseInvoiceItem(product_id=7, quantity=10, avg_price=10),
            PurchaseInvoiceItem(),
        ]

        with caplog.at_level(logging.INFO, logger="pharmacy_pos.ui.main_window"):
            MainWindow._apply_stock(window, lines)

        assert window.stock == {"7": ProductStock(quantity=20, avg_price=9.0, unit_sale_price=12, margin=25.0)}
        assert "Stock for product 7: quantity=20.0 avg_price=9.00 margin=25.00%" in caplog.text
