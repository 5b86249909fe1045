"""Tests for form-level edits and product selection."""

import pytest

from pharmacy_pos.formula.editing import (
    add_line,
    apply_product_defaults,
    formulas_for,
    remove_line,
    select_product,
    update_header,
    update_line,
)
from pharmacy_pos.models.documents import PurchaseInvoice, PurchaseReturn, SaleInvoice, SaleReturn
from pharmacy_pos.models.line_items import PurchaseInvoiceItem, SaleInvoiceItem, SaleReturnItem
from pharmacy_pos.models.records import to_record
from pharmacy_pos.models.values import BLANK, Numeric


class TestUpdateLine:

    def test_line_edit_recalculates_line_and_footer(self):
        invoice = PurchaseInvoice()
        invoice = update_line(invoice, 0, "unit_quantity", "10")
        invoice = update_line(invoice, 0, "unit_purchase_price", "12.5")

        line = invoice.items[0]
        assert line.sub_total == 125.0
        assert invoice.gross_total == 125.0
        assert invoice.total == 125.0

    def test_footer_tracks_synced_line(self):
        invoice = PurchaseInvoice()
        for field_name, value in [("pack_size", "10"), ("pack_quantity", "2"), ("pack_purchase_price", "30")]:
            invoice = update_line(invoice, 0, field_name, value)

        line = invoice.items[0]
        assert line.unit_quantity == 20.0
        assert line.unit_purchase_price == 3.0
        assert invoice.gross_total == round(line.sub_total, 2)

    def test_purchase_return_keeps_typed_text(self):
        document = update_line(PurchaseReturn(), 0, "pack_purchase_price", "12.")
        assert document.items[0].pack_purchase_price == "12."

    def test_original_document_is_untouched(self):
        invoice = PurchaseInvoice()
        updated = update_line(invoice, 0, "unit_quantity", "4")
        assert invoice.items[0].unit_quantity == ""
        assert updated is not invoice


class TestUpdateHeader:

    def test_header_edit_drives_its_pair(self):
        invoice = update_line(PurchaseInvoice(), 0, "unit_quantity", "10")
        invoice = update_line(invoice, 0, "unit_purchase_price", "20")
        invoice = update_header(invoice, "discount_percentage", "10")

        assert invoice.discount_amount == 20.0
        assert invoice.total == 180.0

    def test_sale_invoice_header_blank_convention(self):
        invoice = update_line(SaleInvoice(), 0, "quantity", "2")
        invoice = update_line(invoice, 0, "price", "50")
        invoice = update_header(invoice, "discount_amount", "")

        assert invoice.discount_percentage is BLANK
        assert invoice.total == 100.0


class TestLines:

    def test_add_and_remove(self):
        document = add_line(SaleInvoice())
        assert len(document.items) == 2
        assert isinstance(document.items[1], SaleInvoiceItem)

        document = update_line(document, 1, "quantity", "1")
        document = update_line(document, 1, "price", "40")
        assert document.total == 40.0

        document = remove_line(document, 1)
        assert len(document.items) == 1
        assert document.total == 0.0

    def test_removing_last_line_clears_it(self):
        document = update_line(SaleReturn(), 0, "unit_return_quantity", "3")
        document = remove_line(document, 0)
        assert document.items == (SaleReturnItem(),)

    def test_unknown_document_type(self):
        with pytest.raises(TypeError):
            formulas_for(object())


class TestProductDefaults:

    def test_purchase_line_gets_pack_size_and_prices(self, panadol):
        line = apply_product_defaults(PurchaseInvoiceItem(unit_quantity=20), panadol)

        assert line.product_id == "1"
        assert line.pack_size == 10
        assert line.unit_purchase_price == 10.0
        assert line.unit_sale_price == 15.0
        assert line.margin == Numeric(50.0)
        assert line.sub_total == 200.0

    def test_sale_line_gets_unit_price(self, panadol):
        line = apply_product_defaults(SaleInvoiceItem(quantity=2), panadol)
        assert line.price == 15.0
        assert line.sub_total == 30.0

    def test_select_product_recalculates_footer(self, panadol):
        document = select_product(SaleInvoice(items=(SaleInvoiceItem(quantity=4),)), 0, panadol)
        assert document.items[0].product_id == "1"
        assert document.gross_amount == 60.0


class TestRecords:

    def test_record_uses_plain_values(self):
        invoice = update_line(PurchaseInvoice(), 0, "unit_quantity", "2")
        record = to_record(invoice)

        assert record["items"][0]["margin"] == ""
        assert record["items"][0]["unit_quantity"] == 2.0
        assert record["total"] == 0.0

    def test_numeric_values_are_unwrapped(self):
        invoice = SaleInvoice(items=(SaleInvoiceItem(quantity=1, price=100),))
        invoice = update_header(invoice, "discount_percentage", "10")
        record = to_record(invoice)

        assert record["discount_amount"] == 10.0
        assert record["tax_amount"] == ""
