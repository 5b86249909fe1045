"""Tests for purchase invoice line and footer recalculation."""

import pytest

from pharmacy_pos.formula.purchase_invoice import recalc_purchase_invoice_footer, recalc_purchase_invoice_item
from pharmacy_pos.models.documents import PurchaseInvoice
from pharmacy_pos.models.line_items import PurchaseInvoiceItem
from pharmacy_pos.models.values import BLANK, Numeric, as_text


# ============================================================================
# PACK / UNIT SYNC
# ============================================================================

class TestPackUnitSync:

    def test_pack_quantity_edit_sets_unit_quantity(self):
        item = PurchaseInvoiceItem(pack_size="10", pack_quantity="3")
        result = recalc_purchase_invoice_item(item, "pack_quantity")
        assert result.unit_quantity == 30.0
        assert result.pack_quantity == 3.0

    def test_unit_quantity_edit_sets_pack_quantity(self):
        item = PurchaseInvoiceItem(pack_size=10, unit_quantity="25")
        result = recalc_purchase_invoice_item(item, "unit_quantity")
        assert result.pack_quantity == 2.5

    def test_quantity_round_trip_is_idempotent(self):
        first = recalc_purchase_invoice_item(PurchaseInvoiceItem(pack_size=12, pack_quantity=7), "pack_quantity")
        second = recalc_purchase_invoice_item(first, "unit_quantity")
        assert second.pack_quantity == pytest.approx(7)
        assert second.unit_quantity == 84.0

    def test_purchase_price_sync_divides_and_multiplies(self):
        by_pack = recalc_purchase_invoice_item(
            PurchaseInvoiceItem(pack_size=12, pack_purchase_price="120"), "pack_purchase_price"
        )
        assert by_pack.unit_purchase_price == 10.0

        by_unit = recalc_purchase_invoice_item(
            PurchaseInvoiceItem(pack_size=12, unit_purchase_price="2.5"), "unit_purchase_price"
        )
        assert by_unit.pack_purchase_price == 30.0

    def test_sale_price_sync(self):
        by_pack = recalc_purchase_invoice_item(PurchaseInvoiceItem(pack_size=4, pack_sale_price=50), "pack_sale_price")
        assert by_pack.unit_sale_price == 12.5

        by_unit = recalc_purchase_invoice_item(PurchaseInvoiceItem(pack_size=4, unit_sale_price=3), "unit_sale_price")
        assert by_unit.pack_sale_price == 12.0

    def test_bonus_sync(self):
        by_pack = recalc_purchase_invoice_item(PurchaseInvoiceItem(pack_size=10, pack_bonus=1), "pack_bonus")
        assert by_pack.unit_bonus == 10.0

        by_unit = recalc_purchase_invoice_item(PurchaseInvoiceItem(pack_size=10, unit_bonus=5), "unit_bonus")
        assert by_unit.pack_bonus == 0.5

    def test_zero_pack_size_disables_sync(self):
        item = PurchaseInvoiceItem(pack_size="", pack_quantity=3, pack_purchase_price=90)
        result = recalc_purchase_invoice_item(item, "pack_quantity")
        assert result.unit_quantity == 0.0
        assert result.unit_purchase_price == 0.0

    def test_unrelated_edit_leaves_both_sides(self):
        item = PurchaseInvoiceItem(pack_size=10, pack_quantity=2, unit_quantity=7)
        result = recalc_purchase_invoice_item(item, "item_discount_percentage")
        assert (result.pack_quantity, result.unit_quantity) == (2.0, 7.0)


class TestPackSizeBackfill:

    def test_pack_size_edit_fills_empty_sides(self):
        item = PurchaseInvoiceItem(pack_size="12", pack_quantity=2, unit_purchase_price=5, unit_sale_price="")
        result = recalc_purchase_invoice_item(item, "pack_size")
        assert result.unit_quantity == 24.0
        assert result.pack_purchase_price == 60.0
        assert result.pack_sale_price == 0.0

    def test_pack_size_edit_never_overwrites_typed_values(self):
        item = PurchaseInvoiceItem(pack_size=10, pack_quantity=2, unit_quantity=7, pack_bonus=1, unit_bonus=3)
        result = recalc_purchase_invoice_item(item, "pack_size")
        assert (result.pack_quantity, result.unit_quantity) == (2.0, 7.0)
        assert (result.pack_bonus, result.unit_bonus) == (1.0, 3.0)


# ============================================================================
# TOTALS, AVERAGE COST AND MARGIN
# ============================================================================

class TestLineTotals:

    def test_documented_scenario(self):
        item = PurchaseInvoiceItem(pack_size=10, pack_quantity=5, unit_purchase_price=20, item_discount_percentage=10)
        result = recalc_purchase_invoice_item(item)

        assert result.total_units == 50
        assert result.quantity == 50
        assert result.sub_total_before_discount == 1000
        assert result.discount_amount == 100
        assert result.sub_total == 900
        assert result.avg_price == 18

    def test_sub_total_formula_with_loose_and_bonus_units(self):
        item = PurchaseInvoiceItem(
            pack_size=6,
            pack_quantity=2,
            unit_quantity=3,
            unit_bonus=1,
            unit_purchase_price=4.5,
            item_discount_percentage=12.5,
        )
        result = recalc_purchase_invoice_item(item)

        expected = (2 * 6 + 3 + 1) * 4.5 * (1 - 12.5 / 100)
        assert result.sub_total == pytest.approx(expected)
        assert result.quantity == 16

    def test_bonus_units_count_towards_quantity(self):
        item = PurchaseInvoiceItem(pack_size=10, unit_quantity=10, pack_bonus=1, unit_purchase_price=9)
        with_bonus = recalc_purchase_invoice_item(item, "pack_bonus")
        assert with_bonus.unit_bonus == 10
        assert with_bonus.quantity == 20

    def test_no_units_means_zero_average(self):
        result = recalc_purchase_invoice_item(PurchaseInvoiceItem(unit_purchase_price=12))
        assert result.avg_price == 0.0
        assert result.sub_total == 0.0

    def test_blank_line_recalculates_without_error(self):
        result = recalc_purchase_invoice_item(PurchaseInvoiceItem())
        assert result.sub_total == 0.0
        assert result.margin is BLANK

    def test_input_is_not_mutated(self):
        item = PurchaseInvoiceItem(pack_size="10", pack_quantity="5")
        result = recalc_purchase_invoice_item(item, "pack_quantity")
        assert result is not item
        assert item.unit_quantity == ""


class TestMargin:

    def test_margin_over_purchase_price(self):
        item = PurchaseInvoiceItem(unit_purchase_price=20, unit_sale_price=25)
        result = recalc_purchase_invoice_item(item)
        assert result.margin == Numeric(25.0)
        assert as_text(result.margin) == "25.00"

    def test_negative_margin(self):
        item = PurchaseInvoiceItem(unit_purchase_price=20, unit_sale_price=15)
        assert recalc_purchase_invoice_item(item).margin == Numeric(-25.0)

    def test_margin_rounded_to_two_decimals(self):
        item = PurchaseInvoiceItem(unit_purchase_price=3, unit_sale_price=4)
        assert recalc_purchase_invoice_item(item).margin == Numeric(33.33)

    @pytest.mark.parametrize("purchase, sale", [(0, 25), ("", 25), (20, 0), (20, "")])
    def test_margin_blank_without_both_prices(self, purchase, sale):
        item = PurchaseInvoiceItem(unit_purchase_price=purchase, unit_sale_price=sale)
        result = recalc_purchase_invoice_item(item)
        assert result.margin is BLANK
        assert as_text(result.margin) == ""


# ============================================================================
# FOOTER
# ============================================================================

class TestPurchaseInvoiceFooter:

    def test_footer_sums_line_sub_totals(self):
        lines = (
            recalc_purchase_invoice_item(PurchaseInvoiceItem(unit_quantity=10, unit_purchase_price=12.5)),
            recalc_purchase_invoice_item(PurchaseInvoiceItem(unit_quantity=3, unit_purchase_price=7)),
        )
        result = recalc_purchase_invoice_footer(PurchaseInvoice(items=lines), "items")
        assert result.gross_total == 146.0
        assert result.total == 146.0

    def test_discount_then_tax(self):
        lines = (PurchaseInvoiceItem(sub_total=1000),)
        invoice = recalc_purchase_invoice_footer(
            PurchaseInvoice(items=lines, discount_percentage="5"), "discount_percentage"
        )
        assert invoice.discount_amount == 50.0

        invoice = recalc_purchase_invoice_footer(
            PurchaseInvoice(items=lines, discount_percentage=5, discount_amount=50, tax_percentage="17"),
            "tax_percentage",
        )
        assert invoice.tax_amount == 161.5
        assert invoice.total == 1111.5
