"""Sale invoice recalculation (unit based, no pack/unit duality)."""

from typing import Optional

from pharmacy_pos.formula import rules
from pharmacy_pos.formula.engine import recalc_footer, recalc_item
from pharmacy_pos.models.documents import SaleInvoice
from pharmacy_pos.models.line_items import SaleInvoiceItem


def recalc_sale_invoice_item(item: SaleInvoiceItem, changed_field: Optional[str] = None) -> SaleInvoiceItem:
    return recalc_item(rules.SALE_INVOICE_LINE, item, changed_field)


def recalc_sale_invoice_footer(invoice: SaleInvoice, changed_field: Optional[str] = None) -> SaleInvoice:
    """Header percentages and amounts come back as BLANK when they are zero."""
    return recalc_footer(rules.SALE_INVOICE_FOOTER, invoice, changed_field)
