"""Purchase invoice recalculation.

A purchase line is entered in packs or units, with free bonus stock on top.
The line reports the landed unit cost (``avg_price``) and the markup of the
unit sale price over the unit purchase price (``margin``).
"""

from typing import Optional

from pharmacy_pos.formula import rules
from pharmacy_pos.formula.engine import recalc_footer, recalc_item
from pharmacy_pos.models.documents import PurchaseInvoice
from pharmacy_pos.models.line_items import PurchaseInvoiceItem


def recalc_purchase_invoice_item(
    item: PurchaseInvoiceItem, changed_field: Optional[str] = None
) -> PurchaseInvoiceItem:
    return recalc_item(rules.PURCHASE_INVOICE_LINE, item, changed_field)


def recalc_purchase_invoice_footer(
    invoice: PurchaseInvoice, changed_field: Optional[str] = None
) -> PurchaseInvoice:
    """Footer totals use the same clamped discount/tax rules as purchase returns."""
    return recalc_footer(rules.PURCHASE_INVOICE_FOOTER, invoice, changed_field)
