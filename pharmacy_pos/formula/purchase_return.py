"""Purchase return recalculation.

The field being typed into is echoed back untouched so partial input such
as ``"34."`` survives the round trip through the form.
"""

from typing import Optional

from pharmacy_pos.formula import rules
from pharmacy_pos.formula.engine import recalc_footer, recalc_item
from pharmacy_pos.models.documents import PurchaseReturn
from pharmacy_pos.models.line_items import PurchaseReturnItem


def recalc_purchase_return_item(
    item: PurchaseReturnItem, changed_field: Optional[str] = None
) -> PurchaseReturnItem:
    return recalc_item(rules.PURCHASE_RETURN_LINE, item, changed_field)


def recalc_purchase_return_footer(
    purchase_return: PurchaseReturn, changed_field: Optional[str] = None
) -> PurchaseReturn:
    return recalc_footer(rules.PURCHASE_RETURN_FOOTER, purchase_return, changed_field)
