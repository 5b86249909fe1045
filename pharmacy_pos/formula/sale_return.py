"""Sale return recalculation.

Header discount and tax are entered as percentages only; their amounts are
always derived.
"""

from typing import Optional

from pharmacy_pos.formula import rules
from pharmacy_pos.formula.engine import recalc_footer, recalc_item
from pharmacy_pos.models.documents import SaleReturn
from pharmacy_pos.models.line_items import SaleReturnItem


def recalc_sale_return_item(item: SaleReturnItem, changed_field: Optional[str] = None) -> SaleReturnItem:
    return recalc_item(rules.SALE_RETURN_LINE, item, changed_field)


def recalc_sale_return_footer(sale_return: SaleReturn, changed_field: Optional[str] = None) -> SaleReturn:
    return recalc_footer(rules.SALE_RETURN_FOOTER, sale_return, changed_field)
