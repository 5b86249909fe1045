"""Form-level edits: one user action in, one fully recalculated document out.

The UI never patches a document in place. Each helper returns a new
document with the touched line and the footer recalculated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, fields, replace
from typing import Any, Callable, Dict, Optional, Type

from pharmacy_pos.formula.purchase_invoice import recalc_purchase_invoice_footer, recalc_purchase_invoice_item
from pharmacy_pos.formula.purchase_return import recalc_purchase_return_footer, recalc_purchase_return_item
from pharmacy_pos.formula.sale_invoice import recalc_sale_invoice_footer, recalc_sale_invoice_item
from pharmacy_pos.formula.sale_return import recalc_sale_return_footer, recalc_sale_return_item
from pharmacy_pos.models.documents import PurchaseInvoice, PurchaseReturn, SaleInvoice, SaleReturn
from pharmacy_pos.models.line_items import (
    PurchaseInvoiceItem,
    PurchaseReturnItem,
    SaleInvoiceItem,
    SaleReturnItem,
)
from pharmacy_pos.models.product import Product

logger = logging.getLogger(__name__)

# Passed as changed_field to the footer after a line edit.
ITEMS_CHANGED = "items"


@dataclass(frozen=True)
class DocumentFormulas:
    item_type: Type
    recalc_item: Callable[[Any, Optional[str]], Any]
    recalc_footer: Callable[[Any, Optional[str]], Any]


FORMULAS: Dict[Type, DocumentFormulas] = {
    PurchaseInvoice: DocumentFormulas(PurchaseInvoiceItem, recalc_purchase_invoice_item, recalc_purchase_invoice_footer),
    PurchaseReturn: DocumentFormulas(PurchaseReturnItem, recalc_purchase_return_item, recalc_purchase_return_footer),
    SaleInvoice: DocumentFormulas(SaleInvoiceItem, recalc_sale_invoice_item, recalc_sale_invoice_footer),
    SaleReturn: DocumentFormulas(SaleReturnItem, recalc_sale_return_item, recalc_sale_return_footer),
}


def formulas_for(document: Any) -> DocumentFormulas:
    try:
        return FORMULAS[type(document)]
    except KeyError:
        raise TypeError(f"No formulas registered for {type(document).__name__}") from None


def replace_line(document: Any, index: int, line: Any) -> Any:
    """Swap one line for an already recalculated one and refresh the footer."""
    formulas = formulas_for(document)
    items = list(document.items)
    items[index] = line
    return formulas.recalc_footer(replace(document, items=tuple(items)), ITEMS_CHANGED)


def update_line(document: Any, index: int, field_name: str, value: Any) -> Any:
    """Set one field on one line and recalculate the line and the footer."""
    formulas = formulas_for(document)
    line = replace(document.items[index], **{field_name: value})
    logger.debug("Line %d field %s set to %r", index, field_name, value)
    return replace_line(document, index, formulas.recalc_item(line, field_name))


def update_header(document: Any, field_name: str, value: Any) -> Any:
    """Set a header field and recalculate the footer against it."""
    formulas = formulas_for(document)
    return formulas.recalc_footer(replace(document, **{field_name: value}), field_name)


def add_line(document: Any) -> Any:
    formulas = formulas_for(document)
    items = tuple(document.items) + (formulas.item_type(),)
    return formulas.recalc_footer(replace(document, items=items), ITEMS_CHANGED)


def remove_line(document: Any, index: int) -> Any:
    """Drop one line; the last remaining line is cleared instead of removed."""
    formulas = formulas_for(document)
    items = list(document.items)
    if len(items) <= 1:
        items = [formulas.item_type()]
    else:
        del items[index]
    return formulas.recalc_footer(replace(document, items=tuple(items)), ITEMS_CHANGED)


_CATALOG_FIELDS = ("pack_size", "pack_purchase_price", "unit_purchase_price", "pack_sale_price", "unit_sale_price")


def apply_product_defaults(item: Any, product: Product) -> Any:
    """Fold a catalog product's pack size and prices into a line and recalculate it."""
    line_fields = {f.name for f in fields(item)}
    defaults: Dict[str, Any] = {"product_id": product.product_id}
    for name in _CATALOG_FIELDS:
        if name in line_fields:
            defaults[name] = getattr(product, name)
    if "unit_purchase_price" in line_fields:
        defaults["unit_purchase_price"] = product.effective_unit_purchase_price
    if "unit_sale_price" in line_fields:
        defaults["unit_sale_price"] = product.effective_unit_sale_price
    if "price" in line_fields:
        defaults["price"] = product.effective_unit_sale_price

    for formulas in FORMULAS.values():
        if isinstance(item, formulas.item_type):
            return formulas.recalc_item(replace(item, **defaults), None)
    raise TypeError(f"No formulas registered for {type(item).__name__}")


def select_product(document: Any, index: int, product: Product) -> Any:
    """Put a catalog product on one line of a document."""
    return replace_line(document, index, apply_product_defaults(document.items[index], product))
