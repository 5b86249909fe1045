"""Checks run on a recalculated document before it is saved.

Each ``validate_*`` function collects every problem it finds and raises a
single :class:`DocumentValidationError`.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional

from pharmacy_pos import config
from pharmacy_pos.exceptions import DocumentValidationError
from pharmacy_pos.models.documents import PurchaseInvoice, PurchaseReturn, SaleInvoice, SaleReturn
from pharmacy_pos.models.values import Numeric, to_number

logger = logging.getLogger(__name__)


def _has_product(line: Any) -> bool:
    return line.product_id not in (None, "")


def check_has_lines(items: Iterable[Any]) -> List[str]:
    if not any(_has_product(line) for line in items):
        return ["Add at least one product."]
    return []


def check_duplicate_lines(items: Iterable[Any]) -> List[str]:
    """The same product and batch may appear only once per document."""
    errors: List[str] = []
    seen = {}
    for row, line in enumerate(items, start=1):
        if not _has_product(line):
            continue
        key = (str(line.product_id), str(line.batch or "").strip().lower())
        if key in seen:
            errors.append(f"Row {row}: product {line.product_id} batch '{line.batch}' duplicates row {seen[key]}.")
        else:
            seen[key] = row
    return errors


def check_margins(items: Iterable[Any]) -> List[str]:
    errors: List[str] = []
    for row, line in enumerate(items, start=1):
        if isinstance(line.margin, Numeric) and line.margin.value < 0:
            errors.append(f"Row {row}: sale price is below purchase price (margin {line.margin}%).")
    return errors


def check_invoice_amount(invoice: PurchaseInvoice, tolerance: Optional[float] = None) -> List[str]:
    """The supplier's invoice amount must match the computed total."""
    if invoice.invoice_amount in (None, ""):
        return []
    tolerance = config.INVOICE_AMOUNT_TOLERANCE if tolerance is None else tolerance
    expected = to_number(invoice.invoice_amount)
    computed = to_number(invoice.total)
    if abs(expected - computed) > tolerance:
        return [f"Invoice amount {expected:.2f} does not match computed total {computed:.2f}."]
    return []


def check_return_quantities(items: Iterable[Any]) -> List[str]:
    errors: List[str] = []
    for row, line in enumerate(items, start=1):
        sold = to_number(line.unit_sale_quantity)
        returned = to_number(line.unit_return_quantity)
        # Open returns (no originating invoice) carry no sold quantity.
        if sold > 0 and returned > sold:
            errors.append(f"Row {row}: return quantity {returned:g} exceeds sold quantity {sold:g}.")
    return errors


def _raise_if_any(kind: str, errors: List[str]) -> None:
    if errors:
        logger.info("%s failed validation: %s", kind, errors)
        raise DocumentValidationError(errors)


def validate_purchase_invoice(invoice: PurchaseInvoice, tolerance: Optional[float] = None) -> None:
    errors = check_has_lines(invoice.items)
    errors += check_duplicate_lines(invoice.items)
    errors += check_margins(invoice.items)
    errors += check_invoice_amount(invoice, tolerance)
    _raise_if_any("Purchase invoice", errors)


def validate_purchase_return(purchase_return: PurchaseReturn) -> None:
    errors = check_has_lines(purchase_return.items)
    errors += check_duplicate_lines(purchase_return.items)
    _raise_if_any("Purchase return", errors)


def validate_sale_invoice(invoice: SaleInvoice) -> None:
    errors = check_has_lines(invoice.items)
    errors += check_duplicate_lines(invoice.items)
    _raise_if_any("Sale invoice", errors)


def validate_sale_return(sale_return: SaleReturn) -> None:
    errors = check_has_lines(sale_return.items)
    errors += check_duplicate_lines(sale_return.items)
    errors += check_return_quantities(sale_return.items)
    _raise_if_any("Sale return", errors)
