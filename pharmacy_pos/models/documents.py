"""Document dataclasses: header fields, line items and footer totals."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Tuple

from pharmacy_pos.models.line_items import (
    PurchaseInvoiceItem,
    PurchaseReturnItem,
    SaleInvoiceItem,
    SaleReturnItem,
)


@dataclass(frozen=True)
class PurchaseInvoice:
    supplier_id: Any = ""
    posted_number: str = ""
    posted_date: str = ""
    invoice_number: str = ""
    remarks: str = ""
    # Amount printed on the supplier's invoice, checked against ``total``.
    invoice_amount: Any = ""
    items: Tuple[PurchaseInvoiceItem, ...] = field(default_factory=lambda: (PurchaseInvoiceItem(),))
    gross_total: Any = 0.0
    discount_percentage: Any = ""
    discount_amount: Any = ""
    tax_percentage: Any = ""
    tax_amount: Any = ""
    total: Any = 0.0


@dataclass(frozen=True)
class PurchaseReturn:
    supplier_id: Any = ""
    purchase_invoice_id: Any = ""
    posted_number: str = ""
    posted_date: str = ""
    remarks: str = ""
    items: Tuple[PurchaseReturnItem, ...] = field(default_factory=lambda: (PurchaseReturnItem(),))
    gross_total: Any = 0.0
    discount_percentage: Any = ""
    discount_amount: Any = ""
    tax_percentage: Any = ""
    tax_amount: Any = ""
    total: Any = 0.0


@dataclass(frozen=True)
class SaleInvoice:
    customer_id: Any = ""
    posted_number: str = ""
    date: str = ""
    remarks: str = ""
    items: Tuple[SaleInvoiceItem, ...] = field(default_factory=lambda: (SaleInvoiceItem(),))
    gross_amount: Any = 0.0
    item_discount: Any = 0.0
    discount_percentage: Any = ""
    discount_amount: Any = ""
    tax_percentage: Any = ""
    tax_amount: Any = ""
    total: Any = 0.0


@dataclass(frozen=True)
class SaleReturn:
    customer_id: Any = ""
    sale_invoice_id: Any = ""
    posted_number: str = ""
    date: str = ""
    remarks: str = ""
    items: Tuple[SaleReturnItem, ...] = field(default_factory=lambda: (SaleReturnItem(),))
    gross_total: Any = 0.0
    discount_percentage: Any = ""
    discount_amount: Any = ""
    tax_percentage: Any = ""
    tax_amount: Any = ""
    total: Any = 0.0
