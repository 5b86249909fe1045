"""Line item dataclasses, one per document family.

A fresh line is all blanks. Input fields hold the raw form value; the
calculators in :mod:`pharmacy_pos.formula` return a new instance with the
derived fields filled in.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pharmacy_pos.models.values import BLANK, to_number


@dataclass(frozen=True)
class PurchaseInvoiceItem:
    product_id: Any = ""
    batch: str = ""
    expiry: str = ""
    pack_size: Any = ""
    pack_quantity: Any = ""
    unit_quantity: Any = ""
    pack_purchase_price: Any = ""
    unit_purchase_price: Any = ""
    pack_sale_price: Any = ""
    unit_sale_price: Any = ""
    pack_bonus: Any = ""
    unit_bonus: Any = ""
    item_discount_percentage: Any = ""
    # Derived
    quantity: Any = ""
    sub_total_before_discount: Any = ""
    discount_amount: Any = ""
    sub_total: Any = ""
    avg_price: Any = ""
    margin: Any = BLANK

    @property
    def total_units(self) -> float:
        """Packs, loose units and bonus units together."""
        return to_number(self.quantity)


@dataclass(frozen=True)
class PurchaseReturnItem:
    product_id: Any = ""
    batch: str = ""
    expiry: str = ""
    pack_size: Any = ""
    pack_quantity: Any = ""
    unit_quantity: Any = ""
    pack_purchase_price: Any = ""
    unit_purchase_price: Any = ""
    item_discount_percentage: Any = ""
    sub_total: Any = ""


@dataclass(frozen=True)
class SaleInvoiceItem:
    product_id: Any = ""
    batch: str = ""
    expiry: str = ""
    pack_size: Any = ""
    quantity: Any = ""
    price: Any = ""
    item_discount_percentage: Any = ""
    item_discount_amount: Any = ""
    sub_total: Any = ""


@dataclass(frozen=True)
class SaleReturnItem:
    product_id: Any = ""
    batch: str = ""
    expiry: str = ""
    # Quantity on the original sale invoice; 0 for an open return.
    unit_sale_quantity: Any = ""
    unit_sale_price: Any = ""
    unit_return_quantity: Any = ""
    item_discount_percentage: Any = ""
    sub_total: Any = ""
