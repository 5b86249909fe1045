"""Catalog product as loaded from the product workbook."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Product:
    product_id: str
    name: str
    pack_size: float = 0.0
    pack_purchase_price: float = 0.0
    unit_purchase_price: Optional[float] = None
    pack_sale_price: float = 0.0
    unit_sale_price: Optional[float] = None

    @property
    def effective_unit_purchase_price(self) -> float:
        if self.unit_purchase_price not in (None, ""):
            return self.unit_purchase_price
        return self.pack_purchase_price / self.pack_size if self.pack_size > 0 else 0.0

    @property
    def effective_unit_sale_price(self) -> float:
        if self.unit_sale_price not in (None, ""):
            return self.unit_sale_price
        return self.pack_sale_price / self.pack_size if self.pack_size > 0 else 0.0
