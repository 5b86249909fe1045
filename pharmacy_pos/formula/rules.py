"""Per-document rule tables for the recalculation engine.

Each document family differs only in which fields it carries and how it
rounds; those differences are spelled out here so the engine itself stays
generic.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple


class PairKind(Enum):
    """How the unit side of a pack/unit pair relates to the pack side."""

    # Counts: one pack holds ``pack_size`` units.
    COUNT = "count"
    # Prices: one unit costs a ``pack_size``-th of the pack.
    PRICE = "price"


@dataclass(frozen=True)
class PackUnitPair:
    pack_field: str
    unit_field: str
    kind: PairKind

    def unit_from_pack(self, pack: float, pack_size: float) -> float:
        if self.kind is PairKind.COUNT:
            return pack * pack_size
        return pack / pack_size

    def pack_from_unit(self, unit: float, pack_size: float) -> float:
        if self.kind is PairKind.COUNT:
            return unit / pack_size
        return unit * pack_size


@dataclass(frozen=True)
class QuantityTerm:
    """One contribution to a line's unit count; pack terms scale by pack size."""

    field: str
    per_pack: bool = False


@dataclass(frozen=True)
class MarginRule:
    sale_field: str
    cost_field: str
    output_field: str = "margin"


@dataclass(frozen=True)
class LineRules:
    name: str
    quantity_terms: Tuple[QuantityTerm, ...]
    price_field: str
    pairs: Tuple[PackUnitPair, ...] = ()
    # A pack_size edit fills whichever side of a pair is still zero.
    backfill_on_pack_size: bool = True
    # Echo the raw value of the field under edit instead of the coerced number.
    preserve_edited_field: bool = False
    # Decimal places for sub_total/discount; None leaves them unrounded.
    round_places: Optional[int] = None
    # Input fields written back as plain numbers.
    coerced_fields: Tuple[str, ...] = ()
    total_units_field: Optional[str] = None
    gross_field: Optional[str] = None
    discount_field: Optional[str] = None
    avg_price_field: Optional[str] = None
    margin: Optional[MarginRule] = None


class GrossSource(Enum):
    SUB_TOTALS = "sub_totals"
    QUANTITY_PRICE = "quantity_price"


@dataclass(frozen=True)
class FooterRules:
    name: str
    gross_field: str
    gross_source: GrossSource = GrossSource.SUB_TOTALS
    quantity_field: str = "quantity"
    price_field: str = "price"
    # Output for the sum of line-level discounts, when the family has them.
    item_discount_field: Optional[str] = None
    # False when the amounts are always derived from the percentages.
    amount_edits: bool = True
    clamp_discount: bool = False
    floor_tax: bool = False
    # Emit BLANK instead of 0 for the percentage/amount header fields.
    blank_zero: bool = False


QUANTITY = PackUnitPair("pack_quantity", "unit_quantity", PairKind.COUNT)
PURCHASE_PRICE = PackUnitPair("pack_purchase_price", "unit_purchase_price", PairKind.PRICE)
SALE_PRICE = PackUnitPair("pack_sale_price", "unit_sale_price", PairKind.PRICE)
BONUS = PackUnitPair("pack_bonus", "unit_bonus", PairKind.COUNT)


PURCHASE_INVOICE_LINE = LineRules(
    name="purchase_invoice",
    pairs=(QUANTITY, PURCHASE_PRICE, SALE_PRICE, BONUS),
    quantity_terms=(
        QuantityTerm("pack_quantity", per_pack=True),
        QuantityTerm("unit_quantity"),
        QuantityTerm("unit_bonus"),
    ),
    price_field="unit_purchase_price",
    total_units_field="quantity",
    gross_field="sub_total_before_discount",
    discount_field="discount_amount",
    avg_price_field="avg_price",
    margin=MarginRule(sale_field="unit_sale_price", cost_field="unit_purchase_price"),
)

PURCHASE_RETURN_LINE = LineRules(
    name="purchase_return",
    pairs=(QUANTITY, PURCHASE_PRICE),
    quantity_terms=(QuantityTerm("pack_quantity"),),
    price_field="pack_purchase_price",
    preserve_edited_field=True,
    round_places=2,
)

SALE_INVOICE_LINE = LineRules(
    name="sale_invoice",
    quantity_terms=(QuantityTerm("quantity"),),
    price_field="price",
    round_places=2,
    coerced_fields=("pack_size", "quantity", "price", "item_discount_percentage"),
    discount_field="item_discount_amount",
)

SALE_RETURN_LINE = LineRules(
    name="sale_return",
    quantity_terms=(QuantityTerm("unit_return_quantity"),),
    price_field="unit_sale_price",
    round_places=2,
)


PURCHASE_INVOICE_FOOTER = FooterRules(
    name="purchase_invoice",
    gross_field="gross_total",
    clamp_discount=True,
    floor_tax=True,
)

PURCHASE_RETURN_FOOTER = FooterRules(
    name="purchase_return",
    gross_field="gross_total",
    clamp_discount=True,
    floor_tax=True,
)

SALE_INVOICE_FOOTER = FooterRules(
    name="sale_invoice",
    gross_field="gross_amount",
    gross_source=GrossSource.QUANTITY_PRICE,
    item_discount_field="item_discount",
    blank_zero=True,
)

SALE_RETURN_FOOTER = FooterRules(
    name="sale_return",
    gross_field="gross_total",
    amount_edits=False,
)
