"""Generic line and footer recalculation.

Both functions are pure: they read the raw field values of a frozen
dataclass, recompute everything that depends on them and return a new
instance via ``dataclasses.replace``. Coercion is total, so any input yields
a fully formed result.
"""

from __future__ import annotations

import logging
from dataclasses import replace
from typing import Any, Dict, Optional, Tuple, TypeVar

from pharmacy_pos.formula.rules import FooterRules, GrossSource, LineRules, PackUnitPair
from pharmacy_pos.models.values import BLANK, Numeric, numeric_or_blank, round_money, to_number

logger = logging.getLogger(__name__)

DISCOUNT_FIELD = "item_discount_percentage"

LineT = TypeVar("LineT")
DocT = TypeVar("DocT")


def _sync_pair(
    pair: PackUnitPair,
    values: Dict[str, float],
    pack_size: float,
    changed_field: Optional[str],
    backfill: bool,
) -> None:
    pack = values[pair.pack_field]
    unit = values[pair.unit_field]

    if changed_field == pair.pack_field:
        values[pair.unit_field] = pair.unit_from_pack(pack, pack_size)
    elif changed_field == pair.unit_field:
        values[pair.pack_field] = pair.pack_from_unit(unit, pack_size)
    elif changed_field == "pack_size" and backfill:
        # Only the empty side is inferred; a typed value is never overwritten.
        if pack > 0 and unit == 0:
            values[pair.unit_field] = pair.unit_from_pack(pack, pack_size)
        elif unit > 0 and pack == 0:
            values[pair.pack_field] = pair.pack_from_unit(unit, pack_size)


def _round(value: float, places: Optional[int]) -> float:
    if places is None:
        return value
    return round_money(value, places)


def recalc_item(rules: LineRules, item: LineT, changed_field: Optional[str] = None) -> LineT:
    """Recompute every derived field of one line.

    ``changed_field`` names the field the user just edited; it decides which
    side of each pack/unit pair is the source of truth. ``None`` means a bulk
    update (e.g. a product was selected) and leaves both sides as given.
    """
    values: Dict[str, float] = {}
    for pair in rules.pairs:
        values[pair.pack_field] = to_number(getattr(item, pair.pack_field))
        values[pair.unit_field] = to_number(getattr(item, pair.unit_field))

    def number(name: str) -> float:
        if name in values:
            return values[name]
        return to_number(getattr(item, name))

    pack_size = to_number(getattr(item, "pack_size", 0))
    if pack_size > 0:
        for pair in rules.pairs:
            _sync_pair(pair, values, pack_size, changed_field, rules.backfill_on_pack_size)

    total_units = sum(
        number(term.field) * (pack_size if term.per_pack else 1.0) for term in rules.quantity_terms
    )
    gross = total_units * number(rules.price_field)
    discount = gross * number(DISCOUNT_FIELD) / 100
    if rules.discount_field:
        # The written discount and sub_total agree to the cent.
        discount = _round(discount, rules.round_places)
    net = gross - discount

    updates: Dict[str, Any] = {}
    for name, value in values.items():
        if rules.preserve_edited_field and name == changed_field:
            updates[name] = getattr(item, name)
        else:
            updates[name] = value
    for name in rules.coerced_fields:
        updates[name] = to_number(getattr(item, name))

    if rules.total_units_field:
        updates[rules.total_units_field] = total_units
    if rules.gross_field:
        updates[rules.gross_field] = gross
    if rules.discount_field:
        updates[rules.discount_field] = discount
    updates["sub_total"] = _round(net, rules.round_places)

    if rules.avg_price_field:
        updates[rules.avg_price_field] = net / total_units if total_units > 0 else 0.0

    if rules.margin:
        sale = number(rules.margin.sale_field)
        cost = number(rules.margin.cost_field)
        if sale > 0 and cost > 0:
            updates[rules.margin.output_field] = Numeric(round_money((sale - cost) / cost * 100))
        else:
            updates[rules.margin.output_field] = BLANK

    logger.debug("Recalculated %s line (changed=%s): sub_total=%s", rules.name, changed_field, updates["sub_total"])
    return replace(item, **updates)


def _derive_pair(
    base: float,
    percentage: float,
    amount: float,
    changed_field: Optional[str],
    percentage_field: str,
    amount_field: str,
    amount_edits: bool,
) -> Tuple[float, float]:
    """Keep a percentage/amount pair consistent against ``base``."""
    if not amount_edits or changed_field == percentage_field:
        amount = base * percentage / 100
    elif changed_field == amount_field:
        percentage = amount / base * 100 if base > 0 else 0.0
    return percentage, amount


def recalc_footer(rules: FooterRules, document: DocT, changed_field: Optional[str] = None) -> DocT:
    """Recompute gross, discount, tax and total of a whole document.

    Header percentage/amount pairs are mutually exclusive: whichever one
    ``changed_field`` names is kept and the other is derived from it. Any
    other value (``"items"``, ``None``) keeps both as typed.
    """
    items = document.items
    if rules.gross_source is GrossSource.QUANTITY_PRICE:
        line_gross = [to_number(getattr(it, rules.quantity_field)) * to_number(getattr(it, rules.price_field)) for it in items]
        gross = sum(line_gross)
    else:
        line_gross = []
        gross = sum(to_number(it.sub_total) for it in items)

    item_discount = 0.0
    if rules.item_discount_field:
        # Same per-line rounding as the item_discount_amount each line shows.
        item_discount = sum(
            round_money(value * to_number(getattr(it, DISCOUNT_FIELD)) / 100) for value, it in zip(line_gross, items)
        )

    discount_pct, discount_amt = _derive_pair(
        gross,
        to_number(document.discount_percentage),
        to_number(document.discount_amount),
        changed_field,
        "discount_percentage",
        "discount_amount",
        rules.amount_edits,
    )
    if rules.clamp_discount and discount_amt > gross:
        logger.warning("Discount %.2f exceeds gross %.2f on %s; clamped", discount_amt, gross, rules.name)
        discount_amt = gross
        discount_pct = 100.0

    taxable = gross - item_discount - discount_amt
    tax_pct, tax_amt = _derive_pair(
        taxable,
        to_number(document.tax_percentage),
        to_number(document.tax_amount),
        changed_field,
        "tax_percentage",
        "tax_amount",
        rules.amount_edits,
    )
    if rules.floor_tax and tax_amt < 0:
        tax_amt = 0.0

    total = taxable + tax_amt

    header = numeric_or_blank if rules.blank_zero else round_money
    updates: Dict[str, Any] = {
        rules.gross_field: round_money(gross),
        "discount_percentage": header(discount_pct),
        "discount_amount": header(discount_amt),
        "tax_percentage": header(tax_pct),
        "tax_amount": header(tax_amt),
        "total": round_money(total),
    }
    if rules.item_discount_field:
        updates[rules.item_discount_field] = round_money(item_discount)
    if not rules.amount_edits:
        # Percentages drive this footer and are kept as typed.
        updates["discount_percentage"] = document.discount_percentage
        updates["tax_percentage"] = document.tax_percentage

    logger.debug("Recalculated %s footer (changed=%s): total=%s", rules.name, changed_field, updates["total"])
    return replace(document, **updates)
