"""Weighted-average stock cost for posted purchase lines.

A purchase line's effective cost is its ``avg_price``, the unit price after
item discount, falling back to ``unit_purchase_price`` when the line was never
recalculated.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Any

from pharmacy_pos.models.values import round_money, to_number

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProductStock:
    quantity: float = 0.0
    avg_price: float = 0.0
    unit_sale_price: float = 0.0
    margin: float = 0.0


def _effective_cost(line: Any) -> float:
    avg_price = to_number(getattr(line, "avg_price", 0))
    if avg_price > 0:
        return avg_price
    return to_number(getattr(line, "unit_purchase_price", 0))


def _sale_margin(unit_sale_price: float, avg_price: float) -> float:
    if unit_sale_price <= 0:
        return 0.0
    return round_money((unit_sale_price - avg_price) / unit_sale_price * 100)


def apply_purchase(stock: ProductStock, line: Any) -> ProductStock:
    """Add a purchase line's units to stock and blend its cost into the average."""
    old_qty = to_number(stock.quantity)
    old_avg = to_number(stock.avg_price)
    new_qty = to_number(line.quantity)
    cost = _effective_cost(line)

    total_qty = old_qty + new_qty
    if total_qty > 0:
        weighted = (old_qty * old_avg + new_qty * cost) / total_qty
    else:
        weighted = cost

    # The latest sale price on the line wins when one was given.
    sale_price = to_number(getattr(line, "unit_sale_price", 0)) or to_number(stock.unit_sale_price)
    avg_price = round_money(weighted)
    return replace(
        stock,
        quantity=total_qty,
        avg_price=avg_price,
        unit_sale_price=sale_price,
        margin=_sale_margin(sale_price, avg_price),
    )


def revert_purchase(stock: ProductStock, line: Any) -> ProductStock:
    """Undo :func:`apply_purchase` for a line that is edited or deleted."""
    qty = to_number(line.quantity)
    old_qty = to_number(stock.quantity)
    if qty <= 0 or old_qty <= 0:
        return stock

    new_qty = max(0.0, old_qty - qty)
    total_cost = to_number(stock.avg_price) * old_qty - _effective_cost(line) * qty
    if total_cost < 0:
        logger.warning("Reverting purchase left negative stock value %.4f; reset to 0", total_cost)
        total_cost = 0.0

    avg_price = round_money(total_cost / new_qty) if new_qty > 0 else 0.0
    return replace(
        stock,
        quantity=new_qty,
        avg_price=avg_price,
        margin=_sale_margin(to_number(stock.unit_sale_price), avg_price),
    )
