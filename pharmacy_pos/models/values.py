"""Field values shared by line items and documents.

Form fields arrive as whatever the user typed: numbers, partial strings such
as ``"34."``, empty strings or ``None``. Arithmetic treats all of those
uniformly through :func:`to_number`.

Some outputs have to keep "no value" apart from zero (a margin that cannot
be determined is not a zero margin). Those are emitted as :data:`BLANK` or
:class:`Numeric` rather than as a bare float.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Union

from pharmacy_pos import config


class Blank:
    """Marker for a field that has no value; renders as an empty string."""

    _instance = None

    def __new__(cls) -> "Blank":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "BLANK"

    def __str__(self) -> str:
        return ""


BLANK = Blank()


@dataclass(frozen=True)
class Numeric:
    """A determined numeric value, displayed with a fixed number of decimals."""

    value: float
    places: int = config.MONEY_PLACES

    def __str__(self) -> str:
        return f"{self.value:.{self.places}f}"


DisplayValue = Union[Numeric, Blank]


def to_number(value: Any) -> float:
    """Coerce a raw field value to float; anything unusable becomes 0."""
    if isinstance(value, Numeric):
        value = value.value
    if value is None or value is BLANK or value == "":
        return 0.0
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(number):
        return 0.0
    return number


def round_money(value: Any, places: int = config.MONEY_PLACES) -> float:
    """Round half away from zero at any magnitude; non-finite input rounds to 0."""
    exact = Decimal(str(to_number(value)))
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus the decimals.
        ctx.prec = max(ctx.prec, exact.adjusted() + places + 2)
        quantized = exact.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    result = float(quantized)
    return 0.0 if result == 0 else result


def numeric_or_blank(value: float, places: int = config.MONEY_PLACES) -> DisplayValue:
    """Return BLANK for zero, otherwise the rounded value wrapped in Numeric."""
    rounded = round_money(value, places)
    if rounded == 0:
        return BLANK
    return Numeric(rounded, places)


def as_text(value: Any) -> str:
    """Render a field for display; None and BLANK become an empty string."""
    if value is None or value is BLANK:
        return ""
    if isinstance(value, float):
        return format_currency(value)
    return str(value)


def format_currency(amount: float) -> str:
    """Return amount formatted to two decimals."""
    return f"{amount:.2f}"
