"""Numeric coercion helpers for loosely typed planning records."""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any

_DATE_PATTERN = re.compile(r"^\s*(\d{4})\s*[-/.年]\s*(\d{1,2})(?:\s*[-/.月]\s*(\d{1,2}))?")

ZERO = Decimal("0.00")
HUNDRED = Decimal("100")
Q2 = Decimal("0.01")
# Readings at or beyond this magnitude are treated as garbage, not amounts.
MAX_MAGNITUDE = Decimal("1e100")


def q2(value: Decimal) -> Decimal:
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 4)
        return value.quantize(Q2, rounding=ROUND_HALF_UP)


def parse_number(value: Any) -> Decimal | None:
    """Read a record value as Decimal, keeping infinities and NaN; ``None`` if not numeric."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)
    text = str(value).strip().rstrip("%").replace(",", "")
    if not text:
        return None
    try:
        return Decimal(text)
    except InvalidOperation:
        return None


def to_decimal(value: Any) -> Decimal:
    """Coerce a record value to a finite Decimal; anything else reads as zero."""

    number = parse_number(value)
    if number is None or not number.is_finite() or abs(number) >= MAX_MAGNITUDE:
        return ZERO
    return number


def has_number(value: Any) -> bool:
    """True when ``value`` carries a numeric reading (infinities included, NaN not)."""

    number = parse_number(value)
    return number is not None and not number.is_nan()


def percent_of(current: Any, target: Any) -> Decimal:
    """``current / target * 100``; zero when the target is zero."""

    denominator = to_decimal(target)
    if denominator == 0:
        return ZERO
    return to_decimal(current) * HUNDRED / denominator


def round_percent(numerator: int | Decimal, denominator: int | Decimal) -> int:
    """Half-up rounded integer percentage; zero for an empty denominator."""

    if not denominator:
        return 0
    ratio = Decimal(numerator) * HUNDRED / Decimal(denominator)
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def parse_date(value: Any) -> date | None:
    """Read ``YYYY-MM[-DD]`` style text (``-``, ``/``, ``.`` or 年/月 separators) as a date."""

    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    match = _DATE_PATTERN.match(str(value))
    if match is None:
        return None
    year, month, day = match.group(1), match.group(2), match.group(3)
    try:
        return date(int(year), int(month), int(day) if day else 1)
    except ValueError:
        return None
