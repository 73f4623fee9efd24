"""Monetary amounts.

Prices, savings and cost differences are held as ``Decimal`` so that
valuations and totals add up to the cent. Floats are converted through
their ``str`` form, so ``0.1`` becomes ``Decimal("0.1")`` and not its
binary expansion.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any

from hims.domain.exceptions import ValidationError

ZERO = Decimal("0")


def to_money(value: Any) -> Decimal:
    """Convert ``value`` to a finite Decimal or raise ValidationError."""
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, bool) or value is None:
        raise ValidationError(f"Invalid money amount: {value!r}")
    else:
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation as exc:
            raise ValidationError(f"Invalid money amount: {value!r}") from exc
    if not amount.is_finite():
        raise ValidationError(f"Invalid money amount: {value!r}")
    return amount


def parse_money(value: Any) -> Decimal:
    """Lenient wire parsing: missing or unparseable amounts become zero."""
    if value is None or value == "":
        return ZERO
    try:
        return to_money(value)
    except ValidationError:
        return ZERO


def format_money(amount: Decimal) -> str:
    return f"${amount:.2f}"
