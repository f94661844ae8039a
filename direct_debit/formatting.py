"""Canonical text representations used in pain messages."""
from __future__ import annotations

import datetime as _dt
from decimal import ROUND_HALF_UP, Decimal
from typing import Final, Union

_CENT: Final = Decimal("0.01")


def format_amount(amount: Union[Decimal, int, str]) -> str:
    """Return *amount* as fixed-point with exactly two decimals (``35.50``)."""
    return format(Decimal(amount).quantize(_CENT, rounding=ROUND_HALF_UP), "f")


def format_date(value: Union[_dt.date, _dt.datetime]) -> str:
    if isinstance(value, _dt.datetime):
        value = value.date()
    return value.isoformat()


def format_datetime(value: _dt.datetime) -> str:
    """ISO date-time without fraction or offset, e.g. ``2025-08-06T10:37:01``."""
    return value.strftime("%Y-%m-%dT%H:%M:%S")
