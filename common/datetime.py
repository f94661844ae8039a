"""Datetime helpers shared by the batch loaders.

parse_iso8601(s) accepts strings with a trailing "Z", explicit offsets or
fractional seconds. Creation timestamps in pain messages carry no offset, so
parsed values are converted to local wall-clock time and made naive.
"""
from __future__ import annotations

import datetime as _dt
from typing import Union

from dateutil.parser import isoparse as _isoparse
from dateutil.tz import tzlocal

__all__ = ["parse_iso8601", "local_now"]


def _to_local_naive(dt: _dt.datetime) -> _dt.datetime:
    if dt.tzinfo is None or dt.tzinfo.utcoffset(dt) is None:
        return dt
    return dt.astimezone(tzlocal()).replace(tzinfo=None)


def local_now() -> _dt.datetime:
    """Current local time, truncated to whole seconds."""
    return _dt.datetime.now().replace(microsecond=0)


def parse_iso8601(value: Union[str, _dt.datetime]) -> _dt.datetime:
    """Parse *value* into a naive local datetime.

    Naive inputs are taken as already local; aware inputs are converted.
    """
    if isinstance(value, _dt.datetime):
        return _to_local_naive(value)

    if not isinstance(value, str):
        raise TypeError("parse_iso8601 expects str or datetime, got " + type(value).__name__)

    try:
        dt = _isoparse(value)
    except ValueError as exc:
        raise ValueError(f"invalid ISO-8601 datetime: {value}") from exc

    return _to_local_naive(dt)
