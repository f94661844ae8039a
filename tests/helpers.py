"""Deterministic clock / id factory shared by the test modules."""
from datetime import date, datetime

DEFAULT_COLLECTION_DATE = date(2025, 9, 1)


class FixedClock:
    def now(self) -> datetime:  # type: ignore[override]
        return datetime(2025, 8, 6, 10, 37, 1)


class FixedUUID:
    def __init__(self) -> None:
        self.i = 0

    def new(self) -> str:  # type: ignore[override]
        self.i += 1
        return f"MSG-{self.i:04d}"
