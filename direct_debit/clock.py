"""Injectable time and identifier sources for deterministic documents."""
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Protocol

from common.datetime import local_now


class Clock(Protocol):
    """Abstract clock used for deterministic testing."""

    def now(self) -> datetime:  # pragma: no cover – protocol stub
        """Return the current local timestamp."""


class UUIDFactory(Protocol):
    """Abstract message-id factory for deterministic testing."""

    def new(self) -> str:  # pragma: no cover – protocol stub
        """Return a new identifier of at most 35 characters."""


class SystemClock:
    def now(self) -> datetime:
        return local_now()


class UUID4Factory:
    def new(self) -> str:
        # hex form keeps the id within the 35 character Max35Text limit
        return uuid.uuid4().hex
