"""Account identity (IBAN + BIC + holder name) used for creditors and debtors."""
from __future__ import annotations

import re
from typing import Final, Optional

from pydantic import BaseModel, ConfigDict, field_validator

_IBAN_RE: Final = re.compile(r"^[A-Z]{2}[0-9]{2}[A-Z0-9]{11,30}$")
_BIC_RE: Final = re.compile(r"^[A-Z]{4}[A-Z]{2}[A-Z0-9]{2}([A-Z0-9]{3})?$")
_UNKNOWN_BIC: Final = "NOTPROVIDED"
NAME_MAX_LENGTH: Final = 70


class IbanData(BaseModel):
    """IBAN/BIC bearing identity.

    Construction never fails on structure: callers inspect :attr:`is_valid`
    and :attr:`unknown_bic` (the creditor setter rejects invalid values).
    Check digits and BIC registry membership are not verified.
    """

    model_config = ConfigDict(frozen=True)

    iban: str
    bic: Optional[str] = None
    name: str = ""

    @field_validator("iban", mode="before")
    @classmethod
    def _compact_iban(cls, v):
        if isinstance(v, str):
            return re.sub(r"\s+", "", v).upper()
        return v

    @field_validator("bic", mode="before")
    @classmethod
    def _compact_bic(cls, v):
        if isinstance(v, str):
            return re.sub(r"\s+", "", v).upper() or None
        return v

    @field_validator("name", mode="before")
    @classmethod
    def _limit_name(cls, v):
        if v is None:
            return ""
        return str(v).strip()[:NAME_MAX_LENGTH]

    @property
    def unknown_bic(self) -> bool:
        return not self.bic or self.bic == _UNKNOWN_BIC

    @property
    def is_valid(self) -> bool:
        if not self.name or not _IBAN_RE.match(self.iban or ""):
            return False
        return self.unknown_bic or bool(_BIC_RE.match(self.bic or ""))
