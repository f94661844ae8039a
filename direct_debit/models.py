"""Pydantic records for direct-debit transactions and batch requests."""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, condecimal, constr, field_validator

from common.datetime import parse_iso8601

from .iban import IbanData
from .schema import SequenceType

EURO: str = "EUR"

ISO4217 = constr(min_length=3, max_length=3, pattern=r"^[A-Z]{3}$")
Max35Text = constr(min_length=1, max_length=35)


class DebitTransaction(BaseModel):
    """One instructed collection from a debtor account.

    Instances are frozen: a document keeps the exact record it was given.
    """

    model_config = ConfigDict(frozen=True)

    amount: condecimal(gt=Decimal("0"), max_digits=18, decimal_places=2)
    currency: ISO4217 = EURO
    end_to_end_id: Max35Text
    id: Optional[Max35Text] = None  # InstrId
    debtor: IbanData
    mandate_identification: Max35Text
    date_of_signature: date
    sequence_type: SequenceType = SequenceType.ONE_OFF
    remittance_information: Optional[str] = Field(default=None, max_length=140)
    requested_execution_date: Optional[date] = None

    @field_validator("sequence_type", mode="before")
    @classmethod
    def _sequence_type_by_name(cls, v):
        # accept "first" / "RECURRING" as well as the ISO codes
        if isinstance(v, str) and v.upper().replace("-", "_") in SequenceType.__members__:
            return SequenceType[v.upper().replace("-", "_")]
        return v


class CreditorSettings(BaseModel):
    name: str
    iban: str
    bic: Optional[str] = None

    def to_iban_data(self) -> IbanData:
        return IbanData(iban=self.iban, bic=self.bic, name=self.name)


class DirectDebitBatchRequest(BaseModel):
    """JSON payload accepted by the CLI and the HTTP endpoint.

    Every header field is optional; gaps are filled from configuration.
    """

    message_id: Optional[Max35Text] = None
    creation_ts: Optional[datetime] = None
    initiating_party_name: Optional[str] = None
    initiating_party_id: Optional[str] = None
    creditor: Optional[CreditorSettings] = None
    creditor_scheme_id: Optional[str] = None
    creditor_account_currency: Optional[ISO4217] = None
    requested_collection_date: Optional[date] = None
    local_instrument_code: Optional[str] = None
    category_purpose_code: Optional[str] = None
    payment_info_id: Optional[Max35Text] = None
    schema_name: Optional[str] = Field(default=None, alias="schema")
    transactions: List[DebitTransaction] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("creation_ts", mode="before")
    @classmethod
    def _local_creation_ts(cls, v):
        if v is None:
            return v
        return parse_iso8601(v)
