"""Turn a :class:`DirectDebitBatchRequest` into a ready-to-serialize transfer."""
from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Optional, Union

from pydantic import ValidationError

from common.config import Settings
from common.config import settings as default_settings

from .clock import Clock, SystemClock, UUID4Factory, UUIDFactory
from .errors import InvalidIdentity
from .models import EURO, CreditorSettings, DirectDebitBatchRequest
from .pain008 import SepaDebitTransfer
from .schema import SepaSchema

logger = logging.getLogger(__name__)


class _FixedClock:
    def __init__(self, ts) -> None:
        self._ts = ts

    def now(self):
        return self._ts


def load_request(path: Union[str, Path]) -> DirectDebitBatchRequest:
    with Path(path).open("r", encoding="utf-8") as fh:
        return DirectDebitBatchRequest.model_validate(json.load(fh))


def build_transfer(
    request: DirectDebitBatchRequest,
    settings: Optional[Settings] = None,
    *,
    clock: Optional[Clock] = None,
    uuidf: Optional[UUIDFactory] = None,
) -> SepaDebitTransfer:
    """Map *request* onto a :class:`SepaDebitTransfer`.

    Request fields win over configuration. Raises InvalidIdentity when the
    resolved creditor is unusable and UnsupportedSchema for a wrong schema;
    missing mandatory data only surfaces when the document is generated.
    """
    cfg = settings or default_settings
    if request.creation_ts is not None:
        clock = _FixedClock(request.creation_ts)

    message_id = request.message_id or (uuidf or UUID4Factory()).new()
    transfer = SepaDebitTransfer(
        message_identification=message_id,
        initiating_party_name=request.initiating_party_name or cfg.get("initiating_party_name"),
        initiating_party_id=request.initiating_party_id or cfg.get("initiating_party_id"),
        creditor_scheme_id=request.creditor_scheme_id or cfg.get("creditor_scheme_id"),
        requested_execution_date=request.requested_collection_date,
        creditor_account_currency=request.creditor_account_currency
        or cfg.get("creditor_account_currency", EURO),
        local_instrument_code=request.local_instrument_code or cfg.get("local_instrument_code", "CORE"),
        category_purpose_code=request.category_purpose_code,
        payment_info_id=request.payment_info_id,
        schema=request.schema_name or cfg.get("schema", SepaSchema.PAIN_008_001_02),
        clock=clock or SystemClock(),
    )

    creditor = request.creditor
    if creditor is None and cfg.get("creditor") is not None:
        try:
            creditor = CreditorSettings.model_validate(cfg.get("creditor"))
        except ValidationError as exc:
            raise InvalidIdentity(f"Configured creditor is malformed: {exc.error_count()} error(s).") from exc
    if creditor is not None:
        transfer.creditor = creditor.to_iban_data()

    transfer.add_debit_transfers(request.transactions)
    logger.debug(
        "mapped batch %s with %d transactions",
        message_id,
        len(request.transactions),
        extra={"message_id": message_id},
    )
    return transfer
