import logging
from datetime import date
from decimal import Decimal

import pytest

from common import config as config_module
from direct_debit.iban import IbanData
from direct_debit.models import DebitTransaction
from direct_debit.pain008 import SepaDebitTransfer
from direct_debit.schema import SequenceType
from helpers import DEFAULT_COLLECTION_DATE, FixedClock

# ---------------------------------------------------------------------------
# Configuration is process-global; start every test from an empty one
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def _settings() -> None:
    config_module.settings.set_override({})
    yield
    config_module.settings.set_override({})


@pytest.fixture(autouse=True)
def _root_logging():
    """Undo handlers installed by configure_logging (CLI runs, logging tests)."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)


@pytest.fixture
def creditor() -> IbanData:
    return IbanData(iban="DE89 3704 0044 0532 0130 00", bic="COBADEFFXXX", name="ACME GmbH")


@pytest.fixture
def make_tx():
    """Factory for debit transactions with sensible defaults."""

    counter = {"n": 0}

    def _make(amount="10.00", sequence_type=SequenceType.FIRST, **kwargs) -> DebitTransaction:
        counter["n"] += 1
        n = counter["n"]
        data = {
            "amount": Decimal(amount),
            "end_to_end_id": f"E2E-{n}",
            "debtor": IbanData(iban="DE02120300000000202051", bic="BYLADEM1001", name=f"Debtor {n}"),
            "mandate_identification": f"MNDT-{n}",
            "date_of_signature": date(2024, 1, 15),
            "sequence_type": sequence_type,
        }
        data.update(kwargs)
        return DebitTransaction(**data)

    return _make


@pytest.fixture
def transfer(creditor) -> SepaDebitTransfer:
    t = SepaDebitTransfer(
        message_identification="MSG-0001",
        initiating_party_name="ACME GmbH",
        creditor_scheme_id="DE98ZZZ09999999999",
        requested_execution_date=DEFAULT_COLLECTION_DATE,
        clock=FixedClock(),
    )
    t.creditor = creditor
    return t
