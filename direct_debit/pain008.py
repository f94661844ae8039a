"""Build ISO 20022 pain.008 (SEPA direct debit initiation) documents.

Transactions are grouped by sequence type and requested collection date; each
group becomes one ``PmtInf`` block. Element order follows the XSD exactly.
"""
from __future__ import annotations

import logging
import xml.etree.ElementTree as ET
from datetime import date
from decimal import Decimal
from pathlib import Path
from typing import Iterable, List, Optional, Set, Union

from observability.metrics import (sepa_build_failures_total,
                                   sepa_documents_built_total,
                                   sepa_transactions_serialized_total)

from .clock import Clock, SystemClock
from .errors import (DuplicateTransactionId, InvalidIdentity,
                     MissingMandatoryField, UnsupportedSchema)
from .formatting import format_amount, format_date
from .grouping import PaymentGroup, group_transactions
from .header import DocumentHeader
from .iban import IbanData
from .models import EURO, DebitTransaction
from .schema import (XSI_NS, SepaSchema, parse_schema, schema_namespace,
                     sequence_type_to_string)
from .xmlutils import create_bic, new_element, to_string

logger = logging.getLogger(__name__)

PAYMENT_METHOD = "DD"
SERVICE_LEVEL = "SEPA"
CHARGE_BEARER = "SLEV"
SCHEME_NAME = "SEPA"

ACCEPTED_SCHEMAS = frozenset({SepaSchema.PAIN_008_001_02, SepaSchema.PAIN_008_001_03})


class SepaDebitTransfer:
    """SEPA direct debit collection for a single creditor.

    Example::

        transfer = SepaDebitTransfer(
            message_identification="MSG-1",
            initiating_party_name="ACME",
            creditor_scheme_id="DE98ZZZ09999999999",
            requested_execution_date=date(2025, 9, 1),
        )
        transfer.creditor = IbanData(iban="DE89...", bic="COBADEFFXXX", name="ACME")
        transfer.add_debit_transfer(tx)
        xml = transfer.to_xml()
    """

    def __init__(
        self,
        *,
        message_identification: Optional[str] = None,
        initiating_party_name: Optional[str] = None,
        initiating_party_id: Optional[str] = None,
        creditor_scheme_id: Optional[str] = None,
        requested_execution_date: Optional[date] = None,
        creditor_account_currency: Optional[str] = EURO,
        local_instrument_code: str = "CORE",
        category_purpose_code: Optional[str] = None,
        payment_info_id: Optional[str] = None,
        schema: Union[SepaSchema, str] = SepaSchema.PAIN_008_001_02,
        clock: Optional[Clock] = None,
    ) -> None:
        created = (clock or SystemClock()).now()
        self.header = DocumentHeader(
            creation_date=created,
            message_identification=message_identification,
            initiating_party_name=initiating_party_name,
            initiating_party_id=initiating_party_id,
        )
        self.creditor_scheme_id = creditor_scheme_id  # PersonId
        self.requested_execution_date = requested_execution_date or created.date()
        self.creditor_account_currency = creditor_account_currency
        self.local_instrument_code = local_instrument_code
        self.category_purpose_code = category_purpose_code
        self.payment_info_id = payment_info_id
        self._creditor: Optional[IbanData] = None
        self._transactions: List[DebitTransaction] = []
        self._used_ids: Set[str] = set()
        self._used_end_to_end_ids: Set[str] = set()
        self._schema = SepaSchema.PAIN_008_001_02
        self.schema = schema

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def schema(self) -> SepaSchema:
        return self._schema

    @schema.setter
    def schema(self, value: Union[SepaSchema, str]) -> None:
        try:
            value = parse_schema(value)
        except ValueError as exc:
            raise UnsupportedSchema(str(exc)) from None
        if not self.check_schema(value):
            raise UnsupportedSchema(f"Schema {value.value} is not allowed for a direct debit.")
        self._schema = value

    @property
    def creditor(self) -> Optional[IbanData]:
        return self._creditor

    @creditor.setter
    def creditor(self, value: IbanData) -> None:
        if value is None or not value.is_valid or value.unknown_bic:
            raise InvalidIdentity("Creditor IBAN data are invalid.")
        self._creditor = value

    @property
    def transactions(self) -> tuple[DebitTransaction, ...]:
        return tuple(self._transactions)

    @property
    def message_identification(self) -> Optional[str]:
        return self.header.message_identification

    @property
    def number_of_transactions(self) -> int:
        return self.header.number_of_transactions

    @property
    def control_sum(self) -> Decimal:
        return self.header.control_sum

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def add_debit_transfer(self, transfer: DebitTransaction) -> None:
        if not isinstance(transfer, DebitTransaction):
            raise TypeError(f"expected DebitTransaction, got {type(transfer).__name__}")
        if transfer.id is not None and transfer.id in self._used_ids:
            raise DuplicateTransactionId(f"Transaction Id '{transfer.id}' must be unique in a transfer.")
        if transfer.end_to_end_id in self._used_end_to_end_ids:
            raise DuplicateTransactionId(
                f"End To End Id '{transfer.end_to_end_id}' must be unique in a transfer."
            )
        if transfer.id is not None:
            self._used_ids.add(transfer.id)
        self._used_end_to_end_ids.add(transfer.end_to_end_id)
        self._transactions.append(transfer)
        self.header.record(transfer.amount)

    def add_debit_transfers(self, transfers: Iterable[DebitTransaction]) -> None:
        for transfer in transfers:
            self.add_debit_transfer(transfer)

    # ------------------------------------------------------------------
    # SepaTransfer protocol
    # ------------------------------------------------------------------

    def check_schema(self, schema: SepaSchema) -> bool:
        return schema in ACCEPTED_SCHEMAS

    def check_mandatory_data(self) -> None:
        self.header.check_mandatory_data()
        if not self.creditor_account_currency:
            raise MissingMandatoryField("creditor_account_currency")
        if self._creditor is None:
            raise MissingMandatoryField("creditor")
        if not self.creditor_scheme_id:
            raise MissingMandatoryField("creditor_scheme_id")
        if not self._transactions:
            raise MissingMandatoryField("transactions", "At least one transaction is mandatory.")

    def generate_xml(self) -> ET.Element:
        """Return the complete ``Document`` element.

        Validation runs before any element is created, so a rule violation
        never leaves a half-written tree behind.
        """
        try:
            self.check_mandatory_data()
        except MissingMandatoryField as exc:
            sepa_build_failures_total.labels(reason=f"missing_{exc.field}").inc()
            raise

        # ------------------- Envelope + Group Header -------------------
        doc = ET.Element("Document")
        doc.set("xmlns:xsi", XSI_NS)
        doc.set("xmlns", schema_namespace(self._schema))
        initn = new_element(doc, "CstmrDrctDbtInitn")
        self.header.write_group_header(initn)

        # ------------------- Payment Information -----------------------
        groups = group_transactions(self._transactions, self.requested_execution_date)
        blocks = 0
        for group in groups:
            pmt_inf = self._payment_information(initn, group)
            if pmt_inf is None:
                continue
            blocks += 1
            for transfer in group.transactions:
                self._transaction(pmt_inf, transfer)

        sepa_documents_built_total.labels(schema=self._schema.value).inc()
        sepa_transactions_serialized_total.inc(self.header.number_of_transactions)
        logger.info(
            "built %s document %s: %d transactions in %d payment blocks",
            self._schema.value,
            self.header.message_identification,
            self.header.number_of_transactions,
            blocks,
            extra={"message_id": self.header.message_identification, "schema": self._schema.value},
        )
        return doc

    # ------------------------------------------------------------------
    # Blocks
    # ------------------------------------------------------------------

    def _payment_information(self, parent: ET.Element, group: PaymentGroup) -> Optional[ET.Element]:
        control_number = 0
        control_sum = Decimal("0")
        for transfer in group.transactions:
            control_number += 1
            control_sum += transfer.amount

        if control_number == 0:
            return None

        seq = sequence_type_to_string(group.sequence_type)
        logger.debug(
            "payment block %s %s: %d transactions, sum %s",
            seq,
            format_date(group.collection_date),
            control_number,
            format_amount(control_sum),
            extra={"message_id": self.header.message_identification, "sequence_type": seq},
        )

        pmt_inf = new_element(parent, "PmtInf")
        new_element(pmt_inf, "PmtInfId", self.payment_info_id or self.header.message_identification)
        if self.category_purpose_code is not None:
            new_element(new_element(pmt_inf, "CtgyPurp"), "Cd", self.category_purpose_code)
        new_element(pmt_inf, "PmtMtd", PAYMENT_METHOD)
        new_element(pmt_inf, "NbOfTxs", str(control_number))
        new_element(pmt_inf, "CtrlSum", format_amount(control_sum))

        pmt_tp_inf = new_element(pmt_inf, "PmtTpInf")
        new_element(new_element(pmt_tp_inf, "SvcLvl"), "Cd", SERVICE_LEVEL)
        new_element(new_element(pmt_tp_inf, "LclInstrm"), "Cd", self.local_instrument_code)
        new_element(pmt_tp_inf, "SeqTp", seq)

        new_element(pmt_inf, "ReqdColltnDt", format_date(group.collection_date))

        creditor = self._creditor
        new_element(new_element(pmt_inf, "Cdtr"), "Nm", creditor.name)
        cdtr_acct = new_element(pmt_inf, "CdtrAcct")
        new_element(new_element(cdtr_acct, "Id"), "IBAN", creditor.iban)
        new_element(cdtr_acct, "Ccy", self.creditor_account_currency)
        fin_instn_id = new_element(new_element(pmt_inf, "CdtrAgt"), "FinInstnId")
        new_element(fin_instn_id, "BIC", creditor.bic)
        new_element(pmt_inf, "ChrgBr", CHARGE_BEARER)

        othr = new_element(new_element(new_element(new_element(pmt_inf, "CdtrSchmeId"), "Id"), "PrvtId"), "Othr")
        new_element(othr, "Id", self.creditor_scheme_id)
        new_element(new_element(othr, "SchmeNm"), "Prtry", SCHEME_NAME)
        return pmt_inf

    @staticmethod
    def _transaction(pmt_inf: ET.Element, transfer: DebitTransaction) -> ET.Element:
        tx_inf = new_element(pmt_inf, "DrctDbtTxInf")
        pmt_id = new_element(tx_inf, "PmtId")
        if transfer.id is not None:
            new_element(pmt_id, "InstrId", transfer.id)
        new_element(pmt_id, "EndToEndId", transfer.end_to_end_id)
        new_element(tx_inf, "InstdAmt", format_amount(transfer.amount), Ccy=transfer.currency)

        mndt = new_element(new_element(tx_inf, "DrctDbtTx"), "MndtRltdInf")
        new_element(mndt, "MndtId", transfer.mandate_identification)
        new_element(mndt, "DtOfSgntr", format_date(transfer.date_of_signature))

        create_bic(new_element(tx_inf, "DbtrAgt"), transfer.debtor)
        new_element(new_element(tx_inf, "Dbtr"), "Nm", transfer.debtor.name)
        new_element(new_element(new_element(tx_inf, "DbtrAcct"), "Id"), "IBAN", transfer.debtor.iban)

        if transfer.remittance_information:
            new_element(new_element(tx_inf, "RmtInf"), "Ustrd", transfer.remittance_information)
        return tx_inf

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def to_xml(self) -> str:
        return to_string(self.generate_xml())

    def to_bytes(self) -> bytes:
        return self.to_xml().encode("utf-8")

    def save(self, path: Union[str, Path]) -> Path:
        """Write the document to *path* and return it."""

        target = Path(path)
        target.write_bytes(self.to_bytes())
        logger.info("saved %s to %s", self.header.message_identification, target)
        return target


__all__ = ["SepaDebitTransfer", "ACCEPTED_SCHEMAS"]
