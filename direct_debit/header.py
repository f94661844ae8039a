"""Fields shared by every pain initiation document.

Payment variants embed a :class:`DocumentHeader` and implement the
:class:`SepaTransfer` protocol instead of inheriting from a common base.
"""
from __future__ import annotations

import xml.etree.ElementTree as ET
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Optional, Protocol

from .errors import MissingMandatoryField
from .formatting import format_amount, format_datetime
from .schema import SepaSchema
from .xmlutils import new_element


class SepaTransfer(Protocol):
    """Capability set of a payment-initiation document."""

    def check_mandatory_data(self) -> None:
        """Raise :class:`MissingMandatoryField` when serialization is impossible."""

    def check_schema(self, schema: SepaSchema) -> bool:
        """Return whether this document type can be written as *schema*."""

    def generate_xml(self) -> ET.Element:
        """Validate and return the complete ``Document`` element."""


@dataclass
class DocumentHeader:
    creation_date: datetime
    message_identification: Optional[str] = None
    initiating_party_name: Optional[str] = None
    initiating_party_id: Optional[str] = None
    number_of_transactions: int = 0
    control_sum: Decimal = Decimal("0")

    def record(self, amount: Decimal) -> None:
        """Account for one more transaction in the group header totals."""
        self.number_of_transactions += 1
        self.control_sum += amount

    def check_mandatory_data(self) -> None:
        if not self.message_identification:
            raise MissingMandatoryField("message_identification")
        if not self.initiating_party_name:
            raise MissingMandatoryField("initiating_party_name")

    def write_group_header(self, parent: ET.Element) -> ET.Element:
        """Emit ``GrpHdr`` under *parent* and return it."""

        grp_hdr = new_element(parent, "GrpHdr")
        new_element(grp_hdr, "MsgId", self.message_identification)
        new_element(grp_hdr, "CreDtTm", format_datetime(self.creation_date))
        new_element(grp_hdr, "NbOfTxs", str(self.number_of_transactions))
        new_element(grp_hdr, "CtrlSum", format_amount(self.control_sum))
        initg_pty = new_element(grp_hdr, "InitgPty")
        new_element(initg_pty, "Nm", self.initiating_party_name)
        if self.initiating_party_id is not None:
            org_id = new_element(new_element(initg_pty, "Id"), "OrgId")
            new_element(new_element(org_id, "Othr"), "Id", self.initiating_party_id)
        return grp_hdr
