"""Partition transactions into payment-information blocks.

A block collects every transaction sharing a sequence type and an effective
collection date (the transaction's own date, else the document default).
Blocks come out in the order their key is first seen.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Iterable, List, NamedTuple

from .models import DebitTransaction
from .schema import SequenceType


class GroupKey(NamedTuple):
    sequence_type: SequenceType
    collection_date: date


@dataclass
class PaymentGroup:
    sequence_type: SequenceType
    collection_date: date
    transactions: List[DebitTransaction] = field(default_factory=list)

    @property
    def key(self) -> GroupKey:
        return GroupKey(self.sequence_type, self.collection_date)


def group_key(tx: DebitTransaction, default_date: date) -> GroupKey:
    effective = tx.requested_execution_date if tx.requested_execution_date is not None else default_date
    return GroupKey(tx.sequence_type, effective)


def group_transactions(transactions: Iterable[DebitTransaction], default_date: date) -> List[PaymentGroup]:
    groups: Dict[GroupKey, PaymentGroup] = {}
    for tx in transactions:
        key = group_key(tx, default_date)
        grp = groups.get(key)
        if grp is None:
            grp = groups[key] = PaymentGroup(key.sequence_type, key.collection_date)
        grp.transactions.append(tx)
    return list(groups.values())
