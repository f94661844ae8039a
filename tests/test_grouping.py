from datetime import date

from direct_debit.grouping import GroupKey, group_key, group_transactions
from direct_debit.schema import SequenceType

D = date(2025, 9, 1)
D2 = date(2025, 9, 15)


def test_empty_input_yields_no_groups():
    assert group_transactions([], D) == []


def test_default_date_substituted_only_when_missing(make_tx):
    inherit = make_tx()
    override = make_tx(requested_execution_date=D2)

    assert group_key(inherit, D) == GroupKey(SequenceType.FIRST, D)
    assert group_key(override, D) == GroupKey(SequenceType.FIRST, D2)


def test_groups_in_first_seen_order(make_tx):
    txs = [
        make_tx(sequence_type=SequenceType.RECURRING),
        make_tx(sequence_type=SequenceType.FIRST),
        make_tx(sequence_type=SequenceType.RECURRING),
        make_tx(sequence_type=SequenceType.FIRST, requested_execution_date=D2),
        make_tx(sequence_type=SequenceType.FINAL),
    ]

    groups = group_transactions(txs, D)

    assert [g.key for g in groups] == [
        GroupKey(SequenceType.RECURRING, D),
        GroupKey(SequenceType.FIRST, D),
        GroupKey(SequenceType.FIRST, D2),
        GroupKey(SequenceType.FINAL, D),
    ]
    assert groups[0].transactions == [txs[0], txs[2]]


def test_partition_is_complete(make_tx):
    seqs = list(SequenceType)
    txs = [
        make_tx(sequence_type=seqs[i % 4], requested_execution_date=(D2 if i % 3 == 0 else None))
        for i in range(20)
    ]

    groups = group_transactions(txs, D)
    members = [id(tx) for g in groups for tx in g.transactions]

    assert sorted(members) == sorted(id(tx) for tx in txs)
    assert len(set(members)) == len(txs)
    for g in groups:
        assert all(group_key(tx, D) == g.key for tx in g.transactions)
    assert len({g.key for g in groups}) == len(groups)
