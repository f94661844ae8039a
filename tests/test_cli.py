import json
import xml.etree.ElementTree as ET

import pytest

from direct_debit import cli

BATCH = {
    "message_id": "CLI-1",
    "initiating_party_name": "ACME GmbH",
    "creditor": {"name": "ACME GmbH", "iban": "DE89370400440532013000", "bic": "COBADEFFXXX"},
    "creditor_scheme_id": "DE98ZZZ09999999999",
    "requested_collection_date": "2025-09-01",
    "transactions": [
        {
            "amount": "10.00",
            "end_to_end_id": "E2E-1",
            "debtor": {"iban": "DE02120300000000202051", "bic": "BYLADEM1001", "name": "Max"},
            "mandate_identification": "MNDT-1",
            "date_of_signature": "2024-01-15",
            "sequence_type": "first",
        }
    ],
}


@pytest.fixture
def batch_file(tmp_path):
    path = tmp_path / "batch.json"
    path.write_text(json.dumps(BATCH), encoding="utf-8")
    return path


def test_usage_on_missing_args(capsys):
    assert cli.main([]) == 1
    assert "Usage" in capsys.readouterr().err


def test_writes_to_stdout(batch_file, capsys):
    assert cli.main([str(batch_file)]) == 0
    out = capsys.readouterr().out
    assert "<MsgId>CLI-1</MsgId>" in out
    assert "<SeqTp>FRST</SeqTp>" in out


def test_saves_to_file(batch_file, tmp_path):
    target = tmp_path / "out.xml"
    assert cli.main([str(batch_file), str(target)]) == 0
    root = ET.fromstring(target.read_bytes())
    assert root.find(".//{*}GrpHdr/{*}NbOfTxs").text == "1"


def test_rule_error_exit_code(tmp_path):
    bad = dict(BATCH, creditor=None)
    path = tmp_path / "bad.json"
    path.write_text(json.dumps(bad), encoding="utf-8")

    assert cli.main([str(path)]) == 2


def test_missing_batch_file(tmp_path):
    assert cli.main([str(tmp_path / "absent.json")]) == 1


def test_batch_file_not_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json", encoding="utf-8")

    assert cli.main([str(path)]) == 1


def test_batch_with_malformed_transaction(tmp_path):
    bad_tx = dict(BATCH["transactions"][0], amount="-1.00")
    path = tmp_path / "negative.json"
    path.write_text(json.dumps(dict(BATCH, transactions=[bad_tx])), encoding="utf-8")

    assert cli.main([str(path)]) == 2


def test_unwritable_output(batch_file, tmp_path):
    target = tmp_path / "missing-dir" / "out.xml"
    assert cli.main([str(batch_file), str(target)]) == 1
