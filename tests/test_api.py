import xml.etree.ElementTree as ET

from fastapi.testclient import TestClient

from direct_debit.api import app

PAYLOAD = {
    "message_id": "API-1",
    "initiating_party_name": "ACME GmbH",
    "creditor": {"name": "ACME GmbH", "iban": "DE89370400440532013000", "bic": "COBADEFFXXX"},
    "creditor_scheme_id": "DE98ZZZ09999999999",
    "requested_collection_date": "2025-09-01",
    "transactions": [
        {
            "amount": 10.0,
            "end_to_end_id": "E2E-1",
            "debtor": {"iban": "DE02120300000000202051", "bic": "BYLADEM1001", "name": "Max"},
            "mandate_identification": "MNDT-1",
            "date_of_signature": "2024-01-15",
            "sequence_type": "FRST",
        },
        {
            "amount": "25.50",
            "end_to_end_id": "E2E-2",
            "debtor": {"iban": "DE02500105170137075030", "name": "Erika"},
            "mandate_identification": "MNDT-2",
            "date_of_signature": "2024-02-01",
            "sequence_type": "RCUR",
            "requested_execution_date": "2025-09-05",
        },
    ],
}


client = TestClient(app)


def test_healthz():
    resp = client.get("/healthz")
    assert resp.status_code == 200
    assert resp.json() == {"ok": True}


def test_render_direct_debit():
    resp = client.post("/direct-debit", json=PAYLOAD)

    assert resp.status_code == 200
    assert resp.headers["content-type"].startswith("application/xml")
    root = ET.fromstring(resp.content)
    assert len(root.findall(".//{*}PmtInf")) == 2
    assert root.find(".//{*}GrpHdr/{*}CtrlSum").text == "35.50"


def test_invalid_creditor_is_422():
    payload = dict(PAYLOAD, creditor={"name": "ACME", "iban": "DE89370400440532013000"})
    resp = client.post("/direct-debit", json=payload)

    assert resp.status_code == 422
    assert resp.json()["detail"] == "Creditor IBAN data are invalid."


def test_missing_creditor_is_422():
    payload = dict(PAYLOAD, creditor=None)
    resp = client.post("/direct-debit", json=payload)

    assert resp.status_code == 422
    assert resp.json()["detail"] == "The creditor is mandatory."


def test_malformed_transaction_is_422():
    payload = dict(PAYLOAD, transactions=[dict(PAYLOAD["transactions"][0], amount="-5")])
    assert client.post("/direct-debit", json=payload).status_code == 422


def test_metrics_exposed():
    client.post("/direct-debit", json=PAYLOAD)
    resp = client.get("/metrics/")
    assert resp.status_code == 200
    assert "sepa_documents_built_total" in resp.text


def test_malformed_configured_creditor_is_422():
    from common import config as config_module

    config_module.settings.set_override({"creditor": {"name": "ACME"}})
    resp = client.post("/direct-debit", json=dict(PAYLOAD, creditor=None))

    assert resp.status_code == 422
    assert resp.json()["detail"].startswith("Configured creditor is malformed")
