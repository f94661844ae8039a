from __future__ import annotations

import logging

from fastapi import FastAPI, HTTPException
from fastapi.responses import Response
from prometheus_client import make_asgi_app

from common.logging import configure_logging
from observability.metrics import sepa_build_failures_total

from .batch import build_transfer
from .errors import MissingMandatoryField, SepaRuleError
from .models import DirectDebitBatchRequest

configure_logging(service_name="direct-debit-api")
logger = logging.getLogger(__name__)

app = FastAPI()

# expose metrics once
app.mount("/metrics", make_asgi_app())


@app.get("/healthz")
async def healthz():
    return {"ok": True}


# ---------------------------------------------------------------------------
# /direct-debit
# ---------------------------------------------------------------------------


@app.post("/direct-debit")
def render_direct_debit(payload: DirectDebitBatchRequest) -> Response:
    """Render a pain.008 document for *payload*; nothing is submitted."""
    try:
        transfer = build_transfer(payload)
        xml = transfer.to_bytes()
    except SepaRuleError as exc:
        if not isinstance(exc, MissingMandatoryField):
            # missing fields are already counted by the assembler
            sepa_build_failures_total.labels(reason=type(exc).__name__).inc()
        logger.warning("rejected direct debit batch: %s", exc)
        raise HTTPException(status_code=422, detail=str(exc)) from exc
    return Response(content=xml, media_type="application/xml")
