"""Prometheus metrics for the direct-debit writer.

The FastAPI app exposes them by mounting the ASGI exporter at ``/metrics``.
"""
from __future__ import annotations

from typing import Any, Dict, Tuple, Type

from prometheus_client import Counter

# ----------------------------
# Registration helper (avoid duplicate collectors)
# ----------------------------
_METRICS: Dict[Tuple[Type[Any], str], Any] = {}


def get_metric(cls: Type[Any], name: str, *args, **kwargs):
    key = (cls, name)
    if key in _METRICS:
        return _METRICS[key]
    metric = cls(name, *args, **kwargs)
    _METRICS[key] = metric
    return metric


# ----------------------------
# Document assembly
# ----------------------------

sepa_documents_built_total = get_metric(
    Counter,
    "sepa_documents_built_total",
    "Number of pain documents successfully assembled",
    ["schema"],
)

sepa_transactions_serialized_total = get_metric(
    Counter,
    "sepa_transactions_serialized_total",
    "Number of transaction nodes written into assembled documents",
)

sepa_build_failures_total = get_metric(
    Counter,
    "sepa_build_failures_total",
    "Number of assembly attempts rejected by a SEPA rule",
    ["reason"],
)
