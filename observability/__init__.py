"""Prometheus metrics for the direct-debit writer."""

from .metrics import (sepa_build_failures_total, sepa_documents_built_total,
                      sepa_transactions_serialized_total)

__all__ = [
    "sepa_documents_built_total",
    "sepa_transactions_serialized_total",
    "sepa_build_failures_total",
]
