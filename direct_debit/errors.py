"""Rule violations raised while assembling a direct-debit document."""
from __future__ import annotations


class SepaRuleError(ValueError):
    """Base class for every SEPA rule violation."""


class MissingMandatoryField(SepaRuleError):
    """A field required for serialization has not been set."""

    def __init__(self, field: str, message: str | None = None) -> None:
        self.field = field
        super().__init__(message or f"The {field.replace('_', ' ')} is mandatory.")


class InvalidIdentity(SepaRuleError):
    """An account identity is structurally invalid or has no usable BIC."""


class UnsupportedSchema(SepaRuleError):
    """The schema cannot be produced by this document type."""


class DuplicateTransactionId(SepaRuleError):
    """An instruction or end-to-end id is already used in the document."""
