"""SEPA direct debit initiation (ISO 20022 pain.008) writer."""
from .errors import (DuplicateTransactionId, InvalidIdentity,  # noqa: F401
                     MissingMandatoryField, SepaRuleError, UnsupportedSchema)
from .grouping import GroupKey, PaymentGroup, group_transactions  # noqa: F401
from .iban import IbanData  # noqa: F401
from .models import DebitTransaction, DirectDebitBatchRequest  # noqa: F401
from .pain008 import SepaDebitTransfer  # noqa: F401
from .schema import SepaSchema, SequenceType  # noqa: F401
