"""ISO 20022 schema identifiers and SEPA sequence types."""
from __future__ import annotations

from enum import Enum
from typing import Final

NS_PREFIX: Final = "urn:iso:std:iso:20022:tech:xsd:"
XSI_NS: Final = "http://www.w3.org/2001/XMLSchema-instance"


class SepaSchema(Enum):
    PAIN_001_001_03 = "pain.001.001.03"  # credit transfer
    PAIN_008_001_02 = "pain.008.001.02"
    PAIN_008_001_03 = "pain.008.001.03"


class SequenceType(Enum):
    FIRST = "FRST"
    RECURRING = "RCUR"
    ONE_OFF = "OOFF"
    FINAL = "FNAL"


def schema_to_string(schema: SepaSchema) -> str:
    return schema.value


def schema_namespace(schema: SepaSchema) -> str:
    """Return the default namespace URI declared by documents of *schema*."""
    return NS_PREFIX + schema_to_string(schema)


def sequence_type_to_string(seq: SequenceType) -> str:
    return seq.value


def parse_schema(value: str | SepaSchema) -> SepaSchema:
    """Accept an enum member, its value (``pain.008.001.02``) or its name."""

    if isinstance(value, SepaSchema):
        return value
    try:
        return SepaSchema(value)
    except ValueError:
        if isinstance(value, str) and value.upper().replace(".", "_") in SepaSchema.__members__:
            return SepaSchema[value.upper().replace(".", "_")]
        raise ValueError(f"unknown ISO 20022 schema: {value!r}") from None
