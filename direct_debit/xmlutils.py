"""Small ElementTree helpers shared by the pain builders."""
from __future__ import annotations

import xml.etree.ElementTree as ET
from typing import Final, Optional

from .iban import IbanData

NOT_PROVIDED: Final = "NOTPROVIDED"
XML_DECLARATION: Final = '<?xml version="1.0" encoding="UTF-8" standalone="yes"?>\n'


def new_element(parent: ET.Element, tag: str, text: Optional[str] = None, **attrib: str) -> ET.Element:
    """Append ``<tag>`` to *parent* and return it (handle for further children)."""

    elem = ET.SubElement(parent, tag, attrib)
    if text is not None:
        elem.text = str(text)
    return elem


def create_bic(agent: ET.Element, iban: IbanData) -> ET.Element:
    """Write the ``FinInstnId`` of an agent, falling back to NOTPROVIDED."""

    fin_instn_id = new_element(agent, "FinInstnId")
    if iban.unknown_bic:
        new_element(new_element(fin_instn_id, "Othr"), "Id", NOT_PROVIDED)
    else:
        new_element(fin_instn_id, "BIC", iban.bic)
    return fin_instn_id


def indent(elem: ET.Element, level: int = 0) -> None:
    """Pretty-print helper (in-place)."""

    pad = "\n" + level * "  "
    if len(elem):
        if not elem.text or not elem.text.strip():
            elem.text = pad + "  "
        for child in elem:
            indent(child, level + 1)
        if not child.tail or not child.tail.strip():  # type: ignore[name-defined]
            child.tail = pad
    if level and (not elem.tail or not elem.tail.strip()):
        elem.tail = pad


def to_string(root: ET.Element) -> str:
    """Serialize *root* with an XML declaration and two-space indentation."""

    indent(root)
    return XML_DECLARATION + ET.tostring(root, encoding="utf-8").decode("utf-8")
