# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-03
# Description: InvoiceFieldParser
# -----------------------------------------------------------------------------
import re
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple

from document.InvoiceRecord import InvoiceFields
from utility.logging_utils import get_class_logger


@dataclass(frozen=True)
class FieldRule:
    """
    One declarative detection rule: the first match of `pattern` in
    document order wins, group 1 is the value.
    """
    field_name: str
    pattern: re.Pattern
    clean: Callable[[str], str] = str.strip
    min_length: int = 1

    def apply(self, text: str) -> Optional[str]:
        m = self.pattern.search(text)
        if not m:
            return None
        value = self.clean(m.group(1))
        if len(value) < self.min_length:
            return None
        return value


_FLAGS = re.IGNORECASE

_MONTH_NAME_DATE = r"[0-9]{1,2}[\-/][A-Za-z]{3,}[\-/][0-9]{2,4}"
_ISO_DATE = r"[0-9]{4}[\-/][0-9]{1,2}[\-/][0-9]{1,2}"
_DMY_DATE = r"[0-9]{1,2}[\-/][0-9]{1,2}[\-/][0-9]{2,4}"

DEFAULT_RULES: Tuple[FieldRule, ...] = (
    FieldRule(
        field_name="invoice_number",
        pattern=re.compile(
            # no leading \b: joined labels such as "ProformaInvoice" still count
            r"(?:Invoice|Inv)(?![a-z])\.?"
            r"(?:\s*(?:Number\b|No\b\.?|#))?"
            r"[#:\-\s]*([A-Z0-9\-]{5,})",
            _FLAGS,
        ),
    ),
    FieldRule(
        field_name="amount",
        pattern=re.compile(
            r"\b(?:Total|Amount)(?:\s+Due)?[:\-\s]*[$€£]?\s*([0-9]+(?:\.[0-9]{2})?)",
            _FLAGS,
        ),
    ),
    FieldRule(
        field_name="date",
        pattern=re.compile(
            rf"\b(?:Date|Issued)[:\-\s]*({_MONTH_NAME_DATE}|{_ISO_DATE}|{_DMY_DATE})",
            _FLAGS,
        ),
    ),
    FieldRule(
        field_name="store",
        pattern=re.compile(
            r"\b(?:Store|Merchant|Vendor|From)[:\-\s]*([A-Za-z0-9&][A-Za-z0-9& \t]{2,})",
            _FLAGS,
        ),
        min_length=3,
    ),
)


class InvoiceFieldParser:
    """
    Turns raw OCR text into InvoiceFields.

    Every rule runs independently over the full text, so a miss on one
    field never blocks the others. parse() never raises.
    """

    def __init__(self, rules: Tuple[FieldRule, ...] = DEFAULT_RULES, logger=None):
        self.rules = rules
        self.logger = logger or get_class_logger(self.__class__)

    def parse(self, text: Any) -> InvoiceFields:
        if not isinstance(text, str) or not text.strip():
            return InvoiceFields()

        found: Dict[str, Optional[str]] = {}
        for rule in self.rules:
            found[rule.field_name] = rule.apply(text)

        fields = InvoiceFields(**found)
        self.logger.debug("parse: text_len=%d fields=%r", len(text), fields)
        return fields
