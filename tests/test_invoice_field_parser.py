# -----------------------------------------------------------------------------
# Author: Frank Campbell Bogle
# Created: 2026-02-12
# Description: test_invoice_field_parser.py
# -----------------------------------------------------------------------------
import pytest

from conftest import ACME_TEXT
from document.InvoiceRecord import InvoiceFields
from parsing.InvoiceFieldParser import DEFAULT_RULES, InvoiceFieldParser


@pytest.fixture
def parser() -> InvoiceFieldParser:
    return InvoiceFieldParser()


def test_parses_all_four_fields(parser):
    fields = parser.parse(ACME_TEXT)

    assert fields == InvoiceFields(
        invoice_number="INV-000123",
        date="2024-01-05",
        store="Acme",
        amount="42.50",
    )


def test_missing_fields_are_none_and_independent(parser):
    fields = parser.parse("Thank you for shopping!\nTotal: 19.99\n")

    assert fields.amount == "19.99"
    assert fields.invoice_number is None
    assert fields.date is None
    assert fields.store is None


@pytest.mark.parametrize("text", ["", "   ", None, 12345, "\x00\x01garbage", "Invoice", "Total: $"])
def test_parse_is_total(parser, text):
    fields = parser.parse(text)
    assert isinstance(fields, InvoiceFields)


@pytest.mark.parametrize(
    "text, expected",
    [
        ("Date: 05-Jan-2024", "05-Jan-2024"),
        ("Issued 2024/01/05", "2024/01/05"),
        ("date: 05/01/2024", "05/01/2024"),
    ],
)
def test_date_shapes(parser, text, expected):
    assert parser.parse(text).date == expected


def test_case_insensitive_and_first_match_wins(parser):
    text = "inv# ab-12345\nINVOICE: ZZ-99999\nVENDOR: Joe & Sons\nmerchant: Other Shop"
    fields = parser.parse(text)

    assert fields.invoice_number == "ab-12345"
    assert fields.store == "Joe & Sons"


def test_store_does_not_run_across_lines(parser):
    fields = parser.parse("Merchant: Corner Deli\nDate: 2024-02-03")
    assert fields.store == "Corner Deli"


def test_amount_with_currency_symbol_and_integer(parser):
    assert parser.parse("Amount Due: €120").amount == "120"
    assert parser.parse("Subtotal: 10.00\nTotal: £12.34").amount == "12.34"


def test_short_invoice_token_is_ignored(parser):
    assert parser.parse("Invoice 12").invoice_number is None


def test_present_fields_satisfy_their_rule(parser):
    text = ACME_TEXT + "\nFrom: Bits & Bytes 42\nIssued: 1/2/24"
    fields = parser.parse(text).to_dict()

    for rule in DEFAULT_RULES:
        value = fields[rule.field_name]
        if value is not None:
            assert value in text
            assert len(value) >= rule.min_length


def test_invoice_label_joined_to_previous_word(parser):
    assert parser.parse("ProformaInvoice 12345").invoice_number == "12345"
    assert parser.parse("Ref/INV: AB-99881").invoice_number == "AB-99881"
