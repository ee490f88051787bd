"""
FACTURA-PDF — Unit Tests
Adaptador de datos y formato de moneda.
"""

import copy

import pytest

from factura_pdf.utils.formatting import format_currency, format_number_es_co
from factura_pdf.utils.invoice_adapter import (
    DEFAULT_CLIENT,
    DEFAULT_COMPANY,
    DEFAULT_INVOICE,
    adapt_invoice_data,
)


# ─────────────────────────────────────────────────────────────
# ADAPTADOR
# ─────────────────────────────────────────────────────────────

class TestAdaptInvoiceData:
    def test_empty_input_gets_all_defaults(self):
        adapted = adapt_invoice_data({})
        assert adapted["company"] == DEFAULT_COMPANY
        assert adapted["client"] == DEFAULT_CLIENT
        assert adapted["invoice"] == DEFAULT_INVOICE
        assert adapted["items"] == []
        assert adapted["iva"] == ""
        assert adapted["descuento"] == ""
        assert adapted["observations"] == []

    def test_simple_item_aliases(self):
        adapted = adapt_invoice_data(
            {"items": [{"description": "Caja", "quantity": 1, "price": 1500}]}
        )
        assert adapted["items"] == [{
            "code": "", "name": "Caja", "details": [],
            "quantity": 1, "unit_price": 1500,
        }]

    def test_name_wins_over_description(self):
        adapted = adapt_invoice_data(
            {"items": [{"name": "A", "description": "B", "unit_price": 2, "price": 3}]}
        )
        item = adapted["items"][0]
        assert item["name"] == "A"
        assert item["unit_price"] == 2
        assert item["quantity"] == 0

    def test_partial_sections_are_merged_with_defaults(self):
        adapted = adapt_invoice_data({
            "company": {"name": "ACME"},
            "client": {"name": "Juan", "nit": "123"},
        })
        assert adapted["company"]["name"] == "ACME"
        assert adapted["company"]["logo"] == ""
        assert adapted["client"]["nit"] == "123"
        assert adapted["client"]["address"] == ""

    def test_iva_falls_back_to_invoice(self):
        adapted = adapt_invoice_data({"invoice": {"iva": "19%", "descuento": 500}})
        assert adapted["iva"] == "19%"
        assert adapted["descuento"] == 500

    def test_root_iva_wins_when_truthy(self):
        adapted = adapt_invoice_data({"iva": 150, "invoice": {"iva": "19%"}})
        assert adapted["iva"] == 150

    def test_falsy_root_iva_falls_through(self):
        adapted = adapt_invoice_data({"iva": 0, "invoice": {"iva": "19%"}})
        assert adapted["iva"] == "19%"

    def test_input_is_not_mutated(self):
        data = {"company": {"name": "ACME"}, "items": [{"name": "x", "price": 1}]}
        snapshot = copy.deepcopy(data)
        adapted = adapt_invoice_data(data)
        adapted["company"]["name"] = "otro"
        assert data == snapshot


# ─────────────────────────────────────────────────────────────
# FORMATO DE MONEDA
# ─────────────────────────────────────────────────────────────

class TestFormatCurrency:
    @pytest.mark.parametrize("value,expected", [
        (0, "$ 0"),
        (999, "$ 999"),
        (1234, "$ 1.234"),
        (119000, "$ 119.000"),
        (119000.0, "$ 119.000"),
        (1234567, "$ 1.234.567"),
        (1234.5, "$ 1.234,5"),
        (0.1234, "$ 0,123"),
        (2.0005, "$ 2,001"),
        (-1500, "$ -1.500"),
    ])
    def test_numbers(self, value, expected):
        assert format_currency(value) == expected

    def test_dotted_string_is_reformatted(self):
        assert format_currency("198.000") == "$ 198.000"
        assert format_currency("1234567") == "$ 1.234.567"

    def test_other_values_pass_through(self):
        assert format_currency("abc") == "abc"
        assert format_currency(None) is None
        assert format_currency(True) is True

    def test_nan(self):
        assert format_number_es_co(float("nan")) == "NaN"
