"""Tests for identifier generators"""
from freezegun import freeze_time

from utils.generators import generate_cuid, generate_invoice_no


def test_cuids_are_unique():
    assert len({generate_cuid() for _ in range(50)}) == 50


def test_invoice_number_uses_billed_month():
    invoice_no = generate_invoice_no("2026-10")

    assert invoice_no.startswith("INV-2026-10-")
    assert len(invoice_no.rsplit("-", 1)[1]) == 8


@freeze_time("2026-03-15")
def test_blank_month_falls_back_to_current_month():
    assert generate_invoice_no("  ").startswith("INV-2026-03-")
