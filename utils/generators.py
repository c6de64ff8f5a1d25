from datetime import date

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier"""
    return cuid_generator()


def generate_invoice_no(month: str) -> str:
    """
    Invoice number for a billing record, e.g. INV-2026-10-k3j9x2qa.

    `month` is the billed period as entered (typically YYYY-MM); the suffix is
    the tail of a fresh CUID so numbers stay unique within a month.
    """
    period = month.strip().replace(" ", "-") or date.today().strftime("%Y-%m")
    return f"INV-{period}-{generate_cuid()[-8:]}"
