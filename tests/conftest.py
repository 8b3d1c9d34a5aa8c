"""Shared test fixtures."""

from pathlib import Path

import pytest

from pharmapack.models import MedicineRecord, ParserSettings

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir():
    """Return path to fixtures directory."""
    return FIXTURES_DIR


@pytest.fixture
def medicine_csv():
    """Path to the small medicine source fixture."""
    return FIXTURES_DIR / "medicine_sample.csv"


@pytest.fixture
def settings():
    """Default parser settings (taka marker, comma separator)."""
    return ParserSettings()


@pytest.fixture
def sample_records():
    """One record per descriptor shape seen in the source data."""
    return [
        MedicineRecord(1, "100 ml bottle: ৳ 130.00", "(100's pack: ৳ 100.00)"),
        MedicineRecord(2, "37.5 ml bottle: ৳ 130.00,50 ml bottle: ৳ 160.00", None),
        MedicineRecord(3, "120 metered doses,120 metered doses (refill)", None),
        MedicineRecord(4, "Unit Price: ৳ 8.00,(60's pack: ৳ 480.00),",
                       "(60's pack: ৳ 480.00)"),
        MedicineRecord(5, None, None),
        MedicineRecord(6, "0.2 ml syringe: ৳ 1,450.00", None),
        MedicineRecord(7, "Price Unavailable",
                       "(100's pack: ৳ 100.00),(150's pack: ৳ 150.00)"),
        MedicineRecord(8, "10 ml vial: ৳ 50.00,,20 ml vial: ৳ 90.00", None),
    ]
