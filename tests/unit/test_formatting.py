# =============================================================================
# tests/unit/test_formatting.py
# Unit Tests for display formatting
# =============================================================================

from datetime import date, datetime

import pytest

from psico_core.ui import format_date


@pytest.mark.parametrize("value, expected", [
    ("2024-03-01", "01/03/2024"),
    ("2024-03-01T00:00:00.000Z", "01/03/2024"),
    (date(2024, 12, 25), "25/12/2024"),
    (datetime(2024, 12, 25, 23, 59), "25/12/2024"),
])
def test_formats_dates(value, expected):
    assert format_date(value) == expected


@pytest.mark.parametrize("value", [None, "", float("nan")])
def test_missing_value(value):
    assert format_date(value) == "N/A"


@pytest.mark.parametrize("value", ["not a date", "2024-13-45"])
def test_invalid_value(value):
    assert format_date(value) == "Data inválida"
