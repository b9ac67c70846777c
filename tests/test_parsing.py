import math

import pytest

from fonsterkalkyl.pricing.price_table.parsing import (
    multiplier_to_cell,
    multiplier_to_percent,
    percent_to_multiplier,
    to_int_loose,
    to_multiplier,
    to_number_loose,
    to_vat_rate,
)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (0, 1.0),
        (15, 1.15),
        (-10, 0.90),
        (0.05, 1.05),
        (1.05, 1.05),
        ("15", 1.15),
        ("1,15", 1.15),
        (" 0,05 ", 1.05),
        (152, 2.52),
        (3, 1.03),
    ],
)
def test_to_multiplier_decision_table(raw, expected):
    assert to_multiplier(raw) == pytest.approx(expected)


def test_to_multiplier_between_half_and_three_is_taken_as_is():
    assert to_multiplier(0.5) == 0.5
    assert to_multiplier(2.99) == 2.99


def test_to_multiplier_unparseable_is_none():
    assert to_multiplier("abc") is None
    assert to_multiplier("") is None
    assert to_multiplier(None) is None


@pytest.mark.parametrize("raw", [None, "", "   ", "abc", True, False, math.nan, math.inf, "inf", "1_000"])
def test_to_number_loose_rejects(raw):
    assert to_number_loose(raw) is None


def test_to_number_loose_accepts_decimal_comma_and_numbers():
    assert to_number_loose("1,05") == 1.05
    assert to_number_loose(" 4000 ") == 4000.0
    assert to_number_loose(-400) == -400.0


def test_to_int_loose_truncates():
    assert to_int_loose("7") == 7
    assert to_int_loose(3.9) == 3
    assert to_int_loose("x") is None


def test_vat_rate_percent_or_fraction():
    assert to_vat_rate(25) == 0.25
    assert to_vat_rate("25") == 0.25
    assert to_vat_rate(0.25) == 0.25
    assert to_vat_rate(1) == 1
    assert to_vat_rate("n/a") is None


def test_admin_percent_helpers():
    assert multiplier_to_percent(1.15) == 15.0
    assert multiplier_to_percent(15) == 15.0
    assert multiplier_to_percent(0.05) == 5.0
    assert multiplier_to_percent(0) == 0.0
    assert multiplier_to_percent("x") is None

    assert percent_to_multiplier(15) == pytest.approx(1.15)
    assert percent_to_multiplier("-10") == pytest.approx(0.9)
    assert percent_to_multiplier("") is None


@pytest.mark.parametrize("m", [0.3, 0.5, 1.0, 1.15, 2.99, 3.0, 3.5])
def test_multiplier_to_cell_reads_back(m):
    assert to_multiplier(multiplier_to_cell(m)) == pytest.approx(m)
