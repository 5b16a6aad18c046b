from decimal import Decimal

import pytest

from billbook.calculator import (
    compute_item_amount,
    compute_totals,
    format_currency,
    format_display_date,
    format_inr,
    format_number,
    number_to_words,
    parse_number,
)


@pytest.mark.parametrize(
    "quantity, rate, expected",
    [
        (10, 50, "500.00"),
        (2.5, 3.3, "8.25"),
        (0, 99, "0.00"),
        (1.005, 1, "1.01"),
        (3, 0.335, "1.01"),
    ],
)
def test_item_amount_is_quantity_times_rate(quantity, rate, expected):
    assert compute_item_amount(quantity, rate) == expected


def test_item_amount_tolerates_negative_and_junk_input():
    assert compute_item_amount(-2, 5) == "-10.00"
    assert compute_item_amount("abc", 5) == "0.00"
    assert compute_item_amount(None, None) == "0.00"


def test_dyeing_scenario_totals():
    totals = compute_totals([{"description": "Dyeing", "quantity": 10, "rate": 50}], "2.5", "2.5", "0")

    assert totals.net_amount == "500.00"
    assert totals.cgst_amount == "12.50"
    assert totals.sgst_amount == "12.50"
    assert totals.igst_amount == "0.00"
    assert totals.total_amount == "525.00"
    assert totals.amount_in_words == "Five Hundred and Twenty Five Rupees Only"


def test_net_amount_ignores_stale_amount_strings():
    items = [
        {"quantity": 2, "rate": 3, "amount": "999.00"},
        {"quantity": 1.5, "rate": 4, "amount": "0.00"},
    ]
    assert compute_totals(items).net_amount == "12.00"


@pytest.mark.parametrize(
    "percent, expected",
    [(0, "0.00"), ("", "0.00"), ("7.5", "37.50"), ("100", "500.00"), ("abc", "0.00"), (None, "0.00")],
)
def test_tax_is_percent_of_net(percent, expected):
    totals = compute_totals([{"quantity": 10, "rate": 50}], percent, percent, percent)
    assert totals.cgst_amount == expected
    assert totals.sgst_amount == expected
    assert totals.igst_amount == expected


def test_total_is_sum_of_displayed_figures():
    totals = compute_totals([{"quantity": 1, "rate": 10.01}], "2.5", "2.5", "0.3")
    parts = [totals.net_amount, totals.cgst_amount, totals.sgst_amount, totals.igst_amount]

    assert Decimal(totals.total_amount) == sum(Decimal(part) for part in parts)


def test_totals_accept_bill_item_objects():
    class Row:
        quantity = 4
        rate = 2.5

    assert compute_totals([Row(), Row()]).net_amount == "20.00"


def test_totals_as_dict_uses_record_keys():
    data = compute_totals([]).as_dict()
    assert data == {
        "netAmount": "0.00",
        "cgstAmount": "0.00",
        "sgstAmount": "0.00",
        "igstAmount": "0.00",
        "totalAmount": "0.00",
        "amountInWords": "Zero Rupees Only",
    }


@pytest.mark.parametrize(
    "amount, words",
    [
        (0, "Zero"),
        (5, "Five"),
        (19, "Nineteen"),
        (21, "Twenty One"),
        (100, "One Hundred"),
        (105, "One Hundred and Five"),
        (1500, "One Thousand Five Hundred"),
        (250000, "Two Lakh Fifty Thousand"),
        (1234.00, "One Thousand Two Hundred and Thirty Four"),
        (1234.50, "One Thousand Two Hundred and Thirty Four and 50/100"),
        (1234.05, "One Thousand Two Hundred and Thirty Four and 5/100"),
        (10000000, "One Hundred Lakh"),
        (
            12345678,
            "One Hundred and Twenty Three Lakh Forty Five Thousand Six Hundred and Seventy Eight",
        ),
    ],
)
def test_number_to_words(amount, words):
    assert number_to_words(amount) == words


def test_number_to_words_fraction_only():
    assert number_to_words(0.5) == "Zero and 50/100"
    assert number_to_words("0.004") == "Zero"


def test_number_to_words_negative():
    assert number_to_words(-12) == "Minus Twelve"


def test_parse_number_falls_back_to_default():
    assert parse_number(" 3 ") == 3.0
    assert parse_number("") == 0.0
    assert parse_number("nan") == 0.0
    assert parse_number("inf") == 0.0
    assert parse_number([1]) == 0.0
    assert parse_number("x", default=1.5) == 1.5


def test_formatting_helpers():
    assert format_currency(12.5) == "12.50"
    assert format_currency(-0.001) == "0.00"
    assert format_number(10.0) == "10"
    assert format_number("2.5") == "2.5"
    assert format_inr(500) == "₹500.00"
    assert format_inr(123456.78) == "₹1,23,456.78"
    assert format_inr(12345678.9) == "₹1,23,45,678.90"
    assert format_inr(-1500) == "-₹1,500.00"
    assert format_display_date("2024-03-05") == "05/03/2024"
    assert format_display_date("someday") == "someday"


def test_huge_amounts_keep_every_digit():
    assert compute_item_amount(1e30, 1) == "1" + "0" * 30 + ".00"

    totals = compute_totals([{"quantity": 1e27, "rate": 10}], "10")

    assert totals.net_amount == "1" + "0" * 28 + ".00"
    assert totals.cgst_amount == "1" + "0" * 27 + ".00"
    assert totals.total_amount == "11" + "0" * 27 + ".00"
    assert totals.amount_in_words.endswith("Lakh Rupees Only")
