from __future__ import annotations

import math

import pytest

from merchant_summary.analytics.summary import summarize, parse_rate, parse_date_range, parse_merchants
from merchant_summary.analytics.common import round_money, running_total, to_number, rate_label
from merchant_summary.data.ingest import ingest_rows
from merchant_summary.errors import InvalidParameterError, NoMatchingDataError


def _rows(result):
    return [(r.merchant, r.withdrawal, r.fees, r.percent_amount, r.count) for r in result.summary_rows]


# ---------------------------------------------------------------------------
# Scenario
# ---------------------------------------------------------------------------

def test_two_merchant_scenario(scenario_dataset):
    result = summarize(scenario_dataset, ["A", "B"], "2023-03-01", "2023-03-31", 5)

    assert result.rate_label == "5% Amount"
    assert _rows(result) == [
        ("A", 100.00, 2.00, 5.00, 1),
        ("B", 50.00, 1.00, 2.50, 1),
        ("TOTAL", 150.00, 3.00, 7.50, 2),
    ]
    assert result.date_range == "2023-03-01 to 2023-03-31"


def test_summary_rows_render_with_rate_column(scenario_dataset):
    result = summarize(scenario_dataset, ["A", "B"], "2023-03-01", "2023-03-31", "5")
    assert result.total.as_row(result.rate_label) == {
        "Merchant": "TOTAL",
        "Total Withdrawal Amount": 150.0,
        "Total Withdrawal Fees": 3.0,
        "5% Amount": 7.5,
        "Transaction Count": 2,
    }


def test_mixed_dataset_groups_in_first_seen_order(mixed_dataset):
    result = summarize(mixed_dataset, ["ACME", "Globex"], "2024-01-01", "2024-01-31", 4)

    assert _rows(result) == [
        ("Globex", 225.25, 3.50, 9.01, 2),
        ("ACME", 1000.00, 10.00, 40.00, 1),
        ("TOTAL", 1225.25, 13.50, 49.01, 3),
    ]
    assert [f.record.fields["Ref"] for f in result.filtered_rows] == ["T-1", "T-2", "T-4"]
    assert [f.percent_amount for f in result.filtered_rows] == [8.0, 40.0, 1.01]


def test_filtered_rows_carry_rate_column(mixed_dataset):
    result = summarize(mixed_dataset, ["Globex"], "2024-01-01", "2024-01-31", 3.5)
    row = result.filtered_rows[0].as_row(result.rate_label)
    assert result.rate_label == "3.5% Amount"
    assert row["3.5% Amount"] == 7.0
    assert row["Ref"] == "T-1"


def test_selected_merchant_without_rows_gets_no_zero_row(mixed_dataset):
    result = summarize(mixed_dataset, ["ACME", "Nobody"], "2024-01-01", "2024-01-31", 4)
    assert [r.merchant for r in result.summary_rows] == ["ACME", "TOTAL"]


def test_non_numeric_amounts_count_as_zero(mixed_dataset):
    result = summarize(mixed_dataset, ["Initech"], "2024-01-01", "2024-01-31", 10)
    assert _rows(result) == [
        ("Initech", 0.0, 0.0, 0.0, 1),
        ("TOTAL", 0.0, 0.0, 0.0, 1),
    ]


# ---------------------------------------------------------------------------
# Date range
# ---------------------------------------------------------------------------

def test_end_date_is_inclusive_and_next_day_excluded(scenario_dataset):
    result = summarize(scenario_dataset, ["A", "B"], "2023-03-15", "2023-03-15", 5)
    assert [r.merchant for r in result.summary_rows] == ["A", "TOTAL"]

    result = summarize(scenario_dataset, ["A", "B"], "2023-03-16", "2023-03-31", 5)
    assert [r.merchant for r in result.summary_rows] == ["B", "TOTAL"]


def test_rows_without_a_date_never_match(mixed_dataset):
    result = summarize(mixed_dataset, ["ACME"], "1900-01-01", "2999-12-31", 0)
    assert [f.record.fields["Ref"] for f in result.filtered_rows] == ["T-2", "T-5"]


def test_datetime_bounds_are_truncated_to_dates(scenario_dataset):
    result = summarize(scenario_dataset, ["A"], "2023-03-15T00:00:00Z", "2023-03-15T00:00:00Z", 5)
    assert result.start_date == result.end_date == "2023-03-15"


# ---------------------------------------------------------------------------
# Rounding
# ---------------------------------------------------------------------------

def test_total_sums_rounded_merchant_figures():
    dataset = ingest_rows([
        {"Date": "2024-01-01", "Merchant Name": "A", "Withdrawal Amount": 0.004, "Withdrawal Fees": 0},
        {"Date": "2024-01-01", "Merchant Name": "B", "Withdrawal Amount": 0.004, "Withdrawal Fees": 0},
    ])
    result = summarize(dataset, ["A", "B"], "2024-01-01", "2024-01-01", 0)
    # raw sum 0.008 would round to 0.01; the total adds the rounded 0.00 + 0.00
    assert [r.withdrawal for r in result.summary_rows] == [0.0, 0.0, 0.0]


def test_merchant_totals_accumulate_in_row_order():
    amounts = [435.54, 3.16, 383.07, 293.33, 249.44, 481.41, 286.41, 209.54]
    dataset = ingest_rows([
        {"Date": "2024-01-01", "Merchant Name": "A", "Withdrawal Amount": a, "Withdrawal Fees": 0}
        for a in amounts
    ])
    result = summarize(dataset, ["A"], "2024-01-01", "2024-01-01", 5)

    # row-by-row accumulation lands just above the 117.095 tie
    assert running_total(a * 5 / 100 for a in amounts) > 117.095
    assert result.summary_rows[0].percent_amount == 117.10
    assert result.total.percent_amount == 117.10


def test_running_total_is_plain_left_to_right_addition():
    values = [0.1] * 10
    expected = 0.0
    for v in values:
        expected += v
    assert running_total(values) == expected
    assert running_total([]) == 0.0


def test_half_cent_rounds_up():
    assert round_money(0.125) == 0.13
    assert round_money(-0.125) == -0.13
    assert round_money(2.5) == 2.5
    assert round_money(-0.001) == 0.0
    assert math.copysign(1, round_money(-0.001)) == 1


# ---------------------------------------------------------------------------
# Purity
# ---------------------------------------------------------------------------

def test_summarize_is_idempotent_and_read_only(mixed_dataset):
    before = [dict(r.fields) for r in mixed_dataset.records]
    first = summarize(mixed_dataset, ["ACME", "Globex"], "2024-01-01", "2024-01-31", 4)
    second = summarize(mixed_dataset, ["ACME", "Globex"], "2024-01-01", "2024-01-31", 4)

    assert first == second
    assert [dict(r.fields) for r in mixed_dataset.records] == before


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------

def test_no_matching_rows(scenario_dataset):
    with pytest.raises(NoMatchingDataError) as exc_info:
        summarize(scenario_dataset, ["A"], "2024-01-01", "2024-12-31", 5)
    assert exc_info.value.status_code == 404
    assert exc_info.value.details["merchants"] == ["A"]


@pytest.mark.parametrize("rate", [-1, 100.01, "abc", "", None, True, float("nan"), float("inf"), [5]])
def test_invalid_rate(scenario_dataset, rate):
    with pytest.raises(InvalidParameterError) as exc_info:
        summarize(scenario_dataset, ["A"], "2023-03-01", "2023-03-31", rate)
    assert exc_info.value.code == "INVALID_PERCENTAGE"


@pytest.mark.parametrize("start, end", [
    ("2023-13-01", "2023-12-31"),
    ("yesterday", "2023-12-31"),
    (None, "2023-12-31"),
    ("2023-03-31", "2023-03-01"),
    ("2023-03-01junk", "2023-03-31"),
    ("20230301", "2023-03-31"),
    ("2023-03-01", "20230331T00:00"),
])
def test_invalid_date_range(scenario_dataset, start, end):
    with pytest.raises(InvalidParameterError) as exc_info:
        summarize(scenario_dataset, ["A"], start, end, 5)
    assert exc_info.value.code == "INVALID_DATE"


@pytest.mark.parametrize("selected", [[], ["", "  "], None, [None, 3]])
def test_empty_selection(scenario_dataset, selected):
    with pytest.raises(InvalidParameterError) as exc_info:
        summarize(scenario_dataset, selected, "2023-03-01", "2023-03-31", 5)
    assert exc_info.value.code == "NO_MERCHANTS"


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def test_parameter_parsers():
    assert parse_rate(" 12.5 ") == 12.5
    assert parse_rate(0) == 0.0
    assert parse_rate("100") == 100.0
    assert parse_date_range("2024-01-01", "2024-01-01") == ("2024-01-01", "2024-01-01")
    assert parse_merchants([" A", "A", "B "]) == ("A", "B")
    assert parse_merchants("Solo") == ("Solo",)


@pytest.mark.parametrize("value, expected", [
    (12, 12.0),
    (12.5, 12.5),
    ("12.5", 12.5),
    ("$1,234.50", 1234.5),
    ("abc", 0.0),
    ("", 0.0),
    (None, 0.0),
    (True, 0.0),
    (float("nan"), 0.0),
])
def test_to_number(value, expected):
    assert to_number(value) == expected


def test_rate_label_formatting():
    assert rate_label(5) == "5% Amount"
    assert rate_label(5.0) == "5% Amount"
    assert rate_label(3.5) == "3.5% Amount"
    assert rate_label(0.1) == "0.1% Amount"
