"""Tests for expview.domain.expenses pure functions."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from expview.domain.expenses import (
    filter_expenses,
    format_amount_display,
    format_date_display,
    parse_amount,
    parse_api_expense,
    parse_page_response,
    slice_page,
    sort_by_date_desc,
    total_amount,
    validate_new_expense,
)
from expview.domain.models import Amount, Description, Expense


def make_expense(expense_id: int, amount: str, description: str, day: int = 1, hour: int = 12) -> Expense:
    return Expense(
        id=expense_id,
        amount=Amount(Decimal(amount)),
        description=Description(description),
        date_recorded=datetime(2025, 3, day, hour, tzinfo=timezone.utc),
    )


def make_undated(expense_id: int, amount: str, description: str) -> Expense:
    return Expense(
        id=expense_id,
        amount=Amount(Decimal(amount)),
        description=Description(description),
        date_recorded=None,
    )


class TestParseAmount:
    """Tests for parse_amount."""

    def test_parses_numbers_and_strings(self) -> None:
        """Should accept JSON numbers and numeric strings."""
        assert parse_amount(12.5) == Decimal("12.5")
        assert parse_amount(3) == Decimal("3")
        assert parse_amount(" 15.00 ") == Decimal("15.00")

    def test_rejects_non_numeric(self) -> None:
        """Should raise ValueError for text, booleans and non-finite values."""
        for raw in ("abc", True, None, "NaN", "Infinity"):
            with pytest.raises(ValueError):
                parse_amount(raw)


class TestParseApiExpense:
    """Tests for parse_api_expense."""

    def test_parses_backend_record(self) -> None:
        """Should parse id, amount, description and ISO timestamp."""
        result = parse_api_expense(
            {"id": 7, "amount": 12.5, "description": "Coffee", "dateRecorded": "2025-03-04T09:30:00.000Z"}
        )

        assert result.id == 7
        assert result.amount == Decimal("12.5")
        assert result.description == "Coffee"
        assert result.date_recorded == datetime(2025, 3, 4, 9, 30, tzinfo=timezone.utc)

    def test_accepts_string_amount(self) -> None:
        """Should accept decimal columns serialized as strings."""
        result = parse_api_expense(
            {"id": 1, "amount": "15.00", "description": "Lunch", "dateRecorded": "2025-03-04T09:30:00Z"}
        )

        assert result.amount == Decimal("15.00")

    def test_missing_field_raises(self) -> None:
        """Should raise ValueError when a required field is missing."""
        with pytest.raises(ValueError):
            parse_api_expense({"id": 1, "description": "No amount", "dateRecorded": "2025-03-04T09:30:00Z"})

    def test_rejects_non_positive_id(self) -> None:
        """Should raise ValueError for ids below 1."""
        for expense_id in (0, -4):
            with pytest.raises(ValueError):
                parse_api_expense(
                    {"id": expense_id, "amount": 2, "description": "Tea", "dateRecorded": "2025-03-04T09:30:00Z"}
                )

    def test_rejects_non_positive_amount(self) -> None:
        """Should raise ValueError for zero and negative amounts."""
        for amount in (0, "-3.50"):
            with pytest.raises(ValueError):
                parse_api_expense(
                    {"id": 1, "amount": amount, "description": "Tea", "dateRecorded": "2025-03-04T09:30:00Z"}
                )

    def test_rejects_blank_description(self) -> None:
        """Should raise ValueError for empty, whitespace-only and null descriptions."""
        for description in ("", "   ", None):
            with pytest.raises(ValueError):
                parse_api_expense(
                    {"id": 1, "amount": 2, "description": description, "dateRecorded": "2025-03-04T09:30:00Z"}
                )

    def test_rejects_long_description(self) -> None:
        """Should raise ValueError for descriptions over 50 characters."""
        with pytest.raises(ValueError):
            parse_api_expense({"id": 1, "amount": 2, "description": "x" * 51, "dateRecorded": "2025-03-04T09:30:00Z"})

    def test_accepts_description_at_limit(self) -> None:
        """Should accept a description of exactly 50 characters."""
        result = parse_api_expense(
            {"id": 1, "amount": 2, "description": "x" * 50, "dateRecorded": "2025-03-04T09:30:00Z"}
        )

        assert len(result.description) == 50

    def test_invalid_date_keeps_record(self) -> None:
        """Should keep the record without a date when dateRecorded is unparseable."""
        result = parse_api_expense({"id": 1, "amount": 2, "description": "Bad", "dateRecorded": "not a date"})

        assert result.id == 1
        assert result.date_recorded is None

    def test_missing_or_null_date_keeps_record(self) -> None:
        """Should keep the record without a date when dateRecorded is absent or null."""
        missing = parse_api_expense({"id": 1, "amount": 2, "description": "No date"})
        null = parse_api_expense({"id": 2, "amount": 2, "description": "Null date", "dateRecorded": None})

        assert missing.date_recorded is None
        assert null.date_recorded is None


class TestParsePageResponse:
    """Tests for parse_page_response."""

    def test_parses_pagination_fields(self) -> None:
        """Should keep total and lastPage from the backend."""
        raw = {
            "data": [
                {"id": i, "amount": 1, "description": f"E{i}", "dateRecorded": "2025-03-01T00:00:00Z"}
                for i in range(1, 4)
            ],
            "total": 8,
            "page": 1,
            "lastPage": 2,
        }

        page = parse_page_response(raw, limit=5)

        assert len(page.records) == 3
        assert page.total == 8
        assert page.page == 1
        assert page.last_page == 2

    def test_computes_last_page_when_missing(self) -> None:
        """Should derive lastPage as ceil(total / limit)."""
        page = parse_page_response({"data": [], "total": 11, "page": 1}, limit=5)

        assert page.last_page == 3

    def test_rejects_payload_without_data(self) -> None:
        """Should raise ValueError without a data list."""
        with pytest.raises(ValueError):
            parse_page_response({"total": 3}, limit=5)


class TestSortByDateDesc:
    """Tests for sort_by_date_desc."""

    def test_sorts_newest_first(self) -> None:
        """Should order records by date descending."""
        records = [
            make_expense(1, "1", "old", day=1),
            make_expense(2, "1", "new", day=3),
            make_expense(3, "1", "mid", day=2),
        ]

        result = sort_by_date_desc(records)

        assert [e.id for e in result] == [2, 3, 1]
        assert all(a.date_recorded >= b.date_recorded for a, b in zip(result, result[1:]))

    def test_is_stable_for_equal_dates(self) -> None:
        """Should keep response order for records with the same timestamp."""
        records = [make_expense(1, "1", "a"), make_expense(2, "1", "b"), make_expense(3, "1", "c")]

        result = sort_by_date_desc(records)

        assert [e.id for e in result] == [1, 2, 3]

    def test_undated_records_go_last(self) -> None:
        """Should place records without a date after dated ones, in response order."""
        records = [
            make_undated(1, "1", "first undated"),
            make_expense(2, "1", "old", day=1),
            make_undated(3, "1", "second undated"),
            make_expense(4, "1", "new", day=3),
        ]

        result = sort_by_date_desc(records)

        assert [e.id for e in result] == [4, 2, 1, 3]


class TestFormatDateDisplay:
    """Tests for format_date_display."""

    def test_formats_with_given_format(self) -> None:
        """Should format the recorded date."""
        expense = make_expense(1, "1", "a", day=9)

        assert format_date_display(expense) == "09/03/2025"
        assert format_date_display(expense, "%Y-%m-%d") == "2025-03-09"

    def test_undated_shows_placeholder(self) -> None:
        """Should show 'Unknown date' for a record without a date."""
        assert format_date_display(make_undated(1, "1", "a")) == "Unknown date"


class TestFilterExpenses:
    """Tests for filter_expenses."""

    def setup_method(self) -> None:
        self.records = (
            make_expense(1, "15.00", "Coffee beans", day=4),
            make_expense(2, "3.00", "Bus ticket", day=5),
            make_expense(3, "42.10", "Groceries", day=12),
        )

    def test_empty_filter_returns_page_unchanged(self) -> None:
        """Should return the same records for empty text."""
        assert filter_expenses(self.records, "") is self.records

    def test_matches_description_case_insensitively(self) -> None:
        """Should match description regardless of case."""
        result = filter_expenses(self.records, "COFFEE")

        assert [e.id for e in result] == [1]

    def test_matches_amount_string(self) -> None:
        """Should match '5.00' against 15.00 but not 3.00."""
        result = filter_expenses(self.records, "5.00")

        assert [e.id for e in result] == [1]

    def test_matches_integer_amount_as_two_decimals(self) -> None:
        """Should match amounts sent as whole numbers in two-decimal form."""
        records = (make_expense(1, "15", "Whole"),)

        assert filter_expenses(records, "15.00") == records

    def test_matches_formatted_date(self) -> None:
        """Should match the displayed date string."""
        result = filter_expenses(self.records, "12/03/2025")

        assert [e.id for e in result] == [3]

    def test_uses_given_date_format(self) -> None:
        """Should format dates with the configured format."""
        result = filter_expenses(self.records, "2025-03-05", date_format="%Y-%m-%d")

        assert [e.id for e in result] == [2]

    def test_undated_record_matches_on_description_and_amount_only(self) -> None:
        """Should not match the placeholder text of a record without a date."""
        records = (make_undated(4, "7.25", "Parking"),)

        assert filter_expenses(records, "parking") == records
        assert filter_expenses(records, "7.25") == records
        assert filter_expenses(records, "unknown") == ()

    def test_no_match_returns_empty(self) -> None:
        """Should return an empty tuple when nothing matches."""
        assert filter_expenses(self.records, "rent") == ()

    def test_filtering_is_idempotent(self) -> None:
        """Should return the same set when filtering again with the same text."""
        once = filter_expenses(self.records, "e")
        twice = filter_expenses(once, "e")

        assert once == twice


class TestTotalAmount:
    """Tests for total_amount."""

    def test_sums_exactly(self) -> None:
        """Should sum decimals without float error."""
        records = [make_expense(1, "0.10", "a"), make_expense(2, "0.20", "b")]

        assert total_amount(records) == Decimal("0.30")

    def test_empty_is_zero(self) -> None:
        """Should return zero for an empty page."""
        assert total_amount([]) == Decimal("0")

    def test_display_rounds_to_two_decimals(self) -> None:
        """Should round only when formatting, without digit grouping."""
        assert format_amount_display(Decimal("1234.5")) == "1234.50"


class TestSlicePage:
    """Tests for slice_page."""

    def test_slices_one_based_pages(self) -> None:
        """Should return the records for the requested page."""
        records = [make_expense(i, "1", str(i)) for i in range(1, 9)]

        assert [e.id for e in slice_page(records, 2, 5)] == [6, 7, 8]
        assert slice_page(records, 3, 5) == ()


class TestValidateNewExpense:
    """Tests for validate_new_expense."""

    def test_accepts_valid_input(self) -> None:
        """Should return a trimmed description and decimal amount."""
        new_expense, error = validate_new_expense("12.50", "  Coffee  ")

        assert error is None
        assert new_expense is not None
        assert new_expense["amount"] == Decimal("12.50")
        assert new_expense["description"] == "Coffee"

    def test_rejects_empty_description(self) -> None:
        """Should reject whitespace-only descriptions."""
        new_expense, error = validate_new_expense("12.50", "   ")

        assert new_expense is None
        assert error == "Please enter an amount and a description"

    def test_rejects_missing_amount(self) -> None:
        """Should reject an empty amount field."""
        new_expense, error = validate_new_expense("", "Coffee")

        assert new_expense is None
        assert error is not None

    def test_rejects_non_positive_amount(self) -> None:
        """Should reject zero and negative amounts."""
        for amount in ("0", "-3", 0):
            new_expense, error = validate_new_expense(amount, "Coffee")
            assert new_expense is None
            assert error == "Amount must be positive"

    def test_rejects_non_numeric_amount(self) -> None:
        """Should reject text amounts."""
        new_expense, error = validate_new_expense("abc", "Coffee")

        assert new_expense is None
        assert error is not None
        assert "number" in error

    def test_rejects_sub_cent_amount(self) -> None:
        """Should reject more than two decimal places."""
        _, error = validate_new_expense("1.005", "Coffee")

        assert error == "Amount must have at most two decimal places"

    def test_allows_trailing_zero_decimals(self) -> None:
        """Should accept 1.500 since it equals 1.50."""
        new_expense, error = validate_new_expense("1.500", "Coffee")

        assert error is None
        assert new_expense is not None

    def test_rejects_long_description(self) -> None:
        """Should reject descriptions over 50 characters."""
        _, error = validate_new_expense("1", "x" * 51)

        assert error == "Description must be at most 50 characters"
