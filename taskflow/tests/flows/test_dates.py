"""Tests for due-date resolution."""

from datetime import date

import pytest

from taskflow.flows.dates import (
    find_relative_date,
    has_absolute_date,
    next_weekday,
    parse_date_value,
    resolve_due_date,
)

# A Wednesday
TODAY = date(2024, 5, 15)


class TestNextWeekday:
    def test_strictly_future(self):
        assert next_weekday(TODAY, 2) == date(2024, 5, 22)
        assert next_weekday(TODAY, 4) == date(2024, 5, 17)
        assert next_weekday(TODAY, 0) == date(2024, 5, 20)


class TestFindRelativeDate:
    @pytest.mark.parametrize(
        "text, expected",
        [
            ("do it today", date(2024, 5, 15)),
            ("call mom tomorrow", date(2024, 5, 16)),
            ("that was yesterday", date(2024, 5, 14)),
            ("the day after tomorrow", date(2024, 5, 17)),
            ("review next week", date(2024, 5, 22)),
            ("ship in 3 days", date(2024, 5, 18)),
            ("ship in two weeks", date(2024, 5, 29)),
            ("follow up in a week", date(2024, 5, 22)),
            ("Deploy next Friday", date(2024, 5, 17)),
            ("standup on Monday", date(2024, 5, 20)),
            ("this Wednesday", date(2024, 5, 22)),
        ],
    )
    def test_expressions(self, text, expected):
        assert find_relative_date(text, TODAY) == expected

    def test_no_expression(self):
        assert find_relative_date("Buy milk", TODAY) is None

    def test_weekday_inside_word_ignored(self):
        assert find_relative_date("Prepare sundays-report", TODAY) is None


class TestParseDateValue:
    def test_iso_date(self):
        assert parse_date_value("2024-06-07", TODAY) == date(2024, 6, 7)

    def test_iso_datetime(self):
        assert parse_date_value("2024-06-07T10:00:00Z", TODAY) == date(2024, 6, 7)

    def test_relative_value(self):
        assert parse_date_value("Tomorrow.", TODAY) == date(2024, 5, 16)

    def test_unresolvable(self):
        assert parse_date_value("someday", TODAY) is None
        assert parse_date_value("  ", TODAY) is None


class TestResolveDueDate:
    def test_text_expression_wins_over_model_value(self):
        assert resolve_due_date("2024-05-24", TODAY, text="Deploy next Friday") == date(2024, 5, 17)

    def test_model_value_used_without_text_expression(self):
        assert resolve_due_date("2024-06-01", TODAY, text="Submit report by June 1st") == date(2024, 6, 1)

    def test_unresolvable_dropped(self):
        assert resolve_due_date("whenever", TODAY, text="Read a book") is None

    def test_nothing_given(self):
        assert resolve_due_date(None, TODAY) is None

    def test_plain_weekday_word_does_not_override_absolute_date(self):
        monday = date(2024, 6, 3)
        text = "Prepare Monday standup deck, due June 20"
        assert resolve_due_date("2024-06-20", monday, text=text) == date(2024, 6, 20)

    def test_absolute_date_in_text_keeps_model_value(self):
        text = "Book flights next Friday for the 28th of May trip"
        assert resolve_due_date("2024-05-28", TODAY, text=text) == date(2024, 5, 28)

    def test_relative_expression_used_when_model_gave_nothing(self):
        assert resolve_due_date(None, TODAY, text="Pay rent by Friday, June 20 lease") == date(2024, 5, 17)


class TestWeekdayQualifiers:
    @pytest.mark.parametrize("text", ["Prepare Monday standup deck", "Friday drinks playlist", "Sunday roast recipe"])
    def test_bare_weekday_in_text_is_not_a_date(self, text):
        assert find_relative_date(text, TODAY) is None

    @pytest.mark.parametrize(
        "text, expected",
        [
            ("Send invoice by Friday", date(2024, 5, 17)),
            ("Report due Monday", date(2024, 5, 20)),
            ("Report due on Monday", date(2024, 5, 20)),
        ],
    )
    def test_qualified_weekday(self, text, expected):
        assert find_relative_date(text, TODAY) == expected

    def test_bare_weekday_value_from_model(self):
        assert parse_date_value("Friday", TODAY) == date(2024, 5, 17)


class TestHasAbsoluteDate:
    @pytest.mark.parametrize("text", ["due June 20", "on 20 June", "by 6/20", "before 2024-06-20", "Dec. 3rd"])
    def test_detected(self, text):
        assert has_absolute_date(text)

    @pytest.mark.parametrize("text", ["Deploy next Friday", "Buy 20 apples"])
    def test_not_detected(self, text):
        assert not has_absolute_date(text)
