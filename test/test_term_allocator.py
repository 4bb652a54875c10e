from datetime import date, timedelta

import pytest

from holiday_index import HolidayIndex
from models import Holiday
from rotation_dates import generate
from term_allocator import allocate, weeks_per_term


def mondays(n, start=date(2024, 9, 2)):
    return [start + timedelta(weeks=i) for i in range(n)]


def flatten(allocation):
    return [d for term in allocation.terms for d in term.dates]


@pytest.fixture
def school_year_holidays():
    return HolidayIndex([
        Holiday("Autumn break", date(2024, 10, 14), date(2024, 10, 25)),
        Holiday("Christmas", date(2024, 12, 23), date(2025, 1, 6)),
        Holiday("Easter", date(2025, 4, 14), date(2025, 4, 25)),
        Holiday("Whit Monday", date(2025, 6, 9), date(2025, 6, 9)),
    ])


def test_remainder_goes_to_first_terms():
    assert weeks_per_term(10, 3) == [4, 3, 3]
    assert weeks_per_term(10, 4) == [3, 3, 2, 2]
    assert weeks_per_term(12, 4) == [3, 3, 3, 3]


def test_allocate_ten_weeks_over_three_terms():
    allocation = allocate(mondays(10), 3)
    assert allocation.weeks_per_term == (4, 3, 3)
    assert [t.days for t in allocation.terms] == [4, 3, 3]
    assert [t.index for t in allocation.terms] == [1, 2, 3]
    assert allocation.error is None


@pytest.mark.parametrize("term_count", range(1, 9))
def test_terms_cover_every_generated_date(school_year_holidays, term_count):
    dates = generate(date(2024, 9, 9), date(2025, 6, 28), 1, school_year_holidays)
    allocation = allocate(dates, term_count, holidays=school_year_holidays, weekday=1)
    assert allocation.error is None
    assert flatten(allocation) == dates
    assert allocation.assigned_weeks == len(dates)


def test_terms_are_consecutive():
    allocation = allocate(mondays(11), 4)
    for earlier, later in zip(allocation.terms, allocation.terms[1:]):
        assert earlier.end < later.start


def test_override_is_reserved_before_spreading():
    allocation = allocate(mondays(10), 3, {2: 5})
    assert allocation.weeks_per_term == (3, 5, 2)
    assert allocation.terms[1].custom_length == 5
    assert allocation.terms[0].custom_length is None
    assert flatten(allocation) == mondays(10)
    assert allocation.error is None


def test_invalid_overrides_are_ignored():
    allocation = allocate(mondays(10), 3, {1: 0, 2: -2, 3: "4", 4: 7})
    assert allocation.weeks_per_term == (4, 3, 3)
    assert allocation.error is None


def test_overrides_beyond_available_weeks_are_reported():
    allocation = allocate(mondays(10), 3, {1: 8, 2: 5})
    assert allocation.weeks_per_term == (8, 5, 0)
    assert allocation.error == (
        "Total assigned weeks (13) is greater than available weeks (10). Please reduce the assigned weeks."
    )
    # cut as far as the dates reach
    assert [t.days for t in allocation.terms] == [8, 2, 0]
    assert flatten(allocation) == mondays(10)


def test_overrides_below_available_weeks_are_reported():
    allocation = allocate(mondays(10), 3, {1: 2, 2: 2, 3: 2})
    assert allocation.weeks_per_term == (2, 2, 2)
    assert "less than available weeks (10)" in allocation.error
    assert len(flatten(allocation)) == 6


def test_no_dates_gives_empty_terms():
    allocation = allocate([], 3)
    assert allocation.error is None
    assert [t.days for t in allocation.terms] == [0, 0, 0]
    assert allocation.terms[0].start is None
    assert allocation.terms[0].skipped_holidays == ()


def test_term_count_must_be_positive():
    with pytest.raises(ValueError):
        allocate(mondays(4), 0)


def test_term_holidays_follow_the_rotation_weekday():
    holidays = HolidayIndex([
        Holiday("Monday off", date(2024, 9, 16), date(2024, 9, 16)),
        Holiday("Wednesday off", date(2024, 10, 2), date(2024, 10, 2)),
        Holiday("Autumn break", date(2024, 10, 14), date(2024, 10, 18)),
        Holiday("Christmas", date(2024, 12, 23), date(2024, 12, 31)),
    ])
    dates = generate(date(2024, 9, 2), date(2024, 11, 25), 1, holidays)
    assert len(dates) == 11

    allocation = allocate(dates, 2, holidays=holidays, weekday=1)
    first, second = allocation.terms
    assert first.dates[-1] == date(2024, 10, 21)
    assert [h.name for h in first.skipped_holidays] == ["Monday off", "Autumn break"]
    assert second.skipped_holidays == ()

    # weekday taken from the dates when not given
    assert allocate(dates, 2, holidays=list(holidays)).terms == allocation.terms


def test_term_names_and_summary():
    allocation = allocate(mondays(5), 2)
    term = allocation.terms[0]
    assert term.name == "TURNUS 1"
    assert term.start == date(2024, 9, 2)
    assert term.end == date(2024, 9, 16)
    assert term.days == 3


def test_same_input_same_allocation(school_year_holidays):
    dates = generate(date(2024, 9, 9), date(2025, 6, 28), 3, school_year_holidays)
    assert allocate(dates, 5, {3: 6}, school_year_holidays, 3) == allocate(dates, 5, {3: 6}, school_year_holidays, 3)
