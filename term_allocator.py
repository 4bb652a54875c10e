# term_allocator.py

import logging
from datetime import date
from typing import Dict, Iterable, List, Optional, Sequence, Union

from holiday_index import HolidayIndex
from models import Allocation, Holiday, Term

logger = logging.getLogger(__name__)


def _valid_override(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


def weeks_per_term(total: int, term_count: int, overrides: Optional[Dict[int, int]] = None) -> List[int]:
    """
    Number of rotation weeks for each term (index 0 = term 1).

    Terms with a positive override keep it. The weeks left after the
    overrides are spread over the other terms, the first
    `weeks_left % terms_left` of them getting one extra week.
    """
    if term_count < 1:
        raise ValueError(f"term_count must be >= 1, got {term_count}")
    overrides = overrides or {}

    weeks: List[Optional[int]] = []
    weeks_left = total
    terms_left = term_count
    for index in range(1, term_count + 1):
        value = overrides.get(index)
        if _valid_override(value):
            weeks.append(value)
            weeks_left -= value
            terms_left -= 1
        else:
            if value is not None:
                logger.debug(f"Ignoring override {value!r} for term {index}")
            weeks.append(None)

    if terms_left:
        base, remainder = divmod(max(weeks_left, 0), terms_left)
        for i, value in enumerate(weeks):
            if value is None:
                extra = 1 if remainder > 0 else 0
                weeks[i] = base + extra
                remainder -= extra
    return weeks


def term_holidays(dates: Sequence[date], holidays: HolidayIndex, weekday: int) -> List[Holiday]:
    """
    Holidays inside the span of a term's dates. Single-day holidays only
    count when they fall on the rotation weekday.
    """
    if not dates:
        return []
    return [
        h for h in holidays.overlapping(dates[0], dates[-1])
        if not h.is_single_day or h.start.isoweekday() == weekday
    ]


def allocation_error(assigned: int, total: int) -> Optional[str]:
    if assigned < total:
        return (f"Total assigned weeks ({assigned}) is less than available weeks ({total}). "
                f"Please assign all weeks.")
    if assigned > total:
        return (f"Total assigned weeks ({assigned}) is greater than available weeks ({total}). "
                f"Please reduce the assigned weeks.")
    return None


def allocate(dates: Sequence[date],
             term_count: int,
             overrides: Optional[Dict[int, int]] = None,
             holidays: Union[HolidayIndex, Iterable[Holiday], None] = None,
             weekday: Optional[int] = None) -> Allocation:
    """
    Split the eligible rotation dates into `term_count` consecutive terms.

    Never raises for bad overrides: if the weeks handed out do not add up to
    the available weeks, the terms are cut as far as the dates reach and
    Allocation.error describes the mismatch.
    """
    overrides = overrides or {}
    if not isinstance(holidays, HolidayIndex):
        holidays = HolidayIndex(holidays or ())
    if weekday is None and dates:
        weekday = dates[0].isoweekday()

    total = len(dates)
    weeks = weeks_per_term(total, term_count, overrides)
    logger.debug(f"Weeks per term: {weeks} (total {total})")

    terms = []
    cursor = 0
    for index, count in enumerate(weeks, start=1):
        chunk = tuple(dates[cursor:cursor + count])
        cursor += count
        custom = overrides.get(index) if _valid_override(overrides.get(index)) else None
        terms.append(Term(
            index=index,
            dates=chunk,
            skipped_holidays=tuple(term_holidays(chunk, holidays, weekday)),
            custom_length=custom,
        ))

    error = allocation_error(sum(weeks), total)
    if error:
        logger.warning(error)
    else:
        logger.info(f"Allocated {total} weeks over {term_count} terms: {weeks}")

    return Allocation(
        terms=tuple(terms),
        weeks_per_term=tuple(weeks),
        total_weeks=total,
        error=error,
    )
