# holiday_index.py

import logging
from typing import Iterable, List

from models import DateLike, Holiday, as_date

logger = logging.getLogger(__name__)


class HolidayIndex:
    """
    Read-only lookup over the holiday intervals of one school year.
    All comparisons are done on calendar days, time of day is ignored.
    An empty index excludes nothing.
    """

    def __init__(self, holidays: Iterable[Holiday] = ()):
        self.holidays: List[Holiday] = sorted(holidays, key=lambda h: (h.start, h.end, h.name))
        logger.debug(f"HolidayIndex built with {len(self.holidays)} holidays")

    def __len__(self) -> int:
        return len(self.holidays)

    def __iter__(self):
        return iter(self.holidays)

    def is_holiday(self, day: DateLike) -> bool:
        d = as_date(day)
        return any(h.contains(d) for h in self.holidays)

    def overlapping(self, start: DateLike, end: DateLike) -> List[Holiday]:
        """Every holiday whose interval intersects [start, end]; empty for a reversed range."""
        s, e = as_date(start), as_date(end)
        if s > e:
            return []
        return [h for h in self.holidays if h.overlaps(s, e)]
