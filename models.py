# models.py

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Tuple, Union

DateLike = Union[date, datetime, str]


def as_date(value: DateLike) -> date:
    """
    Normalize a date, datetime or ISO string to a calendar day. Timestamps
    with an offset (a trailing "Z" included) count on the local day.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone()
        return value.date()
    if isinstance(value, date):
        return value
    text = str(value).strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return as_date(datetime.fromisoformat(text))


@dataclass(frozen=True)
class Holiday:
    """
    A closed interval of days [start, end] on which no rotation day takes place.
    """
    name: str
    start: date
    end: date
    holiday_id: Optional[int] = None

    def __post_init__(self):
        object.__setattr__(self, "start", as_date(self.start))
        object.__setattr__(self, "end", as_date(self.end))
        if self.start > self.end:
            raise ValueError(f"Holiday {self.name!r} ends before it starts ({self.start} > {self.end})")

    @property
    def is_single_day(self) -> bool:
        return self.start == self.end

    def contains(self, day: DateLike) -> bool:
        return self.start <= as_date(day) <= self.end

    def overlaps(self, start: DateLike, end: DateLike) -> bool:
        return not (self.end < as_date(start) or as_date(end) < self.start)


@dataclass(frozen=True)
class Term:
    """
    One rotation period ("turn"). index is 1-based, dates are a contiguous
    slice of the eligible rotation days.
    """
    index: int
    dates: Tuple[date, ...] = ()
    skipped_holidays: Tuple[Holiday, ...] = ()
    custom_length: Optional[int] = None

    @property
    def name(self) -> str:
        return f"TURNUS {self.index}"

    @property
    def start(self) -> Optional[date]:
        return self.dates[0] if self.dates else None

    @property
    def end(self) -> Optional[date]:
        return self.dates[-1] if self.dates else None

    @property
    def days(self) -> int:
        return len(self.dates)


@dataclass(frozen=True)
class Allocation:
    terms: Tuple[Term, ...]
    weeks_per_term: Tuple[int, ...]
    total_weeks: int
    error: Optional[str] = None

    @property
    def assigned_weeks(self) -> int:
        return sum(self.weeks_per_term)


@dataclass(frozen=True)
class Student:
    student_id: int
    first_name: str
    last_name: str

    @property
    def sort_key(self) -> Tuple[str, str, int]:
        return (self.last_name.casefold(), self.first_name.casefold(), self.student_id)


@dataclass(frozen=True)
class Group:
    group_id: int
    students: Tuple[Student, ...] = field(default_factory=tuple)

    @property
    def size(self) -> int:
        return len(self.students)

    @property
    def student_ids(self) -> Tuple[int, ...]:
        return tuple(s.student_id for s in self.students)


@dataclass(frozen=True)
class TeacherSessionAssignment:
    """
    Static assignment of a teacher to a group for one session (AM/PM),
    before it is rotated across terms.
    """
    group_id: int
    teacher_id: int
    subject_id: Optional[int] = None
    learning_content_id: Optional[int] = None
    room_id: Optional[int] = None
    period: str = "AM"


@dataclass(frozen=True)
class RotationCell:
    term_index: int      # 1-based, same as Term.index
    group_id: int
    teacher_id: int
