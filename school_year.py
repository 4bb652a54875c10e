# school_year.py

import re
from datetime import date
from typing import List, Optional

SCHOOL_YEAR_PATTERN = re.compile(r"^(\d{4})/(\d{4})$")


def is_valid_school_year(value: str) -> bool:
    """'2024/2025' style, the second year following the first."""
    m = SCHOOL_YEAR_PATTERN.match(value or "")
    if not m:
        return False
    start, end = int(m.group(1)), int(m.group(2))
    return end == start + 1


def current_school_year(today: Optional[date] = None) -> str:
    # a new school year starts in July
    today = today or date.today()
    start = today.year if today.month >= 7 else today.year - 1
    return f"{start}/{start + 1}"


def school_year_options(today: Optional[date] = None, years_back: int = 2, years_forward: int = 2) -> List[str]:
    current = int(current_school_year(today).split("/")[0])
    return [f"{y}/{y + 1}" for y in range(current - years_back, current + years_forward + 1)]
