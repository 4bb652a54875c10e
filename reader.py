# reader.py

import csv
import logging
from typing import Dict, Iterable, List

from models import Holiday, Student, TeacherSessionAssignment

logger = logging.getLogger(__name__)


def _optional_int(value):
    value = (value or "").strip()
    return int(value) if value else None


def parse_holidays(rows: Iterable[Dict[str, str]]) -> List[Holiday]:
    """
    holidays:
      id, name, start_date, end_date   (ISO dates, end inclusive)
    """
    holidays = []
    for line_no, row in enumerate(rows, start=2):
        try:
            holidays.append(Holiday(
                name=row["name"].strip(),
                start=row["start_date"],
                end=row["end_date"],
                holiday_id=_optional_int(row.get("id")),
            ))
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Skipping holiday row {line_no}: {e}")
    return holidays


def parse_students(rows: Iterable[Dict[str, str]]) -> List[Student]:
    students = []
    seen = set()
    for line_no, row in enumerate(rows, start=2):
        try:
            s_id = int(row["id"])
            student = Student(
                student_id=s_id,
                first_name=row["first_name"].strip(),
                last_name=row["last_name"].strip(),
            )
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Skipping student row {line_no}: {e}")
            continue
        if s_id in seen:
            logger.warning(f"Duplicate student id {s_id} in row {line_no}, ignored")
            continue
        seen.add(s_id)
        students.append(student)
    return students


def parse_teacher_assignments(rows: Iterable[Dict[str, str]]) -> Dict[str, List[TeacherSessionAssignment]]:
    """
    teacher_assignments:
      group_id, teacher_id, subject_id, learning_content_id, room_id, period (AM|PM)
    Returns { "AM": [...], "PM": [...] } in file order.
    """
    sessions = {"AM": [], "PM": []}
    for line_no, row in enumerate(rows, start=2):
        try:
            period = row["period"].strip().upper()
            if period not in sessions:
                raise ValueError(f"unknown period {row['period']!r}")
            sessions[period].append(TeacherSessionAssignment(
                group_id=int(row["group_id"]),
                teacher_id=_optional_int(row.get("teacher_id")) or 0,
                subject_id=_optional_int(row.get("subject_id")),
                learning_content_id=_optional_int(row.get("learning_content_id")),
                room_id=_optional_int(row.get("room_id")),
                period=period,
            ))
        except (KeyError, ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Skipping teacher assignment row {line_no}: {e}")
    return sessions


def load_holidays(csv_path: str) -> List[Holiday]:
    holidays = []
    try:
        with open(csv_path, "r", encoding="utf-8-sig") as f:
            holidays = parse_holidays(csv.DictReader(f))
        logger.info(f"Loaded {len(holidays)} holidays from {csv_path}")
    except Exception as e:
        logger.error(f"Error reading holidays from {csv_path}: {e}")
    return holidays


def load_students(csv_path: str) -> List[Student]:
    students = []
    try:
        with open(csv_path, "r", encoding="utf-8-sig") as f:
            students = parse_students(csv.DictReader(f))
        logger.info(f"Loaded {len(students)} students from {csv_path}")
    except Exception as e:
        logger.error(f"Error reading students from {csv_path}: {e}")
    return students


def load_teacher_assignments(csv_path: str) -> Dict[str, List[TeacherSessionAssignment]]:
    sessions = {"AM": [], "PM": []}
    try:
        with open(csv_path, "r", encoding="utf-8-sig") as f:
            sessions = parse_teacher_assignments(csv.DictReader(f))
        logger.info(f"Loaded {len(sessions['AM'])} AM and {len(sessions['PM'])} PM "
                    f"teacher assignments from {csv_path}")
    except Exception as e:
        logger.error(f"Error reading teacher assignments from {csv_path}: {e}")
    return sessions
