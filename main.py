# main.py

import logging
import os
import sys

from config import (
    LOG_LEVEL,
    OUTPUT_DIR,
    HOLIDAYS_CSV,
    STUDENTS_CSV,
    TEACHER_ASSIGNMENTS_CSV,
    SCHOOL_YEAR_START,
    SCHOOL_YEAR_END,
    DEFAULT_WEEKDAY,
    DEFAULT_TERM_COUNT,
    DEFAULT_GROUP_COUNT,
    MAX_GROUP_SIZE,
    TERM_COUNT_RANGE,
    WEEKDAY_RANGE,
    GROUP_COUNT_RANGE,
    SERVICE_ACCOUNT_FILE,
    SCOPES,
    HOLIDAYS_SHEET_URL,
    STUDENTS_SHEET_URL,
)

import groups as group_partitioner
import rotation_dates
from google_sheets import authorize, load_holidays_from_sheet, load_students_from_sheet
from holiday_index import HolidayIndex
from payload import (
    group_assignments_payload,
    rotation_payload,
    schedule_payload,
    write_json,
)
from reader import load_holidays, load_students, load_teacher_assignments
from rotation_assigner import assign_sessions
from school_year import current_school_year
from term_allocator import allocate


def setup_logging():
    logging.basicConfig(
        level=LOG_LEVEL,
        format="%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )


def check_settings(weekday, term_count, group_count):
    if weekday not in WEEKDAY_RANGE:
        raise ValueError(f"weekday must be in {WEEKDAY_RANGE.start}..{WEEKDAY_RANGE.stop - 1}, got {weekday}")
    if term_count not in TERM_COUNT_RANGE:
        raise ValueError(f"term count must be in {TERM_COUNT_RANGE.start}..{TERM_COUNT_RANGE.stop - 1}, got {term_count}")
    if group_count not in GROUP_COUNT_RANGE:
        raise ValueError(f"group count must be in {GROUP_COUNT_RANGE.start}..{GROUP_COUNT_RANGE.stop - 1}, got {group_count}")


def build_plan(class_id, holidays, students, session_assignments,
               start=SCHOOL_YEAR_START,
               end=SCHOOL_YEAR_END,
               weekday=DEFAULT_WEEKDAY,
               term_count=DEFAULT_TERM_COUNT,
               group_count=DEFAULT_GROUP_COUNT,
               overrides=None,
               max_group_size=MAX_GROUP_SIZE):
    """
    Run the whole chain for one class. Returns the school year label, the
    allocation and the three payloads (schedule, groups, rotation); rotation
    is None when the terms do not cover the available weeks.
    """
    check_settings(weekday, term_count, group_count)

    index = HolidayIndex(holidays)
    dates = rotation_dates.generate(start, end, weekday, index)
    allocation = allocate(dates, term_count, overrides, index, weekday)

    class_groups = group_partitioner.initialize(students, group_count, max_group_size)
    regular = group_partitioner.regular_groups(class_groups)

    plan = {
        "schoolYear": current_school_year(start),
        "allocation": allocation,
        "schedule": schedule_payload(allocation),
        "groups": group_assignments_payload(class_id, class_groups, students),
        "rotation": None,
    }
    if allocation.error:
        return plan

    cells = assign_sessions(regular, session_assignments, term_count)
    plan["rotation"] = rotation_payload(class_id, allocation, regular, cells["AM"], cells["PM"])
    return plan


def load_inputs():
    if HOLIDAYS_SHEET_URL or STUDENTS_SHEET_URL:
        client = authorize(SERVICE_ACCOUNT_FILE, SCOPES)
        holidays = load_holidays_from_sheet(client, HOLIDAYS_SHEET_URL) if HOLIDAYS_SHEET_URL else load_holidays(HOLIDAYS_CSV)
        students = load_students_from_sheet(client, STUDENTS_SHEET_URL) if STUDENTS_SHEET_URL else load_students(STUDENTS_CSV)
    else:
        holidays = load_holidays(HOLIDAYS_CSV)
        students = load_students(STUDENTS_CSV)
    session_assignments = load_teacher_assignments(TEACHER_ASSIGNMENTS_CSV)
    return holidays, students, session_assignments


def main(argv=None):
    setup_logging()
    argv = sys.argv[1:] if argv is None else argv
    class_id = argv[0] if argv else "class"

    logging.info("Loading data...")
    holidays, students, session_assignments = load_inputs()

    try:
        plan = build_plan(class_id, holidays, students, session_assignments)
    except ValueError as e:
        logging.error(f"Invalid settings: {e}")
        return 1

    logging.info(f"School year {plan['schoolYear']}, class {class_id}")
    write_json(plan["schedule"], os.path.join(OUTPUT_DIR, "schedule.json"))
    write_json(plan["groups"], os.path.join(OUTPUT_DIR, "group_assignments.json"))

    if plan["rotation"] is None:
        logging.error(f"Rotation not written: {plan['allocation'].error}")
        return 1

    write_json(plan["rotation"], os.path.join(OUTPUT_DIR, "teacher_rotation.json"))
    return 0


if __name__ == "__main__":
    sys.exit(main())
