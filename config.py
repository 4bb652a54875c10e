# config.py

import logging
import os
from datetime import date

LOG_LEVEL = logging.INFO

DATA_DIR = os.environ.get("DATA_DIR", "./data")
OUTPUT_DIR = os.environ.get("OUTPUT_DIR", "output")

HOLIDAYS_CSV = os.path.join(DATA_DIR, "holidays.csv")
STUDENTS_CSV = os.path.join(DATA_DIR, "students.csv")
TEACHER_ASSIGNMENTS_CSV = os.path.join(DATA_DIR, "teacher_assignments.csv")

# School year the rotation days are generated for
SCHOOL_YEAR_START = date(2024, 9, 9)
SCHOOL_YEAR_END = date(2025, 6, 28)

DEFAULT_WEEKDAY = 1          # 1 = Monday ... 5 = Friday
DEFAULT_TERM_COUNT = 4
DEFAULT_GROUP_COUNT = 2
MAX_GROUP_SIZE = 12

TERM_COUNT_RANGE = range(1, 9)
WEEKDAY_RANGE = range(1, 6)
GROUP_COUNT_RANGE = range(2, 5)

# Google Sheets import
SERVICE_ACCOUNT_FILE = os.environ.get("SERVICE_ACCOUNT_FILE", "service_account.json")
SCOPES = [
    "https://www.googleapis.com/auth/spreadsheets.readonly",
    "https://www.googleapis.com/auth/drive.readonly",
]
HOLIDAYS_SHEET_URL = os.environ.get("HOLIDAYS_SHEET_URL", "")
STUDENTS_SHEET_URL = os.environ.get("STUDENTS_SHEET_URL", "")
