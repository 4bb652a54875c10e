# google_sheets.py

import logging
from typing import Dict, List

import gspread
from google.oauth2.service_account import Credentials

from models import Holiday, Student
from reader import parse_holidays, parse_students

logger = logging.getLogger(__name__)


def authorize(service_account_file: str, scopes: List[str]) -> gspread.Client:
    creds = Credentials.from_service_account_file(service_account_file, scopes=scopes)
    return gspread.authorize(creds)


def spreadsheet_id(url: str) -> str:
    """https://docs.google.com/spreadsheets/d/<id>/edit -> <id>"""
    parts = url.split("/")
    if len(parts) < 6 or parts[4] != "d":
        raise ValueError(f"Not a spreadsheet URL: {url}")
    return parts[5]


def worksheet_rows(worksheet) -> List[Dict[str, str]]:
    """First row is the header; blank rows are dropped."""
    all_values = worksheet.get_all_values()
    if not all_values:
        return []
    headers = [h.strip() for h in all_values[0]]
    rows = []
    for values in all_values[1:]:
        if not any(v.strip() for v in values):
            continue
        rows.append({headers[i]: values[i] if i < len(values) else "" for i in range(len(headers))})
    return rows


def _first_sheet_rows(client, url: str) -> List[Dict[str, str]]:
    sheet = client.open_by_key(spreadsheet_id(url)).sheet1
    return worksheet_rows(sheet)


def load_holidays_from_sheet(client, url: str) -> List[Holiday]:
    holidays = []
    try:
        holidays = parse_holidays(_first_sheet_rows(client, url))
        logger.info(f"Loaded {len(holidays)} holidays from sheet {url}")
    except Exception as e:
        logger.error(f"Error reading holidays from sheet {url}: {e}")
    return holidays


def load_students_from_sheet(client, url: str) -> List[Student]:
    students = []
    try:
        students = parse_students(_first_sheet_rows(client, url))
        logger.info(f"Loaded {len(students)} students from sheet {url}")
    except Exception as e:
        logger.error(f"Error reading students from sheet {url}: {e}")
    return students
