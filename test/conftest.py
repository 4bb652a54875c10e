import time

import pytest

from models import Student

LAST_NAMES = [
    "Zimmermann", "Bauer", "Koch", "Weber", "Fischer", "Schulz", "Hoffmann",
    "Meyer", "Wagner", "Becker", "Schneider", "Richter", "Klein", "Wolf",
    "Neumann", "Schwarz", "Braun", "Krueger", "Hartmann", "Lange", "Werner",
    "Krause", "Lehmann", "Schmitt", "Maier", "Huber",
]


def make_students(n):
    return [Student(student_id=i + 1, first_name=f"Vorname{i + 1}", last_name=LAST_NAMES[i]) for i in range(n)]


@pytest.fixture
def students():
    return make_students(13)


@pytest.fixture
def vienna_time(monkeypatch):
    monkeypatch.setenv("TZ", "Europe/Vienna")
    time.tzset()
    yield
    monkeypatch.undo()
    time.tzset()
