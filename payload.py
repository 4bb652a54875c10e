# payload.py

import json
import logging
import os
from typing import Dict, Iterable, Sequence, Set, Union

from models import Allocation, Group, Holiday, RotationCell, Student
from rotation_assigner import rotation_by_group
from rotation_dates import display_date, week_label

logger = logging.getLogger(__name__)

AssignmentLike = Union[Group, dict]


def holiday_dict(holiday: Holiday) -> dict:
    return {
        "id": holiday.holiday_id,
        "name": holiday.name,
        "startDate": holiday.start.isoformat(),
        "endDate": holiday.end.isoformat(),
    }


def schedule_payload(allocation: Allocation) -> Dict[str, dict]:
    """Terms keyed by name, in the shape the schedule store expects."""
    schedule = {}
    for term in allocation.terms:
        entry = {
            "name": term.name,
            "weeks": [
                {"week": week_label(d), "date": display_date(d), "isHoliday": False}
                for d in term.dates
            ],
            "holidays": [holiday_dict(h) for h in term.skipped_holidays],
        }
        if term.custom_length is not None:
            entry["customLength"] = term.custom_length
        schedule[term.name] = entry
    return schedule


def rotation_payload(class_id, allocation: Allocation, groups: Sequence[Group],
                     am_cells: Iterable[RotationCell], pm_cells: Iterable[RotationCell]) -> dict:
    term_count = len(allocation.terms)
    return {
        "classId": class_id,
        "turns": [t.name for t in allocation.terms],
        "amRotation": rotation_by_group(am_cells, groups, term_count),
        "pmRotation": rotation_by_group(pm_cells, groups, term_count),
    }


def group_assignments_payload(class_id, groups: Sequence[Group], roster: Iterable[Student]) -> dict:
    """
    Group membership to save. Roster students found in no group at all are
    reported as removed.
    """
    placed = {sid for g in groups for sid in g.student_ids}
    return {
        "class": class_id,
        "assignments": [{"groupId": g.group_id, "studentIds": list(g.student_ids)} for g in groups],
        "removedStudentIds": [s.student_id for s in roster if s.student_id not in placed],
    }


def _as_sets(assignments: Iterable[AssignmentLike]) -> Dict[int, Set[int]]:
    result = {}
    for a in assignments:
        if isinstance(a, Group):
            result[a.group_id] = set(a.student_ids)
        else:
            result[a["groupId"]] = set(a["studentIds"])
    return result


def assignments_changed(old: Iterable[AssignmentLike], new: Iterable[AssignmentLike]) -> bool:
    """
    True when saving `new` would overwrite `old` with a different membership.
    Nothing saved yet counts as no change. Order inside a group is ignored.
    """
    old_sets = _as_sets(old)
    if not old_sets:
        return False
    return old_sets != _as_sets(new)


def write_json(payload, output_path: str):
    dir_path = os.path.dirname(output_path)
    if dir_path:
        os.makedirs(dir_path, exist_ok=True)

    with open(output_path, "w", encoding="utf-8") as f:
        json.dump(payload, f, ensure_ascii=False, indent=2)

    logger.info(f"Wrote {output_path}")
