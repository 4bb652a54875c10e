# rotation_assigner.py

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence

from groups import UNASSIGNED_GROUP_ID
from models import Group, RotationCell, TeacherSessionAssignment

logger = logging.getLogger(__name__)

SESSIONS = ("AM", "PM")


def unique_teachers(assignments: Iterable[TeacherSessionAssignment]) -> List[int]:
    """Teacher ids of a session in order of first appearance, placeholders (0/None) dropped."""
    seen = []
    for a in assignments:
        if a.teacher_id and a.teacher_id not in seen:
            seen.append(a.teacher_id)
    return seen


def rotate_left(items: Sequence, n: int) -> list:
    if not items:
        return []
    n %= len(items)
    return list(items[n:]) + list(items[:n])


def assign(groups: Sequence[Group], teachers: Sequence[int], term_count: int) -> List[RotationCell]:
    """
    Round-robin pairing of teachers with groups for every term.

    In term t (0-based) group i gets teachers[(i + t) % len(teachers)]. With
    as many teachers as groups every teacher meets every group once per
    len(teachers) terms. Extra groups or extra teachers stay unpaired.
    """
    if term_count < 1:
        raise ValueError(f"term_count must be >= 1, got {term_count}")
    if len(set(teachers)) != len(teachers):
        raise ValueError(f"teacher list contains duplicates: {list(teachers)}")

    groups = [g for g in groups if g.group_id != UNASSIGNED_GROUP_ID]
    if len(groups) != len(teachers):
        logger.info(f"{len(groups)} groups and {len(teachers)} teachers, "
                    f"{abs(len(groups) - len(teachers))} left unpaired each term")

    cells = []
    for t in range(term_count):
        rotated = rotate_left(teachers, t)
        for group, teacher_id in zip(groups, rotated):
            cells.append(RotationCell(term_index=t + 1, group_id=group.group_id, teacher_id=teacher_id))
    logger.debug(f"Built {len(cells)} rotation cells over {term_count} terms")
    return cells


def assign_sessions(groups: Sequence[Group],
                    session_assignments: Dict[str, Sequence[TeacherSessionAssignment]],
                    term_count: int) -> Dict[str, List[RotationCell]]:
    """Run `assign` once per session with that session's own teacher list."""
    result = {}
    for session in SESSIONS:
        teachers = unique_teachers(session_assignments.get(session, ()))
        result[session] = assign(groups, teachers, term_count)
        logger.info(f"{session}: {len(teachers)} teachers rotated over {term_count} terms")
    return result


def rotation_by_group(cells: Iterable[RotationCell], groups: Sequence[Group], term_count: int) -> List[dict]:
    """Per group, the teacher id of each term (None where unpaired)."""
    table: Dict[int, List[Optional[int]]] = {
        g.group_id: [None] * term_count for g in groups if g.group_id != UNASSIGNED_GROUP_ID
    }
    for cell in cells:
        if cell.group_id in table:
            table[cell.group_id][cell.term_index - 1] = cell.teacher_id
    return [{"groupId": gid, "turns": turns} for gid, turns in table.items()]


def teacher_schedule(cells: Iterable[RotationCell]) -> Dict[int, Dict[int, int]]:
    """teacher_id -> {term_index: group_id}, the overview seen from the teachers' side."""
    schedule: Dict[int, Dict[int, int]] = defaultdict(dict)
    for cell in cells:
        schedule[cell.teacher_id][cell.term_index] = cell.group_id
    return dict(schedule)
