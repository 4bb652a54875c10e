# groups.py

import logging
import math
from collections import Counter
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Union

from models import Group, Student

logger = logging.getLogger(__name__)

UNASSIGNED_GROUP_ID = 0

MAX_SIZE = "MAX_SIZE"
UNASSIGNED_TARGET = "UNASSIGNED_TARGET"
UNKNOWN_GROUP = "UNKNOWN_GROUP"
UNKNOWN_STUDENT = "UNKNOWN_STUDENT"


class GroupInvariantError(RuntimeError):
    """A student is missing or appears in more than one group."""


@dataclass(frozen=True)
class MoveRejected:
    reason: str
    student_id: int
    group_id: int


MoveResult = Union[List[Group], MoveRejected]


def sort_students(students: Iterable[Student]) -> List[Student]:
    return sorted(students, key=lambda s: s.sort_key)


def _insert_sorted(students: Sequence[Student], student: Student) -> tuple:
    """Insert before the first member that sorts after `student`, existing order untouched."""
    members = list(students)
    for pos, other in enumerate(members):
        if student.sort_key < other.sort_key:
            members.insert(pos, student)
            break
    else:
        members.append(student)
    return tuple(members)


def _all_students(groups: Iterable[Group]) -> List[Student]:
    return [s for g in groups for s in g.students]


def check_membership(groups: Sequence[Group], expected_count: Optional[int] = None):
    ids = [s.student_id for s in _all_students(groups)]
    duplicates = [sid for sid, n in Counter(ids).items() if n > 1]
    if duplicates:
        raise GroupInvariantError(f"Students in more than one group: {sorted(duplicates)}")
    if expected_count is not None and len(ids) != expected_count:
        raise GroupInvariantError(f"Expected {expected_count} students in groups, found {len(ids)}")
    group_ids = [g.group_id for g in groups]
    if group_ids.count(UNASSIGNED_GROUP_ID) != 1:
        raise GroupInvariantError("Exactly one unassigned group is required")


def split_evenly(students: Iterable[Student], group_count: int) -> List[Group]:
    """
    Sort by last name, then first name, and cut into consecutive slices of
    ceil(n / group_count). Only the last non-empty group may be smaller.
    """
    if group_count < 1:
        raise ValueError(f"group_count must be >= 1, got {group_count}")
    ordered = sort_students(students)
    per_group = math.ceil(len(ordered) / group_count)
    groups = [Group(UNASSIGNED_GROUP_ID, ())]
    for i in range(group_count):
        groups.append(Group(i + 1, tuple(ordered[i * per_group:(i + 1) * per_group])))
    return groups


def initialize(students: Sequence[Student], group_count: int, max_group_size: int) -> List[Group]:
    """Return group_count + 1 groups, the unassigned group (id 0) first and empty."""
    if max_group_size < 1:
        raise ValueError(f"max_group_size must be >= 1, got {max_group_size}")
    groups = split_evenly(students, group_count)
    check_membership(groups, len(students))

    largest = max((g.size for g in groups), default=0)
    if largest > max_group_size:
        logger.warning(f"{len(students)} students over {group_count} groups gives {largest} per group, "
                       f"more than the maximum of {max_group_size}")
    logger.info(f"Split {len(students)} students into {group_count} groups: "
                f"{[g.size for g in groups[1:]]}")
    return groups


def rebalance(current: Sequence[Group], new_group_count: int) -> List[Group]:
    """
    Redistribute every student, the unassigned ones included, over
    new_group_count groups. Only for classes without a saved manual assignment.
    """
    students = _all_students(current)
    groups = split_evenly(students, new_group_count)
    check_membership(groups, len(students))
    logger.debug(f"Rebalanced {len(students)} students into {new_group_count} groups")
    return groups


def renumber(current: Sequence[Group]) -> List[Group]:
    """Unassigned group first, regular groups renumbered 1..N in order of their old ids."""
    unassigned = next((g for g in current if g.group_id == UNASSIGNED_GROUP_ID),
                      Group(UNASSIGNED_GROUP_ID, ()))
    regular = sorted((g for g in current if g.group_id != UNASSIGNED_GROUP_ID), key=lambda g: g.group_id)
    return [unassigned] + [Group(i + 1, g.students) for i, g in enumerate(regular)]


def redeal(current: Sequence[Group], new_group_count: int) -> List[Group]:
    """
    Deal every student, the unassigned ones included, round-robin over
    new_group_count groups in the current membership order. The unassigned
    group ends up empty.
    """
    if new_group_count < 1:
        raise ValueError(f"new_group_count must be >= 1, got {new_group_count}")
    students = _all_students(renumber(current))
    dealt = [[] for _ in range(new_group_count)]
    for i, student in enumerate(students):
        dealt[i % new_group_count].append(student)

    result = [Group(UNASSIGNED_GROUP_ID, ())] + [Group(i + 1, tuple(s)) for i, s in enumerate(dealt)]
    check_membership(result, len(students))
    logger.info(f"Redealt {len(students)} students into {new_group_count} groups: "
                f"{[g.size for g in result[1:]]}")
    return result


def change_group_count(current: Sequence[Group], new_group_count: int, has_saved_assignment: bool) -> List[Group]:
    """
    Single entry point for a change of the group count: a class without a
    saved assignment is split again from scratch, otherwise the existing
    groups are dealt out again round-robin.
    """
    if has_saved_assignment:
        return redeal(current, new_group_count)
    return rebalance(current, new_group_count)


def find_group_of(groups: Sequence[Group], student_id: int):
    for group in groups:
        for student in group.students:
            if student.student_id == student_id:
                return group, student
    return None, None


def move_student(current: Sequence[Group], student_id: int, target_group_id: int, max_group_size: int) -> MoveResult:
    """
    Move one student into a regular group. Every other group keeps its
    members and order. On rejection `current` is left as it was and a
    MoveRejected is returned.
    """
    if target_group_id == UNASSIGNED_GROUP_ID:
        return MoveRejected(UNASSIGNED_TARGET, student_id, target_group_id)

    target = next((g for g in current if g.group_id == target_group_id), None)
    if target is None:
        return MoveRejected(UNKNOWN_GROUP, student_id, target_group_id)

    source, student = find_group_of(current, student_id)
    if source is None:
        return MoveRejected(UNKNOWN_STUDENT, student_id, target_group_id)
    if source.group_id == target_group_id:
        return list(current)
    if target.size >= max_group_size:
        logger.info(f"Group {target_group_id} is full ({target.size}/{max_group_size}), "
                    f"student {student_id} not moved")
        return MoveRejected(MAX_SIZE, student_id, target_group_id)

    result = []
    for group in current:
        if group.group_id == source.group_id:
            group = Group(group.group_id, tuple(s for s in group.students if s.student_id != student_id))
        elif group.group_id == target_group_id:
            group = Group(group.group_id, _insert_sorted(group.students, student))
        result.append(group)

    check_membership(result, len(_all_students(current)))
    logger.debug(f"Moved student {student_id} from group {source.group_id} to group {target_group_id}")
    return result


def remove_to_unassigned(current: Sequence[Group], student_id: int) -> List[Group]:
    source, student = find_group_of(current, student_id)
    if source is None:
        logger.warning(f"Student {student_id} is not in any group")
        return list(current)
    if source.group_id == UNASSIGNED_GROUP_ID:
        return list(current)

    groups = list(current)
    if not any(g.group_id == UNASSIGNED_GROUP_ID for g in groups):
        groups.insert(0, Group(UNASSIGNED_GROUP_ID, ()))

    result = []
    for group in groups:
        if group.group_id == source.group_id:
            group = Group(group.group_id, tuple(s for s in group.students if s.student_id != student_id))
        elif group.group_id == UNASSIGNED_GROUP_ID:
            group = Group(UNASSIGNED_GROUP_ID, _insert_sorted(group.students, student))
        result.append(group)

    check_membership(result, len(_all_students(current)))
    return result


def regular_groups(groups: Sequence[Group]) -> List[Group]:
    return sorted((g for g in groups if g.group_id != UNASSIGNED_GROUP_ID), key=lambda g: g.group_id)
