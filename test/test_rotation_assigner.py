from collections import Counter

import pytest

from models import Group, RotationCell, TeacherSessionAssignment
from rotation_assigner import (
    assign,
    assign_sessions,
    rotate_left,
    rotation_by_group,
    teacher_schedule,
    unique_teachers,
)

GROUPS = [Group(1), Group(2), Group(3)]
TEACHERS = [10, 20, 30]


def test_rotate_left():
    assert rotate_left([1, 2, 3], 1) == [2, 3, 1]
    assert rotate_left([1, 2, 3], 4) == [2, 3, 1]
    assert rotate_left([], 2) == []


def test_first_terms_rotate_teachers_left():
    cells = assign(GROUPS, TEACHERS, 2)
    assert cells == [
        RotationCell(1, 1, 10), RotationCell(1, 2, 20), RotationCell(1, 3, 30),
        RotationCell(2, 1, 20), RotationCell(2, 2, 30), RotationCell(2, 3, 10),
    ]


def test_three_by_three_is_a_latin_square():
    cells = assign(GROUPS, TEACHERS, 3)
    assert len(cells) == 9

    pairs = Counter((c.teacher_id, c.group_id) for c in cells)
    assert set(pairs) == {(t, g.group_id) for t in TEACHERS for g in GROUPS}
    assert set(pairs.values()) == {1}

    for term in (1, 2, 3):
        in_term = [c for c in cells if c.term_index == term]
        assert sorted(c.teacher_id for c in in_term) == TEACHERS
        assert sorted(c.group_id for c in in_term) == [1, 2, 3]


def test_no_teacher_repeats_a_group_in_consecutive_terms():
    cells = assign(GROUPS, TEACHERS, 6)
    by_teacher = teacher_schedule(cells)
    for terms in by_teacher.values():
        for t in range(1, 6):
            assert terms[t] != terms[t + 1]


def test_more_groups_than_teachers():
    cells = assign(GROUPS, [10, 20], 2)
    assert len(cells) == 4
    assert all(c.group_id != 3 for c in cells)
    assert [c.teacher_id for c in cells if c.term_index == 2] == [20, 10]


def test_more_teachers_than_groups():
    cells = assign(GROUPS[:2], TEACHERS, 3)
    assert [(c.term_index, c.group_id, c.teacher_id) for c in cells] == [
        (1, 1, 10), (1, 2, 20),
        (2, 1, 20), (2, 2, 30),
        (3, 1, 30), (3, 2, 10),
    ]


def test_no_teachers_no_cells():
    assert assign(GROUPS, [], 4) == []


def test_unassigned_group_is_never_paired():
    cells = assign([Group(0)] + GROUPS, TEACHERS, 1)
    assert [c.group_id for c in cells] == [1, 2, 3]


def test_contract_violations():
    with pytest.raises(ValueError):
        assign(GROUPS, [10, 10, 20], 2)
    with pytest.raises(ValueError):
        assign(GROUPS, TEACHERS, 0)


def test_unique_teachers_drops_placeholders_and_repeats():
    assignments = [
        TeacherSessionAssignment(group_id=1, teacher_id=7),
        TeacherSessionAssignment(group_id=2, teacher_id=0),
        TeacherSessionAssignment(group_id=3, teacher_id=5),
        TeacherSessionAssignment(group_id=4, teacher_id=7),
    ]
    assert unique_teachers(assignments) == [7, 5]


def test_sessions_use_their_own_teachers():
    sessions = {
        "AM": [TeacherSessionAssignment(1, 10), TeacherSessionAssignment(2, 20)],
        "PM": [TeacherSessionAssignment(1, 30, period="PM")],
    }
    result = assign_sessions(GROUPS[:2], sessions, 2)
    assert {c.teacher_id for c in result["AM"]} == {10, 20}
    assert [c.teacher_id for c in result["PM"]] == [30, 30]


def test_rotation_by_group_marks_unpaired_terms():
    cells = assign(GROUPS, [10, 20], 3)
    table = rotation_by_group(cells, GROUPS, 3)
    assert table == [
        {"groupId": 1, "turns": [10, 20, 10]},
        {"groupId": 2, "turns": [20, 10, 20]},
        {"groupId": 3, "turns": [None, None, None]},
    ]


def test_assignment_is_deterministic():
    assert assign(GROUPS, TEACHERS, 5) == assign(GROUPS, TEACHERS, 5)
