# tests/test_grades.py

import pytest

from models.grades import GradeEntry
from schemas.grades import GradeLaunch
from services import grade_service
from utils.exceptions import BadRequestError, NotFoundError, UnauthorizedError

from conftest import OTHER_TEACHER_ID, TEACHER_ID


def launch(db, grades, assessment_id=1, teacher_id=TEACHER_ID):
    payload = GradeLaunch(
        assessment_id=assessment_id,
        grades=[{"student_id": sid, "value": value} for sid, value in grades],
    )
    return grade_service.launch_grades(db, teacher_id, payload)


def stored(db, assessment_id=1):
    return {
        g.student_id: g.value
        for g in db.query(GradeEntry).filter(GradeEntry.assessment_id == assessment_id).all()
    }


def test_launch_inserts_manual_grades(seeded):
    result = launch(seeded, [(1, 7.5), (2, 10.0)])

    assert (result.inserted, result.updated) == (2, 0)
    assert stored(seeded) == {1: 7.5, 2: 10.0}
    assert {g.origin for g in seeded.query(GradeEntry).all()} == {"Manual"}


def test_out_of_range_value_rejects_whole_batch(seeded):
    with pytest.raises(BadRequestError) as exc_info:
        launch(seeded, [(1, 10.0), (2, 10.1)])

    assert exc_info.value.offending_id == 2
    assert stored(seeded) == {}


@pytest.mark.parametrize("value", [float("nan"), float("inf")])
def test_non_finite_value_is_rejected_before_writing(seeded, value):
    with pytest.raises(BadRequestError) as exc_info:
        launch(seeded, [(2, 5.0), (1, value)])

    assert exc_info.value.offending_id == 1
    assert stored(seeded) == {}


def test_negative_value_is_rejected(seeded):
    with pytest.raises(BadRequestError):
        launch(seeded, [(1, -0.5)])


def test_update_changes_only_value_and_timestamp(seeded):
    launch(seeded, [(1, 5.0)])
    entry = seeded.query(GradeEntry).one()
    entry.origin = "Import"
    seeded.commit()
    first_id = entry.id
    first_time = entry.launched_at

    result = launch(seeded, [(1, 9.0), (3, 4.0)])

    assert (result.inserted, result.updated) == (1, 1)
    updated = seeded.query(GradeEntry).filter(GradeEntry.student_id == 1).one()
    assert updated.id == first_id
    assert updated.value == 9.0
    assert updated.origin == "Import"
    assert updated.assessment_id == 1
    assert updated.launched_at >= first_time


def test_student_outside_teacher_classes_is_rejected(seeded):
    with pytest.raises(BadRequestError) as exc_info:
        launch(seeded, [(1, 5.0), (99, 5.0)])

    assert exc_info.value.offending_id == 99
    assert stored(seeded) == {}


def test_duplicate_student_is_rejected(seeded):
    with pytest.raises(BadRequestError):
        launch(seeded, [(1, 5.0), (1, 6.0)])


def test_empty_batch_is_rejected(seeded):
    with pytest.raises(BadRequestError):
        launch(seeded, [])


def test_missing_assessment_is_not_found(seeded):
    with pytest.raises(NotFoundError):
        launch(seeded, [(1, 5.0)], assessment_id=999)


def test_assessment_of_other_subject_is_unauthorized(seeded):
    with pytest.raises(UnauthorizedError):
        launch(seeded, [(99, 5.0)], assessment_id=3)
    with pytest.raises(UnauthorizedError):
        launch(seeded, [(1, 5.0)], teacher_id=OTHER_TEACHER_ID)


def test_grade_sheet_summarizes_class(seeded):
    launch(seeded, [(1, 6.0), (3, 8.0)])

    sheet = grade_service.get_grade_sheet(seeded, TEACHER_ID, 1)

    assert sheet.class_name == "1학년 A반"
    assert sheet.max_value == 10
    assert sheet.total_students == 3
    assert sheet.grades_launched == 2
    assert sheet.class_average == 7.0
    by_id = {s.student_id: s for s in sheet.students}
    assert by_id[2].has_grade is False
    assert by_id[2].value is None
    assert by_id[3].value == 8.0


@pytest.mark.parametrize(
    "name, expected",
    [("Ana Maria Souza", "AS"), ("ana", "AN"), ("", "??"), ("   ", "??"), ("홍 길동", "홍길")],
)
def test_get_initials(name, expected):
    assert grade_service.get_initials(name) == expected
