# tests/test_answer_keys.py

import pytest

from models.assessments import AnswerKeyEntry
from schemas.answer_keys import AnswerKeyDefine
from services import answer_key_service
from utils.exceptions import BadRequestError, NotFoundError, UnauthorizedError

from conftest import OTHER_TEACHER_ID, TEACHER_ID


def define(db, items, assessment_id=1, teacher_id=TEACHER_ID):
    payload = AnswerKeyDefine(
        assessment_id=assessment_id,
        items=[{"question_id": qid, "letter": letter} for qid, letter in items],
    )
    return answer_key_service.define_answer_key(db, teacher_id, payload)


def keys(db):
    return {e.question_id: e.correct_letter for e in db.query(AnswerKeyEntry).all()}


def test_define_normalizes_letters_to_uppercase(seeded):
    result = define(seeded, [(1, "b"), (2, "E")])

    assert result == {"assessment_id": 1, "saved": 2, "cleared": 0}
    assert keys(seeded) == {1: "B", 2: "E"}


def test_define_overwrites_existing_letter(seeded):
    define(seeded, [(1, "A")])
    define(seeded, [(1, "C")])

    assert keys(seeded) == {1: "C"}


def test_null_letter_clears_answer(seeded):
    define(seeded, [(1, "B")])
    result = define(seeded, [(1, None)])

    assert result["cleared"] == 1
    assert keys(seeded) == {}


def test_empty_string_also_clears_answer(seeded):
    define(seeded, [(1, "B"), (2, "D")])
    define(seeded, [(2, "")])

    assert keys(seeded) == {1: "B"}


def test_invalid_letter_rejects_whole_batch(seeded):
    define(seeded, [(1, "A")])

    with pytest.raises(BadRequestError) as exc_info:
        define(seeded, [(1, "D"), (2, "F")])

    assert exc_info.value.offending_id == "F"
    assert keys(seeded) == {1: "A"}


def test_question_from_another_assessment_is_not_found(seeded):
    with pytest.raises(NotFoundError) as exc_info:
        define(seeded, [(1, "A"), (3, "B")])

    assert exc_info.value.offending_id == 3
    assert keys(seeded) == {}


def test_missing_assessment_is_not_found(seeded):
    with pytest.raises(NotFoundError):
        define(seeded, [(1, "A")], assessment_id=999)


def test_assessment_outside_teacher_subjects_is_unauthorized(seeded):
    with pytest.raises(UnauthorizedError):
        define(seeded, [(3, "A")], assessment_id=3)
    with pytest.raises(UnauthorizedError):
        define(seeded, [(1, "A")], teacher_id=OTHER_TEACHER_ID)


def test_repeated_question_takes_last_letter(seeded):
    define(seeded, [(1, "A"), (1, "C")])

    assert keys(seeded) == {1: "C"}


def test_summary_lists_every_question_with_flag(seeded):
    define(seeded, [(2, "d")])

    summary = answer_key_service.get_answer_key_summary(seeded, TEACHER_ID, 1)

    assert summary.assessment_title == "1차 형성평가"
    assert summary.subject_name == "수학"
    assert summary.class_name == "1학년 A반"
    assert [(q.number, q.correct_letter, q.has_answer) for q in summary.questions] == [
        (1, None, False),
        (2, "D", True),
    ]
