"""
services/answer_key_service.py

- 평가의 객관식 문항별 정답(A~E)을 일괄 지정/삭제한다.
- 배치 전체를 먼저 검증하고, 하나라도 실패하면 아무것도 저장하지 않는다.
"""

import logging
from typing import Dict, Optional

from sqlalchemy.orm import Session

from database.db import atomic
from models.assessments import ANSWER_LETTERS, AnswerKeyEntry, ObjectiveQuestion
from models.subjects import Subject
from schemas.answer_keys import AnswerKeyDefine, AnswerKeySummary, QuestionKeyOut
from services import catalog
from utils.exceptions import BadRequestError, NotFoundError

logger = logging.getLogger(__name__)


def normalize_letter(letter: Optional[str]) -> Optional[str]:
    """보기 문자를 대문자로 정규화. None/빈 문자열은 '정답 삭제'(None)"""
    if letter is None:
        return None
    value = letter.strip().upper()
    if not value:
        return None
    if value not in ANSWER_LETTERS:
        raise BadRequestError(
            f"잘못된 보기입니다: {letter}. A, B, C, D, E 중 하나를 사용하세요.",
            offending_id=letter,
        )
    return value


def define_answer_key(db: Session, teacher_id: int, payload: AnswerKeyDefine) -> Dict[str, int]:
    with atomic(db, "정답 저장"):
        catalog.ensure_assessment_owner(db, teacher_id, payload.assessment_id)

        # ✅ 검증 단계: 보기 문자 + 문항 소속 확인 (같은 문항은 마지막 값 사용)
        question_ids = {
            r[0]
            for r in db.query(ObjectiveQuestion.id)
            .filter(ObjectiveQuestion.assessment_id == payload.assessment_id)
            .all()
        }
        letters: Dict[int, Optional[str]] = {}
        for item in payload.items:
            letter = normalize_letter(item.letter)
            if item.question_id not in question_ids:
                raise NotFoundError.entity("객관식 문항", item.question_id)
            letters[item.question_id] = letter

        # ✅ 쓰기 단계: 정답 생성/갱신 또는 삭제
        existing = {
            entry.question_id: entry
            for entry in db.query(AnswerKeyEntry)
            .filter(AnswerKeyEntry.question_id.in_(list(letters)))
            .all()
        } if letters else {}

        saved = cleared = 0
        for question_id, letter in letters.items():
            entry = existing.get(question_id)
            if letter is None:
                if entry is not None:
                    db.delete(entry)
                    cleared += 1
                continue
            if entry is not None:
                entry.correct_letter = letter
            else:
                db.add(AnswerKeyEntry(question_id=question_id, correct_letter=letter))
            saved += 1

    logger.info(
        f"정답 저장 완료: assessment_id={payload.assessment_id} saved={saved} cleared={cleared}"
    )
    return {"assessment_id": payload.assessment_id, "saved": saved, "cleared": cleared}


def get_answer_key_summary(db: Session, teacher_id: int, assessment_id: int) -> AnswerKeySummary:
    assessment = catalog.ensure_assessment_owner(db, teacher_id, assessment_id)

    class_ = catalog.first_class_for_subject(db, teacher_id, assessment.subject_id)
    if class_ is None:
        raise NotFoundError("이 과목을 담당하는 학급이 없습니다.", offending_id=assessment.subject_id)

    subject = db.query(Subject).filter(Subject.id == assessment.subject_id).first()

    rows = (
        db.query(ObjectiveQuestion, AnswerKeyEntry)
        .outerjoin(AnswerKeyEntry, AnswerKeyEntry.question_id == ObjectiveQuestion.id)
        .filter(ObjectiveQuestion.assessment_id == assessment_id)
        .order_by(ObjectiveQuestion.number)
        .all()
    )

    return AnswerKeySummary(
        assessment_id=assessment.id,
        assessment_title=assessment.title,
        subject_name=subject.name if subject else "",
        class_name=class_.name,
        questions=[
            QuestionKeyOut(
                id=question.id,
                number=question.number,
                statement=question.statement or "",
                points=question.points,
                correct_letter=entry.correct_letter if entry else None,
                has_answer=entry is not None,
            )
            for question, entry in rows
        ],
    )
