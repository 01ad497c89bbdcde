"""
services/grade_service.py

- 평가 1건에 대해 여러 학생의 점수를 일괄 입력(생성/갱신)한다.
- 모든 검증을 쓰기 전에 끝내며, 배치 중 하나라도 잘못되면 전체를 거부한다.
- 같은 (평가, 학생) 쌍에 대한 동시 입력은 마지막 커밋이 이긴다 (버전 검사 없음).
"""

import logging
from datetime import datetime
from typing import Dict

from sqlalchemy.orm import Session

from database.db import atomic
from models.classes import Class
from models.grades import GradeEntry, ORIGIN_MANUAL
from models.students import Student
from models.subjects import Subject
from schemas.grades import GradeLaunch, GradeLaunchResult, GradeSheet, StudentGradeOut
from services import catalog
from utils.exceptions import BadRequestError, NotFoundError

logger = logging.getLogger(__name__)


def get_initials(name: str) -> str:
    """'홍 길 동' → '홍동', 'Ana' → 'AN', 빈 이름 → '??'"""
    parts = (name or "").split()
    if not parts:
        return "??"
    if len(parts) == 1:
        return parts[0][:2].upper()
    return (parts[0][0] + parts[-1][0]).upper()


def launch_grades(db: Session, teacher_id: int, payload: GradeLaunch) -> GradeLaunchResult:
    with atomic(db, "성적 입력"):
        assessment = catalog.ensure_assessment_owner(db, teacher_id, payload.assessment_id)

        if not payload.grades:
            raise BadRequestError("입력할 성적이 없습니다.")

        # ✅ 학생 검증: 이 평가 과목을 가르치는 본인 학급의 학생이어야 함
        student_ids = [g.student_id for g in payload.grades]
        allowed = {
            r[0]
            for r in db.query(Student.id)
            .join(Class, Class.id == Student.class_id)
            .filter(
                Student.id.in_(student_ids),
                Class.teacher_id == teacher_id,
                Class.subject_id == assessment.subject_id,
            )
            .all()
        }

        seen = set()
        for grade in payload.grades:
            if grade.student_id in seen:
                raise BadRequestError(
                    f"학생 ID {grade.student_id}의 성적이 중복되어 있습니다.",
                    offending_id=grade.student_id,
                )
            seen.add(grade.student_id)
            if grade.student_id not in allowed:
                raise BadRequestError(
                    f"학생 ID {grade.student_id}은(는) 이 평가 과목을 담당하는 학급에 속하지 않습니다.",
                    offending_id=grade.student_id,
                )
            # NaN / inf 도 여기서 거부됨
            if not (0 <= grade.value <= assessment.max_value):
                raise BadRequestError(
                    f"학생 {grade.student_id}의 점수가 잘못되었습니다. 0 ~ {assessment.max_value} 사이여야 합니다.",
                    offending_id=grade.student_id,
                )

        # ✅ 기존 성적 / 신규 성적 분리
        existing: Dict[int, GradeEntry] = {
            entry.student_id: entry
            for entry in db.query(GradeEntry)
            .filter(
                GradeEntry.assessment_id == payload.assessment_id,
                GradeEntry.student_id.in_(student_ids),
            )
            .all()
        }

        now = datetime.now()
        inserted = updated = 0
        for grade in payload.grades:
            entry = existing.get(grade.student_id)
            if entry is not None:
                # 점수와 입력 시각만 갱신 (학생/평가/출처는 그대로)
                entry.value = grade.value
                entry.launched_at = now
                updated += 1
            else:
                db.add(GradeEntry(
                    assessment_id=payload.assessment_id,
                    student_id=grade.student_id,
                    value=grade.value,
                    launched_at=now,
                    origin=ORIGIN_MANUAL,
                ))
                inserted += 1

    logger.info(
        f"성적 입력 완료: assessment_id={payload.assessment_id} inserted={inserted} updated={updated}"
    )
    return GradeLaunchResult(assessment_id=payload.assessment_id, inserted=inserted, updated=updated)


def get_grade_sheet(db: Session, teacher_id: int, assessment_id: int) -> GradeSheet:
    assessment = catalog.ensure_assessment_owner(db, teacher_id, assessment_id)

    # TODO: 같은 과목 학급이 여러 개면 학급 선택 파라미터 추가 (현재는 첫 번째 학급 기준)
    class_ = catalog.first_class_for_subject(db, teacher_id, assessment.subject_id)
    if class_ is None:
        raise NotFoundError("이 과목을 담당하는 학급이 없습니다.", offending_id=assessment.subject_id)

    subject = db.query(Subject).filter(Subject.id == assessment.subject_id).first()
    students = (
        db.query(Student)
        .filter(Student.class_id == class_.id)
        .order_by(Student.student_name, Student.id)
        .all()
    )
    grades = {
        g.student_id: g
        for g in db.query(GradeEntry).filter(GradeEntry.assessment_id == assessment_id).all()
    }

    rows = []
    for student in students:
        grade = grades.get(student.id)
        rows.append(StudentGradeOut(
            student_id=student.id,
            student_name=student.student_name,
            registration=student.registration,
            initials=get_initials(student.student_name),
            value=grade.value if grade else None,
            has_grade=grade is not None,
            launched_at=grade.launched_at if grade else None,
        ))

    values = [r.value for r in rows if r.has_grade]
    class_average = sum(values) / len(values) if values else 0.0

    return GradeSheet(
        assessment_id=assessment.id,
        assessment_title=assessment.title,
        subject_name=subject.name if subject else "",
        class_name=class_.name,
        max_value=assessment.max_value,
        class_average=class_average,
        grades_launched=len(values),
        total_students=len(rows),
        students=rows,
    )
