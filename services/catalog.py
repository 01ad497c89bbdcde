"""
services/catalog.py

- 학급/학생/과목/평가의 존재 여부와 소유 관계만 조회하는 읽기 전용 계약
- 엔티티 CRUD는 이 모듈의 관심사가 아니며, 코어 서비스는 여기 정의된 함수만 호출한다.
"""

from typing import Iterable, List, Optional, Set

from sqlalchemy.orm import Session

from models.assessments import Assessment
from models.classes import Class
from models.students import Student
from utils.exceptions import NotFoundError, UnauthorizedError


def is_owner(teacher_subjects: Iterable[int], resource_subject: Optional[int]) -> bool:
    """교사의 과목 집합에 리소스 과목이 포함되는지 (상태 없는 순수 함수)"""
    if resource_subject is None:
        return False
    return resource_subject in set(teacher_subjects)


def get_class(db: Session, class_id: int) -> Optional[Class]:
    return db.query(Class).filter(Class.id == class_id).first()


def class_exists(db: Session, class_id: int) -> bool:
    return db.query(Class.id).filter(Class.id == class_id).first() is not None


def class_owner(db: Session, class_id: int) -> Optional[int]:
    row = db.query(Class.teacher_id).filter(Class.id == class_id).first()
    return row[0] if row else None


def students_of_class(db: Session, class_id: int) -> List[int]:
    rows = db.query(Student.id).filter(Student.class_id == class_id).all()
    return [r[0] for r in rows]


def subjects_of_teacher(db: Session, teacher_id: int) -> Set[int]:
    rows = db.query(Class.subject_id).filter(Class.teacher_id == teacher_id).distinct().all()
    return {r[0] for r in rows}


def get_assessment(db: Session, assessment_id: int) -> Optional[Assessment]:
    return db.query(Assessment).filter(Assessment.id == assessment_id).first()


def assessment_exists(db: Session, assessment_id: int) -> bool:
    return db.query(Assessment.id).filter(Assessment.id == assessment_id).first() is not None


def assessment_subject(db: Session, assessment_id: int) -> Optional[int]:
    row = db.query(Assessment.subject_id).filter(Assessment.id == assessment_id).first()
    return row[0] if row else None


def first_class_for_subject(db: Session, teacher_id: int, subject_id: int) -> Optional[Class]:
    """교사가 해당 과목으로 담당하는 첫 번째 학급"""
    return (
        db.query(Class)
        .filter(Class.teacher_id == teacher_id, Class.subject_id == subject_id)
        .order_by(Class.id)
        .first()
    )


# ==========================================================
# [공통] 소유권 검증 (실패 시 분류된 오류 발생)
# ==========================================================

def ensure_class_owner(db: Session, teacher_id: int, class_id: int) -> Class:
    if not class_exists(db, class_id):
        raise NotFoundError.entity("학급", class_id)
    if class_owner(db, class_id) != teacher_id:
        raise UnauthorizedError("해당 학급에 대한 권한이 없습니다.", offending_id=class_id)
    return get_class(db, class_id)


def ensure_assessment_owner(db: Session, teacher_id: int, assessment_id: int) -> Assessment:
    if not assessment_exists(db, assessment_id):
        raise NotFoundError.entity("평가", assessment_id)
    if not is_owner(subjects_of_teacher(db, teacher_id), assessment_subject(db, assessment_id)):
        raise UnauthorizedError("해당 평가에 대한 권한이 없습니다.", offending_id=assessment_id)
    return get_assessment(db, assessment_id)
