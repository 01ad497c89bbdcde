"""
services/attendance_service.py

- 수업(학급+날짜) 1건과 그 수업의 출결 명단, 수업 메모를 하나의 트랜잭션으로 등록한다.
- 명단은 병합하지 않고 매번 전체 교체한다 (마지막 호출의 명단만 남음).
"""

import logging
from datetime import date, datetime
from typing import List

from sqlalchemy.orm import Session

from database.db import atomic
from models.attendance import AttendanceRecord
from models.class_sessions import ClassSession, SessionNote
from models.classes import Class
from models.students import Student
from schemas.attendance import AttendanceRegister, AttendanceRow, SessionOut
from services import catalog
from utils.exceptions import BusinessRuleError, NotFoundError

logger = logging.getLogger(__name__)


def register_attendance(db: Session, teacher_id: int, payload: AttendanceRegister) -> SessionOut:
    with atomic(db, "출결 등록"):
        class_ = catalog.ensure_class_owner(db, teacher_id, payload.class_id)

        # ✅ 쓰기 전에 명단 전체를 학급 학생 목록과 대조
        valid_ids = set(catalog.students_of_class(db, payload.class_id))
        seen = set()
        for entry in payload.roster:
            if entry.student_id in seen:
                raise BusinessRuleError(
                    f"학생 ID {entry.student_id}이(가) 명단에 중복되어 있습니다.",
                    offending_id=entry.student_id,
                )
            if entry.student_id not in valid_ids:
                raise BusinessRuleError(
                    f"학생 ID {entry.student_id}은(는) 학급 {payload.class_id}에 속하지 않습니다.",
                    offending_id=entry.student_id,
                )
            seen.add(entry.student_id)

        # ✅ 수업 조회 또는 생성 (period 라벨은 덮어쓰기)
        session = (
            db.query(ClassSession)
            .filter(ClassSession.class_id == payload.class_id, ClassSession.date == payload.date)
            .first()
        )
        if session is None:
            session = ClassSession(class_id=payload.class_id, date=payload.date, period=payload.period)
            db.add(session)
            db.flush()
        elif session.period != payload.period:
            session.period = payload.period

        # ✅ 기존 출결 삭제 후 새 명단 삽입
        db.query(AttendanceRecord).filter(
            AttendanceRecord.session_id == session.id
        ).delete(synchronize_session=False)
        db.add_all([
            AttendanceRecord(session_id=session.id, student_id=e.student_id, status=e.status)
            for e in payload.roster
        ])

        # ✅ 메모는 내용이 있을 때만 생성/갱신
        if payload.note and payload.note.strip():
            note = db.query(SessionNote).filter(SessionNote.session_id == session.id).first()
            if note is not None:
                note.text = payload.note
            else:
                db.add(SessionNote(session_id=session.id, text=payload.note, created_at=datetime.now()))

        session_id = session.id

    logger.info(
        f"출결 등록 완료: class_id={payload.class_id} date={payload.date} "
        f"session_id={session_id} roster={len(payload.roster)}"
    )
    return _session_view(db, class_, session_id)


def get_session(db: Session, teacher_id: int, class_id: int, session_date: date) -> SessionOut:
    class_ = catalog.ensure_class_owner(db, teacher_id, class_id)
    session = (
        db.query(ClassSession)
        .filter(ClassSession.class_id == class_id, ClassSession.date == session_date)
        .first()
    )
    if session is None:
        raise NotFoundError(f"{session_date} 날짜의 수업이 없습니다.", offending_id=str(session_date))
    return _session_view(db, class_, session.id)


def list_sessions(db: Session, teacher_id: int, class_id: int) -> List[SessionOut]:
    class_ = catalog.ensure_class_owner(db, teacher_id, class_id)
    rows = (
        db.query(ClassSession.id)
        .filter(ClassSession.class_id == class_id)
        .order_by(ClassSession.date)
        .all()
    )
    return [_session_view(db, class_, r[0]) for r in rows]


def _session_view(db: Session, class_: Class, session_id: int) -> SessionOut:
    session = db.query(ClassSession).filter(ClassSession.id == session_id).one()
    records = (
        db.query(AttendanceRecord, Student)
        .join(Student, Student.id == AttendanceRecord.student_id)
        .filter(AttendanceRecord.session_id == session_id)
        .order_by(Student.student_name, Student.id)
        .all()
    )
    note = db.query(SessionNote).filter(SessionNote.session_id == session_id).first()

    return SessionOut(
        id=session.id,
        class_id=session.class_id,
        class_name=class_.name,
        subject_name=class_.subject.name if class_.subject else "",
        date=session.date,
        period=session.period,
        has_attendance=bool(records),
        note=note.text if note else None,
        attendance=[
            AttendanceRow(
                student_id=student.id,
                student_name=student.student_name,
                registration=student.registration,
                status=record.status,
            )
            for record, student in records
        ],
    )
