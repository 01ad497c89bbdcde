from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import require_teacher
from schemas.attendance import AttendanceRegister
from services import attendance_service

router = APIRouter(prefix="/attendance", tags=["출결"])


# ==========================================================
# [쓰기] 출결 일괄 등록
# ==========================================================

# ✅ [REGISTER] 수업 1건 + 출결 명단 + 메모를 한 번에 등록 (명단 전체 교체)
@router.post("/register")
def register_attendance(
    payload: AttendanceRegister,
    teacher_id: int = Depends(require_teacher),
    db: Session = Depends(get_db),
):
    session = attendance_service.register_attendance(db, teacher_id, payload)
    return {
        "success": True,
        "data": session,
        "message": "출결이 성공적으로 등록되었습니다",
    }


# ==========================================================
# [읽기] 수업 조회
# ==========================================================

# ✅ [READ] 학급의 전체 수업 목록
@router.get("/class/{class_id}/sessions")
def list_sessions(
    class_id: int,
    teacher_id: int = Depends(require_teacher),
    db: Session = Depends(get_db),
):
    sessions = attendance_service.list_sessions(db, teacher_id, class_id)
    return {
        "success": True,
        "data": sessions,
        "message": "수업 목록 조회 완료",
    }


# ✅ [READ] 특정 날짜 수업 (출결/메모 포함)
@router.get("/class/{class_id}/date/{session_date}")
def get_session(
    class_id: int,
    session_date: date,
    teacher_id: int = Depends(require_teacher),
    db: Session = Depends(get_db),
):
    session = attendance_service.get_session(db, teacher_id, class_id, session_date)
    return {
        "success": True,
        "data": session,
        "message": "수업 조회 성공",
    }
