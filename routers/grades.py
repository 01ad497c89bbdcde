from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import require_teacher
from schemas.grades import GradeLaunch
from services import grade_service

router = APIRouter(prefix="/grades", tags=["성적"])


# ✅ [LAUNCH] 평가 1건에 대한 성적 일괄 입력 (생성/갱신)
@router.post("/launch")
def launch_grades(
    payload: GradeLaunch,
    teacher_id: int = Depends(require_teacher),
    db: Session = Depends(get_db),
):
    result = grade_service.launch_grades(db, teacher_id, payload)
    return {
        "success": True,
        "data": result,
        "message": "성적이 성공적으로 입력되었습니다",
    }


# ✅ [READ] 성적 입력 화면 (학생별 현재 점수 + 학급 평균)
@router.get("/assessment/{assessment_id}")
def get_grade_sheet(
    assessment_id: int,
    teacher_id: int = Depends(require_teacher),
    db: Session = Depends(get_db),
):
    sheet = grade_service.get_grade_sheet(db, teacher_id, assessment_id)
    return {
        "success": True,
        "data": sheet,
        "message": "성적 입력 현황 조회 성공",
    }
