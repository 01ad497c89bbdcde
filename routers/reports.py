from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import require_teacher
from schemas.reports import FrequencyReportRequest, PerformanceReportRequest
from services import report_service

router = APIRouter(prefix="/reports", tags=["리포트"])


# ==========================================================
# [리포트] 매 요청마다 다시 계산 (저장하지 않음)
# ==========================================================

# ✅ [FREQUENCY] 기간별 학급 출석 리포트
@router.post("/frequency")
def generate_frequency_report(
    request: FrequencyReportRequest,
    teacher_id: int = Depends(require_teacher),
    db: Session = Depends(get_db),
):
    report = report_service.frequency_report(db, teacher_id, request)
    return {
        "success": True,
        "data": report,
        "message": "출석 리포트 생성 완료",
    }


# ✅ [PERFORMANCE] 학급 성취도 리포트 (통계 + 분포 + 코멘트)
@router.post("/performance")
def generate_performance_report(
    request: PerformanceReportRequest,
    teacher_id: int = Depends(require_teacher),
    db: Session = Depends(get_db),
):
    report = report_service.performance_report(db, teacher_id, request)
    return {
        "success": True,
        "data": report,
        "message": "성취도 리포트 생성 완료",
    }
