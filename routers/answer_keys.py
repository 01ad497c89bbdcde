from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database.db import get_db
from dependencies.security import require_teacher
from schemas.answer_keys import AnswerKeyDefine
from services import answer_key_service

router = APIRouter(prefix="/answer-keys", tags=["정답"])


# ✅ [DEFINE] 문항별 정답 일괄 지정/삭제
@router.post("/define")
def define_answer_key(
    payload: AnswerKeyDefine,
    teacher_id: int = Depends(require_teacher),
    db: Session = Depends(get_db),
):
    result = answer_key_service.define_answer_key(db, teacher_id, payload)
    return {
        "success": True,
        "data": result,
        "message": "정답이 성공적으로 저장되었습니다",
    }


# ✅ [READ] 평가의 정답 요약 (문항별 정답 / 지정 여부)
@router.get("/assessment/{assessment_id}")
def get_answer_key_summary(
    assessment_id: int,
    teacher_id: int = Depends(require_teacher),
    db: Session = Depends(get_db),
):
    summary = answer_key_service.get_answer_key_summary(db, teacher_id, assessment_id)
    return {
        "success": True,
        "data": summary,
        "message": "정답 요약 조회 성공",
    }
