from pydantic import BaseModel, Field
from typing import List, Optional


# ==========================================================
# [입력용 스키마] 정답(답안지) 정의
# ==========================================================
class AnswerKeyItem(BaseModel):
    question_id: int                         # 객관식 문항 ID
    letter: Optional[str] = None             # 정답 보기 (A~E, 대소문자 무관). None/빈 문자열이면 정답 삭제


class AnswerKeyDefine(BaseModel):
    assessment_id: int                       # 평가 ID
    items: List[AnswerKeyItem] = Field(default_factory=list)


# ==========================================================
# [출력용 스키마] 정답 요약
# ==========================================================
class QuestionKeyOut(BaseModel):
    id: int                                  # 문항 ID
    number: int                              # 문항 번호
    statement: str                           # 문항 내용
    points: float                            # 배점
    correct_letter: Optional[str] = None     # 현재 정답 (없으면 None)
    has_answer: bool                         # 정답 지정 여부


class AnswerKeySummary(BaseModel):
    assessment_id: int
    assessment_title: str
    subject_name: str
    class_name: str
    questions: List[QuestionKeyOut] = Field(default_factory=list)
