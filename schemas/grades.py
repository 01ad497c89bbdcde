from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime


# ==========================================================
# [입력용 스키마] 성적 일괄 입력
# ==========================================================
class GradeItem(BaseModel):
    student_id: int                          # 학생 ID
    value: float                             # 점수 (0 ~ 만점, 서비스에서 검증)


class GradeLaunch(BaseModel):
    assessment_id: int                       # 평가 ID
    grades: List[GradeItem] = Field(default_factory=list)


class GradeLaunchResult(BaseModel):
    assessment_id: int
    inserted: int                            # 새로 생성된 성적 수
    updated: int                             # 갱신된 성적 수


# ==========================================================
# [출력용 스키마] 성적 입력 화면용 요약
# ==========================================================
class StudentGradeOut(BaseModel):
    student_id: int
    student_name: str
    registration: str
    initials: str                            # 이름 이니셜 (아바타 표시용)
    value: Optional[float] = None            # 현재 점수 (없으면 None)
    has_grade: bool
    launched_at: Optional[datetime] = None   # 마지막 입력 시각


class GradeSheet(BaseModel):
    assessment_id: int
    assessment_title: str
    subject_name: str
    class_name: str
    max_value: float                         # 만점
    class_average: float                     # 입력된 점수의 평균 (없으면 0)
    grades_launched: int                     # 입력된 성적 수
    total_students: int                      # 학급 학생 수
    students: List[StudentGradeOut] = Field(default_factory=list)
