from pydantic import BaseModel, Field
from datetime import date, datetime
from typing import List, Optional


# ==========================================================
# [입력용 스키마]
# ==========================================================
class FrequencyReportRequest(BaseModel):
    class_id: int                       # 학급 ID
    date_from: date                     # 조회 시작일 (포함)
    date_to: date                       # 조회 종료일 (포함)


class PerformanceReportRequest(BaseModel):
    class_id: int                       # 학급 ID
    period: Optional[str] = None        # 수업 교시/시간대 라벨 (해당 수업 날짜 범위로 평가 필터)


# ==========================================================
# [출력용 스키마] 출석 리포트
# ==========================================================
class StudentFrequency(BaseModel):
    student_id: int
    student_name: str
    registration: str
    total_sessions: int                 # 기간 내 전체 수업 수
    presences: int                      # 출석
    absences: int                       # 결석
    excused: int                        # 인정 결석
    percentage: float                   # 출석률(%) 소수 둘째 자리


class FrequencyReport(BaseModel):
    class_id: int
    class_name: str
    subject_name: str
    date_from: date
    date_to: date
    generated_at: datetime
    students: List[StudentFrequency] = Field(default_factory=list)
    total_sessions: int
    average_attendance: float           # 학생별 출석률 평균
    total_presences: int
    total_absences: int
    total_excused: int


# ==========================================================
# [출력용 스키마] 성취도 리포트
# ==========================================================
class AssessmentScore(BaseModel):
    assessment_id: int
    title: str
    applied_on: date
    max_value: float
    value: Optional[float] = None       # 점수 (미입력 시 None)
    percentage: Optional[float] = None  # 만점 대비 백분율


class StudentPerformance(BaseModel):
    student_id: int
    student_name: str
    registration: str
    total_assessments: int
    overall_average: float              # 입력된 평가 기준 종합 백분율
    sum_grades: float
    sum_max: float
    assessments: List[AssessmentScore] = Field(default_factory=list)


class GradeBand(BaseModel):
    label: str                          # 구간 라벨 (예: "0-3")
    count: int


class PerformanceCategory(BaseModel):
    category: str                       # 등급명
    band: str                           # 구간 라벨
    count: int
    percentage: float                   # 전체 대비 비율(%) 소수 첫째 자리


class PerformanceReport(BaseModel):
    class_id: int
    class_name: str
    subject_name: str
    period: Optional[str] = None
    generated_at: datetime
    students: List[StudentPerformance] = Field(default_factory=list)
    class_average: float
    class_median: float
    highest: float
    lowest: float
    above_average: int
    below_average: int
    distribution: List[GradeBand] = Field(default_factory=list)
    classification: List[PerformanceCategory] = Field(default_factory=list)
    observation: str
    recommendation: str
