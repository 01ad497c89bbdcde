from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional
from datetime import date

from models.attendance import AttendanceStatus


# ==========================================================
# [입력용 스키마] 출결 일괄 등록
# ==========================================================
class AttendanceEntry(BaseModel):
    student_id: int                          # 학생 ID
    status: AttendanceStatus                 # 출결 상태 (PRESENT / ABSENT / EXCUSED_ABSENCE)


class AttendanceRegister(BaseModel):
    class_id: int                            # 학급 ID
    date: date                               # 수업 날짜
    period: str = Field(..., min_length=1, max_length=50)  # 교시/시간대 라벨
    roster: List[AttendanceEntry] = Field(default_factory=list)  # 학생별 출결 목록 (전체 교체)
    note: Optional[str] = None               # 수업 메모 (비어 있으면 기존 메모 유지)


# ==========================================================
# [출력용 스키마] 통합된 수업 정보
# ==========================================================
class AttendanceRow(BaseModel):
    student_id: int
    student_name: str
    registration: str
    status: AttendanceStatus

    model_config = ConfigDict(from_attributes=True)


class SessionOut(BaseModel):
    id: int                                  # 수업 ID
    class_id: int                            # 학급 ID
    class_name: str                          # 학급명
    subject_name: str                        # 과목명
    date: date                               # 수업 날짜
    period: str                              # 교시/시간대 라벨
    has_attendance: bool                     # 출결 등록 여부
    note: Optional[str] = None               # 수업 메모
    attendance: List[AttendanceRow] = Field(default_factory=list)
