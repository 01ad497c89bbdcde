from sqlalchemy import Column, Integer, Float, String, DateTime, ForeignKey, UniqueConstraint
from database.db import Base

# 직접 입력된 성적의 출처 태그
ORIGIN_MANUAL = "Manual"


class GradeEntry(Base):
    __tablename__ = "assessment_grades"  # 평가별 학생 성적 테이블
    __table_args__ = (
        UniqueConstraint("assessment_id", "student_id", name="uq_assessment_grades_pair"),
    )

    id = Column(Integer, primary_key=True, index=True)                                      # 성적 고유 ID (Primary Key)
    assessment_id = Column(Integer, ForeignKey("assessments.id"), nullable=False, index=True)  # 평가 ID
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)        # 학생 ID
    value = Column(Float, nullable=False)                                                   # 점수 (0 ~ 만점)
    launched_at = Column(DateTime, nullable=False)                                          # 마지막 입력 시각
    origin = Column(String(30))                                                             # 입력 출처 (예: Manual)
