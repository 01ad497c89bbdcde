from sqlalchemy import Column, Integer, String, ForeignKey
from sqlalchemy.orm import relationship
from database.db import Base
from models.subjects import Subject  # noqa: F401  relationship 대상 등록
from models.teachers import Teacher  # noqa: F401


class Class(Base):
    __tablename__ = "classes"

    id = Column(Integer, primary_key=True, index=True)      # 학급 고유 ID (PK)
    name = Column(String(100), nullable=False)              # 학급명 (예: 1학년 A반)
    school_year = Column(Integer)                           # 학년도
    semester = Column(Integer)                              # 학기
    shift = Column(String(20))                              # 수업 시간대 (예: 오전, 오후)

    # ==========================================================
    # [관계 설정]
    # ==========================================================

    # ✅ 담당 교사 ID (FK) - 소유권 판단 기준 (단순 동등 비교)
    teacher_id = Column(Integer, ForeignKey("teachers.id"), nullable=False, index=True)

    # ✅ 담당 과목 ID (FK) - 평가(assessments)와 연결되는 기준
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False, index=True)

    teacher = relationship("Teacher", back_populates="classes")
    subject = relationship("Subject")
