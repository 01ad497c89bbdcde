import enum

from sqlalchemy import Column, Integer, Enum, ForeignKey, UniqueConstraint
from database.db import Base


class AttendanceStatus(str, enum.Enum):
    PRESENT = "PRESENT"                    # 출석
    ABSENT = "ABSENT"                      # 결석
    EXCUSED_ABSENCE = "EXCUSED_ABSENCE"    # 인정 결석


class AttendanceRecord(Base):
    __tablename__ = "attendance"  # 출결 기록 테이블 (수업 × 학생)
    __table_args__ = (
        UniqueConstraint("session_id", "student_id", name="uq_attendance_session_student"),
    )

    id = Column(Integer, primary_key=True, index=True)                                  # 출결 고유 ID (Primary Key)
    session_id = Column(Integer, ForeignKey("class_sessions.id"), nullable=False, index=True)  # 수업 ID
    student_id = Column(Integer, ForeignKey("students.id"), nullable=False, index=True)        # 학생 ID
    status = Column(Enum(AttendanceStatus, native_enum=False, length=20), nullable=False)      # 출결 상태
