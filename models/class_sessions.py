from sqlalchemy import Column, Integer, String, Date, DateTime, Text, ForeignKey, UniqueConstraint
from database.db import Base


class ClassSession(Base):
    """학급의 수업 1회 (학급 + 날짜 단위로 유일)"""
    __tablename__ = "class_sessions"
    __table_args__ = (
        UniqueConstraint("class_id", "date", name="uq_class_sessions_class_date"),
    )

    id = Column(Integer, primary_key=True, index=True)                        # 수업 고유 ID
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False, index=True)  # 학급 ID
    date = Column(Date, nullable=False)                                      # 수업 날짜
    period = Column(String(50), nullable=False)                              # 교시/시간대 라벨 (예: 오전, 1교시)


class SessionNote(Base):
    """수업 메모 (수업당 최대 1개, 코어에서는 삭제하지 않음)"""
    __tablename__ = "session_notes"

    id = Column(Integer, primary_key=True, index=True)
    session_id = Column(Integer, ForeignKey("class_sessions.id"), nullable=False, unique=True)
    text = Column(Text, nullable=False)                                      # 메모 내용
    created_at = Column(DateTime, nullable=False)                            # 최초 작성 시각
