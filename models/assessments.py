from sqlalchemy import Column, Integer, Float, String, Date, Text, ForeignKey, UniqueConstraint
from database.db import Base

# 객관식 정답으로 허용되는 보기
ANSWER_LETTERS = ("A", "B", "C", "D", "E")


class Assessment(Base):
    __tablename__ = "assessments"  # 평가(시험) 정보 테이블

    id = Column(Integer, primary_key=True, index=True)                          # 평가 고유 ID
    subject_id = Column(Integer, ForeignKey("subjects.id"), nullable=False, index=True)  # 과목 ID
    title = Column(String(200), nullable=False)                                # 평가명
    applied_on = Column(Date, nullable=False)                                  # 시행일
    max_value = Column(Float, nullable=False)                                  # 만점 (양수)


class ObjectiveQuestion(Base):
    __tablename__ = "objective_questions"  # 객관식 문항 (없으면 서술형 평가)
    __table_args__ = (
        UniqueConstraint("assessment_id", "number", name="uq_objective_questions_number"),
    )

    id = Column(Integer, primary_key=True, index=True)
    assessment_id = Column(Integer, ForeignKey("assessments.id"), nullable=False, index=True)
    number = Column(Integer, nullable=False)                                   # 문항 번호 (1..N)
    statement = Column(Text, nullable=False, default="")                       # 문항 내용
    points = Column(Float, nullable=False, default=0)                          # 배점


class AnswerKeyEntry(Base):
    __tablename__ = "answer_keys"  # 문항별 정답 (문항당 최대 1개)

    id = Column(Integer, primary_key=True, index=True)
    question_id = Column(Integer, ForeignKey("objective_questions.id"), nullable=False, unique=True)
    correct_letter = Column(String(1), nullable=False)                        # A~E
