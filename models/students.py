from sqlalchemy import Column, Integer, String, ForeignKey
from database.db import Base


class Student(Base):
    __tablename__ = "students"  # 학생 기본 정보 테이블

    id = Column(Integer, primary_key=True, index=True)                       # 고유 학생 ID (Primary Key)
    registration = Column(String(30), nullable=False, default="")           # 학번
    student_name = Column(String(100), nullable=False)                      # 학생 이름
    class_id = Column(Integer, ForeignKey("classes.id"), nullable=False, index=True)  # 소속 반 ID
