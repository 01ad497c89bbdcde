# tests/conftest.py

import os
from datetime import date

os.environ.setdefault("ENV", "test")
os.environ.setdefault("API_TOKEN", "")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from database.db import Base, get_db
from models.assessments import Assessment, ObjectiveQuestion
from models.classes import Class
from models.students import Student
from models.subjects import Subject
from models.teachers import Teacher
from models import attendance, class_sessions, grades  # noqa: F401  테이블 등록용

TEACHER_ID = 1
OTHER_TEACHER_ID = 2


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    yield session
    session.close()


@pytest.fixture
def seeded(db):
    """
    교사 1: 수학(학급 1, 학생 3명) / 교사 2: 과학(학급 2, 학생 1명)
    평가 1: 수학, 만점 10, 객관식 2문항 / 평가 2: 수학, 만점 20 / 평가 3: 과학
    """
    db.add_all([
        Teacher(id=TEACHER_ID, name="김선생", email="kim@school.kr"),
        Teacher(id=OTHER_TEACHER_ID, name="이선생", email="lee@school.kr"),
        Subject(id=1, name="수학"),
        Subject(id=2, name="과학"),
    ])
    db.flush()
    db.add_all([
        Class(id=1, name="1학년 A반", school_year=2025, semester=1, shift="오전",
              teacher_id=TEACHER_ID, subject_id=1),
        Class(id=2, name="2학년 B반", school_year=2025, semester=1, shift="오후",
              teacher_id=OTHER_TEACHER_ID, subject_id=2),
    ])
    db.flush()
    db.add_all([
        Student(id=1, registration="2025001", student_name="가나다", class_id=1),
        Student(id=2, registration="2025002", student_name="라마바", class_id=1),
        Student(id=3, registration="2025003", student_name="사아자", class_id=1),
        Student(id=99, registration="2025099", student_name="차카타", class_id=2),
        Assessment(id=1, subject_id=1, title="1차 형성평가", applied_on=date(2025, 3, 10), max_value=10),
        Assessment(id=2, subject_id=1, title="중간고사", applied_on=date(2025, 4, 20), max_value=20),
        Assessment(id=3, subject_id=2, title="과학 실험 평가", applied_on=date(2025, 3, 15), max_value=10),
    ])
    db.flush()
    db.add_all([
        ObjectiveQuestion(id=1, assessment_id=1, number=1, statement="1 + 1 = ?", points=5),
        ObjectiveQuestion(id=2, assessment_id=1, number=2, statement="2 x 3 = ?", points=5),
        ObjectiveQuestion(id=3, assessment_id=3, number=1, statement="물의 화학식은?", points=10),
    ])
    db.commit()
    return db


@pytest.fixture
def client(seeded, session_factory):
    from main import app

    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    return {"X-Teacher-Id": str(TEACHER_ID)}
