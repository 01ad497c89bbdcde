import logging
from contextlib import contextmanager

from sqlalchemy import create_engine               # SQLAlchemy 엔진 생성 도구
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import declarative_base        # 모델의 Base 클래스
from sqlalchemy.orm import sessionmaker, Session   # 세션 팩토리 함수

from config.settings import settings               # ✅ 환경변수 설정 파일 불러오기
from utils.exceptions import RecordError, BadRequestError, BusinessRuleError

logger = logging.getLogger(__name__)

# ✅ SQLite는 스레드 체크를 꺼야 FastAPI 워커 스레드에서 세션을 공유할 수 있음
_connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

# ✅ 환경변수에서 DB 연결 URL을 불러와 엔진 생성
engine = create_engine(
    settings.DATABASE_URL,
    echo=settings.SQL_ECHO,
    pool_pre_ping=True,
    connect_args=_connect_args,
)

# ✅ 세션 팩토리: DB 연결에 사용할 세션 생성기 정의
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# ✅ 모델 정의 시 상속할 Base 클래스 (Declarative 방식 사용)
Base = declarative_base()


# ==========================================================
# [공통] DB 세션 관리 (FastAPI Depends 용)
# ==========================================================
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db():
    """모든 모델 테이블 생성 (없을 때만)"""
    # 모델 모듈을 import 해야 Base.metadata에 테이블이 등록됨
    from models import (  # noqa: F401
        teachers, subjects, classes, students,
        class_sessions, attendance, assessments, grades,
    )

    Base.metadata.create_all(bind=engine)


# ==========================================================
# [공통] 트랜잭션 경계 (쓰기 서비스 전용)
# ==========================================================
@contextmanager
def atomic(db: Session, label: str):
    """
    블록 안의 읽기-검증-쓰기를 하나의 트랜잭션으로 묶는다.
    - 정상 종료: commit
    - 분류된 오류(RecordError): rollback 후 그대로 전파
    - 제약 조건 위반(IntegrityError, 예: 동시 최초 등록): rollback 후 BusinessRuleError
    - 그 밖의 저장 오류(SQLAlchemyError): rollback 후 BadRequestError
    SQL 상세 내용은 로그에만 남기고 응답 메시지에는 넣지 않는다.
    """
    try:
        yield db
        db.commit()
    except RecordError as exc:
        db.rollback()
        logger.warning(f"{label} 거부 [{exc.kind}] {exc.message}")
        raise
    except IntegrityError as exc:
        db.rollback()
        logger.warning(f"{label} 제약 조건 위반: {exc}")
        raise BusinessRuleError(f"{label} 중 이미 등록된 데이터와 충돌했습니다. 다시 시도하세요.") from exc
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception(f"{label} 저장 실패")
        raise BadRequestError(f"{label} 저장 중 오류가 발생했습니다.") from exc
    except Exception:
        db.rollback()
        raise
