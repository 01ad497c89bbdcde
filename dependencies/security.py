from typing import Optional, Annotated
from fastapi import Header, HTTPException
from config.settings import settings
import hmac

AuthHeader = Annotated[Optional[str], Header(alias="Authorization")]
TeacherHeader = Annotated[Optional[str], Header(alias="X-Teacher-Id")]


def _check_api_token(authorization: Optional[str]) -> None:
    # 토큰이 설정되지 않은 환경(dev/test)에서는 검사 생략
    if not settings.API_TOKEN:
        return

    if not authorization:
        raise HTTPException(
            status_code=401,
            detail="Authorization 헤더가 없습니다.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # "Bearer <token>" 파싱
    try:
        scheme, token = authorization.split(" ", 1)
    except ValueError:
        raise HTTPException(
            status_code=401,
            detail="Authorization 헤더 형식이 올바르지 않습니다.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    if scheme.lower() != "bearer":
        raise HTTPException(
            status_code=401,
            detail="지원하지 않는 인증 방식입니다.",
            headers={"WWW-Authenticate": "Bearer"},
        )

    # 타이밍 안전 비교
    if not hmac.compare_digest(token.strip(), settings.API_TOKEN):
        raise HTTPException(
            status_code=401,
            detail="유효하지 않은 토큰입니다.",
            headers={"WWW-Authenticate": "Bearer"},
        )


def require_teacher(x_teacher_id: TeacherHeader = None, authorization: AuthHeader = None) -> int:
    """
    인증 계층에서 이미 확인된 교사 ID를 X-Teacher-Id 헤더로 전달받는다.
    코어는 이 값을 신뢰하며, 형식만 검사한다.
    """
    _check_api_token(authorization)

    if not x_teacher_id:
        raise HTTPException(status_code=401, detail="X-Teacher-Id 헤더가 없습니다.")
    try:
        teacher_id = int(x_teacher_id)
    except ValueError:
        raise HTTPException(status_code=401, detail="X-Teacher-Id 값이 올바르지 않습니다.")
    if teacher_id <= 0:
        raise HTTPException(status_code=401, detail="X-Teacher-Id 값이 올바르지 않습니다.")
    return teacher_id
