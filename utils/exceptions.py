"""
utils/exceptions.py

- 코어(출결/정답/성적/리포트 서비스)에서 발생시키는 분류된 오류 모음
- 네 가지 종류(NOT_FOUND / BUSINESS_RULE / BAD_REQUEST / UNAUTHORIZED)만 존재하며,
  전송 계층(middlewares/error_handler.py)은 kind 기준으로 HTTP 응답을 만든다.
"""

from typing import Any, Dict, Optional


class RecordError(Exception):
    """분류된 코어 오류의 기반 클래스"""

    kind = "INTERNAL_ERROR"

    def __init__(self, message: str, offending_id: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        self.offending_id = offending_id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "code": self.kind,
            "message": self.message,
            "offending_id": self.offending_id,
        }


class NotFoundError(RecordError):
    """참조한 학급/평가/문항/수업이 없음"""

    kind = "NOT_FOUND"

    @classmethod
    def entity(cls, entity_name: str, entity_id: Any) -> "NotFoundError":
        return cls(f"{entity_name} ID {entity_id}을(를) 찾을 수 없습니다.", offending_id=entity_id)


class BusinessRuleError(RecordError):
    """참조 불일치 (예: 학급에 속하지 않은 학생, 중복 등록)"""

    kind = "BUSINESS_RULE"


class BadRequestError(RecordError):
    """잘못된 입력 (범위를 벗어난 점수, 잘못된 보기, 뒤집힌 기간 등)"""

    kind = "BAD_REQUEST"


class UnauthorizedError(RecordError):
    """요청한 교사가 해당 학급/평가의 소유자가 아님"""

    kind = "UNAUTHORIZED"
