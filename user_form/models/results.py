"""제출 결과 모델."""

from typing import Any, Dict, Literal

from pydantic import BaseModel, Field

from .record import UserRecord


class Accepted(BaseModel):
    """검증을 통과한 제출 결과."""

    status: Literal["accepted"] = "accepted"
    record: UserRecord

    @property
    def accepted(self) -> bool:
        return True


class Rejected(BaseModel):
    """검증에 실패한 제출 결과."""

    status: Literal["rejected"] = "rejected"
    failures: Dict[str, Dict[str, Any]] = Field(
        default_factory=dict,
        description="필드 경로별 실패한 검증기 목록",
    )

    @property
    def accepted(self) -> bool:
        return False
