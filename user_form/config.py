"""user_form의 설정 관리."""

import os
from datetime import date
from typing import List, Optional

from pydantic import BaseModel
from dotenv import load_dotenv

# 환경 변수 로드
load_dotenv()

DEFAULT_EDUCATION_OPTIONS = "High School,Diploma,Bachelors,Masters,PhD"


def _split_options(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


class Config(BaseModel):
    """user_form 시스템의 설정."""

    # 로깅 설정
    log_level: str = os.getenv("USER_FORM_LOG_LEVEL", "INFO")

    # 폼 설정
    education_options: List[str] = _split_options(
        os.getenv("USER_FORM_EDUCATION_OPTIONS", DEFAULT_EDUCATION_OPTIONS)
    )
    today: Optional[str] = os.getenv("USER_FORM_TODAY") or None  # YYYY-MM-DD

    @classmethod
    def from_env(cls) -> "Config":
        """환경 변수로부터 설정 생성."""
        return cls()

    def today_override(self) -> Optional[date]:
        """고정된 '오늘' 날짜가 설정되어 있으면 반환."""
        if not self.today:
            return None
        return date.fromisoformat(self.today)

    def validate(self) -> bool:
        """필수 설정 검증."""
        if not self.education_options:
            raise ValueError("USER_FORM_EDUCATION_OPTIONS must list at least one option")
        try:
            self.today_override()
        except ValueError as exc:
            raise ValueError(f"USER_FORM_TODAY is not an ISO date: {self.today!r}") from exc
        return True
