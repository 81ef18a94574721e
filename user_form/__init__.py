"""
사용자 정보 입력 폼의 반응형 상태 모델.

이 패키지는 개인 정보 필드와 가변 길이 소셜 프로필 목록을 담는 필드 트리,
선언적 필드 검증, 생년월일로부터 계산되는 나이 필드를 제공합니다.
렌더링은 외부 계층이 담당합니다.
"""

from .form import FormModel
from .models import Accepted, Rejected, SocialProfile, UserRecord

__version__ = "1.0.0"
__all__ = ["FormModel", "UserRecord", "SocialProfile", "Accepted", "Rejected"]
