"""폼 선택 항목 열거형."""

from enum import Enum


class Gender(str, Enum):
    """성별 열거형."""

    MALE = "male"
    FEMALE = "female"


class Platform(str, Enum):
    """소셜 미디어 플랫폼 열거형."""

    FACEBOOK = "Facebook"
    TWITTER = "Twitter"
    LINKEDIN = "LinkedIn"
    YOUTUBE = "YouTube"
