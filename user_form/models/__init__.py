"""모델 패키지."""

from .enums import Gender, Platform
from .record import SocialProfile, UserRecord
from .results import Accepted, Rejected

__all__ = [
    "Gender",
    "Platform",
    "SocialProfile",
    "UserRecord",
    "Accepted",
    "Rejected",
]
