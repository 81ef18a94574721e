"""폼 상태 모델 패키지."""

from .errors import (
    FieldValueError,
    FormError,
    ReadOnlyFieldError,
    SocialProfileIndexError,
    UnknownEducationLevelError,
    UnknownFieldError,
)
from .fields import ChangeDispatcher, FormField, SocialProfileGroup
from .model import FormModel, calculate_age

__all__ = [
    "FormModel",
    "calculate_age",
    "FormField",
    "SocialProfileGroup",
    "ChangeDispatcher",
    "FormError",
    "FieldValueError",
    "ReadOnlyFieldError",
    "SocialProfileIndexError",
    "UnknownEducationLevelError",
    "UnknownFieldError",
]
