"""Declarative field validators.

Each factory returns a callable taking the field value and returning
``None`` when the value passes, or a one-key error map naming the failed
rule. Every validator except :func:`required` treats an empty value as
passing, so an empty field only ever reports ``required``.
"""

from __future__ import annotations

import re
from typing import Any, Callable, Dict, Iterable, Optional, Pattern, Union

from email_validator import EmailNotValidError, validate_email

ValidationErrors = Dict[str, Any]
Validator = Callable[[Any], Optional[ValidationErrors]]


def is_empty(value: Any) -> bool:
    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, (list, tuple, set, frozenset, dict)):
        return len(value) == 0
    return False


def required() -> Validator:
    """값이 비어 있으면 실패합니다. 숫자 0은 비어 있지 않습니다."""

    def _validate(value: Any) -> Optional[ValidationErrors]:
        if is_empty(value):
            return {"required": True}
        return None

    return _validate


def pattern(expression: Union[str, Pattern[str]]) -> Validator:
    """정규식이 값의 어딘가와 일치해야 합니다.

    The expression is searched, not full-matched: anchor it with ``^``/``$``
    when the whole value must match.
    """

    compiled = re.compile(expression) if isinstance(expression, str) else expression

    def _validate(value: Any) -> Optional[ValidationErrors]:
        if is_empty(value):
            return None
        text = str(value)
        if compiled.search(text):
            return None
        return {
            "pattern": {
                "required_pattern": compiled.pattern,
                "actual_value": text,
            }
        }

    return _validate


def min_length(length: int) -> Validator:
    def _validate(value: Any) -> Optional[ValidationErrors]:
        if is_empty(value) or not hasattr(value, "__len__"):
            return None
        if len(value) < length:
            return {
                "minlength": {
                    "required_length": length,
                    "actual_length": len(value),
                }
            }
        return None

    return _validate


def min_value(minimum: float) -> Validator:
    def _validate(value: Any) -> Optional[ValidationErrors]:
        if is_empty(value) or isinstance(value, bool):
            return None
        if not isinstance(value, (int, float)):
            return None
        if value < minimum:
            return {"min": {"min": minimum, "actual": value}}
        return None

    return _validate


def one_of(choices: Iterable[str]) -> Validator:
    allowed = tuple(choices)

    def _validate(value: Any) -> Optional[ValidationErrors]:
        if is_empty(value):
            return None
        if value in allowed:
            return None
        return {"one_of": {"choices": list(allowed), "actual": value}}

    return _validate


def email() -> Validator:
    """이메일 주소 구문을 검사합니다 (DNS 조회 없음)."""

    def _validate(value: Any) -> Optional[ValidationErrors]:
        if is_empty(value):
            return None
        try:
            validate_email(str(value), check_deliverability=False)
        except EmailNotValidError:
            return {"email": True}
        return None

    return _validate


def run_validators(value: Any, validators: Iterable[Validator]) -> Optional[ValidationErrors]:
    """모든 검증기를 실행하고 실패한 규칙을 하나의 맵으로 합칩니다."""

    errors: ValidationErrors = {}
    for validator in validators:
        result = validator(value)
        if result:
            errors.update(result)
    return errors or None
