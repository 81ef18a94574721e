"""폼 필드 트리의 구성 요소."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Iterator, List, Optional, Sequence, Set

from user_form.models import Platform

from . import validators as v
from .validators import ValidationErrors, Validator

ChangeCallback = Callable[[Any], None]

LOGGER = logging.getLogger("user_form.form.fields")


class FormField:
    """값과 검증기, touched 상태를 가진 단일 필드."""

    def __init__(
        self,
        name: str,
        value: Any,
        validators: Optional[Sequence[Validator]] = None,
        *,
        read_only: bool = False,
    ) -> None:
        self.name = name
        self.value = value
        self.validators: List[Validator] = list(validators or [])
        self.read_only = read_only
        self.touched = False

    @property
    def errors(self) -> Optional[ValidationErrors]:
        """현재 값에 대해 실패한 규칙 맵. 유효하면 ``None``."""

        return v.run_validators(self.value, self.validators)

    @property
    def valid(self) -> bool:
        return self.errors is None

    def __repr__(self) -> str:
        return f"FormField({self.name!r}, value={self.value!r}, touched={self.touched})"


class SocialProfileGroup:
    """``social_profiles`` 목록의 한 항목."""

    FIELD_NAMES = ("platform", "email", "username", "channel_name")

    def __init__(self) -> None:
        self.fields: Dict[str, FormField] = {
            "platform": FormField("platform", Platform.FACEBOOK.value),
            "email": FormField("email", "", [v.required(), v.email()]),
            "username": FormField("username", "", [v.required()]),
            "channel_name": FormField("channel_name", ""),
        }

    def __getitem__(self, name: str) -> FormField:
        return self.fields[name]

    def __iter__(self) -> Iterator[FormField]:
        return iter(self.fields.values())

    def value(self) -> Dict[str, Any]:
        return {name: field.value for name, field in self.fields.items()}


class ChangeDispatcher:
    """필드 경로별 변경 콜백 테이블.

    Callbacks run synchronously in registration order. A path that is
    already being dispatched is not dispatched again until its callbacks
    return.
    """

    def __init__(self) -> None:
        self._callbacks: Dict[str, List[ChangeCallback]] = {}
        self._active: Set[str] = set()

    def subscribe(self, path: str, callback: ChangeCallback) -> Callable[[], None]:
        """콜백을 등록하고 등록 해제 함수를 반환합니다."""

        self._callbacks.setdefault(path, []).append(callback)

        def _unsubscribe() -> None:
            callbacks = self._callbacks.get(path, [])
            if callback in callbacks:
                callbacks.remove(callback)

        return _unsubscribe

    def listeners(self, path: str) -> List[ChangeCallback]:
        return list(self._callbacks.get(path, []))

    def dispatch(self, path: str, value: Any) -> None:
        if path in self._active:
            LOGGER.debug("재진입 변경 알림 무시 | 경로=%s", path)
            return
        callbacks = self._callbacks.get(path)
        if not callbacks:
            return
        self._active.add(path)
        try:
            for callback in list(callbacks):
                callback(value)
        finally:
            self._active.discard(path)
