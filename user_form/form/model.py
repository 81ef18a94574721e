"""사용자 정보 입력 폼의 반응형 상태 모델."""

from __future__ import annotations

import math
import uuid
from datetime import date, datetime
from typing import Any, Callable, Dict, Iterator, List, Optional, Set, Tuple, Union

from user_form.config import Config
from user_form.models import Accepted, Gender, Platform, Rejected, UserRecord
from user_form.utils.logging import get_form_logger

from . import validators as v
from .errors import (
    FieldValueError,
    ReadOnlyFieldError,
    SocialProfileIndexError,
    UnknownEducationLevelError,
    UnknownFieldError,
)
from .fields import ChangeCallback, ChangeDispatcher, FormField, SocialProfileGroup

NAME_PATTERN = r"^[A-Za-z ]+\Z"
POSTAL_CODE_PATTERN = r"^[0-9]{6}\Z"
# Searched, not anchored: any value containing a PAN-shaped run passes.
TAX_ID_PATTERN = r"[A-Z]{5}[0-9]{4}[A-Z]"

SOCIAL_PROFILES = "social_profiles"
TEXT_FIELDS = frozenset(
    {
        "first_name",
        "last_name",
        "address",
        "city",
        "postal_code",
        "tax_id",
        "email",
        "username",
        "channel_name",
    }
)


def calculate_age(birth: date, today: date) -> int:
    """달력 기준 만 나이를 계산합니다."""

    age = today.year - birth.year
    if (today.month, today.day) < (birth.month, birth.day):
        age -= 1
    return age


def _coerce_date(value: Any) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError:
            return None
    raise FieldValueError(f"date_of_birth expects a date or ISO string, got {value!r}")


def _coerce_number(value: Any) -> Optional[Union[int, float]]:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        # NaN and infinities are reported as "no value", like a number input.
        return value if math.isfinite(value) else None
    if isinstance(value, str):
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass
        try:
            return _coerce_number(float(text))
        except ValueError:
            return None
    raise FieldValueError(f"salary expects a number, got {value!r}")


class FormModel:
    """UserRecord 필드 트리와 소셜 프로필 목록을 소유하는 폼 모델.

    The rendering layer edits the model only through the public operations
    below and reads field state through :meth:`get_field` and
    :meth:`iter_fields`. Every operation runs synchronously; change
    observers finish before the triggering call returns.

    Field paths are the root field names (``"first_name"``) or
    ``"social_profiles.<index>.<name>"`` for entries of the profile list.
    """

    def __init__(
        self,
        config: Optional[Config] = None,
        clock: Optional[Callable[[], date]] = None,
    ) -> None:
        self.config = config or Config.from_env()
        self.config.validate()

        self.form_id = uuid.uuid4().hex[:8]
        self.logger = get_form_logger("form", self.form_id)

        fixed_today = self.config.today_override()
        if clock is not None:
            self._clock = clock
        elif fixed_today is not None:
            self._clock = lambda: fixed_today
        else:
            self._clock = date.today

        self.education_options: List[str] = list(self.config.education_options)

        self.fields: Dict[str, FormField] = {}
        self.social_profiles: List[SocialProfileGroup] = []
        self._dispatcher = ChangeDispatcher()
        self.initialize()

    # ------------------------------------------------------------------ #
    # 필드 트리 구성
    # ------------------------------------------------------------------ #

    def initialize(self) -> None:
        """필드 트리를 기본값으로 (재)구성하고 관찰자를 등록합니다."""

        self.fields = {
            "first_name": FormField("first_name", "", [v.required(), v.pattern(NAME_PATTERN)]),
            "last_name": FormField("last_name", "", [v.required(), v.pattern(NAME_PATTERN)]),
            "date_of_birth": FormField("date_of_birth", None, [v.required()]),
            "age": FormField("age", 0, read_only=True),
            "address": FormField("address", "", [v.required(), v.min_length(5)]),
            "city": FormField("city", "", [v.required()]),
            "postal_code": FormField("postal_code", "", [v.required(), v.pattern(POSTAL_CODE_PATTERN)]),
            "tax_id": FormField("tax_id", "", [v.required(), v.pattern(TAX_ID_PATTERN)]),
            "gender": FormField(
                "gender",
                Gender.MALE.value,
                [v.required(), v.one_of(g.value for g in Gender)],
            ),
            "education_levels": FormField("education_levels", [], [v.required()]),
            "salary": FormField("salary", 0, [v.required(), v.min_value(0)]),
        }
        self.social_profiles = []

        self._dispatcher = ChangeDispatcher()
        self._dispatcher.subscribe("date_of_birth", self.on_date_of_birth_changed)
        self.logger.debug("폼 초기화 완료")

    def on_change(self, path: str, callback: ChangeCallback) -> Callable[[], None]:
        """필드 변경 관찰자를 등록하고 해제 함수를 반환합니다."""

        field = self._resolve(path)
        if field.read_only:
            raise ReadOnlyFieldError(path)
        return self._dispatcher.subscribe(path, callback)

    # ------------------------------------------------------------------ #
    # 필드 접근
    # ------------------------------------------------------------------ #

    def _resolve(self, path: str) -> FormField:
        parts = path.split(".")
        if len(parts) == 1 and parts[0] in self.fields:
            return self.fields[parts[0]]
        if len(parts) == 3 and parts[0] == SOCIAL_PROFILES:
            try:
                index = int(parts[1])
            except ValueError:
                raise UnknownFieldError(path) from None
            group = self._profile_at(index)
            if parts[2] in group.fields:
                return group[parts[2]]
        raise UnknownFieldError(path)

    def _profile_at(self, index: int) -> SocialProfileGroup:
        if not 0 <= index < len(self.social_profiles):
            raise SocialProfileIndexError(index, len(self.social_profiles))
        return self.social_profiles[index]

    def get_field(self, path: str) -> FormField:
        return self._resolve(path)

    def iter_fields(self) -> Iterator[Tuple[str, FormField]]:
        """모든 필드를 (경로, 필드) 쌍으로 순회합니다."""

        yield from self.fields.items()
        for index, group in enumerate(self.social_profiles):
            for field in group:
                yield f"{SOCIAL_PROFILES}.{index}.{field.name}", field

    def value(self) -> Dict[str, Any]:
        """파생 필드를 포함한 현재 값 전체를 반환합니다."""

        data = {name: field.value for name, field in self.fields.items()}
        data["education_levels"] = list(data["education_levels"])
        data[SOCIAL_PROFILES] = [group.value() for group in self.social_profiles]
        return data

    # ------------------------------------------------------------------ #
    # 필드 편집
    # ------------------------------------------------------------------ #

    def set_field(self, path: str, value: Any, *, emit: bool = True) -> None:
        """렌더링 계층의 필드 편집 이벤트를 반영합니다."""

        field = self._resolve(path)
        if field.read_only:
            raise ReadOnlyFieldError(path)

        field.value = self._coerce(field.name, value)
        field.touched = True
        self.logger.debug("필드 변경 | 경로=%s | 값=%r", path, field.value)

        if emit:
            self._dispatcher.dispatch(path, field.value)

    def _coerce(self, name: str, value: Any) -> Any:
        if name == "date_of_birth":
            return _coerce_date(value)
        if name == "salary":
            return _coerce_number(value)
        if name in TEXT_FIELDS:
            if value is None:
                return ""
            return value if isinstance(value, str) else str(value)
        if name == "gender" and isinstance(value, Gender):
            return value.value
        if name == "platform":
            try:
                return Platform(value).value
            except ValueError:
                raise FieldValueError(f"unknown platform: {value!r}") from None
        if name == "education_levels":
            return self._coerce_education(value)
        return value

    def _coerce_education(self, value: Any) -> List[str]:
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        levels: List[str] = []
        for level in value:
            if level not in self.education_options:
                raise UnknownEducationLevelError(level)
            if level not in levels:
                levels.append(level)
        return levels

    def on_date_of_birth_changed(self, value: Any) -> None:
        """생년월일 변경 시 나이를 다시 계산합니다."""

        birth = _coerce_date(value)
        if birth is None:
            return
        age = calculate_age(birth, self._clock())
        # Derived write: age has no listeners, so nothing is dispatched.
        self.fields["age"].value = age
        self.logger.debug("나이 재계산 | 생년월일=%s | 나이=%d", birth.isoformat(), age)

    def toggle_education(self, level: str, selected: bool) -> None:
        """학력 체크박스 상태를 반영합니다. 같은 상태를 반복해도 결과는 같습니다."""

        if level not in self.education_options:
            raise UnknownEducationLevelError(level)

        field = self.fields["education_levels"]
        current = list(field.value)
        if selected and level not in current:
            current.append(level)
        elif not selected and level in current:
            current.remove(level)
        else:
            field.touched = True
            return

        field.value = current
        field.touched = True
        self._dispatcher.dispatch("education_levels", field.value)

    # ------------------------------------------------------------------ #
    # 소셜 프로필 목록
    # ------------------------------------------------------------------ #

    def add_social_profile(self) -> int:
        """기본값을 가진 소셜 프로필을 추가하고 인덱스를 반환합니다."""

        self.social_profiles.append(SocialProfileGroup())
        index = len(self.social_profiles) - 1
        self.logger.debug("소셜 프로필 추가 | 인덱스=%d", index)
        return index

    def remove_social_profile(self, index: int) -> None:
        """지정한 인덱스의 소셜 프로필을 제거합니다."""

        self._profile_at(index)
        del self.social_profiles[index]
        self.logger.debug(
            "소셜 프로필 제거 | 인덱스=%d | 남은 개수=%d",
            index,
            len(self.social_profiles),
        )

    # ------------------------------------------------------------------ #
    # 검증 및 제출
    # ------------------------------------------------------------------ #

    def touch(self, path: str) -> None:
        self._resolve(path).touched = True

    def mark_all_as_touched(self) -> None:
        for _, field in self.iter_fields():
            field.touched = True

    def errors(self) -> Dict[str, Dict[str, Any]]:
        """실패한 필드 경로별 오류 맵을 반환합니다."""

        failures: Dict[str, Dict[str, Any]] = {}
        for path, field in self.iter_fields():
            field_errors = field.errors
            if field_errors:
                failures[path] = field_errors
        return failures

    @property
    def valid(self) -> bool:
        return not self.errors()

    def validate(self) -> Set[str]:
        """모든 검증 규칙을 실행하고 실패한 필드 경로 집합을 반환합니다."""

        self.mark_all_as_touched()
        return set(self.errors())

    def submit(self) -> Union[Accepted, Rejected]:
        """검증 후 Accepted(스냅샷) 또는 Rejected 결과를 반환합니다."""

        self.mark_all_as_touched()
        failures = self.errors()
        if failures:
            self.logger.info("제출 거부 | 실패 필드=%s", sorted(failures))
            return Rejected(failures=failures)

        self.on_date_of_birth_changed(self.fields["date_of_birth"].value)
        record = UserRecord(**self.value())
        self.logger.info(
            "제출 완료 | 소셜 프로필=%d | 나이=%d",
            len(record.social_profiles),
            record.age,
        )
        return Accepted(record=record)
