"""폼 모델 호출 계약 위반 예외."""


class FormError(Exception):
    """폼 모델 예외의 기본 클래스."""


class SocialProfileIndexError(FormError, IndexError):
    """존재하지 않는 소셜 프로필 인덱스."""

    def __init__(self, index: int, length: int) -> None:
        super().__init__(f"social profile index {index} out of range (length {length})")
        self.index = index
        self.length = length


class UnknownFieldError(FormError, KeyError):
    """알 수 없는 필드 경로."""

    def __init__(self, path: str) -> None:
        super().__init__(path)
        self.path = path

    def __str__(self) -> str:
        return f"unknown field: {self.path!r}"


class ReadOnlyFieldError(FormError):
    """직접 수정할 수 없는 파생 필드."""

    def __init__(self, path: str) -> None:
        super().__init__(f"field {path!r} is derived and cannot be edited")
        self.path = path


class FieldValueError(FormError, ValueError):
    """입력 위젯이 만들 수 없는 값."""


class UnknownEducationLevelError(FieldValueError):
    """체크리스트에 없는 학력 항목."""

    def __init__(self, level: str) -> None:
        super().__init__(f"unknown education level: {level!r}")
        self.level = level
