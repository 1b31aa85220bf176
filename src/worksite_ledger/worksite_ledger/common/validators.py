from __future__ import annotations

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name}을(를) 입력해주세요.")
    return value.strip()


def require_positive(value: float, field_name: str) -> float:
    if value is None or value <= 0:
        raise ValidationError(f"{field_name}은(는) 0보다 커야 합니다.")
    return value


def require_choice(value: str, choices, field_name: str):
    try:
        return choices(value)
    except ValueError:
        raise ValidationError(f"{field_name} 값이 올바르지 않습니다: {value!r}")
