from __future__ import annotations

from typing import Any

from ..core.exceptions import ValidationError


def require_int(value: Any, field_name: str) -> int:
    if value is None or value == "" or isinstance(value, bool):
        raise ValidationError(f"{field_name} 값이 필요합니다.")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} 값이 올바르지 않습니다.")


def require_year_month(year: Any, month: Any) -> tuple[int, int]:
    if year in (None, "") or month in (None, ""):
        raise ValidationError("연도와 월을 입력해주세요.")
    y = require_int(year, "year")
    m = require_int(month, "month")
    if not 1 <= m <= 12:
        raise ValidationError("월은 1에서 12 사이여야 합니다.")
    if not 2000 <= y <= 2100:
        raise ValidationError("연도가 올바르지 않습니다.")
    return y, m
