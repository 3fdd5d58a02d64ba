from __future__ import annotations

from decimal import Decimal, InvalidOperation

from jar_policy.types import Amount


def coerce_int(raw_value: object, *, field_name: str, minimum: int | None = 0) -> int:
    if isinstance(raw_value, bool):
        raise ValueError(f"{field_name} must be an integer")
    try:
        value = int(str(raw_value).strip())
    except (TypeError, ValueError) as exc:
        raise ValueError(f"{field_name} must be an integer") from exc
    if minimum is not None and value < minimum:
        raise ValueError(f"{field_name} must be non-negative")
    return value


def coerce_optional_int(raw_value: object, *, field_name: str) -> int | None:
    if raw_value is None or (isinstance(raw_value, str) and not raw_value.strip()):
        return None
    return coerce_int(raw_value, field_name=field_name)


def coerce_bool(raw_value: object, *, field_name: str) -> bool:
    if isinstance(raw_value, bool):
        return raw_value
    if isinstance(raw_value, str):
        normalized = raw_value.strip().lower()
        if normalized in {"true", "1", "yes"}:
            return True
        if normalized in {"false", "0", "no"}:
            return False
    raise ValueError(f"{field_name} must be a boolean value")


def coerce_amount(raw_value: object) -> Amount:
    """Parse a withdrawal amount; out-of-range values are left for the evaluator."""
    if isinstance(raw_value, bool) or raw_value is None:
        raise ValueError("amount must be numeric")
    if isinstance(raw_value, (int, Decimal)):
        return raw_value
    text = str(raw_value).strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        return Decimal(text)
    except InvalidOperation as exc:
        raise ValueError("amount must be numeric") from exc
