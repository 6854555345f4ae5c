"""Query-string parsing helpers."""

from __future__ import annotations

from flask import request

from kqxs.errors import ValidationError


def positive_int_arg(name: str, default: int, maximum: int | None = None) -> int:
    raw = (request.args.get(name) or "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError as e:
        raise ValidationError(f"{name} must be an integer") from e
    if value <= 0:
        raise ValidationError(f"{name} must be positive")
    if maximum is not None and value > maximum:
        raise ValidationError(f"{name} must be <= {maximum}")
    return value
