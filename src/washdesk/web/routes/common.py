from __future__ import annotations

import uuid
from collections.abc import Iterable
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation
from enum import StrEnum
from pathlib import Path
from typing import TypeVar

from fastapi import HTTPException
from fastapi.responses import RedirectResponse
from fastapi.templating import Jinja2Templates


def redirect_to(path: str) -> RedirectResponse:
    # Post/redirect/get: the target page re-renders from fresh rows.
    return RedirectResponse(url=path, status_code=303)


def clean_text(value: str | None) -> str:
    return (value or "").strip()


def optional_text(value: str | None) -> str | None:
    cleaned = clean_text(value)
    return cleaned or None


def checkbox_checked(value: str | None) -> bool:
    return value == "on"


def posted_true(raw: str | None) -> bool:
    # Hidden inputs render the current flag as exactly "true" or "false".
    return raw == "true"


def parse_decimal(raw: str | None, *, field: str) -> Decimal:
    text = clean_text(raw)
    if not text:
        return Decimal("0")
    try:
        value = Decimal(text)
    except InvalidOperation as exc:
        raise HTTPException(status_code=400, detail=f"Invalid {field}") from exc
    if not value.is_finite() or value < 0:
        raise HTTPException(status_code=400, detail=f"Invalid {field}")
    return value


def parse_int(raw: str | None, *, field: str) -> int:
    text = clean_text(raw)
    if not text:
        return 0
    try:
        value = int(text)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=f"Invalid {field}") from exc
    if value < 0:
        raise HTTPException(status_code=400, detail=f"Invalid {field}")
    return value


EnumT = TypeVar("EnumT", bound=StrEnum)


def parse_choice(raw: str, enum_type: type[EnumT], *, field: str) -> EnumT:
    try:
        return enum_type(raw.strip().lower())
    except ValueError:
        raise HTTPException(status_code=400, detail=f"Invalid {field}") from None


def parse_uuid(raw: str | None) -> uuid.UUID | None:
    text = clean_text(raw)
    if not text:
        return None
    try:
        return uuid.UUID(text)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail="Invalid id") from exc


def parse_uuid_list(raw_values: Iterable[str]) -> list[uuid.UUID]:
    parsed: dict[uuid.UUID, None] = {}
    for raw in raw_values:
        value = parse_uuid(raw)
        if value is not None:
            parsed[value] = None
    return list(parsed)


def format_datetime(value: object) -> str:
    if not isinstance(value, datetime):
        return ""
    dt_utc = value.replace(tzinfo=UTC) if value.tzinfo is None else value.astimezone(UTC)
    return dt_utc.strftime("%Y-%m-%d %H:%M UTC")


def format_price(value: object) -> str:
    if isinstance(value, Decimal):
        return f"{value:.2f}"
    return str(value or "0.00")


templates_dir = Path(__file__).resolve().parent.parent / "templates"
templates = Jinja2Templates(directory=str(templates_dir))
templates.env.filters["format_dt"] = format_datetime
templates.env.filters["format_price"] = format_price
