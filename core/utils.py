from __future__ import annotations

from datetime import date, datetime, timezone
from typing import Any


def iso_today() -> str:
    return date.today().isoformat()


def parse_ts(value: str) -> datetime:
    # Server timestamps are RFC 3339; fromisoformat only learned "Z" in 3.11.
    ts = datetime.fromisoformat(str(value).replace("Z", "+00:00"))
    return ts if ts.tzinfo else ts.replace(tzinfo=timezone.utc)


def format_currency(amount: Any, currency: str = "USD") -> str:
    try:
        value = float(amount or 0)
    except (TypeError, ValueError):
        value = 0.0
    sign = "-" if value < 0 else ""
    symbol = "$" if currency == "USD" else f"{currency} "
    return f"{sign}{symbol}{abs(value):,.2f}"


def format_ts(value: Any) -> str:
    if not value:
        return "-"
    try:
        return parse_ts(value).strftime("%b %d, %Y %H:%M")
    except ValueError:
        return str(value)


def clean_form(form: dict) -> dict:
    """Strip string values and drop the ones left empty."""
    out = {}
    for key, value in form.items():
        if isinstance(value, str):
            value = value.strip()
            if not value:
                continue
        if value is None:
            continue
        out[key] = value
    return out