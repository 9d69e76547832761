from __future__ import annotations

from collections import Counter
from datetime import datetime, timezone
from typing import Optional

import streamlit as st

from core.api import ApiClient, org_path
from core.config import QUERY_TTL_SECONDS
from core.utils import parse_ts

PERIODS = {1: "Last 24 hours", 7: "Last 7 days", 30: "Last 30 days", 90: "Last 90 days"}
ENTITY_TYPES = {
    "sku": "SKUs",
    "inventory": "Inventory",
    "transaction": "Transactions",
    "user": "Users",
    "field_alias": "Settings",
}
CHANGE_TYPES = {
    "create": "Created",
    "update": "Updated",
    "delete": "Deleted",
    "activate": "Activated",
    "deactivate": "Deactivated",
    "manual_cost_update": "Manual cost",
}


@st.cache_data(ttl=QUERY_TTL_SECONDS, show_spinner=False)
def list_change_logs(
    _client: ApiClient,
    org_id: int,
    last_days: int = 30,
    entity_type: str = "",
    change_type: str = "",
    limit: int = 100,
) -> list[dict]:
    data = _client.get(
        org_path(org_id, "change-logs"),
        params={"last_days": last_days, "limit": limit, "entity_type": entity_type, "change_type": change_type},
        error="Failed to fetch change logs",
    )
    return list(data or [])


@st.cache_data(ttl=QUERY_TTL_SECONDS, show_spinner=False)
def activity_summary(_client: ApiClient, org_id: int, last_days: int = 30) -> dict:
    data = _client.get(
        org_path(org_id, "activity-summary"),
        params={"last_days": last_days},
        error="Failed to fetch activity summary",
    )
    return data or {}


@st.cache_data(ttl=QUERY_TTL_SECONDS, show_spinner=False)
def sku_change_logs(_client: ApiClient, org_id: int, sku_id: int, last_days: int = 30) -> list[dict]:
    data = _client.get(
        org_path(org_id, "skus", sku_id, "change-logs"),
        params={"last_days": last_days},
        error="Failed to fetch SKU change logs",
    )
    return list(data or [])


def refresh() -> None:
    list_change_logs.clear()
    activity_summary.clear()
    sku_change_logs.clear()


def describe_change(entry: dict) -> str:
    entity_type = entry.get("entity_type") or "record"
    name = entry.get("sku_code") or entity_type
    change_type = entry.get("change_type")

    if change_type == "manual_cost_update":
        return f"Updated cost for {name}"
    if change_type in CHANGE_TYPES:
        return f"{CHANGE_TYPES[change_type]} {entity_type} {name}"
    return f"{change_type} on {entity_type} {name}"


def describe_field_change(entry: dict) -> str:
    if not entry.get("field_name"):
        return ""
    old = entry.get("old_value") or "∅"
    new = entry.get("new_value") or "∅"
    return f"{entry['field_name']}: {old} → {new}"


def relative_time(value: str, now: Optional[datetime] = None) -> str:
    ts = parse_ts(value)
    now = now or datetime.now(timezone.utc)
    seconds = (now - ts).total_seconds()
    hours = int(seconds // 3600)
    days = hours // 24

    if hours < 1:
        return f"{max(int(seconds // 60), 0)} minutes ago"
    if hours < 24:
        return f"{hours} hours ago"
    if days < 7:
        return f"{days} days ago"
    return ts.date().isoformat()


def most_common_change_type(summary: dict) -> str:
    counts = Counter(summary.get("changes_by_type") or {})
    if not counts:
        return "N/A"
    return counts.most_common(1)[0][0]
