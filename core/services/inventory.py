from __future__ import annotations

from typing import Any

import streamlit as st

from core.api import ApiClient, org_path
from core.config import QUERY_TTL_SECONDS

LOW_STOCK_THRESHOLD = 10


@st.cache_data(ttl=QUERY_TTL_SECONDS, show_spinner=False)
def list_inventory(
    _client: ApiClient,
    org_id: int,
    category: str = "",
    search: str = "",
    page: int = 1,
    limit: int = 50,
) -> list[dict]:
    data = _client.get(
        org_path(org_id, "inventory"),
        params={"category": category, "search": search, "page": page, "limit": limit},
        error="Failed to fetch inventory",
    )
    return list(data or [])


def get_inventory_for_sku(client: ApiClient, org_id: int, sku_id: int) -> dict:
    return client.get(org_path(org_id, "inventory", "sku", sku_id), error="Inventory not found")


def update_manual_cost(client: ApiClient, org_id: int, sku_id: int, weighted_cost: Any) -> dict:
    """
    Override the weighted cost of one SKU's inventory line.

    The server flags the line as manual-cost; the list cache is dropped so the next
    render shows the recomputed total value.
    """
    try:
        cost = float(weighted_cost)
    except (TypeError, ValueError):
        raise ValueError("Cost must be a number.")
    if cost < 0:
        raise ValueError("Weighted cost must be non-negative.")

    line = client.patch(
        org_path(org_id, "inventory", "sku", sku_id, "cost"),
        json={"weighted_cost": cost},
        error="Failed to update manual cost",
    )
    list_inventory.clear()
    return line


def stock_status(quantity: int) -> str:
    if quantity <= 0:
        return "Out of Stock"
    if quantity < LOW_STOCK_THRESHOLD:
        return "Low Stock"
    return "In Stock"


def inventory_totals(lines: list[dict]) -> dict:
    return {
        "items": len(lines),
        "total_value": sum(float(line.get("total_value") or 0) for line in lines),
        "low_stock": sum(1 for line in lines if int(line.get("quantity") or 0) < LOW_STOCK_THRESHOLD),
    }


def filter_by_categories(lines: list[dict], categories: list[str]) -> list[dict]:
    if not categories:
        return lines
    wanted = set(categories)
    return [line for line in lines if line.get("category") in wanted]
