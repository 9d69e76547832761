from __future__ import annotations

from typing import Optional

import streamlit as st

from core.api import ApiClient, org_path
from core.config import QUERY_TTL_SECONDS
from core.utils import clean_form

SKU_FIELDS = ["sku_code", "product_name", "description", "category", "supplier", "barcode"]


@st.cache_data(ttl=QUERY_TTL_SECONDS, show_spinner=False)
def list_skus(
    _client: ApiClient,
    org_id: int,
    include_deactivated: bool = False,
    category: str = "",
    search: str = "",
    page: Optional[int] = None,
    limit: Optional[int] = None,
) -> list[dict]:
    data = _client.get(
        org_path(org_id, "skus"),
        params={
            "includeDeactivated": True if include_deactivated else None,
            "category": category,
            "search": search,
            "page": page,
            "limit": limit,
        },
        error="Failed to fetch SKUs",
    )
    return list((data or {}).get("skus") or [])


def get_sku(client: ApiClient, org_id: int, sku_id: int) -> dict:
    return client.get(org_path(org_id, "skus", sku_id), error="Failed to fetch SKU")


def _invalidate() -> None:
    list_skus.clear()


def create_sku(client: ApiClient, org_id: int, form: dict) -> dict:
    payload = clean_form({k: form.get(k, "") for k in SKU_FIELDS})
    if not payload.get("sku_code") or not payload.get("product_name"):
        raise ValueError("SKU code and product name are required.")

    sku = client.post(org_path(org_id, "skus"), json=payload, error="Failed to create SKU")
    _invalidate()
    return sku


def update_sku(client: ApiClient, org_id: int, sku_id: int, form: dict) -> dict:
    # sku_code is immutable once created
    payload = clean_form({k: form.get(k, "") for k in SKU_FIELDS if k != "sku_code"})
    if not payload.get("product_name"):
        raise ValueError("Product name is required.")

    sku = client.patch(org_path(org_id, "skus", sku_id), json=payload, error="Failed to update SKU")
    _invalidate()
    return sku


def set_sku_status(client: ApiClient, org_id: int, sku_id: int, is_active: bool) -> dict:
    sku = client.patch(
        org_path(org_id, "skus", sku_id, "status"),
        json={"is_active": bool(is_active)},
        error="Failed to update SKU status",
    )
    _invalidate()
    return sku


def sku_categories(skus: list[dict]) -> list[str]:
    return sorted({str(s["category"]) for s in skus if s.get("category")})


def sku_label(sku: dict) -> str:
    return f"{sku.get('sku_code', '')} - {sku.get('product_name', '')}"
