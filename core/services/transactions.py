from __future__ import annotations

from typing import Optional

import streamlit as st

from core.api import ApiClient, org_path
from core.config import QUERY_TTL_SECONDS
from core.services.inventory import list_inventory
from core.utils import clean_form

TRANSACTION_TYPES = {"in": "Inbound", "out": "Outbound"}


@st.cache_data(ttl=QUERY_TTL_SECONDS, show_spinner=False)
def list_transactions(
    _client: ApiClient,
    org_id: int,
    transaction_type: str = "",
    sku_id: Optional[int] = None,
    category: str = "",
    search: str = "",
    page: int = 1,
    limit: int = 50,
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> list[dict]:
    data = _client.get(
        org_path(org_id, "transactions"),
        params={
            "transaction_type": transaction_type,
            "sku_id": sku_id,
            "category": category,
            "search": search,
            "page": page,
            "limit": limit,
            "start_date": start_date,
            "end_date": end_date,
        },
        error="Failed to fetch transactions",
    )
    return list(data or [])


@st.cache_data(ttl=QUERY_TTL_SECONDS, show_spinner=False)
def transaction_summary(
    _client: ApiClient,
    org_id: int,
    sku_id: Optional[int] = None,
    category: str = "",
    start_date: Optional[str] = None,
    end_date: Optional[str] = None,
) -> list[dict]:
    data = _client.get(
        org_path(org_id, "transactions", "summary"),
        params={"sku_id": sku_id, "category": category, "start_date": start_date, "end_date": end_date},
        error="Failed to fetch transaction summary",
    )
    return list(data or [])


def create_transaction(client: ApiClient, org_id: int, form: dict) -> dict:
    if not form.get("sku_id"):
        raise ValueError("Select a SKU.")
    transaction_type = str(form.get("transaction_type") or "")
    if transaction_type not in TRANSACTION_TYPES:
        raise ValueError("Select a transaction type (in or out).")
    try:
        quantity = int(form.get("quantity") or 0)
        unit_cost = float(form.get("unit_cost") or 0)
    except (TypeError, ValueError):
        raise ValueError("Quantity and unit cost must be numbers.")
    if quantity < 1:
        raise ValueError("Quantity must be at least 1.")
    if unit_cost < 0:
        raise ValueError("Unit cost must be non-negative.")

    payload = {
        "sku_id": int(form["sku_id"]),
        "transaction_type": transaction_type,
        "quantity": quantity,
        "unit_cost": unit_cost,
        **clean_form({"reference_number": form.get("reference_number"), "notes": form.get("notes")}),
    }
    txn = client.post(org_path(org_id, "transactions"), json=payload, error="Failed to create transaction")

    # On-hand quantity and weighted cost move with every transaction
    list_transactions.clear()
    transaction_summary.clear()
    list_inventory.clear()
    return txn


def active_sku_options(skus: list[dict]) -> dict[int, str]:
    return {int(s["id"]): f"{s['sku_code']} - {s['product_name']}" for s in skus if s.get("is_active")}


def summary_by_type(rows: list[dict]) -> dict[str, dict]:
    empty = {"total_transactions": 0, "total_quantity": 0, "total_value": 0.0}
    out = {t: dict(empty) for t in TRANSACTION_TYPES}
    for r in rows:
        if r.get("transaction_type") in out:
            out[r["transaction_type"]] = {k: r.get(k, v) for k, v in empty.items()}
    return out
