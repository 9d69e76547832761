from __future__ import annotations

import logging

import streamlit as st

from core.api import ApiClient, ApiError, AuthError, org_path
from core.config import QUERY_TTL_SECONDS

logger = logging.getLogger(__name__)

SUPPORTED_TABLES = {
    "skus": "Products (SKUs)",
    "inventory": "Inventory",
    "inventory_transactions": "Transactions",
    "users": "Users",
}

# Default alias rows use short column names; map them onto the API payload keys.
FIELD_KEYS = {"sku": "sku_code", "type": "transaction_type"}


def _check_table(table_name: str) -> None:
    if table_name not in SUPPORTED_TABLES:
        raise ValueError(f"Unsupported table: {table_name}")


@st.cache_data(ttl=QUERY_TTL_SECONDS, show_spinner=False)
def table_fields(_client: ApiClient, org_id: int, table_name: str) -> dict:
    _check_table(table_name)
    data = _client.get(org_path(org_id, "tables", table_name, "fields"), error="Failed to fetch table fields")
    data = data or {}
    fields = sorted(data.get("fields") or [], key=lambda f: (int(f.get("sort_order") or 0), f.get("field_name", "")))
    return {"table_name": table_name, "fields": fields, "metadata": data.get("metadata") or {}}


def _alias_payload(form: dict) -> dict:
    display_name = str(form.get("display_name") or "").strip()
    if not display_name:
        raise ValueError("Display name is required.")
    return {
        "display_name": display_name,
        "description": str(form.get("description") or "").strip(),
        "is_hidden": bool(form.get("is_hidden", False)),
        "sort_order": int(form.get("sort_order") or 0),
    }


def create_field_alias(client: ApiClient, org_id: int, form: dict) -> dict:
    table_name = str(form.get("table_name") or "")
    field_name = str(form.get("field_name") or "").strip()
    _check_table(table_name)
    if not field_name:
        raise ValueError("Field name is required.")

    payload = {"table_name": table_name, "field_name": field_name, **_alias_payload(form)}
    alias = client.post(org_path(org_id, "field-aliases"), json=payload, error="Failed to create field alias")
    table_fields.clear()
    return alias


def update_field_alias(client: ApiClient, org_id: int, alias_id: int, form: dict) -> dict:
    alias = client.patch(
        org_path(org_id, "field-aliases", alias_id),
        json=_alias_payload(form),
        error="Failed to update field alias",
    )
    table_fields.clear()
    return alias


def delete_field_alias(client: ApiClient, org_id: int, alias_id: int) -> None:
    client.delete(org_path(org_id, "field-aliases", alias_id), error="Failed to delete field alias")
    table_fields.clear()


def initialize_table_fields(client: ApiClient, org_id: int, table_name: str) -> dict:
    _check_table(table_name)
    data = client.post(
        org_path(org_id, "tables", table_name, "fields", "initialize"),
        error="Failed to initialize table fields",
    )
    table_fields.clear()
    return data or {}


def _key(field: dict) -> str:
    name = str(field.get("field_name", ""))
    if field.get("table_name") == "skus" and name == "name":
        return "product_name"
    return FIELD_KEYS.get(name, name)


def alias_map(fields: list[dict]) -> dict[str, str]:
    return {_key(f): f["display_name"] for f in fields if not f.get("is_hidden") and f.get("display_name")}


def hidden_fields(fields: list[dict]) -> set[str]:
    return {_key(f) for f in fields if f.get("is_hidden")}


def apply_aliases(columns: dict[str, str], fields: list[dict]) -> dict[str, str]:
    """Relabel a page's {field: label} column map; hidden fields drop out."""
    aliases = alias_map(fields)
    hidden = hidden_fields(fields)
    return {k: aliases.get(k, label) for k, label in columns.items() if k not in hidden}


def aliases_for(client: ApiClient, org_id: int, table_name: str) -> list[dict]:
    # Labels are cosmetic: a failed lookup falls back to the built-in names.
    try:
        return table_fields(client, org_id, table_name)["fields"]
    except AuthError:
        raise
    except ApiError as e:
        logger.warning("Field labels for %s unavailable: %s", table_name, e)
        return []
