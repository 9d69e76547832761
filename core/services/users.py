from __future__ import annotations

import streamlit as st

from core.api import ApiClient, org_path
from core.config import QUERY_TTL_SECONDS
from core.permissions import ROLES


@st.cache_data(ttl=QUERY_TTL_SECONDS, show_spinner=False)
def list_users(_client: ApiClient, org_id: int, role: str = "", is_active: str = "all", search: str = "") -> dict:
    data = _client.get(
        org_path(org_id, "users"),
        params={"role": role, "is_active": None if is_active == "all" else is_active, "search": search},
        error="Failed to fetch users",
    )
    data = data or {}
    return {"users": list(data.get("users") or []), "pagination": data.get("pagination") or {}}


@st.cache_data(ttl=QUERY_TTL_SECONDS, show_spinner=False)
def list_roles(_client: ApiClient, org_id: int) -> list[dict]:
    data = _client.get(org_path(org_id, "users", "roles"), error="Failed to fetch user roles")
    return list((data or {}).get("roles") or [])


def _check_role(role: str) -> None:
    if role not in ROLES:
        raise ValueError(f"Role must be one of: {', '.join(ROLES)}.")


def create_user(client: ApiClient, org_id: int, form: dict) -> dict:
    email = str(form.get("email") or "").strip()
    name = str(form.get("name") or "").strip()
    role = str(form.get("role") or "user")
    if not email or "@" not in email:
        raise ValueError("A valid email is required.")
    if not name:
        raise ValueError("Name is required.")
    _check_role(role)

    user = client.post(
        org_path(org_id, "users"),
        json={"email": email, "name": name, "role": role},
        error="Failed to create user",
    )
    list_users.clear()
    return user


def update_user(client: ApiClient, org_id: int, user_id: int, form: dict) -> dict:
    name = str(form.get("name") or "").strip()
    role = str(form.get("role") or "")
    if not name:
        raise ValueError("Name is required.")
    _check_role(role)

    payload = {"name": name, "role": role}
    if form.get("is_active") is not None:
        payload["is_active"] = bool(form["is_active"])

    user = client.put(org_path(org_id, "users", user_id), json=payload, error="Failed to update user")
    list_users.clear()
    return user


def toggle_user_active(client: ApiClient, org_id: int, user: dict) -> dict:
    return update_user(
        client,
        org_id,
        int(user["id"]),
        {"name": user["name"], "role": user["role"], "is_active": not user.get("is_active", False)},
    )


def delete_user(client: ApiClient, org_id: int, user_id: int) -> None:
    client.delete(org_path(org_id, "users", user_id), error="Failed to delete user")
    list_users.clear()
