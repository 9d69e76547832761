from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import streamlit as st

from core.api import ApiClient
from core.config import get_settings

logger = logging.getLogger(__name__)

SESSION_KEY = "flex_erp_session"
TOKEN_KEY = "flex_erp_token"


@dataclass(frozen=True)
class User:
    id: int
    organization_id: int
    email: str
    name: str
    role: str


@dataclass(frozen=True)
class Organization:
    id: int
    name: str


@dataclass(frozen=True)
class AuthSession:
    user: User
    organization: Organization
    token: str


def _session_from_login(data: dict) -> AuthSession:
    u = data.get("user") or {}
    o = data.get("organization") or {}
    user = User(
        id=int(u.get("id", 0)),
        organization_id=int(u.get("organization_id", o.get("id", 0))),
        email=str(u.get("email", "")),
        name=str(u.get("name", "")),
        role=str(u.get("role", "viewer")),
    )
    org = Organization(id=int(o.get("id", user.organization_id)), name=str(o.get("name", "")))
    return AuthSession(user=user, organization=org, token=str(data["token"]))


def stored_token() -> Optional[str]:
    # Session state is per browser tab; the token never touches shared server storage.
    return st.session_state.get(TOKEN_KEY) or None


def is_authenticated() -> bool:
    return bool(stored_token())


def current_session() -> Optional[AuthSession]:
    token = stored_token()
    session = st.session_state.get(SESSION_KEY)
    if not token or session is None or session.token != token:
        return None
    return session


def get_client() -> ApiClient:
    settings = get_settings()
    return ApiClient(settings.api_base_url, stored_token(), timeout=settings.request_timeout)


def login(email: str, password: str) -> AuthSession:
    email = (email or "").strip()
    if not email:
        raise ValueError("Email is required.")
    if not password:
        raise ValueError("Password is required.")

    settings = get_settings()
    client = ApiClient(settings.api_base_url, timeout=settings.request_timeout)
    session = _session_from_login(client.login(email, password))

    st.session_state[SESSION_KEY] = session
    st.session_state[TOKEN_KEY] = session.token
    st.cache_data.clear()

    logger.info("Signed in user %s (org %s)", session.user.id, session.organization.id)
    return session


def logout() -> None:
    session = st.session_state.pop(SESSION_KEY, None)
    st.session_state.pop(TOKEN_KEY, None)
    st.cache_data.clear()
    if session is not None:
        logger.info("Signed out user %s", session.user.id)


def handle_auth_error() -> None:
    logger.warning("Session rejected by the server; returning to login")
    logout()
    st.rerun()
