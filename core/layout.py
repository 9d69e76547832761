from __future__ import annotations

import pandas as pd
import streamlit as st

from core.api import ApiClient, AuthError
from core.auth import AuthSession, current_session, handle_auth_error, logout
from core.config import Settings, persist_connection


def render_shell(session: AuthSession) -> None:
    with st.sidebar:
        st.subheader("Flex ERP")
        st.write(f"**{session.user.name or session.user.email}**")
        st.caption(f"{session.organization.name} • {session.user.role}")
        if st.button("Sign out", key="sign_out"):
            logout()
            st.rerun()


def require_session() -> AuthSession:
    session = current_session()
    if session is None:
        # Token missing or unreadable: drop it and let the router show the login page
        logout()
        st.rerun()
    render_shell(session)
    return session


def show_error(e: Exception) -> None:
    if isinstance(e, AuthError):
        handle_auth_error()
    st.error(str(e))


def show_table(rows: list[dict], columns: dict[str, str], *, empty: str) -> None:
    if not rows:
        st.info(empty)
        return
    df = pd.DataFrame(rows)
    cols = [c for c in columns if c in df.columns]
    st.dataframe(df[cols].rename(columns=columns), use_container_width=True, hide_index=True)


def render_connection_form(settings: Settings) -> None:
    """API URL / data folder form with a health check. Needs no session."""
    st.write(f"Current API: `{settings.api_base_url}`")
    st.write(f"Data directory: `{settings.data_dir}`")

    if st.button("Check connection", key="health"):
        try:
            status = ApiClient(settings.api_base_url, timeout=settings.request_timeout).health()
        except Exception as e:
            st.error(str(e))
        else:
            st.success(f"API is {status.get('status', 'reachable')}.")

    new_url = st.text_input("API base URL", value=settings.api_base_url, key="conn_url")
    new_dir = st.text_input("Data directory", value=str(settings.data_dir), key="conn_dir")
    if st.button("Save & reconnect", type="primary", key="conn_save"):
        try:
            persist_connection(new_url, new_dir)
        except Exception as e:
            st.error(str(e))
        else:
            st.cache_data.clear()
            st.toast("Saved. Reconnecting with the new API URL.")
            st.rerun()
