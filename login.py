from __future__ import annotations

import streamlit as st

from core.auth import login
from core.config import get_settings
from core.layout import render_connection_form

st.title("🔐 Sign in to Flex ERP")
st.caption("Inventory management for your organization.")

settings = get_settings()

with st.form("login_form"):
    email = st.text_input("Email", placeholder="you@company.com")
    password = st.text_input("Password", type="password")
    submitted = st.form_submit_button("Sign in", type="primary")

if submitted:
    try:
        session = login(email, password)
    except Exception as e:
        st.error(str(e))
    else:
        st.toast(f"Welcome back, {session.user.name or session.user.email}.")
        st.rerun()

st.caption(f"API: `{settings.api_base_url}`")

# Reachable before sign-in, so a wrong API URL never locks the user out
with st.expander("Connection settings"):
    render_connection_form(settings)
