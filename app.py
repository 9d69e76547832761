from __future__ import annotations

import streamlit as st

from core.auth import is_authenticated
from core.log import configure_logging
from core.routes import default_path, visible_routes

st.set_page_config(page_title="Flex ERP", page_icon="📦", layout="wide")
configure_logging()

# Protected pages are only registered once a token is present, so any protected
# URL visited without one falls through to the login page.
authenticated = is_authenticated()
home = default_path(authenticated)
pages = [
    st.Page(r.script, title=r.title, icon=r.icon, url_path=r.url_path, default=(r.path == home))
    for r in visible_routes(authenticated)
]

st.navigation(pages).run()
