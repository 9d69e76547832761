# Flex ERP Admin test fixtures
#
# - Settings isolated to a temp data directory per test
# - Session state replaced by a plain dict (no Streamlit runtime under pytest)
# - Data caches cleared so cached list functions never leak between tests
# - Fake HTTP responses for the API client
# - Signed-in AppTest runs for page scripts

import base64
import json
from pathlib import Path
from typing import Any, Optional
from unittest.mock import MagicMock

import pytest
import streamlit as st
from streamlit.testing.v1 import AppTest

from core.api import ApiClient
from core.auth import SESSION_KEY, TOKEN_KEY, AuthSession, Organization, User
from core.config import get_settings

REPO_ROOT = Path(__file__).parent.parent


@pytest.fixture(autouse=True)
def isolated_settings(tmp_path, monkeypatch):
    monkeypatch.setenv("FLEX_ERP_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("FLEX_ERP_API_URL", "http://api.test")
    monkeypatch.setattr(Path, "home", lambda: tmp_path / "home")
    st.cache_resource.clear()
    st.cache_data.clear()
    yield get_settings
    st.cache_resource.clear()
    st.cache_data.clear()


@pytest.fixture
def session_state(monkeypatch):
    state: dict = {}
    monkeypatch.setattr(st, "session_state", state)
    return state


@pytest.fixture
def client():
    """ApiClient stand-in; tests set return values per verb."""
    return MagicMock(spec=ApiClient)


def fake_response(status: int = 200, body: Any = None, text: Optional[str] = None) -> MagicMock:
    resp = MagicMock()
    resp.status_code = status
    if body is not None:
        resp.json.return_value = body
        resp.text = json.dumps(body)
    else:
        resp.json.side_effect = ValueError("no json")
        resp.text = text or ""
    resp.content = resp.text.encode()
    return resp


def make_token(claims: dict) -> str:
    def enc(obj: dict) -> str:
        return base64.urlsafe_b64encode(json.dumps(obj).encode()).decode().rstrip("=")

    return f"{enc({'alg': 'HS256', 'typ': 'JWT'})}.{enc(claims)}.signature"


def make_session(role: str = "manager") -> AuthSession:
    user = User(id=5, organization_id=42, email="ana@acme.test", name="Ana", role=role)
    return AuthSession(user=user, organization=Organization(id=42, name="Acme"), token="tok-ana")


def app_test(script: str, session: Optional[AuthSession] = None) -> AppTest:
    """AppTest for a script under the repo root, optionally already signed in."""
    at = AppTest.from_file(str(REPO_ROOT / script), default_timeout=10)
    if session is not None:
        at.session_state[SESSION_KEY] = session
        at.session_state[TOKEN_KEY] = session.token
    return at


def button(at: AppTest, label: str):
    return next(b for b in at.button if b.label == label)
