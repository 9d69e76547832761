# Page scripts under Streamlit's script runner, with the API client patched

from unittest.mock import MagicMock

import pytest

from core.api import ApiClient, ApiError, AuthError
from core.auth import SESSION_KEY, TOKEN_KEY
from tests.conftest import app_test, button, make_session

INVENTORY = [
    {
        "sku_id": 3,
        "sku_code": "WID-1",
        "product_name": "Widget",
        "category": "Parts",
        "quantity": 4,
        "weighted_cost": 2.0,
        "total_value": 8.0,
        "is_manual_cost": False,
    }
]


def fake_get(path, **kwargs):
    if "/tables/" in path:
        return {"fields": [], "metadata": {}}
    if path.endswith("/skus"):
        return {"skus": [{"id": 3, "sku_code": "WID-1", "product_name": "Widget", "is_active": True}]}
    if path.endswith("/transactions/summary"):
        return [{"transaction_type": "in", "total_transactions": 2}]
    if path.endswith("/inventory"):
        return INVENTORY
    return []


@pytest.fixture
def api_get(monkeypatch):
    mock = MagicMock(side_effect=fake_get)
    monkeypatch.setattr(ApiClient, "get", mock)
    return mock


@pytest.fixture
def api_patch(monkeypatch):
    mock = MagicMock(return_value={"sku_id": 3, "weighted_cost": 2.0, "is_manual_cost": True})
    monkeypatch.setattr(ApiClient, "patch", mock)
    return mock


# --- Navigation ---


def test_without_token_only_login_is_reachable(api_get):
    at = app_test("app.py").run()

    assert not at.exception
    assert at.title[0].value == "🔐 Sign in to Flex ERP"
    assert [t.label for t in at.text_input][:2] == ["Email", "Password"]
    api_get.assert_not_called()


def test_signed_in_default_page_is_dashboard(api_get):
    at = app_test("app.py", make_session()).run()

    assert not at.exception
    assert at.title[0].value == "🏠 Dashboard"
    assert at.metric[0].value == "1"


def test_rejected_token_returns_to_login(monkeypatch):
    monkeypatch.setattr(ApiClient, "get", MagicMock(side_effect=AuthError("Invalid token", status=401)))

    at = app_test("app.py", make_session()).run()

    assert not at.exception
    assert TOKEN_KEY not in at.session_state
    assert SESSION_KEY not in at.session_state
    assert at.title[0].value == "🔐 Sign in to Flex ERP"


# --- Inventory manual cost ---


@pytest.fixture
def inventory(api_get):
    return app_test("pages/2_📊_Inventory.py", make_session("manager")).run()


def test_edit_cost_opens_editor(inventory):
    button(inventory, "Edit Cost").click().run()

    assert inventory.session_state["editing_cost_sku_id"] == 3
    assert inventory.number_input(key="cost_3").value == 2.0


def test_saved_cost_closes_editor(inventory, api_get, api_patch):
    button(inventory, "Edit Cost").click().run()
    inventory.number_input(key="cost_3").set_value(5.5)
    button(inventory, "✓ Save").click().run()

    assert not inventory.exception
    assert "editing_cost_sku_id" not in inventory.session_state
    assert api_patch.call_args.args == ("/api/v1/orgs/42/inventory/sku/3/cost",)
    assert api_patch.call_args.kwargs["json"] == {"weighted_cost": 5.5}


def test_cancel_closes_editor_without_request(inventory, api_patch):
    button(inventory, "Edit Cost").click().run()
    button(inventory, "✕ Cancel").click().run()

    assert "editing_cost_sku_id" not in inventory.session_state
    api_patch.assert_not_called()


def test_viewer_cannot_edit_cost(api_get):
    at = app_test("pages/2_📊_Inventory.py", make_session("viewer")).run()

    assert not [b for b in at.button if b.label == "Edit Cost"]


# --- Settings ---


def test_settings_keeps_connection_form_when_api_is_down(monkeypatch):
    monkeypatch.setattr(ApiClient, "get", MagicMock(side_effect=ApiError("Failed to fetch table fields: refused")))

    at = app_test("pages/6_⚙️_Settings.py", make_session("admin")).run()

    assert not at.exception
    assert at.error[0].value == "Failed to fetch table fields: refused"
    assert at.text_input(key="conn_url").value == "http://api.test"
