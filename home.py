from __future__ import annotations

import streamlit as st

from core.auth import get_client
from core.config import get_settings
from core.layout import require_session, show_error
from core.services.inventory import inventory_totals, list_inventory
from core.services.skus import list_skus
from core.services.transactions import transaction_summary
from core.utils import format_currency, iso_today

session = require_session()
settings = get_settings()
client = get_client()
org_id = session.organization.id

st.title("🏠 Dashboard")
st.caption("Welcome to Flex ERP - Inventory Management System")

errors: list[Exception] = []


def _load(fn, *args, **kwargs):
    try:
        return fn(client, org_id, *args, **kwargs)
    except Exception as e:
        errors.append(e)
        return None


skus = _load(list_skus)
inventory = _load(list_inventory, limit=1000)
today = iso_today()
summary = _load(transaction_summary, start_date=today, end_date=today)

c1, c2, c3, c4 = st.columns(4)
c1.metric("Total SKUs", "—" if skus is None else f"{len(skus)}")
if inventory is None:
    c2.metric("Inventory Items", "—")
    c4.metric("Total Value", "—")
else:
    totals = inventory_totals(inventory)
    c2.metric("Inventory Items", f"{totals['items']}", help=f"{totals['low_stock']} low on stock")
    c4.metric("Total Value", format_currency(totals["total_value"], settings.currency))
c3.metric(
    "Today's Transactions",
    "—" if summary is None else f"{sum(int(r.get('total_transactions') or 0) for r in summary)}",
)

if errors:
    show_error(errors[0])

st.divider()
st.subheader("Signed in")
st.write(f"**{session.user.name or session.user.email}** ({session.user.role}) • {session.organization.name}")
st.caption(f"Data refreshes every {settings.query_ttl_seconds // 60} minutes, or immediately after you make a change.")
