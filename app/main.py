import sys
import os
sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

import asyncio
import logging
from datetime import datetime
from decimal import Decimal

import streamlit as st
import pandas as pd
import plotly.graph_objects as go
import plotly.express as px

from core.async_reports import build_dashboard
from core.config import load_settings
from core.domain import FlowDirection, TimePeriod
from core.formatting import (
    format_currency,
    format_percentage,
    format_signed,
    render_summary_value,
)
from core.log import configure_logging
from core.repository import JsonTransactionRepository
from core.sample_data import sample_transactions
from core.services import DashboardService, TransactionService
from core.validation import (
    category_options,
    direction_of,
    signed_amount,
    validate_transaction_form,
)

settings = load_settings()
configure_logging(settings.log_level)
logger = logging.getLogger("app")

st.set_page_config(page_title="Personal Finance Tracker", layout="wide")


@st.cache_resource
def get_transaction_service() -> TransactionService:
    repo = JsonTransactionRepository(settings.data_path)
    svc = TransactionService(repo)
    svc.load()
    if settings.seed_sample and not svc.snapshot and svc.last_error is None:
        count = svc.seed(sample_transactions())
        logger.info("seeded %d sample transactions into %s", count, settings.data_path)
    return svc


def transaction_form(key, direction, initial=None):
    """Render the add/edit form; returns the validated values or None."""
    options = category_options(direction)
    amount_value, note_value, day_value, category_index = 0.0, "", datetime.now().date(), 0
    if initial is not None:
        if initial.category and initial.category not in options:
            options = [initial.category] + options
        category_index = options.index(initial.category) if initial.category else 0
        amount_value = float(abs(initial.amount))
        note_value = initial.note
        day_value = initial.timestamp.date()

    with st.form(key, clear_on_submit=initial is None):
        col1, col2 = st.columns(2)
        with col1:
            day = st.date_input("Date", value=day_value)
            amount = st.number_input("Amount", min_value=0.0, value=amount_value, step=1.0, format="%.2f")
        with col2:
            category = st.selectbox("Category", options, index=category_index)
            note = st.text_input("Note", value=note_value)
        submitted = st.form_submit_button("Save" if initial else "Add Transaction")

    if not submitted:
        return None
    ts_time = initial.timestamp.time() if initial else datetime.now().time()
    ts = datetime.combine(day, ts_time)
    magnitude = Decimal(str(amount))
    errors = validate_transaction_form(note, magnitude, ts, category)
    for message in errors:
        st.warning(message)
    if errors:
        return None
    return ts, signed_amount(direction, magnitude), note.strip(), category


tx_svc = get_transaction_service()
dashboard = DashboardService()
cur = settings.currency

if tx_svc.last_error:
    st.error(f"Storage problem: {tx_svc.last_error}")

menu = st.sidebar.radio("Menu", ["🧾 Transactions", "📊 Chart", "🥧 Categories"])
period = TimePeriod(
    st.sidebar.radio(
        "Time Period",
        [p.value for p in TimePeriod],
        index=1,
        format_func=lambda v: TimePeriod(v).label,
    )
)

snapshot = tx_svc.snapshot
now = datetime.now()

if menu == "🧾 Transactions":
    st.title("🧾 Transactions")

    editing = next((t for t in snapshot if t.id == st.session_state.get("editing_id")), None)
    if editing is not None:
        st.subheader("Edit transaction")
        direction = direction_of(editing)
        values = transaction_form(f"edit_{editing.id}", direction, editing)
        if st.button("Cancel"):
            st.session_state.pop("editing_id", None)
            st.rerun()
        if values:
            if tx_svc.update(editing.id, *values):
                st.session_state.pop("editing_id", None)
                st.rerun()
            else:
                st.error(f"Could not save transaction: {tx_svc.last_error}")
    else:
        direction = FlowDirection(
            st.radio(
                "Type",
                [d.value for d in FlowDirection],
                index=1,
                horizontal=True,
                format_func=lambda v: FlowDirection(v).label,
            )
        )
        values = transaction_form("input_form", direction)
        if values:
            if tx_svc.add(*values):
                st.success("Transaction added")
                st.rerun()
            else:
                st.error(f"Could not save transaction: {tx_svc.last_error}")

    search = st.text_input("🔍 Search", key="tx_search")
    sections = dashboard.transaction_sections(tx_svc.snapshot, search, today=now.date())

    if not sections:
        st.info("No transactions to display.")

    for section in sections:
        st.subheader(f"{section['title']}  ·  {format_signed(section['total'], cur)}")
        for t in section["items"]:
            c1, c2, c3, c4, c5 = st.columns([3, 4, 2, 1, 1])
            c1.write(t.category or "Other")
            c2.write(t.note or "—")
            c3.write(format_signed(t.amount, cur))
            if c4.button("✏️", key=f"edit_btn_{t.id}"):
                st.session_state["editing_id"] = t.id
                st.rerun()
            if c5.button("🗑", key=f"del_{t.id}"):
                if tx_svc.delete(t.id):
                    st.rerun()
                else:
                    st.error(f"Could not delete transaction: {tx_svc.last_error}")

elif menu == "📊 Chart":
    st.title("📊 Income vs Expenses")

    report = asyncio.run(build_dashboard(snapshot, period, FlowDirection.EXPENSE, now))
    totals = report["totals"]
    k1, k2, k3 = st.columns(3)
    with k1:
        st.metric("Income", format_currency(totals.income, cur))
    with k2:
        st.metric("Expenses", format_currency(totals.expense, cur))
    with k3:
        st.metric("Net", format_signed(totals.net, cur))

    points = report["chart"]
    df = pd.DataFrame(
        {
            "period": [p.label for p in points],
            "income": [float(p.income) for p in points],
            "expense": [float(p.expense) for p in points],
            "net": [float(p.net) for p in points],
        }
    )

    fig = go.Figure()
    fig.add_trace(go.Bar(x=df["period"], y=df["income"], name="Income", marker_color="#34C759"))
    fig.add_trace(go.Bar(x=df["period"], y=df["expense"], name="Expenses", marker_color="#FF3B30"))
    fig.update_layout(barmode="group", template="plotly_dark", margin=dict(t=30, b=10, l=10, r=10))
    st.plotly_chart(fig, use_container_width=True)

    st.dataframe(df, use_container_width=True, hide_index=True)

elif menu == "🥧 Categories":
    st.title("🥧 Category Breakdown")

    direction = FlowDirection(
        st.radio(
            "Show",
            [d.value for d in FlowDirection],
            index=1,
            horizontal=True,
            format_func=lambda v: FlowDirection(v).label,
        )
    )
    report = dashboard.breakdown(snapshot, direction, period, now)
    slices = report["slices"]

    if not slices:
        st.info(f"No {direction.label.lower()} in this period.")
    else:
        df_cat = pd.DataFrame(
            {
                "Category": [s.category for s in slices],
                "Amount": [float(s.amount) for s in slices],
            }
        )
        fig_cat = px.pie(
            df_cat,
            values="Amount",
            names="Category",
            color="Category",
            color_discrete_map={s.category: s.color for s in slices},
            hole=0.4,
        )
        fig_cat.update_layout(height=380)
        st.plotly_chart(fig_cat, use_container_width=True)

        st.subheader("Summary")
        for row in report["rows"]:
            left, right = st.columns([2, 1])
            left.write(row.label)
            right.write(f"**{render_summary_value(row.value, cur)}**")

        st.subheader("Details")
        detail = pd.DataFrame(
            {
                "Category": [s.category for s in slices],
                "Amount": [format_currency(s.amount, cur) for s in slices],
                "Share": [format_percentage(s.percentage) for s in slices],
            }
        )
        st.table(detail)
