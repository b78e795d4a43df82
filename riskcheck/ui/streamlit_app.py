"""Streamlit web application for riskcheck.

Lists risk events, lets the user add, edit and delete them, and shows the
analysis panel for the current register.
"""

import os

import streamlit as st

from riskcheck.core.config import load_config
from riskcheck.core.exceptions import RiskCheckError
from riskcheck.core.logging_config import get_logger
from riskcheck.core.store import RiskEventStore
from riskcheck.core.validation import build_event, validate_event_form
from riskcheck.ui.start_app import CONFIG_ENV_VAR
from riskcheck.reporting.reporting import (
    ChartGenerator, events_dataframe, summary_rows, RISK_LEVEL_COLORS
)

logger = get_logger(__name__)

st.set_page_config(
    page_title="Risk Calculator",
    page_icon="📊",
    layout="wide",
)


def _on_store_change(store: RiskEventStore) -> None:
    """Refresh the cached analysis panel values from the store."""
    currency = st.session_state.config.currency_symbol
    st.session_state.summary = summary_rows(store.aggregator, currency)
    st.session_state.risk_level = store.analysis.risk_level
    logger.debug(f"Register changed, {len(store.events)} events")


def initialize_session_state():
    """Initialize session state variables."""
    if "config" not in st.session_state:
        st.session_state.config = load_config(os.environ.get(CONFIG_ENV_VAR))
    if "store" not in st.session_state:
        store = RiskEventStore(st.session_state.config.create_aggregator())
        store.subscribe(_on_store_change)
        st.session_state.store = store
        _on_store_change(store)


def show_flash_message():
    """Show the message queued before the last rerun, once."""
    message = st.session_state.pop("flash", None)
    if message:
        st.success(message)


def main():
    """Main Streamlit application."""
    initialize_session_state()
    store: RiskEventStore = st.session_state.store
    currency = st.session_state.config.currency_symbol

    st.title("📊 Risk Calculator")
    show_flash_message()

    render_add_event_form(store)

    col1, col2 = st.columns([3, 2])
    with col1:
        render_events(store, currency)
    with col2:
        render_analysis(store, currency)


def render_add_event_form(store: RiskEventStore):
    """Render the add-event form."""
    with st.expander("➕ Add Risk Event", expanded=len(store.events) == 0):
        with st.form("add_event", clear_on_submit=True):
            description = st.text_input("Description")
            loss = st.text_input(f"Possible Loss ({st.session_state.config.currency_symbol})")
            probability = st.text_input("Probability (%)")
            submitted = st.form_submit_button("Add")

        if submitted:
            is_valid, errors = validate_event_form(description, loss, probability)
            if not is_valid:
                for error in errors:
                    st.error(f"⚠️ {error}")
                return
            event = build_event(description, loss, probability)
            store.add(event)
            st.session_state.flash = f"✅ Added risk event: {event.description}"
            st.rerun()


def render_events(store: RiskEventStore, currency: str):
    """Render the event list with edit and delete controls."""
    st.subheader(f"Risk Events ({len(store.events)})")

    if not store.events:
        st.info("No risk events yet. Add one above.")
        return

    st.dataframe(events_dataframe(store.events, currency), use_container_width=True,
                 hide_index=True)

    for event in store.events:
        with st.expander(f"✏️ {event.description}"):
            render_edit_event_form(store, event)


def render_edit_event_form(store: RiskEventStore, event):
    """Render the edit form for one event."""
    key = str(event.id)
    with st.form(f"edit_{key}"):
        description = st.text_input("Description", value=event.description)
        loss = st.text_input("Possible Loss", value=f"{event.possible_loss:.0f}")
        probability = st.text_input("Probability (%)", value=f"{event.probability * 100:.1f}")
        saved = st.form_submit_button("Save")

    if saved:
        is_valid, errors = validate_event_form(description, loss, probability)
        if not is_valid:
            for error in errors:
                st.error(f"⚠️ {error}")
            return
        updated = build_event(description, loss, probability).model_copy(update={"id": event.id})
        try:
            store.update_by_id(event.id, updated)
        except RiskCheckError as e:
            st.error(f"❌ {e.message}")
            return
        st.session_state.flash = f"✅ Updated risk event: {updated.description}"
        st.rerun()

    confirm = st.checkbox("Confirm delete", key=f"confirm_{key}",
                          help="This action cannot be undone.")
    if st.button("🗑️ Delete Event", key=f"delete_{key}", type="secondary", disabled=not confirm):
        try:
            store.remove_by_id(event.id)
        except RiskCheckError as e:
            st.error(f"❌ {e.message}")
            return
        st.session_state.flash = f"✅ Removed risk event: {event.description}"
        st.rerun()


def render_analysis(store: RiskEventStore, currency: str):
    """Render the analysis panel from the values cached on the last change."""
    st.subheader("Risk Analysis")

    for label, value in st.session_state.summary:
        if label == "Risk Level":
            continue
        st.metric(label, value)

    level = st.session_state.risk_level
    color = RISK_LEVEL_COLORS[level]
    st.markdown(f"**Risk Level:** :{color}[{level.value}]")

    if store.events:
        charts = ChartGenerator(currency)
        st.plotly_chart(charts.expected_loss_chart(store.events), use_container_width=True)
        st.plotly_chart(charts.probability_chart(store.events), use_container_width=True)


if __name__ == "__main__":
    main()
