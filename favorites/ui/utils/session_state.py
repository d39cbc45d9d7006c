"""
Session state helpers for Streamlit.
"""

import streamlit as st

from favorites.config import load_api_client_config
from favorites.ui.utils.api_client import EntryApiClient


@st.cache_resource
def build_entry_client() -> EntryApiClient:
    """Build the process-wide entry client, reading the environment once."""
    return EntryApiClient(load_api_client_config())


def get_entry_client() -> EntryApiClient | None:
    """Get the entry client from session state."""
    return st.session_state.get("entry_client")


def init_session_state() -> None:
    """Initialize session state keys if not present."""
    if st.session_state.get("entry_client") is None:
        st.session_state["entry_client"] = build_entry_client()
