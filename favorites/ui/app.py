"""
Streamlit page shell for the favorites front end.

Run: streamlit run favorites/ui/app.py --server.port 8501

Dashboard pages placed under favorites/ui/pages/ pick up the entry client
with get_entry_client().
"""

import streamlit as st

from favorites.config import get_log_level
from favorites.ui.utils.session_state import get_entry_client, init_session_state
from favorites.utils.logging_config import configure_ui_logging

st.set_page_config(
    page_title="Favorite Movies & TV Shows",
    page_icon="🎬",
    layout="wide",
)

if "logging_configured" not in st.session_state:
    configure_ui_logging(level=get_log_level())
    st.session_state["logging_configured"] = True

init_session_state()

st.title("Favorite Movies & TV Shows")
st.caption(f"Backend: {get_entry_client().config.base_url}")
