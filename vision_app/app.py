from __future__ import annotations
import streamlit as st

from vision_app.config import APP_TITLE, configure_logging
from vision_app.ui.sections import render_screen
from vision_app.ui.state import auto_refresh_if_active, get_nav, init_session_state, sync_job_outcome


def main() -> None:
    configure_logging()
    st.set_page_config(page_title=APP_TITLE, layout="wide")
    st.title(APP_TITLE)

    init_session_state()

    with st.sidebar:
        st.header("Settings")
        st.text_input("API base URL", key="api_base", placeholder="http://host:port",
                      disabled=get_nav().busy)

    sync_job_outcome()
    render_screen(get_nav())
    auto_refresh_if_active()


if __name__ == "__main__":
    main()
