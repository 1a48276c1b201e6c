from __future__ import annotations
import time

import streamlit as st

from vision_app.config import settings
from vision_app.models import Mode, UploadedFile
from vision_app.navigation import NavigationStateMachine
from vision_app.services.backend_client import EdgeVisionClient
from vision_app.services.jobs import JobHandle, launch
from vision_app.services.orchestrator import JobOrchestrator
from vision_app.services.poller import Poller


def _start_job(mode: Mode, file: UploadedFile) -> JobHandle:
    client = EdgeVisionClient(base_url=st.session_state.get("api_base") or settings.api_base_url)
    return launch(JobOrchestrator(client, Poller()), mode, file)


def init_session_state() -> None:
    if "nav" not in st.session_state:
        st.session_state.nav = NavigationStateMachine(start_job=_start_job)
    st.session_state.setdefault("api_base", settings.api_base_url)
    st.session_state.setdefault("shown_alert", None)


def get_nav() -> NavigationStateMachine:
    return st.session_state.nav


def sync_job_outcome() -> None:
    get_nav().poll_job()


def auto_refresh_if_active() -> None:
    # the job runs on the background loop; rerun until its outcome lands
    if get_nav().busy:
        time.sleep(settings.ui_refresh_seconds)
        st.rerun()
