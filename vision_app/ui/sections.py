from __future__ import annotations
import json
from pathlib import Path
from typing import Any, Optional

import streamlit as st

from vision_app.config import MODE_COPY, VIDEO_TYPES, settings
from vision_app.models import Mode, UploadedFile
from vision_app.navigation import NavigationStateMachine, Screen
from vision_app.services.storage import UploadError, save_upload

TEXT_SUFFIXES = {".txt", ".md", ".log"}
VIDEO_SUFFIXES = {"." + t for t in VIDEO_TYPES} | {".webm"}


def toast(msg: str) -> None:
    st.toast(msg)


def back_button(nav: NavigationStateMachine, key: str) -> None:
    st.button("← Back to menu", key=key, on_click=nav.back)


def main_menu(nav: NavigationStateMachine) -> None:
    st.subheader("Choose an analysis")
    cols = st.columns(len(Mode))
    for col, mode in zip(cols, Mode):
        copy = MODE_COPY[mode.value]
        with col, st.container(border=True):
            st.markdown(f"**{copy['title']}**")
            st.caption(copy["description"])
            st.button("Start", key=f"select_{mode.value}", use_container_width=True,
                      on_click=nav.select_mode, args=(mode,))


def upload_section(nav: NavigationStateMachine, mode: Mode) -> None:
    copy = MODE_COPY[mode.value]
    back_button(nav, "back_upload")
    st.header(copy["title"])
    st.write(copy["description"])

    st.subheader("How it works")
    for col, (i, (title, text)) in zip(st.columns(len(copy["steps"])), enumerate(copy["steps"], start=1)):
        with col:
            st.markdown(f"**{i}. {title}**")
            st.caption(text)

    uploaded = st.file_uploader("Upload video", type=VIDEO_TYPES, key=f"file_{mode.value}")
    if not st.button("Start processing", type="primary", disabled=uploaded is None):
        return

    file = UploadedFile(name=uploaded.name, content=uploaded.getvalue())
    with st.spinner(f"Uploading {file.name}…"):
        try:
            save_upload(file, settings.upload_dir)
        except UploadError as exc:
            st.error(f"Failed: {exc}")
            st.stop()
    nav.file_chosen(file)
    st.rerun()


def processing_screen(nav: NavigationStateMachine) -> None:
    back_button(nav, "back_processing")
    copy = MODE_COPY[nav.mode.value]
    file_name = nav.file.name if nav.file else "video.mp4"
    st.header(f"{copy['title']}: processing")
    st.write(f"Analyzing **{file_name}**.")

    if nav.alert:
        st.error(nav.alert)
        if st.session_state.get("shown_alert") != nav.alert:
            st.session_state.shown_alert = nav.alert
            toast(nav.alert)
        st.info("Go back to the menu to start the upload again.")
    elif nav.busy:
        st.progress(0.5, text="Waiting for the backend to finish…")
        st.caption(f"Checking every {settings.poll_interval_seconds:g}s, "
                   f"up to {settings.poll_max_attempts} times.")


def _show_output(path: Optional[str], as_video: bool) -> None:
    if not path:
        st.info("The backend did not report an output path.")
        return
    st.caption(f"Output: `{path}`")
    p = Path(path)
    if not p.is_file():
        return
    suffix = p.suffix.lower()
    if suffix in VIDEO_SUFFIXES or as_video:
        st.video(str(p))
    elif suffix == ".json" or suffix in TEXT_SUFFIXES:
        try:
            text = p.read_text(encoding="utf-8")
        except (UnicodeDecodeError, OSError) as exc:
            st.caption(f"Could not read output: {exc}")
            return
        if suffix != ".json":
            st.markdown(text)
            return
        try:
            st.json(json.loads(text or "null"))
        except ValueError:
            st.code(text)


def _result_header(nav: NavigationStateMachine, title: str) -> Any:
    back_button(nav, "back_result")
    view = nav.result_view()
    st.header(title)
    st.write(f"Results for **{view['file_name']}**")
    return view["response"]


def summarization_screen(nav: NavigationStateMachine) -> None:
    response = _result_header(nav, "Video Summarization")
    _show_output(response.output_path if response else None, as_video=False)


def tracking_screen(nav: NavigationStateMachine) -> None:
    response = _result_header(nav, "People Tracking")
    _show_output(response.output_path if response else None, as_video=True)


def advanced_screen(nav: NavigationStateMachine) -> None:
    response = _result_header(nav, "Advanced Track and Search")
    _show_output(response.output_path if response else None, as_video=False)
    if response is not None:
        with st.expander("Raw backend response"):
            st.json(response.model_dump())


def render_screen(nav: NavigationStateMachine) -> None:
    screen = nav.screen
    if screen.is_upload:
        upload_section(nav, screen.mode)
    elif screen.is_processing:
        processing_screen(nav)
    elif screen is Screen.SUMMARIZATION:
        summarization_screen(nav)
    elif screen is Screen.TRACKING:
        tracking_screen(nav)
    elif screen is Screen.ADVANCED:
        advanced_screen(nav)
    else:
        main_menu(nav)
