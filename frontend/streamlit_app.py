"""
Streamlit frontend for RheumaSeats India.

Run with:
    streamlit run frontend/streamlit_app.py

Page layout:
    header   title, total institutes, estimated seats, "Add Institute"
    search   live filter on name / city / course, "Clear Search" when active
    list     table or card layout (sidebar switch), one Edit action per row
    dialog   add / edit form with four required fields

The institute store is opened once per process and shared by all sessions;
search term and dialog state live in each session's AppState.
"""

import logging
import sys
from datetime import date
from pathlib import Path

import streamlit as st

# Ensure project root is on sys.path when started with `streamlit run`
ROOT_DIR = str(Path(__file__).parent.parent)
if ROOT_DIR not in sys.path:
    sys.path.insert(0, ROOT_DIR)

from directory.config import load_settings, setup_logging
from directory.models import Institute, InstituteForm
from directory.seed import INITIAL_INSTITUTES
from directory.state import (
    AppState,
    close_dialog,
    open_create,
    open_edit,
    set_search,
    submit_form,
)
from directory.storage import InstitutePersistence, JsonFileStorage
from directory.store import InstituteStore
from directory.views import (
    APP_TITLE,
    build_rows,
    empty_state,
    footer_text,
    header_stats,
    list_heading,
)
from frontend.ui import LAYOUTS, empty_list, header_metrics, institute_dialog

st.set_page_config(page_title=APP_TITLE, page_icon=":material/database:", layout="wide")

settings = load_settings()
setup_logging(settings)
log = logging.getLogger("frontend")


@st.cache_resource
def _open_store(data_dir: str) -> InstituteStore:
    log.info("Opening institute store in %s", data_dir)
    persistence = InstitutePersistence(JsonFileStorage(Path(data_dir)))
    store = InstituteStore.open(persistence, INITIAL_INSTITUTES)
    log.info("  %d institutes ready.", len(store))
    return store


# ---------------------------------------------------------------------------
# Session state + callbacks
# ---------------------------------------------------------------------------

if "app_state" not in st.session_state:
    st.session_state.app_state = AppState(store=_open_store(str(settings.data_dir)))


def _state() -> AppState:
    return st.session_state.app_state


def _set_state(state: AppState) -> None:
    st.session_state.app_state = state


def _on_add() -> None:
    _set_state(open_create(_state()))


def _on_edit(institute: Institute) -> None:
    _set_state(open_edit(_state(), institute))


def _on_cancel() -> None:
    _set_state(close_dialog(_state()))


def _on_submit(fields: InstituteForm) -> None:
    _set_state(submit_form(_state(), fields))


def _on_clear_search() -> None:
    st.session_state.search = ""


# ---------------------------------------------------------------------------
# Page
# ---------------------------------------------------------------------------

layout_name = st.sidebar.radio("Layout", list(LAYOUTS), key="layout", horizontal=True)

title_col, stats_col, add_col = st.columns((3, 2, 1), vertical_alignment="center")
title_col.title(f":material/database: {APP_TITLE}")
with stats_col:
    header_metrics(header_stats(_state().stats))
add_col.button(
    "Add Institute",
    key="add",
    icon=":material/add:",
    type="primary",
    on_click=_on_add,
    width="stretch",
)

search = st.text_input(
    "Search",
    key="search",
    placeholder="Search by institute name, city, or course...",
    icon=":material/search:",
    label_visibility="collapsed",
)
_set_state(set_search(_state(), search))
state = _state()

institutes = state.institutes
filtered = state.filtered

heading_col, clear_col = st.columns((5, 1), vertical_alignment="bottom")
heading_col.subheader(list_heading(state.search, len(filtered)))
if state.search:
    clear_col.button("Clear Search", key="clear-search", type="tertiary", on_click=_on_clear_search)

empty = empty_state(len(institutes), len(filtered), state.search)
if empty:
    empty_list(empty)
else:
    LAYOUTS[layout_name].render(build_rows(filtered), _on_edit)

st.divider()
st.caption(footer_text(date.today().year))

if state.dialog.is_open:
    institute_dialog(state.dialog, _on_submit, _on_cancel)
