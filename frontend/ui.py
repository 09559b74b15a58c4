"""
Streamlit components for the institute directory.

Two list layouts render the same rows and expose the same edit action:

    TableLayout  one line per institute, wide screens
    CardLayout   one bordered card per institute, narrow screens

Both implement render(rows, on_edit). The form dialog is rendered by
institute_dialog(), which reports back through on_submit / on_cancel.
"""

import re
from collections.abc import Callable, Sequence
from typing import Protocol

import streamlit as st

from directory.errors import FormValidationError
from directory.models import Institute, InstituteForm
from directory.state import DialogState
from directory.views import EmptyState, HeaderStat, InstituteRow

OnEdit = Callable[[Institute], None]

_MD_SPECIAL = re.compile(r"([\\`*_{}\[\]()#+\-.!|~<>$:])")


def _md(text: str) -> str:
    """Escape user text for st.markdown."""
    return _MD_SPECIAL.sub(r"\\\1", text)


class ListLayout(Protocol):
    name: str

    def render(self, rows: Sequence[InstituteRow], on_edit: OnEdit) -> None: ...


# ---------------------------------------------------------------------------
# List layouts
# ---------------------------------------------------------------------------

class TableLayout:
    name = "Table"

    COLUMNS = (0.5, 3.5, 1.6, 2.8, 0.8, 0.9)
    HEADERS = ("#", "Institute Name", "City", "Course", "Seats", "Action")

    def render(self, rows: Sequence[InstituteRow], on_edit: OnEdit) -> None:
        with st.container(border=True):
            for col, header in zip(st.columns(self.COLUMNS), self.HEADERS):
                col.caption(header.upper())

            for row in rows:
                inst = row.institute
                cols = st.columns(self.COLUMNS, vertical_alignment="center")
                cols[0].markdown(str(row.position))
                cols[1].markdown(f"**{_md(inst.name)}**")
                cols[2].markdown(_md(inst.city))
                cols[3].markdown(f":blue-background[{_md(inst.course)}]")
                cols[4].markdown(f"**{_md(inst.seats)}**")
                cols[5].button(
                    "Edit",
                    key=f"edit-table-{row.key}",
                    icon=":material/edit:",
                    help="Edit details",
                    on_click=on_edit,
                    args=(inst,),
                    type="tertiary",
                )


class CardLayout:
    name = "Cards"

    def render(self, rows: Sequence[InstituteRow], on_edit: OnEdit) -> None:
        for row in rows:
            inst = row.institute
            with st.container(border=True):
                title, action = st.columns((5, 1), vertical_alignment="top")
                title.markdown(f"#### {_md(inst.name)}")
                action.button(
                    "Edit",
                    key=f"edit-card-{row.key}",
                    icon=":material/edit:",
                    on_click=on_edit,
                    args=(inst,),
                )
                st.markdown(f":material/location_on: {_md(inst.city)}")
                st.markdown(f":material/school: {_md(inst.course)}")
                st.markdown(f":material/group: **Seats: {_md(inst.seats)}**")


LAYOUTS: dict[str, ListLayout] = {layout.name: layout for layout in (TableLayout(), CardLayout())}


# ---------------------------------------------------------------------------
# Page pieces
# ---------------------------------------------------------------------------

def header_metrics(stats: Sequence[HeaderStat]) -> None:
    for col, stat in zip(st.columns(len(stats)), stats):
        col.metric(stat.label, stat.value)


def empty_list(empty: EmptyState) -> None:
    with st.container(border=True):
        st.markdown(f"### :material/school: {empty.title}")
        st.caption(_md(empty.message))


# ---------------------------------------------------------------------------
# Form dialog
# ---------------------------------------------------------------------------

FIELD_LABELS = {
    "name":   ("Institute Name", "e.g. AIIMS"),
    "city":   ("City", "e.g. New Delhi"),
    "course": ("Course Type", "e.g. DM Clinical Immunology"),
    "seats":  ("Number of Seats", "e.g. 2"),
}


def institute_dialog(
    dialog: DialogState,
    on_submit: Callable[[InstituteForm], None],
    on_cancel: Callable[[], None],
) -> None:
    """Open the add/edit dialog for the current DialogState."""

    def _body() -> None:
        values: dict[str, str] = {}
        with st.form(key=f"institute-form-{dialog.revision}", border=False):
            for field, (label, placeholder) in FIELD_LABELS.items():
                values[field] = st.text_input(
                    label,
                    value=getattr(dialog.fields, field),
                    placeholder=placeholder,
                    key=f"{field}-{dialog.revision}",
                )

            cancel_col, submit_col = st.columns(2)
            cancelled = cancel_col.form_submit_button(
                "Cancel", key=f"cancel-{dialog.revision}", width="stretch"
            )
            submitted = submit_col.form_submit_button(
                dialog.submit_label, key=f"submit-{dialog.revision}", type="primary", width="stretch"
            )

        if cancelled:
            on_cancel()
            st.rerun()

        if submitted:
            try:
                on_submit(InstituteForm(**values))
            except FormValidationError as exc:
                labels = [FIELD_LABELS[f][0] for f in exc.missing]
                st.error("Please fill in: " + ", ".join(labels))
                return
            st.rerun()

    st.dialog(dialog.title, on_dismiss=on_cancel)(_body)()
