"""
Application state and the handlers that move it forward.

AppState bundles the store, the current search term and the form dialog.
Handlers take an AppState and return the next one; only submit_form touches
the store.

Dialog lifecycle:

    closed ──open_create──▶ open-for-create ──submit / close──▶ closed
    closed ──open_edit────▶ open-for-edit(target) ──submit / close──▶ closed

open_edit on an already open dialog retargets it and reloads the fields.
Every open bumps `revision`, which the UI uses to key its input widgets.
"""

import logging
from dataclasses import dataclass, field, replace
from enum import Enum

from directory.errors import FormValidationError
from directory.models import Institute, InstituteForm
from directory.search import SeatStats, filter_institutes, seat_stats
from directory.store import InstituteStore

log = logging.getLogger(__name__)


class DialogMode(str, Enum):
    CLOSED = "closed"
    CREATE = "open-for-create"
    EDIT   = "open-for-edit"


@dataclass(frozen=True)
class DialogState:
    mode: DialogMode = DialogMode.CLOSED
    target: Institute | None = None
    fields: InstituteForm = field(default_factory=InstituteForm)
    revision: int = 0

    @property
    def is_open(self) -> bool:
        return self.mode is not DialogMode.CLOSED

    @property
    def title(self) -> str:
        return "Edit Institute" if self.target else "Add New Institute"

    @property
    def submit_label(self) -> str:
        return "Update Details" if self.target else "Add Institute"


@dataclass(frozen=True)
class AppState:
    store: InstituteStore
    search: str = ""
    dialog: DialogState = field(default_factory=DialogState)

    @property
    def institutes(self) -> list[Institute]:
        return self.store.list()

    @property
    def filtered(self) -> list[Institute]:
        return filter_institutes(self.store.list(), self.search)

    @property
    def stats(self) -> SeatStats:
        return seat_stats(self.store.list())


# ---------------------------------------------------------------------------
# Search
# ---------------------------------------------------------------------------

def set_search(state: AppState, search: str) -> AppState:
    return replace(state, search=search)


def clear_search(state: AppState) -> AppState:
    return replace(state, search="")


# ---------------------------------------------------------------------------
# Dialog
# ---------------------------------------------------------------------------

def open_create(state: AppState) -> AppState:
    dialog = DialogState(
        mode=DialogMode.CREATE,
        revision=state.dialog.revision + 1,
    )
    return replace(state, dialog=dialog)


def open_edit(state: AppState, institute: Institute) -> AppState:
    dialog = DialogState(
        mode=DialogMode.EDIT,
        target=institute,
        fields=institute.to_form(),
        revision=state.dialog.revision + 1,
    )
    return replace(state, dialog=dialog)


def close_dialog(state: AppState) -> AppState:
    dialog = DialogState(revision=state.dialog.revision)
    return replace(state, dialog=dialog)


def submit_form(state: AppState, fields: InstituteForm) -> AppState:
    """
    Create or update an institute from the dialog's fields, then close.

    Raises FormValidationError (state and store untouched) when a required
    field is blank.
    """
    if not state.dialog.is_open:
        log.warning("Ignoring form submission: dialog is closed.")
        return state

    missing = fields.missing_fields()
    if missing:
        raise FormValidationError(missing)

    target = state.dialog.target
    if target is None:
        state.store.create(fields)
    else:
        state.store.update(target.id, fields)
    return close_dialog(state)
