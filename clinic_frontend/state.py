"""Per-screen state and its transitions.

Every transition is a pure function returning a new ``ScreenState``; the
screens in ``screens.py`` only decide which one to apply around their I/O.
"""
from __future__ import annotations
from typing import Any
from pydantic import BaseModel, ConfigDict
from .models import Doctor, Draft, EntityKind, Patient, Record


class ScreenState(BaseModel):
    model_config = ConfigDict(frozen=True)

    items: list[Record] = []
    draft: Draft
    editing_id: str | None = None
    loading: bool = False
    alert: str | None = None

    @property
    def editing(self) -> bool:
        return self.editing_id is not None


class AppointmentScreenState(ScreenState):
    """Adds the select options the appointment form needs."""
    patients: list[Patient] = []
    doctors: list[Doctor] = []


def initial(kind: EntityKind, state_cls: type[ScreenState] = ScreenState) -> ScreenState:
    return state_cls(draft=kind.draft())


def load_started(state: ScreenState) -> ScreenState:
    return state.model_copy(update={"loading": True})


def loaded(state: ScreenState, items: list[Record], **options: Any) -> ScreenState:
    """Replace the cached list wholesale; nothing from the old list survives."""
    return state.model_copy(update={"items": list(items), "loading": False, **options})


def load_failed(state: ScreenState) -> ScreenState:
    update: dict[str, Any] = {"items": [], "loading": False}
    if isinstance(state, AppointmentScreenState):
        update.update(patients=[], doctors=[])
    return state.model_copy(update=update)


def draft_changed(state: ScreenState, fields: dict[str, Any]) -> ScreenState:
    return state.model_copy(update={"draft": state.draft.merged(fields)})


def edit_started(state: ScreenState, kind: EntityKind, record: Record) -> ScreenState:
    return state.model_copy(update={"draft": kind.draft.from_record(record), "editing_id": record.id})


def edit_cancelled(state: ScreenState) -> ScreenState:
    return state.model_copy(update={"draft": type(state.draft)(), "editing_id": None})


def saved(state: ScreenState) -> ScreenState:
    return edit_cancelled(state)


def save_failed(state: ScreenState, message: str) -> ScreenState:
    # draft and edit cursor stay put so the user can retry
    return alert_raised(state, message)


def alert_raised(state: ScreenState, message: str) -> ScreenState:
    return state.model_copy(update={"alert": message})


def alert_dismissed(state: ScreenState) -> ScreenState:
    return state.model_copy(update={"alert": None})
