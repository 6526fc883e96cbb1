"""List screens: fetch, render from state, mutate remotely, reload."""
from __future__ import annotations
import logging
from typing import Any, Callable
import httpx
from . import client, state as st
from .envelope import records_of
from .models import APPOINTMENTS, DOCTORS, KINDS, PATIENTS, Collection, Doctor, EntityKind, Patient, Record

logger = logging.getLogger(__name__)

# network failures, non-2xx statuses, bad JSON or records that fail validation
LOAD_ERRORS = (httpx.HTTPError, ValueError)

Confirm = Callable[[str], bool]


class EntityScreen:
    """One entity list with its draft form and edit cursor."""

    state_cls: type[st.ScreenState] = st.ScreenState

    def __init__(self, kind: EntityKind):
        self.kind = kind
        self.state = st.initial(kind, self.state_cls)

    @property
    def collection(self) -> Collection:
        return self.kind.collection

    async def _fetch(self, kind: EntityKind) -> list[Record]:
        body = await client.list_records(kind.collection.value)
        return kind.parse_records(records_of(body))

    async def load(self) -> None:
        """Replace ``items`` with a full fetch; any failure empties the list."""
        self.state = st.load_started(self.state)
        try:
            items = await self._fetch(self.kind)
        except LOAD_ERRORS as exc:
            logger.error("Failed to fetch %s: %s", self.collection.value, exc)
            self.state = st.load_failed(self.state)
            return
        self.state = st.loaded(self.state, items)

    def find(self, record_id: str) -> Record | None:
        return next((r for r in self.state.items if r.id == record_id), None)

    def update_draft(self, fields: dict[str, Any]) -> None:
        self.state = st.draft_changed(self.state, fields)

    def begin_edit(self, record: Record) -> None:
        self.state = st.edit_started(self.state, self.kind, record)

    def cancel_edit(self) -> None:
        self.state = st.edit_cancelled(self.state)

    def dismiss_alert(self) -> None:
        self.state = st.alert_dismissed(self.state)

    async def submit(self) -> bool:
        """Create or update from the draft, then reload. Returns True on success.

        A failed save keeps the draft and edit cursor for a retry.
        """
        missing = self.state.draft.missing_fields()
        if missing:
            self.state = st.alert_raised(self.state, f"Please fill in: {', '.join(missing)}")
            return False

        payload = self.state.draft.to_payload()
        editing_id = self.state.editing_id
        try:
            if editing_id:
                await client.update_record(self.collection.value, editing_id, payload)
            else:
                await client.create_record(self.collection.value, payload)
        except httpx.HTTPError as exc:
            logger.error("Error saving %s: %s", self.kind.label, exc)
            self.state = st.save_failed(self.state, f"Failed to save {self.kind.label}: {exc}")
            await self.load()
            return False

        self.state = st.saved(self.state)
        await self.load()
        return True

    async def remove(self, record_id: str, confirm: Confirm) -> bool:
        """Delete after ``confirm`` agrees; the list is reloaded either way the call goes."""
        if not confirm(f"Delete this {self.kind.label}?"):
            return False
        ok = True
        try:
            await client.delete_record(self.collection.value, record_id)
        except httpx.HTTPError as exc:
            logger.error("Error deleting %s: %s", self.kind.label, exc)
            self.state = st.alert_raised(self.state, f"Failed to delete {self.kind.label}: {exc}")
            ok = False
        await self.load()
        return ok


class AppointmentScreen(EntityScreen):
    """Appointments also need the patient and doctor lists for the form selects."""

    state_cls = st.AppointmentScreenState

    def __init__(self, kind: EntityKind = APPOINTMENTS):
        super().__init__(kind)

    async def load(self) -> None:
        self.state = st.load_started(self.state)
        try:
            appointments = await self._fetch(self.kind)
            patients = await self._fetch(PATIENTS)
            doctors = await self._fetch(DOCTORS)
        except LOAD_ERRORS as exc:
            logger.error("Failed to fetch appointment data: %s", exc)
            self.state = st.load_failed(self.state)
            return
        self.state = st.loaded(self.state, appointments, patients=patients, doctors=doctors)

    @property
    def patients(self) -> list[Patient]:
        return self.state.patients  # type: ignore[attr-defined]

    @property
    def doctors(self) -> list[Doctor]:
        return self.state.doctors  # type: ignore[attr-defined]


def screen_for(collection: Collection) -> EntityScreen:
    if collection is Collection.APPOINTMENTS:
        return AppointmentScreen()
    return EntityScreen(KINDS[collection])
