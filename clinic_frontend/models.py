from __future__ import annotations
from enum import Enum
from typing import Any, ClassVar
from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator, model_validator
from .datetimes import from_datetime_local_input, to_date_input, to_datetime_local_input


class Collection(str, Enum):
    PATIENTS = "patients"
    DOCTORS = "doctors"
    APPOINTMENTS = "appointments"


class Record(BaseModel):
    """A server-owned record. ``_id`` on the wire, ``id`` accepted too."""
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    id: str = Field(validation_alias=AliasChoices("_id", "id"))


def _blank_if_none(value: Any) -> Any:
    # a null text field renders as a blank cell instead of failing the list
    return "" if value is None else value


class Patient(Record):
    name: str = ""
    birth_date: str | None = Field(None, alias="birthDate")  # ISO-8601
    email: str = ""
    phone: str = ""

    _blank_nulls = field_validator("name", "email", "phone", mode="before")(_blank_if_none)


class Doctor(Record):
    name: str = ""
    specialty: str = ""

    _blank_nulls = field_validator("name", "specialty", mode="before")(_blank_if_none)


def _split_reference(raw: Any) -> tuple[str, str | None]:
    """Bare id or embedded ``{"_id": ..., "name": ...}`` -> (id, display name)."""
    if isinstance(raw, dict):
        ref_id = raw.get("_id") or raw.get("id") or ""
        return str(ref_id), raw.get("name")
    if raw is None:
        return "", None
    return str(raw), None


class Appointment(Record):
    patient_id: str = ""
    patient_name: str | None = None
    doctor_id: str = ""
    doctor_name: str | None = None
    start_at: str | None = Field(None, alias="startAt")  # ISO-8601 dateTime
    end_at: str | None = Field(None, alias="endAt")
    notes: str | None = None

    @model_validator(mode="before")
    @classmethod
    def _unwrap_references(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for ref in ("patient", "doctor"):
            # populated joins may also come back under "patient"/"doctor"
            bare_id, bare_name = _split_reference(data.pop(f"{ref}Id", None))
            joined_id, joined_name = _split_reference(data.pop(ref, None))
            data.setdefault(f"{ref}_id", bare_id or joined_id)
            data.setdefault(f"{ref}_name", bare_name or joined_name)
        return data

    @property
    def patient_label(self) -> str:
        return self.patient_name or "Unknown"

    @property
    def doctor_label(self) -> str:
        return self.doctor_name or "Unknown"


class Draft(BaseModel):
    """String-valued form data for one record kind; defaults are the empty shape."""
    model_config = ConfigDict(populate_by_name=True)

    optional_fields: ClassVar[frozenset[str]] = frozenset()

    # each subclass provides from_record(record), building the draft for editing

    def merged(self, fields: dict[str, Any]) -> "Draft":
        """Copy with form fields (wire keys or field names) applied."""
        data = self.model_dump(by_alias=True)
        for key, value in fields.items():
            info = type(self).model_fields.get(key)
            data[info.alias if info and info.alias else key] = "" if value is None else str(value)
        return type(self).model_validate(data)

    def missing_fields(self) -> list[str]:
        missing = []
        for name, info in type(self).model_fields.items():
            if name in self.optional_fields:
                continue
            if not str(getattr(self, name)).strip():
                missing.append(info.alias or name)
        return missing

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True)


class PatientDraft(Draft):
    name: str = ""
    birth_date: str = Field("", alias="birthDate")
    email: str = ""
    phone: str = ""

    @classmethod
    def from_record(cls, record: Patient) -> "PatientDraft":
        return cls(
            name=record.name,
            birth_date=to_date_input(record.birth_date),
            email=record.email,
            phone=record.phone,
        )


class DoctorDraft(Draft):
    name: str = ""
    specialty: str = ""

    @classmethod
    def from_record(cls, record: Doctor) -> "DoctorDraft":
        return cls(name=record.name, specialty=record.specialty)


class AppointmentDraft(Draft):
    optional_fields: ClassVar[frozenset[str]] = frozenset({"notes"})

    patient_id: str = Field("", alias="patientId")
    doctor_id: str = Field("", alias="doctorId")
    start_at: str = Field("", alias="startAt")  # YYYY-MM-DDTHH:MM
    end_at: str = Field("", alias="endAt")
    notes: str = ""

    @classmethod
    def from_record(cls, record: Appointment) -> "AppointmentDraft":
        return cls(
            patient_id=record.patient_id,
            doctor_id=record.doctor_id,
            start_at=to_datetime_local_input(record.start_at),
            end_at=to_datetime_local_input(record.end_at),
            notes=record.notes or "",
        )

    def to_payload(self) -> dict[str, Any]:
        payload = super().to_payload()
        payload["startAt"] = from_datetime_local_input(self.start_at)
        payload["endAt"] = from_datetime_local_input(self.end_at)
        return payload


class EntityKind(BaseModel):
    """Everything a screen needs to know about one record kind."""
    model_config = ConfigDict(frozen=True)

    collection: Collection
    label: str
    record: type[Record]
    draft: type[Draft]

    def parse_records(self, raw: list[Any]) -> list[Record]:
        return [self.record.model_validate(item) for item in raw]


PATIENTS = EntityKind(collection=Collection.PATIENTS, label="patient", record=Patient, draft=PatientDraft)
DOCTORS = EntityKind(collection=Collection.DOCTORS, label="doctor", record=Doctor, draft=DoctorDraft)
APPOINTMENTS = EntityKind(
    collection=Collection.APPOINTMENTS, label="appointment", record=Appointment, draft=AppointmentDraft
)

KINDS: dict[Collection, EntityKind] = {k.collection: k for k in (PATIENTS, DOCTORS, APPOINTMENTS)}
