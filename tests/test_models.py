import json, pathlib
import pytest
from pydantic import ValidationError
from clinic_frontend.envelope import records_of
from clinic_frontend.models import (
    APPOINTMENTS,
    PATIENTS,
    Appointment,
    AppointmentDraft,
    Draft,
    Doctor,
    DoctorDraft,
    Patient,
    PatientDraft,
)

FIX = pathlib.Path(__file__).parent / "fixtures"


def test_patient_reads_wire_keys():
    p = Patient.model_validate({"_id": "p1", "name": "Ada", "birthDate": "1985-12-10T00:00:00.000Z"})
    assert p.id == "p1"
    assert p.birth_date == "1985-12-10T00:00:00.000Z"
    assert Patient.model_validate({"id": 7}).id == "7"


@pytest.mark.parametrize("ref", [{"_id": "d1", "name": "Dr. X"}, "d1"])
def test_appointment_reference_forms_give_same_id(ref):
    appt = Appointment.model_validate({"_id": "a1", "patientId": "p1", "doctorId": ref})
    assert appt.doctor_id == "d1"
    assert AppointmentDraft.from_record(appt).doctor_id == "d1"


def test_embedded_reference_keeps_display_name():
    appts = APPOINTMENTS.parse_records(records_of(json.loads((FIX / "appointments_list.json").read_text())))
    assert [a.patient_label for a in appts] == ["Ada Lovelace", "Unknown"]
    assert [a.doctor_label for a in appts] == ["Dr. X", "Unknown"]
    assert appts[1].patient_id == "p2"
    assert appts[1].end_at is None


def test_missing_reference_is_blank():
    appt = Appointment.model_validate({"_id": "a1", "patientId": None})
    assert appt.patient_id == ""
    assert appt.patient_label == "Unknown"


def test_record_without_identity_is_rejected():
    with pytest.raises(ValidationError):
        PATIENTS.parse_records([{"name": "no id"}])


def test_patient_draft_from_record_uses_date_input():
    p = Patient(id="p1", name="Ada", birth_date="1985-12-10T00:00:00.000Z", email="a@x", phone="1")
    draft = PatientDraft.from_record(p)
    assert draft.to_payload() == {"name": "Ada", "birthDate": "1985-12-10", "email": "a@x", "phone": "1"}


def test_appointment_draft_payload_sends_utc_instants():
    appt = Appointment.model_validate(
        {"_id": "a1", "patientId": "p1", "doctorId": "d1", "startAt": "2024-12-06T15:30:00.000Z"}
    )
    draft = AppointmentDraft.from_record(appt)
    assert draft.start_at == "2024-12-06T15:30"
    assert draft.end_at == ""
    assert draft.notes == ""
    payload = draft.to_payload()
    assert payload["startAt"] == "2024-12-06T15:30:00.000Z"
    assert payload["patientId"] == "p1"


def test_draft_merge_accepts_wire_keys_and_field_names():
    draft = PatientDraft().merged({"birthDate": "2000-01-01", "name": "Bo", "unrelated": "x"})
    assert draft.birth_date == "2000-01-01"
    assert draft.name == "Bo"
    assert draft.merged({"birth_date": "2001-02-02"}).birth_date == "2001-02-02"


def test_missing_fields():
    assert PatientDraft().missing_fields() == ["name", "birthDate", "email", "phone"]
    assert DoctorDraft(name="Dr. X", specialty=" ").missing_fields() == ["specialty"]
    full = AppointmentDraft(patient_id="p1", doctor_id="d1", start_at="2024-12-06T15:30", end_at="2024-12-06T16:00")
    assert full.missing_fields() == []


def test_doctor_parses_from_envelope():
    doctors = [Doctor.model_validate(r) for r in records_of(json.loads((FIX / "doctors_list.json").read_text()))]
    assert [d.name for d in doctors] == ["Dr. X", "Dr. Y"]


def test_null_text_fields_become_blank():
    doctor = Doctor.model_validate({"_id": "d2", "name": "Dr. Y", "specialty": None})
    assert doctor.specialty == ""
    patient = Patient.model_validate({"_id": "p3", "name": None, "email": None, "phone": None, "birthDate": None})
    assert (patient.name, patient.email, patient.phone) == ("", "", "")
    assert PatientDraft.from_record(patient) == PatientDraft()


def test_embedded_object_name_used_alongside_bare_id():
    appt = Appointment.model_validate(
        {"_id": "a1", "patientId": "p1", "patient": {"_id": "p1", "name": "Ada"}, "doctorId": "d1"}
    )
    assert appt.patient_id == "p1"
    assert appt.patient_label == "Ada"
    assert appt.doctor_label == "Unknown"


def test_embedded_object_under_join_key_only():
    appt = Appointment.model_validate({"_id": "a1", "doctor": {"_id": "d1", "name": "Dr. X"}})
    assert appt.doctor_id == "d1"
    assert appt.doctor_name == "Dr. X"


def test_drafts_build_from_their_own_records_only():
    assert hasattr(PatientDraft, "from_record")
    assert hasattr(AppointmentDraft, "from_record")
    assert not hasattr(Draft, "from_record")
