from __future__ import annotations

import logging

from sqlalchemy import select

from .db import db_session
from .models import Appointment, Doctor, Patient

logger = logging.getLogger(__name__)

DOCTORS = [
    ("John Doe", "Dentist"),
    ("Schmitty Footman", "Podiatrist"),
]

PATIENTS = ["Patient 1", "Patient 2"]

# (reason, doctor name, patient name)
APPOINTMENTS = [
    ("Teeth stuff", "John Doe", "Patient 1"),
    ("Foot stuff", "Schmitty Footman", "Patient 2"),
]


def _fixture_doctor(s, name: str, specialty: str) -> Doctor | None:
    # the earliest matching row is the fixture; later ones are user data
    return s.scalars(
        select(Doctor).where(Doctor.name == name, Doctor.specialty == specialty).order_by(Doctor.id)
    ).first()


def _fixture_patient(s, name: str) -> Patient | None:
    return s.scalars(select(Patient).where(Patient.name == name).order_by(Patient.id)).first()


def _fixture_appointment(s, reason: str, doctor_name: str, patient_name: str) -> Appointment | None:
    doctor = _fixture_doctor(s, doctor_name, dict(DOCTORS)[doctor_name])
    patient = _fixture_patient(s, patient_name)
    if doctor is None or patient is None:
        return None
    return s.scalars(
        select(Appointment)
        .where(
            Appointment.doctor_id == doctor.id,
            Appointment.patient_id == patient.id,
            Appointment.reason == reason,
        )
        .order_by(Appointment.id)
    ).first()


def seed_base() -> None:
    """
    Insert the demo rows (idempotent):
    - doctors
    - patients
    - appointments linking them
    """
    with db_session() as s:
        for name, specialty in DOCTORS:
            if _fixture_doctor(s, name, specialty) is None:
                s.add(Doctor(name=name, specialty=specialty))

        for name in PATIENTS:
            if _fixture_patient(s, name) is None:
                s.add(Patient(name=name))

        s.flush()

        for reason, doctor_name, patient_name in APPOINTMENTS:
            if _fixture_appointment(s, reason, doctor_name, patient_name) is None:
                doctor = _fixture_doctor(s, doctor_name, dict(DOCTORS)[doctor_name])
                patient = _fixture_patient(s, patient_name)
                s.add(Appointment(reason=reason, doctor_id=doctor.id, patient_id=patient.id))

    logger.info("doctor_app seed completed")


def unseed() -> None:
    """Remove the demo rows (appointments first, then the rows they reference)."""
    with db_session() as s:
        fixtures = [_fixture_appointment(s, *row) for row in APPOINTMENTS]
        fixtures += [_fixture_patient(s, name) for name in PATIENTS]
        fixtures += [_fixture_doctor(s, name, specialty) for name, specialty in DOCTORS]
        for row in fixtures:
            if row is not None:
                s.delete(row)
                s.flush()

    logger.info("doctor_app seed removed")
