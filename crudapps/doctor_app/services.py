from __future__ import annotations

import logging
from datetime import datetime
from typing import Any

from sqlalchemy import select
from sqlalchemy.orm import selectinload

from crudapps.errors import NotFoundError, ValidationError

from .db import Base, database, db_session
from .models import Appointment, Doctor, Patient

logger = logging.getLogger(__name__)


# =========================
# Bootstrap DB
# =========================
def init_db() -> None:
    """Create tables if they do not exist (migration up)."""
    database.create_all(Base.metadata)
    logger.info("doctor_app tables ready on %s", database.url)


def drop_db() -> None:
    """Drop every table (migration down)."""
    database.drop_all(Base.metadata)
    logger.info("doctor_app tables dropped on %s", database.url)


# =========================
# Serialisation helpers
# =========================
def _ts(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _appointment_dict(a: Appointment) -> dict[str, Any]:
    return {
        "id": a.id,
        "reason": a.reason,
        "doctorId": a.doctor_id,
        "patientId": a.patient_id,
        "createdAt": _ts(a.created_at),
        "updatedAt": _ts(a.updated_at),
    }


def _patient_dict(p: Patient) -> dict[str, Any]:
    # one entry per appointment: the join row travels with the doctor
    return {
        "id": p.id,
        "name": p.name,
        "createdAt": _ts(p.created_at),
        "updatedAt": _ts(p.updated_at),
        "doctors": [
            {
                "name": a.doctor.name,
                "specialty": a.doctor.specialty,
                "appointment": _appointment_dict(a),
            }
            for a in p.appointments
        ],
    }


def _doctor_dict(d: Doctor) -> dict[str, Any]:
    return {
        "id": d.id,
        "name": d.name,
        "specialty": d.specialty,
        "createdAt": _ts(d.created_at),
        "updatedAt": _ts(d.updated_at),
        "patients": [
            {"name": a.patient.name, "appointment": _appointment_dict(a)}
            for a in d.appointments
        ],
    }


def _require_text(value: str | None, field: str) -> str:
    cleaned = (value or "").strip()
    if not cleaned:
        raise ValidationError(f"{field} is required.", details={field: "must not be blank"})
    return cleaned


# =========================
# Queries
# =========================
def _patients_query():
    return (
        select(Patient)
        .options(selectinload(Patient.appointments).selectinload(Appointment.doctor))
        .order_by(Patient.id)
    )


def _doctors_query():
    return (
        select(Doctor)
        .options(selectinload(Doctor.appointments).selectinload(Appointment.patient))
        .order_by(Doctor.id)
    )


def list_patients() -> list[dict]:
    with db_session() as s:
        return [_patient_dict(p) for p in s.scalars(_patients_query())]


def list_doctors() -> list[dict]:
    with db_session() as s:
        return [_doctor_dict(d) for d in s.scalars(_doctors_query())]


def list_appointments() -> list[dict]:
    with db_session() as s:
        return [_appointment_dict(a) for a in s.scalars(select(Appointment).order_by(Appointment.id))]


def get_patient(patient_id: int) -> dict:
    with db_session() as s:
        p = s.scalars(_patients_query().where(Patient.id == patient_id)).first()
        if p is None:
            raise NotFoundError.for_entity("Patient", patient_id)
        return _patient_dict(p)


def get_doctor(doctor_id: int) -> dict:
    with db_session() as s:
        d = s.scalars(_doctors_query().where(Doctor.id == doctor_id)).first()
        if d is None:
            raise NotFoundError.for_entity("Doctor", doctor_id)
        return _doctor_dict(d)


def doctors_with_patients() -> list[dict]:
    """Doctors and the distinct names of the patients they see, through the join table."""
    with db_session() as s:
        doctors = s.scalars(select(Doctor).options(selectinload(Doctor.patients)).order_by(Doctor.id)).all()
        return [
            {
                "id": d.id,
                "name": d.name,
                "specialty": d.specialty,
                "patients": list(dict.fromkeys(p.name for p in d.patients)),
            }
            for d in doctors
        ]


# =========================
# Writes
# =========================
def create_patient(name: str) -> dict:
    name = _require_text(name, "name")
    with db_session() as s:
        p = Patient(name=name)
        s.add(p)
        s.flush()
        logger.info("Created patient %s (%s)", p.id, p.name)
        return {"id": p.id, "name": p.name, "createdAt": _ts(p.created_at), "updatedAt": _ts(p.updated_at)}


def create_doctor(name: str, specialty: str) -> dict:
    name = _require_text(name, "name")
    specialty = _require_text(specialty, "specialty")
    with db_session() as s:
        d = Doctor(name=name, specialty=specialty)
        s.add(d)
        s.flush()
        logger.info("Created doctor %s (%s, %s)", d.id, d.name, d.specialty)
        return {
            "id": d.id,
            "name": d.name,
            "specialty": d.specialty,
            "createdAt": _ts(d.created_at),
            "updatedAt": _ts(d.updated_at),
        }


def book_appointment(doctor_id: int, patient_id: int, reason: str) -> dict:
    """
    Book an appointment between an existing doctor and an existing patient.
    - both rows must exist (NotFoundError)
    - reason must not be blank (ValidationError)
    """
    reason = _require_text(reason, "reason")
    with db_session() as s:
        if s.get(Doctor, doctor_id) is None:
            raise NotFoundError.for_entity("Doctor", doctor_id)
        if s.get(Patient, patient_id) is None:
            raise NotFoundError.for_entity("Patient", patient_id)

        a = Appointment(doctor_id=doctor_id, patient_id=patient_id, reason=reason)
        s.add(a)
        s.flush()
        logger.info("Booked appointment %s: doctor %s / patient %s", a.id, doctor_id, patient_id)
        return _appointment_dict(a)


def cancel_appointment(appointment_id: int) -> None:
    with db_session() as s:
        a = s.get(Appointment, appointment_id)
        if a is None:
            raise NotFoundError.for_entity("Appointment", appointment_id)
        s.delete(a)
        logger.info("Cancelled appointment %s", appointment_id)
