from __future__ import annotations

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ConfigDict, Field

from crudapps.config import SEED_ON_STARTUP
from crudapps.errors import AppError, ValidationError
from crudapps.logging_setup import configure_logging

from .seed import seed_base
from .services import (
    book_appointment,
    cancel_appointment,
    create_doctor,
    create_patient,
    get_doctor,
    get_patient,
    init_db,
    list_appointments,
    list_doctors,
    list_patients,
)

logger = logging.getLogger(__name__)

app = FastAPI(title="Doctor App API", version="1.0.0")



# Startup

@app.on_event("startup")
def startup() -> None:
    # Tables + demo rows (idempotent)
    configure_logging()
    init_db()
    if SEED_ON_STARTUP:
        seed_base()



# Error envelope

@app.exception_handler(AppError)
def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    err = ValidationError("Invalid request payload.", details=jsonable_encoder(exc.errors()))
    return JSONResponse(status_code=err.status_code, content=err.to_dict())


@app.exception_handler(Exception)
def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("%s %s failed", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"ok": False, "error": {"code": "server_error", "message": "Internal server error."}},
    )



# Schemas

class PatientCreateIn(BaseModel):
    name: str = Field(..., min_length=1)


class DoctorCreateIn(BaseModel):
    name: str = Field(..., min_length=1)
    specialty: str = Field(..., min_length=1)


class AppointmentCreateIn(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    reason: str = Field(..., min_length=1)
    doctor_id: int = Field(..., alias="doctorId")
    patient_id: int = Field(..., alias="patientId")



# Endpoints

@app.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/patients")
def api_patients() -> dict[str, Any]:
    return {"patients": list_patients()}


@app.get("/patients/{patient_id}")
def api_patient(patient_id: int) -> dict[str, Any]:
    return {"patient": get_patient(patient_id)}


@app.post("/patients", status_code=status.HTTP_201_CREATED)
def api_create_patient(payload: PatientCreateIn) -> dict[str, Any]:
    return {"patient": create_patient(payload.name)}


@app.get("/doctors")
def api_doctors() -> dict[str, Any]:
    return {"doctors": list_doctors()}


@app.get("/doctors/{doctor_id}")
def api_doctor(doctor_id: int) -> dict[str, Any]:
    return {"doctor": get_doctor(doctor_id)}


@app.post("/doctors", status_code=status.HTTP_201_CREATED)
def api_create_doctor(payload: DoctorCreateIn) -> dict[str, Any]:
    return {"doctor": create_doctor(payload.name, payload.specialty)}


@app.get("/appointments")
def api_appointments() -> dict[str, Any]:
    return {"appointments": list_appointments()}


@app.post("/appointments", status_code=status.HTTP_201_CREATED)
def api_book_appointment(payload: AppointmentCreateIn) -> dict[str, Any]:
    return {
        "appointment": book_appointment(
            doctor_id=payload.doctor_id,
            patient_id=payload.patient_id,
            reason=payload.reason,
        )
    }


@app.delete("/appointments/{appointment_id}")
def api_cancel_appointment(appointment_id: int) -> dict[str, Any]:
    cancel_appointment(appointment_id)
    return {"ok": True}
