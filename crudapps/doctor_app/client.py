from __future__ import annotations

from typing import Any

import requests

from crudapps.config import DOCTOR_API_BASE


class DoctorApiError(RuntimeError):
    """Error envelope returned by the doctor API ({"ok": false, "error": {...}})."""

    def __init__(self, status_code: int, code: str, message: str) -> None:
        super().__init__(f"{status_code} {code}: {message}")
        self.status_code = status_code
        self.code = code
        self.message = message


class DoctorApiClient:
    """Thin requests wrapper used by the Streamlit dashboard."""

    def __init__(self, base_url: str = DOCTOR_API_BASE, timeout: float = 10, session: requests.Session | None = None) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _handle(self, r: requests.Response) -> Any:
        if r.status_code >= 400:
            try:
                error = r.json().get("error") or {}
            except ValueError:
                error = {}
            raise DoctorApiError(r.status_code, error.get("code", "http_error"), error.get("message", r.reason or ""))
        return r.json()

    def get(self, path: str, params: dict | None = None) -> Any:
        r = self.session.get(f"{self.base_url}{path}", params=params, timeout=self.timeout)
        return self._handle(r)

    def post(self, path: str, payload: dict) -> Any:
        r = self.session.post(f"{self.base_url}{path}", json=payload, timeout=self.timeout)
        return self._handle(r)

    def delete(self, path: str) -> Any:
        r = self.session.delete(f"{self.base_url}{path}", timeout=self.timeout)
        return self._handle(r)

    # --- endpoints

    def patients(self) -> list[dict]:
        return self.get("/patients")["patients"]

    def doctors(self) -> list[dict]:
        return self.get("/doctors")["doctors"]

    def appointments(self) -> list[dict]:
        return self.get("/appointments")["appointments"]

    def create_patient(self, name: str) -> dict:
        return self.post("/patients", {"name": name})["patient"]

    def book_appointment(self, doctor_id: int, patient_id: int, reason: str) -> dict:
        payload = {"doctorId": doctor_id, "patientId": patient_id, "reason": reason}
        return self.post("/appointments", payload)["appointment"]

    def cancel_appointment(self, appointment_id: int) -> None:
        self.delete(f"/appointments/{appointment_id}")
