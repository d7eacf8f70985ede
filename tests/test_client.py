import json

import pytest
import requests

from crudapps.doctor_app.client import DoctorApiClient, DoctorApiError


def _response(status_code, body, reason="OK"):
    r = requests.Response()
    r.status_code = status_code
    r.reason = reason
    r._content = json.dumps(body).encode()
    return r


class FakeSession:
    def __init__(self, response):
        self.response = response
        self.calls = []

    def get(self, url, **kwargs):
        self.calls.append(("GET", url, kwargs))
        return self.response

    def post(self, url, **kwargs):
        self.calls.append(("POST", url, kwargs))
        return self.response

    def delete(self, url, **kwargs):
        self.calls.append(("DELETE", url, kwargs))
        return self.response


def test_unwraps_envelope():
    session = FakeSession(_response(200, {"patients": [{"id": 1, "name": "Patient 1"}]}))
    client = DoctorApiClient("http://api.test/", session=session)
    assert client.patients() == [{"id": 1, "name": "Patient 1"}]
    assert session.calls[0][1] == "http://api.test/patients"


def test_book_appointment_sends_camel_case_payload():
    session = FakeSession(_response(201, {"appointment": {"id": 5}}))
    client = DoctorApiClient("http://api.test", session=session)
    assert client.book_appointment(1, 2, "Teeth")["id"] == 5
    method, url, kwargs = session.calls[0]
    assert (method, url) == ("POST", "http://api.test/appointments")
    assert kwargs["json"] == {"doctorId": 1, "patientId": 2, "reason": "Teeth"}


def test_error_envelope_raises():
    body = {"ok": False, "error": {"code": "not_found", "message": "Appointment 9 not found."}}
    session = FakeSession(_response(404, body, reason="Not Found"))
    client = DoctorApiClient("http://api.test", session=session)
    with pytest.raises(DoctorApiError) as exc:
        client.cancel_appointment(9)
    assert exc.value.status_code == 404
    assert exc.value.code == "not_found"
