def test_patients_envelope_includes_doctors(doctor_client):
    r = doctor_client.get("/patients")
    assert r.status_code == 200
    patients = r.json()["patients"]
    assert [p["name"] for p in patients] == ["Patient 1", "Patient 2"]

    first = patients[0]
    assert len(first["doctors"]) == 1
    doctor = first["doctors"][0]
    assert set(doctor) == {"name", "specialty", "appointment"}
    assert doctor["name"] == "John Doe"
    assert doctor["specialty"] == "Dentist"
    assert doctor["appointment"]["reason"] == "Teeth stuff"


def test_doctors_envelope_includes_patient_names(doctor_client):
    r = doctor_client.get("/doctors")
    assert r.status_code == 200
    doctors = {d["name"]: d for d in r.json()["doctors"]}
    assert set(doctors) == {"John Doe", "Schmitty Footman"}
    assert doctors["Schmitty Footman"]["specialty"] == "Podiatrist"
    assert [p["name"] for p in doctors["Schmitty Footman"]["patients"]] == ["Patient 2"]


def test_appointments_are_flat_join_rows(doctor_client):
    r = doctor_client.get("/appointments")
    assert r.status_code == 200
    appointments = r.json()["appointments"]
    assert len(appointments) == 2
    assert {"id", "reason", "doctorId", "patientId", "createdAt", "updatedAt"} <= set(appointments[0])


def test_get_patient_and_missing_patient(doctor_client):
    r = doctor_client.get("/patients/1")
    assert r.status_code == 200
    assert r.json()["patient"]["name"] == "Patient 1"

    r = doctor_client.get("/patients/999")
    assert r.status_code == 404
    body = r.json()
    assert body["ok"] is False
    assert body["error"]["code"] == "not_found"


def test_missing_doctor_is_not_found(doctor_client):
    r = doctor_client.get("/doctors/42")
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "not_found"


def test_create_patient(doctor_client):
    r = doctor_client.post("/patients", json={"name": "  Patient 3 "})
    assert r.status_code == 201
    assert r.json()["patient"]["name"] == "Patient 3"

    names = [p["name"] for p in doctor_client.get("/patients").json()["patients"]]
    assert "Patient 3" in names


def test_create_patient_rejects_blank_names(doctor_client):
    r = doctor_client.post("/patients", json={"name": "   "})
    assert r.status_code == 422
    assert r.json()["error"]["code"] == "validation_error"

    r = doctor_client.post("/patients", json={})
    assert r.status_code == 422
    assert r.json()["error"]["code"] == "validation_error"


def test_create_doctor(doctor_client):
    r = doctor_client.post("/doctors", json={"name": "Ann Heart", "specialty": "Cardiologist"})
    assert r.status_code == 201
    assert r.json()["doctor"]["specialty"] == "Cardiologist"


def test_book_appointment_links_doctor_and_patient(doctor_client):
    r = doctor_client.post("/appointments", json={"doctorId": 2, "patientId": 1, "reason": "Foot check"})
    assert r.status_code == 201
    appointment = r.json()["appointment"]
    assert appointment["doctorId"] == 2
    assert appointment["patientId"] == 1

    patient = doctor_client.get("/patients/1").json()["patient"]
    assert [d["name"] for d in patient["doctors"]] == ["John Doe", "Schmitty Footman"]


def test_book_appointment_with_unknown_rows(doctor_client):
    r = doctor_client.post("/appointments", json={"doctorId": 99, "patientId": 1, "reason": "x"})
    assert r.status_code == 404
    r = doctor_client.post("/appointments", json={"doctorId": 1, "patientId": 99, "reason": "x"})
    assert r.status_code == 404
    assert len(doctor_client.get("/appointments").json()["appointments"]) == 2


def test_cancel_appointment(doctor_client):
    r = doctor_client.delete("/appointments/1")
    assert r.status_code == 200
    assert r.json() == {"ok": True}
    assert [a["id"] for a in doctor_client.get("/appointments").json()["appointments"]] == [2]

    r = doctor_client.delete("/appointments/1")
    assert r.status_code == 404


def test_health(doctor_client):
    assert doctor_client.get("/health").json() == {"status": "ok"}
