from __future__ import annotations

import streamlit as st

from crudapps.config import DOCTOR_API_BASE
from crudapps.doctor_app.client import DoctorApiClient, DoctorApiError

st.set_page_config(page_title="Doctor App", layout="wide")

client = DoctorApiClient(DOCTOR_API_BASE)



# Sidebar

with st.sidebar:
    st.header("Doctor App")
    if st.button("Refresh", key="refresh_btn"):
        st.cache_data.clear()
        st.rerun()
    st.divider()
    st.caption(f"API: {DOCTOR_API_BASE}")



# Data (short cache, the API is the source of truth)

@st.cache_data(ttl=10)
def load_doctors() -> list[dict]:
    return client.doctors()


@st.cache_data(ttl=10)
def load_patients() -> list[dict]:
    return client.patients()


@st.cache_data(ttl=10)
def load_appointments() -> list[dict]:
    return client.appointments()


st.title("Doctors, patients and appointments")

try:
    doctors = load_doctors()
    patients = load_patients()
except Exception as e:
    st.error(f"API unreachable or failing: {e}")
    st.stop()

tab1, tab2, tab3 = st.tabs(["Doctors", "Patients", "Appointments"])



# TAB 1 - Doctors

with tab1:
    st.subheader("Doctors")
    if not doctors:
        st.info("No doctors yet.")
    for d in doctors:
        seen = ", ".join(p["name"] for p in d["patients"]) or "-"
        st.write(f"- **{d['name']}** ({d['specialty']}) | patients: {seen}")



# TAB 2 - Patients

with tab2:
    st.subheader("Patients")

    with st.expander("New patient"):
        name = st.text_input("Name", key="pat_name")
        if st.button("Create patient", key="pat_submit"):
            if not name.strip():
                st.error("Name is required.")
            else:
                try:
                    p = client.create_patient(name.strip())
                    st.success(f"Patient created: {p['id']}")
                    st.cache_data.clear()
                except DoctorApiError as e:
                    st.error(e.message)

    if not patients:
        st.info("No patients yet.")
    for p in patients:
        seen_by = ", ".join(f"{d['name']} ({d['appointment']['reason']})" for d in p["doctors"]) or "-"
        st.write(f"- **{p['name']}** | {seen_by}")



# TAB 3 - Appointments

with tab3:
    st.subheader("Book an appointment")

    if not doctors or not patients:
        st.info("At least one doctor and one patient are needed.")
    else:
        c1, c2 = st.columns(2)
        doctor = c1.selectbox(
            "Doctor",
            options=doctors,
            format_func=lambda d: f"{d['name']} ({d['specialty']})",
            key="app_doctor",
        )
        patient = c2.selectbox(
            "Patient",
            options=patients,
            format_func=lambda p: p["name"],
            key="app_patient",
        )
        reason = st.text_input("Reason", key="app_reason")

        if st.button("Book", key="app_submit"):
            try:
                a = client.book_appointment(doctor["id"], patient["id"], reason.strip())
                st.success(f"Appointment booked (ID: {a['id']}).")
                st.cache_data.clear()
            except DoctorApiError as e:
                st.error(e.message)

    st.divider()
    st.write("All appointments:")

    try:
        appointments = load_appointments()
    except DoctorApiError as e:
        st.error(e.message)
        appointments = []

    names = {p["id"]: p["name"] for p in patients}
    doctor_names = {d["id"]: d["name"] for d in doctors}
    for a in appointments:
        c1, c2 = st.columns([5, 1])
        c1.write(
            f"[{a['id']}] **{a['reason']}** | "
            f"{doctor_names.get(a['doctorId'], a['doctorId'])} / {names.get(a['patientId'], a['patientId'])}"
        )
        if c2.button("Cancel", key=f"cancel_{a['id']}"):
            try:
                client.cancel_appointment(a["id"])
                st.cache_data.clear()
                st.rerun()
            except DoctorApiError as e:
                st.error(e.message)
