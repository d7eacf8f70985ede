"""
Doctor / patient / appointment booking demo (JSON API).

- db.py       : Database instance and ORM base
- models.py   : Doctor, Patient, Appointment (join row carrying a reason)
- services.py : queries and writes, returning JSON-ready dicts
- seed.py     : demo doctors, patients and appointments
- api_main.py : FastAPI app (`uvicorn crudapps.doctor_app.api_main:app`)
- client.py   : requests client for the dashboard
- cli.py      : migrations / seeders / listings from the shell
"""
