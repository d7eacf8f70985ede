"""
Scaffolded CRUD demos.

Structure:
- config.py        : settings read from the environment / .env
- db.py            : Database (engine + sessions) shared by both apps
- errors.py        : error taxonomy mapped to HTTP statuses
- logging_setup.py : one logging format for apps and CLIs
- doctor_app/      : doctors, patients, appointments (JSON API)
- fruit_app/       : fruits, users, seasons (HTML pages)
"""
