from __future__ import annotations

import argparse

from crudapps.errors import AppError
from crudapps.logging_setup import configure_logging

from .db import database
from .seed import seed_base, unseed
from .services import (
    book_appointment,
    cancel_appointment,
    create_patient,
    doctors_with_patients,
    drop_db,
    init_db,
    list_appointments,
    list_patients,
)


def cmd_init(args: argparse.Namespace) -> None:
    init_db()
    if not args.no_seed:
        seed_base()
    print("DB initialised." if args.no_seed else "DB initialised and seeded.")


def cmd_drop(args: argparse.Namespace) -> None:
    drop_db()
    print("Tables dropped.")


def cmd_seed(args: argparse.Namespace) -> None:
    seed_base()
    print("Seed completed.")


def cmd_unseed(args: argparse.Namespace) -> None:
    unseed()
    print("Seed rows removed.")


def cmd_list(args: argparse.Namespace) -> None:
    if args.entity == "doctors":
        for d in doctors_with_patients():
            patients = ", ".join(d["patients"]) or "-"
            print(f"{d['id']} | {d['name']} | {d['specialty']} | patients: {patients}")
    elif args.entity == "patients":
        for p in list_patients():
            doctors = ", ".join(doc["name"] for doc in p["doctors"]) or "-"
            print(f"{p['id']} | {p['name']} | doctors: {doctors}")
    elif args.entity == "appointments":
        for a in list_appointments():
            print(f"{a['id']} | doctor {a['doctorId']} | patient {a['patientId']} | {a['reason']}")


def cmd_add_patient(args: argparse.Namespace) -> None:
    p = create_patient(args.name)
    print(f"Patient created: {p['id']}")


def cmd_book(args: argparse.Namespace) -> None:
    a = book_appointment(doctor_id=args.doctor_id, patient_id=args.patient_id, reason=args.reason)
    print(f"Appointment booked: {a['id']}")


def cmd_cancel(args: argparse.Namespace) -> None:
    cancel_appointment(args.appointment_id)
    print("Cancelled.")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="doctor_app", description="Doctor app: migrations, seed data and listings")
    p.add_argument("--database-url", default=None, help="Override DOCTOR_DATABASE_URL")
    sub = p.add_subparsers(required=True)

    p_init = sub.add_parser("init", help="Create tables and load seed rows")
    p_init.add_argument("--no-seed", action="store_true", help="Only create tables")
    p_init.set_defaults(func=cmd_init)

    p_drop = sub.add_parser("drop", help="Drop every table")
    p_drop.set_defaults(func=cmd_drop)

    p_seed = sub.add_parser("seed", help="Insert seed rows (idempotent)")
    p_seed.set_defaults(func=cmd_seed)

    p_unseed = sub.add_parser("unseed", help="Remove seed rows")
    p_unseed.set_defaults(func=cmd_unseed)

    p_list = sub.add_parser("list", help="List entities")
    p_list.add_argument("entity", choices=["doctors", "patients", "appointments"])
    p_list.set_defaults(func=cmd_list)

    p_addp = sub.add_parser("add-patient", help="Create a patient")
    p_addp.add_argument("--name", required=True)
    p_addp.set_defaults(func=cmd_add_patient)

    p_book = sub.add_parser("book", help="Book an appointment")
    p_book.add_argument("--doctor-id", type=int, required=True)
    p_book.add_argument("--patient-id", type=int, required=True)
    p_book.add_argument("--reason", required=True)
    p_book.set_defaults(func=cmd_book)

    p_cancel = sub.add_parser("cancel", help="Cancel an appointment")
    p_cancel.add_argument("--appointment-id", type=int, required=True)
    p_cancel.set_defaults(func=cmd_cancel)

    return p


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging()
    if args.database_url:
        database.configure(args.database_url)
    if args.func not in (cmd_init, cmd_drop):
        init_db()  # tables must exist for every other command
    try:
        args.func(args)
    except AppError as e:
        print(f"Error: {e.message}")
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
