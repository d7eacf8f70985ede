from __future__ import annotations

import argparse

from crudapps.errors import AppError
from crudapps.logging_setup import configure_logging

from .db import database
from .seed import seed_base, unseed
from .services import add_season, drop_db, get_fruit, init_db, list_fruits, list_seasons, list_users


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
    if args.entity == "fruits":
        for f in list_fruits():
            ready = "ready" if f["readyToEat"] else "not ready"
            print(f"{f['id']} | {f['name']} | {f['color'] or '-'} | {ready}")
    elif args.entity == "seasons":
        for s in list_seasons():
            print(f"{s['id']} | {s['name']}")
    elif args.entity == "users":
        for u in list_users():
            print(f"{u['id']} | {u['name']} | {u['username']}")


def cmd_link_season(args: argparse.Namespace) -> None:
    added = add_season(args.fruit_id, args.season_id)
    seasons = ", ".join(s["name"] for s in get_fruit(args.fruit_id)["seasons"])
    print(("Linked." if added else "Already linked.") + f" Seasons: {seasons}")


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="fruit_app", description="Fruit app: migrations, seed data and listings")
    p.add_argument("--database-url", default=None, help="Override FRUIT_DATABASE_URL")
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
    p_list.add_argument("entity", choices=["fruits", "seasons", "users"])
    p_list.set_defaults(func=cmd_list)

    p_link = sub.add_parser("link-season", help="Attach a season to a fruit")
    p_link.add_argument("--fruit-id", type=int, required=True)
    p_link.add_argument("--season-id", type=int, required=True)
    p_link.set_defaults(func=cmd_link_season)

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
