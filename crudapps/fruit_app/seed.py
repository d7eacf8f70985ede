from __future__ import annotations

import logging

from sqlalchemy import delete, select

from .db import db_session
from .models import Fruit, Season, User

logger = logging.getLogger(__name__)

USERS = [
    ("Tony", "tony"),
    ("Jill", "jill"),
    ("Sam", "sam"),
]

# (name, color, ready to eat, owner username)
FRUITS = [
    ("apple", "red", True, "tony"),
    ("pear", "green", False, "jill"),
    ("banana", "yellow", True, "sam"),
]

SEASONS = ["Summer", "Winter", "Spring", "Autumn"]


def seed_users() -> None:
    with db_session() as s:
        for name, username in USERS:
            if s.execute(select(User).where(User.username == username)).scalar_one_or_none() is None:
                s.add(User(name=name, username=username))


def _owner_id(s, username: str) -> int | None:
    owner = s.execute(select(User).where(User.username == username)).scalar_one_or_none()
    return owner.id if owner else None


def _fixture_fruit(s, name: str, color: str, username: str) -> Fruit | None:
    # users may add fruits with the same name; the fixture is the earliest full match
    return s.scalars(
        select(Fruit)
        .where(Fruit.name == name, Fruit.color == color, Fruit.user_id == _owner_id(s, username))
        .order_by(Fruit.id)
    ).first()


def seed_fruits() -> None:
    with db_session() as s:
        for name, color, ready, username in FRUITS:
            if _fixture_fruit(s, name, color, username) is None:
                s.add(Fruit(name=name, color=color, ready_to_eat=ready, user_id=_owner_id(s, username)))


def seed_seasons() -> None:
    with db_session() as s:
        for name in SEASONS:
            if s.execute(select(Season).where(Season.name == name)).scalar_one_or_none() is None:
                s.add(Season(name=name))


def seed_base() -> None:
    """
    Insert the demo rows (idempotent), owners before the fruits that reference them:
    - users
    - fruits
    - seasons
    """
    seed_users()
    seed_fruits()
    seed_seasons()
    logger.info("fruit_app seed completed")


def unseed() -> None:
    """Remove the demo rows; season links go with their fruits."""
    with db_session() as s:
        for name, color, _, username in FRUITS:
            f = _fixture_fruit(s, name, color, username)
            if f is not None:
                s.delete(f)
        s.flush()
        s.execute(delete(Season).where(Season.name.in_(SEASONS)))
        s.execute(delete(User).where(User.username.in_([u for _, u in USERS])))

    logger.info("fruit_app seed removed")
