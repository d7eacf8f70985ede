from __future__ import annotations

import logging
from datetime import datetime
from typing import Any, Mapping

from pydantic import BaseModel, Field, field_validator
from pydantic import ValidationError as PydanticValidationError
from sqlalchemy import select
from sqlalchemy.orm import selectinload

from crudapps.errors import NotFoundError, ValidationError

from .db import Base, database, db_session
from .models import Fruit, Season, SeasonFruit, User

logger = logging.getLogger(__name__)


# =========================
# Bootstrap DB
# =========================
def init_db() -> None:
    """Create tables if they do not exist (migration up)."""
    database.create_all(Base.metadata)
    logger.info("fruit_app tables ready on %s", database.url)


def drop_db() -> None:
    """Drop every table (migration down)."""
    database.drop_all(Base.metadata)
    logger.info("fruit_app tables dropped on %s", database.url)


# =========================
# Form input
# =========================
def coerce_ready_to_eat(value: Any) -> bool:
    """HTML checkboxes send "on" when ticked and nothing otherwise."""
    return value == "on"


class FruitForm(BaseModel):
    name: str = Field(..., min_length=1, max_length=80)
    color: str | None = Field(default=None, max_length=40)
    ready_to_eat: bool = False
    user_id: int | None = None

    @field_validator("name", "color", mode="before")
    @classmethod
    def _strip(cls, v: Any) -> Any:
        return v.strip() if isinstance(v, str) else v

    @field_validator("color")
    @classmethod
    def _blank_is_none(cls, v: str | None) -> str | None:
        return v or None


# form field name -> FruitForm attribute
_FORM_FIELDS = {"name": "name", "color": "color", "userId": "user_id"}
_ATTR_TO_FORM = {v: k for k, v in _FORM_FIELDS.items()}


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


def parse_fruit_form(form: Mapping[str, Any]) -> FruitForm:
    """
    Validate raw form fields (name, color, readyToEat, userId).
    Raises ValidationError with one message per offending form field.
    """
    raw = {
        "name": form.get("name") or "",
        "color": form.get("color"),
        "user_id": _blank_to_none(form.get("userId")),
        "ready_to_eat": coerce_ready_to_eat(form.get("readyToEat")),
    }
    try:
        return FruitForm(**raw)
    except PydanticValidationError as e:
        details = {}
        for err in e.errors():
            attr = str(err["loc"][0]) if err["loc"] else "form"
            details[_ATTR_TO_FORM.get(attr, attr)] = err["msg"]
        raise ValidationError("Invalid fruit data.", details=details) from e


def parse_season_id(value: Any) -> int | None:
    value = _blank_to_none(value)
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError("Invalid season.", details={"season": "must be a season id"}) from None


# =========================
# Serialisation helpers
# =========================
def _ts(value: datetime | None) -> str | None:
    return value.isoformat() if value else None


def _season_dict(season: Season) -> dict[str, Any]:
    return {"id": season.id, "name": season.name}


def _fruit_dict(f: Fruit, *, detail: bool = False) -> dict[str, Any]:
    data = {
        "id": f.id,
        "name": f.name,
        "color": f.color,
        "readyToEat": f.ready_to_eat,
        "userId": f.user_id,
        "createdAt": _ts(f.created_at),
        "updatedAt": _ts(f.updated_at),
    }
    if detail:
        # only the owner's name is exposed
        data["user"] = {"name": f.user.name} if f.user else None
        data["seasons"] = [_season_dict(s) for s in f.seasons]
    return data


def _get_fruit(s, fruit_id: int) -> Fruit:
    f = s.get(Fruit, fruit_id)
    if f is None:
        raise NotFoundError.for_entity("Fruit", fruit_id)
    return f


def _check_user(s, user_id: int | None) -> None:
    if user_id is not None and s.get(User, user_id) is None:
        raise NotFoundError.for_entity("User", user_id)


# =========================
# Queries
# =========================
def list_fruits() -> list[dict]:
    with db_session() as s:
        return [_fruit_dict(f) for f in s.scalars(select(Fruit).order_by(Fruit.id))]


def get_fruit(fruit_id: int) -> dict:
    with db_session() as s:
        f = s.scalars(
            select(Fruit)
            .options(selectinload(Fruit.user), selectinload(Fruit.seasons))
            .where(Fruit.id == fruit_id)
        ).first()
        if f is None:
            raise NotFoundError.for_entity("Fruit", fruit_id)
        return _fruit_dict(f, detail=True)


def list_seasons() -> list[dict]:
    with db_session() as s:
        return [_season_dict(season) for season in s.scalars(select(Season).order_by(Season.id))]


def list_users() -> list[dict]:
    with db_session() as s:
        return [
            {"id": u.id, "name": u.name, "username": u.username}
            for u in s.scalars(select(User).order_by(User.id))
        ]


def edit_context(fruit_id: int) -> dict[str, Any]:
    """Fruit being edited plus every season to pick from."""
    return {"fruit": get_fruit(fruit_id), "seasons": list_seasons()}


# =========================
# Writes
# =========================
def create_fruit(data: FruitForm) -> dict:
    with db_session() as s:
        _check_user(s, data.user_id)
        f = Fruit(name=data.name, color=data.color, ready_to_eat=data.ready_to_eat, user_id=data.user_id)
        s.add(f)
        s.flush()
        logger.info("Created fruit %s (%s)", f.id, f.name)
        return _fruit_dict(f)


def update_fruit(fruit_id: int, data: FruitForm, season_id: int | None = None) -> dict:
    """
    Update a fruit's columns and, when season_id is given, attach that season.
    Attaching an already linked season is a no-op.
    """
    with db_session() as s:
        f = _get_fruit(s, fruit_id)

        f.name = data.name
        f.color = data.color
        f.ready_to_eat = data.ready_to_eat
        if data.user_id is not None:
            _check_user(s, data.user_id)
            f.user_id = data.user_id

        if season_id is not None:
            _link_season(s, f, season_id)

        s.flush()
        logger.info("Updated fruit %s", f.id)
        return _fruit_dict(f)


def add_season(fruit_id: int, season_id: int) -> bool:
    """Attach a season to a fruit; returns False if it was already attached."""
    with db_session() as s:
        f = _get_fruit(s, fruit_id)
        return _link_season(s, f, season_id)


def _link_season(s, f: Fruit, season_id: int) -> bool:
    season = s.get(Season, season_id)
    if season is None:
        raise NotFoundError.for_entity("Season", season_id)

    exists = s.execute(
        select(SeasonFruit.id).where(SeasonFruit.fruit_id == f.id, SeasonFruit.season_id == season.id)
    ).first()
    if exists is not None:
        return False

    s.add(SeasonFruit(fruit_id=f.id, season_id=season.id))
    logger.info("Linked fruit %s to season %s", f.id, season.name)
    return True


def delete_fruit(fruit_id: int) -> None:
    with db_session() as s:
        f = _get_fruit(s, fruit_id)
        s.delete(f)
        logger.info("Deleted fruit %s", fruit_id)
