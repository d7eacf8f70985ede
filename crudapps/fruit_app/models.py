from __future__ import annotations

from sqlalchemy import Boolean, ForeignKey, Integer, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from crudapps.db import TimestampMixin

from .db import Base


class User(TimestampMixin, Base):
    __tablename__ = "users"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(80), nullable=False)
    username: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)

    fruits: Mapped[list["Fruit"]] = relationship(back_populates="user")

    def __repr__(self) -> str:
        return f"User({self.username})"


class Fruit(TimestampMixin, Base):
    __tablename__ = "fruits"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(80), nullable=False)
    color: Mapped[str | None] = mapped_column(String(40), nullable=True)
    ready_to_eat: Mapped[bool] = mapped_column(Boolean, default=False, nullable=False)
    user_id: Mapped[int | None] = mapped_column(ForeignKey("users.id", ondelete="SET NULL"), nullable=True)

    user: Mapped[User | None] = relationship(back_populates="fruits")
    season_links: Mapped[list["SeasonFruit"]] = relationship(back_populates="fruit", cascade="all, delete-orphan")
    seasons: Mapped[list["Season"]] = relationship(
        secondary="season_fruits", back_populates="fruits", viewonly=True, order_by="Season.id"
    )

    def __repr__(self) -> str:
        return f"Fruit({self.name}, {self.color})"


class Season(TimestampMixin, Base):
    __tablename__ = "seasons"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(40), unique=True, nullable=False)

    fruit_links: Mapped[list["SeasonFruit"]] = relationship(back_populates="season", cascade="all, delete-orphan")
    fruits: Mapped[list["Fruit"]] = relationship(
        secondary="season_fruits", back_populates="seasons", viewonly=True, order_by="Fruit.id"
    )


class SeasonFruit(TimestampMixin, Base):
    __tablename__ = "season_fruits"
    __table_args__ = (
        # one link per (fruit, season) pair
        UniqueConstraint("fruit_id", "season_id", name="uq_season_fruit"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    fruit_id: Mapped[int] = mapped_column(ForeignKey("fruits.id", ondelete="CASCADE"), nullable=False)
    season_id: Mapped[int] = mapped_column(ForeignKey("seasons.id", ondelete="CASCADE"), nullable=False)

    fruit: Mapped["Fruit"] = relationship(back_populates="season_links")
    season: Mapped["Season"] = relationship(back_populates="fruit_links")
