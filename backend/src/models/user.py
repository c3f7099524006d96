"""User and address models for registered accounts."""
from datetime import date

from sqlalchemy import Date, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class User(Base):
    """Registered account. `password` only ever holds a bcrypt hash."""

    __tablename__ = "users"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(
        String(255),
        unique=True,
        index=True,
        comment="Lowercased, trimmed; unique across all users",
    )
    username: Mapped[str] = mapped_column(String(100))
    password: Mapped[str] = mapped_column(String(255), comment="bcrypt hash")
    creation_date: Mapped[date] = mapped_column(Date, default=date.today)


class Address(Base):
    """Postal address written in the same transaction as its user."""

    __tablename__ = "addresses"

    id: Mapped[int] = mapped_column(primary_key=True)
    email: Mapped[str] = mapped_column(
        ForeignKey("users.email", ondelete="CASCADE"),
        index=True,
    )
    country: Mapped[str] = mapped_column(String(100))
    city: Mapped[str | None] = mapped_column(String(100), nullable=True)
    street: Mapped[str | None] = mapped_column(String(255), nullable=True)
