"""SQLAlchemy model for copyright owners."""

from __future__ import annotations

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..db.session import Base
from .common import CreatedAtMixin


class CopyrightOwnerModel(CreatedAtMixin, Base):
    """Rights holder (publisher, label or individual) credited on songs."""

    __tablename__ = "copyright_owners"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    slug: Mapped[str] = mapped_column(String(200), nullable=False, unique=True, index=True)
    legal_name: Mapped[str | None] = mapped_column(String(300), nullable=True)
    organization: Mapped[str | None] = mapped_column(String(300), nullable=True)
    territory: Mapped[str | None] = mapped_column(String(200), nullable=True)
    email: Mapped[str | None] = mapped_column(String(255), nullable=True)
    website: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    address: Mapped[str | None] = mapped_column(Text, nullable=True)
    registration_id: Mapped[str | None] = mapped_column(String(120), nullable=True)
    ipi_number: Mapped[str | None] = mapped_column(String(64), nullable=True)
    affiliation: Mapped[str | None] = mapped_column(String(200), nullable=True)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)
