"""SQLAlchemy models for artists and composers."""

from __future__ import annotations

from sqlalchemy import JSON, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..db.session import Base
from .common import CreatedAtMixin


class PersonColumnsMixin(CreatedAtMixin):
    """Columns shared by the artists and composers tables."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(200), nullable=False, index=True)
    slug: Mapped[str] = mapped_column(String(200), nullable=False, unique=True, index=True)
    bio: Mapped[str | None] = mapped_column(Text, nullable=True)
    image_url: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    # JSON-encoded list of profile URLs
    social_links: Mapped[list[str] | None] = mapped_column(JSON, nullable=True)


class ArtistModel(PersonColumnsMixin, Base):
    """Performing artist credited on songs."""

    __tablename__ = "artists"


class ComposerModel(PersonColumnsMixin, Base):
    """Songwriter or composer credited on songs."""

    __tablename__ = "composers"
