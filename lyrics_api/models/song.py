"""SQLAlchemy model for songs."""

from __future__ import annotations

from sqlalchemy import ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..db.session import Base
from .common import CreatedAtMixin


class SongModel(CreatedAtMixin, Base):
    """A song with its full lyrics and optional credits."""

    __tablename__ = "songs"
    __table_args__ = (
        Index("idx_songs_views", "views"),
        Index("idx_songs_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    title: Mapped[str] = mapped_column(String(300), nullable=False, index=True)
    slug: Mapped[str] = mapped_column(String(300), nullable=False, unique=True, index=True)
    lyrics: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str | None] = mapped_column(String(120), nullable=True, index=True)
    views: Mapped[int] = mapped_column(Integer, nullable=False, default=0, server_default="0")
    artist_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("artists.id", ondelete="SET NULL"), nullable=True, index=True
    )
    composer_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("composers.id", ondelete="SET NULL"), nullable=True, index=True
    )
    copyright_owner_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("copyright_owners.id", ondelete="SET NULL"), nullable=True, index=True
    )
