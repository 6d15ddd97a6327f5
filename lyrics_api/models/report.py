"""SQLAlchemy model for moderation reports."""

from __future__ import annotations

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from ..db.session import Base
from ..domain.reports import ReportStatus
from .common import CreatedAtMixin


class ReportModel(CreatedAtMixin, Base):
    """A user report about a song, stored as a snapshot of submission-time data."""

    __tablename__ = "reports"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Plain columns, not foreign keys: later song edits must not rewrite history.
    song_id: Mapped[int | None] = mapped_column(Integer, nullable=True)
    song_slug: Mapped[str | None] = mapped_column(String(300), nullable=True)
    song_title: Mapped[str | None] = mapped_column(String(300), nullable=True)
    song_artist: Mapped[str | None] = mapped_column(String(200), nullable=True)
    reporter_name: Mapped[str] = mapped_column(String(160), nullable=False)
    reporter_email: Mapped[str] = mapped_column(String(255), nullable=False)
    message: Mapped[str] = mapped_column(Text, nullable=False)
    status: Mapped[str] = mapped_column(
        String(32), nullable=False, default=ReportStatus.PENDING.value, index=True
    )
