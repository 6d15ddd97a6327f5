from datetime import datetime, timezone

from sqlalchemy import DateTime
from sqlalchemy.orm import Mapped, mapped_column


def utcnow() -> datetime:
    """Naive UTC timestamp, matching the timezone-less DateTime columns."""

    return datetime.now(timezone.utc).replace(tzinfo=None)


class CreatedAtMixin:
    """Immutable creation timestamp shared by every catalog table."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=False), default=utcnow, nullable=False
    )
