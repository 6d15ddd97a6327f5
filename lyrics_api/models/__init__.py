"""SQLAlchemy ORM models used by the API layer."""

from .people import ArtistModel, ComposerModel
from .copyright_owner import CopyrightOwnerModel
from .song import SongModel
from .report import ReportModel
from .contact import ContactMessageModel

__all__ = [
    "ArtistModel",
    "ComposerModel",
    "CopyrightOwnerModel",
    "SongModel",
    "ReportModel",
    "ContactMessageModel",
]
