"""
Seed script for creating the catalog tables and loading sample data.

Run with:
  python -m lyrics_api.seed
  lyrics-api-seed --database-url sqlite+aiosqlite:///./lyrics.db
"""

from __future__ import annotations

import argparse
import asyncio
from typing import Sequence

import structlog
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker

from .core.config import get_settings
from .core.logging import configure_logging
from .db.session import build_engine, init_db
from .domain.people import PersonPayload
from .domain.songs import SongPayload
from .models.song import SongModel
from .repositories.people import SqlAlchemyArtistsRepository, SqlAlchemyComposersRepository
from .repositories.songs import SqlAlchemySongsRepository
from .services.slug import generate_slug

logger = structlog.get_logger(__name__)

SAMPLE_ARTISTS = [
    ("Mara Artist", "A renowned Mara vocalist known for traditional melodies."),
    ("Mara Singer", "A gifted singer from the Mara community."),
    ("Mara Choir", "An acclaimed Mara choral group performing hymns and patriotic songs."),
    ("Traditional Singers", "A collective preserving Mara traditional music."),
    ("Youth Choir", "A vibrant youth choir from the Mara community."),
]

SAMPLE_COMPOSERS = [
    ("Mara Composer", "A prolific composer of Mara traditional and contemporary songs."),
]

# (title, category, artist index, composer index or None, lyrics)
SAMPLE_SONGS = [
    (
        "Mara Hlasak",
        "Traditional",
        0,
        0,
        "Line 1 of Mara Hlasak lyrics...\nLine 2 of the song...\nLine 3 continues here...\n\n"
        "Verse 2:\nMore lyrics follow...\nBeautiful melody...",
    ),
    (
        "Ka Lunglen",
        "Love",
        1,
        None,
        "Ka lunglen a nasa e...\nHeartfelt words flow...\nMelody of the hills...\n\n"
        "Chorus:\nSinging together...\nVoices of Mara...",
    ),
    (
        "Thla Thar Hla",
        "Patriotic",
        2,
        0,
        "Thla thar a lo thleng ta...\nNew season dawns...\nGratitude fills the heart...\n\n"
        "Verse 2:\nJoyful celebration...\nTogether we sing...",
    ),
    (
        "Mara Ram Hla",
        "Traditional",
        3,
        None,
        "Mara ram chu a ngai...\nOur homeland forever...\nMountains and valleys...\n\n"
        "Chorus:\nMara ram, Mara ram...\nBeautiful land of ours...",
    ),
    (
        "Rawl Tha Ei",
        "Gospel",
        4,
        0,
        "Rawl tha ei a that e...\nGoodness overflows...\nBlessing upon blessing...\n\n"
        "Bridge:\nForever grateful...\nSongs of praise...",
    ),
]


async def seed_catalog(engine: AsyncEngine) -> int:
    """Create tables and load the sample catalog if no songs exist yet.

    Returns the number of songs inserted (0 when the catalog was not empty).
    """

    await init_db(engine)
    session_factory = async_sessionmaker(engine, expire_on_commit=False)
    async with session_factory() as session:
        existing = (await session.execute(select(func.count()).select_from(SongModel))).scalar_one()
        if existing:
            logger.info("seed.skipped", existing_songs=existing)
            return 0

        artists = SqlAlchemyArtistsRepository(session)
        composers = SqlAlchemyComposersRepository(session)
        songs = SqlAlchemySongsRepository(session)

        artist_ids = [
            await artists.create(PersonPayload(name=name, bio=bio), slug=generate_slug(name))
            for name, bio in SAMPLE_ARTISTS
        ]
        composer_ids = [
            await composers.create(PersonPayload(name=name, bio=bio), slug=generate_slug(name))
            for name, bio in SAMPLE_COMPOSERS
        ]
        for title, category, artist_index, composer_index, lyrics in SAMPLE_SONGS:
            payload = SongPayload(
                title=title,
                lyrics=lyrics,
                category=category,
                artist_id=artist_ids[artist_index],
                composer_id=composer_ids[composer_index] if composer_index is not None else None,
            )
            await songs.create(payload, slug=generate_slug(title))

    logger.info(
        "seed.completed",
        artists=len(artist_ids),
        composers=len(composer_ids),
        songs=len(SAMPLE_SONGS),
    )
    return len(SAMPLE_SONGS)


async def _run(database_url: str) -> int:
    engine = build_engine(database_url)
    try:
        return await seed_catalog(engine)
    finally:
        await engine.dispose()


def main(argv: Sequence[str] | None = None) -> None:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Create catalog tables and load sample songs")
    parser.add_argument(
        "--database-url",
        type=str,
        default=settings.database_url,
        help="Async SQLAlchemy URL (defaults to DATABASE_URL)",
    )
    args = parser.parse_args(argv)

    configure_logging(settings)
    asyncio.run(_run(args.database_url))


if __name__ == "__main__":
    main()
