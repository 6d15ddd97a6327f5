"""Tests for the sample catalog seed."""

import asyncio

from lyrics_api.domain.pagination import PageParams
from lyrics_api.repositories.songs import SqlAlchemySongsRepository
from lyrics_api.seed import SAMPLE_SONGS, seed_catalog


def test_seed_loads_sample_catalog_once(db_engine, session_factory):
    inserted = asyncio.run(seed_catalog(db_engine))
    again = asyncio.run(seed_catalog(db_engine))

    async def read():
        async with session_factory() as session:
            songs = SqlAlchemySongsRepository(session)
            return (
                await songs.list_page(PageParams(page=1, limit=50)),
                await songs.categories(),
                await songs.get_by_slug("thla-thar-hla"),
            )

    page, categories, detail = asyncio.run(read())

    assert inserted == len(SAMPLE_SONGS)
    assert again == 0
    assert page.total == 5
    assert categories == ["Gospel", "Love", "Patriotic", "Traditional"]
    assert detail.artist_name == "Mara Choir"
    assert detail.composer_name == "Mara Composer"
    assert "\n" in detail.lyrics
