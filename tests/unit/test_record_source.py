"""Tests for SqlRecordSource mapping and error translation (mocked AsyncSession)."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from app.domain.exceptions import SourceQueryFailedException
from app.infrastructure.persistence.models import Profile, SelectedTrack, TopArtist
from app.infrastructure.persistence.repositories.record_source import SqlRecordSource


def _session_returning(rows: list) -> AsyncMock:
    result = MagicMock()
    result.scalars.return_value.all.return_value = rows
    session = AsyncMock()
    session.execute.return_value = result
    return session


async def test_top_artists_mapped_to_results() -> None:
    rows = [TopArtist(user_id="u1", slot=1, name="ABBA", spotify_id="sp1", genres=["europop"])]
    source = SqlRecordSource(_session_returning(rows))

    artists = await source.query_top_artists("u1", 3)

    assert len(artists) == 1
    assert artists[0].slot == 1
    assert artists[0].name == "ABBA"
    assert artists[0].genres == ["europop"]


async def test_selected_tracks_mapped_to_results() -> None:
    rows = [SelectedTrack(user_id="u1", slot=2, name="Waterloo", artist="ABBA")]
    source = SqlRecordSource(_session_returning(rows))

    tracks = await source.query_selected_tracks("u1")

    assert [(t.slot, t.name, t.artist) for t in tracks] == [(2, "Waterloo", "ABBA")]


async def test_profile_absent_returns_none() -> None:
    source = SqlRecordSource(_session_returning([]))

    assert await source.query_profile("ghost") is None


async def test_profile_excludes_refresh_token() -> None:
    row = Profile(id="u1", username="dq", display_name="DQ", email="dq@example.com", refresh_token="rt")
    source = SqlRecordSource(_session_returning([row]))

    profile = await source.query_profile("u1")

    assert profile is not None
    assert profile.username == "dq"
    assert not hasattr(profile, "refresh_token")


async def test_stored_refresh_token() -> None:
    source = SqlRecordSource(_session_returning(["rt-stored"]))

    assert await source.get_stored_refresh_token("u1") == "rt-stored"


async def test_driver_error_becomes_source_query_failed() -> None:
    session = AsyncMock()
    session.execute.side_effect = OperationalError("SELECT 1", {}, Exception("connection lost"))
    source = SqlRecordSource(session)

    with pytest.raises(SourceQueryFailedException) as exc_info:
        await source.query_playlists("u1")

    assert exc_info.value.details == {"kind": "playlists", "user_id": "u1", "reason": "OperationalError"}
