"""Shared fixtures for tastematch tests."""

import pytest

from tastematch.recommend import RecommendationEngine


def _track(track_id, name, artist, popularity=0, genres=None):
    artist_obj = {"name": artist}
    if genres is not None:
        artist_obj["genres"] = genres
    return {"id": track_id, "name": name, "artists": [artist_obj], "popularity": popularity}


@pytest.fixture
def make_track():
    """Factory for raw track objects shaped like the music service's."""
    return _track


@pytest.fixture
def night_drive_tracks() -> list[dict]:
    return [
        _track("T1", "Night Drive", "DJ Nova", 50),
        _track("T2", "Night Ride", "DJ Nova", 55),
        _track("T3", "Sunny Day", "Beach Co", 20),
    ]


@pytest.fixture
def engine(night_drive_tracks) -> RecommendationEngine:
    e = RecommendationEngine()
    e.train(night_drive_tracks)
    return e
