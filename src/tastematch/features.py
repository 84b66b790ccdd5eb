"""Turn raw track objects into comparable feature records."""

import math
import re
from collections.abc import Mapping, Sequence
from numbers import Real
from typing import Any

from tastematch.errors import MalformedTrack
from tastematch.models import RawTrack, TrackFeatures

# Runs of letters and digits; underscores count as boundaries.
_WORD_RE = re.compile(r"[^\W_]+")


def tokenize(text: str | None) -> list[str]:
    """Lowercase ``text`` and split it into alphanumeric word tokens."""
    return _WORD_RE.findall((text or "").lower())


def coerce_popularity(value: Any) -> float:
    """Return ``value`` as a float, or 0.0 when it is missing, not a number or not finite."""
    if isinstance(value, bool) or not isinstance(value, Real):
        return 0.0
    value = float(value)
    if not math.isfinite(value):
        return 0.0
    return value


def _primary_artist(raw: RawTrack, track_id: str) -> Mapping[str, Any]:
    artists = raw.get("artists")
    if isinstance(artists, (str, bytes)) or not isinstance(artists, Sequence) or not artists:
        raise MalformedTrack("no artists", track_id)
    first = artists[0]
    if not isinstance(first, Mapping):
        raise MalformedTrack("primary artist is not an object", track_id)
    name = first.get("name")
    if not isinstance(name, str) or not name.strip():
        raise MalformedTrack("primary artist has no name", track_id)
    return first


def extract(raw: RawTrack) -> TrackFeatures:
    """Extract features from a single raw track.

    Raises MalformedTrack when the id, the name or the primary artist's
    name is missing or empty. The input is never modified.
    """
    if not isinstance(raw, Mapping):
        raise MalformedTrack(f"expected a mapping, got {type(raw).__name__}")

    track_id = raw.get("id")
    if not isinstance(track_id, str) or not track_id:
        raise MalformedTrack("missing id", track_id)

    title = raw.get("name")
    if not isinstance(title, str) or not title.strip():
        raise MalformedTrack("missing name", track_id)

    artist = _primary_artist(raw, track_id)
    artist_name = artist["name"]

    genres = artist.get("genres") or []
    if isinstance(genres, str):
        genres = [genres]
    elif not isinstance(genres, (list, tuple, set, frozenset)):
        genres = []

    return TrackFeatures(
        id=track_id,
        name=title.strip().lower(),
        artist=artist_name.strip().lower(),
        popularity=coerce_popularity(raw.get("popularity")),
        tokens=frozenset(tokenize(title)) | frozenset(tokenize(artist_name)),
        genres=frozenset(g for g in genres if isinstance(g, str)),
        title=title,
        artist_name=artist_name,
    )
