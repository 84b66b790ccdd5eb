"""Load raw track objects from music-service JSON exports."""

import json
from collections.abc import Iterable, Mapping
from pathlib import Path

from tqdm import tqdm


def _unwrap(item: object) -> dict | None:
    """Return the track object from a list entry.

    Saved-tracks and recently-played pages wrap each track as
    ``{"track": {...}, "added_at"/"played_at": ...}``.
    """
    if not isinstance(item, Mapping):
        return None
    inner = item.get("track")
    if isinstance(inner, Mapping):
        return dict(inner)
    return dict(item)


def _read_items(path: Path) -> list:
    with path.open(encoding="utf-8") as f:
        data = json.load(f)
    if isinstance(data, list):
        return data
    if isinstance(data, Mapping) and isinstance(data.get("items"), list):
        return data["items"]
    raise ValueError(f"{path}: expected a list of tracks or an object with 'items'")


def load_tracks(*paths: Path) -> list[dict]:
    """Read track objects from one or more JSON files, in file order."""
    tracks: list[dict] = []
    for path in paths:
        path = Path(path)
        if not path.is_file():
            raise FileNotFoundError(f"No such file: {path}")
        for item in tqdm(_read_items(path), desc=f"Reading {path.name}", unit="track", leave=False):
            track = _unwrap(item)
            if track is not None:
                tracks.append(track)
    return tracks


def dedupe_tracks(tracks: Iterable[Mapping]) -> list[Mapping]:
    """Collapse tracks sharing an id.

    The first occurrence keeps its position and the last occurrence
    supplies the metadata. Tracks without an id are kept as-is so that
    training can count them as skipped.
    """
    by_id: dict[str, Mapping] = {}
    order: list[str | Mapping] = []
    for track in tracks:
        track_id = track.get("id")
        if not isinstance(track_id, str) or not track_id:
            order.append(track)
            continue
        if track_id not in by_id:
            order.append(track_id)
        by_id[track_id] = track
    return [by_id[entry] if isinstance(entry, str) else entry for entry in order]
