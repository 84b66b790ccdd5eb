"""In-memory track catalog keyed by track id."""

from collections.abc import Iterator

from tastematch.models import TrackFeatures


class Catalog:
    """Insertion-ordered store of TrackFeatures.

    Upserting an id that is already present replaces its features but keeps
    its original position, so iteration order (and therefore ranking
    tie-breaks) depends only on when an id was first seen.
    """

    def __init__(self) -> None:
        self._tracks: dict[str, TrackFeatures] = {}

    def upsert(self, features: TrackFeatures) -> None:
        """Insert or overwrite a track by id."""
        self._tracks[features.id] = features

    def get(self, track_id: str) -> TrackFeatures | None:
        return self._tracks.get(track_id)

    def ids(self) -> list[str]:
        return list(self._tracks)

    def __contains__(self, track_id: object) -> bool:
        return track_id in self._tracks

    def __len__(self) -> int:
        return len(self._tracks)

    def __iter__(self) -> Iterator[TrackFeatures]:
        return iter(self._tracks.values())
