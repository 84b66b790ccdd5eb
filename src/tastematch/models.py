"""Data models for raw tracks, extracted features and recommendations."""

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field
from typing import Any

# A track object as returned by the music service: id, name, popularity and
# an ``artists`` list whose first entry carries ``name`` and ``genres``.
RawTrack = Mapping[str, Any]


@dataclass(frozen=True)
class TrackFeatures:
    id: str
    name: str
    artist: str
    popularity: float
    tokens: frozenset[str] = field(default_factory=frozenset)
    genres: frozenset[str] = field(default_factory=frozenset)
    title: str = field(default="", compare=False)
    artist_name: str = field(default="", compare=False)

    @property
    def token_text(self) -> str:
        """Tokens in lexicographic order, space-joined, for string comparison."""
        return " ".join(sorted(self.tokens))


@dataclass(frozen=True)
class Recommendation:
    track_id: str
    score: float


@dataclass
class TrainingSummary:
    accepted: int = 0
    skipped: int = 0

    @property
    def total(self) -> int:
        return self.accepted + self.skipped

    def to_dict(self) -> dict[str, int]:
        return asdict(self)
