"""Similarity metric and seed-based recommendation engine."""

import logging
from collections import Counter
from collections.abc import Iterable, Mapping

import numpy as np
from rapidfuzz import fuzz
from tqdm import tqdm

from tastematch.catalog import Catalog
from tastematch.errors import (
    EmptyInput,
    InvalidLimit,
    MalformedTrack,
    NoCandidates,
    NoTrainedData,
    NoValidSeeds,
)
from tastematch.features import extract
from tastematch.models import RawTrack, Recommendation, TrackFeatures, TrainingSummary

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 10
PROFILE_TOP_N = 15
POPULARITY_SCALE = 100.0

NAME_WEIGHT = 0.30
ARTIST_WEIGHT = 0.30
TOKEN_WEIGHT = 0.20
POPULARITY_WEIGHT = 0.20


def string_ratio(a: str, b: str) -> float:
    """Normalized Indel similarity of two strings, in [0, 1]."""
    return fuzz.ratio(a, b) / 100.0


def popularity_similarity(a: float, b: float) -> float:
    return float(np.clip(1.0 - abs(a - b) / POPULARITY_SCALE, 0.0, 1.0))


def similarity(a: TrackFeatures, b: TrackFeatures) -> float:
    """Weighted similarity of two tracks, symmetric and bounded to [0, 1]."""
    score = (
        NAME_WEIGHT * string_ratio(a.name, b.name)
        + ARTIST_WEIGHT * string_ratio(a.artist, b.artist)
        + TOKEN_WEIGHT * string_ratio(a.token_text, b.token_text)
        + POPULARITY_WEIGHT * popularity_similarity(a.popularity, b.popularity)
    )
    return float(np.clip(score, 0.0, 1.0))


def _seed_id(seed: RawTrack | str) -> object:
    if isinstance(seed, Mapping):
        return seed.get("id")
    return seed


def _check_limit(limit: object) -> int:
    if isinstance(limit, bool) or not isinstance(limit, int) or limit <= 0:
        raise InvalidLimit(f"limit must be a positive integer, got {limit!r}")
    return limit


class RecommendationEngine:
    """Owns a catalog of track features and ranks it against seed tracks.

    Not thread-safe: callers must serialize ``train`` against other calls.
    """

    def __init__(self) -> None:
        self._catalog = Catalog()

    def __len__(self) -> int:
        return len(self._catalog)

    def track(self, track_id: str) -> TrackFeatures | None:
        """Cached features for ``track_id``, or None if it was never trained."""
        return self._catalog.get(track_id)

    def train(
        self,
        raw_tracks: Iterable[RawTrack],
        *,
        reject_empty: bool = False,
        progress: bool = False,
    ) -> TrainingSummary:
        """Extract features for a batch of raw tracks and add them to the catalog.

        Malformed tracks are skipped and counted rather than raised. A track
        whose id is already in the catalog overwrites the stored features.
        An empty batch yields an empty summary unless ``reject_empty`` is set,
        in which case EmptyInput is raised.
        """
        raw_tracks = list(raw_tracks)
        if not raw_tracks and reject_empty:
            raise EmptyInput("No tracks to train on")

        logger.info("Processing %d tracks for training", len(raw_tracks))
        summary = TrainingSummary()
        for raw in tqdm(raw_tracks, desc="Training", unit="track", disable=not progress):
            try:
                features = extract(raw)
            except MalformedTrack as exc:
                logger.debug("Skipping track: %s", exc)
                summary.skipped += 1
                continue
            self._catalog.upsert(features)
            summary.accepted += 1

        logger.info(
            "Processed %d tracks (%d accepted, %d skipped); catalog holds %d",
            summary.total, summary.accepted, summary.skipped, len(self._catalog),
        )
        return summary

    def _resolve_seeds(self, seeds: Iterable[RawTrack | str]) -> tuple[list[TrackFeatures], set[str]]:
        resolved: dict[str, TrackFeatures] = {}
        seed_ids: set[str] = set()
        for seed in seeds:
            seed_id = _seed_id(seed)
            if not isinstance(seed_id, str):
                logger.warning("Dropping seed without an id: %r", seed)
                continue
            seed_ids.add(seed_id)
            features = self._catalog.get(seed_id)
            if features is None:
                logger.warning("Dropping seed %s: not in catalog", seed_id)
                continue
            resolved.setdefault(seed_id, features)
        return list(resolved.values()), seed_ids

    def recommend(
        self,
        seeds: Iterable[RawTrack | str],
        limit: int = DEFAULT_LIMIT,
    ) -> list[Recommendation]:
        """Rank catalog tracks by mean similarity to the seed tracks.

        Seeds may be track ids or raw track objects. Seeds are never
        recommended. Ties keep catalog insertion order.
        """
        limit = _check_limit(limit)
        if len(self._catalog) == 0:
            raise NoTrainedData("No tracks available for recommendations. Train first.")

        seed_features, seed_ids = self._resolve_seeds(seeds)
        if not seed_features:
            raise NoValidSeeds("None of the seed tracks are in the catalog")

        logger.info("Finding recommendations using %d seed tracks", len(seed_features))

        scored = []
        for candidate in self._catalog:
            if candidate.id in seed_ids:
                continue
            scores = [similarity(seed, candidate) for seed in seed_features]
            scored.append((candidate.id, float(np.mean(scores))))

        if not scored:
            raise NoCandidates("Every catalog track is a seed")

        scored.sort(key=lambda x: x[1], reverse=True)
        recommendations = [Recommendation(track_id, score) for track_id, score in scored[:limit]]
        logger.info("Found %d recommendations", len(recommendations))
        return recommendations

    def similar(self, track_id: str, limit: int = DEFAULT_LIMIT) -> list[Recommendation]:
        """Tracks most similar to a single catalog track."""
        return self.recommend([track_id], limit=limit)

    def taste_profile(self) -> dict:
        """Summarize the catalog: top genres, top artists and popularity spread."""
        if len(self._catalog) == 0:
            raise NoTrainedData("No tracks in catalog")

        genre_counter: Counter[str] = Counter()
        artist_counter: Counter[str] = Counter()
        popularity = []

        for features in self._catalog:
            genre_counter.update(sorted(features.genres))
            artist_counter[features.artist_name] += 1
            popularity.append(features.popularity)

        pop = np.array(popularity, dtype=float)
        return {
            "total_tracks": len(self._catalog),
            "top_genres": genre_counter.most_common(PROFILE_TOP_N),
            "top_artists": artist_counter.most_common(PROFILE_TOP_N),
            "popularity": {
                "mean": float(pop.mean()),
                "min": float(pop.min()),
                "max": float(pop.max()),
            },
        }
