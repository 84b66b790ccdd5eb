"""Error types raised by the feature extractor and recommendation engine."""


class RecommenderError(Exception):
    """Base class for all tastematch errors."""


class MalformedTrack(RecommenderError, ValueError):
    """A raw track is missing the fields needed to extract features."""

    def __init__(self, reason: str, track_id: object = None) -> None:
        self.reason = reason
        self.track_id = track_id
        label = f"Malformed track {track_id!r}" if track_id else "Malformed track"
        super().__init__(f"{label}: {reason}")


class EmptyInput(RecommenderError, ValueError):
    """Training was asked to reject an empty batch and got one."""


class InvalidLimit(RecommenderError, ValueError):
    """The requested number of recommendations is not a positive integer."""


class NoTrainedData(RecommenderError, RuntimeError):
    """The catalog is empty."""


class NoValidSeeds(RecommenderError, LookupError):
    """None of the seed tracks are in the catalog."""


class NoCandidates(RecommenderError, LookupError):
    """Every catalog track is a seed, so there is nothing left to rank."""
