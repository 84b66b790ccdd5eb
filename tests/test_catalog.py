"""Tests for the in-memory catalog."""

from tastematch.catalog import Catalog
from tastematch.features import extract


class TestCatalog:
    def test_empty(self) -> None:
        catalog = Catalog()
        assert len(catalog) == 0
        assert list(catalog) == []
        assert catalog.get("a") is None

    def test_insertion_order(self, make_track) -> None:
        catalog = Catalog()
        for track_id in ["c", "a", "b"]:
            catalog.upsert(extract(make_track(track_id, "Song", "Band")))
        assert catalog.ids() == ["c", "a", "b"]
        assert [f.id for f in catalog] == ["c", "a", "b"]

    def test_upsert_overwrites_in_place(self, make_track) -> None:
        catalog = Catalog()
        catalog.upsert(extract(make_track("a", "First", "Band")))
        catalog.upsert(extract(make_track("b", "Other", "Band")))
        catalog.upsert(extract(make_track("a", "Second", "Band")))
        assert len(catalog) == 2
        assert catalog.ids() == ["a", "b"]
        assert catalog.get("a").name == "second"
        assert "a" in catalog
        assert "z" not in catalog
