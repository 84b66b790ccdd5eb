"""Tests for loading track exports."""

import json

import pytest

from tastematch.ingest import dedupe_tracks, load_tracks


def _write(path, data) -> None:
    path.write_text(json.dumps(data), encoding="utf-8")


class TestLoadTracks:
    def test_plain_list(self, make_track, tmp_path) -> None:
        path = tmp_path / "tracks.json"
        _write(path, [make_track("a", "Song", "Band"), make_track("b", "Other", "Band")])
        assert [t["id"] for t in load_tracks(path)] == ["a", "b"]

    def test_paging_object_unwraps_track(self, make_track, tmp_path) -> None:
        path = tmp_path / "saved.json"
        _write(path, {
            "items": [
                {"added_at": "2024-01-01T00:00:00Z", "track": make_track("a", "Song", "Band")},
                {"played_at": "2024-01-02T00:00:00Z", "track": make_track("b", "Other", "Band")},
                "garbage",
            ],
            "next": None,
        })
        tracks = load_tracks(path)
        assert [t["id"] for t in tracks] == ["a", "b"]
        assert "added_at" not in tracks[0]

    def test_multiple_files_in_order(self, make_track, tmp_path) -> None:
        first, second = tmp_path / "one.json", tmp_path / "two.json"
        _write(first, [make_track("a", "Song", "Band")])
        _write(second, {"items": [{"track": make_track("b", "Other", "Band")}]})
        assert [t["id"] for t in load_tracks(first, second)] == ["a", "b"]

    def test_missing_file(self, tmp_path) -> None:
        with pytest.raises(FileNotFoundError):
            load_tracks(tmp_path / "missing.json")

    def test_unexpected_shape(self, tmp_path) -> None:
        path = tmp_path / "bad.json"
        _write(path, {"tracks": []})
        with pytest.raises(ValueError):
            load_tracks(path)


class TestDedupeTracks:
    def test_first_position_last_value(self, make_track) -> None:
        tracks = [
            make_track("a", "Old", "Band"),
            make_track("b", "Other", "Band"),
            make_track("a", "New", "Band"),
        ]
        result = dedupe_tracks(tracks)
        assert [t["id"] for t in result] == ["a", "b"]
        assert result[0]["name"] == "New"

    def test_keeps_tracks_without_id(self, make_track) -> None:
        no_id = {"name": "Orphan", "artists": [{"name": "Band"}]}
        result = dedupe_tracks([make_track("a", "Song", "Band"), no_id, no_id])
        assert result == [make_track("a", "Song", "Band"), no_id, no_id]
