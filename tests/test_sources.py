"""Tests for source descriptor loading (ingestion/sources.py)."""

import json

import pytest

from podcast_import.errors import ConfigLoadError
from podcast_import.ingestion.sources import load_sources
from podcast_import.models.entities import SourceKind


class TestLoadSources:
    def test_loads_json_in_declared_order(self, tmp_path):
        path = tmp_path / "sources.json"
        path.write_text(json.dumps([
            {"kind": "show-feed", "name": "first"},
            {"kind": "single-episode", "feedUrl": "https://example.com/feed", "episodeId": "3"},
            {"kind": "show-feed", "name": "third"},
        ]), encoding="utf-8")

        sources = load_sources(path)

        assert [s.kind for s in sources] == [
            SourceKind.SHOW_FEED,
            SourceKind.SINGLE_EPISODE,
            SourceKind.SHOW_FEED,
        ]
        assert sources[0].name == "first"
        assert sources[2].name == "third"

    def test_loads_yaml(self, tmp_path):
        path = tmp_path / "sources.yaml"
        path.write_text(
            "- kind: show-feed\n"
            "  name: yaml-show\n"
            "- type: podcast-episode\n"
            "  podcastUrl: https://example.com/feed\n"
            "  episodeId: 12\n",
            encoding="utf-8",
        )

        sources = load_sources(path)

        assert len(sources) == 2
        assert sources[0].name == "yaml-show"
        assert sources[1].episode_id == "12"

    def test_empty_list(self, tmp_path):
        path = tmp_path / "sources.json"
        path.write_text("[]", encoding="utf-8")
        assert load_sources(path) == []

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigLoadError, match="not found"):
            load_sources(tmp_path / "missing.json")

    def test_malformed_json(self, tmp_path):
        path = tmp_path / "sources.json"
        path.write_text("[{not json", encoding="utf-8")
        with pytest.raises(ConfigLoadError, match="Could not read"):
            load_sources(path)

    def test_not_a_list(self, tmp_path):
        path = tmp_path / "sources.json"
        path.write_text(json.dumps({"kind": "show-feed", "name": "x"}), encoding="utf-8")
        with pytest.raises(ConfigLoadError, match="must contain a list"):
            load_sources(path)

    def test_invalid_entry_reports_index(self, tmp_path):
        path = tmp_path / "sources.json"
        path.write_text(json.dumps([
            {"kind": "show-feed", "name": "ok"},
            {"kind": "show-feed"},
        ]), encoding="utf-8")
        with pytest.raises(ConfigLoadError, match="#1"):
            load_sources(path)
