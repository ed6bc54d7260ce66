"""Tests for configuration loading (config.py)."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from podcast_import.config import Config, get_config


@pytest.fixture(autouse=True)
def _isolated_env(tmp_path, monkeypatch):
    # Keep a developer's .env out of these tests
    monkeypatch.chdir(tmp_path)
    for name in ("SOURCES_FILE", "OUTPUT_FILE", "CONTENT_DIR", "REQUEST_TIMEOUT", "DEDUPE"):
        monkeypatch.delenv(f"PODCAST_IMPORT_{name}", raising=False)


class TestConfig:
    def test_defaults(self):
        config = get_config()
        assert config.sources_file == Path("sources-podcasts.json")
        assert config.output_file == Path("data/output.json")
        assert config.content_filename == "index.mdx"
        assert config.show_api_base == "https://taddy.org/podcasts"
        assert config.dedupe is True
        assert config.log_file is None

    def test_environment_variables(self, monkeypatch):
        monkeypatch.setenv("PODCAST_IMPORT_REQUEST_TIMEOUT", "30")
        monkeypatch.setenv("PODCAST_IMPORT_DEDUPE", "false")

        config = get_config()

        assert config.request_timeout == 30.0
        assert config.dedupe is False

    def test_dotenv_file(self, tmp_path):
        (tmp_path / ".env").write_text(
            "PODCAST_IMPORT_OUTPUT_FILE=custom/episodes.json\n", encoding="utf-8"
        )
        assert get_config().output_file == Path("custom/episodes.json")

    def test_overrides_win_over_environment(self, monkeypatch):
        monkeypatch.setenv("PODCAST_IMPORT_CONTENT_DIR", "from-env")
        config = get_config(content_dir=Path("from-cli"))
        assert config.content_dir == Path("from-cli")

    def test_none_overrides_are_ignored(self, monkeypatch):
        monkeypatch.setenv("PODCAST_IMPORT_CONTENT_DIR", "from-env")
        config = get_config(content_dir=None, dedupe=None)
        assert config.content_dir == Path("from-env")
        assert config.dedupe is True

    def test_timeout_must_be_positive(self):
        with pytest.raises(ValidationError):
            Config(request_timeout=0)
