"""Tests for configuration loading."""

from pathlib import Path

from lifeos.config import DEFAULT_SOURCES, STATE_FILE, Config, load_config


class TestLoadConfig:
    def test_missing_file_gives_defaults(self, tmp_path):
        config = load_config(tmp_path / "missing.conf")
        assert config == Config()
        assert config.enabled_sources == DEFAULT_SOURCES

    def test_parses_keys(self, tmp_path):
        conf = tmp_path / "lifeos.conf"
        conf.write_text(
            "\n".join(
                [
                    "# LifeOS settings",
                    "DEFAULT_STATE=Flat",
                    'CATALOG_FILE="~/catalog.json" # custom states',
                    "STATE_FILE='/tmp/state.json'",
                    "ENABLED_SOURCES=asana, google-calendar  # no obsidian",
                    "",
                    "not a setting",
                    "UNKNOWN_KEY=whatever",
                ]
            )
        )

        config = load_config(conf)

        assert config.default_state == "flat"
        assert config.catalog_file == "~/catalog.json"
        assert config.state_file == "/tmp/state.json"
        assert config.enabled_sources == ["asana", "google-calendar"]

    def test_unterminated_quote(self, tmp_path):
        conf = tmp_path / "lifeos.conf"
        conf.write_text('STATE_FILE="/tmp/state.json\n')
        assert load_config(conf).state_file == "/tmp/state.json"

    def test_empty_sources(self, tmp_path):
        conf = tmp_path / "lifeos.conf"
        conf.write_text("ENABLED_SOURCES=\n")
        assert load_config(conf).enabled_sources == []


class TestStatePath:
    def test_default(self):
        assert Config().state_path == STATE_FILE

    def test_expands_user(self):
        config = Config(state_file="~/lifeos-state.json")
        assert config.state_path == Path.home() / "lifeos-state.json"
