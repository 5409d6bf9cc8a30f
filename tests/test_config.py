import json

import pytest

from typestats.config import ConfigurationManager
from typestats.errors import ConfigError


class TestConfigurationManager:
    def test_packaged_defaults(self):
        config = ConfigurationManager().load_config(None, {})

        assert config["default_output"] == "resources/output.txt"
        assert config["format"] == "text"
        assert "__init__" in config["skip_suffixes"]
        assert "META-INF" in config["skip_substrings"]
        assert "__dict__" in config["ignored_members"]
        assert config["max_depth"] > 0

    def test_user_file_with_comments(self, tmp_path):
        user = tmp_path / "typestats.jsonc"
        user.write_text(
            '{\n  // only our own code\n  "module_prefixes": ["acme"],\n'
            '  "max_depth": 64\n}\n',
            encoding="utf-8",
        )
        config = ConfigurationManager().load_config(str(user), {})

        assert config["module_prefixes"] == ["acme"]
        assert config["max_depth"] == 64
        assert config["format"] == "text"

    def test_cli_overrides_win_and_none_is_ignored(self, tmp_path):
        user = tmp_path / "c.json"
        user.write_text(json.dumps({"format": "yaml"}), encoding="utf-8")

        config = ConfigurationManager().load_config(
            str(user), {"format": "text", "max_depth": None}
        )
        assert config["format"] == "text"
        assert config["max_depth"] == 512

    def test_custom_defaults_location(self, tmp_path):
        (tmp_path / "defaults.json").write_text(
            json.dumps({"max_depth": 3, "format": "yaml"}), encoding="utf-8"
        )
        config = ConfigurationManager(base_path=tmp_path).load_config(None, {})
        assert config == {"max_depth": 3, "format": "yaml"}

    def test_missing_user_file(self, tmp_path):
        with pytest.raises(ConfigError, match="not found"):
            ConfigurationManager().load_config(str(tmp_path / "nope.json"), {})

    def test_malformed_user_file(self, tmp_path):
        bad = tmp_path / "bad.json"
        bad.write_text("{ not json", encoding="utf-8")
        with pytest.raises(ConfigError, match="Failed to parse"):
            ConfigurationManager().load_config(str(bad), {})

    @pytest.mark.parametrize(
        "overrides",
        [
            {"max_depth": 0},
            {"max_depth": True},
            {"format": "xml"},
            {"exclude": "json/**"},
            {"module_prefixes": [1, 2]},
        ],
    )
    def test_invalid_values_rejected(self, overrides):
        with pytest.raises(ConfigError):
            ConfigurationManager().load_config(None, overrides)
