import json
from pathlib import Path
from typing import Any

import commentjson  # type: ignore

from .errors import ConfigError


class ConfigurationManager:
    """
    Manages loading and merging of application configuration.
    """

    def __init__(self, *, base_path: Path | None = None) -> None:
        self._base_path = base_path or Path(__file__).parent

    def load_config(
        self, user_config_path: str | None, cli_overrides: dict[str, Any]
    ) -> dict[str, Any]:
        """
        Loads defaults, merges with user JSONC, and applies CLI overrides.
        """
        config = self._load_defaults()

        if user_config_path:
            self._merge_user_file(config, Path(user_config_path))

        # Apply CLI overrides (filtering out None values)
        config.update({k: v for k, v in cli_overrides.items() if v is not None})

        self._validate(config)
        return config

    def _load_defaults(self) -> dict[str, Any]:
        defaults_path = self._base_path / "defaults.json"
        if not defaults_path.exists():
            return {}

        try:
            with open(defaults_path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, ValueError) as e:
            raise ConfigError(f"Failed to load defaults {defaults_path}: {e}") from e

    def _merge_user_file(self, config: dict[str, Any], path: Path) -> None:
        if not path.is_file():
            raise ConfigError(f"Config file not found: {path}")
        try:
            with open(path, "r", encoding="utf-8") as f:
                user_conf = commentjson.load(f)
        except Exception as e:
            raise ConfigError(f"Failed to parse config file {path}: {e}") from e

        if not isinstance(user_conf, dict):
            raise ConfigError(f"Config file {path} must contain a JSON object.")
        config.update(user_conf)

    def _validate(self, config: dict[str, Any]) -> None:
        max_depth = config.get("max_depth", 1)
        if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
            raise ConfigError(f"max_depth must be a positive integer, got {max_depth!r}")

        if config.get("format", "text") not in ("text", "yaml"):
            raise ConfigError(f"Unknown report format: {config.get('format')!r}")

        for key in (
            "module_prefixes",
            "exclude",
            "skip_suffixes",
            "skip_substrings",
            "ignored_members",
        ):
            value = config.get(key, [])
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ConfigError(f"'{key}' must be a list of strings.")
