"""Configuration loader with 3-tier parameter precedence."""

from dataclasses import dataclass
from pathlib import Path
from typing import Any, Optional

import yaml

from ..errors import InvalidConfigurationError
from .defaults import (
    DefaultConfig,
    FilterParams,
    KDJParams,
    LoggingParams,
    ScreenParams,
    get_default_config,
)
from .validation import ConfigValidator


@dataclass(frozen=True)
class ConfigLoader:
    """Manages configuration loading with 3-tier precedence."""

    config_dir: Path
    defaults: DefaultConfig

    @classmethod
    def create(cls, config_dir: Optional[Path] = None) -> "ConfigLoader":
        """Create a ConfigLoader instance."""
        if config_dir is None:
            config_dir = Path(__file__).parent.parent.parent / "config"

        return cls(
            config_dir=Path(config_dir),
            defaults=get_default_config(),
        )

    def load_screen_config(self, screen_name: str) -> dict[str, Any]:
        """
        Load named screen overrides from screens.yaml.

        Raises:
            InvalidConfigurationError: If the file is malformed or does not
                define screen_name
        """
        screens_file = self.config_dir / "screens.yaml"
        field = f"screens.{screen_name}"

        screens: Any = {}
        if screens_file.exists():
            try:
                with open(screens_file) as f:
                    screens_config = yaml.safe_load(f) or {}
            except yaml.YAMLError as e:
                raise InvalidConfigurationError(
                    f"Cannot parse {screens_file}: {e}",
                    field="screens",
                    context={"path": str(screens_file)}
                )
            if not isinstance(screens_config, dict):
                raise InvalidConfigurationError(
                    f"{screens_file} must contain a mapping",
                    field="screens",
                    value=screens_config
                )
            screens = screens_config.get("screens") or {}

        if not isinstance(screens, dict):
            raise InvalidConfigurationError(
                "screens must be a mapping of screen names",
                field="screens",
                value=screens
            )

        if screen_name not in screens:
            raise InvalidConfigurationError(
                f"Unknown screen: {screen_name!r}",
                field=field,
                value=screen_name,
                context={"available": sorted(str(name) for name in screens)}
            )

        screen = screens[screen_name] or {}
        if not isinstance(screen, dict):
            raise InvalidConfigurationError(
                f"Screen {screen_name!r} must be a mapping",
                field=field,
                value=screen
            )

        return screen

    def merge_config(
        self,
        screen_name: Optional[str] = None,
        overrides: Optional[dict[str, Any]] = None
    ) -> dict[str, Any]:
        """
        Merge configuration with 3-tier precedence.

        Priority order:
        1. Call-time overrides (highest priority)
        2. Named screen overrides from screens.yaml
        3. Global defaults (lowest priority)
        """
        config = self._dataclass_to_dict(self.defaults)

        if screen_name:
            config = self._deep_merge(config, self.load_screen_config(screen_name))

        if overrides:
            config = self._deep_merge(config, overrides)

        return config

    def build_config(
        self,
        screen_name: Optional[str] = None,
        overrides: Optional[dict[str, Any]] = None
    ) -> DefaultConfig:
        """
        Merge, validate and freeze configuration.

        Raises:
            InvalidConfigurationError: If any merged value is out of range
        """
        config = self.merge_config(screen_name, overrides)
        ConfigValidator.raise_for_errors(ConfigValidator.validate_config(config))

        return DefaultConfig(
            kdj=KDJParams(**config["kdj"]),
            filter=FilterParams(**config["filter"]),
            screen=ScreenParams(**config["screen"]),
            logging=LoggingParams(**config["logging"]),
        )

    def _dataclass_to_dict(self, obj: Any) -> dict[str, Any]:
        """Convert nested dataclasses to dictionary."""
        if hasattr(obj, '__dataclass_fields__'):
            result = {}
            for field_name in obj.__dataclass_fields__:
                value = getattr(obj, field_name)
                if hasattr(value, '__dataclass_fields__'):
                    result[field_name] = self._dataclass_to_dict(value)
                else:
                    result[field_name] = value
            return result
        return obj  # type: ignore[no-any-return]

    def _deep_merge(self, base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
        """Deep merge two dictionaries."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result
