"""Configuration loading with pydantic-settings.

Sources, highest precedence first:
1. Direct kwargs
2. Environment variables (RUSTSYMS__SECTION__KEY)
3. Explicit YAML config file (``--config PATH``)
4. Global YAML (~/.config/rustsyms/config.yaml)
5. Built-in defaults

YAML layers are merged key by key, so an explicit file only needs the keys
it changes.
"""

from collections.abc import Sequence
from functools import reduce
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource, SettingsConfigDict

from rustsyms.config.models import (
    ExtractConfig,
    LoggingConfig,
    RustSymsConfig,
    TelemetryConfig,
)
from rustsyms.core.errors import ConfigError

GLOBAL_CONFIG_PATH = Path("~/.config/rustsyms/config.yaml").expanduser()


def _load_yaml(path: Path) -> dict[str, Any]:
    """Read one YAML layer. A missing file is an empty layer."""
    if not path.exists():
        return {}
    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError.parse_error(str(path), str(e)) from e
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError.parse_error(str(path), "top-level value must be a mapping")
    return data


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    result = base.copy()
    for key, value in override.items():
        if isinstance(result.get(key), dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


class _YamlLayersSource(PydanticBaseSettingsSource):
    """Settings source over YAML files, later files overriding earlier ones."""

    def __init__(self, settings_cls: type[BaseSettings], paths: Sequence[Path]) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = reduce(_deep_merge, (_load_yaml(p) for p in paths), {})

    def get_field_value(
        self,
        field: Any,  # noqa: ARG002
        field_name: str,
    ) -> tuple[Any, str, bool]:
        value = self._data.get(field_name)
        return value, field_name, value is not None

    def __call__(self) -> dict[str, Any]:
        return self._data


class RustSymsSettings(BaseSettings):
    """Root settings. Env vars: RUSTSYMS__LOGGING__LEVEL, RUSTSYMS__EXTRACT__EDITION, etc.

    Without YAML layers this reads kwargs, env vars and defaults only.
    """

    model_config = SettingsConfigDict(
        env_prefix="RUSTSYMS__",
        env_nested_delimiter="__",
        case_sensitive=False,
    )

    logging: LoggingConfig = LoggingConfig()
    extract: ExtractConfig = ExtractConfig()
    telemetry: TelemetryConfig = TelemetryConfig()


def _settings_with_yaml(paths: Sequence[Path]) -> type[RustSymsSettings]:
    """Subclass bound to one call's YAML layers, so concurrent loads don't share state."""
    layers = tuple(paths)

    class _LayeredSettings(RustSymsSettings):
        @classmethod
        def settings_customise_sources(
            cls,
            settings_cls: type[BaseSettings],
            init_settings: PydanticBaseSettingsSource,
            env_settings: PydanticBaseSettingsSource,
            dotenv_settings: PydanticBaseSettingsSource,  # noqa: ARG003
            file_secret_settings: PydanticBaseSettingsSource,  # noqa: ARG003
        ) -> tuple[PydanticBaseSettingsSource, ...]:
            # First wins: init kwargs > env vars > yaml layers
            return (init_settings, env_settings, _YamlLayersSource(settings_cls, layers))

    return _LayeredSettings


def _invalid_value(error: ValidationError) -> ConfigError:
    first = error.errors()[0]
    field = ".".join(str(part) for part in first["loc"])
    return ConfigError.invalid_value(field, first.get("input"), first["msg"])


def load_config(config_path: Path | None = None, **kwargs: Any) -> RustSymsConfig:
    """Load config: defaults < global yaml < config_path < env vars < kwargs.

    Args:
        config_path: Optional YAML file. Unlike the global file, it must exist.
        **kwargs: Override values (highest precedence).

    Returns:
        Fully resolved configuration object.

    Raises:
        ConfigError: On a missing explicit file, invalid YAML or validation errors.
    """
    layers = [GLOBAL_CONFIG_PATH]
    if config_path is not None:
        if not config_path.exists():
            raise ConfigError.file_not_found(str(config_path))
        layers.append(config_path)

    try:
        settings = _settings_with_yaml(layers)(**kwargs)
    except ValidationError as e:
        raise _invalid_value(e) from e
    return RustSymsConfig.model_validate(settings.model_dump())
