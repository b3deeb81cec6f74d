"""Unified settings — CLI flags, env vars, and TOML config in one object.

Priority chain (highest to lowest):
  1. Init kwargs  — CLI flags passed by Click
  2. Env vars     — ``TZCTL_*`` prefix, ``__`` for nesting
     (``TZCTL_ZONE__KEY=Europe/Berlin``)
  3. TOML file    — ``tzctl.toml`` discovered via walk-up
  4. Code defaults — baked into the section models
"""

from __future__ import annotations

import threading
from pathlib import Path
from typing import Any

from pydantic import Field
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from tzctl.config.discovery import find_config, read_toml
from tzctl.config.models import ClockConfig, ConversionConfig, DisplayConfig, ZoneConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Read settings from the discovered ``tzctl.toml``."""

    def __init__(self, settings_cls: type[BaseSettings], toml_path: Path | None) -> None:
        super().__init__(settings_cls)
        self._data: dict[str, Any] = {}
        if toml_path and toml_path.is_file():
            self._data = read_toml(toml_path)

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        """Return ``(value, field_name, value_is_complex)``."""
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return self._data


# Thread-local storage for TOML path during construction.
_tls = threading.local()


class TzSettings(BaseSettings):
    """Unified settings for the tzctl CLI, stored in ``click.Context.obj``.

    Attributes:
        config_path: The TOML file the settings were read from, if any.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "TZCTL_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None

    # --- CLI flags ---
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False

    # --- TOML sections ---
    zone: ZoneConfig = Field(default_factory=ZoneConfig)
    display: DisplayConfig = Field(default_factory=DisplayConfig)
    conversion: ConversionConfig = Field(default_factory=ConversionConfig)
    clock: ClockConfig = Field(default_factory=ClockConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Insert TOML source between env vars and defaults."""
        return (
            init_settings,
            env_settings,
            TomlSettingsSource(settings_cls, getattr(_tls, "toml_path", None)),
        )

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        zone_key: str | None = None,
        **cli_flags: Any,
    ) -> TzSettings:
        """Construct settings from a CLI invocation.

        An explicit *config_path* replaces discovery. *zone_key* (``--zone``)
        overrides ``[zone] key`` and drops any ``[zone.rules]`` table, keeping
        the other zone settings.
        """
        toml_path: Path | None
        if config_path:
            candidate = Path(config_path)
            toml_path = candidate if candidate.is_file() else None
        else:
            toml_path = find_config()

        _tls.toml_path = toml_path
        try:
            settings = cls(config_path=toml_path, **cli_flags)
        finally:
            _tls.toml_path = None

        if zone_key:
            zone = settings.zone.model_copy(update={"key": zone_key, "rules": None})
            settings = settings.model_copy(update={"zone": zone})
        return settings
