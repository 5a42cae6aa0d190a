"""FreightSettings: one frozen object for CLI flags, env vars and the TOML file.

Sources, highest priority first:

1. keyword arguments (the CLI flags Click parsed)
2. ``FREIGHTCTL_*`` environment variables, ``__`` for nesting
   (``FREIGHTCTL_PRICING__CURRENCY=XOF``)
3. ``freightctl.toml``, see :mod:`freightctl.config.discovery`
4. defaults from :mod:`freightctl.config.models`
"""

from __future__ import annotations

import threading
import tomllib
from pathlib import Path
from typing import Any

import click
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, PydanticBaseSettingsSource

from freightctl.config.discovery import find_config
from freightctl.config.models import PricingConfig, TariffsConfig


class TomlSettingsSource(PydanticBaseSettingsSource):
    """Settings source backed by a parsed ``freightctl.toml``."""

    def __init__(self, settings_cls: type[BaseSettings], path: Path | None) -> None:
        super().__init__(settings_cls)
        self.path = path
        self._data: dict[str, Any] = self._read(path) if path is not None else {}

    @staticmethod
    def _read(path: Path) -> dict[str, Any]:
        if not path.is_file():
            return {}
        try:
            with path.open("rb") as fh:
                return tomllib.load(fh)
        except tomllib.TOMLDecodeError as exc:
            msg = f"Invalid TOML in {path}: {exc}"
            raise click.ClickException(msg) from exc

    def get_field_value(self, field: Any, field_name: str) -> tuple[Any, str, bool]:
        return self._data.get(field_name), field_name, field_name in self._data

    def __call__(self) -> dict[str, Any]:
        return dict(self._data)


# settings_customise_sources is a classmethod with no access to the
# from_cli arguments, so the resolved path is handed over per thread.
_pending = threading.local()


class FreightSettings(BaseSettings):
    """Resolved settings for one CLI invocation.

    Attributes:
        config_path: The TOML file that was read, or None.
        json_output: ``--json``.
        quiet: ``-q``; print only the headline figure.
        verbose: ``-v``; debug logging and timing spans.
        log_json: ``--log-json``.
        pricing: ``[pricing]`` section.
        tariffs: ``[tariffs]`` section.
    """

    model_config = {
        "frozen": True,
        "env_prefix": "FREIGHTCTL_",
        "env_nested_delimiter": "__",
    }

    config_path: Path | None = None
    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    log_json: bool = False
    pricing: PricingConfig = Field(default_factory=PricingConfig)
    tariffs: TariffsConfig = Field(default_factory=TariffsConfig)

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        toml = TomlSettingsSource(settings_cls, getattr(_pending, "path", None))
        return init_settings, env_settings, toml

    @staticmethod
    def _resolve_toml(config_path: str | None, cwd: Path | None) -> Path | None:
        if not config_path:
            return find_config(cwd)
        explicit = Path(config_path)
        return explicit if explicit.is_file() else None

    @classmethod
    def from_cli(
        cls,
        *,
        config_path: str | None = None,
        cwd: Path | None = None,
        **cli_flags: Any,
    ) -> FreightSettings:
        """Build settings for a CLI run.

        An explicit *config_path* that does not exist disables the TOML
        layer rather than falling back to discovery. Values that fail
        validation surface as a ClickException naming the file.
        """
        path = cls._resolve_toml(config_path, cwd)
        _pending.path = path
        try:
            return cls(config_path=path, **cli_flags)
        except ValidationError as exc:
            where = f" in {path}" if path else ""
            raise click.ClickException(f"Invalid configuration{where}: {exc}") from exc
        finally:
            _pending.path = None
