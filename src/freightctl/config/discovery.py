"""Locating and loading ``freightctl.toml``.

Resolution order: the ``FREIGHTCTL_CONFIG`` environment variable, then the
nearest ``freightctl.toml`` in the start directory or any ancestor. When
the variable is set it is authoritative: a missing file means no config.
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Iterator
from pathlib import Path

from freightctl.config.models import FreightConfig

CONFIG_FILENAME = "freightctl.toml"
CONFIG_ENV_VAR = "FREIGHTCTL_CONFIG"


def _walk_up(start: Path) -> Iterator[Path]:
    start = start.resolve()
    yield start
    yield from start.parents


def find_config(start: Path | None = None) -> Path | None:
    """Return the config file that applies to *start* (default: cwd), if any."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        path = Path(override)
        return path if path.is_file() else None

    for directory in _walk_up(start or Path.cwd()):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(path: Path | None = None, cwd: Path | None = None) -> FreightConfig:
    """Parse and validate a config file into :class:`FreightConfig`.

    Discovers the file from *cwd* when *path* is None. With no file at
    all, returns the built-in defaults (reference tariffs, EUR).

    Raises:
        tomllib.TOMLDecodeError: The file is not valid TOML.
        pydantic.ValidationError: A section has invalid values.
    """
    path = path if path is not None else find_config(cwd)
    if path is None:
        return FreightConfig()
    with path.open("rb") as fh:
        return FreightConfig.model_validate(tomllib.load(fh))
