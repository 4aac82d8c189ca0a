from __future__ import annotations

import json
import logging
import tomllib
from collections.abc import Iterator
from pathlib import Path
from typing import Any

from blockmodes.infra.paths import SAMPLE_SETTINGS, SETTINGS_NAMES, USER_CONFIG_DIR
from blockmodes.schemas import CipherConfig

from .adapter import ConfigAdapter

logger = logging.getLogger(__name__)


def _candidates() -> Iterator[Path]:
    """Yield settings files in lookup order: working directory, then user dir."""
    for folder in (Path.cwd(), USER_CONFIG_DIR):
        for name in SETTINGS_NAMES:
            yield folder / name


def _find_settings(config_path: str | Path | None) -> Path | None:
    """
    Pick the settings file to read.

    An explicit ``config_path`` must exist. Without one, the first existing
    candidate wins, and ``None`` means the bundled sample should be used.

    Raises:
        FileNotFoundError: If ``config_path`` is given but missing.
    """
    if config_path is not None:
        path = Path(config_path).expanduser().resolve()
        if not path.is_file():
            raise FileNotFoundError(f"Config file not found: {path}")
        return path

    for candidate in _candidates():
        if candidate.is_file():
            return candidate.resolve()
    return None


def _parse(raw: bytes, suffix: str, origin: object) -> dict[str, Any]:
    """
    Decode settings by file suffix.

    Raises:
        ValueError: If the suffix is unknown, the content does not parse,
            or the top level is not a table.
    """
    suffix = suffix.lower()
    try:
        if suffix == ".toml":
            data = tomllib.loads(raw.decode("utf-8"))
        elif suffix == ".json":
            data = json.loads(raw)
        else:
            raise ValueError(f"Unsupported config file extension: {suffix!r}")
    except (UnicodeDecodeError, tomllib.TOMLDecodeError, json.JSONDecodeError) as e:
        raise ValueError(f"Cannot parse {origin}: {e}") from e

    if not isinstance(data, dict):
        raise ValueError(
            f"Config root must be a table, got {type(data).__name__} in {origin}"
        )
    return data


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """
    Read raw settings as a mapping.

    Lookup order:
        1. ``config_path`` when given
        2. ``settings.toml`` / ``settings.json`` in the working directory
        3. the same names under the per-user config directory
        4. the settings shipped with the package

    Args:
        config_path: Optional explicit TOML or JSON file.

    Returns:
        The parsed settings.

    Raises:
        FileNotFoundError: If ``config_path`` is given but missing.
        ValueError: If the chosen file cannot be parsed.
    """
    path = _find_settings(config_path)
    if path is None:
        logger.debug("No settings file found, using bundled sample")
        return _parse(SAMPLE_SETTINGS.read_bytes(), ".toml", SAMPLE_SETTINGS)

    logger.debug("Loading configuration from: %s", path)
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise ValueError(f"Cannot read {path}: {e}") from e
    return _parse(raw, path.suffix, path)


def load_cipher_config(
    config_path: str | Path | None = None,
    profile: str | None = None,
) -> CipherConfig:
    """
    Load settings and resolve them into a :class:`CipherConfig`.

    Raises:
        FileNotFoundError: If ``config_path`` is given but missing.
        KeyError: If ``profile`` is not configured.
        ValueError: If the file or one of its values is invalid.
    """
    cfg = ConfigAdapter(load_config(config_path)).get_cipher_config(profile)
    logger.debug("Resolved cipher config (profile=%s): %s", profile, cfg)
    return cfg
