from __future__ import annotations

from typing import Any

from blockmodes.schemas import CipherConfig

_MODES = ("ecb", "cbc", "ctr")
_IV_POLICIES = ("zero", "random")


class ConfigAdapter:
    """High-level accessor for general and profile-specific configuration.

    All configuration resolution follows the order:

    **general -> profile -> built-in defaults**

    Args:
        config (dict[str, Any]): Fully loaded configuration mapping containing
            a ``general`` block and optionally a ``profiles`` block.

    Attributes:
        _config (dict[str, Any]): Internal stored configuration mapping.
    """

    def __init__(self, config: dict[str, Any]) -> None:
        self._config: dict[str, Any] = dict(config)

    def get_config(self) -> dict[str, Any]:
        """Return the full raw configuration mapping.

        Returns:
            dict[str, Any]: The stored configuration.
        """
        return self._config

    def get_cipher_config(self, profile: str | None = None) -> CipherConfig:
        """Build a CipherConfig by merging general and profile overrides.

        Args:
            profile (str | None): Optional profile key.

        Returns:
            CipherConfig: Resolved cipher configuration.

        Raises:
            ValueError: If the mode, IV policy or counter width is invalid.
        """
        cfg = {**self._gen_cfg(), **self._profile_cfg(profile)}

        mode = str(cfg.get("mode", "ctr")).strip().lower()
        if mode not in _MODES:
            raise ValueError(f"Unknown mode: {mode!r}")

        cbc_iv = str(cfg.get("cbc_iv", "zero")).strip().lower()
        if cbc_iv not in _IV_POLICIES:
            raise ValueError(f"Unknown CBC IV policy: {cbc_iv!r}")

        width = cfg.get("ctr_counter_width", 16)
        if isinstance(width, bool) or not isinstance(width, int):
            raise ValueError(
                f"ctr_counter_width must be int, got {type(width).__name__}"
            )
        if not (1 <= width <= 16):
            raise ValueError(f"ctr_counter_width out of range: {width}")

        return CipherConfig(
            mode=mode,
            cbc_iv=cbc_iv,
            ctr_counter_width=width,
            strict_padding=bool(cfg.get("strict_padding", True)),
        )

    def get_profiles(self) -> list[str]:
        """Return the names of all configured profiles.

        Returns:
            list[str]: Profile names in file order.
        """
        profiles = self._config.get("profiles")
        if not isinstance(profiles, dict):
            return []
        return [k for k, v in profiles.items() if isinstance(v, dict)]

    def _gen_cfg(self) -> dict[str, Any]:
        """Return general configuration mapping.

        Returns:
            dict[str, Any]: ``general`` config or empty dict.
        """
        general = self._config.get("general")
        return general if isinstance(general, dict) else {}

    def _profile_cfg(self, profile: str | None) -> dict[str, Any]:
        """Return configuration block for the given profile.

        Args:
            profile (str | None): Profile name.

        Returns:
            dict[str, Any]: Profile configuration or empty dict.

        Raises:
            KeyError: If a profile is named but not configured.
        """
        if profile is None:
            return {}
        profiles = self._config.get("profiles") or {}
        value = profiles.get(profile)
        if not isinstance(value, dict):
            raise KeyError(f"Unknown profile: {profile!r}")
        return value
