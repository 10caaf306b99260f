"""Global configuration (~/.config/kvstart/config.toml)."""

from __future__ import annotations

import tomli
from dataclasses import dataclass, field
from pathlib import Path

from kvstart.exceptions import ConfigError
from kvstart.output import warn
from kvstart.utils import (
    unique,
    validate_cluster_domain,
    validate_feature_flag,
    validate_start_timeout,
)

DEFAULT_CONFIG_PATH = Path.home() / ".config" / "kvstart" / "config.toml"

KNOWN_DEFAULT_FIELDS = {
    "cluster_domain",
    "feature_flags",
    "start_timeout",
    "prefer_ipv6",
}


@dataclass
class MemberDefaults:
    """Site-wide defaults applied under every member file."""

    cluster_domain: str | None = None
    feature_flags: list[str] = field(default_factory=list)
    start_timeout: int | None = None
    prefer_ipv6: bool | None = None


@dataclass
class GlobalConfig:
    """Global configuration from ~/.config/kvstart/config.toml."""

    defaults: MemberDefaults

    @classmethod
    def load(cls, path: Path | None = None) -> "GlobalConfig":
        """Load global config from file.

        Returns empty config if file doesn't exist.
        """
        if path is None:
            path = DEFAULT_CONFIG_PATH

        if not path.exists():
            return cls(defaults=MemberDefaults())

        try:
            with open(path, "rb") as f:
                data = tomli.load(f)
        except tomli.TOMLDecodeError as e:
            raise ConfigError(f"config.toml: invalid TOML: {e}")

        defaults_data = data.get("defaults", {})
        unknown = set(defaults_data.keys()) - KNOWN_DEFAULT_FIELDS
        if unknown:
            warn(f"config.toml: [defaults] unknown fields: {', '.join(sorted(unknown))}")

        flags = defaults_data.get("feature_flags", [])
        prefer_ipv6 = defaults_data.get("prefer_ipv6")
        try:
            if defaults_data.get("cluster_domain"):
                validate_cluster_domain(defaults_data["cluster_domain"])
            if defaults_data.get("start_timeout") is not None:
                validate_start_timeout(defaults_data["start_timeout"])
            if not isinstance(flags, list):
                raise ValueError("'feature_flags' must be a list of strings")
            for flag in flags:
                validate_feature_flag(flag)
            if prefer_ipv6 is not None and not isinstance(prefer_ipv6, bool):
                raise ValueError("'prefer_ipv6' must be true or false")
        except ValueError as e:
            raise ConfigError(f"config.toml: [defaults] {e}")

        return cls(
            defaults=MemberDefaults(
                cluster_domain=defaults_data.get("cluster_domain"),
                feature_flags=list(unique(flags)),
                start_timeout=defaults_data.get("start_timeout"),
                prefer_ipv6=prefer_ipv6,
            )
        )
