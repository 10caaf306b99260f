"""Cluster member configuration (member TOML parsing)."""

from __future__ import annotations

import tomli
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from kvstart.exceptions import ConfigError
from kvstart.output import warn
from kvstart.utils import (
    unique,
    validate_cluster_domain,
    validate_data_sub_dir,
    validate_dns_label,
    validate_feature_flag,
    validate_start_timeout,
)

DEFAULT_START_TIMEOUT = 30

KNOWN_FIELDS = {
    "name",
    "namespace",
    "data_sub_dir",
    "prefer_ipv6",
    "cluster_domain",
    "across_k8s",
    "reference_cluster",
    "local_pd",
    "dynamic_configuration",
    "feature_flags",
    "start_timeout",
}

_BOOL_FIELDS = ("prefer_ipv6", "across_k8s", "local_pd", "dynamic_configuration")


@dataclass(frozen=True)
class ClusterMemberConfig:
    """Declarative description of one TiKV store member."""

    name: str
    namespace: str
    data_sub_dir: str = ""
    prefer_ipv6: bool = False
    cluster_domain: str = ""
    across_k8s: bool = False
    reference_cluster: str | None = None
    local_pd: bool = True
    dynamic_configuration: bool = False
    feature_flags: tuple[str, ...] = ()
    start_timeout: int = DEFAULT_START_TIMEOUT

    @property
    def heterogeneous(self) -> bool:
        """Whether this cluster references a separately managed cluster."""
        return bool(self.reference_cluster)

    @property
    def without_local_pd(self) -> bool:
        return not self.local_pd

    def validate(self) -> None:
        """Check all fields are well-formed.

        Raises ValueError on the first invalid field.
        """
        validate_dns_label(self.name, "cluster name")
        validate_dns_label(self.namespace, "namespace")
        validate_data_sub_dir(self.data_sub_dir)
        validate_cluster_domain(self.cluster_domain)
        if self.reference_cluster:
            validate_dns_label(self.reference_cluster, "reference cluster name")
        for flag in self.feature_flags:
            validate_feature_flag(flag)
        validate_start_timeout(self.start_timeout)

    @classmethod
    def from_dict(cls, data: dict[str, Any], source: str = "member") -> "ClusterMemberConfig":
        """Build a validated config from parsed TOML data.

        Args:
            data: Parsed key/value table.
            source: Label used to prefix error messages.
        """
        unknown = set(data.keys()) - KNOWN_FIELDS
        if unknown:
            warn(f"{source}: unknown fields: {', '.join(sorted(unknown))}")

        for required in ("name", "namespace"):
            if not data.get(required):
                raise ConfigError(f"{source}: missing required field '{required}'")

        for key in _BOOL_FIELDS:
            if key in data and not isinstance(data[key], bool):
                raise ConfigError(f"{source}: '{key}' must be true or false")

        flags = data.get("feature_flags", [])
        if not isinstance(flags, list) or not all(isinstance(f, str) for f in flags):
            raise ConfigError(f"{source}: 'feature_flags' must be a list of strings")

        config = cls(
            name=data["name"],
            namespace=data["namespace"],
            data_sub_dir=data.get("data_sub_dir", ""),
            prefer_ipv6=data.get("prefer_ipv6", False),
            cluster_domain=data.get("cluster_domain", ""),
            across_k8s=data.get("across_k8s", False),
            reference_cluster=data.get("reference_cluster") or None,
            local_pd=data.get("local_pd", True),
            dynamic_configuration=data.get("dynamic_configuration", False),
            feature_flags=unique(flags),
            start_timeout=data.get("start_timeout", DEFAULT_START_TIMEOUT),
        )

        try:
            config.validate()
        except ValueError as e:
            raise ConfigError(f"{source}: {e}")

        return config


def load_member_table(path: Path) -> dict[str, Any]:
    """Read a member TOML file into a plain table.

    Raises ConfigError if the file is missing or not valid TOML.
    """
    if not path.exists():
        raise ConfigError(f"Member file not found: {path}")

    try:
        with open(path, "rb") as f:
            return tomli.load(f)
    except tomli.TOMLDecodeError as e:
        raise ConfigError(f"{path.name}: invalid TOML: {e}")


def load_member(path: Path) -> ClusterMemberConfig:
    """Load and validate a member config from a TOML file."""
    return ClusterMemberConfig.from_dict(load_member_table(path), source=path.name)
