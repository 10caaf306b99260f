"""Validation helpers for member configuration values."""

from __future__ import annotations

import posixpath
import re

# Kubernetes DNS-1123 label: lowercase alphanumerics and '-', max 63 chars
_DNS_LABEL = re.compile(r"^[a-z0-9]([-a-z0-9]*[a-z0-9])?$")


def validate_dns_label(value: str, what: str = "name") -> None:
    """Validate a Kubernetes DNS-1123 label (cluster name, namespace).

    Raises ValueError if invalid.
    """
    if not isinstance(value, str) or not value:
        raise ValueError(f"Invalid {what}: must be a non-empty string")
    if len(value) > 63:
        raise ValueError(f"Invalid {what}: '{value}' (must be at most 63 characters)")
    if not _DNS_LABEL.match(value):
        raise ValueError(
            f"Invalid {what}: '{value}' (use lowercase alphanumeric and '-', "
            "starting and ending with alphanumeric)"
        )


def validate_cluster_domain(domain: str) -> None:
    """Validate cluster domain suffix (e.g., cluster.local).

    An empty domain is valid and means no suffix.
    Raises ValueError if invalid.
    """
    if not domain:
        return
    if not isinstance(domain, str):
        raise ValueError(f"Invalid cluster domain: {domain!r} (must be a string)")
    for label in domain.split("."):
        try:
            validate_dns_label(label, "cluster domain label")
        except ValueError:
            raise ValueError(
                f"Invalid cluster domain: '{domain}' (use dot-separated DNS labels)"
            )


def validate_data_sub_dir(sub_dir: str) -> None:
    """Validate data subdirectory (relative path inside the data volume).

    Raises ValueError if invalid.
    """
    if not sub_dir:
        return
    if not isinstance(sub_dir, str):
        raise ValueError(f"Invalid data subdirectory: {sub_dir!r} (must be a string)")
    if sub_dir.startswith("/"):
        raise ValueError(f"Invalid data subdirectory: '{sub_dir}' (must be relative)")
    if ".." in sub_dir.split("/"):
        raise ValueError(
            f"Invalid data subdirectory: '{sub_dir}' (must stay inside the data volume)"
        )
    if not re.match(r"^[A-Za-z0-9._/-]+$", sub_dir):
        raise ValueError(
            f"Invalid data subdirectory: '{sub_dir}' "
            "(use only alphanumeric, '.', '_', '-', '/')"
        )


def validate_start_timeout(timeout: int) -> None:
    """Validate start timeout in seconds.

    Raises ValueError if invalid.
    """
    # bool is an int subclass; TOML true/false must not pass as a timeout
    if isinstance(timeout, bool) or not isinstance(timeout, int):
        raise ValueError(f"Invalid start timeout: {timeout!r} (must be an integer)")
    if timeout < 1:
        raise ValueError(f"Invalid start timeout: {timeout} (must be at least 1)")


def validate_feature_flag(flag: str) -> None:
    """Validate feature-flag token (non-empty, no whitespace).

    Raises ValueError if invalid.
    """
    if not isinstance(flag, str) or not re.match(r"^\S+$", flag):
        raise ValueError(f"Invalid feature flag: {flag!r} (must be a non-empty token)")


def join_data_dir(mount_path: str, sub_dir: str) -> str:
    """Join data volume mount path and subdirectory, normalized."""
    return posixpath.normpath(posixpath.join(mount_path, sub_dir))


def unique(items) -> tuple[str, ...]:
    """Deduplicate while keeping first-seen order."""
    return tuple(dict.fromkeys(items))
