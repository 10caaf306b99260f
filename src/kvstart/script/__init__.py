"""Start script rendering."""

from kvstart.config.member import ClusterMemberConfig
from kvstart.script.compose import compose, select_dns_await
from kvstart.script.topology import (
    DiscoveryEndpoints,
    PDSource,
    ResolvedAddressing,
    resolve,
)


def render_start_script(config: ClusterMemberConfig) -> str:
    """Render the start script for a member config.

    Raises TemplateError if a fragment fails to substitute.
    """
    return compose(resolve(config), config.feature_flags)


__all__ = [
    "DiscoveryEndpoints",
    "PDSource",
    "ResolvedAddressing",
    "compose",
    "render_start_script",
    "resolve",
    "select_dns_await",
]
