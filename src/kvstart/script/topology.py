"""Topology resolution: member config -> concrete addressing values."""

from __future__ import annotations

import enum
from dataclasses import dataclass

from kvstart.config.member import ClusterMemberConfig
from kvstart.output import debug
from kvstart.utils import join_data_dir

PD_CLIENT_PORT = 2379
TIKV_SERVER_PORT = 20160
TIKV_STATUS_PORT = 20180
DISCOVERY_PORT = 10261

TIKV_DATA_MOUNT_PATH = "/var/lib/tikv"
CAPACITY_PLACEHOLDER = "${CAPACITY}"
# Filled in by the discovery subscript when the container starts
DISCOVERED_PD_PLACEHOLDER = "${result}"
POD_NAME_VAR = "TIKV_POD_NAME"

IPV4_ANY = "0.0.0.0"
IPV6_ANY = "[::]"


class PDSource(enum.Enum):
    """Which branch chose the PD endpoint."""

    DISCOVERY = "discovery"
    REFERENCE_CLUSTER = "reference-cluster"
    LOCAL = "local"


@dataclass(frozen=True)
class DiscoveryEndpoints:
    """Addresses the cross-cluster subscript polls at container start."""

    pd_addr: str
    discovery_addr: str


@dataclass(frozen=True)
class ResolvedAddressing:
    """Concrete values substituted into the start script."""

    pd_addr: str
    pd_source: PDSource
    addr: str
    status_addr: str
    advertise_host: str
    advertise_addr: str
    data_dir: str
    capacity: str
    start_timeout: int
    extra_args: str = ""
    discovery: DiscoveryEndpoints | None = None


def pd_member_name(cluster: str) -> str:
    return f"{cluster}-pd"


def tikv_peer_member_name(cluster: str) -> str:
    return f"{cluster}-tikv-peer"


def discovery_member_name(cluster: str) -> str:
    return f"{cluster}-discovery"


def advertise_host(config: ClusterMemberConfig) -> str:
    """Build the pod's stable DNS name behind the peer service.

    The pod name is left as a shell variable; it is only known inside
    the container.
    """
    host = (
        f"${{{POD_NAME_VAR}}}.{tikv_peer_member_name(config.name)}"
        f".{config.namespace}.svc"
    )
    if config.cluster_domain:
        host = f"{host}.{config.cluster_domain}"
    return host


def resolve_pd(
    config: ClusterMemberConfig,
) -> tuple[str, PDSource, DiscoveryEndpoints | None]:
    """Pick the PD endpoint.

    Order matters: cross-cluster discovery wins over a heterogeneous
    reference, which wins over the cluster's own PD.
    """
    local_pd = f"{pd_member_name(config.name)}:{PD_CLIENT_PORT}"

    if config.across_k8s:
        discovery = DiscoveryEndpoints(
            pd_addr=local_pd,
            discovery_addr=(
                f"{discovery_member_name(config.name)}"
                f".{config.namespace}:{DISCOVERY_PORT}"
            ),
        )
        return DISCOVERED_PD_PLACEHOLDER, PDSource.DISCOVERY, discovery

    if config.heterogeneous and config.without_local_pd:
        ref_pd = f"{pd_member_name(config.reference_cluster)}:{PD_CLIENT_PORT}"
        return ref_pd, PDSource.REFERENCE_CLUSTER, None

    return local_pd, PDSource.LOCAL, None


def build_extra_args(config: ClusterMemberConfig, host: str) -> str:
    """Join optional flags with single spaces, in order."""
    extra_args: list[str] = []
    if config.dynamic_configuration:
        extra_args.append(f"--advertise-status-addr={host}:{TIKV_STATUS_PORT}")
    return " ".join(extra_args)


def resolve(config: ClusterMemberConfig) -> ResolvedAddressing:
    """Derive addressing for a well-formed member config.

    Never raises; config validation happens when the config is loaded.
    """
    pd_addr, pd_source, discovery = resolve_pd(config)
    debug(f"pd endpoint: {pd_addr} ({pd_source.value})")

    listen_host = IPV6_ANY if config.prefer_ipv6 else IPV4_ANY
    host = advertise_host(config)

    return ResolvedAddressing(
        pd_addr=pd_addr,
        pd_source=pd_source,
        addr=f"{listen_host}:{TIKV_SERVER_PORT}",
        status_addr=f"{listen_host}:{TIKV_STATUS_PORT}",
        advertise_host=host,
        advertise_addr=f"{host}:{TIKV_SERVER_PORT}",
        data_dir=join_data_dir(TIKV_DATA_MOUNT_PATH, config.data_sub_dir),
        capacity=CAPACITY_PLACEHOLDER,
        start_timeout=config.start_timeout,
        extra_args=build_extra_args(config, host),
        discovery=discovery,
    )
