"""Start script composition: resolved addressing -> shell script text."""

from __future__ import annotations

from collections.abc import Iterable

from kvstart.output import debug
from kvstart.script.builder import StartScriptBuilder, quote_with_expansion
from kvstart.script.fragments import (
    ACROSS_K8S_DISCOVERY,
    BASE_ARGS,
    DNS_AWAIT_IP_MATCH,
    DNS_AWAIT_NONE,
    EXEC_SERVER,
    EXTRA_ARGS,
    FEATURE_WAIT_FOR_DNS_NAME_IP_MATCH,
    POD_IDENTITY,
    SHARED_FRAGMENTS,
    STORE_LABELS,
    ScriptFragment,
)
from kvstart.script.topology import ResolvedAddressing


def select_dns_await(feature_flags: Iterable[str]) -> ScriptFragment:
    """Pick the DNS await variant for the given feature flags."""
    if FEATURE_WAIT_FOR_DNS_NAME_IP_MATCH in feature_flags:
        return DNS_AWAIT_IP_MATCH
    return DNS_AWAIT_NONE


def compose(resolved: ResolvedAddressing, feature_flags: Iterable[str] = ()) -> str:
    """Render the TiKV start script.

    Fragments are stitched in a fixed order: pod identity, DNS await,
    cross-cluster discovery, shared fragments, then argument assembly and
    the final exec.

    Raises:
        TemplateError: A fragment failed to substitute. No partial script
            is returned.
    """
    dns_await = select_dns_await(tuple(feature_flags))
    debug(
        f"composing start script: dns await={dns_await.name}, "
        f"discovery={'on' if resolved.discovery else 'off'}, "
        f"extra args={'on' if resolved.extra_args else 'off'}"
    )

    builder = StartScriptBuilder().shebang()
    builder.blank_line()
    builder.comment("This script is used to start tikv containers in kubernetes cluster")

    builder.fragment(POD_IDENTITY)
    builder.fragment(
        dns_await,
        advertise_host=quote_with_expansion(resolved.advertise_host),
        start_timeout=resolved.start_timeout,
    )

    if resolved.discovery:
        builder.fragment(
            ACROSS_K8S_DISCOVERY,
            pd_addr=quote_with_expansion(resolved.discovery.pd_addr),
            discovery_addr=quote_with_expansion(resolved.discovery.discovery_addr),
        )

    for shared in SHARED_FRAGMENTS:
        builder.fragment(shared)

    builder.fragment(
        BASE_ARGS,
        pd_addr=resolved.pd_addr,
        advertise_addr=resolved.advertise_addr,
        addr=resolved.addr,
        status_addr=resolved.status_addr,
        data_dir=resolved.data_dir,
        capacity=resolved.capacity,
    )
    if resolved.extra_args:
        builder.fragment(EXTRA_ARGS, extra_args=resolved.extra_args)
    builder.fragment(STORE_LABELS)
    builder.fragment(EXEC_SERVER)

    return builder.build()
