"""Command-line interface for kvstart."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from kvstart import __version__
from kvstart.config import ClusterMemberConfig, GlobalConfig, MemberDefaults, load_member_table
from kvstart.exceptions import ConfigError, KvstartError, ValidationError
from kvstart.output import debug, error, setup_logging, success
from kvstart.script import render_start_script
from kvstart.utils import (
    unique,
    validate_cluster_domain,
    validate_data_sub_dir,
    validate_dns_label,
    validate_feature_flag,
    validate_start_timeout,
)


def build_parser() -> argparse.ArgumentParser:
    """Build argument parser."""
    parser = argparse.ArgumentParser(
        prog="kvstart",
        description="Render the start script for a TiKV store member",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  kvstart member.toml                          # print script to stdout
  kvstart member.toml -o start.sh              # write executable script
  kvstart --name basic --namespace tidb        # no member file needed
  kvstart member.toml --across-k8s             # cross-cluster discovery
  kvstart member.toml --feature-flag WaitForDnsNameIpMatch
""",
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"%(prog)s {__version__}"
    )

    parser.add_argument("member", nargs="?", help="Member config file (TOML)")

    # Identity
    parser.add_argument("--name", help="Cluster name")
    parser.add_argument("--namespace", help="Kubernetes namespace")
    parser.add_argument("--data-sub-dir", dest="data_sub_dir", help="Data subdirectory")

    # Topology
    parser.add_argument(
        "--ipv6", action="store_true", dest="prefer_ipv6", help="Listen on IPv6"
    )
    parser.add_argument("--cluster-domain", dest="cluster_domain", help="Cluster domain suffix")
    parser.add_argument(
        "--across-k8s",
        action="store_true",
        dest="across_k8s",
        help="Member of a cluster spanning several Kubernetes clusters",
    )
    parser.add_argument(
        "--reference-cluster",
        dest="reference_cluster",
        help="Referenced cluster (heterogeneous cluster)",
    )
    parser.add_argument(
        "--no-local-pd",
        action="store_true",
        dest="no_local_pd",
        help="Cluster has no PD of its own",
    )

    # Features
    parser.add_argument(
        "--dynamic-config",
        action="store_true",
        dest="dynamic_configuration",
        help="Enable dynamic configuration",
    )
    parser.add_argument(
        "--feature-flag",
        action="append",
        dest="feature_flags",
        default=[],
        metavar="FLAG",
        help="Start script feature flag (repeatable)",
    )
    parser.add_argument(
        "--start-timeout",
        type=int,
        dest="start_timeout",
        metavar="SECS",
        help="Startup timeout in seconds",
    )

    # Output
    parser.add_argument("-o", "--output", metavar="FILE", help="Write script to FILE")
    parser.add_argument("--debug", action="store_true", help="Debug mode")

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate CLI-supplied values before merging."""
    try:
        if args.name is not None:
            validate_dns_label(args.name, "cluster name")
        if args.namespace is not None:
            validate_dns_label(args.namespace, "namespace")
        if args.data_sub_dir:
            validate_data_sub_dir(args.data_sub_dir)
        if args.cluster_domain:
            validate_cluster_domain(args.cluster_domain)
        if args.reference_cluster:
            validate_dns_label(args.reference_cluster, "reference cluster name")
        for flag in args.feature_flags:
            validate_feature_flag(flag)
        if args.start_timeout is not None:
            validate_start_timeout(args.start_timeout)
    except ValueError as e:
        raise ValidationError(str(e))


def merge_configs(
    args: argparse.Namespace,
    member: dict[str, Any] | None,
    defaults: MemberDefaults | None,
    source: str = "member",
) -> dict[str, Any]:
    """Merge configs with priority: CLI > member file > defaults.

    Feature flags from all layers are combined, defaults first.

    Raises:
        ConfigError: If the member file's feature_flags is not a list of strings.
    """
    d = defaults or MemberDefaults()
    merged: dict[str, Any] = dict(member or {})

    if "cluster_domain" not in merged and d.cluster_domain is not None:
        merged["cluster_domain"] = d.cluster_domain
    if "start_timeout" not in merged and d.start_timeout is not None:
        merged["start_timeout"] = d.start_timeout
    if "prefer_ipv6" not in merged and d.prefer_ipv6 is not None:
        merged["prefer_ipv6"] = d.prefer_ipv6

    for key in ("name", "namespace", "data_sub_dir", "cluster_domain", "reference_cluster", "start_timeout"):
        value = getattr(args, key)
        if value is not None:
            merged[key] = value

    # Switches only ever turn a behavior on
    if args.prefer_ipv6:
        merged["prefer_ipv6"] = True
    if args.across_k8s:
        merged["across_k8s"] = True
    if args.dynamic_configuration:
        merged["dynamic_configuration"] = True
    if args.no_local_pd:
        merged["local_pd"] = False

    member_flags = merged.get("feature_flags", [])
    if not isinstance(member_flags, list) or not all(isinstance(f, str) for f in member_flags):
        raise ConfigError(f"{source}: 'feature_flags' must be a list of strings")
    merged["feature_flags"] = list(unique([*d.feature_flags, *member_flags, *args.feature_flags]))

    return merged


def resolve_member(
    args: argparse.Namespace,
    member: dict[str, Any] | None,
    defaults: MemberDefaults | None,
    source: str = "member",
) -> ClusterMemberConfig:
    """Create a validated member config from CLI args, member file and defaults."""
    return ClusterMemberConfig.from_dict(merge_configs(args, member, defaults, source), source=source)


def write_script(script: str, output: str | None) -> None:
    """Write script to stdout, or to an executable file."""
    if output is None:
        sys.stdout.write(script)
        return

    path = Path(output)
    try:
        path.write_text(script)
        path.chmod(0o755)
    except OSError as e:
        raise KvstartError(f"Cannot write {path}: {e.strerror or e}")
    success(f"Wrote {path}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    try:
        return _main(argv)
    except KvstartError as e:
        error(e.message)
        return e.exit_code
    except KeyboardInterrupt:
        return 130


def _main(argv: list[str] | None = None) -> int:
    """Internal main function that may raise KvstartError."""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(debug=args.debug)
    validate_args(args)

    global_config = GlobalConfig.load()

    member: dict[str, Any] | None = None
    source = "member"
    if args.member:
        member_path = Path(args.member)
        member = load_member_table(member_path)
        source = member_path.name
        debug(f"loaded member file {member_path}")

    config = resolve_member(args, member, global_config.defaults, source=source)
    debug(f"member: {config}")

    script = render_start_script(config)
    write_script(script, args.output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
