"""Configuration loading."""

from kvstart.config.global_config import GlobalConfig, MemberDefaults
from kvstart.config.member import ClusterMemberConfig, load_member, load_member_table

__all__ = [
    "ClusterMemberConfig",
    "GlobalConfig",
    "MemberDefaults",
    "load_member",
    "load_member_table",
]
