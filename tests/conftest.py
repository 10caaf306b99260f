"""Shared test fixtures for kvstart."""

from __future__ import annotations

import pytest
from pathlib import Path

from kvstart.config.member import ClusterMemberConfig


@pytest.fixture
def basic_config():
    """Single-cluster IPv4 member with no feature flags."""
    return ClusterMemberConfig(name="basic", namespace="tidb")


@pytest.fixture
def member_file(tmp_path):
    """Create a temporary member file."""
    path = tmp_path / "member.toml"
    path.write_text(
        """
name = "basic"
namespace = "tidb"
cluster_domain = "cluster.local"
feature_flags = ["WaitForDnsNameIpMatch"]
start_timeout = 45
"""
    )
    return path


@pytest.fixture
def mock_home_dir(mocker, tmp_path):
    """Point the defaults file at an empty temp home."""
    home = tmp_path / "home"
    home.mkdir()
    mocker.patch(
        "kvstart.config.global_config.DEFAULT_CONFIG_PATH",
        home / ".config" / "kvstart" / "config.toml",
    )
    return home


@pytest.fixture
def defaults_file(mock_home_dir):
    """Write a defaults file into the mocked home."""
    path = mock_home_dir / ".config" / "kvstart" / "config.toml"
    path.parent.mkdir(parents=True)
    path.write_text(
        """
[defaults]
cluster_domain = "example.org"
feature_flags = ["SiteFlag"]
start_timeout = 60
"""
    )
    return path
