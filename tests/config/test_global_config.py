"""Tests for global configuration."""

import pytest

from kvstart.config.global_config import GlobalConfig, MemberDefaults, KNOWN_DEFAULT_FIELDS
from kvstart.exceptions import ConfigError


class TestGlobalConfigLoad:
    """Tests for GlobalConfig.load method."""

    def test_load_from_nonexistent_file(self, tmp_path):
        """Returns empty defaults if file doesn't exist."""
        result = GlobalConfig.load(tmp_path / "nonexistent.toml")
        assert result.defaults == MemberDefaults()

    def test_load_empty_file(self, tmp_path):
        """Returns empty defaults for empty file."""
        config = tmp_path / "config.toml"
        config.write_text("")
        result = GlobalConfig.load(config)
        assert result.defaults == MemberDefaults()

    def test_load_defaults(self, tmp_path):
        """Loads the [defaults] table."""
        config = tmp_path / "config.toml"
        config.write_text(
            """
[defaults]
cluster_domain = "cluster.local"
feature_flags = ["WaitForDnsNameIpMatch", "WaitForDnsNameIpMatch"]
start_timeout = 60
prefer_ipv6 = true
"""
        )
        result = GlobalConfig.load(config)

        assert result.defaults.cluster_domain == "cluster.local"
        assert result.defaults.feature_flags == ["WaitForDnsNameIpMatch"]
        assert result.defaults.start_timeout == 60
        assert result.defaults.prefer_ipv6 is True

    def test_default_path(self, defaults_file):
        """Without a path, the home config is used."""
        result = GlobalConfig.load()
        assert result.defaults.cluster_domain == "example.org"

    def test_unknown_fields_warn(self, tmp_path, capsys):
        """Unknown fields produce a warning."""
        config = tmp_path / "config.toml"
        config.write_text("[defaults]\nregion = \"us\"\n")
        GlobalConfig.load(config)
        assert "unknown fields: region" in capsys.readouterr().err

    def test_invalid_timeout(self, tmp_path):
        """Invalid values raise ConfigError."""
        config = tmp_path / "config.toml"
        config.write_text("[defaults]\nstart_timeout = 0\n")
        with pytest.raises(ConfigError, match=r"\[defaults\]"):
            GlobalConfig.load(config)

    def test_invalid_domain(self, tmp_path):
        """Invalid cluster domain raises ConfigError."""
        config = tmp_path / "config.toml"
        config.write_text("[defaults]\ncluster_domain = \"Bad Domain\"\n")
        with pytest.raises(ConfigError):
            GlobalConfig.load(config)

    def test_invalid_toml(self, tmp_path):
        """Broken TOML raises ConfigError."""
        config = tmp_path / "config.toml"
        config.write_text("[defaults")
        with pytest.raises(ConfigError, match="invalid TOML"):
            GlobalConfig.load(config)

    def test_known_fields(self):
        """The known field set matches MemberDefaults."""
        assert KNOWN_DEFAULT_FIELDS == {"cluster_domain", "feature_flags", "start_timeout", "prefer_ipv6"}
