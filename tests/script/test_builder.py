"""Tests for script building utilities."""

from kvstart.script.builder import StartScriptBuilder, quote_with_expansion
from kvstart.script.fragments import DNS_AWAIT_NONE, ScriptFragment


class TestQuoteWithExpansion:
    """Tests for quote_with_expansion function."""

    def test_simple_value_unquoted(self):
        """Simple values need no quotes."""
        assert quote_with_expansion("basic-pd:2379") == "basic-pd:2379"

    def test_value_with_spaces_uses_single_quotes(self):
        """Values with spaces are single-quoted."""
        assert quote_with_expansion("has spaces") == "'has spaces'"

    def test_brace_var_uses_double_quotes(self):
        """${VAR} syntax triggers double quoting for expansion."""
        assert (
            quote_with_expansion("${TIKV_POD_NAME}.basic-tikv-peer.tidb.svc")
            == '"${TIKV_POD_NAME}.basic-tikv-peer.tidb.svc"'
        )

    def test_escapes_backticks(self):
        """Backticks are escaped to prevent command substitution."""
        assert quote_with_expansion("$PATH:`whoami`") == '"$PATH:\\`whoami\\`"'

    def test_escapes_dollar_paren(self):
        """$() command substitution is escaped."""
        assert quote_with_expansion("$PATH:$(whoami)") == '"$PATH:\\$(whoami)"'

    def test_literal_dollar_uses_single_quotes(self):
        """Literal dollar sign without valid var name uses single quotes."""
        assert quote_with_expansion("costs $5") == "'costs $5'"


class TestStartScriptBuilder:
    """Tests for StartScriptBuilder."""

    def test_shebang_first(self):
        """Shebang is inserted at the top."""
        script = StartScriptBuilder().comment("hi").shebang().build()
        assert script == "#!/bin/sh\n# hi\n"

    def test_fragment_separated_by_blank_line(self):
        """Each fragment starts after a blank line."""
        script = (
            StartScriptBuilder()
            .comment("one")
            .fragment(ScriptFragment("t", "echo @{n}"), n="two")
            .build()
        )
        assert script == "# one\n\necho two\n"

    def test_empty_fragment_adds_nothing(self):
        """Empty fragments leave no blank line behind."""
        script = (
            StartScriptBuilder()
            .comment("one")
            .fragment(DNS_AWAIT_NONE, advertise_host="h", start_timeout=1)
            .build()
        )
        assert script == "# one\n"
