"""Shell script builder for container start scripts."""

from __future__ import annotations

import re
import shlex
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kvstart.script.fragments import ScriptFragment
    from typing_extensions import Self


def quote_with_expansion(value: str) -> str:
    """Quote a value for shell, allowing $VAR expansion if present.

    If the value contains shell variable references ($VAR or ${VAR}),
    uses double quotes and escapes dangerous characters while preserving
    variable expansion. Otherwise, uses shlex.quote() for full escaping.
    """
    if re.search(r'\$[A-Za-z_][A-Za-z0-9_]*|\$\{[^}]+\}', value):
        escaped = value.replace('\\', '\\\\')
        escaped = escaped.replace('"', '\\"')
        escaped = escaped.replace('`', '\\`')
        escaped = escaped.replace('$(', '\\$(')
        return f'"{escaped}"'
    return shlex.quote(value)


class StartScriptBuilder:
    """Build a POSIX sh start script from lines and fragments."""

    def __init__(self) -> None:
        self._lines: list[str] = []

    def shebang(self) -> Self:
        """Add shebang line."""
        self._lines.insert(0, "#!/bin/sh")
        return self

    def comment(self, text: str) -> Self:
        """Add comment."""
        self._lines.append(f"# {text}")
        return self

    def fragment(self, fragment: "ScriptFragment", **values: object) -> Self:
        """Render a fragment and add it as its own block.

        Empty fragments add nothing, not even a blank line.
        """
        text = fragment.render(**values)
        if text:
            self.blank_line()
            self._lines.extend(text.splitlines())
        return self

    def blank_line(self) -> Self:
        """Add blank line for readability."""
        self._lines.append("")
        return self

    def build(self) -> str:
        """Return complete script."""
        return "\n".join(self._lines) + "\n"
