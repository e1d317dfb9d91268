"""C/C++ ``#include`` directive parser using a regex scan.

This is not a preprocessor: directives inside comments, string literals or
disabled ``#if`` blocks are reported like any other.
"""

from __future__ import annotations

import re

from include_graph.errors import ParseError
from include_graph.models import IncludeDirective

_INCLUDE_RE = re.compile(
    r'#include\s+(?:"([^">\r\n]+)"|<([^">\r\n]+)>)',
)


class IncludeParser:
    """Extract include directives from one file's text, in order of appearance."""

    def parse(self, text: str | bytes) -> list[IncludeDirective]:
        source = self._as_text(text)
        directives: list[IncludeDirective] = []

        for m in _INCLUDE_RE.finditer(source):
            quoted, angled = m.group(1), m.group(2)
            if angled is not None:
                directives.append(IncludeDirective(target_path=angled, is_system_include=True))
            else:
                directives.append(IncludeDirective(target_path=quoted, is_system_include=False))

        return directives

    @staticmethod
    def _as_text(text: str | bytes) -> str:
        if isinstance(text, str):
            return text
        if isinstance(text, (bytes, bytearray)):
            try:
                return bytes(text).decode("utf-8")
            except UnicodeDecodeError as e:
                raise ParseError(f"Content is not UTF-8 text: {e}") from e
        raise ParseError(f"Expected text, got {type(text).__name__}")


_default_parser = IncludeParser()


def parse_includes(text: str | bytes) -> list[IncludeDirective]:
    """Parse with a shared parser instance."""
    return _default_parser.parse(text)
