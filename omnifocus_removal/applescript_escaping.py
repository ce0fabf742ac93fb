"""Escaping helpers for values interpolated into AppleScript string literals."""
import re
import warnings
from typing import Optional

# Backslash must come first so later replacements are not re-escaped.
_APPLESCRIPT_ESCAPES = (
    ("\\", "\\\\"),
    ('"', '\\"'),
    ("\n", "\\n"),
    ("\r", "\\r"),
    ("\t", "\\t"),
)

_LEGACY_PATTERN = re.compile(r"""(['"\\])""")


def escape_for_applescript(text: Optional[str]) -> str:
    """Escape *text* for use inside an AppleScript double-quoted string.

    Inside AppleScript literals ``\\"`` is a quote, ``\\\\`` a backslash and
    ``\\n``, ``\\r``, ``\\t`` the matching control characters, so the escaped
    value reads back as the original text and can never close the literal.
    ``None`` and ``""`` both give ``""``.
    """
    if not text:
        return ""
    for raw, escaped in _APPLESCRIPT_ESCAPES:
        text = text.replace(raw, escaped)
    return text


def legacy_escape(text: Optional[str]) -> str:
    """Backslash-escape quotes and backslashes only.

    Control characters pass through untouched, which breaks multi-line script
    bodies. Use :func:`escape_for_applescript` for anything new.
    """
    warnings.warn(
        "legacy_escape is deprecated; use escape_for_applescript",
        DeprecationWarning,
        stacklevel=2,
    )
    if not text:
        return ""
    return _LEGACY_PATTERN.sub(r"\\\1", text)


def escape_applescript_string(text: str) -> str:
    """Escape special characters for AppleScript strings.

    Kept only for external scripts that still import this name; nothing in
    ofremove calls it.
    """
    return legacy_escape(text)
