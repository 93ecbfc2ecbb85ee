"""
Display version cleanup — best-effort normalization of version strings.

Package managers report versions as free text.  Most are well formed
(``1.2.3``), but hand-written metadata produces things like
``v1.2``, ``Version 3, 1``, or ``beta``.  The cleaned value is only used
for display and sorting, so this never raises: anything unusable
becomes an empty string.
"""

from __future__ import annotations

import re

_PREFIX_RE = re.compile(r"^(?:version|ver|v)\.?\s*(?=\d)", re.IGNORECASE)
_COMMA_RE = re.compile(r"\s*,\s*")
_DOTS_RE = re.compile(r"\.{2,}")
_NUMERIC_RUN_RE = re.compile(r"\d+(?:\.\d+)*")


def cleanup_display_version(version: str | None) -> str:
    """Return a tidy version string, or ``""`` when none can be found.

    Examples:
        ``" 1.2.3 "``  → ``"1.2.3"``
        ``"v2.0"``     → ``"2.0"``
        ``"3, 1, 0"``  → ``"3.1.0"``
        ``"build 42"`` → ``"42"``
        ``"beta"``     → ``""``
    """
    if not version:
        return ""

    text = " ".join(version.split())
    if not text:
        return ""

    text = _PREFIX_RE.sub("", text)
    text = _COMMA_RE.sub(".", text)
    text = _DOTS_RE.sub(".", text).strip(".")

    if text[:1].isdigit():
        return text

    match = _NUMERIC_RUN_RE.search(text)
    return match.group(0) if match else ""
