"""
Text normalization — canonical ASCII punctuation for display strings.

Package metadata is authored by hand and routinely carries typographic
punctuation (smart quotes, dashes, ellipses).  Entries from every adapter
are compared and rendered side by side, so the fancy variants are folded
onto their plain equivalents before they reach an entry.

Only the code points in ``_REPLACEMENTS`` are touched.  Every replacement
is outside the table, so ``normalize_text`` is idempotent.
"""

from __future__ import annotations

# ── Replacement table ───────────────────────────────────────────

_REPLACEMENTS: dict[str, str] = {
    "–": "-",    # en dash
    "—": "-",    # em dash
    "―": "-",    # horizontal bar
    "‗": "_",    # double low line
    "‘": "'",    # left single quotation mark
    "’": "'",    # right single quotation mark
    "‚": "'",    # single low-9 quotation mark
    "‛": "'",    # single high-reversed-9 quotation mark
    "“": '"',    # left double quotation mark
    "”": '"',    # right double quotation mark
    "„": '"',    # double low-9 quotation mark
    "…": "...",  # horizontal ellipsis
    "′": "'",    # prime
    "″": '"',    # double prime
    # Registered sign maps to the copyright sign.  Downstream consumers
    # match on this output, keep it as is.
    "®": "©",
}

_TABLE = str.maketrans(_REPLACEMENTS)


def normalize_text(text: str | None) -> str | None:
    """Replace typographic punctuation with its plain equivalent.

    ``None`` is returned untouched so callers can pipe optional fields
    straight through.
    """
    if not text:
        return text
    return text.translate(_TABLE)
