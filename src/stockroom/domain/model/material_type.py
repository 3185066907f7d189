"""Canonical form of a material type.

The normalized form is both the display value that gets stored and the key
used to detect duplicate articles.
"""

from __future__ import annotations

MAX_MATERIAL_TYPE_LENGTH = 200


def _upper_char(char: str) -> str:
    # Characters such as "ß" expand when upper-cased; keeping them as-is
    # keeps normalization idempotent.
    upper = char.upper()
    return upper if len(upper) == 1 else char


def normalize_material_type(value: str | None) -> str:
    """Trim and re-case a human-entered material name.

    ``"  mASK "`` becomes ``"Mask"``; a single character is upper-cased;
    blank input becomes ``""``.
    """
    if value is None:
        return ""

    trimmed = value.strip()
    if not trimmed:
        return ""
    if len(trimmed) == 1:
        return _upper_char(trimmed)
    return _upper_char(trimmed[0]) + trimmed[1:].lower()
