from __future__ import annotations

import functools
import json
import re

ID_PATTERN = re.compile(r"[^A-Za-z0-9]")


@functools.lru_cache(maxsize=4096)
def to_id(name: str) -> str:
    """Return the comparison key for a display name.

    Every character that is not an ASCII letter or digit is dropped before
    lowercasing, so ``to_id("Ann-Ika") == "annika"`` and applying it twice is a
    no-op.
    """
    return ID_PATTERN.sub("", name).lower()


def decode_string(raw: bytes) -> str:
    """Decode raw JSON value bytes into text.

    Quoted JSON strings are unquoted (escapes included); any other value is
    returned as its literal text.
    """
    text = raw.decode("utf-8", errors="replace")
    if len(text) >= 2 and text[0] == '"' and text[-1] == '"':
        try:
            decoded = json.loads(text)
        except ValueError:
            return text[1:-1]
        if isinstance(decoded, str):
            return decoded
    return text


def bytes_to_id(raw: bytes | None) -> str | None:
    """Normalize an extracted JSON value, keeping absence as ``None``."""
    if raw is None:
        return None
    return to_id(decode_string(raw))
