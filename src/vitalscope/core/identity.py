"""Identity utilities for deterministic cache keys.

- derive_cache_key: 32-bit rolling hash of a page URL
- tab_state_key: key of a tab's background-load flag

Keys must stay bit-compatible with records already written by the
measurement collector, which hashes with JavaScript string semantics.
"""

_UINT32_MASK = 0xFFFFFFFF
_INT32_SPAN = 1 << 32
_INT32_MAX = (1 << 31) - 1


def _utf16_code_units(text: str) -> list[int]:
    """Return the UTF-16 code units of text (what JS charCodeAt yields)."""
    encoded = text.encode("utf-16-le", "surrogatepass")
    return [
        int.from_bytes(encoded[i : i + 2], byteorder="little")
        for i in range(0, len(encoded), 2)
    ]


def derive_cache_key(url: str) -> str:
    """Hash a URL into its cache key.

    hash = hash * 31 + code_unit, wrapped to a signed 32-bit integer after
    every step (Java String.hashCode semantics).

    Args:
        url: Page URL.

    Returns:
        Decimal string of the signed hash, or "" for an empty URL.

    Examples:
        >>> derive_cache_key("hello")
        '99162322'
        >>> derive_cache_key("")
        ''
    """
    if not url:
        return ""

    hash_value = 0
    for code_unit in _utf16_code_units(url):
        hash_value = (hash_value * 31 + code_unit) & _UINT32_MASK

    if hash_value > _INT32_MAX:
        hash_value -= _INT32_SPAN

    return str(hash_value)


def tab_state_key(tab_id: int) -> str:
    """Key under which a tab's background-load flag is stored."""
    return str(tab_id)
