"""Tests for cache key derivation.

Keys must match the JavaScript collector's String hash bit for bit:
1. Empty string maps to the empty key
2. Same URL always produces the same key
3. Signed 32-bit wraparound
4. Hashing runs over UTF-16 code units
"""

from vitalscope.core.identity import derive_cache_key, tab_state_key


class TestDeriveCacheKey:
    """Tests for derive_cache_key."""

    def test_empty_string_is_empty_key(self):
        """Empty URL maps to "" rather than "0"."""
        assert derive_cache_key("") == ""

    def test_single_character(self):
        """A single character hashes to its code."""
        assert derive_cache_key("a") == "97"

    def test_known_short_hashes(self):
        """Matches well-known String.hashCode values."""
        assert derive_cache_key("abc") == "96354"
        assert derive_cache_key("hello") == "99162322"

    def test_wraps_to_positive(self):
        """Overflowing values wrap modulo 2**32."""
        assert derive_cache_key("hello world") == "1794106052"

    def test_wraps_to_negative(self):
        """Results above INT32_MAX become negative."""
        assert derive_cache_key("polygenelubricants") == "-2147483648"

    def test_astral_character_hashes_surrogate_pair(self):
        """Characters outside the BMP hash as two UTF-16 code units."""
        # U+1F600 -> 0xD83D, 0xDE00
        assert derive_cache_key("\U0001F600") == str(0xD83D * 31 + 0xDE00)

    def test_deterministic(self):
        """Same URL gives the same key across calls."""
        url = "https://example.com"
        assert derive_cache_key(url) == derive_cache_key(url)

    def test_numeric_string(self):
        """Keys are decimal strings within the signed 32-bit range."""
        key = derive_cache_key("https://example.com/some/long/path?query=1#fragment")
        value = int(key)
        assert -(2**31) <= value < 2**31
        assert key == str(value)

    def test_different_urls_usually_differ(self):
        """Distinct URLs normally get distinct keys."""
        assert derive_cache_key("https://example.com/a") != derive_cache_key(
            "https://example.com/b"
        )


class TestTabStateKey:
    """Tests for tab_state_key."""

    def test_decimal_tab_id(self):
        """Tab flags are keyed by the decimal tab id."""
        assert tab_state_key(42) == "42"
