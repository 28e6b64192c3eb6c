"""Tests for short code generation."""

import base64
import hashlib
import re

import pytest
from urlshortener.shortcode import ShortCodeGenerator


CODE_PATTERN = re.compile(r"[A-Za-z0-9_-]+")


class TestShortCodeGenerator:
    """Test short code generation."""

    def test_generate_matches_hash_construction(self):
        """Code is the truncated unpadded urlsafe base64 of sha256(url:attempt)."""
        generator = ShortCodeGenerator(default_length=7)
        canonical = "https://example.com/page"

        digest = hashlib.sha256(f"{canonical}:0".encode("utf-8")).digest()
        expected = base64.urlsafe_b64encode(digest).decode().rstrip("=")[:7]

        assert generator.generate(canonical, 0) == expected

    def test_generate_deterministic(self):
        generator = ShortCodeGenerator(default_length=7)

        url = "https://example.com/test"
        assert generator.generate(url) == generator.generate(url)
        assert generator.generate(url, 3) == generator.generate(url, 3)

    def test_attempts_give_different_codes(self):
        generator = ShortCodeGenerator(default_length=7)

        codes = {generator.generate("https://example.com/test", attempt) for attempt in range(5)}
        assert len(codes) == 5

    @pytest.mark.parametrize("length", [4, 7, 12])
    def test_code_length_and_alphabet(self, length):
        generator = ShortCodeGenerator(default_length=length)

        for i in range(50):
            code = generator.generate(f"https://example.com/page_{i}")
            assert len(code) == length
            assert CODE_PATTERN.fullmatch(code)
            assert generator.is_valid_format(code)

    @pytest.mark.parametrize("length", [0, 3, 13, 44])
    def test_length_out_of_range(self, length):
        with pytest.raises(ValueError, match="between 4 and 12"):
            ShortCodeGenerator(default_length=length)

    def test_is_valid_format(self):
        assert ShortCodeGenerator.is_valid_format("abc123")
        assert ShortCodeGenerator.is_valid_format("ABC_123")
        assert ShortCodeGenerator.is_valid_format("test-code")

        assert not ShortCodeGenerator.is_valid_format("")
        assert not ShortCodeGenerator.is_valid_format("abc 123")
        assert not ShortCodeGenerator.is_valid_format("abc@123")
        assert not ShortCodeGenerator.is_valid_format("abc=")
