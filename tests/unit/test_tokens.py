"""Tests for the token generator."""

import re

from app.services.survey import TOKEN_ALPHABET, TokenGenerator

TOKEN_RE = re.compile(r"^[A-Z0-9]{6}$")


class TestTokenGenerator:
    def test_format(self):
        gen = TokenGenerator()
        assert all(TOKEN_RE.match(gen.generate()) for _ in range(500))

    def test_alphabet(self):
        assert len(TOKEN_ALPHABET) == 36

    def test_custom_length(self):
        assert len(TokenGenerator(length=10).generate()) == 10

    def test_varies(self):
        gen = TokenGenerator()
        assert len({gen.generate() for _ in range(100)}) > 90
