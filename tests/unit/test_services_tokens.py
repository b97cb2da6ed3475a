"""Unit tests for xsrf_guard.services.tokens: secret and token logic."""

import pytest

from xsrf_guard.config import TokenOptions
from xsrf_guard.services.tokens import Tokens


@pytest.fixture
def tokens():
    return Tokens()


class TestSecret:
    def test_default_length(self, tokens):
        # 18 random bytes -> 24 URL-safe base64 characters
        secret = tokens.secret_sync()
        assert isinstance(secret, str)
        assert len(secret) == 24

    def test_secret_length_option(self):
        secret = Tokens(TokenOptions(secret_length=32)).secret_sync()
        assert len(secret) == 43

    def test_secrets_are_unique(self, tokens):
        assert len({tokens.secret_sync() for _ in range(50)}) == 50

    async def test_async_secret(self, tokens):
        secret = await tokens.secret()
        assert len(secret) == 24


class TestCreate:
    def test_token_format(self, tokens):
        token = tokens.create("abc123")
        salt, _, digest = token.partition("-")
        assert len(salt) == 8
        assert salt.isalnum()
        # SHA-1 is 20 bytes -> 27 unpadded base64 characters
        assert len(digest) == 27
        assert "=" not in digest

    def test_salt_length_option(self):
        token = Tokens(TokenOptions(salt_length=3)).create("abc123")
        assert token.index("-") == 3

    def test_tokens_differ_per_call(self, tokens):
        assert tokens.create("abc123") != tokens.create("abc123")

    @pytest.mark.parametrize("secret", [None, "", 42])
    def test_missing_secret_raises(self, tokens, secret):
        with pytest.raises(TypeError):
            tokens.create(secret)


class TestVerify:
    def test_round_trip(self, tokens):
        secret = tokens.secret_sync()
        assert tokens.verify(secret, tokens.create(secret)) is True

    def test_every_token_verifies(self, tokens):
        a = tokens.create("abc123")
        b = tokens.create("abc123")
        assert tokens.verify("abc123", a)
        assert tokens.verify("abc123", b)

    def test_other_secret_rejected(self, tokens):
        token = tokens.create(tokens.secret_sync())
        assert tokens.verify(tokens.secret_sync(), token) is False

    def test_verify_is_independent_of_salt_length(self):
        token = Tokens(TokenOptions(salt_length=20)).create("abc123")
        assert Tokens().verify("abc123", token) is True

    @pytest.mark.parametrize("token", [None, "", "no-dash-digest", "nodash", 123, "ñ-ü"])
    def test_malformed_token(self, tokens, token):
        assert tokens.verify("abc123", token) is False

    @pytest.mark.parametrize("secret", [None, "", 42])
    def test_missing_secret(self, tokens, secret):
        assert tokens.verify(secret, tokens.create("abc123")) is False

    def test_tampered_digest(self, tokens):
        token = tokens.create("abc123")
        tampered = token[:-1] + ("A" if token[-1] != "A" else "B")
        assert tokens.verify("abc123", tampered) is False

    def test_tampered_salt(self, tokens):
        token = tokens.create("abc123")
        tampered = ("x" if token[0] != "x" else "y") + token[1:]
        assert tokens.verify("abc123", tampered) is False
