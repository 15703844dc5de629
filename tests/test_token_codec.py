"""
Tests for the signed bearer token codec.
"""

import json
from base64 import urlsafe_b64decode, urlsafe_b64encode

import pytest

from auth.jwt import TokenCodec
from utils.errors import ConfigurationError, InvalidTokenError, TokenExpiredError

USER_ID = "33d22033-1caa-474e-a9ad-c8e2a208bf4b"


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def _codec(clock=None, secret="s3cret") -> TokenCodec:
    return TokenCodec(secret, expiry_seconds=3600, clock=clock or FakeClock())


class TestMint:
    def test_round_trip(self):
        codec = _codec()
        assert codec.verify(codec.mint(USER_ID)) == USER_ID

    def test_payload_carries_expiry_one_hour_out(self):
        clock = FakeClock()
        token = _codec(clock).mint(USER_ID)
        payload = json.loads(urlsafe_b64decode(token.split(".")[0]))
        assert payload["user_id"] == USER_ID
        assert payload["exp"] == int(clock.now) + 3600

    @pytest.mark.parametrize("secret", ["", None])
    def test_missing_secret_is_fatal(self, secret):
        with pytest.raises(ConfigurationError):
            TokenCodec(secret)


class TestExpiry:
    def test_accepted_at_59_minutes(self):
        clock = FakeClock()
        codec = _codec(clock)
        token = codec.mint(USER_ID)
        clock.advance(59 * 60)
        assert codec.verify(token) == USER_ID

    def test_rejected_at_61_minutes(self):
        clock = FakeClock()
        codec = _codec(clock)
        token = codec.mint(USER_ID)
        clock.advance(61 * 60)
        with pytest.raises(TokenExpiredError):
            codec.verify(token)

    def test_expired_is_an_invalid_token(self):
        assert issubclass(TokenExpiredError, InvalidTokenError)


class TestTampering:
    def test_flipped_signature_char_rejected(self):
        codec = _codec()
        token = codec.mint(USER_ID)
        body, sig = token.split(".")
        flipped = ("0" if sig[-1] != "0" else "1")
        with pytest.raises(InvalidTokenError) as excinfo:
            codec.verify(f"{body}.{sig[:-1]}{flipped}")
        assert not isinstance(excinfo.value, TokenExpiredError)

    def test_rewritten_payload_rejected(self):
        codec = _codec()
        token = codec.mint(USER_ID)
        _, sig = token.split(".")
        forged = json.dumps({"user_id": "someone-else", "iat": 0, "exp": 9_999_999_999}).encode()
        with pytest.raises(InvalidTokenError):
            codec.verify(urlsafe_b64encode(forged).decode() + "." + sig)

    def test_other_secret_rejected(self):
        token = _codec(secret="one").mint(USER_ID)
        with pytest.raises(InvalidTokenError):
            _codec(secret="two").verify(token)

    def test_expired_and_tampered_reports_invalid(self):
        clock = FakeClock()
        codec = _codec(clock)
        body, sig = codec.mint(USER_ID).split(".")
        clock.advance(2 * 3600)
        with pytest.raises(InvalidTokenError) as excinfo:
            codec.verify(f"{body}.{'0' * len(sig)}")
        assert not isinstance(excinfo.value, TokenExpiredError)


class TestMalformed:
    @pytest.mark.parametrize(
        "token",
        ["", "no-dot", "a.b.c", ".sig", "body.", "!!!.abc", "é.é"],
    )
    def test_structurally_invalid(self, token):
        with pytest.raises(InvalidTokenError):
            _codec().verify(token)

    @pytest.mark.parametrize("junk", ["!!**", " ", "=", "+/"])
    def test_junk_inside_valid_payload_rejected(self, junk):
        codec = _codec()
        body, sig = codec.mint(USER_ID).split(".")
        with pytest.raises(InvalidTokenError):
            codec.verify(f"{body[:4]}{junk}{body[4:]}.{sig}")

    def test_padding_variants_rejected(self):
        codec = _codec()
        body, sig = codec.mint(USER_ID).split(".")
        with pytest.raises(InvalidTokenError):
            codec.verify(f"{body.rstrip('=')}.{sig}" if body.endswith("=") else f"{body}==.{sig}")

    def test_signed_non_json_payload(self):
        codec = _codec()
        raw = b"not json"
        token = urlsafe_b64encode(raw).decode() + "." + codec._sign(raw)
        with pytest.raises(InvalidTokenError):
            codec.verify(token)

    def test_signed_payload_without_user_id(self):
        codec = _codec()
        raw = json.dumps({"exp": 9_999_999_999}).encode()
        token = urlsafe_b64encode(raw).decode() + "." + codec._sign(raw)
        with pytest.raises(InvalidTokenError):
            codec.verify(token)
