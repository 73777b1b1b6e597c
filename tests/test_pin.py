# Tests for security/pin.py — scrypt PIN hashing and verification.
# Created: 2026-10-09

import re

import pytest

from homeboard.security.pin import hash_pin, is_legacy_pin, verify_pin


@pytest.fixture(scope="module")
def hashed_1234():
    return hash_pin("1234")


class TestHashPin:
    def test_format_is_salt_colon_key(self, hashed_1234):
        assert re.fullmatch(r"[0-9a-f]{32}:[0-9a-f]{128}", hashed_1234)

    def test_salt_is_random(self, hashed_1234):
        other = hash_pin("1234")
        assert other != hashed_1234
        assert other.split(":")[0] != hashed_1234.split(":")[0]

    def test_hash_is_not_legacy(self, hashed_1234):
        assert is_legacy_pin(hashed_1234) is False


class TestVerifyPin:
    def test_correct_pin(self, hashed_1234):
        assert verify_pin("1234", hashed_1234) is True

    def test_wrong_pin(self, hashed_1234):
        assert verify_pin("1235", hashed_1234) is False

    def test_every_fresh_hash_verifies(self):
        for pin in ("0000", "9876"):
            stored = hash_pin(pin)
            assert verify_pin(pin, stored) is True

    def test_scrypt_prefixed_variant(self, hashed_1234):
        assert verify_pin("1234", f"SCRYPT:{hashed_1234}") is True
        assert verify_pin("4321", f"SCRYPT:{hashed_1234}") is False

    @pytest.mark.parametrize("stored", [None, ""])
    def test_empty_credential_fails_closed(self, stored):
        assert verify_pin("1234", stored) is False

    def test_malformed_hex_returns_false(self):
        assert verify_pin("1234", "abcd:not-hex-at-all") is False

    def test_truncated_key_returns_false(self, hashed_1234):
        salt, key = hashed_1234.split(":")
        assert verify_pin("1234", f"{salt}:{key[:64]}") is False

    def test_empty_salt_or_key_returns_false(self):
        assert verify_pin("1234", ":abcd") is False
        assert verify_pin("1234", "abcd:") is False


class TestLegacyPin:
    def test_plaintext_match(self):
        assert verify_pin("1234", "1234") is True

    def test_plaintext_mismatch(self):
        assert verify_pin("9999", "1234") is False

    def test_unencodable_input_fails_closed(self):
        assert verify_pin("\ud800", "1234") is False
        assert verify_pin("1234", "\ud800") is False

    def test_three_parts_without_prefix_is_plaintext(self):
        assert verify_pin("a:b:c", "a:b:c") is True
        assert is_legacy_pin("a:b:c") is True

    def test_is_legacy_pin(self):
        assert is_legacy_pin("1234") is True
        assert is_legacy_pin(None) is False
        assert is_legacy_pin("") is False
        assert is_legacy_pin("SCRYPT:aa:bb") is False
