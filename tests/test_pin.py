"""Tests for PIN hashing and verification."""

import pytest

from installment_tracker.exceptions import ValidationError
from installment_tracker.pin import hash_pin, new_pin_hash, validate_pin_format, verify_pin


class TestPinFormat:
    """Tests for validate_pin_format."""

    @pytest.mark.parametrize("pin", ["1234", "12345", "123456", "0000"])
    def test_valid(self, pin: str) -> None:
        assert validate_pin_format(pin)

    @pytest.mark.parametrize("pin", ["", "123", "1234567", "12a4", " 1234", "١٢٣٤"])
    def test_invalid(self, pin: str) -> None:
        assert not validate_pin_format(pin)

    def test_non_string(self) -> None:
        assert not validate_pin_format(1234)  # type: ignore[arg-type]


class TestHashing:
    """Tests for hash_pin and verify_pin."""

    def test_sha256_hex(self) -> None:
        assert hash_pin("1234") == "03ac674216f3e15c761ee1a5e255f067953623c8b388b4459e13f978d7c846f4"

    def test_unsalted(self) -> None:
        assert hash_pin("9876") == hash_pin("9876")

    def test_verify(self) -> None:
        digest = hash_pin("4321")
        assert verify_pin("4321", digest)
        assert not verify_pin("4322", digest)


class TestNewPinHash:
    """Tests for new_pin_hash."""

    def test_valid(self) -> None:
        assert new_pin_hash("5555", "5555") == hash_pin("5555")

    def test_without_confirmation(self) -> None:
        assert new_pin_hash("5555") == hash_pin("5555")

    def test_bad_format(self) -> None:
        with pytest.raises(ValidationError, match="4-6 digits"):
            new_pin_hash("12")

    def test_mismatch(self) -> None:
        with pytest.raises(ValidationError, match="do not match") as exc_info:
            new_pin_hash("1234", "4321")
        assert exc_info.value.field == "pin_confirmation"
