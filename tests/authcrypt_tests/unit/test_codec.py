"""
Unit tests for long number encodings and XOR.

Coverage targets:
- Sign guard byte on encode, rejection of sign-bit input on decode
- Known vectors for long_to_binary / binary_to_long / base64
- Error types for negative input, malformed base64, length mismatch
"""

import pytest

from authcrypt.core.crypto_exceptions import (
    InvalidEncodingError,
    LengthMismatchError,
    NegativeEncodingError,
    NegativeInputError,
    ValidationError,
)
from authcrypt.utils.codec import (
    base64_to_long,
    binary_to_long,
    long_to_base64,
    long_to_binary,
    strxor,
)


@pytest.fixture(params=["python", "gmpy2"], autouse=True)
def math_backend(request, monkeypatch):
    if request.param == "gmpy2":
        pytest.importorskip("gmpy2")
    monkeypatch.setenv("AUTHCRYPT_MATH_BACKENDS", request.param)
    return request.param


class TestLongToBinary:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (0, b"\x00"),
            (1, b"\x01"),
            (127, b"\x7f"),
            (128, b"\x00\x80"),
            (255, b"\x00\xff"),
            (256, b"\x01\x00"),
            (32767, b"\x7f\xff"),
            (32768, b"\x00\x80\x00"),
            (2 ** 64, b"\x01" + b"\x00" * 8),
        ],
    )
    def test_known_vectors(self, value, expected):
        assert long_to_binary(value) == expected

    def test_negative_rejected(self):
        with pytest.raises(NegativeInputError):
            long_to_binary(-1)

    def test_negative_input_is_validation_error(self):
        with pytest.raises(ValidationError):
            long_to_binary(-(2 ** 100))

    def test_first_byte_never_has_sign_bit(self):
        for bits in range(1, 200):
            encoded = long_to_binary(2 ** bits - 1)
            assert encoded[0] <= 127
            if len(encoded) > 1 and encoded[0] == 0:
                assert encoded[1] > 127


class TestBinaryToLong:
    def test_known_vectors(self):
        assert binary_to_long(b"") == 0
        assert binary_to_long(b"\x00") == 0
        assert binary_to_long(b"\x00\x80") == 128
        assert binary_to_long(b"\x01\x00") == 256
        assert binary_to_long(bytearray(b"\x7f\xff")) == 32767

    def test_leading_zeros_are_accepted(self):
        assert binary_to_long(b"\x00\x00\x05") == 5

    def test_sign_bit_rejected(self):
        with pytest.raises(NegativeEncodingError) as exc_info:
            binary_to_long(b"\x80")
        assert exc_info.value.recoverable is True
        assert exc_info.value.details["first_byte"] == 0x80

    def test_non_bytes_rejected(self):
        with pytest.raises(InvalidEncodingError):
            binary_to_long("\x01")

    def test_canonical_bytes_survive_round_trip(self):
        for encoded in (b"\x00", b"\x01", b"\x00\xff", b"\x12\x34\x56", b"\x00\x80\x00\x01"):
            assert long_to_binary(binary_to_long(encoded)) == encoded


class TestBase64:
    def test_known_vectors(self):
        assert long_to_base64(0) == "AA=="
        assert long_to_base64(128) == "AIA="
        assert base64_to_long("AIA=") == 128
        assert base64_to_long(b"AQA=") == 256

    def test_large_value(self):
        value = 2 ** 1024 + 12345
        assert base64_to_long(long_to_base64(value)) == value

    @pytest.mark.parametrize("text", ["A", "AI=A", "!!!!", "AIA", "é"])
    def test_malformed_input_rejected(self, text):
        with pytest.raises(InvalidEncodingError):
            base64_to_long(text)

    def test_sign_bit_after_decode_rejected(self):
        with pytest.raises(NegativeEncodingError):
            base64_to_long("gA==")

    def test_wrong_type_rejected(self):
        with pytest.raises(InvalidEncodingError):
            base64_to_long(12)


class TestStrxor:
    def test_known_value(self):
        assert strxor(b"\x0f\xf0", b"\xff\xff") == b"\xf0\x0f"

    def test_commutative_and_self_inverse(self):
        a = b"authcrypt-secret"
        b = b"0123456789abcdef"
        assert strxor(a, b) == strxor(b, a)
        assert strxor(a, a) == b"\x00" * len(a)
        assert strxor(strxor(a, b), b) == a

    def test_empty(self):
        assert strxor(b"", b"") == b""

    def test_length_mismatch(self):
        with pytest.raises(LengthMismatchError) as exc_info:
            strxor(b"abc", b"ab")
        assert exc_info.value.details == {"left": 3, "right": 2}
