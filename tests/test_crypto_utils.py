"""
Test the public random value and long number helpers.

Tests cover:
- Random bytes and random strings through the default sampler
- randrange boundaries and step semantics
- Long number encodings exposed at package level
- Error propagation from the underlying primitives
"""

from __future__ import annotations

import pytest

import authcrypt
from authcrypt.core.crypto_exceptions import (
    AlphabetTooLargeError,
    EntropyUnavailableError,
    LengthMismatchError,
    NoBigIntBackendError,
)
from authcrypt.core.crypto_utils import (
    base64_to_long,
    binary_to_long,
    get_random_bytes,
    long_to_base64,
    long_to_binary,
    math_backend_type,
    random_string,
    randrange,
    strxor,
)


class TestRandomHelpers:
    """Tests for the randomness helpers."""

    def test_get_random_bytes_length(self):
        assert len(get_random_bytes(32)) == 32

    def test_random_string_population(self):
        value = random_string(1000, "AB")
        assert set(value) <= {"A", "B"}

    def test_random_string_alphabet_too_large(self):
        alphabet = "".join(chr(0x100 + i) for i in range(300))
        with pytest.raises(AlphabetTooLargeError):
            random_string(10, alphabet)

    def test_randrange_boundaries(self):
        assert randrange(5, 6) == 5
        for _ in range(100):
            assert 0 <= randrange(0, 256) < 256

    def test_randrange_step(self):
        for _ in range(100):
            value = randrange(0, 100, 10)
            assert value % 10 == 0
            assert 0 <= value < 100

    def test_randrange_accepts_huge_bounds(self):
        stop = 2 ** 2048
        value = randrange(stop)
        assert 0 <= value < stop

    def test_configured_missing_source_fails_closed(self, monkeypatch, tmp_path):
        monkeypatch.setenv("AUTHCRYPT_RAND_SOURCE", str(tmp_path / "missing"))
        monkeypatch.setenv("AUTHCRYPT_USE_INSECURE_RAND", "0")
        with pytest.raises(EntropyUnavailableError):
            get_random_bytes(8)

    def test_configured_missing_source_with_opt_in(self, monkeypatch, tmp_path):
        monkeypatch.setenv("AUTHCRYPT_RAND_SOURCE", str(tmp_path / "missing"))
        monkeypatch.setenv("AUTHCRYPT_USE_INSECURE_RAND", "1")
        assert len(get_random_bytes(8)) == 8


class TestLongEncodings:
    """Tests for long number conversions."""

    def test_binary_round_trip(self):
        value = 2 ** 160 + 7
        assert binary_to_long(long_to_binary(value)) == value

    def test_base64_round_trip(self):
        value = int("155172898181473697471232257763715539915724801966915404479707795314057629378541917580651227423698188993727816152646631438561595825688188889951272158842675419950341258706556549803580104870537681476726513255747040765857479291291572334510643245094715007229621094194349783925984760375594985848253359305585439638443")
        assert base64_to_long(long_to_base64(value)) == value

    def test_strxor_length_mismatch(self):
        with pytest.raises(LengthMismatchError):
            strxor(b"a", b"ab")

    def test_package_exports(self):
        assert authcrypt.randrange is randrange
        assert authcrypt.long_to_binary is long_to_binary
        assert authcrypt.__version__ == "0.1.0"


class TestMathBackend:
    """Tests for backend reporting and no-math mode."""

    def test_backend_type(self):
        assert math_backend_type() in {"gmpy2", "python"}

    def test_python_backend_forced(self, monkeypatch):
        monkeypatch.setenv("AUTHCRYPT_MATH_BACKENDS", "python")
        assert math_backend_type() == "python"
        assert isinstance(randrange(10), int)

    def test_no_math_support_blocks_big_integer_operations(self, monkeypatch):
        monkeypatch.setenv("AUTHCRYPT_NO_MATH_SUPPORT", "1")
        assert math_backend_type() is None
        assert len(get_random_bytes(4)) == 4
        with pytest.raises(NoBigIntBackendError):
            randrange(10)
        with pytest.raises(NoBigIntBackendError):
            long_to_binary(1)
