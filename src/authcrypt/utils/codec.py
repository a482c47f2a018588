"""
Long number and byte string conversions.

Encodings are big-endian and reserved for non-negative values: a leading
zero byte is added whenever the first byte would otherwise have its high bit
set, and inputs with the high bit set are rejected on decode.
"""

from __future__ import annotations

import base64
import binascii
from typing import Union

from authcrypt.bigmath.loader import require_math_library
from authcrypt.core.crypto_exceptions import (
    InvalidEncodingError,
    LengthMismatchError,
    NegativeEncodingError,
    NegativeInputError,
)

BytesLike = Union[bytes, bytearray, memoryview]


def long_to_binary(long) -> bytes:
    """
    Convert a non-negative long number to its binary string.

    Args:
        long: Integer of arbitrary magnitude (int or backend value)

    Returns:
        Canonical big-endian bytes; ``b"\\x00"`` for zero

    Raises:
        NegativeInputError: If ``long`` is negative
    """
    lib = require_math_library()

    cmp = lib.cmp(long, 0)
    if cmp < 0:
        raise NegativeInputError(
            "long_to_binary takes only non-negative integers",
            details={"value": str(long)},
        )
    if cmp == 0:
        return b"\x00"

    out = bytearray()
    while lib.cmp(long, 0) > 0:
        out.append(int(lib.mod(long, 256)))
        long = lib.div(long, 256)
    out.reverse()

    if out[0] > 127:
        out.insert(0, 0)

    return bytes(out)


def binary_to_long(data: BytesLike):
    """
    Convert a binary string produced by long_to_binary back to a long.

    Raises:
        NegativeEncodingError: If the first byte has its high bit set
        InvalidEncodingError: If ``data`` is not bytes-like
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise InvalidEncodingError(
            f"binary_to_long expects bytes, got {type(data).__name__}"
        )

    lib = require_math_library()
    data = bytes(data)

    if data and data[0] > 127:
        raise NegativeEncodingError(
            "binary_to_long works only for non-negative integers",
            details={"first_byte": data[0]},
        )

    n = lib.init(0)
    for byte in data:
        n = lib.mul(n, 256)
        n = lib.add(n, byte)
    return n


def long_to_base64(long) -> str:
    """Encode a non-negative long as base64 text."""
    return base64.b64encode(long_to_binary(long)).decode("ascii")


def base64_to_long(text: Union[str, bytes]):
    """
    Decode base64 text produced by long_to_base64.

    Raises:
        InvalidEncodingError: If ``text`` is not valid base64
        NegativeEncodingError: If the decoded bytes have the sign bit set
    """
    if isinstance(text, str):
        try:
            text = text.encode("ascii")
        except UnicodeEncodeError:
            raise InvalidEncodingError("base64 input must be ASCII")
    elif not isinstance(text, (bytes, bytearray)):
        raise InvalidEncodingError(
            f"base64_to_long expects str or bytes, got {type(text).__name__}"
        )

    try:
        data = base64.b64decode(text, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidEncodingError(
            f"Invalid base64 input: {exc}",
            details={"length": len(text)},
        )
    return binary_to_long(data)


def strxor(x: BytesLike, y: BytesLike) -> bytes:
    """
    XOR two byte strings of equal length.

    Raises:
        LengthMismatchError: If the inputs differ in length
    """
    if len(x) != len(y):
        raise LengthMismatchError(
            "strxor requires inputs of equal length",
            details={"left": len(x), "right": len(y)},
        )
    return bytes(a ^ b for a, b in zip(x, y))
