"""
authcrypt Utilities Package

Byte and integer conversions shared by the random primitives.
"""

from authcrypt.utils.codec import (
    base64_to_long,
    binary_to_long,
    long_to_base64,
    long_to_binary,
    strxor,
)

__all__ = [
    "long_to_binary",
    "binary_to_long",
    "long_to_base64",
    "base64_to_long",
    "strxor",
]
