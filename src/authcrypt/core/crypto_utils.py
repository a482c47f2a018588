"""Random value and long number helpers used by the authentication protocol layer."""

from __future__ import annotations

from typing import Optional, Union

from authcrypt.bigmath.backends import MathBackend
from authcrypt.bigmath.loader import get_math_library
from authcrypt.security.randrange import get_default_sampler
from authcrypt.utils.codec import (
    base64_to_long,
    binary_to_long,
    long_to_base64,
    long_to_binary,
    strxor,
)

__all__ = [
    "get_math_library",
    "get_random_bytes",
    "random_string",
    "randrange",
    "long_to_binary",
    "binary_to_long",
    "long_to_base64",
    "base64_to_long",
    "strxor",
    "math_backend_type",
]


def get_random_bytes(num_bytes: int) -> bytes:
    return get_default_sampler().rng.generate_bytes(num_bytes)


def random_string(length: int, population: Union[str, bytes, None] = None):
    """
    Produce a string of ``length`` random symbols chosen from ``population``.

    If population is None the result may contain any byte value.
    """
    return get_default_sampler().random_string(length, population)


def randrange(start, stop=None, step=1):
    """
    Return a random number in ``[start, stop)`` such that
    ``result - start`` is a multiple of ``step``.

    Accepts values of arbitrary magnitude.
    """
    return get_default_sampler().randrange(start, stop, step)


def math_backend_type() -> Optional[str]:
    lib: Optional[MathBackend] = get_math_library()
    return lib.type if lib is not None else None
