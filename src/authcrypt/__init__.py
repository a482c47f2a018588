"""
authcrypt - Cryptographic utilities for authentication protocols

Random bytes, unbiased random integers over arbitrary ranges, random strings
over an alphabet, and canonical long <-> binary <-> base64 conversions, all
on top of a pluggable big integer backend (GMP through gmpy2 when installed,
Python integers otherwise).

Main Components:
- bigmath: Math backend interface and process-wide backend selection
- utils: Long number encodings and XOR
- security: Random source, range sampler, startup validation
- core: Configuration, logging, exceptions and the public helpers
"""

__version__ = "0.1.0"
__author__ = "authcrypt Development Team"

from authcrypt.core.crypto_utils import (
    base64_to_long,
    binary_to_long,
    get_math_library,
    get_random_bytes,
    long_to_base64,
    long_to_binary,
    math_backend_type,
    random_string,
    randrange,
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
