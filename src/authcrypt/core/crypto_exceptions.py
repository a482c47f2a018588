"""
Exception hierarchy for authcrypt.

Provides typed exceptions for the randomness, codec and big-integer
primitives so callers can tell configuration failures (no entropy, no math
backend) apart from input validation failures.
"""

from __future__ import annotations
from typing import Optional, Any, Dict


class CryptoError(Exception):
    """Base exception for all authcrypt errors.

    Attributes:
        message: Human-readable error description
        details: Additional context about the error
        recoverable: Whether the caller can reasonably continue
    """

    recoverable = False

    def __init__(
        self,
        message: str,
        details: Optional[Dict[str, Any]] = None,
        recoverable: Optional[bool] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}
        if recoverable is not None:
            self.recoverable = recoverable


# ==================== Configuration Errors ====================


class ConfigurationError(CryptoError):
    """Raised when required configuration is missing or invalid."""
    pass


class NoBigIntBackendError(ConfigurationError):
    """Raised when no big integer math library can be loaded.

    Set AUTHCRYPT_NO_MATH_SUPPORT=1 to run without one.
    """
    pass


class EntropyUnavailableError(ConfigurationError):
    """Raised when the secure random source cannot supply bytes.

    Set AUTHCRYPT_USE_INSECURE_RAND=1 to fall back to a PRNG.
    """
    pass


class SecurityConfigurationError(ConfigurationError):
    """Raised when insecure configuration is detected in production."""
    pass


# ==================== Validation Errors ====================


class ValidationError(CryptoError):
    """Raised when caller input fails validation."""
    pass


class NegativeInputError(ValidationError):
    """Raised when a negative number is passed to a non-negative encoder."""
    pass


class InvalidEncodingError(ValidationError):
    """Raised when byte or base64 input cannot be decoded."""
    pass


class NegativeEncodingError(InvalidEncodingError):
    """Raised when a byte string has its sign bit set.

    The binary long encoding is reserved for non-negative values.
    """
    recoverable = True


class LengthMismatchError(ValidationError):
    """Raised when XOR operands differ in length."""
    pass


class AlphabetTooLargeError(ValidationError):
    """Raised when a random string population exceeds 256 symbols."""
    pass


class EmptyRangeError(ValidationError):
    """Raised when a sampling range contains no elements."""
    pass
