"""
authcrypt Startup Validator

Checks, before a service starts issuing secrets, that a secure random source
and a big integer backend are available and that no insecure fallback is
enabled in production.

CRITICAL: Predictable randomness in production compromises every nonce,
association secret and Diffie-Hellman exponent derived from it.
"""

import logging
import sys
from typing import NamedTuple, Optional

from authcrypt.bigmath.loader import extensions_by_name, get_math_library
from authcrypt.core.config import CryptoSettings, get_settings
from authcrypt.core.crypto_exceptions import SecurityConfigurationError
from authcrypt.security.csprng import CSPRNG

logger = logging.getLogger(__name__)


class SecurityBypass(NamedTuple):
    """Represents a security bypass configuration."""
    env_var: str
    setting: str  # CryptoSettings attribute holding the parsed flag
    description: str
    severity: str  # "critical" or "warning"


DANGEROUS_BYPASSES = [
    SecurityBypass(
        env_var="AUTHCRYPT_USE_INSECURE_RAND",
        setting="use_insecure_rand",
        description="Allows falling back to a non-cryptographic PRNG for secrets",
        severity="critical",
    ),
]

WARNING_BYPASSES = [
    SecurityBypass(
        env_var="AUTHCRYPT_NO_MATH_SUPPORT",
        setting="no_math_support",
        description="Disables big integer math; range sampling and long encoding fail",
        severity="warning",
    ),
]

ENTROPY_CHECK_BYTES = 16


def is_production_mode(settings: Optional[CryptoSettings] = None) -> bool:
    """Check whether AUTHCRYPT_PRODUCTION_MODE marks this process as production."""
    return (settings or get_settings()).production_mode


def is_bypass_enabled(bypass: SecurityBypass, settings: Optional[CryptoSettings] = None) -> bool:
    """Check if a bypass is switched on in ``settings`` (defaults to the environment)."""
    return bool(getattr(settings or get_settings(), bypass.setting))


def validate_crypto_configuration(
    fail_on_critical: bool = True,
    warn_on_advisory: bool = True,
    settings: Optional[CryptoSettings] = None,
    rng: Optional[CSPRNG] = None,
) -> bool:
    """
    Validate bypass flags and check the random source and math backend.

    In production mode a critical bypass raises SecurityConfigurationError.
    A random source or math backend that cannot be used raises its own
    configuration error in every mode.

    Args:
        fail_on_critical: If True, raise on critical bypasses in production
        warn_on_advisory: If True, log warnings for advisory bypasses
        settings: Settings to validate (defaults to the environment)
        rng: Random source to check (defaults to one built from settings)

    Returns:
        True if configuration is secure, False otherwise

    Raises:
        SecurityConfigurationError: If a critical bypass is set in production
        EntropyUnavailableError: If the random source cannot supply bytes
        NoBigIntBackendError: If no math backend loads
    """
    settings = settings or CryptoSettings.from_environment()
    production = is_production_mode(settings)
    is_secure = True
    critical_issues = []

    for bypass in DANGEROUS_BYPASSES:
        if is_bypass_enabled(bypass, settings):
            msg = f"CRITICAL: {bypass.env_var} is enabled - {bypass.description}"
            critical_issues.append(msg)
            logger.critical(msg, extra={"event": "startup.bypass", "env_var": bypass.env_var})
            is_secure = False

    for bypass in WARNING_BYPASSES:
        if is_bypass_enabled(bypass, settings) and warn_on_advisory:
            logger.warning(
                f"WARNING: {bypass.env_var} is enabled - {bypass.description}",
                extra={"event": "startup.bypass", "env_var": bypass.env_var},
            )

    if production and critical_issues and fail_on_critical:
        error_msg = (
            "SECURITY ERROR: Cannot start in production mode with "
            "security bypasses enabled:\n" + "\n".join(critical_issues)
        )
        logger.critical(error_msg)
        raise SecurityConfigurationError(
            error_msg, details={"critical_issues": critical_issues}
        )

    rng = rng or CSPRNG.from_settings(settings)
    rng.generate_bytes(ENTROPY_CHECK_BYTES)

    lib = get_math_library(
        extensions=extensions_by_name(settings.math_backends),
        no_math_support=settings.no_math_support,
    )
    logger.info(
        "Crypto startup checks passed",
        extra={
            "event": "startup.validated",
            "math_backend": lib.type if lib is not None else None,
            "secure": is_secure,
        },
    )

    if not is_secure and not production:
        logger.warning(
            "Security bypasses detected in non-production mode. "
            "This would fail in production."
        )

    return is_secure


def enforce_production_security() -> None:
    """
    Enforce security requirements at service start.

    Exits with code 1 if a critical bypass is enabled in production.
    """
    try:
        validate_crypto_configuration(fail_on_critical=True, warn_on_advisory=True)
    except SecurityConfigurationError as e:
        print(f"\n{'='*60}", file=sys.stderr)
        print("SECURITY ERROR: STARTUP BLOCKED", file=sys.stderr)
        print(f"{'='*60}", file=sys.stderr)
        print(str(e), file=sys.stderr)
        print("\nTo fix: Remove the dangerous environment variables.", file=sys.stderr)
        print("If this is development, set AUTHCRYPT_PRODUCTION_MODE=0", file=sys.stderr)
        print(f"{'='*60}\n", file=sys.stderr)
        sys.exit(1)


def get_security_status(settings: Optional[CryptoSettings] = None) -> dict:
    """
    Get current security configuration status.

    Args:
        settings: Settings to report on (defaults to the environment)

    Returns:
        Dictionary with security status information
    """
    settings = settings or get_settings()
    critical_enabled = [b.env_var for b in DANGEROUS_BYPASSES if is_bypass_enabled(b, settings)]
    warnings_enabled = [b.env_var for b in WARNING_BYPASSES if is_bypass_enabled(b, settings)]

    return {
        "production_mode": is_production_mode(settings),
        "is_secure": len(critical_enabled) == 0,
        "critical_bypasses_enabled": critical_enabled,
        "warning_bypasses_enabled": warnings_enabled,
        "total_bypasses": len(critical_enabled) + len(warnings_enabled),
    }
