"""
authcrypt Configuration

All settings come from environment variables so deployments can tune the
random source and the big integer backend without code changes.

SECURITY NOTICE:
- AUTHCRYPT_USE_INSECURE_RAND must never be set on a production host
- AUTHCRYPT_NO_MATH_SUPPORT disables every operation that needs big integers
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Tuple

from authcrypt.core.crypto_exceptions import ConfigurationError

logger = logging.getLogger(__name__)

TRUE_VALUES = {"1", "true", "yes", "on"}
FALSE_VALUES = {"0", "false", "no", "off", ""}

DEFAULT_MATH_BACKENDS = "gmpy2,python"
DEFAULT_DUPLICATE_CACHE_LIMIT = 10


def _env_flag(env: Mapping[str, str], env_var: str, default: str = "0") -> bool:
    value = env.get(env_var, default).strip().lower()
    if value in TRUE_VALUES:
        return True
    if value in FALSE_VALUES:
        return False
    raise ConfigurationError(
        f"{env_var} must be a boolean flag, got {value!r}",
        details={"env_var": env_var, "value": value},
    )


def _env_int(env: Mapping[str, str], env_var: str, default: int, minimum: int = 1) -> int:
    raw = env.get(env_var, "").strip()
    if not raw:
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ConfigurationError(
            f"{env_var} must be an integer, got {raw!r}",
            details={"env_var": env_var, "value": raw},
        )
    if value < minimum:
        raise ConfigurationError(
            f"{env_var} must be at least {minimum}, got {value}",
            details={"env_var": env_var, "value": value},
        )
    return value


def _env_list(env: Mapping[str, str], env_var: str, default: str) -> Tuple[str, ...]:
    raw = env.get(env_var, default)
    return tuple(item.strip().lower() for item in raw.split(",") if item.strip())


@dataclass(frozen=True)
class CryptoSettings:
    """Resolved authcrypt settings."""

    rand_source: Optional[str] = None
    use_insecure_rand: bool = False
    no_math_support: bool = False
    math_backends: Tuple[str, ...] = tuple(DEFAULT_MATH_BACKENDS.split(","))
    duplicate_cache_limit: int = DEFAULT_DUPLICATE_CACHE_LIMIT
    production_mode: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_environment(cls, env: Optional[Mapping[str, str]] = None) -> "CryptoSettings":
        """Build settings from ``env`` (defaults to ``os.environ``).

        Raises:
            ConfigurationError: If a variable holds an unusable value
        """
        env = os.environ if env is None else env

        log_level = env.get("AUTHCRYPT_LOG_LEVEL", "INFO").strip().upper() or "INFO"
        if log_level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ConfigurationError(
                f"AUTHCRYPT_LOG_LEVEL is not a logging level: {log_level!r}",
                details={"env_var": "AUTHCRYPT_LOG_LEVEL", "value": log_level},
            )

        settings = cls(
            rand_source=env.get("AUTHCRYPT_RAND_SOURCE", "").strip() or None,
            use_insecure_rand=_env_flag(env, "AUTHCRYPT_USE_INSECURE_RAND"),
            no_math_support=_env_flag(env, "AUTHCRYPT_NO_MATH_SUPPORT"),
            math_backends=_env_list(env, "AUTHCRYPT_MATH_BACKENDS", DEFAULT_MATH_BACKENDS),
            duplicate_cache_limit=_env_int(
                env, "AUTHCRYPT_DUPLICATE_CACHE_LIMIT", DEFAULT_DUPLICATE_CACHE_LIMIT
            ),
            production_mode=_env_flag(env, "AUTHCRYPT_PRODUCTION_MODE"),
            log_level=log_level,
        )

        if settings.use_insecure_rand:
            logger.warning(
                "Security: AUTHCRYPT_USE_INSECURE_RAND is set, random values may be predictable",
                extra={"event": "config.insecure_rand_enabled"},
            )
        return settings


def get_settings() -> CryptoSettings:
    """Read the current environment into a fresh CryptoSettings."""
    return CryptoSettings.from_environment()
