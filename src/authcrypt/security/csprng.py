import logging
import os
import random
from typing import Optional

from authcrypt.core.crypto_exceptions import EntropyUnavailableError, ValidationError

logger = logging.getLogger(__name__)


class CSPRNG:
    """
    Source of random bytes.

    Reads ``os.urandom`` by default, or the file named by ``source`` (for
    example ``/dev/urandom``). When the secure source fails, bytes come from
    the ``random`` module only if ``allow_insecure`` was explicitly set;
    otherwise EntropyUnavailableError is raised.
    """

    def __init__(self, source: Optional[str] = None, allow_insecure: bool = False):
        self.source = source
        self.allow_insecure = allow_insecure
        self._insecure = None
        logger.info(
            "CSPRNG initialized",
            extra={
                "event": "csprng.init",
                "source": source or "os.urandom",
                "allow_insecure": allow_insecure,
            },
        )

    @classmethod
    def from_settings(cls, settings) -> "CSPRNG":
        return cls(source=settings.rand_source, allow_insecure=settings.use_insecure_rand)

    def generate_bytes(self, num_bytes: int) -> bytes:
        """
        Return exactly ``num_bytes`` random bytes.

        Raises:
            ValidationError: If num_bytes is not a non-negative integer
            EntropyUnavailableError: If the secure source fails and the
                insecure fallback is not enabled
        """
        if not isinstance(num_bytes, int) or isinstance(num_bytes, bool) or num_bytes < 0:
            raise ValidationError("Number of bytes must be a non-negative integer.")
        if num_bytes == 0:
            return b""

        try:
            return self._read_secure(num_bytes)
        except (OSError, NotImplementedError) as exc:
            if not self.allow_insecure:
                logger.error(
                    "Secure random source unavailable",
                    extra={"event": "csprng.unavailable", "source": self.source or "os.urandom"},
                )
                raise EntropyUnavailableError(
                    f"Secure random source unavailable: {exc}. Set "
                    "AUTHCRYPT_USE_INSECURE_RAND=1 to continue with insecure random.",
                    details={"source": self.source or "os.urandom"},
                ) from exc

        logger.warning(
            "Falling back to insecure pseudo-random bytes",
            extra={"event": "csprng.insecure_fallback", "num_bytes": num_bytes},
        )
        return self._read_insecure(num_bytes)

    def _read_secure(self, num_bytes: int) -> bytes:
        if self.source is None:
            return os.urandom(num_bytes)

        chunks = []
        remaining = num_bytes
        with open(self.source, "rb") as f:
            while remaining > 0:
                chunk = f.read(remaining)
                if not chunk:
                    raise OSError(
                        f"Short read from {self.source}: wanted {num_bytes} bytes, "
                        f"got {num_bytes - remaining}"
                    )
                chunks.append(chunk)
                remaining -= len(chunk)
        return b"".join(chunks)

    def _read_insecure(self, num_bytes: int) -> bytes:
        if self._insecure is None:
            self._insecure = random.Random()
        return self._insecure.getrandbits(num_bytes * 8).to_bytes(num_bytes, "big")
