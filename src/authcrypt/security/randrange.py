"""
Unbiased random selection from integer ranges and alphabets.

Reducing a uniform draw from ``[0, 256**k)`` modulo ``r`` favours the residues
below ``256**k mod r``. The samplers here reject draws falling in that low
duplicate zone, which leaves every residue equally likely.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Optional, Tuple, Union

from authcrypt.bigmath.backends import MathBackend
from authcrypt.bigmath.loader import require_math_library
from authcrypt.core.config import DEFAULT_DUPLICATE_CACHE_LIMIT, get_settings
from authcrypt.core.crypto_exceptions import (
    AlphabetTooLargeError,
    EmptyRangeError,
    ValidationError,
)
from authcrypt.security.csprng import CSPRNG
from authcrypt.utils.codec import binary_to_long, long_to_binary

logger = logging.getLogger(__name__)

MAX_POPULATION = 256


class RangeSampler:
    """
    Draws uniformly distributed integers from ``[start, stop)`` by ``step``.

    Keeps a small cache of ``(duplicate, nbytes)`` pairs keyed by the binary
    encoding of the range size. The cache is emptied whenever it is full and
    a new range size arrives.
    """

    def __init__(
        self,
        rng: Optional[CSPRNG] = None,
        math_lib: Optional[MathBackend] = None,
        cache_limit: int = DEFAULT_DUPLICATE_CACHE_LIMIT,
    ):
        if not isinstance(cache_limit, int) or cache_limit <= 0:
            raise ValidationError("Cache limit must be a positive integer.")
        self.rng = rng or CSPRNG()
        self._math_lib = math_lib
        self.cache_limit = cache_limit
        self._duplicate_cache: Dict[bytes, Tuple[object, int]] = {}
        self._cache_lock = threading.Lock()

    @property
    def math_lib(self) -> MathBackend:
        if self._math_lib is None:
            self._math_lib = require_math_library()
        return self._math_lib

    @property
    def cache_size(self) -> int:
        with self._cache_lock:
            return len(self._duplicate_cache)

    def clear_cache(self) -> None:
        with self._cache_lock:
            self._duplicate_cache.clear()

    def _duplicate_params(self, r) -> Tuple[object, int]:
        rbytes = long_to_binary(r)

        with self._cache_lock:
            cached = self._duplicate_cache.get(rbytes)
        if cached is not None:
            return cached

        lib = self.math_lib
        # A leading zero is the sign guard, not a byte of the value.
        if rbytes[0] == 0:
            nbytes = len(rbytes) - 1
        else:
            nbytes = len(rbytes)

        max_random = lib.pow(256, nbytes)
        # Draws below this value fall in the duplicated range.
        duplicate = lib.mod(max_random, r)

        with self._cache_lock:
            # Clear before the insert so the cache never exceeds cache_limit entries.
            if len(self._duplicate_cache) >= self.cache_limit:
                logger.debug(
                    "Duplicate cache full, clearing",
                    extra={"event": "randrange.cache_reset", "entries": len(self._duplicate_cache)},
                )
                self._duplicate_cache.clear()
            self._duplicate_cache[rbytes] = (duplicate, nbytes)

        return duplicate, nbytes

    def randrange(self, start, stop=None, step=1):
        """
        Return a random number from ``range(start, stop, step)``.

        Arguments may be of arbitrary magnitude. With one argument the range
        is ``[0, start)``. The number of choices is
        ``(stop - start) // step``.

        Raises:
            ValidationError: If step is zero
            EmptyRangeError: If the range has no elements
        """
        lib = self.math_lib

        if stop is None:
            stop = start
            start = 0

        if lib.cmp(step, 0) == 0:
            raise ValidationError("randrange step must not be zero")

        r = lib.div(lib.sub(stop, start), step)
        if lib.cmp(r, 0) <= 0:
            raise EmptyRangeError(
                "randrange called with an empty range",
                details={"start": str(start), "stop": str(stop), "step": str(step)},
            )

        duplicate, nbytes = self._duplicate_params(r)

        while True:
            n = binary_to_long(b"\x00" + self.rng.generate_bytes(nbytes))
            # Keep looping while the value is in the low duplicated range
            if lib.cmp(n, duplicate) >= 0:
                break

        return lib.add(start, lib.mul(lib.mod(n, r), step))

    def random_string(self, length: int, population: Union[str, bytes, None] = None):
        """
        Produce ``length`` random symbols chosen from ``population``.

        Without a population the result is ``length`` raw random bytes.
        A ``str`` population yields ``str``, a bytes population yields bytes
        and any other sequence yields a list.

        Raises:
            AlphabetTooLargeError: If population has more than 256 symbols
            EmptyRangeError: If population is empty
        """
        if not isinstance(length, int) or isinstance(length, bool) or length < 0:
            raise ValidationError("Length must be a non-negative integer.")

        if population is None:
            return self.rng.generate_bytes(length)

        popsize = len(population)
        if popsize > MAX_POPULATION:
            raise AlphabetTooLargeError(
                f"More than {MAX_POPULATION} symbols supplied to random_string",
                details={"population_size": popsize},
            )
        if popsize == 0:
            raise EmptyRangeError("random_string population must not be empty")

        duplicate = MAX_POPULATION % popsize

        picks = []
        for _ in range(length):
            while True:
                n = self.rng.generate_bytes(1)[0]
                if n >= duplicate:
                    break
            picks.append(population[n % popsize])

        if isinstance(population, str):
            return "".join(picks)
        if isinstance(population, (bytes, bytearray)):
            return bytes(picks)
        return picks


_default_sampler: Optional[RangeSampler] = None
_default_lock = threading.Lock()


def get_default_sampler() -> RangeSampler:
    """Return the process-wide sampler, building it from settings on first use."""
    global _default_sampler
    if _default_sampler is None:
        with _default_lock:
            if _default_sampler is None:
                settings = get_settings()
                _default_sampler = RangeSampler(
                    rng=CSPRNG.from_settings(settings),
                    cache_limit=settings.duplicate_cache_limit,
                )
    return _default_sampler


def set_default_sampler(sampler: Optional[RangeSampler]) -> None:
    """Install ``sampler`` as the process-wide sampler (None resets it)."""
    global _default_sampler
    with _default_lock:
        _default_sampler = sampler


def reset_default_sampler() -> None:
    set_default_sampler(None)
