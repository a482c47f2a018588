"""
Big integer math backends.

``MathBackend`` defines the arithmetic used by the codec and the range
sampler. Division and modulus are floor division and floor modulus for every
backend, whatever the wrapped library does natively.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

logger = logging.getLogger(__name__)


class MathBackend:
    """Interface to a long number implementation.

    Subclasses wrap a specific library. ``powmod`` is provided here as square
    and multiply so that a backend without native modular exponentiation
    still gets a correct one.
    """

    type: Optional[str] = None

    def __init__(self, module: Any = None) -> None:
        self.module = module

    def init(self, number, base: int = 10):
        raise NotImplementedError

    def add(self, x, y):
        raise NotImplementedError

    def sub(self, x, y):
        raise NotImplementedError

    def mul(self, x, y):
        raise NotImplementedError

    def div(self, x, y):
        raise NotImplementedError

    def mod(self, base, modulus):
        raise NotImplementedError

    def pow(self, base, exponent):
        raise NotImplementedError

    def cmp(self, x, y) -> int:
        raise NotImplementedError

    def powmod(self, base, exponent, modulus):
        """Return (base ** exponent) mod modulus."""
        square = self.mod(base, modulus)
        result = self.mod(self.init(1), modulus)
        while self.cmp(exponent, 0) > 0:
            if self.mod(exponent, 2):
                result = self.mod(self.mul(result, square), modulus)
            square = self.mod(self.mul(square, square), modulus)
            exponent = self.div(exponent, 2)
        return result

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__} type={self.type!r}>"


class PythonIntMath(MathBackend):
    """Backend over Python's built-in ``int``."""

    type = "python"

    def init(self, number, base: int = 10) -> int:
        if isinstance(number, str):
            return int(number, base)
        return int(number)

    def add(self, x, y) -> int:
        return x + y

    def sub(self, x, y) -> int:
        return x - y

    def mul(self, x, y) -> int:
        return x * y

    def div(self, x, y) -> int:
        return x // y

    def mod(self, base, modulus) -> int:
        return base % modulus

    def pow(self, base, exponent) -> int:
        return base ** exponent

    def cmp(self, x, y) -> int:
        return (x > y) - (x < y)


class GmpyMath(MathBackend):
    """Backend over the GMP library through ``gmpy2``."""

    type = "gmpy2"

    def init(self, number, base: int = 10):
        if isinstance(number, str):
            return self.module.mpz(number, base)
        return self.module.mpz(number)

    def add(self, x, y):
        return self.module.add(self.module.mpz(x), y)

    def sub(self, x, y):
        return self.module.sub(self.module.mpz(x), y)

    def mul(self, x, y):
        return self.module.mul(self.module.mpz(x), y)

    def div(self, x, y):
        return self.module.f_div(x, y)

    def mod(self, base, modulus):
        return self.module.f_mod(base, modulus)

    def pow(self, base, exponent):
        return self.module.mpz(base) ** int(exponent)

    def cmp(self, x, y) -> int:
        return self.module.cmp(x, y)

    def powmod(self, base, exponent, modulus):
        return self.module.powmod(base, exponent, modulus)
