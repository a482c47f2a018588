"""
Random sources and samplers.
"""

from authcrypt.security.csprng import CSPRNG
from authcrypt.security.randrange import (
    RangeSampler,
    get_default_sampler,
    reset_default_sampler,
    set_default_sampler,
)

__all__ = [
    "CSPRNG",
    "RangeSampler",
    "get_default_sampler",
    "set_default_sampler",
    "reset_default_sampler",
]
