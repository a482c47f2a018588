"""
Big integer math backends and process-wide backend selection.
"""

from authcrypt.bigmath.backends import GmpyMath, MathBackend, PythonIntMath
from authcrypt.bigmath.loader import (
    SUPPORTED_EXTENSIONS,
    MathExtension,
    detect_math_library,
    get_math_library,
    require_math_library,
    reset_math_library,
)

__all__ = [
    "MathBackend",
    "PythonIntMath",
    "GmpyMath",
    "MathExtension",
    "SUPPORTED_EXTENSIONS",
    "detect_math_library",
    "get_math_library",
    "require_math_library",
    "reset_math_library",
]
