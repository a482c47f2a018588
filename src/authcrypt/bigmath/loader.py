"""
Math library detection.

Looks for a big integer library in a fixed order of preference and keeps the
first one that loads as the backend for the rest of the process.
"""

from __future__ import annotations

import importlib
import logging
import sys
import threading
from typing import Iterable, NamedTuple, Optional, Sequence, Tuple, Type

from authcrypt.bigmath.backends import GmpyMath, MathBackend, PythonIntMath
from authcrypt.core.config import get_settings
from authcrypt.core.crypto_exceptions import NoBigIntBackendError

logger = logging.getLogger(__name__)


class MathExtension(NamedTuple):
    """A loadable math library.

    ``extension`` is checked in ``sys.modules`` first; otherwise each of
    ``modules`` is imported in turn. An entry with neither needs no library
    and always loads.
    """
    name: str
    modules: Tuple[str, ...]
    extension: Optional[str]
    backend_class: Type[MathBackend]


SUPPORTED_EXTENSIONS: Tuple[MathExtension, ...] = (
    MathExtension("gmpy2", ("gmpy2",), "gmpy2", GmpyMath),
    MathExtension("python", (), None, PythonIntMath),
)

_lib: Optional[MathBackend] = None
_lib_resolved = False
_lib_lock = threading.Lock()


def extensions_by_name(names: Iterable[str]) -> Tuple[MathExtension, ...]:
    """Order SUPPORTED_EXTENSIONS by ``names``, skipping unknown names."""
    known = {ext.name: ext for ext in SUPPORTED_EXTENSIONS}
    selected = []
    for name in names:
        ext = known.get(name)
        if ext is None:
            logger.warning(
                "Unknown math backend %r ignored",
                name,
                extra={"event": "bigmath.unknown_backend", "backend": name},
            )
            continue
        selected.append(ext)
    return tuple(selected)


def detect_math_library(extensions: Sequence[MathExtension]) -> Optional[MathBackend]:
    """Return a backend for the first extension that is loaded or loadable."""
    for extension in extensions:
        if not extension.modules and extension.extension is None:
            return extension.backend_class(None)

        module = None
        if extension.extension and extension.extension in sys.modules:
            module = sys.modules[extension.extension]

        if module is None:
            for module_name in extension.modules:
                try:
                    module = importlib.import_module(module_name)
                    break
                except ImportError as exc:
                    logger.debug(
                        "Math module %s not importable: %s",
                        module_name,
                        exc,
                        extra={"event": "bigmath.import_failed", "module": module_name},
                    )

        if module is not None:
            return extension.backend_class(module)

    return None


def get_math_library(
    extensions: Optional[Sequence[MathExtension]] = None,
    no_math_support: Optional[bool] = None,
) -> Optional[MathBackend]:
    """
    Return the process-wide math backend, selecting it on first use.

    Args:
        extensions: Candidates in order of preference (defaults to
            AUTHCRYPT_MATH_BACKENDS)
        no_math_support: Allow running without a backend (defaults to
            AUTHCRYPT_NO_MATH_SUPPORT)

    Returns:
        The selected backend, or None in no-math-support mode

    Raises:
        NoBigIntBackendError: If no candidate loads and no-math-support mode
            is off
    """
    global _lib, _lib_resolved

    if _lib_resolved:
        return _lib

    with _lib_lock:
        if _lib_resolved:
            return _lib

        if extensions is None or no_math_support is None:
            settings = get_settings()
            if extensions is None:
                extensions = extensions_by_name(settings.math_backends)
            if no_math_support is None:
                no_math_support = settings.no_math_support

        if no_math_support:
            logger.warning(
                "Running without big integer math support",
                extra={"event": "bigmath.disabled"},
            )
            _lib_resolved = True
            return None

        lib = detect_math_library(extensions)
        if lib is None:
            tried = ", ".join(ext.name for ext in extensions)
            raise NoBigIntBackendError(
                "No big integer math library is available. Set "
                "AUTHCRYPT_NO_MATH_SUPPORT=1 to run without one. "
                f"Tried: {tried}",
                details={"tried": [ext.name for ext in extensions]},
            )

        logger.info(
            "Math backend selected",
            extra={"event": "bigmath.selected", "backend": lib.type},
        )
        _lib = lib
        _lib_resolved = True
        return _lib


def require_math_library() -> MathBackend:
    """Like get_math_library() but fails in no-math-support mode."""
    lib = get_math_library()
    if lib is None:
        raise NoBigIntBackendError(
            "This operation needs a big integer math library but "
            "AUTHCRYPT_NO_MATH_SUPPORT is set"
        )
    return lib


def reset_math_library() -> None:
    """Forget the selected backend so the next call selects again."""
    global _lib, _lib_resolved
    with _lib_lock:
        _lib = None
        _lib_resolved = False
