"""
Test configuration and fixtures
"""
import sys
from pathlib import Path

# Add src to Python path
project_root = Path(__file__).parent.parent
src_path = project_root / "src"
sys.path.insert(0, str(src_path))

import pytest

from authcrypt.bigmath.loader import reset_math_library
from authcrypt.security.randrange import reset_default_sampler


@pytest.fixture(autouse=True)
def fresh_crypto_state():
    """Drop the selected math backend and default sampler around each test."""
    reset_math_library()
    reset_default_sampler()
    yield
    reset_math_library()
    reset_default_sampler()


class ScriptedRNG:
    """Random source that replays fixed bytes, then raises."""

    def __init__(self, data: bytes):
        self.data = bytes(data)
        self.position = 0
        self.requests = []

    def generate_bytes(self, num_bytes: int) -> bytes:
        self.requests.append(num_bytes)
        chunk = self.data[self.position:self.position + num_bytes]
        if len(chunk) != num_bytes:
            raise AssertionError("ScriptedRNG ran out of bytes")
        self.position += num_bytes
        return chunk


@pytest.fixture
def scripted_rng():
    return ScriptedRNG
