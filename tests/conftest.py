"""
conftest.py - Pytest Configuration and Shared Fixtures

This file contains fixtures used across all test modules. Fixtures are
organized by category:
- Entropy sources (secure, scripted and fixed-byte)
- Samplers and factories
- Tolerances
- Log capture
"""

import pytest
import numpy as np
from loguru import logger

from variate_lab import DistributionFactory, EntropySource


# =============================================================================
# SCRIPTED SOURCE
# =============================================================================

class ScriptedSource:
    """
    Entropy source that replays a fixed list of uniform values.

    Lets tests pin every draw a sampler makes. ``calls`` counts the values
    consumed so far.
    """

    def __init__(self, values):
        self._values = [float(v) for v in values]
        self.calls = 0

    def __call__(self, byte_count=None):
        value = self._values[self.calls % len(self._values)]
        self.calls += 1
        return value

    def next(self, byte_count=None):
        return self()

    def uniform(self, size, byte_count=None):
        return np.array([self() for _ in range(size)], dtype=float)


# =============================================================================
# ENTROPY SOURCES
# =============================================================================

@pytest.fixture
def source():
    """A fresh secure entropy source with default resolution."""
    return EntropySource()


@pytest.fixture
def scripted():
    """Factory for ScriptedSource instances: ``scripted([0.1, 0.9])``."""
    return ScriptedSource


@pytest.fixture
def fixed_bytes():
    """
    Factory for entropy sources whose byte generator repeats one byte.

    ``fixed_bytes(0xFF)`` produces the largest draw the source can make.
    """
    def make(byte, byte_count=16):
        return EntropySource(
            byte_count=byte_count,
            random_bytes=lambda k: bytes([byte]) * k
        )
    return make


# =============================================================================
# SAMPLERS AND FACTORIES
# =============================================================================

@pytest.fixture
def factory(source):
    """A DistributionFactory drawing from a secure source."""
    return DistributionFactory(source=source)


@pytest.fixture
def normal_sampler(factory):
    """A standard normal sampler."""
    return factory.create("norm", mean=0.0, sd=1.0)


# =============================================================================
# HELPER FIXTURES
# =============================================================================

@pytest.fixture
def tolerance():
    """Standard numerical tolerance for float comparisons."""
    return {"rtol": 1e-9, "atol": 1e-12}


@pytest.fixture
def large_sample_tolerance():
    """Looser tolerance for statistical convergence tests."""
    return {"rtol": 0.05, "atol": 0.05}


# =============================================================================
# LOG CAPTURE
# =============================================================================

@pytest.fixture
def log_records():
    """Loguru records emitted while the test runs, DEBUG and above."""
    records = []
    handler_id = logger.add(lambda message: records.append(message.record), level="DEBUG")
    yield records
    logger.remove(handler_id)
