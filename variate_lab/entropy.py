"""
entropy.py - Cryptographically Seeded Uniform Entropy Source

Converts raw secure random bytes into uniform draws on [0, 1).

Each draw reads ``byte_count`` bytes and treats them as the digits of a
base-256 fraction: byte i (0-indexed) contributes ``byte[i] / 256**(i+1)``.
With the default 16 bytes that is ~128 bits of resolution, more than a
float64 mantissa can hold, so the result behaves as a continuous uniform for
every downstream transform.

Example Usage:
-------------
    >>> from variate_lab.entropy import EntropySource, prng
    >>>
    >>> u = prng()                       # one draw from the default source
    >>> source = EntropySource(byte_count=8)
    >>> draws = source.uniform(1000)     # vectorized, shape (1000,)
"""

from __future__ import annotations

import numbers
import secrets
from typing import Optional

import numpy as np
from loguru import logger

from .errors import EntropyError
from .types import ByteSource

DEFAULT_BYTE_COUNT = 16

# Largest float64 strictly below 1.0; a full-resolution draw rounds up to 1.0
# when the leading seven bytes are all 0xFF.
_BELOW_ONE = np.nextafter(1.0, 0.0)


def _place_values(byte_count: int) -> np.ndarray:
    """Weights 256**-(i+1) for i in [0, byte_count)."""
    return 256.0 ** -np.arange(1, byte_count + 1)


class EntropySource:
    """
    Uniform [0, 1) generator backed by a secure byte source.

    Instances hold no state between draws beyond their configuration, so a
    single source can be shared freely between samplers and calls.

    Parameters
    ----------
    byte_count : int, default=16
        Bytes consumed per draw.
    random_bytes : Callable[[int], bytes], optional
        Secure byte generator. Defaults to ``secrets.token_bytes``.

    Examples
    --------
    >>> source = EntropySource()
    >>> 0.0 <= source() < 1.0
    True
    >>>
    >>> # Deterministic bytes for testing
    >>> zeros = EntropySource(random_bytes=lambda k: bytes(k))
    >>> zeros()
    0.0
    """

    def __init__(
        self,
        byte_count: int = DEFAULT_BYTE_COUNT,
        random_bytes: Optional[ByteSource] = None
    ):
        self.byte_count = self._check_byte_count(byte_count)
        self._random_bytes = random_bytes if random_bytes is not None else secrets.token_bytes

    def __repr__(self) -> str:
        return f"EntropySource(byte_count={self.byte_count})"

    def __call__(self, byte_count: Optional[int] = None) -> float:
        """Draw one uniform value; see ``next``."""
        return self.next(byte_count)

    def next(self, byte_count: Optional[int] = None) -> float:
        """
        Draw one value uniformly from [0, 1).

        Parameters
        ----------
        byte_count : int, optional
            Override the bytes consumed for this draw.

        Returns
        -------
        float
            A value ``u`` with ``0.0 <= u < 1.0``.

        Raises
        ------
        EntropyError
            If ``byte_count`` is not a positive whole number, or the byte
            source returns the wrong number of bytes.
        """
        return float(self.uniform(1, byte_count)[0])

    def uniform(self, size: int, byte_count: Optional[int] = None) -> np.ndarray:
        """
        Draw ``size`` independent values uniformly from [0, 1).

        All bytes for the batch are requested in one call to the byte source
        and converted together.

        Parameters
        ----------
        size : int
            Number of draws. Zero returns an empty array.
        byte_count : int, optional
            Override the bytes consumed per draw.

        Returns
        -------
        np.ndarray
            Float64 array of shape (size,).
        """
        k = self.byte_count if byte_count is None else self._check_byte_count(byte_count)
        if size < 0:
            raise EntropyError(f"Cannot draw a negative number of values, got {size}")
        if size == 0:
            return np.empty(0, dtype=float)

        raw = self._random_bytes(size * k)
        if len(raw) != size * k:
            logger.error(f"Byte source returned {len(raw)} bytes, expected {size * k}")
            raise EntropyError(
                f"Byte source returned {len(raw)} bytes, expected {size * k}"
            )

        digits = np.frombuffer(bytes(raw), dtype=np.uint8).reshape(size, k)
        values = digits @ _place_values(k)
        return np.minimum(values, _BELOW_ONE)

    @staticmethod
    def _check_byte_count(byte_count) -> int:
        if (
            isinstance(byte_count, bool)
            or not isinstance(byte_count, numbers.Integral)
            or byte_count < 1
        ):
            raise EntropyError(
                f"byte_count must be a positive whole number, got {byte_count!r}",
                parameter="byte_count"
            )
        return int(byte_count)


# Shared default; EntropySource carries no mutable state.
default_source = EntropySource()


def prng(byte_count: int = DEFAULT_BYTE_COUNT) -> float:
    """
    Draw one uniform [0, 1) value from the default entropy source.

    Parameters
    ----------
    byte_count : int, default=16
        Bytes of entropy to consume.
    """
    return default_source.next(byte_count)
