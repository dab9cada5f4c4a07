"""Pseudo-random numbers and a fast inverse square root."""

from __future__ import annotations

import struct

_MASK32 = 0xFFFFFFFF
_SCALE = 2.328306435454494e-10


class UniformRandom:
    """Multiply-with-carry generator producing 32-bit numbers."""

    def __init__(self, z: int = 362436069, w: int = 521288629) -> None:
        self._z = z & _MASK32
        self._w = w & _MASK32

    def get_uint(self) -> int:
        """Return the next unsigned 32-bit number."""
        self._z = (36969 * (self._z & 65535) + (self._z >> 16)) & _MASK32
        self._w = (18000 * (self._w & 65535) + (self._w >> 16)) & _MASK32
        return ((self._z << 16) + self._w) & _MASK32

    def get_uniform(self, maximum: int) -> int:
        """Return a number in ``[0, maximum)`` (0 when ``maximum`` is 0)."""
        if maximum < 0:
            raise ValueError("maximum must not be negative")
        maximum &= _MASK32
        value = self.get_uint()
        return int((value + 1.0) * _SCALE * maximum) & _MASK32


def _to_float32(value: float) -> float:
    return struct.unpack("<f", struct.pack("<f", value))[0]


def inv_sqrt(number: float) -> float:
    """Approximate ``1 / sqrt(number)`` with one Newton step, in single precision."""
    (bits,) = struct.unpack("<I", struct.pack("<f", number))
    bits = (0x5F3759DF - (bits >> 1)) & _MASK32
    (guess,) = struct.unpack("<f", struct.pack("<I", bits))
    half = _to_float32(number * 0.5)
    return _to_float32(guess * (1.5 - half * guess * guess))