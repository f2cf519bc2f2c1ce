#!/usr/bin/env python3
# -*- coding: utf-8 -*-

"""
Keystream engine

RC4-style pseudo-random byte generator with explicit state. Key scheduling
may run more than one pass over the permutation; the generator can be
fast-forwarded without producing output, and transforms buffers in place.
"""

from typing import Sequence

from ..common.constants import CipherConstants
from ..common.exceptions import ConfigurationError


class Keystream:
    """RC4 keystream engine

    Attributes:
        permutation: 256-entry permutation of the byte values, mutated only by swaps
        index_a: first position counter, incremented once per keystream step
        index_b: second position counter
    """

    __slots__ = ("permutation", "index_a", "index_b")

    def __init__(self, key: Sequence[int], schedule_rounds: int = 1) -> None:
        if not key:
            raise ConfigurationError("Keystream key must not be empty", config_key="key")
        if schedule_rounds < 1:
            raise ConfigurationError(
                f"schedule_rounds must be at least 1 (got {schedule_rounds})",
                config_key="schedule_rounds",
            )

        self.permutation = bytearray(range(CipherConstants.STATE_SIZE))
        self.index_a = 0
        self.index_b = 0

        s = self.permutation
        key_length = len(key)
        for _ in range(schedule_rounds):
            acc = 0
            for j in range(CipherConstants.STATE_SIZE):
                acc = (acc + s[j] + key[j % key_length]) & 0xFF
                s[j], s[acc] = s[acc], s[j]

    @classmethod
    def initialize(cls, key: Sequence[int], schedule_rounds: int = 1) -> "Keystream":
        """Create an engine from key material with the given number of KSA passes"""
        return cls(key, schedule_rounds)

    def fast_forward(self, count: int) -> None:
        """Advance the state by ``count`` steps without producing output"""
        if count < 0:
            raise ValueError(f"fast_forward count must be non-negative (got {count})")

        s = self.permutation
        a, b = self.index_a, self.index_b
        for _ in range(count):
            a = (a + 1) & 0xFF
            b = (b + s[a]) & 0xFF
            s[a], s[b] = s[b], s[a]
        self.index_a, self.index_b = a, b

    def transform(self, buffer: bytearray) -> bytearray:
        """XOR ``buffer`` with the next ``len(buffer)`` keystream bytes, in place.

        Bytes are processed strictly left to right. The same call decrypts
        and encrypts; the buffer is returned for convenience.
        """
        s = self.permutation
        a, b = self.index_a, self.index_b
        for i in range(len(buffer)):
            a = (a + 1) & 0xFF
            b = (b + s[a]) & 0xFF
            s[a], s[b] = s[b], s[a]
            buffer[i] ^= s[(s[a] + s[b]) & 0xFF]
        self.index_a, self.index_b = a, b
        return buffer

    def copy(self) -> "Keystream":
        """Return an independent engine with identical state"""
        clone = object.__new__(Keystream)
        clone.permutation = bytearray(self.permutation)
        clone.index_a = self.index_a
        clone.index_b = self.index_b
        return clone

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Keystream):
            return NotImplemented
        return (
            self.index_a == other.index_a
            and self.index_b == other.index_b
            and self.permutation == other.permutation
        )

    def __repr__(self) -> str:
        return f"Keystream(index_a={self.index_a}, index_b={self.index_b})"
