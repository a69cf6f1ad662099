# This file is part of the bigsss project
# https://github.com/mbarkhau/bigsss
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT

"""Random integers of arbitrary size.

The BigRandom generator builds integers digit by digit from a source
that only has to produce values in [0, 10). Any such source can be
plugged in, by default random.SystemRandom is used. Neither BigRandom
nor the DebugRandom source make any claims about cryptographic
strength.
"""

import os
import random
import hashlib
import logging
import warnings
from typing import Set
from typing import Optional
from typing import Protocol

import argon2

from .common_types import InvalidArgument

logger = logging.getLogger(__name__)


class RandRanger(Protocol):
    def __call__(self, stop: int) -> int:
        ...


class DebugRandom:

    _state: int

    def __init__(self) -> None:
        self._state = 4294967291

    def randrange(self, stop: int) -> int:
        self._state = (self._state + 4294967291) % (2 ** 63)
        return self._state % stop


DEBUG_WARN_MSG = "Warning, bigsss using debug random! This should only happen when debugging or testing."

_debug_rand = DebugRandom()
_rand       = random.SystemRandom()


def _is_debug_random() -> bool:
    return os.getenv('BIGSSS_DEBUG_RANDOM') == 'DANGER'


def reset_debug_random() -> None:
    if _is_debug_random():
        _debug_rand._state = 4294967291


def randrange(stop: int) -> int:
    if _is_debug_random():
        warnings.warn(DEBUG_WARN_MSG)
        result = _debug_rand.randrange(stop)
    else:
        result = _rand.randrange(stop)
    assert isinstance(result, int)
    return result


def argon2digest(data: bytes, hash_len: int = 1024) -> bytes:
    if len(data) < 8:
        data += b"\x00" * (8 - len(data))

    return argon2.low_level.hash_secret_raw(
        secret=data,
        salt=data,
        hash_len=hash_len,
        parallelism=1,
        memory_cost=512,
        time_cost=2,
        type=argon2.low_level.Type.ID,
    )


def sha256digest(data: bytes) -> bytes:
    return hashlib.sha256(data).digest()


class CryptoRandom:
    """Deterministic source, seeded with data.

    The output is a hash chain over the seed, so the same seed
    always produces the same sequence of values.
    """

    def __init__(self, data: bytes, hashfn=argon2digest) -> None:
        self.data   = data
        self.state  = b""
        self.hashfn = hashfn

    def randbytes(self, n: int) -> bytes:
        while len(self.state) < max(n, 32):
            self.state += self.hashfn(self.state[-32:] + self.data)
        result     = self.state[:n]
        self.state = self.state[n:]
        return result

    def randrange(self, stop: int) -> int:
        if stop <= 0:
            raise InvalidArgument(f"Invalid stop={stop:#x}, must be > 0")

        num_bytes = (stop.bit_length() + 7) // 8
        limit     = 2 ** (8 * num_bytes)
        # largest multiple of stop below limit, values above would be biased
        accept_below = limit - (limit % stop)
        while True:
            val = int.from_bytes(self.randbytes(num_bytes), "big")
            if val < accept_below:
                return val % stop


def init_randrange(seed: Optional[bytes] = None) -> RandRanger:
    if seed is None:
        if _is_debug_random():
            reset_debug_random()

        return randrange
    else:
        logger.debug("Using seeded random source")
        return CryptoRandom(seed).randrange


def num_digits(num: int) -> int:
    """Number of decimal digits of a non-negative integer.

    Avoids str(num), which is limited for very large numbers.
    """
    assert num >= 0
    # bit_length * log10(2) is a lower bound that is off by at most one
    digits = max(1, (num.bit_length() * 30102) // 100000)
    while 10 ** digits <= num:
        digits += 1
    return digits


class BigRandom:
    """Uniformly distributed integers over ranges of any size.

    Each call to next_int draws one decimal digit at a time and rejects
    results that are out of range. Since the candidate has the same
    number of digits as the upper bound, fewer than 10 rounds are needed
    on average.
    """

    def __init__(self, randrange: Optional[RandRanger] = None) -> None:
        self._randrange = init_randrange() if randrange is None else randrange

    def _next_digits(self, digits: int) -> int:
        val = 0
        for _ in range(digits):
            val = val * 10 + self._randrange(10)
        return val

    def next_int(self, max_val: int) -> int:
        """Return an int in [0, max_val)."""
        if max_val < 0:
            raise InvalidArgument(f"Invalid max_val={max_val:#x}, can't be < 0")
        if max_val == 0:
            raise InvalidArgument("Invalid max_val=0, range is empty")

        digits = num_digits(max_val)
        while True:
            val = self._next_digits(digits)
            if val < max_val:
                return val

    def next_int_between(self, min_val: int, max_val: int) -> int:
        """Return an int in [min_val, max_val)."""
        if max_val <= min_val:
            errmsg = f"Invalid range, max_val={max_val:#x} must be > min_val={min_val:#x}"
            raise InvalidArgument(errmsg)
        return min_val + self.next_int(max_val - min_val)

    def next_bool(self) -> bool:
        return self._randrange(2) == 1

    def next_double(self) -> float:
        """Return a float in [0.0, 1.0)."""
        return self._next_digits(15) / 10 ** 15

    def next_int_set(self, count: int, max_val: int) -> Set[int]:
        return self.next_int_between_set(count, 0, max_val)

    def next_int_between_set(self, count: int, min_val: int, max_val: int) -> Set[int]:
        """Return count distinct ints in [min_val, max_val)."""
        if count < 0:
            raise InvalidArgument(f"Invalid count={count}, can't be < 0")
        if count > max(0, max_val - min_val):
            errmsg = f"Cannot draw {count} distinct values from [{min_val:#x}, {max_val:#x})"
            raise InvalidArgument(errmsg)

        result: Set[int] = set()
        while len(result) < count:
            result.add(self.next_int_between(min_val, max_val))
        return result
