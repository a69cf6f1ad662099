# This file is part of the bigsss project
# https://github.com/mbarkhau/bigsss
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT
"""Prime selection for bigsss.gf.GFP and bigsss.polynom.SecretPolynomial."""

import logging
from random import randrange
from typing import Set
from typing import List
from typing import Tuple
from typing import Iterator
from typing import Optional

from . import big_random
from .common_types import InvalidArgument

logger = logging.getLogger(__name__)


SMALL_PRIMES = [
      2,   3,   5,   7,  11,  13,  17,  19,  23,  29,  31,  37,  41,  43,  47,
     53,  59,  61,  67,  71,  73,  79,  83,  89,  97, 101, 103, 107, 109, 113,
    127, 131, 137, 139, 149, 151, 157, 163, 167, 173, 179, 181, 191, 193, 197,
    199, 211, 223, 227, 229, 233, 239, 241, 251, 257, 263, 269, 271, 277, 281,
    283, 293, 307,
]

# Jim Sinclair
_mr_js_bases = {2, 325, 9375, 28178, 450775, 9780504, 1795265022}


def _miller_test_bases(n: int, accuracy: int = 40) -> Set[int]:
    if n < 2 ** 64:
        return _mr_js_bases
    else:
        random_bases = {randrange(2, n - 1) for _ in range(accuracy)}
        return _mr_js_bases | set(SMALL_PRIMES[:13]) | random_bases


def _is_composite(n: int, r: int, x: int) -> bool:
    for _ in range(r - 1):
        x = pow(x, 2, n)
        if x == n - 1:
            return False
    return True


def _decompose(n: int) -> Tuple[int, int]:
    # n - 1 == 2**r * d with d odd
    r = 0
    d = n - 1
    while d % 2 == 0:
        r += 1
        d //= 2
    return r, d


def _is_strong_probable_prime(n: int, r: int, d: int, base: int) -> bool:
    a = base % n
    if a == 0:
        return True

    x = pow(a, d, n)
    return x in (1, n - 1) or not _is_composite(n, r, x)


def is_probable_prime(n: int) -> bool:
    if n < 2:
        return False

    # Early exit if not prime
    for p in SMALL_PRIMES:
        if n == p:
            return True
        if n % p == 0:
            return False

    r, d = _decompose(n)
    return all(_is_strong_probable_prime(n, r, d, base) for base in _miller_test_bases(n))


def _sieve_primes(limit: int) -> List[int]:
    """Odd primes below limit (sieve of Eratosthenes)."""
    flags = bytearray([1]) * limit
    flags[:2] = b"\x00\x00"
    for i in range(2, int(limit ** 0.5) + 1):
        if flags[i]:
            flags[i * i :: i] = bytes(len(range(i * i, limit, i)))
    return [i for i in range(3, limit) if flags[i]]


SIEVE_LIMIT = 2 ** 16

SIEVE_PRIMES = _sieve_primes(SIEVE_LIMIT)

# number of odd candidates per window
SIEVE_WINDOW = 4096


def _sieve_window(start: int) -> bytearray:
    """Flags for the odd candidates start, start + 2, start + 4, ...

    A flag is cleared if the candidate has a factor in SIEVE_PRIMES.
    The start must be odd and larger than SIEVE_LIMIT, so that no
    candidate is itself one of the SIEVE_PRIMES.
    """
    assert start % 2 == 1 and start > SIEVE_LIMIT
    flags = bytearray([1]) * SIEVE_WINDOW
    for p in SIEVE_PRIMES:
        # offset such that start + 2 * offset == 0 (mod p), (p + 1) // 2 == 1/2 (mod p)
        offset = (-start % p) * ((p + 1) // 2) % p
        flags[offset::p] = bytes(len(range(offset, SIEVE_WINDOW, p)))
    return flags


def _iter_sieved_candidates(n: int) -> Iterator[int]:
    start = n | 1
    while True:
        flags = _sieve_window(start)
        for i, flag in enumerate(flags):
            if flag:
                yield start + 2 * i
        start += 2 * SIEVE_WINDOW


def next_prime(n: int) -> int:
    """Smallest (probable) prime >= n."""
    if n <= 2:
        return 2

    if n <= SIEVE_LIMIT:
        candidate = n | 1
        while not is_probable_prime(candidate):
            candidate += 2
        return candidate

    # Most sieved candidates are rejected by a single round with base 2,
    # only the final candidate gets all rounds of is_probable_prime.
    for candidate in _iter_sieved_candidates(n):
        r, d = _decompose(candidate)
        if _is_strong_probable_prime(candidate, r, d, base=2) and is_probable_prime(candidate):
            return candidate

    raise AssertionError("Unreachable")


MIN_PRIME_BITS = 32

# The width of the prime is rounded up to a multiple of this, so
# that the prime only reveals a coarse upper bound of the secret.
PRIME_BITS_STEP = 64


def prime_bits(secret: int) -> int:
    num_bits = max(secret.bit_length(), MIN_PRIME_BITS)
    return -(-num_bits // PRIME_BITS_STEP) * PRIME_BITS_STEP


def select_prime(secret: int, rand: big_random.BigRandom) -> int:
    """Select a random prime that is larger than secret.

    A random candidate is drawn from [2**n, 2**(n+1)), the prime is
    the next one at or above the candidate. Since 2**n > secret the
    prime is always larger than the secret.
    """
    if secret < 0:
        raise InvalidArgument(f"Invalid secret, must be >= 0 but was {secret:#x}")

    num_bits  = prime_bits(secret)
    candidate = rand.next_int_between(2 ** num_bits, 2 ** (num_bits + 1))
    prime     = next_prime(candidate)

    assert prime > secret
    logger.debug(f"Selected prime with {prime.bit_length()} bits")
    return prime


def validate_prime(prime: int, secret: Optional[int] = None) -> None:
    if not is_probable_prime(prime):
        raise InvalidArgument(f"Invalid modulus, {prime:#x} is not prime")

    if secret is not None and prime <= secret:
        errmsg = f"Invalid modulus, must be greater than secret ({prime:#x} <= {secret:#x})"
        raise InvalidArgument(errmsg)
