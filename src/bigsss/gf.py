# This file is part of the bigsss project
# https://github.com/mbarkhau/bigsss
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT

"""Galois Field GF(p) arithmetic for primes of arbitrary size."""

import functools
from typing import NamedTuple

from . import primes
from .common_types import InvalidArgument

# The Euclidean GCD algorithm is based on the principle that the
# greatest common divisor of two numbers does not change if the larger
# number is replaced by its difference with the smaller number. For
# example,
#
#   GCD(252) == 21  # 252 = 21 × 12
#   GCD(105) == 21  # 105 = 21 × 5
#
#   also
#
#   GCD(252 − 105) == 21
#   GCD(147) == 21
#
# Since this replacement reduces the larger of the two numbers,
# repeating this process gives successively smaller pairs of numbers
# until the two numbers become equal. When that occurs, they are the
# GCD of the original two numbers.
#
# By reversing the steps, the GCD can be expressed as a sum of the two
# original numbers each multiplied by a positive or negative integer,
# e.g., 21 = 5 × 105 + (−2) × 252. The fact that the GCD can always be
# expressed in this way is known as Bézout's identity.


class XGCDResult(NamedTuple):
    g: int
    s: int  # sometimes called x
    t: int  # sometimes called y


def xgcd(a: int, b: int) -> XGCDResult:
    """Extended euclidien greatest common denominator.

    Iterative, since the recursion depth for moduli with thousands of
    bits would exceed the interpreter limit.
    """
    old_r, r = a, b
    old_s, s = 1, 0
    old_t, t = 0, 1
    while r != 0:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_s, s = s, old_s - q * s
        old_t, t = t, old_t - q * t

    res = XGCDResult(g=old_r, s=old_s, t=old_t)
    assert res.s * a + res.t * b == res.g
    return res


def mod_inverse(val: int, p: int) -> int:
    val = val % p
    if val == 0:
        raise ZeroDivisionError("0 has no multiplicative inverse")

    res = xgcd(p, val)
    assert res.g == 1
    return res.t % p


@functools.total_ordering
class GFP:

    val  : int
    order: int

    def __init__(self, val: int, p: int) -> None:
        # NOTE mb: In practice p is always prime, and the operations are
        #   implemented with this assumtion. If p were not prime, then a
        #   multiplicative inverse would not exist in all cases. The
        #   check is done once by FieldGFP rather than for every number.
        self.val   = val % p
        self.order = p

    def _new_gf(self, val: int) -> 'GFP':
        return GFP(val, p=self.order)

    def _check_field(self, other: 'GFP') -> None:
        if not isinstance(other, GFP):
            errmsg = f"Cannot combine {repr(self)} with {repr(other)}"
            raise NotImplementedError(errmsg)

        if self.order != other.order:
            errmsg = "Can only combine Numbers from the same finite field"
            raise ValueError(errmsg)

    def __add__(self, other: 'GFP') -> 'GFP':
        self._check_field(other)
        return self._new_gf(self.val + other.val)

    def __radd__(self, other: int) -> 'GFP':
        return self._new_gf(other + self.val)

    def __sub__(self, other: 'GFP') -> 'GFP':
        self._check_field(other)
        return self._new_gf(self.val - other.val)

    def __rsub__(self, other: int) -> 'GFP':
        return self._new_gf(other - self.val)

    def __neg__(self) -> 'GFP':
        return self._new_gf(-self.val)

    def __mul__(self, other: 'GFP') -> 'GFP':
        self._check_field(other)
        return self._new_gf(self.val * other.val)

    def __rmul__(self, other: int) -> 'GFP':
        return self._new_gf(other * self.val)

    def __pow__(self, exp: int) -> 'GFP':
        return self._new_gf(pow(self.val, exp, self.order))

    def __truediv__(self, other: 'GFP') -> 'GFP':
        self._check_field(other)
        return self * other._mul_inverse()

    def _mul_inverse(self) -> 'GFP':
        return self._new_gf(mod_inverse(self.val, self.order))

    def __hash__(self) -> int:
        return hash(self.val) ^ hash(self.order)

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True

        if isinstance(other, GFP) and self.order == other.order:
            return self.val == other.val

        if isinstance(other, int):
            return self.val == other

        return NotImplemented

    def __lt__(self, other: object) -> bool:
        if isinstance(other, GFP) and self.order == other.order:
            return self.val < other.val

        if isinstance(other, int):
            return self.val < other

        return NotImplemented

    def __repr__(self) -> str:
        return f"GFP({self.val:>3}, p={self.order})"


class FieldGFP:

    order: int

    def __init__(self, order: int, validate: bool = True) -> None:
        # order, aka. characteristic, aka. prime
        if validate and not primes.is_probable_prime(order):
            raise InvalidArgument(f"Invalid field order, {order:#x} is not prime")
        self.order = order

    def __getitem__(self, val: int) -> GFP:
        return GFP(val, self.order)
