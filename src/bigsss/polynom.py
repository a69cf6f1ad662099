# This file is part of the bigsss project
# https://github.com/mbarkhau/bigsss
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT

"""Polynomial calculation functions.

Mainly the secret polynomial and lagrange interpolation logic.

Helpful introduction: https://www.youtube.com/watch?v=kkMps3X_tEE
(Simple introduction to Shamir's Secret Sharing and Lagrange interpolation)

A helpful introduction to Galois Fields:
https://crypto.stackexchange.com/a/2718
"""

from typing import List
from typing import Tuple
from typing import Iterator
from typing import Optional
from typing import Sequence

from . import gf
from . import primes
from . import big_random
from .common_types import Point
from .common_types import Points
from .common_types import InvalidArgument
from .common_types import IllPosedReconstruction


class SecretPolynomial:
    """Random polynomial of degree threshold - 1 with f(0) == secret.

    The coefficients only live as long as the instance, they are
    not exposed and not part of the repr.
    """

    prime    : int
    threshold: int

    _coeffs: Tuple[gf.GFP, ...]

    def __init__(
        self,
        secret   : int,
        threshold: int,
        rand     : Optional[big_random.BigRandom] = None,
        prime    : Optional[int] = None,
    ) -> None:
        if secret < 0:
            raise InvalidArgument(f"Invalid secret, must be >= 0 but was {secret:#x}")
        if threshold < 2:
            raise InvalidArgument(f"Invalid threshold={threshold}, must be >= 2")

        if rand is None:
            rand = big_random.BigRandom()

        if prime is None:
            prime = primes.select_prime(secret, rand)
        else:
            primes.validate_prime(prime, secret)

        self.prime     = prime
        self.threshold = threshold

        # The coefficients are ordered in ascending powers of x, so
        # coeffs = [2, 5, 3] represents 2x° + 5x¹ + 3x²
        #
        # Note that the secret in the above case is 2 (the 0th
        # coefficient), which corresponds to the y value when we
        # evaluate at x=0. This is also why other implementations call
        # this value "intercept" or "y_intercept".
        coeffs: List[gf.GFP] = [gf.GFP(secret, prime)]
        while len(coeffs) < threshold:
            coeffs.append(gf.GFP(rand.next_int(prime), prime))

        self._coeffs = tuple(coeffs)

    def __call__(self, at_x: int) -> int:
        """Evaluate polynomial at x (Horner's method)."""
        x = gf.GFP(at_x, self.prime)
        y = gf.GFP(0, self.prime)
        for coeff in reversed(self._coeffs):
            y = y * x + coeff
        return y.val

    def get_shares(self, num_shares: int) -> Tuple[Point, ...]:
        """Evaluate the polynomial at x = 1..num_shares."""
        if num_shares < self.threshold:
            errmsg = f"Invalid num_shares={num_shares}, must be >= threshold={self.threshold}"
            raise InvalidArgument(errmsg)
        if num_shares >= self.prime:
            errmsg = "Invalid num_shares, too high to generate distinct points"
            raise InvalidArgument(errmsg)

        # NOTE: x=0 is never used, f(0) is the secret
        points = tuple(Point(x, self(x)) for x in range(1, num_shares + 1))
        assert len(points) == num_shares

        # make sure we only return points that we can join again
        secret = self._coeffs[0].val
        field  = gf.FieldGFP(self.prime, validate=False)
        assert interpolate(field, points[: self.threshold ]) == secret
        assert interpolate(field, points[-self.threshold :]) == secret

        return points

    def __repr__(self) -> str:
        degree = len(self._coeffs) - 1
        return f"SecretPolynomial(degree={degree}, prime_bits={self.prime.bit_length()})"


def prod(vals: Sequence[gf.GFP]) -> gf.GFP:
    """Product of numbers.

    This is sometimes also denoted by Π (upper case PI).
    """
    if len(vals) == 0:
        raise ValueError("prod requires at least one value")

    accu = vals[0]
    for val in vals[1:]:
        accu *= val
    return accu


def _validated_points(field: gf.FieldGFP, points: Points) -> Tuple[Tuple[gf.GFP, gf.GFP], ...]:
    if len(points) == 0:
        raise InvalidArgument("Cannot interpolate without any points")

    for i, (x, y) in enumerate(points):
        if x <= 0 or x % field.order == 0:
            errmsg = f"Invalid point {i + 1} with x={x:#x}. Possible attack."
            raise InvalidArgument(errmsg)
        if not 0 <= y < field.order:
            errmsg = f"Invalid point {i + 1}, y={y:#x} out of range for field with order={field.order:#x}"
            raise InvalidArgument(errmsg)

    gf_points = tuple((field[x], field[y]) for x, y in points)

    x_vals = {x for x, _ in gf_points}
    if len(x_vals) != len(gf_points):
        raise IllPosedReconstruction(f"Points must have distinct x coordinates {list(points)}")

    return gf_points


def _interpolation_terms(points: Sequence[Tuple[gf.GFP, gf.GFP]], at_x: gf.GFP) -> Iterator[gf.GFP]:
    one = gf.GFP(1, at_x.order)
    for i, (px, py) in enumerate(points):
        others = points[:i] + points[i + 1 :]
        assert len(others) == len(points) - 1

        numer = prod([one] + [at_x - ox for ox, _ in others])
        denum = prod([one] + [px   - ox for ox, _ in others])

        yield (py * numer) / denum


def interpolate(field: gf.FieldGFP, points: Points, at_x: int = 0) -> int:
    r"""Interpolate y value at x for a polynomial.

    # \delta_i(x) = \prod{ \frac{x - j}{i - j} }
    # \space
    # \text{for} \space j \in C, j \not= i

    With fewer points than were used to create the polynomial, the
    result is a valid field element but not the value of the original
    polynomial. This cannot be detected here.
    """
    gf_points = _validated_points(field, points)

    terms = iter(_interpolation_terms(gf_points, at_x=field[at_x]))
    accu  = next(terms)
    for term in terms:
        accu += term
    return accu.val


def join(points: Points, prime: int) -> int:
    """Recover the secret, aka. f(0), from points of a SecretPolynomial."""
    field  = gf.FieldGFP(prime)
    secret = interpolate(field, points, at_x=0)
    assert 0 <= secret < prime
    return secret

