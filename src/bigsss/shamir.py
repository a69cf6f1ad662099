# This file is part of the bigsss project
# https://github.com/mbarkhau/bigsss
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT

"""Shamir Share generation and recovery.

The split/join functions work on plain integers and points. The
encoder/decoder classes wrap them for RawShare and StringShare.
"""

import logging
from typing import List
from typing import Tuple
from typing import Optional
from typing import Sequence
from typing import NamedTuple

from . import polynom
from . import big_random
from . import charset as cs
from .share import RawShare
from .share import PointShare
from .share import StringShare
from .share import common_prime
from .common_types import Point
from .common_types import Points
from .common_types import InvalidArgument

logger = logging.getLogger(__name__)


class SplitResult(NamedTuple):
    prime : int
    points: Tuple[Point, ...]


def validate_counts(num_shares: int, threshold: int) -> None:
    if threshold < 2:
        raise InvalidArgument(f"Invalid threshold={threshold}, must be >= 2")
    if num_shares < threshold:
        errmsg = f"Invalid num_shares={num_shares}, can't be < threshold={threshold}"
        raise InvalidArgument(errmsg)


def split(
    secret    : int,
    threshold : int,
    num_shares: int,
    rand      : Optional[big_random.BigRandom] = None,
) -> SplitResult:
    """Generate points of a split secret, together with the prime used."""
    validate_counts(num_shares, threshold)

    poly   = polynom.SecretPolynomial(secret, threshold, rand=rand)
    points = poly.get_shares(num_shares)
    logger.info(f"Split secret into {num_shares} shares, threshold={threshold}")
    logger.debug(f"Splitting with {poly}")
    return SplitResult(poly.prime, points)


def join(points: Points, prime: int) -> int:
    """Recover secret from points.

    With fewer points than the threshold used by split, the result
    is silently incorrect.
    """
    return polynom.join(points, prime)


def join_shares(shares: Sequence[PointShare]) -> int:
    prime = common_prime(shares)
    return join([share.point for share in shares], prime)


class RawShareEncoder:
    """Encode an int secret to a list of RawShare."""

    num_shares: int
    threshold : int
    rand      : big_random.BigRandom

    def __init__(
        self,
        num_shares: int = 2,
        threshold : int = 2,
        rand      : Optional[big_random.BigRandom] = None,
    ) -> None:
        validate_counts(num_shares, threshold)
        self.num_shares = num_shares
        self.threshold  = threshold
        self.rand       = big_random.BigRandom() if rand is None else rand

    def encode(self, secret: int) -> List[RawShare]:
        prime, points = split(secret, self.threshold, self.num_shares, self.rand)
        return [RawShare(point, prime) for point in points]


class RawShareDecoder:
    def decode(self, shares: Sequence[RawShare]) -> int:
        return join_shares(shares)


class StringShareEncoder:
    """Encode a str secret to a list of StringShare."""

    charset : cs.Charset
    _encoder: RawShareEncoder

    def __init__(
        self,
        num_shares: int = 2,
        threshold : int = 2,
        charset   : cs.Charset = cs.DEFAULT_CHARSET,
        rand      : Optional[big_random.BigRandom] = None,
    ) -> None:
        self.charset  = charset
        self._encoder = RawShareEncoder(num_shares, threshold, rand)

    @property
    def num_shares(self) -> int:
        return self._encoder.num_shares

    @property
    def threshold(self) -> int:
        return self._encoder.threshold

    @staticmethod
    def by_secret(
        num_shares: int,
        threshold : int,
        secret    : str,
        rand      : Optional[big_random.BigRandom] = None,
    ) -> 'StringShareEncoder':
        """Create an encoder with the charset derived from secret."""
        return StringShareEncoder(num_shares, threshold, cs.derive_charset(secret), rand)

    def encode(self, secret: str) -> List[StringShare]:
        secret_int = self.charset.encode(secret)
        raw_shares = self._encoder.encode(secret_int)
        return [StringShare(self.charset, raw_share) for raw_share in raw_shares]


class StringShareDecoder:
    def decode(self, shares: Sequence[StringShare]) -> str:
        if len(shares) == 0:
            raise InvalidArgument("Cannot recover secret without any shares")

        charsets = {share.charset for share in shares}
        if len(charsets) > 1:
            raise InvalidArgument("Invalid shares, generated with different charsets")

        secret_int = join_shares(shares)
        return shares[0].charset.decode(secret_int)


class RawShareCodec:

    encoder: RawShareEncoder
    decoder: RawShareDecoder

    def __init__(
        self,
        num_shares: int = 2,
        threshold : int = 2,
        rand      : Optional[big_random.BigRandom] = None,
    ) -> None:
        self.encoder = RawShareEncoder(num_shares, threshold, rand)
        self.decoder = RawShareDecoder()

    def encode(self, secret: int) -> List[RawShare]:
        return self.encoder.encode(secret)

    def decode(self, shares: Sequence[RawShare]) -> int:
        return self.decoder.decode(shares)


class StringShareCodec:

    encoder: StringShareEncoder
    decoder: StringShareDecoder

    def __init__(
        self,
        num_shares: int = 2,
        threshold : int = 2,
        charset   : cs.Charset = cs.DEFAULT_CHARSET,
        rand      : Optional[big_random.BigRandom] = None,
    ) -> None:
        self.encoder = StringShareEncoder(num_shares, threshold, charset, rand)
        self.decoder = StringShareDecoder()

    @property
    def charset(self) -> cs.Charset:
        return self.encoder.charset

    @staticmethod
    def by_secret(
        num_shares: int,
        threshold : int,
        secret    : str,
        rand      : Optional[big_random.BigRandom] = None,
    ) -> 'StringShareCodec':
        return StringShareCodec(num_shares, threshold, cs.derive_charset(secret), rand)

    def encode(self, secret: str) -> List[StringShare]:
        return self.encoder.encode(secret)

    def decode(self, shares: Sequence[StringShare]) -> str:
        return self.decoder.decode(shares)
