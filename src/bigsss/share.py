# This file is part of the bigsss project
# https://github.com/mbarkhau/bigsss
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT

"""Share types and their text representation.

All numbers are serialized as lowercase hex.

    RawShare   : "{x}-{y}-{prime}"
    StringShare: "{charset}-{x}-{y}-{prime}"  or  "{x}-{y}-{prime}"

The second form of a StringShare is used for the default charset.
The prime is part of every share, it is needed to recover the secret.
"""

from typing import Protocol
from typing import Sequence
from typing import NamedTuple

from . import charset as cs
from . import enc_util
from .common_types import Point
from .common_types import InvalidArgument


class PointShare(Protocol):
    """Anything with a point and the prime it was generated with."""

    @property
    def point(self) -> Point:
        ...

    @property
    def prime(self) -> int:
        ...


class RawShare(NamedTuple):

    point: Point
    prime: int

    def __str__(self) -> str:
        x, y = self.point
        return "-".join(map(enc_util.int2hex, (x, y, self.prime)))

    @staticmethod
    def parse(text: str) -> 'RawShare':
        parts = text.strip().split("-")
        if len(parts) != 3:
            raise InvalidArgument(f"Invalid share '{text}', expected format x-y-prime")

        x, y, prime = map(enc_util.hex2int, parts)
        return RawShare(Point(x, y), prime)


class StringShare(NamedTuple):

    charset: cs.Charset
    raw    : RawShare

    @property
    def point(self) -> Point:
        return self.raw.point

    @property
    def prime(self) -> int:
        return self.raw.prime

    @property
    def charset_string(self) -> str:
        return self.charset.representation

    def __str__(self) -> str:
        if self.charset_string == "":
            return str(self.raw)
        else:
            return self.charset_string + "-" + str(self.raw)

    @staticmethod
    def parse(text: str) -> 'StringShare':
        parts = text.strip().rsplit("-", 3)
        if len(parts) == 3:
            return StringShare(cs.DEFAULT_CHARSET, RawShare.parse(text))
        elif len(parts) == 4:
            charset_string, *raw_parts = parts
            if charset_string == "":
                raise InvalidArgument(f"Invalid share '{text}', empty charset")
            charset = cs.from_representation(charset_string)
            return StringShare(charset, RawShare.parse("-".join(raw_parts)))
        else:
            raise InvalidArgument(f"Invalid share '{text}', expected format [charset-]x-y-prime")


def common_prime(shares: Sequence[PointShare]) -> int:
    if len(shares) == 0:
        raise InvalidArgument("Cannot recover secret without any shares")

    unique_primes = {share.prime for share in shares}
    if len(unique_primes) > 1:
        raise InvalidArgument("Invalid shares, generated with different primes")

    return shares[0].prime
