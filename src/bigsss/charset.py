# This file is part of the bigsss project
# https://github.com/mbarkhau/bigsss
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT

"""Conversion of strings to (arbitrary sized) integers and back.

A Charset is an ordered alphabet. A string over the alphabet is read
as a numeral, with the alphabet size as base and the most significant
character first.

Digits are bijective (the character at index i has digit value i + 1),
so there is no "zero" character that would be lost at the start of a
string. Every string, including the empty one, maps to a distinct
integer and every integer >= 0 maps back to a string.

    >>> charset = Charset("ab")
    >>> [charset.encode(s) for s in ["", "a", "b", "aa", "ab", "ba"]]
    [0, 1, 2, 3, 4, 5]
"""

import string
from typing import Dict
from typing import List
from typing import Optional

from . import enc_util
from .common_types import InvalidArgument

NAMED_PREFIX = "$$"


class Charset:

    chars: str
    name : Optional[str]

    _index: Dict[str, int]

    def __init__(self, chars: str, name: Optional[str] = None) -> None:
        self.chars = chars
        self.name  = name

        if len(chars) == 0:
            raise InvalidArgument("Invalid charset, must have at least one char")
        if len(set(chars)) != len(chars):
            raise InvalidArgument(f"Invalid charset, duplicate chars in '{chars}'")

        self._index = {char: idx for idx, char in enumerate(chars)}

    @property
    def base(self) -> int:
        return len(self.chars)

    def encode(self, text: str) -> int:
        base = self.base
        num  = 0
        for i, char in enumerate(text):
            idx = self._index.get(char)
            if idx is None:
                errmsg = f"Invalid char {repr(char)} at position {i}, not in charset {self}"
                raise InvalidArgument(errmsg)
            num = num * base + idx + 1
        return num

    def _char_at(self, digit: int) -> str:
        if not 0 <= digit < self.base:
            raise InvalidArgument(f"Invalid digit={digit} for charset with base={self.base}")
        return self.chars[digit]

    def decode(self, num: int) -> str:
        if num < 0:
            raise InvalidArgument(f"Invalid number {num}, must be >= 0")

        base = self.base
        # least significant char first
        chars: List[str] = []
        while num > 0:
            num, digit = divmod(num - 1, base)
            chars.append(self._char_at(digit))
        return "".join(reversed(chars))

    @property
    def representation(self) -> str:
        """Compact form which can be parsed by from_representation.

        The result never contains a "-".
        """
        if self is DEFAULT_CHARSET:
            return ""
        elif self.name is not None and NAMED_CHARSETS.get(self.name) == self:
            return NAMED_PREFIX + self.name
        else:
            return enc_util.bytes2hex(self.chars.encode("utf-8"))

    @staticmethod
    def from_representation(representation: str) -> 'Charset':
        return from_representation(representation)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Charset):
            return self.chars == other.chars
        else:
            return NotImplemented

    def __hash__(self) -> int:
        return hash(self.chars)

    def __repr__(self) -> str:
        if self.name:
            return f"{type(self).__name__}(name={self.name!r}, base={self.base})"
        else:
            return f"{type(self).__name__}({self.chars!r})"


class DynamicCharset(Charset):
    """Charset with exactly the chars of a specific secret.

    Smaller alphabets give smaller integers, but the charset has to be
    transported together with the shares.
    """

    def __init__(self, chars: str) -> None:
        super().__init__(chars, name=None)

    @classmethod
    def from_secret(cls, secret: str) -> 'DynamicCharset':
        # dict preserves first occurrence order
        chars = "".join(dict.fromkeys(secret))
        return cls(chars)


ASCII_CHARS = "".join(chr(i) for i in range(32, 127))

DEFAULT_CHARSET = Charset(ASCII_CHARS, name="ascii")

NAMED_CHARSETS: Dict[str, Charset] = {
    "ascii"       : DEFAULT_CHARSET,
    "alphanumeric": Charset(string.digits + string.ascii_letters, name="alphanumeric"),
    "digits"      : Charset(string.digits, name="digits"),
    "hex"         : Charset("0123456789abcdef", name="hex"),
}


def derive_charset(text: str) -> Charset:
    """Charset with exactly the chars of text, DEFAULT_CHARSET for an empty text."""
    if text == "":
        return DEFAULT_CHARSET
    else:
        return DynamicCharset.from_secret(text)


def from_representation(representation: str) -> Charset:
    if representation == "":
        return DEFAULT_CHARSET

    if representation.startswith(NAMED_PREFIX):
        name = representation[len(NAMED_PREFIX) :]
        if name in NAMED_CHARSETS:
            return NAMED_CHARSETS[name]
        else:
            raise InvalidArgument(f"Unknown charset name '{name}'")

    if len(representation) % 2 != 0:
        raise InvalidArgument(f"Invalid charset representation '{representation}'")

    data = enc_util.hex2bytes(representation)
    try:
        chars = data.decode("utf-8")
    except UnicodeDecodeError as ex:
        raise InvalidArgument(f"Invalid charset representation '{representation}': {ex}")
    return DynamicCharset(chars)


def encode(text: str, charset: Charset = DEFAULT_CHARSET) -> int:
    return charset.encode(text)


def decode(num: int, charset: Charset = DEFAULT_CHARSET) -> str:
    return charset.decode(num)
