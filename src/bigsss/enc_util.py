# This file is part of the bigsss project
# https://github.com/mbarkhau/bigsss
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT

"""Helper functions related to data/type encoding/decoding."""

import base64
import binascii

from .common_types import InvalidArgument


def bytes2hex(data: bytes) -> str:
    """Convert bytes to a hex string."""
    return base64.b16encode(data).decode('ascii').lower()


def hex2bytes(hex_str: str) -> bytes:
    """Convert a hex string to bytes."""
    hex_str = hex_str.upper().zfill(2 * ((len(hex_str) + 1) // 2))
    try:
        return base64.b16decode(hex_str.encode('ascii'))
    except (binascii.Error, UnicodeEncodeError) as ex:
        raise InvalidArgument(f"Invalid hex string '{hex_str}': {ex}")


def int2hex(num: int) -> str:
    """Serialize a non-negative (arbitrary sized) int as lowercase hex."""
    assert num >= 0
    return f"{num:x}"


def hex2int(hex_str: str) -> int:
    r"""Parse a non-negative (arbitrary sized) int from hex.

    Unlike int(hex_str, 16), no sign, whitespace or underscores are accepted.
    """
    if not hex_str or any(c not in "0123456789abcdefABCDEF" for c in hex_str):
        raise InvalidArgument(f"Invalid hex number '{hex_str}'")
    return int(hex_str, 16)
