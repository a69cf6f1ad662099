# This file is part of the bigsss project
# https://github.com/mbarkhau/bigsss
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT
"""Types used across multiple modules."""

from typing import Any
from typing import Sequence
from typing import NamedTuple

# from typing import TypeAlias
TypeAlias = Any


class InvalidArgument(ValueError):
    pass


class IllPosedReconstruction(ValueError):
    """Raised if points cannot determine a unique polynomial."""


class Point(NamedTuple):
    x: int
    y: int


Points: TypeAlias = Sequence[Point]
