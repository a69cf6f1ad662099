# This file is part of the bigsss project
# https://github.com/mbarkhau/bigsss
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT
"""bigsss: Shamir Secret Sharing for big integers and strings.

A cli app and library to split and recombine secrets of arbitrary size.
"""

__version__ = "2022.1009b0"
