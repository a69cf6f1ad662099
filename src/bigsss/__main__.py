#!/usr/bin/env python
# This file is part of the bigsss project
# https://github.com/mbarkhau/bigsss
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT
"""
__main__ module for bigsss.

Enables use as module: $ python -m bigsss
"""


if __name__ == '__main__':
    from . import cli

    cli.cli()
