#!/usr/bin/env python3
# This file is part of the bigsss project
# https://github.com/mbarkhau/bigsss
#
# Copyright (c) 2019-2022 Manuel Barkhau (mbarkhau@gmail.com) - MIT License
# SPDX-License-Identifier: MIT

"""CLI/Imperative shell for bigsss."""

import logging
from typing import List
from typing import Optional
from typing import Sequence
from typing import NamedTuple

import click

from . import shamir
from . import enc_util
from . import big_random
from . import charset as cs
from .share import RawShare
from .share import StringShare

try:
    import pretty_traceback

    pretty_traceback.install(envvar='ENABLE_PRETTY_TRACEBACK')
except ImportError:
    pass  # no need to fail because of missing dev dependency


logger = logging.getLogger("bigsss.cli")


class LogConfig(NamedTuple):
    fmt: str
    lvl: int


LOG_FORMAT_DEFAULT = "%(levelname)-7s - %(message)s"

LOG_FORMAT_VERBOSE = "%(asctime)s.%(msecs)03d %(levelname)-7s %(name)-16s - %(message)s"


def _parse_logging_config(verbosity: int) -> LogConfig:
    if verbosity == 0:
        return LogConfig(LOG_FORMAT_DEFAULT, logging.WARNING)
    elif verbosity == 1:
        return LogConfig(LOG_FORMAT_VERBOSE, logging.INFO)
    else:
        assert verbosity >= 2
        return LogConfig(LOG_FORMAT_VERBOSE, logging.DEBUG)


_PREV_VERBOSITY: int = -1


def _configure_logging(verbosity: int = 0) -> None:
    # pylint: disable=global-statement
    global _PREV_VERBOSITY

    if verbosity <= _PREV_VERBOSITY:
        # allow function to be called multiple times
        return

    _PREV_VERBOSITY = verbosity

    # remove previous logging handlers
    for handler in list(logging.root.handlers):
        logging.root.removeHandler(handler)

    log_cfg = _parse_logging_config(verbosity)
    logging.basicConfig(level=log_cfg.lvl, format=log_cfg.fmt, datefmt="%Y-%m-%dT%H:%M:%S")


def echo(msg: str = "") -> bool:
    click.echo(msg)
    return True


def _init_rand(seed: Optional[str]) -> big_random.BigRandom:
    if seed is None:
        return big_random.BigRandom()
    else:
        seed_data = enc_util.hex2bytes(seed)
        return big_random.BigRandom(big_random.init_randrange(seed_data))


def _parse_charset(charset_arg: str, secret: str) -> cs.Charset:
    if charset_arg == "default":
        return cs.DEFAULT_CHARSET
    elif charset_arg == "dynamic":
        return cs.derive_charset(secret)
    else:
        return cs.from_representation(charset_arg)


_opt_verbose = click.option(
    '-v',
    '--verbose',
    count=True,
    help="Control log level. -vv for debug level.",
)

_opt_int = click.option(
    '--int',
    'is_int',
    is_flag=True,
    default=False,
    help="Secret is a non-negative integer, written in hex like the shares.",
)


@click.group(context_settings={'help_option_names': ["-h", "--help"]})
@_opt_verbose
def cli(verbose: int = 0) -> None:
    """CLI for bigsss v2022.1009b0."""
    _configure_logging(verbose)


@cli.command()
@click.version_option(version="2022.1009b0")
def version() -> None:
    """Show version number."""
    echo("bigsss version: 2022.1009b0")


@cli.command()
@click.argument('secret')
@click.option(
    '-t',
    '--threshold',
    type=int,
    default=2,
    show_default=True,
    help="Number of shares required to recover the secret.",
)
@click.option(
    '-n',
    '--num-shares',
    type=int,
    default=3,
    show_default=True,
    help="Number of shares to generate.",
)
@click.option(
    '--charset',
    'charset_arg',
    default="default",
    show_default=True,
    help="Charset for string secrets: default, dynamic or $$name ($$ascii, $$alphanumeric, $$digits, $$hex).",
)
@click.option(
    '--seed',
    default=None,
    help="Hex seed for reproducible shares. Only use for testing!",
)
@_opt_int
@_opt_verbose
def split(
    secret     : str,
    threshold  : int = 2,
    num_shares : int = 3,
    charset_arg: str = "default",
    seed       : Optional[str] = None,
    is_int     : bool = False,
    verbose    : int = 0,
) -> None:
    """Split a secret into shares."""
    _configure_logging(verbose)

    try:
        rand = _init_rand(seed)
        share_texts: List[str]
        if is_int:
            codec = shamir.RawShareCodec(num_shares, threshold, rand)
            share_texts = [str(share) for share in codec.encode(enc_util.hex2int(secret))]
        else:
            charset = _parse_charset(charset_arg, secret)
            encoder = shamir.StringShareEncoder(num_shares, threshold, charset, rand)
            share_texts = [str(share) for share in encoder.encode(secret)]
    except ValueError as err:
        raise click.ClickException(str(err))

    for share_text in share_texts:
        echo(share_text)


@cli.command()
@click.argument('shares', nargs=-1, required=True)
@_opt_int
@_opt_verbose
def join(shares: Sequence[str], is_int: bool = False, verbose: int = 0) -> None:
    """Recover a secret from shares."""
    _configure_logging(verbose)

    try:
        if is_int:
            raw_shares = [RawShare.parse(share) for share in shares]
            secret     = enc_util.int2hex(shamir.RawShareDecoder().decode(raw_shares))
        else:
            str_shares = [StringShare.parse(share) for share in shares]
            secret     = shamir.StringShareDecoder().decode(str_shares)
    except ValueError as err:
        raise click.ClickException(str(err))

    logger.info(f"Recovered secret from {len(shares)} shares")
    echo(secret)


if __name__ == '__main__':
    cli()
