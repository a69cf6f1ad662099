import pytest

from bigsss.share import *
from bigsss.charset import DEFAULT_CHARSET
from bigsss.charset import NAMED_CHARSETS
from bigsss.charset import derive_charset
from bigsss.common_types import Point
from bigsss.common_types import InvalidArgument


def test_raw_share_format():
    share = RawShare(Point(1, 255), 257)
    assert str(share) == "1-ff-101"
    assert RawShare.parse("1-ff-101") == share
    assert RawShare.parse(" 1-FF-101\n") == share
    assert share.point.x == 1
    assert share.point.y == 255


def test_raw_share_roundtrip_big():
    prime = 2 ** 521 - 1
    share = RawShare(Point(3, prime - 12345), prime)
    assert RawShare.parse(str(share)) == share


@pytest.mark.parametrize("text", ["", "1-2", "1-2-3-4", "1--3", "x-2-3", "-1-2-3", "1-+2-3", "1-2_0-3"])
def test_raw_share_invalid(text):
    with pytest.raises(InvalidArgument):
        RawShare.parse(text)


def test_string_share_default_charset():
    share = StringShare(DEFAULT_CHARSET, RawShare(Point(2, 10), 11))
    assert str(share) == "2-a-b"
    assert share.point == Point(2, 10)
    assert share.prime == 11

    parsed = StringShare.parse("2-a-b")
    assert parsed == share
    assert parsed.charset is DEFAULT_CHARSET


def test_string_share_named_charset():
    share = StringShare(NAMED_CHARSETS["hex"], RawShare(Point(2, 10), 11))
    assert str(share) == "$$hex-2-a-b"
    assert StringShare.parse("$$hex-2-a-b") == share


def test_string_share_dynamic_charset():
    charset = derive_charset("a-b-ä")
    share   = StringShare(charset, RawShare(Point(3, 4), 5))
    text    = str(share)
    assert text.count("-") == 3
    parsed  = StringShare.parse(text)
    assert parsed.charset == charset
    assert parsed.charset_string == charset.representation
    assert parsed.raw == share.raw


def test_string_share_invalid():
    with pytest.raises(InvalidArgument):
        StringShare.parse("1-2")
    with pytest.raises(InvalidArgument):
        StringShare.parse("$$nope-1-2-3")
    with pytest.raises(InvalidArgument):
        StringShare.parse("abc-1-2-3")
    with pytest.raises(InvalidArgument):
        StringShare.parse("6161-1-2-3-4")
    with pytest.raises(InvalidArgument):
        StringShare.parse("-1-2-3")


def test_common_prime():
    shares = [RawShare(Point(1, 2), 7), RawShare(Point(2, 3), 7)]
    assert common_prime(shares) == 7

    with pytest.raises(InvalidArgument):
        common_prime([])
    with pytest.raises(InvalidArgument):
        common_prime(shares + [RawShare(Point(3, 3), 11)])
