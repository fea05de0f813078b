import pytest

from bitmeter.data import Data, clean_text


def test_defaults():
    data = Data()
    assert (data.ts, data.dr, data.dl, data.ul, data.ad, data.hs) == (0, 0, 0, 0, None, None)


@pytest.mark.parametrize(
    "given,expected",
    [
        ("ad1", "ad1"),
        ("  ad2  ", "ad2"),
        ("ad3  ", "ad3"),
        ("  ad4", "ad4"),
        ("", ""),
        ("   ", ""),
    ],
)
def test_set_address_trims(given, expected):
    data = Data()
    data.ad = given
    assert data.ad == expected


def test_set_address_none():
    data = Data(ad="eth0")
    data.ad = None
    assert data.ad is None


@pytest.mark.parametrize(
    "given,expected",
    [
        ("host1", "host1"),
        ("  host2  ", "host2"),
        ("host3  ", "host3"),
        ("  host4", "host4"),
        ("", ""),
        ("   ", ""),
    ],
)
def test_set_host_trims(given, expected):
    data = Data()
    data.hs = given
    assert data.hs == expected


def test_set_host_none():
    data = Data(hs="box")
    data.hs = None
    assert data.hs is None


def test_constructor_trims_text_fields():
    data = Data(ts=5, dr=1, dl=10, ul=20, ad=" eth0 ", hs="\thost\n")
    assert data.ad == "eth0"
    assert data.hs == "host"
    assert (data.ts, data.dr, data.dl, data.ul) == (5, 1, 10, 20)


def test_equality_of_records():
    assert Data(ts=1, ad="eth0 ") == Data(ts=1, ad="eth0")
    assert Data(ts=1, ad="eth0") != Data(ts=2, ad="eth0")


def test_clean_text():
    assert clean_text("\t x \n") == "x"
    assert clean_text("\v\fy\r") == "y"
    assert clean_text(None) is None
    assert clean_text("a b") == "a b"