import ipaddress

import pytest

from plexaubnet.netutil import calculate_last_ip, cidr_overlaps


@pytest.mark.parametrize(
    "cidr1, cidr2, want",
    [
        ("10.0.0.0/24", "10.0.0.0/24", True),
        ("10.0.0.0/16", "10.0.1.0/24", True),
        ("10.0.1.0/24", "10.0.0.0/16", True),
        ("10.0.0.0/24", "10.0.1.0/24", False),
        ("10.0.0.0/23", "10.0.1.0/24", True),
        ("10.0.1.0/24", "10.0.0.0/23", True),
        ("10.0.0.0/16", "192.168.0.0/16", False),
        ("invalid-cidr", "10.0.0.0/24", False),
        ("10.0.0.0/24", "invalid-cidr", False),
        ("2001:db8::/64", "2001:db8::/64", True),
        ("2001:db8::/48", "2001:db8:0:1::/64", True),
        ("2001:db8:0:1::/64", "2001:db8::/48", True),
        ("2001:db8:0:1::/64", "2001:db8:0:2::/64", False),
        ("2001:db8::/63", "2001:db8:0:1::/64", True),
        ("2001:db8::/126", "2001:db8::4/126", False),
        ("2001:db8::1/128", "2001:db8::2/128", False),
        ("::ffff:10.0.0.0/120", "10.0.0.0/24", False),
    ],
    ids=[
        "exact same cidr",
        "first contains second",
        "second contains first",
        "non-overlapping cidrs",
        "partial overlap larger covers smaller",
        "partial overlap smaller within larger",
        "completely different networks",
        "invalid first cidr",
        "invalid second cidr",
        "IPv6 exact same cidr",
        "IPv6 first contains second",
        "IPv6 second contains first",
        "IPv6 non-overlapping cidrs",
        "IPv6 partial overlap",
        "IPv6 boundary /126",
        "IPv6 boundary /128",
        "IPv6 mixed with IPv4-mapped",
    ],
)
def test_cidr_overlaps(cidr1, cidr2, want):
    assert cidr_overlaps(cidr1, cidr2) is want


@pytest.mark.parametrize(
    "cidr1, cidr2",
    [
        ("10.0.0.0/23", "10.0.1.0/24"),
        ("2001:db8::/63", "2001:db8:0:1::/64"),
        ("10.0.0.0/24", "10.0.1.0/24"),
        ("10.0.0.0/16", "2001:db8::/64"),
    ],
)
def test_cidr_overlaps_is_symmetric(cidr1, cidr2):
    assert cidr_overlaps(cidr1, cidr2) == cidr_overlaps(cidr2, cidr1)


def test_cidr_without_prefix_is_invalid():
    assert cidr_overlaps("10.0.0.0", "10.0.0.0/24") is False


def test_different_families_do_not_overlap():
    assert cidr_overlaps("0.0.0.0/0", "::/0") is False


@pytest.mark.parametrize(
    "cidr, want",
    [
        ("192.168.1.0/24", "192.168.1.255"),
        ("10.0.0.0/16", "10.0.255.255"),
        ("192.168.1.0/31", "192.168.1.1"),
        ("192.168.1.1/32", "192.168.1.1"),
        ("2001:db8::/64", "2001:db8::ffff:ffff:ffff:ffff"),
        ("2001:db8::/112", "2001:db8::ffff"),
        ("2001:db8::/126", "2001:db8::3"),
        ("2001:db8::/127", "2001:db8::1"),
        ("2001:db8::1/128", "2001:db8::1"),
    ],
)
def test_calculate_last_ip(cidr, want):
    network = ipaddress.ip_network(cidr, strict=False)
    assert calculate_last_ip(network) == ipaddress.ip_address(want)
    assert str(calculate_last_ip(cidr)) == str(ipaddress.ip_address(want))


def test_calculate_last_ip_invalid_cidr():
    with pytest.raises(ValueError):
        calculate_last_ip("invalid-cidr")