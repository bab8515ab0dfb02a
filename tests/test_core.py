import pytest

from subnet.core import (
    CIDROperations,
    SubnetCalculator,
    calculate_subnet,
    from_json,
    get_address_info,
    parse,
    split_cidr,
    subnet_cidr,
    summarize_cidrs,
    supernet_cidr,
    to_json,
)
from subnet.errors import InvalidAddress, InvalidPrefix, SubnetError
from subnet.formats import ntoa
from subnet.ipv4 import IPv4
from subnet.ipv6 import IPv6, Mapped


# =============================================================================
# parse
# =============================================================================

def test_parse_ipv4():
    ip = parse("172.16.10.1/24")
    assert type(ip) is IPv4
    assert ip.to_string() == "172.16.10.1/24"


def test_parse_ipv6():
    ip = parse("2001:db8::8:800:200c:417a/64")
    assert type(ip) is IPv6
    assert ip.prefix == 64


def test_parse_mapped():
    ip = parse("::ffff:172.16.10.1/128")
    assert type(ip) is Mapped
    assert ip.ipv4.address == "172.16.10.1"


def test_parse_integer():
    ip = parse(167772160)
    assert type(ip) is IPv4
    assert ip.to_string() == "10.0.0.0/32"


def test_parse_bytes():
    assert parse(b"\xac\x10\x0a\x01").address == "172.16.10.1"
    assert str(parse(b"\x00" * 15 + b"\x01")) == "::1"


@pytest.mark.parametrize("value", ["hello", "", "10", 3.5, None, True])
def test_parse_unknown(value):
    with pytest.raises(InvalidAddress):
        parse(value)


def test_parse_bad_bytes():
    with pytest.raises(InvalidAddress):
        parse(b"\x00\x01")


def test_parse_bad_prefix():
    with pytest.raises(InvalidPrefix):
        parse("10.0.0.1/abc")


# =============================================================================
# JSON
# =============================================================================

@pytest.mark.parametrize("text", ["172.16.10.1/24", "2001:db8::1/64", "::ffff:10.1.1.1/128"])
def test_json_round_trip(text):
    ip = parse(text)
    assert from_json(to_json(ip)) == ip


def test_to_json():
    assert to_json(IPv4("172.16.10.1/24")) == '"172.16.10.1/24"'


def test_from_json_rejects_non_strings():
    with pytest.raises(InvalidAddress):
        from_json("12")


# =============================================================================
# Calculator
# =============================================================================

def test_calculate_ipv4():
    info = calculate_subnet("192.168.1.0/24")
    assert info.network == "192.168.1.0"
    assert info.broadcast == "192.168.1.255"
    assert info.netmask == "255.255.255.0"
    assert info.hostmask == "0.0.0.255"
    assert info.prefix_length == 24
    assert info.num_addresses == 256
    assert info.num_hosts == 254
    assert info.first_host == "192.168.1.1"
    assert info.last_host == "192.168.1.254"
    assert info.version == 4


def test_calculate_with_netmask():
    assert calculate_subnet("192.168.1.7/255.255.255.0") == calculate_subnet("192.168.1.0/24")


def test_calculate_point_to_point():
    info = SubnetCalculator.calculate("10.0.0.0/31")
    assert info.num_hosts == 2
    assert info.first_host is None
    assert info.last_host is None


def test_calculate_single_host():
    info = SubnetCalculator.calculate("10.0.0.1/32")
    assert info.num_hosts == 0
    assert info.num_addresses == 1
    assert info.broadcast == "10.0.0.1"


def test_calculate_ipv6():
    info = calculate_subnet("2001:db8::/126")
    assert info.network == "2001:db8::"
    assert info.broadcast == "2001:db8::3"
    assert info.netmask == "ffff:ffff:ffff:ffff:ffff:ffff:ffff:fffc"
    assert info.num_addresses == 4
    assert info.num_hosts == 2
    assert info.first_host == "2001:db8::1"
    assert info.last_host == "2001:db8::2"
    assert info.version == 6


def test_calculate_invalid():
    with pytest.raises(SubnetError):
        calculate_subnet("not-a-network")


def test_subnet_cidr():
    assert subnet_cidr("10.0.0.0/22", 24) == [
        "10.0.0.0/24",
        "10.0.1.0/24",
        "10.0.2.0/24",
        "10.0.3.0/24",
    ]


def test_split_cidr():
    assert split_cidr("172.16.10.0/24", 3) == [
        "172.16.10.0/26",
        "172.16.10.64/26",
        "172.16.10.128/25",
    ]


def test_supernet_cidr():
    assert supernet_cidr("172.16.10.0/24", 22) == "172.16.8.0/22"


# =============================================================================
# CIDR operations
# =============================================================================

def test_summarize_cidrs():
    assert summarize_cidrs(["10.0.1.0/24", "10.0.2.0/24", "10.0.3.0/24", "10.0.4.0/24"]) == [
        "10.0.1.0/24",
        "10.0.2.0/23",
        "10.0.4.0/24",
    ]


def test_summarize_cidrs_ipv6():
    assert summarize_cidrs([" 2001:db8::/65", "2001:db8:0:0:8000::/65"]) == ["2001:db8::/64"]


def test_summarize_cidrs_empty():
    with pytest.raises(SubnetError):
        summarize_cidrs([])


def test_summarize_cidrs_mixed():
    with pytest.raises(SubnetError):
        summarize_cidrs(["10.0.0.0/24", "2001:db8::/64"])


@pytest.mark.parametrize("cidr,address,expected", [
    ("10.0.0.0/8", "10.1.2.3", True),
    ("192.168.0.0/16", "192.168.1.0/24", True),
    ("192.168.1.0/24", "192.168.0.0/16", False),
    ("10.0.0.0/8", "11.0.0.1", False),
    ("2001:db8::/32", "2001:db8:1::1", True),
    ("10.0.0.0/8", "::1", False),
])
def test_contains(cidr, address, expected):
    assert CIDROperations.contains(cidr, address) is expected


# =============================================================================
# Address info
# =============================================================================

def test_address_info_plain_address():
    info = get_address_info("8.8.8.8")
    assert info.address == "8.8.8.8"
    assert info.version == 4
    assert not info.is_private
    assert info.reverse_dns == "8.8.8.8.in-addr.arpa"
    assert info.subnet is None


def test_address_info_network():
    info = get_address_info("10.0.0.1/8")
    assert info.is_private
    assert info.subnet.network == "10.0.0.0"
    assert info.subnet.broadcast == "10.255.255.255"
    assert info.subnet.prefix_length == 8
    assert info.subnet.num_addresses == 2**24


def test_address_info_ipv6():
    info = get_address_info("fe80::1")
    assert info.version == 6
    assert info.is_link_local
    assert not info.is_private


# =============================================================================
# ntoa
# =============================================================================

def test_ntoa():
    assert ntoa(167837953) == "10.1.1.1"
    assert ntoa(0) == "0.0.0.0"
    assert ntoa(2**32 - 1) == "255.255.255.255"


@pytest.mark.parametrize("value", [-1, 2**32, True, "10"])
def test_ntoa_invalid(value):
    with pytest.raises(InvalidAddress):
        ntoa(value)
