"""
String validity predicates used to gate input before parsing.

None of these raise; malformed input, including non-strings, yields False.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import re

from subnet.errors import InvalidAddress, InvalidMask
from subnet.formats import is_dotted_quad, parse_ipv6_groups
from subnet.prefix import Prefix32

IPV4_CIDR_SUFFIX = re.compile(r"[12]?[0-9]|3[0-2]")
IPV6_CIDR_SUFFIX = re.compile(r"[0-9]{1,3}")


def valid_ipv4(addr: str) -> bool:
    """Check if the given string is a valid IPv4 address.

    >>> valid_ipv4("172.16.10.1")
    True
    >>> valid_ipv4("2002::1")
    False
    """
    return isinstance(addr, str) and is_dotted_quad(addr)


def valid_ipv6(addr: str) -> bool:
    """Check if the given string is a valid IPv6 address.

    >>> valid_ipv6("2002::1")
    True
    >>> valid_ipv6("2002::DEAD::BEEF")
    False
    """
    if not isinstance(addr, str):
        return False
    try:
        parse_ipv6_groups(addr.strip())
    except InvalidAddress:
        return False
    return True


def valid_ip(addr: str) -> bool:
    """Check if the given string is a valid IPv4 or IPv6 address."""
    return valid_ipv4(addr) or valid_ipv6(addr)


def valid_ipv4_netmask(addr: str) -> bool:
    """Check if the argument is a contiguous dotted decimal netmask."""
    if not valid_ipv4(addr):
        return False
    try:
        Prefix32.parse_netmask(addr)
    except InvalidMask:
        return False
    return True


def valid_ipv4_subnet(addr: str) -> bool:
    """Check if the given string is an IPv4 address with a CIDR or netmask suffix.

    >>> valid_ipv4_subnet("10.0.0.0/255.255.255.0")
    True
    >>> valid_ipv4_subnet("10.0.0.0/64")
    False
    """
    if not isinstance(addr, str):
        return False
    ip, _, netmask = addr.partition("/")
    return valid_ipv4(ip) and (
        bool(IPV4_CIDR_SUFFIX.fullmatch(netmask)) or valid_ipv4_netmask(netmask)
    )


def valid_ipv6_subnet(addr: str) -> bool:
    """Check if the given string is an IPv6 address with a /0-128 suffix."""
    if not isinstance(addr, str):
        return False
    ip, _, netmask = addr.partition("/")
    if not IPV6_CIDR_SUFFIX.fullmatch(netmask):
        return False
    return valid_ipv6(ip) and int(netmask) <= 128


def valid(addr: str) -> bool:
    """Check if the given string is a valid address or a valid subnet."""
    return valid_ip(addr) or valid_ipv4_subnet(addr) or valid_ipv6_subnet(addr)
