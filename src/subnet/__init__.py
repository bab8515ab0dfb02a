"""
subnet - IPv4/IPv6 address and network arithmetic

Address and prefix value types with network/broadcast derivation,
membership tests, subnetting, uneven splitting, supernetting and
summarization of networks into the smallest set of CIDR blocks.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from subnet.core import from_json, parse, to_json
from subnet.errors import (
    InvalidAddress,
    InvalidMask,
    InvalidPrefix,
    OutOfRange,
    SubnetError,
)
from subnet.formats import ntoa
from subnet.ipv4 import IPv4
from subnet.ipv6 import IPv6, Mapped
from subnet.prefix import Prefix, Prefix32, Prefix128
from subnet.validation import (
    valid,
    valid_ip,
    valid_ipv4,
    valid_ipv4_netmask,
    valid_ipv4_subnet,
    valid_ipv6,
    valid_ipv6_subnet,
)

__version__ = "0.1.0"
__author__ = "DNS Science.io"
__copyright__ = "Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company"

__all__ = [
    "IPv4",
    "IPv6",
    "Mapped",
    "Prefix",
    "Prefix32",
    "Prefix128",
    "SubnetError",
    "InvalidAddress",
    "InvalidPrefix",
    "OutOfRange",
    "InvalidMask",
    "parse",
    "ntoa",
    "to_json",
    "from_json",
    "valid",
    "valid_ip",
    "valid_ipv4",
    "valid_ipv6",
    "valid_ipv4_subnet",
    "valid_ipv6_subnet",
    "valid_ipv4_netmask",
]
