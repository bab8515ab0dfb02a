"""
IPv6 addresses and networks, including IPv4-mapped addresses.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import re

from subnet.address import BaseAddress
from subnet.errors import InvalidAddress, InvalidPrefix
from subnet.formats import (
    IPV6_MAX,
    compress_groups,
    expand_groups,
    groups_to_int,
    int_to_groups,
    parse_ipv6_groups,
)
from subnet.ipv4 import IPv4
from subnet.prefix import Prefix128


# RFC 4291 / RFC 4193 special ranges
LINK_LOCAL_RANGE = "fe80::/10"
UNIQUE_LOCAL_RANGE = "fc00::/7"
MULTICAST_RANGE = "ff00::/8"

MAPPED_HEAD = 0xFFFF
PREFIX_SUFFIX = re.compile(r"[0-9]{1,3}")
HEX_STRING = re.compile(r"[0-9A-Fa-f]{32}")
MAPPED_DOTTED = re.compile(r"::(?:ffff:)?([0-9]{1,3}(?:\.[0-9]{1,3}){3})", re.IGNORECASE)


def _split_prefix(text: str) -> tuple[str, Prefix128]:
    address, has_suffix, suffix = text.partition("/")
    if not has_suffix:
        return address, Prefix128(128)
    suffix = suffix.strip()
    if not PREFIX_SUFFIX.fullmatch(suffix):
        raise InvalidPrefix(f"Invalid prefix {suffix!r}")
    return address, Prefix128(int(suffix))


class IPv6(BaseAddress):
    """An IPv6 address with its prefix.

    >>> ip6 = IPv6("2001:db8::8:800:200c:417a/64")
    >>> ip6.address
    '2001:0db8:0000:0000:0008:0800:200c:417a'
    >>> ip6.network.to_string()
    '2001:db8::/64'
    """

    WIDTH = 128
    VERSION = 6
    PREFIX_CLASS = Prefix128

    def __init__(self, text: str):
        address, prefix = _split_prefix(text)
        if "." in address and not address.lower().startswith("::ffff:"):
            raise InvalidAddress(
                f"Embedded IPv4 is only accepted in mapped form (::ffff:a.b.c.d): {address!r}"
            )
        self._setup(groups_to_int(parse_ipv6_groups(address)), prefix)

    # ==========================================================================
    # Alternate constructors
    # ==========================================================================

    @classmethod
    def parse_u128(cls, value: int, prefix: Prefix128 | int = 128) -> "IPv6":
        if not 0 <= value <= IPV6_MAX:
            raise InvalidAddress(f"not a 128-bit unsigned integer: {value!r}")
        return cls.from_int(value, prefix)

    @classmethod
    def parse_data(cls, data: bytes, prefix: Prefix128 | int = 128) -> "IPv6":
        """Build from sixteen bytes in network byte order."""
        if len(data) != 16:
            raise InvalidAddress(f"IPv6 data must be 16 bytes, got {len(data)}")
        return cls.from_int(int.from_bytes(bytes(data), "big"), prefix)

    @classmethod
    def parse_hex(cls, hexstring: str, prefix: Prefix128 | int = 128) -> "IPv6":
        """Build from 32 hex digits without separators."""
        if not HEX_STRING.fullmatch(hexstring):
            raise InvalidAddress(f"Invalid IPv6 hex string {hexstring!r}")
        return cls.from_int(int(hexstring, 16), prefix)

    @staticmethod
    def expand(text: str) -> str:
        """``2001:db8:0:cd30::`` -> ``2001:0db8:0000:cd30:0000:0000:0000:0000``"""
        return expand_groups(parse_ipv6_groups(text))

    @staticmethod
    def compress(text: str) -> str:
        return compress_groups(parse_ipv6_groups(text))

    # ==========================================================================
    # Accessors
    # ==========================================================================

    @property
    def groups(self) -> list[int]:
        return int_to_groups(self._value)

    @property
    def hex_groups(self) -> list[str]:
        return [f"{group:04x}" for group in self.groups]

    def __getitem__(self, index: int) -> int:
        return self.groups[index]

    def to_u128(self) -> int:
        return self._value

    @property
    def address(self) -> str:
        """The fully expanded address."""
        return expand_groups(self.groups)

    @property
    def compressed(self) -> str:
        return compress_groups(self.groups)

    def __str__(self) -> str:
        return self.compressed

    def to_string_uncompressed(self) -> str:
        return f"{self.address}/{self._prefix}"

    @property
    def netmask(self) -> str:
        return self._prefix.to_ip()

    @property
    def reverse_dns(self) -> str:
        return ".".join(reversed(self.hexstring())) + ".ip6.arpa"

    @property
    def literal(self) -> str:
        """The ipv6-literal.net name used for UNC paths."""
        return "-".join(self.hex_groups) + ".ipv6-literal.net"

    def with_group(self, index: int, value: int) -> "IPv6":
        """A new address with one 16-bit group replaced."""
        groups = self.groups
        groups[index] = int(value)
        if not 0 <= groups[index] <= 0xFFFF:
            raise InvalidAddress(f"Group value {value!r} out of range 0..65535")
        return IPv6.from_int(groups_to_int(groups), self._prefix)

    # ==========================================================================
    # Network derivations
    # ==========================================================================

    @property
    def network_u128(self) -> int:
        return self._network_int()

    @property
    def broadcast_u128(self) -> int:
        return self._broadcast_int()

    # ==========================================================================
    # Classification
    # ==========================================================================

    def is_link_local(self) -> bool:
        return IPv6(LINK_LOCAL_RANGE).includes(self)

    def is_unique_local(self) -> bool:
        return IPv6(UNIQUE_LOCAL_RANGE).includes(self)

    def is_multicast(self) -> bool:
        return IPv6(MULTICAST_RANGE).includes(self)

    def is_private(self) -> bool:
        """Unique local space is the IPv6 counterpart of RFC 1918."""
        return self.is_unique_local()

    def is_unspecified(self) -> bool:
        return self._prefix == 128 and self._value == 0

    def is_loopback(self) -> bool:
        return self._prefix == 128 and self._value == 1

    def is_mapped(self) -> bool:
        return self._value >> 32 == MAPPED_HEAD


class Mapped(IPv6):
    """An IPv4-mapped IPv6 address (``::ffff:a.b.c.d``).

    >>> mapped = Mapped("::ffff:172.16.10.1/128")
    >>> mapped.ipv4.address
    '172.16.10.1'
    >>> str(mapped)
    '::ffff:172.16.10.1'
    """

    def __init__(self, text: str):
        address, prefix = _split_prefix(text)
        dotted = MAPPED_DOTTED.fullmatch(address)
        if dotted:
            low = int(IPv4(dotted.group(1)))
        else:
            groups = parse_ipv6_groups(address)
            if groups_to_int(groups) >> 32 != MAPPED_HEAD:
                raise InvalidAddress(f"{address!r} is not an IPv4-mapped address")
            low = (groups[6] << 16) | groups[7]
        self._setup((MAPPED_HEAD << 32) | low, prefix)

    @classmethod
    def from_int(cls, value: int, prefix: Prefix128 | int | None = None) -> IPv6:
        # Derived values (networks, supernets) can leave ::ffff:0:0/96
        if value >> 32 != MAPPED_HEAD:
            return IPv6.from_int(value, prefix)
        return super().from_int(value, prefix)

    @property
    def ipv4(self) -> IPv4:
        """The embedded IPv4 address, prefix shifted down by 96 bits."""
        return IPv4.parse_u32(self._value & 0xFFFFFFFF, max(self._prefix.length - 96, 0))

    def __str__(self) -> str:
        return f"::ffff:{self.ipv4.address}"
