"""
IPv4 addresses and networks.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import re
from typing import Iterator

from subnet.address import BaseAddress, check_expand
from subnet.errors import InvalidAddress, InvalidPrefix
from subnet.formats import (
    DOTTED_QUAD,
    IPV4_MAX,
    dotted_to_int,
    int_to_dotted,
    int_to_octets,
    is_dotted_quad,
)
from subnet.prefix import Prefix32


# Leading bits of the first octet -> default prefix, checked top-down.
# Anything that falls through (class D and E space) gets /24.
CLASSFUL = [
    ("0", 8),     # Class A, 0.0.0.0 - 127.255.255.255
    ("10", 16),   # Class B, 128.0.0.0 - 191.255.255.255
    ("110", 24),  # Class C, 192.0.0.0 - 223.255.255.255
]
CLASSFUL_FALLBACK = 24

PRIVATE_RANGES = [
    "10.0.0.0/8",
    "172.16.0.0/12",
    "192.168.0.0/16",
]
MULTICAST_RANGES = ["224.0.0.0/4"]
LOOPBACK_RANGES = ["127.0.0.0/8"]
LINK_LOCAL_RANGES = ["169.254.0.0/16"]

CIDR_SUFFIX = re.compile(r"[0-9]{1,2}")
ADDRESS_IN_TEXT = re.compile(
    r"((25[0-5]|2[0-4][0-9]|1[0-9][0-9]|[1-9][0-9]|[0-9])\.){3}"
    r"(25[0-5]|2[0-4][0-9]|1[0-9][0-9]|[1-9][0-9]|[0-9])"
)


class IPv4(BaseAddress):
    """An IPv4 address with its prefix.

    >>> ip = IPv4("172.16.10.1/24")
    >>> ip.network.to_string()
    '172.16.10.0/24'
    >>> ip.netmask
    '255.255.255.0'
    """

    WIDTH = 32
    VERSION = 4
    PREFIX_CLASS = Prefix32

    def __init__(self, text: str):
        address, has_suffix, suffix = text.partition("/")
        if not is_dotted_quad(address):
            raise InvalidAddress(f"Invalid IP {address!r}")
        prefix = self._parse_suffix(suffix.strip()) if has_suffix else Prefix32(32)
        self._setup(dotted_to_int(address), prefix)

    @staticmethod
    def _parse_suffix(suffix: str) -> Prefix32:
        if CIDR_SUFFIX.fullmatch(suffix):
            return Prefix32(int(suffix))
        if DOTTED_QUAD.fullmatch(suffix):
            return Prefix32.parse_netmask(suffix)
        raise InvalidPrefix(f"Invalid netmask {suffix!r}")

    # ==========================================================================
    # Alternate constructors
    # ==========================================================================

    @classmethod
    def parse_u32(cls, value: int, prefix: Prefix32 | int = 32) -> "IPv4":
        """Build from an unsigned 32-bit integer.

        >>> IPv4.parse_u32(167772160, 8).to_string()
        '10.0.0.0/8'
        """
        if not 0 <= value <= IPV4_MAX:
            raise InvalidAddress(f"not a 32-bit unsigned integer: {value!r}")
        return cls.from_int(value, prefix)

    @classmethod
    def parse_data(cls, data: bytes, prefix: Prefix32 | int = 32) -> "IPv4":
        """Build from four bytes in network byte order."""
        if len(data) != 4:
            raise InvalidAddress(f"IPv4 data must be 4 bytes, got {len(data)}")
        return cls.from_int(int.from_bytes(bytes(data), "big"), prefix)

    @classmethod
    def parse_classful(cls, text: str) -> "IPv4":
        """Build with the default prefix of the address class.

        >>> IPv4.parse_classful("150.1.1.1").to_string()
        '150.1.1.1/16'
        """
        address = text.strip()
        if not is_dotted_quad(address):
            raise InvalidAddress(f"Invalid IP {text!r}")
        leading = f"{int(address.split('.')[0]):08b}"
        return cls.from_int(dotted_to_int(address), cls._classful_prefix(leading))

    @staticmethod
    def _classful_prefix(bits: str) -> int:
        for pattern, length in CLASSFUL:
            if bits.startswith(pattern):
                return length
        return CLASSFUL_FALLBACK

    @classmethod
    def extract(cls, text: str) -> "IPv4":
        """Pull the first IPv4 address out of free text."""
        match = ADDRESS_IN_TEXT.search(text)
        if not match:
            raise InvalidAddress(f"Couldn't extract an IPv4 address from {text!r}")
        return cls(match.group(0))

    # ==========================================================================
    # Accessors
    # ==========================================================================

    @property
    def address(self) -> str:
        return int_to_dotted(self._value)

    @property
    def octets(self) -> list[int]:
        return int_to_octets(self._value)

    def __getitem__(self, index: int) -> int:
        return self.octets[index]

    def octet(self, index: int) -> int:
        return self[index]

    @property
    def u32(self) -> int:
        return self._value

    def to_u32(self) -> int:
        return self._value

    @property
    def netmask(self) -> str:
        return self._prefix.to_ip()

    @property
    def hostmask(self) -> str:
        return self._prefix.hostmask()

    @property
    def reverse_dns(self) -> str:
        return ".".join(str(octet) for octet in reversed(self.octets)) + ".in-addr.arpa"

    def to_ipv6(self) -> str:
        """The address as two hextets, e.g. ``ac10:0a01`` for 172.16.10.1."""
        return f"{self._value >> 16:04x}:{self._value & 0xFFFF:04x}"

    def __str__(self) -> str:
        return self.address

    # ==========================================================================
    # Replacement
    # ==========================================================================

    def with_octet(self, index: int, value: int) -> "IPv4":
        """A new address with one octet replaced, validated like a fresh parse."""
        octets = self.octets
        octets[index] = int(value)
        return type(self)(f"{'.'.join(str(octet) for octet in octets)}/{self._prefix}")

    def with_netmask(self, netmask: str) -> "IPv4":
        return self.with_prefix(Prefix32.parse_netmask(netmask))

    # ==========================================================================
    # Network derivations
    # ==========================================================================

    @property
    def network_u32(self) -> int:
        return self._network_int()

    @property
    def broadcast_u32(self) -> int:
        return self._broadcast_int()

    @property
    def broadcast(self) -> "IPv4":
        """Broadcast address; /31 yields 255.255.255.255 and /32 the address itself."""
        if self._prefix <= 30:
            return self.from_int(self._broadcast_int(), self._prefix)
        if self._prefix == 31:
            return self.from_int(IPV4_MAX, self._prefix)
        return self

    @property
    def first(self) -> "IPv4":
        """First usable host."""
        if self._prefix <= 30:
            return self.from_int(self._network_int() + 1, self._prefix)
        if self._prefix == 31:
            return self.from_int(self._network_int(), self._prefix)
        return self

    @property
    def last(self) -> "IPv4":
        """Last usable host."""
        if self._prefix <= 30:
            return self.from_int(self._broadcast_int() - 1, self._prefix)
        if self._prefix == 31:
            return self.from_int(self._broadcast_int(), self._prefix)
        return self

    def each_host(self, limit: int | None = None) -> Iterator["IPv4"]:
        """Like each(), without the network and broadcast addresses."""
        return self._range(self._network_int() + 1, self._broadcast_int() - 1, limit)

    def hosts(self) -> list["IPv4"]:
        check_expand(max(self.size - 2, 0), f"Listing hosts of {self.to_string()}")
        return list(self.each_host())

    def to(self, other: "IPv4 | str") -> list[str]:
        """Dotted addresses from this one up to other, inclusive."""
        if not isinstance(other, IPv4):
            other = IPv4(other)
        check_expand(int(other) - self._value + 1, f"Range {self} - {other}")
        return [int_to_dotted(value) for value in range(self._value, int(other) + 1)]

    def successor(self) -> "IPv4":
        return self.parse_u32(self._value + 1, self._prefix)

    def predecessor(self) -> "IPv4":
        return self.parse_u32(self._value - 1, self._prefix)

    # ==========================================================================
    # Classification
    # ==========================================================================

    def _in_any(self, ranges: list[str]) -> bool:
        return any(IPv4(block).includes(self) for block in ranges)

    def is_private(self) -> bool:
        return self._in_any(PRIVATE_RANGES)

    def is_multicast(self) -> bool:
        return self._in_any(MULTICAST_RANGES)

    def is_loopback(self) -> bool:
        return self._in_any(LOOPBACK_RANGES)

    def is_link_local(self) -> bool:
        return self._in_any(LINK_LOCAL_RANGES)

    def is_class_a(self) -> bool:
        return self.bits().startswith(CLASSFUL[0][0])

    def is_class_b(self) -> bool:
        return self.bits().startswith(CLASSFUL[1][0])

    def is_class_c(self) -> bool:
        return self.bits().startswith(CLASSFUL[2][0])
