"""
Prefix lengths for 32-bit and 128-bit networks.

A prefix only knows its length and the width it applies to; the mask,
hostmask and their renderings are all derived from those two numbers.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

from functools import total_ordering
from typing import Sequence

from subnet.errors import InvalidMask, OutOfRange
from subnet.formats import (
    DOTTED_QUAD,
    compress_groups,
    int_to_dotted,
    int_to_groups,
    int_to_octets,
)


@total_ordering
class Prefix:
    """Common behaviour of Prefix32 and Prefix128."""

    WIDTH = 0

    def __init__(self, length: int):
        length = int(length)
        if not 0 <= length <= self.WIDTH:
            raise OutOfRange(f"Prefix must be in range 0..{self.WIDTH}, got: {length}")
        self._length = length

    @property
    def length(self) -> int:
        return self._length

    @property
    def host_prefix(self) -> int:
        """Number of host bits left after the prefix."""
        return self.WIDTH - self._length

    def bits(self) -> str:
        return "1" * self._length + "0" * self.host_prefix

    def to_int(self) -> int:
        """The mask as an unsigned integer of the prefix width."""
        all_ones = (1 << self.WIDTH) - 1
        return (all_ones >> self.host_prefix) << self.host_prefix

    def hostmask_int(self) -> int:
        return ~self.to_int() & ((1 << self.WIDTH) - 1)

    def __int__(self) -> int:
        return self._length

    def __index__(self) -> int:
        return self._length

    def __str__(self) -> str:
        return str(self._length)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._length})"

    def __hash__(self) -> int:
        return hash(self._length)

    def _other_length(self, other):
        if isinstance(other, Prefix):
            if other.WIDTH != self.WIDTH:
                return NotImplemented
            return other.length
        if isinstance(other, int) and not isinstance(other, bool):
            return other
        return NotImplemented

    def __eq__(self, other) -> bool:
        length = self._other_length(other)
        if length is NotImplemented:
            return NotImplemented
        return self._length == length

    def __lt__(self, other) -> bool:
        length = self._other_length(other)
        if length is NotImplemented:
            return NotImplemented
        return self._length < length

    def __add__(self, other) -> int:
        if isinstance(other, Prefix):
            return self._length + other.length
        return self._length + other

    __radd__ = __add__

    def __sub__(self, other) -> int:
        if isinstance(other, Prefix):
            return abs(self._length - other.length)
        return self._length - other


class Prefix32(Prefix):
    """Prefix of an IPv4 network.

    >>> Prefix32(24).to_ip()
    '255.255.255.0'
    """

    WIDTH = 32

    def to_u32(self) -> int:
        return self.to_int()

    @property
    def octets(self) -> list[int]:
        return int_to_octets(self.to_int())

    def __getitem__(self, index: int) -> int:
        return self.octets[index]

    def to_ip(self) -> str:
        """The netmask in dotted decimal form."""
        return int_to_dotted(self.to_int())

    @property
    def hostmask_octets(self) -> list[int]:
        return int_to_octets(self.hostmask_int())

    def hostmask(self) -> str:
        """The hostmask in dotted decimal form, e.g. ``0.0.0.255`` for /24."""
        return int_to_dotted(self.hostmask_int())

    @classmethod
    def parse_netmask(cls, netmask: str | Sequence[int]) -> "Prefix32":
        """Build a prefix from a dotted netmask such as ``255.255.255.0``."""
        if isinstance(netmask, str):
            if not DOTTED_QUAD.fullmatch(netmask.strip()):
                raise InvalidMask(f"Netmask must be four dotted decimal octets: {netmask!r}")
            octets = netmask.strip().split(".")
        else:
            octets = list(netmask)
        if len(octets) != 4:
            raise InvalidMask(f"Netmask must contain 4 octets: {netmask!r}")

        value = 0
        for octet in octets:
            try:
                number = int(octet)
            except (TypeError, ValueError):
                raise InvalidMask(f"Invalid netmask octet {octet!r} in {netmask!r}") from None
            if not 0 <= number <= 255:
                raise InvalidMask(f"Invalid netmask octet {octet!r} in {netmask!r}")
            value = (value << 8) | number

        bits = f"{value:032b}"
        if "01" in bits:
            raise InvalidMask(f"Netmask {netmask!r} is not contiguous")
        return cls(bits.count("1"))


class Prefix128(Prefix):
    """Prefix of an IPv6 network."""

    WIDTH = 128

    def __init__(self, length: int = 128):
        super().__init__(length)

    def to_u128(self) -> int:
        return self.to_int()

    def to_ip(self) -> str:
        return compress_groups(int_to_groups(self.to_int()))

    def hostmask(self) -> str:
        return compress_groups(int_to_groups(self.hostmask_int()))
