"""
Width-agnostic address arithmetic.

BaseAddress holds an unsigned integer and a prefix and implements
everything that only depends on the address width: ordering, network
numbers, containment, iteration, subnetting, uneven splitting,
supernetting, summarization and allocation. IPv4 and IPv6 supply the
width, the prefix class and the text forms.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import logging
from functools import total_ordering
from typing import Iterator

from subnet.config import get_config
from subnet.errors import InvalidAddress, InvalidPrefix, OutOfRange, SubnetError
from subnet.prefix import Prefix

logger = logging.getLogger(__name__)


def check_expand(count: int, what: str) -> None:
    """Refuse to materialize more than the configured number of values."""
    limit = get_config().max_expand
    if count > limit:
        raise OutOfRange(
            f"{what} would produce {count:,} values, above the limit of {limit:,} "
            "(set SUBNET_MAX_EXPAND to raise it)"
        )


@total_ordering
class BaseAddress:
    """An address value paired with its prefix."""

    WIDTH = 0
    VERSION = 0
    PREFIX_CLASS: type[Prefix] = Prefix

    _value: int
    _prefix: Prefix
    _allocator: int

    # ==========================================================================
    # Construction
    # ==========================================================================

    def _setup(self, value: int, prefix: Prefix | int | None) -> None:
        if not 0 <= value < (1 << self.WIDTH):
            raise InvalidAddress(f"{value!r} does not fit in {self.WIDTH} bits")
        self._value = value
        self._prefix = self._coerce_prefix(prefix)
        self._allocator = 0

    @classmethod
    def _coerce_prefix(cls, prefix: Prefix | int | None) -> Prefix:
        if prefix is None:
            return cls.PREFIX_CLASS(cls.WIDTH)
        if isinstance(prefix, cls.PREFIX_CLASS):
            return prefix
        return cls.PREFIX_CLASS(int(prefix))

    @classmethod
    def from_int(cls, value: int, prefix: Prefix | int | None = None):
        """Build a value of this family straight from its integer form."""
        obj = cls.__new__(cls)
        obj._setup(value, prefix)
        return obj

    def with_prefix(self, prefix: Prefix | int):
        """The same address under a different prefix."""
        return self.from_int(self._value, prefix)

    # ==========================================================================
    # Basic accessors
    # ==========================================================================

    @property
    def prefix(self) -> Prefix:
        return self._prefix

    def __int__(self) -> int:
        return self._value

    def bits(self) -> str:
        return format(self._value, f"0{self.WIDTH}b")

    def hexstring(self) -> str:
        return format(self._value, f"0{self.WIDTH // 4}x")

    @property
    def packed(self) -> bytes:
        """The address in network byte order."""
        return self._value.to_bytes(self.WIDTH // 8, "big")

    @property
    def size(self) -> int:
        """Number of addresses in the block."""
        return 1 << self._prefix.host_prefix

    def _network_int(self) -> int:
        return self._value & self._prefix.to_int()

    def _broadcast_int(self) -> int:
        return self._network_int() + self.size - 1

    @property
    def network(self):
        """The network address, carrying the same prefix."""
        return self.from_int(self._network_int(), self._prefix)

    def is_network(self) -> bool:
        return self._prefix < self.WIDTH and self._value == self._network_int()

    def to_string(self) -> str:
        return f"{self}/{self._prefix}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}('{self.to_string()}')"

    # ==========================================================================
    # Ordering
    # ==========================================================================

    def _sort_key(self) -> tuple[int, int]:
        return self._value, self._prefix.length

    def compare(self, other: "BaseAddress") -> int:
        """-1, 0 or 1: by numeric value first, then by prefix length."""
        mine, theirs = self._sort_key(), other._sort_key()
        return (mine > theirs) - (mine < theirs)

    def __eq__(self, other) -> bool:
        if not isinstance(other, BaseAddress):
            return NotImplemented
        return self.VERSION == other.VERSION and self._sort_key() == other._sort_key()

    def __lt__(self, other) -> bool:
        if not isinstance(other, BaseAddress):
            return NotImplemented
        return self._sort_key() < other._sort_key()

    def __hash__(self) -> int:
        return hash((self.VERSION, self._value, self._prefix.length))

    def distance(self, other: "BaseAddress") -> int:
        """Absolute numeric difference between two addresses."""
        return abs(self._value - int(other))

    # ==========================================================================
    # Membership and iteration
    # ==========================================================================

    def includes(self, other: "BaseAddress") -> bool:
        """True if other (address or network) lies inside this network."""
        if other.VERSION != self.VERSION:
            return False
        return (
            self._prefix <= other.prefix.length
            and self._network_int() == (int(other) & self._prefix.to_int())
        )

    def __contains__(self, other) -> bool:
        return isinstance(other, BaseAddress) and self.includes(other)

    def includes_all(self, *others: "BaseAddress") -> bool:
        return all(self.includes(other) for other in others)

    def _range(self, start: int, stop: int, limit: int | None) -> Iterator:
        if limit is not None:
            stop = min(stop, start + limit - 1)
        for value in range(start, stop + 1):
            yield self.from_int(value, self._prefix)

    def each(self, limit: int | None = None) -> Iterator:
        """Lazily yield every address from network to the end of the block.

        Each call starts a fresh traversal. ``limit`` caps the number of
        values yielded, which matters for large IPv6 blocks.
        """
        return self._range(self._network_int(), self._broadcast_int(), limit)

    def __iter__(self) -> Iterator:
        return self.each()

    # ==========================================================================
    # Subnetting
    # ==========================================================================

    def subnet(self, new_prefix: int) -> list:
        """Split into 2**(new_prefix - prefix) equally sized networks."""
        new_prefix = int(new_prefix)
        if not self._prefix <= new_prefix <= self.WIDTH:
            raise InvalidPrefix(
                f"New prefix must be between {self._prefix} and {self.WIDTH}, got: {new_prefix}"
            )
        count = 1 << (new_prefix - self._prefix.length)
        check_expand(count, f"Subnetting {self.to_string()} into /{new_prefix}")

        base = self._network_int()
        step = 1 << (self.WIDTH - new_prefix)
        logger.debug(f"Subnetting {self.to_string()} into {count} x /{new_prefix}")
        return [self.from_int(base + index * step, new_prefix) for index in range(count)]

    def split(self, subnets: int = 2) -> list:
        """Split into exactly ``subnets`` contiguous networks.

        Starts from the smallest even subnetting with at least that many
        blocks, then keeps merging the first summarizable adjacent pair found
        scanning from the end until the count matches.
        """
        if not 1 <= subnets <= self.size:
            raise OutOfRange(f"Value {subnets} out of range 1..{self.size}")

        networks = self.subnet(self._prefix + (subnets - 1).bit_length())
        networks = self._merge_from_end(networks, len(networks) - subnets)
        logger.debug(f"Split {self.to_string()} into {len(networks)} networks")
        return networks

    def _merge_from_end(self, networks: list, merges: int) -> list:
        # ``head`` is still unscanned. ``tail`` holds the scanned end of the
        # list in reverse, and no two neighbours in it can merge. A merge
        # result is checked against its right neighbour first, then the
        # scan carries on leftwards.
        head = networks[:-1]
        tail = networks[-1:]
        while merges:
            if not head:
                raise SubnetError(f"No adjacent networks left to merge in {self.to_string()}")
            merged = head[-1]._aggregate(tail[-1])
            if len(merged) == 1:
                head.pop()
                tail.pop()
                if tail:
                    head.append(merged[0])
                else:
                    tail.append(merged[0])
                merges -= 1
            else:
                tail.append(head.pop())
        return head + tail[::-1]

    def supernet(self, new_prefix: int):
        """The enclosing network at a shorter prefix."""
        new_prefix = int(new_prefix)
        if new_prefix >= self._prefix.length:
            raise InvalidPrefix(
                f"New prefix /{new_prefix} must be smaller than existing /{self._prefix}"
            )
        if new_prefix < 1:
            return self.from_int(0, 0)
        return self.from_int(self._value, new_prefix).network

    # ==========================================================================
    # Summarization
    # ==========================================================================

    def summarize_pair(self, other: "BaseAddress") -> list:
        """Merge two networks into one when they form an exact supernet.

        Returns the including network if one holds the other, the supernet if
        both halves are present, or both networks (lowest first) otherwise.
        """
        first, second = (address.network for address in sorted([self, other]))
        return first._aggregate(second)

    def _aggregate(self, other: "BaseAddress") -> list:
        if self.includes(other):
            return [self]
        wider = self.supernet(self._prefix.length - 1)
        if wider.includes_all(self, other) and self.size + other.size == wider.size:
            return [wider]
        return [self, other]

    @classmethod
    def summarize(cls, *networks: "BaseAddress") -> list:
        """Aggregate networks into the smallest equivalent set of blocks."""
        if not networks:
            raise SubnetError("Can't summarize an empty set of networks")
        if any(network.VERSION != cls.VERSION for network in networks):
            raise SubnetError("Can't summarize networks of different address families")

        result = sorted(network.network for network in networks)
        while True:
            reduced = cls._summarize_pass(result)
            if len(reduced) == len(result):
                logger.debug(f"Summarized {len(networks)} networks into {len(reduced)}")
                return reduced
            result = reduced

    @staticmethod
    def _summarize_pass(networks: list) -> list:
        result = list(networks)
        index = 0
        while index < len(result) - 1:
            merged = result[index].summarize_pair(result[index + 1])
            if len(merged) == 1:
                result[index:index + 2] = merged
            index += 1
        return result

    # ==========================================================================
    # Allocation
    # ==========================================================================

    def allocate(self, skip: int = 0):
        """Hand out the next address of the block, or None when exhausted.

        The cursor lives on this instance and starts at the network base, so
        the first call returns network + 1 + skip.
        """
        if skip < 0:
            raise OutOfRange(f"Allocation skip must not be negative, got: {skip}")
        self._allocator += 1 + skip
        candidate = self._network_int() + self._allocator
        if candidate > self._broadcast_int():
            return None
        return self.from_int(candidate, self._prefix)
