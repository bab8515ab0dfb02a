"""
Dispatch, JSON glue and string-level calculator helpers.
"""

import json
import logging
import re
from dataclasses import dataclass

from subnet.address import BaseAddress
from subnet.errors import InvalidAddress, SubnetError
from subnet.ipv4 import IPv4
from subnet.ipv6 import IPv6, Mapped

logger = logging.getLogger(__name__)

MAPPED_SHAPE = re.compile(r":.+\.")


@dataclass
class SubnetInfo:
    """Information about a subnet."""
    network: str
    broadcast: str
    netmask: str
    hostmask: str
    prefix_length: int
    num_addresses: int
    num_hosts: int
    first_host: str | None
    last_host: str | None
    version: int


@dataclass
class AddressInfo:
    """Information about an IP address or network."""
    address: str
    version: int
    is_private: bool
    is_loopback: bool
    is_multicast: bool
    is_link_local: bool
    reverse_dns: str
    subnet: SubnetInfo | None = None


def parse(value: str | int | bytes) -> IPv4 | IPv6:
    """Build the right address type from a string, integer or byte buffer.

    >>> parse("172.16.10.1/24")
    IPv4('172.16.10.1/24')
    >>> parse("::ffff:172.16.10.1/128")
    Mapped('::ffff:172.16.10.1/128')
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return IPv4.parse_u32(value)
    if isinstance(value, (bytes, bytearray)):
        if len(value) == 4:
            return IPv4.parse_data(value)
        return IPv6.parse_data(value)
    if not isinstance(value, str):
        raise InvalidAddress(f"Unknown IP Address {value!r}")

    if MAPPED_SHAPE.search(value):
        logger.debug(f"Dispatching {value!r} as IPv4-mapped IPv6")
        return Mapped(value)
    if "." in value:
        return IPv4(value)
    if ":" in value:
        return IPv6(value)
    raise InvalidAddress(f"Unknown IP Address {value!r}")


def to_json(address: BaseAddress) -> str:
    """Serialize an address as a JSON string in address/prefix form."""
    return json.dumps(address.to_string())


def from_json(text: str) -> IPv4 | IPv6:
    value = json.loads(text)
    if not isinstance(value, str):
        raise InvalidAddress(f"Expected a JSON string, got {type(value).__name__}")
    return parse(value)


def _last_address(net: BaseAddress) -> BaseAddress:
    return net.from_int(int(net.network) + net.size - 1, net.prefix)


class SubnetCalculator:
    """Calculator for subnet operations."""

    @staticmethod
    def calculate(cidr: str) -> SubnetInfo:
        """Calculate subnet information from CIDR notation."""
        net = parse(cidr.strip())
        prefix = net.prefix.length

        # For /31 and /32 (v4) or /127 and /128 (v6), there are no "hosts"
        if prefix >= net.WIDTH - 1:
            first_host = None
            last_host = None
            num_hosts = 0 if prefix == net.WIDTH else 2
        else:
            first_host = str(net.from_int(int(net.network) + 1, prefix))
            last_host = str(net.from_int(int(_last_address(net)) - 1, prefix))
            num_hosts = net.size - 2

        return SubnetInfo(
            network=str(net.network),
            broadcast=str(_last_address(net)),
            netmask=net.netmask,
            hostmask=net.prefix.hostmask(),
            prefix_length=prefix,
            num_addresses=net.size,
            num_hosts=num_hosts,
            first_host=first_host,
            last_host=last_host,
            version=net.VERSION,
        )

    @staticmethod
    def subnet(cidr: str, new_prefix: int) -> list[str]:
        """Split a CIDR into equally sized smaller subnets."""
        return [net.to_string() for net in parse(cidr.strip()).subnet(new_prefix)]

    @staticmethod
    def split(cidr: str, count: int) -> list[str]:
        """Split a CIDR into exactly count contiguous subnets."""
        return [net.to_string() for net in parse(cidr.strip()).split(count)]

    @staticmethod
    def supernet(cidr: str, new_prefix: int) -> str:
        """Get the supernet for a given CIDR."""
        return parse(cidr.strip()).supernet(new_prefix).to_string()


class CIDROperations:
    """Operations on CIDR blocks."""

    @staticmethod
    def summarize(cidrs: list[str]) -> list[str]:
        """Summarize/aggregate a list of CIDRs into the minimum set."""
        networks = [parse(cidr.strip()) for cidr in cidrs]
        if not networks:
            raise SubnetError("Can't summarize an empty set of networks")
        family = IPv4 if networks[0].VERSION == 4 else IPv6
        return [net.to_string() for net in family.summarize(*networks)]

    @staticmethod
    def contains(cidr: str, address: str) -> bool:
        """Check if a CIDR contains an IP address or subnet."""
        return parse(cidr.strip()).includes(parse(address.strip()))


def get_address_info(address: str) -> AddressInfo:
    """Get detailed information about an IP address or CIDR."""
    ip = parse(address.strip())

    info = AddressInfo(
        address=str(ip),
        version=ip.VERSION,
        is_private=ip.is_private(),
        is_loopback=ip.is_loopback(),
        is_multicast=ip.is_multicast(),
        is_link_local=ip.is_link_local(),
        reverse_dns=ip.reverse_dns,
    )

    if "/" in address:
        info.subnet = SubnetCalculator.calculate(address)

    return info


def calculate_subnet(cidr: str) -> SubnetInfo:
    """Calculate subnet information from CIDR notation."""
    return SubnetCalculator.calculate(cidr)


def summarize_cidrs(cidrs: list[str]) -> list[str]:
    """Summarize/aggregate a list of CIDRs."""
    return CIDROperations.summarize(cidrs)


def subnet_cidr(cidr: str, new_prefix: int) -> list[str]:
    """Split a CIDR into /new_prefix subnets."""
    return SubnetCalculator.subnet(cidr, new_prefix)


def split_cidr(cidr: str, count: int) -> list[str]:
    """Split a CIDR into count subnets of uneven size."""
    return SubnetCalculator.split(cidr, count)


def supernet_cidr(cidr: str, new_prefix: int) -> str:
    """Widen a CIDR to /new_prefix."""
    return SubnetCalculator.supernet(cidr, new_prefix)
