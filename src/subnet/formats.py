"""
Text and integer conversions shared by the prefix and address types.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""

import re

from subnet.errors import InvalidAddress


IPV4_MAX = 2**32 - 1
IPV6_MAX = 2**128 - 1

DOTTED_QUAD = re.compile(r"([0-9]{1,3})\.([0-9]{1,3})\.([0-9]{1,3})\.([0-9]{1,3})")
HEXTET = re.compile(r"[0-9A-Fa-f]{1,4}")


# =============================================================================
# IPv4
# =============================================================================

def is_dotted_quad(text: str) -> bool:
    """Four dot-separated decimal octets, each in 0..255."""
    match = DOTTED_QUAD.fullmatch(text)
    if not match:
        return False
    return all(int(octet) < 256 for octet in match.groups())


def dotted_to_int(text: str) -> int:
    """Pack a dotted quad into its 32-bit value."""
    if not is_dotted_quad(text):
        raise InvalidAddress(f"Invalid IP {text!r}")
    value = 0
    for octet in text.split("."):
        value = (value << 8) | int(octet)
    return value


def int_to_octets(value: int) -> list[int]:
    return [(value >> shift) & 0xFF for shift in (24, 16, 8, 0)]


def int_to_dotted(value: int) -> str:
    return ".".join(str(octet) for octet in int_to_octets(value))


def ntoa(value: int) -> str:
    """Convert an unsigned 32-bit integer to dotted decimal.

    >>> ntoa(167837953)
    '10.1.1.1'
    """
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= IPV4_MAX:
        raise InvalidAddress(f"not a 32-bit unsigned integer: {value!r}")
    return int_to_dotted(value)


# =============================================================================
# IPv6
# =============================================================================

def int_to_groups(value: int) -> list[int]:
    return [(value >> shift) & 0xFFFF for shift in range(112, -1, -16)]


def groups_to_int(groups: list[int]) -> int:
    value = 0
    for group in groups:
        value = (value << 16) | group
    return value


def parse_ipv6_groups(text: str) -> list[int]:
    """Split a colon-hex address into its eight 16-bit groups.

    Accepts the full form, a single ``::`` zero run, and a trailing dotted
    quad standing in for the last two groups. Does not look at prefixes.
    """
    if not text or text.count("::") > 1 or ":::" in text:
        raise InvalidAddress(f"Invalid IPv6 address {text!r}")

    if "." in text:
        head_end = text.rfind(":") + 1
        dotted = text[head_end:]
        if head_end == 0 or not is_dotted_quad(dotted):
            raise InvalidAddress(f"Invalid IPv6 address {text!r}")
        low = dotted_to_int(dotted)
        text = f"{text[:head_end]}{low >> 16:x}:{low & 0xFFFF:x}"

    if "::" in text:
        left, right = text.split("::")
        head = left.split(":") if left else []
        tail = right.split(":") if right else []
        missing = 8 - len(head) - len(tail)
        if missing < 1:
            raise InvalidAddress(f"Invalid IPv6 address {text!r}")
        parts = head + ["0"] * missing + tail
    else:
        parts = text.split(":")
        if len(parts) != 8:
            raise InvalidAddress(f"Invalid IPv6 address {text!r}")

    for part in parts:
        if not HEXTET.fullmatch(part):
            raise InvalidAddress(f"Invalid IPv6 address {text!r}")
    return [int(part, 16) for part in parts]


def compress_groups(groups: list[int]) -> str:
    """Render groups with the leftmost longest zero run (two or more) as ``::``."""
    best_start, best_length = 0, 0
    start, length = 0, 0
    for index, group in enumerate(groups):
        if group:
            length = 0
            continue
        if length == 0:
            start = index
        length += 1
        if length > best_length:
            best_start, best_length = start, length

    if best_length < 2:
        return ":".join(f"{group:x}" for group in groups)
    head = ":".join(f"{group:x}" for group in groups[:best_start])
    tail = ":".join(f"{group:x}" for group in groups[best_start + best_length:])
    return f"{head}::{tail}"


def expand_groups(groups: list[int]) -> str:
    return ":".join(f"{group:04x}" for group in groups)
