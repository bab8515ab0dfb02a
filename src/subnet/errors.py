"""
Exceptions raised by subnet.

Every failure is a ValueError so callers that only care about bad input
can catch that alone.

Copyright (c) 2025 DNS Science.io, an After Dark Systems, LLC company.
All rights reserved.
"""


class SubnetError(ValueError):
    """Base class for all subnet errors."""


class InvalidAddress(SubnetError):
    """An address string or buffer failed shape or range validation."""


class InvalidPrefix(SubnetError):
    """A prefix suffix could not be parsed or an operation got a bad prefix."""


class OutOfRange(InvalidPrefix):
    """A length or count fell outside its allowed range."""


class InvalidMask(InvalidPrefix):
    """A dotted netmask is malformed or has holes in its one-bits."""
