"""
Symbol model: the const and enum values collected while parsing a protocol.
"""

import re
from dataclasses import dataclass, field
from typing import List

from .errors import LiteralError

INT64_MIN = -(1 << 63)
INT64_MAX = (1 << 63) - 1

_DECIMAL_RE = re.compile(r"[+-]?[0-9]+\Z")
_HEX_RE     = re.compile(r"[+-]?[0-9A-Fa-f]+\Z")


@dataclass
class ConstItem:
    """A named value.  Used for both consts and enumerators."""
    name: str
    value: str   # decimal form of a signed 64-bit integer


@dataclass
class Generator:
    """Everything the parser found, in declaration order."""
    enums: List[ConstItem] = field(default_factory=list)
    consts: List[ConstItem] = field(default_factory=list)


def parse_number(literal: str) -> int:
    """
    Parse a protocol integer literal: decimal, or hexadecimal when it starts
    with ``0x``.  Raises ValueError unless the value fits a signed 64-bit
    integer.
    """
    base, digits = 10, literal
    if literal.startswith("0x"):
        base, digits = 16, literal[2:]
    pattern = _HEX_RE if base == 16 else _DECIMAL_RE
    if not pattern.match(digits):
        raise ValueError(f"invalid integer literal {literal!r}")
    value = int(digits, base)
    if not INT64_MIN <= value <= INT64_MAX:
        raise ValueError(f"integer literal {literal!r} out of 64-bit range")
    return value


class Accumulator:
    """
    Collects symbols as the parser recognizes them.

    Each generation run gets its own accumulator, and with it its own
    ``Generator`` and enum counter.  Entries are only ever appended.
    """

    def __init__(self):
        self._model = Generator()
        # Value of the most recent enumerator in the current enum block;
        # auto-valued enumerators take the next value.
        self._enum_val = -1

    @property
    def model(self) -> Generator:
        return self._model

    def start_enum_block(self):
        """Reset the auto value; called once at the start of every enum body."""
        self._enum_val = -1

    def add_enum_explicit(self, name: str, literal: str):
        """Add an enumerator with an explicit value, resetting the counter."""
        try:
            value = parse_number(literal)
        except ValueError:
            raise LiteralError(f"invalid enum value {name} = {literal}",
                               name, literal) from None
        self._add_enum(name, value)

    def add_enum_auto(self, name: str):
        """Add an enumerator that takes the previous value plus one."""
        value = self._enum_val + 1
        if value > INT64_MAX:
            # int64 wrap-around
            value = INT64_MIN
        self._add_enum(name, value)

    def _add_enum(self, name: str, value: int):
        self._model.enums.append(ConstItem(name, str(value)))
        self._enum_val = value

    def add_const(self, name: str, literal: str):
        """Add a ``const`` definition."""
        try:
            value = parse_number(literal)
        except ValueError:
            raise LiteralError(f"invalid const value {name} = {literal}",
                               name, literal) from None
        self._model.consts.append(ConstItem(name, str(value)))
