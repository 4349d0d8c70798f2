from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, FrozenSet, Pattern


DIGITS = "0123456789ABCDEF"

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1
UINT32_MASK = 0xFFFFFFFF


class NumericBase(Enum):
    BINARY = "Binary"
    OCTAL = "Octal"
    DECIMAL = "Decimal"
    HEXADECIMAL = "Hexadecimal"


Scope = FrozenSet[NumericBase]

ALL_BASES: Scope = frozenset(NumericBase)


@dataclass(frozen=True)
class BaseSpec:
    radix: int
    prefix: str
    alias: str
    description: str
    max_digits: int
    alphabet: str = ""
    pattern: Pattern[str] | None = field(init=False, default=None)

    def __post_init__(self) -> None:
        if self.alphabet:
            pattern = re.compile(
                rf"[{self.alphabet}]{{1,{self.max_digits}}}", re.IGNORECASE
            )
            object.__setattr__(self, "pattern", pattern)


BASE_SPECS: Dict[NumericBase, BaseSpec] = {
    NumericBase.BINARY: BaseSpec(
        radix=2,
        prefix="0b",
        alias="bin",
        description="Convert to binary",
        max_digits=32,
        alphabet="01",
    ),
    NumericBase.OCTAL: BaseSpec(
        radix=8,
        prefix="0o",
        alias="oct",
        description="Convert to octal",
        max_digits=11,
        alphabet="0-7",
    ),
    NumericBase.DECIMAL: BaseSpec(
        radix=10,
        prefix="",
        alias="dec",
        description="Convert to decimal",
        max_digits=10,
    ),
    NumericBase.HEXADECIMAL: BaseSpec(
        radix=16,
        prefix="0x",
        alias="hex",
        description="Convert to hex",
        max_digits=8,
        alphabet="0-9A-F",
    ),
}

PREFIXED_BASES = tuple(
    base for base, spec in BASE_SPECS.items() if spec.prefix
)


def canonical_order(scope: Scope) -> list[NumericBase]:
    return [base for base in NumericBase if base in scope]


def base_from_name(name: str) -> NumericBase | None:
    """Look up a base by its display name or short alias, ignoring case."""
    key = name.strip().lower()
    if not key:
        return None
    for base, spec in BASE_SPECS.items():
        if key in (base.value.lower(), spec.alias):
            return base
    return None


def to_signed32(value: int) -> int:
    value &= UINT32_MASK
    return value - (1 << 32) if value > INT32_MAX else value


def render_digits(value: int, base: NumericBase) -> str:
    if base is NumericBase.DECIMAL:
        return str(value)

    radix = BASE_SPECS[base].radix
    value &= UINT32_MASK
    if value == 0:
        return "0"

    digits = []
    while value > 0:
        value, remainder = divmod(value, radix)
        digits.append(DIGITS[remainder])
    return "".join(reversed(digits))
