from __future__ import annotations

import re
from dataclasses import dataclass

from modules.number_convert.core.bases import (
    BASE_SPECS,
    INT32_MAX,
    INT32_MIN,
    PREFIXED_BASES,
    UINT32_MASK,
    NumericBase,
    to_signed32,
)


_DECIMAL_RE = re.compile(r"[+-]?[0-9]+")


@dataclass(frozen=True)
class ParsedNumber:
    value: int
    source_base: NumericBase
    original_text: str


def _parse_decimal(raw: str) -> int | None:
    if not _DECIMAL_RE.fullmatch(raw):
        return None
    significant = raw.lstrip("+-").lstrip("0")
    if len(significant) > BASE_SPECS[NumericBase.DECIMAL].max_digits:
        return None
    value = int(significant or "0", 10)
    if raw.startswith("-"):
        value = -value
    if value < INT32_MIN or value > INT32_MAX:
        return None
    return value


def _parse_prefixed(raw: str) -> tuple[int, NumericBase] | None:
    head, digits = raw[:2].lower(), raw[2:]
    for base in PREFIXED_BASES:
        spec = BASE_SPECS[base]
        if head != spec.prefix:
            continue
        if spec.pattern is None or not spec.pattern.fullmatch(digits):
            return None
        value = int(digits, spec.radix)
        if value > UINT32_MASK:
            return None
        return to_signed32(value), base
    return None


def detect(text: str | None) -> ParsedNumber | None:
    """Classify a literal as decimal, or as hex/octal/binary by its prefix.

    Returns ``None`` for anything that is not a complete 32-bit literal; the
    caller never sees an exception for bad input.
    """
    raw = (text or "").strip()
    if not raw:
        return None

    value = _parse_decimal(raw)
    if value is not None:
        return ParsedNumber(value, NumericBase.DECIMAL, raw)

    prefixed = _parse_prefixed(raw)
    if prefixed is None:
        return None
    value, base = prefixed
    return ParsedNumber(value, base, raw)
