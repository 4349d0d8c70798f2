from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Mapping, Tuple

from modules.number_convert.core.bases import (
    ALL_BASES,
    BASE_SPECS,
    NumericBase,
    Scope,
    canonical_order,
    render_digits,
)
from modules.number_convert.core.detect import ParsedNumber
from modules.number_convert.core.operations import SUPPORTED_OPERATIONS


@dataclass(frozen=True)
class FormatRule:
    copy_prefix: bool = True
    show_prefix: bool = True


DEFAULT_RULE = FormatRule()


@dataclass(frozen=True)
class ConversionResult:
    value: int
    source_text: str
    target_base: NumericBase
    copy_value: str
    display_label: str

    @property
    def result_type(self) -> str:
        return self.target_base.value

    @property
    def search_object_id(self) -> str:
        return f"{self.target_base.value}:{self.source_text}"

    @property
    def operations(self) -> Tuple[str, ...]:
        return tuple(operation.name for operation in SUPPORTED_OPERATIONS)

    def to_dict(self) -> dict:
        return {
            "value": self.value,
            "source_text": self.source_text,
            "target_base": self.target_base.value,
            "result_type": self.result_type,
            "copy_value": self.copy_value,
            "display_label": self.display_label,
            "search_object_id": self.search_object_id,
            "operations": list(self.operations),
        }


def resolve_scope(requested: Iterable[NumericBase] | None, source_base: NumericBase) -> Scope:
    """Explicit scopes are honoured as given; ``None`` means every other base."""
    if requested is None:
        return ALL_BASES - {source_base}
    return frozenset(requested)


def _build_result(
    parsed: ParsedNumber,
    target: NumericBase,
    prefix: str,
    digits: str,
    rule: FormatRule,
) -> ConversionResult:
    copy_value = f"{prefix if rule.copy_prefix else ''}{digits}"
    display_label = f"{parsed.original_text} = {prefix if rule.show_prefix else ''}{digits}"
    return ConversionResult(
        value=parsed.value,
        source_text=parsed.original_text,
        target_base=target,
        copy_value=copy_value,
        display_label=display_label,
    )


def emit(
    parsed: ParsedNumber,
    scope: Iterable[NumericBase] | None,
    rules: Mapping[NumericBase, FormatRule] | None = None,
) -> Iterator[ConversionResult]:
    rules = rules or {}
    for target in canonical_order(resolve_scope(scope, parsed.source_base)):
        prefix = BASE_SPECS[target].prefix
        digits = render_digits(parsed.value, target)
        yield _build_result(parsed, target, prefix, digits, rules.get(target, DEFAULT_RULE))
