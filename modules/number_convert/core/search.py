from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterator, List, Protocol, Tuple

import structlog

from modules.number_convert.core.bases import (
    BASE_SPECS,
    NumericBase,
    Scope,
    base_from_name,
)
from modules.number_convert.core.config import NumberConvertSettings, get_settings
from modules.number_convert.core.detect import detect
from modules.number_convert.core.emit import ConversionResult, emit
from modules.number_convert.core.operations import (
    SUPPORTED_OPERATIONS,
    CopyResultOperation,
    SearchOperation,
)

logger = structlog.get_logger(__name__)

APP_NAME = "NumberConverter"
APP_DESCRIPTION = "Converts numbers between binary, octal, decimal and hex"
MINIMUM_SEARCH_LENGTH = 1

ClipboardWriter = Callable[[str], Any]


class SearchType(str, Enum):
    TEXT = "text"
    PROCESS = "process"


class CancelToken(Protocol):
    def is_set(self) -> bool: ...


@dataclass(frozen=True)
class SearchTag:
    name: str
    description: str


@dataclass(frozen=True)
class SearchRequest:
    searched_text: str
    searched_tag: str | None = None
    search_type: SearchType = SearchType.TEXT


@dataclass(frozen=True)
class HandleResult:
    handled: bool
    keep_open: bool


class UnsupportedOperation(ValueError):
    def __init__(self, operation: object) -> None:
        super().__init__(f"Unsupported operation: {operation!r}")
        self.operation = operation


SEARCH_TAGS: Tuple[SearchTag, ...] = tuple(
    SearchTag(name=base.value, description=BASE_SPECS[base].description)
    for base in NumericBase
)


def app_info() -> Dict[str, Any]:
    return {
        "name": APP_NAME,
        "description": APP_DESCRIPTION,
        "minimum_search_length": MINIMUM_SEARCH_LENGTH,
        "tags": [{"name": tag.name, "description": tag.description} for tag in SEARCH_TAGS],
        "operations": [operation.to_dict() for operation in SUPPORTED_OPERATIONS],
    }


def parse_tag(tag: str | None) -> Tuple[bool, Scope | None]:
    """Resolve a search tag into ``(accepted, scope)``.

    A missing tag or the application name means unscoped (``None``). A base
    name, alias, or comma-separated list of them scopes the query to those
    bases. Any other tag is declined.
    """
    if tag is None or not tag.strip():
        return True, None
    raw = tag.strip()
    if raw.lower() == APP_NAME.lower():
        return True, None

    bases: List[NumericBase] = []
    for chunk in raw.split(","):
        base = base_from_name(chunk)
        if base is None:
            return False, None
        bases.append(base)
    return True, frozenset(bases)


def _is_cancelled(cancel: CancelToken | None) -> bool:
    return cancel is not None and cancel.is_set()


def search(
    request: SearchRequest,
    settings: NumberConvertSettings | None = None,
    cancel: CancelToken | None = None,
) -> Iterator[ConversionResult]:
    if _is_cancelled(cancel) or request.search_type is not SearchType.TEXT:
        return

    accepted, scope = parse_tag(request.searched_tag)
    if not accepted:
        logger.debug("number_convert.tag_declined", tag=request.searched_tag)
        return

    parsed = detect(request.searched_text)
    if parsed is None:
        logger.debug("number_convert.not_a_number", text=request.searched_text)
        return

    settings = settings or get_settings()
    yield from emit(parsed, scope, settings.format_rules())


def result_for_id(
    object_id: str | None,
    settings: NumberConvertSettings | None = None,
) -> ConversionResult | None:
    """Recompute a single result from its ``search_object_id``."""
    if not object_id or ":" not in object_id:
        return None
    base_name, text = object_id.split(":", 1)
    base = base_from_name(base_name)
    if base is None:
        return None
    parsed = detect(text)
    if parsed is None:
        return None
    settings = settings or get_settings()
    return next(emit(parsed, {base}, settings.format_rules()), None)


def handle_result(
    result: ConversionResult,
    operation: SearchOperation,
    clipboard: ClipboardWriter,
) -> HandleResult:
    if not isinstance(result, ConversionResult):
        logger.warning("number_convert.foreign_result", result_type=type(result).__name__)
        raise TypeError(
            f"Expected ConversionResult, got {type(result).__name__}."
        )
    if not isinstance(operation, CopyResultOperation):
        logger.warning("number_convert.unsupported_operation", operation=repr(operation))
        raise UnsupportedOperation(operation)

    clipboard(result.copy_value)
    logger.info(
        "number_convert.copied",
        target_base=result.target_base.value,
        copy_value=result.copy_value,
    )
    return HandleResult(handled=True, keep_open=False)
