from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Tuple


@dataclass(frozen=True)
class SearchOperation:
    name: str
    description: str
    shortcut: str | None = None

    def to_dict(self) -> Dict[str, str | None]:
        return {
            "name": self.name,
            "description": self.description,
            "shortcut": self.shortcut,
        }


@dataclass(frozen=True)
class CopyResultOperation(SearchOperation):
    name: str = "Copy Result"
    description: str = "Copy the conversion result to clipboard"
    shortcut: str | None = "Ctrl+C"


COPY_RESULT = CopyResultOperation()

SUPPORTED_OPERATIONS: Tuple[SearchOperation, ...] = (COPY_RESULT,)


def operation_by_name(name: str | None) -> SearchOperation | None:
    key = (name or "").strip().lower()
    for operation in SUPPORTED_OPERATIONS:
        if operation.name.lower() == key:
            return operation
    return None
