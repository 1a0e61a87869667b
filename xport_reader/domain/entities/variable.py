from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import TypeAlias

# A decoded cell: text for character columns, float for numeric ones.
DecodedValue: TypeAlias = str | float


class VariableType(IntEnum):
    """Column type, numbered as in the namestr ``ntype`` field."""

    NUMERIC = 1
    STRING = 2


@dataclass(frozen=True, slots=True)
class VariableDescriptor:
    """One column of the dataset, as declared by its namestr record pair.

    ``ordinal`` is the 1-based declared position; ``position`` is the byte
    offset of the value inside a row buffer.
    """

    name: str
    label: str
    type: VariableType
    length: int
    ordinal: int
    position: int

    @property
    def end(self) -> int:
        return self.position + self.length

    @property
    def is_numeric(self) -> bool:
        return self.type is VariableType.NUMERIC


def row_length(descriptors: tuple[VariableDescriptor, ...]) -> int:
    return sum(descriptor.length for descriptor in descriptors)
