"""Closed table of the names a canonical artifact may use.

Built once at import and exposed read-only; a reconstructed chain can only
contain what this table knows how to build.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Callable, Tuple

from .exceptions import ArtifactError, UnknownSymbol
from .nums import HEX_DIGITS, INT_DIGITS, HexDigit, Int
from .ops import AddData, AddPointer, InputData, Loop, Op, OutputData, Stop

REGISTRY_VERSION = 1

OP, INT, HEX = "op", "int", "hex"


@dataclass(frozen=True)
class Symbol:
    name: str
    params: Tuple[str, ...]
    factory: Callable[..., Any]

    def build(self, args):
        if len(args) != len(self.params):
            raise ArtifactError(
                f"'{self.name}' takes {len(self.params)} argument(s), got {len(args)}"
            )
        for position, (kind, arg) in enumerate(zip(self.params, args), start=1):
            if kind_of(arg) != kind:
                raise ArtifactError(
                    f"Argument {position} of '{self.name}' must be {kind}, got {arg!r}"
                )
        return self.factory(*args)


def kind_of(value) -> str:
    if isinstance(value, Op):
        return OP
    if isinstance(value, Int):
        return INT
    if isinstance(value, HexDigit):
        return HEX
    return type(value).__name__


def _build_registry():
    table = {}
    for digit in HEX_DIGITS:
        table[digit.name] = Symbol(digit.name, (), lambda d=digit: d)
    table[Int.name] = Symbol(Int.name, (HEX,) * INT_DIGITS, Int)
    table[Stop.name] = Symbol(Stop.name, (), Stop)
    table[Loop.name] = Symbol(Loop.name, (OP, OP), Loop)
    table[AddPointer.name] = Symbol(AddPointer.name, (INT, OP), AddPointer)
    table[AddData.name] = Symbol(AddData.name, (INT, OP), AddData)
    table[OutputData.name] = Symbol(OutputData.name, (OP,), OutputData)
    table[InputData.name] = Symbol(InputData.name, (OP,), InputData)
    return MappingProxyType(table)


REGISTRY = _build_registry()


def resolve(name: str) -> Symbol:
    try:
        return REGISTRY[name]
    except KeyError:
        raise UnknownSymbol(name) from None
