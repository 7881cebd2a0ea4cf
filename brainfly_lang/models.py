import os
from dataclasses import dataclass, field
from typing import List


class Instruction:
    """Node of the parsed, run-length-merged program."""

    __slots__ = ()


@dataclass(frozen=True)
class MovePointer(Instruction):
    offset: int


@dataclass(frozen=True)
class AddData(Instruction):
    delta: int


@dataclass(frozen=True)
class Output(Instruction):
    pass


@dataclass(frozen=True)
class Input(Instruction):
    pass


@dataclass(frozen=True)
class LoopBody(Instruction):
    body: List[Instruction] = field(default_factory=list)


BACKENDS = ("compiled", "interpreted")


@dataclass
class RuntimeConfig:
    backend: str = "compiled"
    inline_depth: int = 16
    max_recursion: int = 10000

    def __post_init__(self):
        if self.backend not in BACKENDS:
            raise ValueError(f"Unknown backend '{self.backend}', expected one of {BACKENDS}")
        # CPython rejects more than 20 statically nested blocks per function.
        if not 1 <= self.inline_depth <= 18:
            raise ValueError("inline_depth must be between 1 and 18")

    @classmethod
    def compiled(cls) -> "RuntimeConfig":
        return cls(backend="compiled")

    @classmethod
    def interpreted(cls) -> "RuntimeConfig":
        return cls(backend="interpreted")

    @classmethod
    def from_env(cls) -> "RuntimeConfig":
        return cls(
            backend=os.environ.get("BRAINFLY_BACKEND", "compiled"),
            inline_depth=int(os.environ.get("BRAINFLY_INLINE_DEPTH", "16")),
            max_recursion=int(os.environ.get("BRAINFLY_MAX_RECURSION", "10000")),
        )
