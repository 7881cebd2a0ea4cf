from .grammar import CHAIN_GRAMMAR
from .exceptions import (
    BrainflyError,
    MalformedProgram,
    ArtifactError,
    UnknownSymbol,
    TapeFault,
)
from .interfaces import IOHandler, ConsoleIO, BufferIO
from .models import (
    RuntimeConfig,
    Instruction,
    MovePointer,
    AddData,
    Output,
    Input,
    LoopBody,
)
from .nums import HEX_DIGITS, HexDigit, Int, encode_int, hex_digit
from .ops import Op, Stop, Loop, AddPointer, OutputData, InputData, iter_chain, chain_length
from .interpreter import ChainInterpreter
from .registry import REGISTRY, REGISTRY_VERSION
from .render import render, reconstruct
from .codegen import generate_source, specialize
from .executable import Executable
from .compiler import parse, lower, compile_program
from .artifact import compress, decompress, save_text, save_artifact, load_artifact
from .bundle import build_bundle

__all__ = [
    "CHAIN_GRAMMAR",
    "BrainflyError",
    "MalformedProgram",
    "ArtifactError",
    "UnknownSymbol",
    "TapeFault",
    "IOHandler",
    "ConsoleIO",
    "BufferIO",
    "RuntimeConfig",
    "Instruction",
    "MovePointer",
    "AddData",
    "Output",
    "Input",
    "LoopBody",
    "HEX_DIGITS",
    "HexDigit",
    "Int",
    "encode_int",
    "hex_digit",
    "Op",
    "Stop",
    "Loop",
    "AddPointer",
    "OutputData",
    "InputData",
    "iter_chain",
    "chain_length",
    "ChainInterpreter",
    "REGISTRY",
    "REGISTRY_VERSION",
    "render",
    "reconstruct",
    "generate_source",
    "specialize",
    "Executable",
    "parse",
    "lower",
    "compile_program",
    "compress",
    "decompress",
    "save_text",
    "save_artifact",
    "load_artifact",
    "build_bundle",
]
