"""Brainfly entrypoint module exposing the public API and CLI."""

import argparse
import logging
import os
import statistics
import sys
import time

from brainfly_lang import (
    BrainflyError,
    BufferIO,
    ConsoleIO,
    Executable,
    RuntimeConfig,
    build_bundle,
    load_artifact,
    save_artifact,
    save_text,
)
from brainfly_lang.artifact import OBJECT_SUFFIX, TEXT_SUFFIX

__all__ = [
    "build",
    "run",
    "bench",
    "bundle",
    "show",
    "main",
]

MIN_MEMORY = 128
BENCH_MIN_RUNS = 5
BENCH_MIN_SECONDS = 10.0


def build(args, config: RuntimeConfig) -> int:
    program = load_artifact(args.file, config)
    stem = os.path.splitext(os.path.basename(args.file))[0]
    save_text(program, stem + TEXT_SUFFIX)
    save_artifact(program, stem + OBJECT_SUFFIX)
    print(f"Built {stem}{TEXT_SUFFIX} and {stem}{OBJECT_SUFFIX}")
    return 0


def run(args, config: RuntimeConfig) -> int:
    program = load_artifact(args.file, config)
    memory = bytearray(max(args.memory_size, MIN_MEMORY))
    io_handler = ConsoleIO()
    try:
        address = program.run(memory, io_handler.input, io_handler.output)
    finally:
        io_handler.flush()
    return address & 0xFF


def _outliers(samples):
    mean = statistics.fmean(samples)
    stdev = statistics.pstdev(samples)
    return [s for s in samples if abs(s - mean) > 2 * stdev]


def _measure(program: Executable, memory: bytearray, io_handler: BufferIO, seconds: float):
    samples = []
    started = time.perf_counter()
    while len(samples) < BENCH_MIN_RUNS or time.perf_counter() - started < seconds:
        t0 = time.perf_counter_ns()
        program.run(memory, io_handler.input, io_handler.output)
        samples.append(time.perf_counter_ns() - t0)
        memory[:] = bytes(len(memory))
        io_handler.reset()
    return samples


def bench(args, config: RuntimeConfig) -> int:
    program = load_artifact(args.file, config)
    memory = bytearray(max(args.memory_size, MIN_MEMORY))
    io_handler = BufferIO()
    print("Warming up...")
    _measure(program, memory, io_handler, args.seconds)
    print("Benchmarking...")
    samples = _measure(program, memory, io_handler, args.seconds)
    outliers = _outliers(samples)
    for sample in outliers:
        samples.remove(sample)
    print(f"Removed {len(outliers)} {'outlier' if len(outliers) <= 1 else 'outliers'}")
    print(f"Mean: {statistics.fmean(samples)} ns")
    print(f"StdDev: {statistics.pstdev(samples)} ns")
    return 0


def bundle(args, config: RuntimeConfig) -> int:
    program = load_artifact(args.file, config)
    out = args.out or os.path.splitext(os.path.basename(args.file))[0] + ".py"
    with open(out, "w", encoding="utf-8") as f:
        f.write(build_bundle(program, os.path.basename(out)))
    print(f"Bundled {out}")
    return 0


def show(args, config: RuntimeConfig) -> int:
    program = load_artifact(args.file, config)
    print(program.to_friendly_string() if args.friendly else str(program))
    return 0


def parse_args(argv):
    parser = argparse.ArgumentParser(prog="brainfly", description="Brainfly ahead-of-time compiler")
    parser.add_argument("--verbose", action="store_true", help="Log compilation details")
    parser.add_argument(
        "--interpreted", action="store_true", help="Walk the chain instead of compiling it"
    )
    commands = parser.add_subparsers(dest="command")

    p = commands.add_parser("build", help="Compile to .bft and .bfo artifacts")
    p.add_argument("file")
    p.set_defaults(handler=build)

    p = commands.add_parser("run", help="Run a program or artifact")
    p.add_argument("memory_size", type=int)
    p.add_argument("file")
    p.set_defaults(handler=run)

    p = commands.add_parser("bench", help="Time repeated runs of a program or artifact")
    p.add_argument("memory_size", type=int)
    p.add_argument("file")
    p.add_argument(
        "--seconds", type=float, default=BENCH_MIN_SECONDS, help="Minimum time per phase"
    )
    p.set_defaults(handler=bench)

    p = commands.add_parser("bundle", help="Write a standalone Python script")
    p.add_argument("file")
    p.add_argument("--out", default=None, help="Output script path")
    p.set_defaults(handler=bundle)

    p = commands.add_parser("show", help="Print the canonical rendering")
    p.add_argument("file")
    p.add_argument("--friendly", action="store_true", help="Decode operands to integers")
    p.set_defaults(handler=show)

    return parser, parser.parse_args(argv)


def main(argv=None):
    parser, args = parse_args(sys.argv[1:] if argv is None else argv)
    if args.command is None:
        parser.print_usage()
        return 0

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(message)s",
    )
    config = RuntimeConfig.from_env()
    if args.interpreted:
        config.backend = "interpreted"

    try:
        return args.handler(args, config)
    except (BrainflyError, OSError) as e:
        print(f"FATAL ERROR\n{e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    sys.exit(main())
