"""Command-line interface for the PackBits codec.

Usage:
    python -m packbits_codec compress image.raw            # writes image.raw.pb
    python -m packbits_codec decompress image.raw.pb -o image.raw
    python -m packbits_codec inspect image.raw.pb
    python -m packbits_codec image sprite.png
    python -m packbits_codec bench --rounds 50
"""

import argparse
import sys
from pathlib import Path
from typing import List, Optional
from packbits_codec.benchmark import pattern_dataset, random_dataset, run_benchmark
from packbits_codec.config import BENCH_ROUNDS, BENCH_SEED, PACKED_SUFFIX
from packbits_codec.decoder import decompress, iter_runs
from packbits_codec.encoder import compress
from packbits_codec.scanlines import pack_image


def default_output(input_path: Path, unpack: bool) -> Path:
    """Output path used when -o is not given."""
    if not unpack:
        return input_path.with_name(input_path.name + PACKED_SUFFIX)
    if input_path.suffix == PACKED_SUFFIX:
        return input_path.with_suffix("")
    return input_path.with_name(input_path.name + ".raw")


def cmd_compress(args) -> int:
    data = args.input.read_bytes()
    packed = compress(data)
    output = args.output or default_output(args.input, unpack=False)
    output.write_bytes(packed)
    ratio = len(packed) / len(data) if data else 1.0
    print(f"{args.input} -> {output}: {len(data)} -> {len(packed)} bytes ({ratio:.1%})")
    return 0


def cmd_decompress(args) -> int:
    packed = args.input.read_bytes()
    data = decompress(packed)
    output = args.output or default_output(args.input, unpack=True)
    output.write_bytes(data)
    print(f"{args.input} -> {output}: {len(packed)} -> {len(data)} bytes")
    return 0


def cmd_inspect(args) -> int:
    counts = {"literal": 0, "replicate": 0, "noop": 0}
    total = 0
    for run in iter_runs(args.input.read_bytes()):
        counts[run.kind] += 1
        total += run.length
        if args.verbose:
            print(f"  @{run.offset:<8d} {run.kind:<9s} {run.length}")

    print(f"{args.input}:")
    for kind, count in counts.items():
        print(f"  {kind} runs: {count}")
    print(f"  decompressed size: {total} bytes")
    return 0


def cmd_image(args) -> int:
    packed = pack_image(args.image)
    width, height = packed.size
    print(f"{args.image.name}: {width}x{height} {packed.mode}")
    print(f"  raw: {packed.raw_size} bytes")
    print(f"  packed scanlines: {packed.compressed_size} bytes "
          f"({packed.compressed_size / max(packed.raw_size, 1):.1%})")
    if args.verbose:
        for index, row in enumerate(packed.rows):
            print(f"  row {index:4d}: {len(row)} bytes")
    return 0


def cmd_bench(args) -> int:
    datasets = {
        "pattern": pattern_dataset(),
        "random": random_dataset(seed=args.seed),
    }
    for name, data in datasets.items():
        result = run_benchmark(data, rounds=args.rounds)
        print(f"{name}: {result['input_bytes']} -> {result['packed_bytes']} bytes "
              f"(ratio {result['ratio']:.3f})")
        print(f"  compress:   {result['compress_mb_per_sec']:.2f} MB/s")
        print(f"  decompress: {result['decompress_mb_per_sec']:.2f} MB/s")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='packbits_codec',
        description='PackBits run-length compression (TIFF / PICT)'
    )
    subparsers = parser.add_subparsers(dest='command', help='Commands')

    # Compress
    comp = subparsers.add_parser('compress', help='Compress a file')
    comp.add_argument('input', type=Path)
    comp.add_argument('--output', '-o', type=Path, default=None,
                      help=f'Output path (default: input + {PACKED_SUFFIX})')
    comp.set_defaults(func=cmd_compress)

    # Decompress
    dec = subparsers.add_parser('decompress', help='Decompress a file')
    dec.add_argument('input', type=Path)
    dec.add_argument('--output', '-o', type=Path, default=None,
                     help=f'Output path (default: input without {PACKED_SUFFIX})')
    dec.set_defaults(func=cmd_decompress)

    # Inspect
    ins = subparsers.add_parser('inspect', help='List the runs of a packed file')
    ins.add_argument('input', type=Path)
    ins.add_argument('--verbose', '-v', action='store_true')
    ins.set_defaults(func=cmd_inspect)

    # Image
    img = subparsers.add_parser('image', help='Pack image scanlines and report sizes')
    img.add_argument('image', type=Path)
    img.add_argument('--verbose', '-v', action='store_true')
    img.set_defaults(func=cmd_image)

    # Bench
    bench = subparsers.add_parser('bench', help='Measure codec throughput')
    bench.add_argument('--rounds', '-r', type=int, default=BENCH_ROUNDS)
    bench.add_argument('--seed', type=int, default=BENCH_SEED)
    bench.set_defaults(func=cmd_bench)

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == '__main__':
    sys.exit(main())
