#!/usr/bin/env python3
"""
CLI for the Exotic PRNG Framework.

Usage:
    python tools/prng_cli.py list                       # show all registered sources
    python tools/prng_cli.py bench                      # next(32) speed test, 10 rounds
    python tools/prng_cli.py bench --iterations 100000 --rounds 3
    python tools/prng_cli.py bench --rounds 3 --out figures/   # plus a calls/s chart
    python tools/prng_cli.py check                      # quality report for every source
    python tools/prng_cli.py check --size 16384 --trials 20
    python tools/prng_cli.py figure --out figures/      # bitmap + histogram per source
"""

import argparse
import logging
import os
import random
import sys
import time

import numpy as np

ROOT = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
sys.path.insert(0, ROOT)

BENCH_ITERATIONS = 1_000_000
BENCH_ROUNDS = 10

logger = logging.getLogger("prng_cli")


def bench_generators():
    """The speed test line-up, seeded the way the benchmark always has been."""
    from exotic_prng import (BaileyCrandall, LinearCongruential,
                             MersenneTwister, MersenneTwister64,
                             Rule30CellularAutomaton)
    return [
        LinearCongruential(1),
        MersenneTwister(1),
        MersenneTwister64(1),
        Rule30CellularAutomaton(1 << 32),
        BaileyCrandall(1 << 32),
    ]


def time_next32(gen, iterations):
    """Seconds spent on `iterations` calls of gen.next(32)."""
    next_fn = gen.next
    t0 = time.perf_counter()
    for _ in range(iterations):
        next_fn(32)
    return time.perf_counter() - t0


def cmd_list(args):
    """Show all registered sources."""
    from tools.sources import get_sources

    sources = get_sources()
    print(f"\n{'Name':<28s} {'Family':<11s} {'Ref':<5s}  Description")
    print("-" * 90)
    for s in sources:
        ref_flag = "yes" if s.reference else "-"
        desc = s.description[:45] if s.description else ""
        print(f"  {s.name:<26s} {s.family:<11s} {ref_flag:<5s}  {desc}")

    n_ref = sum(1 for s in sources if s.reference)
    print(f"\nTotal: {len(sources)} sources  |  baselines={n_ref}")
    families = sorted(set(s.family for s in sources))
    print(f"Families: {', '.join(families)}")
    return 0


def cmd_bench(args):
    """Time next(32) for every generator, round after round."""
    if args.iterations < 1 or args.rounds < 1:
        raise ValueError(f"iterations and rounds must be >= 1, "
                         f"got {args.iterations} and {args.rounds}")

    gens = bench_generators()
    builtin = random.Random()
    results = {}
    for j in range(args.rounds):
        print(f"\nROUND {j}\n==========")
        t0 = time.perf_counter()
        for _ in range(args.iterations):
            builtin.getrandbits(32)
        elapsed = time.perf_counter() - t0
        print(f"{'random.getrandbits':<24s}: {elapsed:.3f}")
        results.setdefault('random.getrandbits', []).append(elapsed)

        for gen in gens:
            elapsed = time_next32(gen, args.iterations)
            print(f"{gen.name:<24s}: {elapsed:.3f}")
            results.setdefault(gen.name, []).append(elapsed)
        logger.debug("round %d done", j)

    if args.rounds > 1:
        print(f"\nMedian over {args.rounds} rounds of {args.iterations} calls:")
        for name, times in results.items():
            rate = args.iterations / max(np.median(times), 1e-12)
            print(f"  {name:<24s} {np.median(times):8.3f}s  {rate:12,.0f} calls/s")

    if args.out:
        save_bench_figure(results, args.iterations, args.out)
    return results


def save_bench_figure(results, iterations, out_dir):
    """Median calls/s per generator as a bar chart."""
    from tools.quality_runner import Runner

    runner = Runner("PRNG bench", n_trials=1, verbose=False)
    names = list(results)
    rates = [iterations / max(float(np.median(results[n])), 1e-12) for n in names]
    fig, axes = runner.create_figure(1, f"next(32), median of {len(results[names[0]])} rounds",
                                     rows=1, cols=1, figsize=(9, 4))
    runner.plot_rates(axes[0], names, rates, f"{iterations:,} calls per round")
    return runner.save(fig, "prng_bench", out_dir=out_dir)


def cmd_check(args):
    """Quality report: every source, several seeds, scipy statistics."""
    from tools.sources import get_sources, get_source
    from tools.quality_runner import Runner

    if args.size < 2 or args.trials < 1:
        raise ValueError(f"need --size >= 2 and --trials >= 1, "
                         f"got {args.size} and {args.trials}")

    sources = [get_source(args.name)] if args.name else get_sources()
    runner = Runner("quality check", data_size=args.size, n_trials=args.trials)

    results = {}
    for src in sources:
        with runner.timed(src.name):
            chunks = [src.gen_fn(rng, runner.data_size)
                      for rng in runner.trial_rngs()]
            results[src.name] = runner.collect(chunks)

    runner.print_summary(results)

    baseline = "NumPy PCG64"
    if baseline in results:
        print(f"\nSignificant differences from {baseline}:")
        for name, metrics in results.items():
            if name == baseline:
                continue
            n_sig, findings = runner.compare(metrics, results[baseline])
            detail = ", ".join(f"{m} (d={d:+.1f})" for m, d, _ in findings[:3])
            print(f"  {name:<26s} {n_sig}  {detail}")
    return 0


def cmd_figure(args):
    """Bitmap and byte histogram for each source, one figure."""
    from tools.sources import get_sources, FAMILY_COLORS
    from tools.quality_runner import Runner

    if args.size < 16:
        raise ValueError(f"figure needs at least 16 bytes per source, got {args.size}")

    sources = get_sources()
    runner = Runner("PRNG Output", data_size=args.size, n_trials=1)
    rng = runner.trial_rngs()[0]

    rows = len(sources)
    fig, axes = runner.create_figure(rows * 2, "Exotic PRNG output",
                                     rows=rows, cols=2,
                                     figsize=(12, 2.5 * rows))
    for i, src in enumerate(sources):
        data = src.gen_fn(rng, runner.data_size)
        color = FAMILY_COLORS.get(src.family, '#cccccc')
        runner.plot_bitmap(axes[2 * i], data, src.name)
        runner.plot_histogram(axes[2 * i + 1], data, f"{src.name} bytes", color)
    out = runner.save(fig, "prng_output", out_dir=args.out)
    return out


def build_parser():
    parser = argparse.ArgumentParser(
        description="Exotic PRNG CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument('--log-level', default='WARNING',
                        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'],
                        help='Logging level (default: WARNING)')
    sub = parser.add_subparsers(dest='command')

    sub.add_parser('list', help='Show all registered sources')

    p_bench = sub.add_parser('bench', help='Speed test of next(32)')
    p_bench.add_argument('--iterations', type=int, default=BENCH_ITERATIONS,
                         help=f'Calls per generator per round (default: {BENCH_ITERATIONS})')
    p_bench.add_argument('--rounds', type=int, default=BENCH_ROUNDS,
                         help=f'Number of rounds (default: {BENCH_ROUNDS})')
    p_bench.add_argument('--out', default=None,
                         help='Also chart median calls/s into this directory')

    p_check = sub.add_parser('check', help='Statistical quality report')
    p_check.add_argument('name', nargs='?', default=None,
                         help='Only this source (e.g. "MT19937")')
    p_check.add_argument('--size', type=int, default=4096,
                         help='Bytes per trial (default: 4096)')
    p_check.add_argument('--trials', type=int, default=10,
                         help='Seeds per source (default: 10)')

    p_fig = sub.add_parser('figure', help='Bitmap/histogram figure')
    p_fig.add_argument('--size', type=int, default=4096,
                       help='Bytes per source (default: 4096)')
    p_fig.add_argument('--out', default=None,
                       help='Output directory (default: figures/)')
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=getattr(logging, args.log_level),
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )

    commands = {
        'list': cmd_list,
        'bench': cmd_bench,
        'check': cmd_check,
        'figure': cmd_figure,
    }
    if args.command not in commands:
        parser.print_help()
        return 0
    try:
        commands[args.command](args)
    except ValueError as e:
        print(f"Error: {e}")
        return 1
    return 0


if __name__ == '__main__':
    sys.exit(main())
