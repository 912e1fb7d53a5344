#!/usr/bin/env python3
"""
Exotic PRNG Quickstart - Run this to verify the generators and see examples.

Usage:
    pip install -e .
    python quickstart.py
"""

import numpy as np

print("=" * 70)
print("EXOTIC PRNG FRAMEWORK - QUICKSTART")
print("=" * 70)

from exotic_prng import (
    BaileyCrandall, LinearCongruential, MersenneTwister, MersenneTwister64,
    Rule30CellularAutomaton, all_generators
)
print("\n[OK] Framework imported successfully")

gens = all_generators(seed=1)
print(f"[OK] Loaded {len(gens)} generators")

# Known answers
print("\n" + "-" * 70)
print("KNOWN-ANSWER CHECKS")
print("-" * 70)

checks = []

lcg = LinearCongruential(1)
checks.append(("java.util.Random(1).nextInt()", lcg.next(32), -1155869325))

mt = MersenneTwister([0x123, 0x234, 0x345, 0x456])
checks.append(("mt19937ar.out first word", mt.next32(), 1067595299))

mt64 = MersenneTwister64([0x12345, 0x23456, 0x34567, 0x45678])
checks.append(("mt19937-64.out first word", mt64.next64(), 7266447313870364031))

ca = Rule30CellularAutomaton(0, 1 << 32, 0)
checks.append(("Rule 30 centre column, 8 bits", ca.next(8), 0b11011100))

bc = BaileyCrandall()
bc.set_seed_raw(5559060566555623)
checks.append(("Bailey-Crandall first value",
               round(bc.next_double_open(), 15), 0.766073574343168))

n_ok = 0
for label, got, want in checks:
    ok = got == want
    n_ok += ok
    print(f"  [{'OK' if ok else 'FAIL':>4s}] {label:<34s} {got}")
print(f"\n  {n_ok}/{len(checks)} known answers reproduced")

# One of everything
print("\n" + "-" * 70)
print("FIRST OUTPUTS, SEED 1")
print("-" * 70)

print("\n{:<24} | {:>8} | {}".format("Generator", "native", "next(32) x 4"))
print("-" * 70)
for gen in gens:
    vals = [gen.next(32) for _ in range(4)]
    print("{:<24} | {:>8} | {}".format(
        gen.name, f"{gen.native_bits} bit", "  ".join(str(v) for v in vals)))

# Bulk output
print("\n" + "-" * 70)
print("BYTE STREAMS (4096 bytes each)")
print("-" * 70)

print("\n{:<24} | {:>8} | {:>8} | {:>10}".format(
    "Generator", "mean", "std", "entropy"))
print("-" * 60)
for gen in gens:
    data = gen.random_bytes(4096)
    counts = np.bincount(data, minlength=256)
    p = counts[counts > 0] / len(data)
    entropy = -np.sum(p * np.log2(p))
    print("{:<24} | {:>8.2f} | {:>8.2f} | {:>10.4f}".format(
        gen.name, data.mean(), data.std(), entropy))
print("  (uniform bytes: mean 127.5, std 73.9, entropy 8)")

# Floating point
print("\n" + "-" * 70)
print("BAILEY-CRANDALL DOUBLES")
print("-" * 70)
bc = BaileyCrandall(1 << 32)
print(f"  iterate: {bc.get_iterate():.0f}")
print("  next_double():", ", ".join(f"{bc.next_double():.17f}" for _ in range(3)))

print("\n" + "=" * 70)
print("QUICKSTART COMPLETE")
print("=" * 70)
print("\nNext steps:")
print("  python tools/prng_cli.py list     # registered sources")
print("  python tools/prng_cli.py check    # statistical quality report")
print("  python tools/prng_cli.py bench    # speed test")
print("  python tools/prng_cli.py figure   # bitmap/histogram figure")
