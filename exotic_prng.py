"""
Exotic PRNG Framework

Bit-exact reproductions of five published pseudorandom number generators.
Every generator satisfies one contract: reseed on demand, hand out N bits on
demand.

AVAILABLE GENERATORS (5 total):

  Linear:
    - LinearCongruential: 48-bit LCG, same sequence as java.util.Random

  Twisted feedback:
    - MersenneTwister: MT19937, 624 x 32-bit words (mt19937ar.c)
    - MersenneTwister64: MT19937-64, 312 x 64-bit words (mt19937-64.c)

  Cellular automaton:
    - Rule30CellularAutomaton: Wolfram Rule 30 on a 192-cell ring, bit-sliced
      into three 64-bit words, centre cell is the output

  Normal numbers:
    - BaileyCrandall: iterates of the 2-normal constant a_{2,3}, computed in
      double-double arithmetic, natively produces IEEE doubles

NUMERIC UTILITIES:
    - DoubleDouble: (hi, lo) pair carrying ~106 bits of mantissa
    - dd_mul(a, b): exact product of two floats
    - dd_div(a, b): double-double divided by a float
    - dd_sub(a, b): double-double difference

None of these generators is cryptographically secure.

Usage:
    from exotic_prng import MersenneTwister, BaileyCrandall

    mt = MersenneTwister(5489)
    word = mt.next(32)

    # Seed from an array (init_by_array)
    mt.set_seed([0x123, 0x234, 0x345, 0x456])

    # Floating point output, natively
    bc = BaileyCrandall()
    bc.set_seed_raw(5559060566555623)
    x = bc.next_double_open()

    # Bulk output as numpy arrays
    words = mt.sample(1000)
    data = mt.random_bytes(4096)

    # One of everything
    for gen in all_generators(seed=1):
        print(gen.name, gen.next(32))
"""

import logging
import math
import struct
import time
from abc import ABC, abstractmethod
from numbers import Integral
from typing import List, NamedTuple, Optional, Sequence, Tuple, Union

import numpy as np

logger = logging.getLogger(__name__)

MASK32 = 0xFFFFFFFF
MASK48 = (1 << 48) - 1
MASK64 = 0xFFFFFFFFFFFFFFFF

Seed = Union[int, Sequence[int]]


class InvalidSeed(ValueError):
    """Seed outside the domain a generator documents."""


def time_seed() -> int:
    """Wall-clock milliseconds, the default seed for unseeded constructors."""
    return int(time.time() * 1000)


def _to_signed64(x: int) -> int:
    x &= MASK64
    return x - (1 << 64) if x >> 63 else x


def rotl64(x: int, r: int) -> int:
    return ((x << r) & MASK64) | (x >> (64 - r))


def rotr64(x: int, r: int) -> int:
    return (x >> r) | ((x << (64 - r)) & MASK64)


# =============================================================================
# DOUBLE-DOUBLE ARITHMETIC
# =============================================================================
#
# A double-double is an unevaluated sum hi + lo of two IEEE doubles with
# |lo| <= ulp(hi)/2.  Products are made error-free with Dekker's split:
# multiplying by 2^27 + 1 cuts a 53-bit mantissa into two 26-bit halves
# whose partial products are exact.

SPLIT = 134217729.0  # 2^27 + 1


class DoubleDouble(NamedTuple):
    """Renormalized pair (hi, lo) representing hi + lo."""
    hi: float
    lo: float = 0.0


def dd_mul(a: float, b: float) -> DoubleDouble:
    """Product of two doubles, returned exactly as a double-double."""
    a = float(a)
    b = float(b)
    cona = a * SPLIT
    conb = b * SPLIT
    a1 = cona - (cona - a)
    b1 = conb - (conb - b)
    a2 = a - a1
    b2 = b - b1
    s1 = a * b
    return DoubleDouble(s1, (((a1 * b1 - s1) + a1 * b2) + a2 * b1) + a2 * b2)


def dd_div(a: Tuple[float, float], b: float) -> DoubleDouble:
    """Double-double divided by a double.

    The first quotient t1 = a.hi / b is refined by one correction step:
    the exact remainder a - t1*b is formed in double-double and divided
    again to give t2, then (t1, t2) is renormalized.
    """
    a_hi, a_lo = a
    b = float(b)
    t1 = a_hi / b
    cona = t1 * SPLIT
    conb = b * SPLIT
    a1 = cona - (cona - t1)
    b1 = conb - (conb - b)
    a2 = t1 - a1
    b2 = b - b1
    t12 = t1 * b
    t22 = (((a1 * b1 - t12) + a1 * b2) + a2 * b1) + a2 * b2
    t11 = a_hi - t12
    e = t11 - a_hi
    t21 = ((-t12 - e) + (a_hi - (t11 - e))) + a_lo - t22
    t2 = (t11 + t21) / b
    s1 = t1 + t2
    return DoubleDouble(s1, t2 - (s1 - t1))


def dd_sub(a: Tuple[float, float], b: Tuple[float, float]) -> DoubleDouble:
    """Difference a - b of two double-doubles (Knuth two-sum on the highs)."""
    a_hi, a_lo = a
    b_hi, b_lo = b
    t1 = a_hi - b_hi
    e = t1 - a_hi
    t2 = ((-b_hi - e) + (a_hi - (t1 - e))) + a_lo - b_lo
    s1 = t1 + t2
    return DoubleDouble(s1, t2 - (s1 - t1))


# =============================================================================
# BASE CLASS
# =============================================================================

class RandomGenerator(ABC):
    """Contract shared by every generator: set_seed() and next(num_bits).

    Subclasses own all of their state; nothing is shared between instances
    and nothing is synchronized.  Callers sharing an instance across threads
    must serialize access themselves.
    """

    #: Bits produced per internal step.
    native_bits: int = 32

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of this generator."""
        pass

    @property
    def description(self) -> str:
        """Algorithm and the reference it reproduces."""
        return ""

    @abstractmethod
    def set_seed(self, seed) -> None:
        """Re-derive the whole state from seed.  Prior state is irrelevant.

        Every generator takes a single integer.  The Mersenne Twisters also
        take a sequence of integers (init_by_array), and Rule 30 also takes
        three 64-bit words as separate arguments, set_seed(w0, w1, w2).
        """
        pass

    @abstractmethod
    def next(self, num_bits: int) -> int:
        """Return num_bits pseudorandom bits (1 <= num_bits <= 32)."""
        pass

    def sample(self, n: int, num_bits: int = 32) -> np.ndarray:
        """n consecutive next(num_bits) values as a numpy array.

        int64 up to 32 bits, where the LCG hands out signed words.  Wider
        requests come back as uint64, each value reduced mod 2^64.
        """
        if num_bits <= 32:
            return np.fromiter((self.next(num_bits) for _ in range(n)),
                               dtype=np.int64, count=n)
        return np.fromiter((self.next(num_bits) & MASK64 for _ in range(n)),
                           dtype=np.uint64, count=n)

    def random_bytes(self, n: int) -> np.ndarray:
        """n bytes, one next(8) call each."""
        return np.fromiter((self.next(8) & 0xFF for _ in range(n)),
                           dtype=np.uint8, count=n)

    def __repr__(self):
        return f"{type(self).__name__}()"


# =============================================================================
# LINEAR CONGRUENTIAL
# =============================================================================

class LinearCongruential(RandomGenerator):
    """
    The 48-bit linear congruential generator behind java.util.Random.

    s' = (0x5DEECE66D * s + 0xB) mod 2^48, output is the top bits of s'
    read as a signed 32-bit integer, so LinearCongruential(1).next(32)
    equals new java.util.Random(1).nextInt().  Unsynchronized.

    num_bits above 32 returns the low 32 bits of the top num_bits (up to 48),
    num_bits <= 0 returns 0.
    """

    MULTIPLIER = 0x5DEECE66D
    ADDEND = 0xB

    def __init__(self, seed: Optional[int] = None):
        self._seed = 0
        self.set_seed(time_seed() if seed is None else seed)

    @property
    def name(self) -> str:
        return "LCG (java.util.Random)"

    @property
    def description(self) -> str:
        return "48-bit LCG, a=0x5DEECE66D c=0xB, top bits as signed 32-bit int"

    def set_seed(self, seed: int) -> None:
        self._seed = (int(seed) ^ self.MULTIPLIER) & MASK48

    def next(self, num_bits: int) -> int:
        self._seed = (self._seed * self.MULTIPLIER + self.ADDEND) & MASK48
        if num_bits <= 0:
            return 0
        r = (self._seed >> max(48 - num_bits, 0)) & MASK32
        return r - (1 << 32) if r & 0x80000000 else r

    def get_state(self) -> int:
        return self._seed


# =============================================================================
# MERSENNE TWISTERS
# =============================================================================

def _seed_key(seed: Sequence[int], mask: int) -> List[int]:
    key = [int(k) & mask for k in seed]
    if not key:
        raise InvalidSeed("seed array must contain at least one word")
    return key


class MersenneTwister(RandomGenerator):
    """
    MT19937 (Matsumoto & Nishimura 1998), a straight port of mt19937ar.c.

    Seeds with a 32-bit integer (init_genrand) or a sequence of 32-bit
    integers (init_by_array).  next(num_bits) returns the top num_bits of
    one tempered word, unsigned; num_bits > 32 yields the whole word and
    num_bits <= 0 yields 0.
    """

    N = 624
    M = 397
    MATRIX_A = 0x9908B0DF
    UPPER_MASK = 0x80000000
    LOWER_MASK = 0x7FFFFFFF
    MAG01 = (0x0, MATRIX_A)

    def __init__(self, seed: Optional[Seed] = None):
        self._mt = [0] * self.N
        # N + 1 means "never seeded"
        self._mti = self.N + 1
        self.set_seed(time_seed() & MASK32 if seed is None else seed)

    @property
    def name(self) -> str:
        return "MT19937"

    @property
    def description(self) -> str:
        return "32-bit Mersenne Twister, period 2^19937-1, mt19937ar.c"

    def set_seed(self, seed: Seed) -> None:
        if isinstance(seed, Integral):
            self._init_genrand(int(seed))
        else:
            self._init_by_array(_seed_key(seed, MASK32))

    def _init_genrand(self, seed: int) -> None:
        mt = self._mt
        mt[0] = seed & MASK32
        for i in range(1, self.N):
            mt[i] = (1812433253 * (mt[i - 1] ^ (mt[i - 1] >> 30)) + i) & MASK32
        self._mti = self.N

    def _init_by_array(self, key: List[int]) -> None:
        logger.debug("MT19937 init_by_array with %d words", len(key))
        N = self.N
        self._init_genrand(19650218)
        mt = self._mt
        i, j = 1, 0
        for _ in range(max(N, len(key))):
            mt[i] = ((mt[i] ^ ((mt[i - 1] ^ (mt[i - 1] >> 30)) * 1664525))
                     + key[j] + j) & MASK32
            i += 1
            j += 1
            if i >= N:
                mt[0] = mt[N - 1]
                i = 1
            if j >= len(key):
                j = 0
        for _ in range(N - 1):
            mt[i] = ((mt[i] ^ ((mt[i - 1] ^ (mt[i - 1] >> 30)) * 1566083941))
                     - i) & MASK32
            i += 1
            if i >= N:
                mt[0] = mt[N - 1]
                i = 1
        # MSB is 1, assuring a non-zero initial array
        mt[0] = 0x80000000

    def _twist(self) -> None:
        mt, N, M = self._mt, self.N, self.M
        upper, lower, mag01 = self.UPPER_MASK, self.LOWER_MASK, self.MAG01
        for kk in range(N - M):
            y = (mt[kk] & upper) | (mt[kk + 1] & lower)
            mt[kk] = mt[kk + M] ^ (y >> 1) ^ mag01[y & 0x1]
        for kk in range(N - M, N - 1):
            y = (mt[kk] & upper) | (mt[kk + 1] & lower)
            mt[kk] = mt[kk + (M - N)] ^ (y >> 1) ^ mag01[y & 0x1]
        y = (mt[N - 1] & upper) | (mt[0] & lower)
        mt[N - 1] = mt[M - 1] ^ (y >> 1) ^ mag01[y & 0x1]
        self._mti = 0

    def next32(self) -> int:
        """One full tempered 32-bit word (genrand_int32)."""
        if self._mti >= self.N:
            self._twist()
        y = self._mt[self._mti]
        self._mti += 1
        y ^= y >> 11
        y ^= (y << 7) & 0x9D2C5680
        y ^= (y << 15) & 0xEFC60000
        y ^= y >> 18
        return y

    def next(self, num_bits: int) -> int:
        y = self.next32()
        if num_bits <= 0:
            return 0
        return y >> max(32 - num_bits, 0)

    def get_state(self) -> Tuple[List[int], int]:
        return list(self._mt), self._mti


class MersenneTwister64(RandomGenerator):
    """
    MT19937-64 (Nishimura 2000), a port of mt19937-64.c.

    Natively produces 64 bits per step (next64).  next(num_bits) is a
    two-state machine so no output is discarded:

      awaiting-fresh-64  draw a new word, return its top num_bits,
                         then hold the low half
      holding-low-half   return the top num_bits of the held low 32 bits,
                         then await a fresh word

    The two calls of a pair may ask for different widths.  Reseeding puts
    the machine back into awaiting-fresh-64.
    """

    native_bits = 64

    NN = 312
    MM = 156
    MATRIX_A = 0xB5026F5AA96619E9
    UM = 0xFFFFFFFF80000000  # most significant 33 bits
    LM = 0x7FFFFFFF  # least significant 31 bits
    MAG01 = (0x0, MATRIX_A)

    def __init__(self, seed: Optional[Seed] = None):
        self._mt = [0] * self.NN
        self._mti = self.NN + 1
        self._bits = 0
        self._holding_low_half = False
        self.set_seed(time_seed() if seed is None else seed)

    @property
    def name(self) -> str:
        return "MT19937-64"

    @property
    def description(self) -> str:
        return "64-bit Mersenne Twister, mt19937-64.c, 64-bit words split in halves"

    @property
    def holding_low_half(self) -> bool:
        """True when the next next() call will consume the buffered low half."""
        return self._holding_low_half

    def set_seed(self, seed: Seed) -> None:
        if isinstance(seed, Integral):
            self._init_genrand64(int(seed))
        else:
            self._init_by_array64(_seed_key(seed, MASK64))
        self._bits = 0
        self._holding_low_half = False

    def _init_genrand64(self, seed: int) -> None:
        mt = self._mt
        mt[0] = seed & MASK64
        for i in range(1, self.NN):
            mt[i] = (6364136223846793005 * (mt[i - 1] ^ (mt[i - 1] >> 62)) + i) & MASK64
        self._mti = self.NN

    def _init_by_array64(self, key: List[int]) -> None:
        logger.debug("MT19937-64 init_by_array64 with %d words", len(key))
        NN = self.NN
        self._init_genrand64(19650218)
        mt = self._mt
        i, j = 1, 0
        for _ in range(max(NN, len(key))):
            mt[i] = ((mt[i] ^ ((mt[i - 1] ^ (mt[i - 1] >> 62)) * 3935559000370003845))
                     + key[j] + j) & MASK64
            i += 1
            j += 1
            if i >= NN:
                mt[0] = mt[NN - 1]
                i = 1
            if j >= len(key):
                j = 0
        for _ in range(NN - 1):
            mt[i] = ((mt[i] ^ ((mt[i - 1] ^ (mt[i - 1] >> 62)) * 2862933555777941757))
                     - i) & MASK64
            i += 1
            if i >= NN:
                mt[0] = mt[NN - 1]
                i = 1
        mt[0] = 1 << 63

    def _twist(self) -> None:
        mt, NN, MM = self._mt, self.NN, self.MM
        um, lm, mag01 = self.UM, self.LM, self.MAG01
        for i in range(NN - MM):
            x = (mt[i] & um) | (mt[i + 1] & lm)
            mt[i] = mt[i + MM] ^ (x >> 1) ^ mag01[x & 1]
        for i in range(NN - MM, NN - 1):
            x = (mt[i] & um) | (mt[i + 1] & lm)
            mt[i] = mt[i + (MM - NN)] ^ (x >> 1) ^ mag01[x & 1]
        x = (mt[NN - 1] & um) | (mt[0] & lm)
        mt[NN - 1] = mt[MM - 1] ^ (x >> 1) ^ mag01[x & 1]
        self._mti = 0

    def next64(self) -> int:
        """One full tempered 64-bit word (genrand64_int64)."""
        if self._mti >= self.NN:
            self._twist()
        x = self._mt[self._mti]
        self._mti += 1
        x ^= (x >> 29) & 0x5555555555555555
        x ^= (x << 17) & 0x71D67FFFEDA60000
        x ^= (x << 37) & 0xFFF7EEE000000000
        x ^= x >> 43
        return x

    def next(self, num_bits: int) -> int:
        if not self._holding_low_half:
            self._bits = self.next64()
            self._holding_low_half = True
            if num_bits <= 0:
                return 0
            return self._bits >> max(64 - num_bits, 0)
        self._holding_low_half = False
        if num_bits <= 0:
            return 0
        return (self._bits & MASK32) >> max(32 - num_bits, 0)

    def get_state(self) -> Tuple[List[int], int]:
        return list(self._mt), self._mti


# =============================================================================
# CELLULAR AUTOMATON
# =============================================================================

class Rule30CellularAutomaton(RandomGenerator):
    """
    Wolfram's Rule 30 on a circular array of 192 cells; the centre cell
    is the output, one bit per generation.

        111 110 101 100 011 010 001 000
         0   0   0   1   1   1   1   0

    The cells are bit-sliced over three 64-bit words: logical cell j lives
    at bit j // 3 of word j % 3.  Each word then holds every third cell,
    and one generation is three word-wide boolean expressions, with 64-bit
    rotations closing the ring.  The centre cell 96 is bit 32 of word 0.

    Seeded with (0, 1 << 32, 0), next(1) reproduces the centre column of
    Mathematica's

        CellularAutomaton[30, ReplacePart[Table[0, {192}], 1, 96], n,
                          {All, {95}}]

    Some seeds loop or die out (all zeros stays all zeros).  That is a
    property of Rule 30 and is not corrected here.  next() accepts any
    num_bits >= 0, one generation per bit.
    """

    native_bits = 1

    CELLS = 192
    BLOCKS = 3
    BITS_PER_BLOCK = 64

    def __init__(self, *seed: Optional[int]):
        self._w0 = self._w1 = self._w2 = 0
        if not seed or seed == (None,):
            seed = (time_seed(),)
        self.set_seed(*seed)

    @property
    def name(self) -> str:
        return "Rule 30 (192 cells)"

    @property
    def description(self) -> str:
        return "Elementary CA rule 30 on a 192-cell ring, centre column output"

    def set_seed(self, *words: int) -> None:
        """
        Seed with three words (w0, w1, w2) laid out left to right as

            w0 bit 0 .. w0 bit 63, w1 bit 0 .. w1 bit 63, w2 bit 0 .. w2 bit 63

        or with a single word, which becomes the middle 64 cells.
        """
        if len(words) == 1:
            words = (0, words[0], 0)
        if len(words) != self.BLOCKS:
            raise InvalidSeed(f"Rule 30 takes 1 or 3 seed words, got {len(words)}")

        source = [int(w) & MASK64 for w in words]
        out = [0] * self.BLOCKS
        for j in range(self.BLOCKS * self.BITS_PER_BLOCK):
            in_block, in_pos = divmod(j, self.BITS_PER_BLOCK)
            out_pos, out_block = divmod(j, self.BLOCKS)
            if (source[in_block] >> in_pos) & 1:
                out[out_block] |= 1 << out_pos
        self._w0, self._w1, self._w2 = out
        if not any(out):
            logger.warning("Rule 30 seeded with all-zero cells; output will be constant 0")

    def get_state(self) -> Tuple[int, int, int]:
        """The three stored words, in bit-sliced layout."""
        return self._w0, self._w1, self._w2

    def next(self, num_bits: int) -> int:
        w0, w1, w2 = self._w0, self._w1, self._w2
        result = 0
        for _ in range(num_bits):
            result = (result << 1) | ((w0 >> 32) & 1)
            t0 = rotr64(w2, 1) ^ (w0 | w1)
            t2 = w1 ^ (w2 | rotl64(w0, 1))
            t1 = w0 ^ (w1 | w2)
            w0, w1, w2 = t0, t1, t2
        self._w0, self._w1, self._w2 = w0, w1, w2
        return result


# =============================================================================
# NORMAL-NUMBER GENERATOR
# =============================================================================

POW3_33 = 5559060566555523.0  # 3^33, the modulus
POW3_33_DIV_2 = 2779530283277761.0  # floor(3^33 / 2)
POW2_53 = 9007199254740992  # 2^53
RAW_SEED_MIN = 5559060566555623  # 3^33 + 100


class BaileyCrandall(RandomGenerator):
    """
    Bailey-Crandall generator built on the 2-normal number a_{2,3}.

    Normal numbers have a binary expansion containing every bit string
    with the frequency a truly random sequence would.  The generator walks
    that expansion 53 bits at a time:

      1. choose s in [3^33 + 100, 2^53)
      2. x0 = 2^(s - 3^33) * floor(3^33 / 2) mod 3^33
      3. x_{k+1} = 2^53 * x_k mod 3^33, output x_k / 3^33

    All products exceed 53 bits, so every modular step runs in double-double
    arithmetic (dd_mul / dd_div / dd_sub) and reduces with
    x - floor(x / m) * m.

    References:
      D. H. Bailey, "A Pseudo-Random Number Generator Based on Normal
      Numbers", 2004.
      D. H. Bailey and R. E. Crandall, "Random Generators and Normal
      Numbers", Experimental Mathematics 11(4), 2004, pp. 527-546.
    """

    native_bits = 52

    def __init__(self, seed: Optional[int] = None):
        self._d1 = 0.0
        self.set_seed(time_seed() if seed is None else seed)

    @property
    def name(self) -> str:
        return "Bailey-Crandall"

    @property
    def description(self) -> str:
        return "Iterates of the 2-normal constant a_{2,3} mod 3^33, double-double"

    def set_seed(self, seed: int) -> None:
        """Any integer; values below 3^33 + 100 are shifted up, then masked to 53 bits."""
        seed = _to_signed64(int(seed))
        if seed < POW3_33 + 100:
            seed = int(float(seed) + (POW3_33 + 100))
            logger.debug("Bailey-Crandall seed below 3^33+100, shifted to %d", seed)
        seed &= POW2_53 - 1
        self._seed_raw(seed)

    def set_seed_raw(self, seed: int) -> None:
        """Set the state exactly as the original Fortran code does.

        Requires 3^33 + 100 <= seed < 2^53.
        """
        seed = int(seed)
        if not RAW_SEED_MIN <= seed < POW2_53:
            raise InvalidSeed(
                f"raw seed {seed} outside [{RAW_SEED_MIN}, {POW2_53})")
        self._seed_raw(seed)

    def _seed_raw(self, seed: int) -> None:
        dd1 = dd_mul(self._expm2(float(seed) - POW3_33, POW3_33), POW3_33_DIV_2)
        dd2 = dd_div(dd1, POW3_33)
        dd2 = dd_mul(float(math.floor(dd2.hi)), POW3_33)
        self._d1 = dd_sub(dd1, dd2).hi

    @staticmethod
    def _expm2(p: float, am: float) -> float:
        """2^p mod am, right-to-left binary exponentiation in double-double."""
        ptl = 1.0
        while ptl < p:
            ptl *= 2
        ptl /= 2

        p1 = p
        r = 1.0
        ddm = DoubleDouble(am, 0.0)
        while True:
            if p1 >= ptl:
                # r = 2r mod am
                dd1 = dd_mul(2.0, r)
                if dd1.hi > am:
                    dd1 = dd_sub(dd1, ddm)
                r = dd1.hi
                p1 -= ptl
            ptl *= 0.5
            if ptl < 1.0:
                return r
            # r = r*r - floor(r*r / am) * am
            dd1 = dd_mul(r, r)
            dd2 = dd_div(dd1, am)
            dd2 = dd_mul(am, float(math.floor(dd2.hi)))
            r = dd_sub(dd1, dd2).hi
            if r < 0.0:
                r += am

    def next_iterate(self) -> None:
        """Advance d1 = 2^53 * d1 mod 3^33."""
        dd1 = DoubleDouble(float(POW2_53) * self._d1, 0.0)
        dd2 = dd_div(dd1, POW3_33)
        dd2 = dd_mul(POW3_33, float(math.floor(dd2.hi)))
        d1 = dd_sub(dd1, dd2).hi
        if d1 < 0.0:
            d1 += POW3_33
        self._d1 = d1

    def get_iterate(self) -> float:
        """Current iterate, for debugging and validation."""
        return self._d1

    def next_double(self) -> float:
        """Value in the half-open interval [0, 1)."""
        result = (self._d1 - 1.0) / (POW3_33 - 1.0)
        self.next_iterate()
        return result

    def next_double_open(self) -> float:
        """Value in the open interval (0, 1), as the published tables use."""
        result = self._d1 / POW3_33
        self.next_iterate()
        return result

    def next(self, num_bits: int) -> int:
        # Mantissa bits 0-51 of the double are the random part.  Near 52
        # bits this is sensitive to how the quotient rounded; kept as is.
        raw, = struct.unpack("<Q", struct.pack("<d", self.next_double()))
        if num_bits <= 0:
            return 0
        return (raw & 0x000FFFFFFFFFFFFF) >> max(52 - num_bits, 0)


# =============================================================================
# REGISTRY
# =============================================================================

GENERATOR_CLASSES = (
    LinearCongruential,
    MersenneTwister,
    MersenneTwister64,
    Rule30CellularAutomaton,
    BaileyCrandall,
)


def all_generators(seed: Optional[int] = None) -> List[RandomGenerator]:
    """One instance of every generator, each seeded with seed (or the clock)."""
    if seed is None:
        return [cls() for cls in GENERATOR_CLASSES]
    return [cls(seed) for cls in GENERATOR_CLASSES]
