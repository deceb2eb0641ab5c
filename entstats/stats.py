"""Randomness statistics for byte buffers.

Every statistic is a single vectorised pass over a ``uint8`` array.  Degenerate
input never raises: it is reported in-band (NaN, ``0.0`` or the serial
correlation sentinel) so that one bad statistic never hides the others.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass

import numpy as np
from scipy.special import erfc

from entstats.source import as_byte_array

logger = logging.getLogger(__name__)

BYTE_ALPHABET = 256
BIT_ALPHABET = 2

SERIAL_CORRELATION_UNDEFINED = -99999.0

MONTE_CARLO_CHUNK = 6  # two 24-bit coordinates
MONTE_CARLO_RADIUS_SQ = 1 << 48


@dataclass(frozen=True)
class AnalysisResult:
    """Statistics for one buffer, in byte or bit mode."""
    entropy: float
    compression_percent: float
    chisquare: float
    p_value: float
    mean: float
    pi_estimate: float
    serial_correlation: float
    byte_frequencies: tuple[tuple[int, int, float], ...] | None
    bit_frequencies: tuple[tuple[int, float], tuple[int, float]] | None
    bit_mode: bool = False
    size: int = 0

    @property
    def samples(self) -> int:
        """Symbols processed: bytes, or bits in bit mode."""
        return self.size * 8 if self.bit_mode else self.size

    @property
    def serial_correlation_defined(self) -> bool:
        return self.serial_correlation != SERIAL_CORRELATION_UNDEFINED

    @property
    def pi_error_percent(self) -> float:
        if self.size < MONTE_CARLO_CHUNK:
            return float("nan")
        return 100.0 * abs(self.pi_estimate - math.pi) / math.pi


# ── frequency counter ──


def symbol_counts(data, bit_mode: bool = False) -> np.ndarray:
    """Occurrences of each symbol: 256 byte values, or bits 0 and 1.

    Bits are taken least-significant first, although only the totals
    matter for the counts.
    """
    arr = as_byte_array(data)
    if not bit_mode:
        return np.bincount(arr, minlength=BYTE_ALPHABET).astype(np.int64)
    bits = np.unpackbits(arr, bitorder="little")
    return np.bincount(bits, minlength=BIT_ALPHABET).astype(np.int64)


def frequency_table(counts: np.ndarray, bit_mode: bool = False):
    """Build ``(value, count, fraction)`` rows, or ``(count, fraction)`` pairs in bit mode."""
    total = int(counts.sum())
    with np.errstate(divide="ignore", invalid="ignore"):
        fractions = counts / np.float64(total)
    if bit_mode:
        return (
            (int(counts[0]), float(fractions[0])),
            (int(counts[1]), float(fractions[1])),
        )
    return tuple((value, int(counts[value]), float(fractions[value])) for value in range(BYTE_ALPHABET))


# ── entropy ──


def entropy(counts: np.ndarray) -> float:
    """Shannon entropy in bits per symbol from :func:`symbol_counts` output.

    At most 8.0 for byte counts and 1.0 for bit counts.  Symbols that
    never occur are skipped rather than contributing NaN.
    """
    counts = np.asarray(counts)
    total = counts.sum()
    if total == 0:
        return 0.0
    probs = counts[counts > 0] / np.float64(total)
    h = float(-np.sum(probs * np.log2(probs)))
    return max(0.0, h)  # a single symbol gives -0.0


def compression_percent(h: float, bit_mode: bool = False) -> float:
    """Space an ideal entropy coder would save, in percent."""
    if bit_mode:
        return 100.0 * (1.0 - h)
    return 100.0 * (1.0 - h / 8.0)


# ── chi-square ──


def chi_square(counts: np.ndarray) -> tuple[float, float]:
    """Chi-square statistic against a uniform distribution, and its p-value.

    *counts* is :func:`symbol_counts` output; its length is the alphabet
    size.  The p-value is the upper tail of a normal approximation,
    ``z = sqrt(chi2 - dof)``.  When the statistic falls below the degrees
    of freedom the square root is undefined and the p-value is NaN.
    """
    counts = np.asarray(counts)
    k = counts.size
    dof = k - 1
    with np.errstate(divide="ignore", invalid="ignore"):
        expected = counts.sum() / np.float64(k)
        chisq = np.sum((counts - expected) ** 2 / expected)
        z = np.sqrt(chisq - dof)
        p = 1.0 - 0.5 * erfc(-z / math.sqrt(2))
    return float(chisq), float(p)


# ── mean ──


def mean(data) -> float:
    """Arithmetic mean of the byte values, in either mode.  NaN when empty."""
    arr = as_byte_array(data)
    if arr.size == 0:
        return float("nan")
    return int(arr.sum(dtype=np.int64)) / arr.size


# ── Monte Carlo Pi ──


def monte_carlo_pi(data) -> float:
    """Estimate π from 6-byte chunks read as points in a 2**24 square.

    Each chunk gives big-endian 24-bit ``x`` (bytes 0-2) and ``y``
    (bytes 3-5).  Trailing bytes that do not fill a chunk are ignored.
    Returns 0.0 when there is no complete chunk.
    """
    arr = as_byte_array(data)
    n_chunks = arr.size // MONTE_CARLO_CHUNK
    if n_chunks == 0:
        return 0.0
    chunks = arr[:n_chunks * MONTE_CARLO_CHUNK].reshape(n_chunks, MONTE_CARLO_CHUNK).astype(np.int64)
    x = (chunks[:, 0] << 16) | (chunks[:, 1] << 8) | chunks[:, 2]
    y = (chunks[:, 3] << 16) | (chunks[:, 4] << 8) | chunks[:, 5]
    hits = int(np.count_nonzero(x * x + y * y < MONTE_CARLO_RADIUS_SQ))
    return 4.0 * hits / n_chunks


# ── serial correlation ──


def serial_correlation(data) -> float:
    """Lag-1 Pearson correlation between each byte and its predecessor.

    Returns :data:`SERIAL_CORRELATION_UNDEFINED` for fewer than two bytes
    or when either side of the pairs is constant.
    """
    arr = as_byte_array(data)
    if arr.size < 2:
        return SERIAL_CORRELATION_UNDEFINED
    x = arr[:-1].astype(np.int64)
    y = arr[1:].astype(np.int64)
    n = arr.size - 1

    # Exact integer sums, so a zero variance is detected exactly.
    sum_x = int(x.sum())
    sum_y = int(y.sum())
    sum_xy = int(np.dot(x, y))
    sum_x2 = int(np.dot(x, x))
    sum_y2 = int(np.dot(y, y))

    num = n * sum_xy - sum_x * sum_y
    var_x = n * sum_x2 - sum_x * sum_x
    var_y = n * sum_y2 - sum_y * sum_y
    if var_x == 0 or var_y == 0:
        return SERIAL_CORRELATION_UNDEFINED
    return num / math.sqrt(var_x * var_y)


# ── aggregate ──


def analyze(data, bit_mode: bool = False) -> AnalysisResult:
    """Run every statistic on *data* and return one immutable result.

    *data* may be ``bytes``, ``bytearray``, ``memoryview``, a numpy
    integer array or a sequence of ints in ``0..255``.
    """
    arr = as_byte_array(data)
    logger.debug("analyzing %d bytes (bit_mode=%s)", arr.size, bit_mode)

    counts = symbol_counts(arr, bit_mode)
    h = entropy(counts)
    chisq, p = chi_square(counts)
    table = frequency_table(counts, bit_mode)

    result = AnalysisResult(
        entropy=h,
        compression_percent=compression_percent(h, bit_mode),
        chisquare=chisq,
        p_value=p,
        mean=mean(arr),
        pi_estimate=monte_carlo_pi(arr),
        serial_correlation=serial_correlation(arr),
        byte_frequencies=None if bit_mode else table,
        bit_frequencies=table if bit_mode else None,
        bit_mode=bit_mode,
        size=int(arr.size),
    )
    logger.debug("entropy=%.6f chisquare=%.4f mean=%.4f", result.entropy, result.chisquare, result.mean)
    return result
