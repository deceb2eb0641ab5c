"""
entstats: randomness statistics for byte streams.

Entropy, ideal compression, chi-square, mean, Monte Carlo Pi and serial
correlation for any buffer. The numbers you want before trusting an RNG,
a cipher's output or a compressed blob.
"""

__version__ = "0.1.0"
__author__ = "Amenti Labs"

from entstats.source import as_byte_array, read_input
from entstats.stats import (
    SERIAL_CORRELATION_UNDEFINED,
    AnalysisResult,
    analyze,
)

__all__ = [
    "AnalysisResult",
    "SERIAL_CORRELATION_UNDEFINED",
    "analyze",
    "as_byte_array",
    "read_input",
    "__version__",
]
