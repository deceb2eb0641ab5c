"""Input side: turn files, stdin and in-memory objects into byte arrays."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import numpy as np

logger = logging.getLogger(__name__)

_UPPER_A, _UPPER_Z = ord("A"), ord("Z")
_CASE_OFFSET = ord("a") - ord("A")


def as_byte_array(data) -> np.ndarray:
    """Coerce *data* to a 1-D ``uint8`` array without copying when possible.

    Raises ``TypeError`` for non-integer input and ``ValueError`` for
    integers outside ``0..255``.
    """
    if isinstance(data, (bytes, bytearray, memoryview)):
        return np.frombuffer(data, dtype=np.uint8)
    if isinstance(data, str):
        raise TypeError("expected bytes-like data, got str (encode it first)")

    arr = np.asarray(data)
    if arr.size == 0:
        return np.zeros(0, dtype=np.uint8)
    if arr.dtype == np.uint8:
        return arr.ravel()
    if arr.dtype.kind not in "iu":
        raise TypeError(f"expected integer byte values, got dtype {arr.dtype}")
    lo, hi = int(arr.min()), int(arr.max())
    if lo < 0 or hi > 255:
        raise ValueError(f"byte values must be in 0..255, got range {lo}..{hi}")
    return arr.astype(np.uint8).ravel()


def fold_case(data) -> np.ndarray:
    """Map ASCII upper case letters to lower case, leaving other bytes alone."""
    arr = as_byte_array(data).copy()
    upper = (arr >= _UPPER_A) & (arr <= _UPPER_Z)
    arr[upper] += _CASE_OFFSET
    return arr


def read_input(path: str | Path | None = "-", fold: bool = False) -> np.ndarray:
    """Read a whole file, or stdin for ``"-"``/``None``, into a byte array.

    ``OSError`` from opening or reading the file propagates.
    """
    if path is None or str(path) == "-":
        raw = sys.stdin.buffer.read()
        label = "<stdin>"
    else:
        raw = Path(path).read_bytes()
        label = str(path)
    logger.debug("read %d bytes from %s", len(raw), label)

    data = np.frombuffer(raw, dtype=np.uint8)
    return fold_case(data) if fold else data
