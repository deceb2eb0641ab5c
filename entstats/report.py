"""Render an :class:`~entstats.stats.AnalysisResult` as text, CSV or JSON."""

from __future__ import annotations

import json
import math

from rich.table import Table

from entstats.stats import MONTE_CARLO_CHUNK, AnalysisResult

RANDOM_MEAN = 127.5


def _unit(result: AnalysisResult) -> str:
    return "bit" if result.bit_mode else "byte"


def _num(value: float, spec: str) -> str:
    return "undefined" if math.isnan(value) else format(value, spec)


def _clean(value):
    """NaN is not valid JSON; report it as null."""
    if isinstance(value, float) and math.isnan(value):
        return None
    return value


def _occurrence_rows(result: AnalysisResult) -> list[tuple[int, int, float]]:
    if result.bit_mode:
        return [(bit, count, frac) for bit, (count, frac) in enumerate(result.bit_frequencies)]
    return list(result.byte_frequencies)


def _char(value: int) -> str:
    return chr(value) if 32 <= value < 127 else ""


def to_dict(result: AnalysisResult, occurrences: bool = False) -> dict:
    """JSON-ready mapping of *result*."""
    out = {
        "mode": _unit(result),
        "size": result.size,
        "samples": result.samples,
        "entropy": _clean(result.entropy),
        "compression_percent": _clean(result.compression_percent),
        "chisquare": _clean(result.chisquare),
        "p_value": _clean(result.p_value),
        "mean": _clean(result.mean),
        "pi_estimate": result.pi_estimate,
        "pi_error_percent": _clean(result.pi_error_percent),
        "serial_correlation": result.serial_correlation,
        "serial_correlation_defined": result.serial_correlation_defined,
    }
    if occurrences:
        out["occurrences"] = [
            {"value": value, "count": count, "fraction": _clean(frac)}
            for value, count, frac in _occurrence_rows(result)
        ]
    return out


def render_json(result: AnalysisResult, occurrences: bool = False) -> str:
    return json.dumps(to_dict(result, occurrences), indent=2)


def render_text(result: AnalysisResult) -> str:
    """Classic ``ent``-style prose report."""
    unit = _unit(result)
    max_entropy = 1 if result.bit_mode else 8

    lines = [f"Entropy = {result.entropy:.6f} bits per {unit} (maximum {max_entropy}).", ""]
    lines.append(
        f"Optimum compression would reduce the size\n"
        f"of this {result.samples} {unit} file by {result.compression_percent:.0f} percent."
    )
    lines.append("")
    if math.isnan(result.p_value):
        tail = "and the normal approximation cannot give a p-value."
    else:
        tail = f"and randomly would exceed this value {100.0 * result.p_value:.2f} percent of the times."
    lines.append(
        f"Chi square distribution for {result.samples} samples is {_num(result.chisquare, '.2f')},\n{tail}"
    )
    lines.append("")
    lines.append(
        f"Arithmetic mean value of data bytes is {_num(result.mean, '.4f')} "
        f"({RANDOM_MEAN} = random)."
    )
    if result.size < MONTE_CARLO_CHUNK:
        lines.append("Monte Carlo value for Pi is undefined (fewer than 6 bytes).")
    else:
        lines.append(
            f"Monte Carlo value for Pi is {result.pi_estimate:.9f} "
            f"(error {result.pi_error_percent:.2f} percent)."
        )
    if result.serial_correlation_defined:
        lines.append(f"Serial correlation coefficient is {result.serial_correlation:.6f} (totally uncorrelated = 0.0).")
    else:
        lines.append("Serial correlation coefficient is undefined (all values equal!).")
    return "\n".join(lines) + "\n"


def render_terse(result: AnalysisResult, occurrences: bool = False) -> str:
    """Comma-separated output, one record per line, for spreadsheets and scripts."""
    label = "File-bits" if result.bit_mode else "File-bytes"
    lines = [
        f"0,{label},Entropy,Chi-square,Mean,Monte-Carlo-Pi,Serial-Correlation",
        f"1,{result.samples},{result.entropy:f},{result.chisquare:f},{result.mean:f},"
        f"{result.pi_estimate:f},{result.serial_correlation:f}",
    ]
    if occurrences:
        lines.append("2,Value,Occurrences,Fraction")
        for value, count, frac in _occurrence_rows(result):
            lines.append(f"3,{value},{count},{frac:f}")
    return "\n".join(lines) + "\n"


def occurrence_table(result: AnalysisResult) -> Table:
    """Rich table of symbol counts; unseen byte values are left out."""
    table = Table(title=f"{_unit(result).capitalize()} occurrences", show_lines=False)
    table.add_column("Value", justify="right")
    table.add_column("Char", justify="center")
    table.add_column("Occurrences", justify="right")
    table.add_column("Fraction", justify="right")
    for value, count, frac in _occurrence_rows(result):
        if count == 0 and not result.bit_mode:
            continue
        table.add_row(str(value), _char(value), f"{count:,}", _num(frac, ".6f"))
    return table
