"""
Timing helpers shared by the fhir-toolkit benchmarks.

Every benchmark reports a :class:`TrialStats` summary (mean, sample
standard deviation, two-sided 95% confidence interval, extremes and
trial count) rather than a single wall-clock number.
"""

from __future__ import annotations

import math
import time
from dataclasses import dataclass
from typing import Any, Callable, Sequence


DEFAULT_TRIALS = 30
DEFAULT_WARMUP = 3


@dataclass
class TrialStats:
    """Summary of a series of timed trials, in seconds."""

    mean: float
    std: float
    ci95_low: float
    ci95_high: float
    min: float
    max: float
    n: int

    def scaled(self, divisor: float) -> TrialStats:
        """Divide every timing by *divisor* (e.g. per-item cost)."""
        return TrialStats(
            mean=self.mean / divisor,
            std=self.std / divisor,
            ci95_low=self.ci95_low / divisor,
            ci95_high=self.ci95_high / divisor,
            min=self.min / divisor,
            max=self.max / divisor,
            n=self.n,
        )

    def mean_ms(self) -> float:
        return round(self.mean * 1e3, 3)

    def std_ms(self) -> float:
        return round(self.std * 1e3, 3)

    def mean_us(self) -> float:
        return round(self.mean * 1e6, 2)

    def to_dict(self) -> dict[str, Any]:
        return {
            "mean_ms": self.mean_ms(),
            "std_ms": self.std_ms(),
            "ci95_ms": [round(self.ci95_low * 1e3, 3), round(self.ci95_high * 1e3, 3)],
            "min_ms": round(self.min * 1e3, 3),
            "max_ms": round(self.max * 1e3, 3),
            "n_trials": self.n,
        }


def summarize(times: Sequence[float]) -> TrialStats:
    n = len(times)
    if n == 0:
        raise ValueError("summarize() needs at least one timing")
    mean = sum(times) / n
    std = math.sqrt(sum((t - mean) ** 2 for t in times) / (n - 1)) if n > 1 else 0.0
    margin = _t_critical(n - 1) * std / math.sqrt(n) if n > 1 else 0.0
    return TrialStats(
        mean=mean,
        std=std,
        ci95_low=mean - margin,
        ci95_high=mean + margin,
        min=min(times),
        max=max(times),
        n=n,
    )


def timed_trials(
    fn: Callable[[], Any],
    n: int = DEFAULT_TRIALS,
    warmup: int = DEFAULT_WARMUP,
) -> TrialStats:
    """Call *fn* ``warmup`` times untimed, then *n* times timed."""
    for _ in range(warmup):
        fn()
    times: list[float] = []
    for _ in range(n):
        start = time.perf_counter()
        fn()
        times.append(time.perf_counter() - start)
    return summarize(times)


def timed_per_item(
    fn: Callable[[Any], Any],
    items: Sequence[Any],
    n: int = DEFAULT_TRIALS,
    warmup: int = DEFAULT_WARMUP,
) -> TrialStats:
    """Time ``fn(item)`` over every item per trial; report per-item cost."""
    def batch():
        for item in items:
            fn(item)

    return timed_trials(batch, n=n, warmup=warmup).scaled(max(len(items), 1))


def format_ci(stats: TrialStats, unit: str = "ms") -> str:
    """Render ``mean ± std`` in *unit* (``ms`` or ``us``)."""
    factor = 1e6 if unit == "us" else 1e3
    return f"{stats.mean * factor:.2f} ± {stats.std * factor:.2f} {unit}"


# ── Student t critical values (two-tailed, 95%) ──────────────────

_T_TABLE = {
    1: 12.706, 2: 4.303, 3: 3.182, 4: 2.776, 5: 2.571,
    6: 2.447, 7: 2.365, 8: 2.306, 9: 2.262, 10: 2.228,
    12: 2.179, 15: 2.131, 20: 2.086, 25: 2.060, 29: 2.045,
    30: 2.042, 40: 2.021, 60: 2.000, 120: 1.980,
}


def _t_critical(df: int) -> float:
    if df >= 120:
        return 1.96
    if df in _T_TABLE:
        return _T_TABLE[df]
    below = max(k for k in _T_TABLE if k < df)
    above = min(k for k in _T_TABLE if k > df)
    frac = (df - below) / (above - below)
    return _T_TABLE[below] + frac * (_T_TABLE[above] - _T_TABLE[below])
