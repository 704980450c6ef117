"""Per-computation samples and end-of-run summary statistics."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, TypeVar

N = TypeVar("N", int, float)


@dataclass(frozen=True, slots=True)
class Sample:
    calculation_ms: float
    path_length: int
    tiles_checked: int


@dataclass(frozen=True)
class MetricSummary:
    values: tuple[float, ...]
    median: float
    iqr: float


@dataclass(frozen=True)
class RunSummary:
    path_length: MetricSummary
    tiles_checked: MetricSummary
    calculation_ms: MetricSummary
    steps: int
    samples: int


def summarize_metric(values: Sequence[N]) -> MetricSummary:
    """Median and interquartile range by sorted index.

    ``median = v[n // 2]`` and ``iqr = v[3n // 4] - v[n // 4]`` on the
    sorted values; no interpolation.
    """
    if not values:
        raise ValueError("cannot summarize an empty metric")
    ordered = sorted(values)
    n = len(ordered)
    return MetricSummary(
        values=tuple(ordered),
        median=ordered[n // 2],
        iqr=ordered[n * 3 // 4] - ordered[n // 4],
    )


def summarize(samples: Sequence[Sample], steps: int = 0) -> RunSummary:
    return RunSummary(
        path_length=summarize_metric([s.path_length for s in samples]),
        tiles_checked=summarize_metric([s.tiles_checked for s in samples]),
        calculation_ms=summarize_metric([s.calculation_ms for s in samples]),
        steps=steps,
        samples=len(samples),
    )
