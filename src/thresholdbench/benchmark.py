# Path: src/thresholdbench/benchmark.py
#
# 6 つの閾値推定を決まった順に実行し、閾値と実行時間を集める。
#   Counting Sort -> Standard Sort -> Nth Element
#   -> Normal Estimate -> Weighted Estimate -> Uniform Sample
# 最後の Uniform Sample の結果を二値化に使う（pipeline 側）。

from __future__ import annotations

import time
from dataclasses import dataclass
from functools import partial
from typing import Callable, List, Optional

import numpy as np

from thresholdbench.binarize import black_ratio
from thresholdbench.config import check_ratio, check_sample_stride
from thresholdbench.counting_sort import counting_sort
from thresholdbench.display import display
from thresholdbench.normal_estimate import normal_estimate
from thresholdbench.nth_element_sort import nth_element_sort
from thresholdbench.std_sort import std_sort
from thresholdbench.types import BenchmarkResult, as_pixels
from thresholdbench.uniform_sample import uniform_sample
from thresholdbench.weighted_estimate import weighted_estimate

Reporter = Callable[[str, int, float], None]


@dataclass(frozen=True)
class Estimator:
    """
    name: display name
    func: (greyscale, ratio) -> threshold
    destructive: func reorders the array it is given
    """
    name: str
    func: Callable[[np.ndarray, float], int]
    destructive: bool = False


def estimators(sample_stride: int = 10) -> List[Estimator]:
    return [
        Estimator("Counting Sort", counting_sort),
        Estimator("Standard Sort", std_sort, destructive=True),
        Estimator("Nth Element", nth_element_sort, destructive=True),
        Estimator("Normal Estimate", normal_estimate),
        Estimator("Weighted Estimate", weighted_estimate),
        Estimator("Uniform Sample", partial(uniform_sample, sample_stride=sample_stride)),
    ]


def run_benchmark(
    greyscale: np.ndarray,
    ratio: float,
    sample_stride: int = 10,
    *,
    report: Optional[Reporter] = display,
    clock: Callable[[], float] = time.perf_counter,
) -> List[BenchmarkResult]:
    """
    Time every estimator against ``greyscale`` and return one result per
    estimator, in invocation order.

    Destructive estimators get a private copy made before the clock starts,
    so ``greyscale`` itself is never reordered and every threshold reflects
    the original image. ``report`` receives (name, threshold, seconds) right
    after each measurement; pass None to stay silent.
    """
    x = as_pixels(greyscale)
    r = check_ratio(ratio)
    k = check_sample_stride(sample_stride)

    results: List[BenchmarkResult] = []
    for est in estimators(k):
        work = x.copy() if est.destructive else x

        t0 = clock()
        threshold = int(est.func(work, r))
        dt = clock() - t0

        if report is not None:
            report(est.name, threshold, dt)

        results.append(
            BenchmarkResult(
                name=est.name,
                threshold=threshold,
                elapsed_s=float(dt),
                destructive=est.destructive,
                black_ratio=black_ratio(x, threshold),
            )
        )
    return results


def chosen_threshold(results: List[BenchmarkResult]) -> int:
    """The last estimator's threshold (Uniform Sample) drives binarization."""
    if not results:
        raise ValueError("no benchmark results")
    return int(results[-1].threshold)
