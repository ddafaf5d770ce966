import itertools

import numpy as np

from thresholdbench.benchmark import chosen_threshold, estimators, run_benchmark
from thresholdbench.display import display
from thresholdbench.uniform_sample import uniform_sample

NAMES = [
    "Counting Sort",
    "Standard Sort",
    "Nth Element",
    "Normal Estimate",
    "Weighted Estimate",
    "Uniform Sample",
]


def test_fixed_order_and_destructive_flags():
    ests = estimators(10)
    assert [e.name for e in ests] == NAMES
    assert [e.destructive for e in ests] == [False, True, True, False, False, False]


def test_run_benchmark_leaves_buffer_untouched(image8):
    before = image8.copy()
    results = run_benchmark(image8, 0.33, 10, report=None)
    np.testing.assert_array_equal(image8, before)

    assert [r.name for r in results] == NAMES
    exact = {r.name: r.threshold for r in results[:3]}
    assert len(set(exact.values())) == 1


def test_chosen_threshold_is_uniform_sample(image16):
    results = run_benchmark(image16, 0.4, 7, report=None)
    assert chosen_threshold(results) == results[-1].threshold
    assert results[-1].threshold == uniform_sample(image16, 0.4, 7)


def test_reporter_and_clock():
    img = np.array([[10, 20, 30, 40, 50]], dtype=np.uint8)
    ticks = itertools.count()
    seen = []

    results = run_benchmark(
        img,
        0.4,
        1,
        report=lambda name, t, dt: seen.append((name, t, dt)),
        clock=lambda: float(next(ticks)),
    )

    assert [s[0] for s in seen] == NAMES
    assert [s[1] for s in seen[:3]] == [30, 30, 30]
    assert seen[-1][1] == 30
    assert all(r.elapsed_s == 1.0 for r in results)
    assert [(r.name, r.threshold, r.elapsed_s) for r in results] == seen


def test_black_ratio_near_target_for_exact_estimators(rng):
    # 連続に近い画像なら exact な閾値の黒画素割合は目標に近い
    img = rng.integers(0, 65536, size=(64, 64), dtype=np.uint16)
    results = run_benchmark(img, 0.33, 10, report=None)
    for r in results[:3]:
        assert abs(r.black_ratio - 0.33) < 0.01
        assert r.to_dict()["threshold"] == r.threshold


def test_display_format(capsys):
    display("Counting Sort", 30, 0.12345)
    out = capsys.readouterr().out
    assert out == "Counting Sort\n    Threshold: 30\n    Execution Time: 0.123s\n"


def test_default_report_prints_every_estimator(image8, capsys):
    run_benchmark(image8, 0.33)
    out = capsys.readouterr().out
    for name in NAMES:
        assert f"{name}\n    Threshold: " in out
    assert out.count("Execution Time: ") == 6
