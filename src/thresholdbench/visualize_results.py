# src/thresholdbench/visualize_results.py
from __future__ import annotations

from pathlib import Path
from typing import List, Optional
import time

import numpy as np
import matplotlib.pyplot as plt

from thresholdbench.types import BenchmarkResult, as_pixels, bit_depth_of, max_value


_OUTPUT_DIR: Optional[Path] = None
_TAG: Optional[str] = None


def configure_visualize_output(out_dir: str | Path, tag: str) -> None:
    global _OUTPUT_DIR, _TAG
    _OUTPUT_DIR = Path(out_dir)
    _TAG = str(tag)


def visualize_results(
    greyscale: np.ndarray,
    results: List[BenchmarkResult],
    ratio: float,
    hist_bins: int,
) -> Path:
    """
    greyscale: 元画像（二値化前）
    results: run_benchmark の出力
    ratio: 目標の黒画素割合
    hist_bins: ヒストグラムの区間数 例: 64

    輝度ヒストグラムに各推定法の閾値を縦線で重ねた png と、summary txt を保存する。
    """
    out_dir = _OUTPUT_DIR if _OUTPUT_DIR is not None else (Path.cwd() / "data" / "output")
    out_dir.mkdir(parents=True, exist_ok=True)
    tag = _TAG if _TAG is not None else time.strftime("results_%Y%m%d_%H%M%S")

    x = as_pixels(greyscale)
    mx = max_value(bit_depth_of(x))

    # summary txt
    lines = [
        f"tag: {tag}",
        f"shape: {tuple(x.shape)}",
        f"bit_depth: {bit_depth_of(x)}",
        f"ratio_target: {float(ratio)}",
        f"mean: {float(np.mean(x, dtype=np.float64))}",
        f"min: {int(x.min())}",
        f"max: {int(x.max())}",
    ]
    for r in results:
        lines.append(
            f"{r.name}: threshold={int(r.threshold)} black_ratio={r.black_ratio:.6f} "
            f"time={r.elapsed_s:.3f}s"
        )
    _write_text(out_dir / f"{tag}__summary.txt", "\n".join(lines) + "\n")

    # histogram plot png
    fig = plot_histogram(x, results, hist_bins=hist_bins, max_val=mx)
    out_png = out_dir / f"{tag}__histogram.png"
    fig.savefig(out_png, dpi=150)
    plt.close(fig)
    return out_png


def plot_histogram(
    greyscale: np.ndarray,
    results: List[BenchmarkResult],
    *,
    hist_bins: int,
    max_val: int,
):
    """輝度ヒストグラム + 閾値の縦線。app からも使う。"""
    hist, edges = np.histogram(
        np.asarray(greyscale).ravel(),
        bins=int(hist_bins),
        range=(0.0, float(max_val) + 1.0),
    )
    total = float(hist.sum())
    hist_pct = (hist / total * 100.0) if total > 0 else hist.astype(float)

    centers = (edges[:-1] + edges[1:]) / 2.0
    widths = np.diff(edges)

    fig = plt.figure()
    ax = fig.add_subplot(111)
    ax.bar(centers, hist_pct, width=widths, align="center", color="0.7")

    # 閾値ごとに縦線（同じ値が重なっても凡例で区別できるよう線種を変える）
    styles = ["-", "--", ":", "-."]
    for i, r in enumerate(results):
        ax.axvline(
            float(r.threshold),
            color=f"C{i % 10}",
            linestyle=styles[i % len(styles)],
            label=f"{r.name} ({int(r.threshold)})",
        )

    ax.set_xlim(0.0, float(max_val) + 1.0)
    ax.set_xlabel("Intensity")
    ax.set_ylabel("% of pixels")
    ax.set_title("Intensity histogram with thresholds")
    if results:
        ax.legend(fontsize="small")
    fig.tight_layout()
    return fig


def _write_text(path: Path, text: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
