# Path: src/thresholdbench/display.py

from __future__ import annotations

PADDING = "    "


def display(name: str, threshold: int, duration: float) -> None:
    """
    閾値と実行時間を表示する。

    name: 表示名（例: "Counting Sort"）
    threshold: 求めた閾値
    duration: 実行時間（秒）。小数 3 桁で出す
    """
    print(name, flush=True)
    print(f"{PADDING}Threshold: {int(threshold)}", flush=True)
    print(f"{PADDING}Execution Time: {float(duration):.3f}s", flush=True)
