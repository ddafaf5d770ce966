# Path: src/thresholdbench/postprocess.py

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, List

import csv
import json

from thresholdbench.types import BenchmarkResult


def save_results(
    results: List[BenchmarkResult],
    out_csv_path: str | Path,
    out_config_json_path: str | Path | None = None,
    used_config: Dict[str, Any] | None = None,
) -> List[BenchmarkResult]:
    """
    ベンチマーク結果の保存。

    仕様
    ----
    ・csv を出力（Excelで読める素直な形式、実行順のまま）
    ・（任意）使った設定と最終的に二値化に使った閾値を json に保存

    Parameters
    ----------
    results : List[BenchmarkResult]
        run_benchmark の出力
    out_csv_path : str | Path
        出力先（例: data/output/sample__thresholds.csv）
    out_config_json_path : str | Path | None
        出力先（例: data/output/sample__used_config.json）
    used_config : Dict[str,Any] | None
        設定値の辞書（pipeline側でまとめて渡す想定）

    Returns
    -------
    results : そのまま返す
    """
    out_csv_path = Path(out_csv_path)
    out_csv_path.parent.mkdir(parents=True, exist_ok=True)

    # csv: name, threshold, elapsed_s, destructive, black_ratio
    with out_csv_path.open("w", newline="", encoding="utf-8") as fp:
        w = csv.writer(fp)
        w.writerow(["name", "threshold", "elapsed_s", "destructive", "black_ratio"])
        for r in results:
            d = r.to_dict()
            w.writerow(
                [
                    d["name"],
                    d["threshold"],
                    f"{d['elapsed_s']:.6f}",
                    int(d["destructive"]),
                    f"{d['black_ratio']:.6f}",
                ]
            )

    if out_config_json_path is not None:
        out_config_json_path = Path(out_config_json_path)
        out_config_json_path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "n_estimators": int(len(results)),
            "threshold_used": int(results[-1].threshold) if results else None,
            "results": [r.to_dict() for r in results],
            "used_config": used_config or {},
        }
        with out_config_json_path.open("w", encoding="utf-8") as fp:
            json.dump(payload, fp, ensure_ascii=False, indent=2)

    return results
