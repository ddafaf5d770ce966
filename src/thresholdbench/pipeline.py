# Path: src/thresholdbench/pipeline.py
#
# 入出力フォルダ（project root 直下）
#   data/input          : 元画像
#   data/output         : 二値画像、閾値 csv、used_config json、ヒストグラム
#
# 注意:
# ・設定値は config.py の CFG（または replace した Config）から供給
# ・画像の読み込みに失敗したら推定は一つも実行しない

from __future__ import annotations

from dataclasses import asdict
from pathlib import Path
from typing import Any, Dict, Optional

import time

import numpy as np

from thresholdbench.config import CFG, Config, validate_config
from thresholdbench.input_img import input_img
from thresholdbench.benchmark import chosen_threshold, run_benchmark
from thresholdbench.binarize import binarize
from thresholdbench.output_img import output_img
from thresholdbench.postprocess import save_results
from thresholdbench.visualize_results import configure_visualize_output, visualize_results


def run_pipeline(
    img_path: str | Path,
    *,
    cfg: Config = CFG,
    out_dir: str | Path | None = None,
    out_tag: Optional[str] = None,
    verbose: bool = True,
) -> Dict[str, Any]:
    """
    指定画像1枚について、6 つの閾値推定を比較し、最後の推定（Uniform Sample）の
    閾値で二値化した画像を保存する。
    Returns には、各推定の結果、使った閾値、出力ファイルパスなどを入れる。
    """
    t_all0 = time.perf_counter()

    def log(msg: str) -> None:
        if verbose:
            print(msg, flush=True)

    def step_begin(name: str) -> float:
        log(f"[BEGIN] {name}")
        return time.perf_counter()

    def step_end(name: str, t0: float, extra: str = "") -> None:
        dt = time.perf_counter() - t0
        if extra:
            log(f"[END]   {name}  {dt:.3f}s  {extra}")
        else:
            log(f"[END]   {name}  {dt:.3f}s")

    validate_config(cfg)
    img_path = Path(img_path)

    t0 = step_begin("0) resolve paths")
    if out_dir is None:
        out_dir = _find_project_root(img_path) / "data" / "output"
    out_dir = Path(out_dir)
    out_dir.mkdir(parents=True, exist_ok=True)

    stem = img_path.stem
    tag = out_tag.strip() if isinstance(out_tag, str) and out_tag.strip() else stem
    step_end("0) resolve paths", t0, extra=f"tag={tag} out={out_dir}")

    # ---- 1) 画像の読み込み ----
    t0 = step_begin("1) input_img")
    loaded = input_img(img_path, cfg.bit_depth)
    img = loaded.pixels
    step_end(
        "1) input_img",
        t0,
        extra=f"shape={tuple(img.shape)} dtype={img.dtype} channels(src)={loaded.channels}",
    )

    # ---- 2) 閾値推定の比較 ----
    t0 = step_begin("2) run_benchmark")
    results = run_benchmark(img, cfg.ratio, cfg.sample_stride)
    threshold = chosen_threshold(results)
    step_end("2) run_benchmark", t0, extra=f"threshold_used={threshold} ({results[-1].name})")

    # ---- 3) 保存（二値化前の画像が必要なものを先に）----
    saved: Dict[str, str] = {}
    if cfg.save_results:
        t0 = step_begin("3) save_results")
        thresholds_csv = out_dir / f"{tag}__thresholds.csv"
        used_cfg_json = out_dir / f"{tag}__used_config.json"
        save_results(
            results,
            out_csv_path=thresholds_csv,
            out_config_json_path=used_cfg_json,
            used_config=_cfg_payload(cfg, img_path=img_path, shape=img.shape),
        )
        configure_visualize_output(out_dir, tag)
        hist_png = visualize_results(img, results, cfg.ratio, cfg.hist_bins)
        saved.update(
            thresholds_csv=str(thresholds_csv),
            used_config_json=str(used_cfg_json),
            histogram_png=str(hist_png),
        )
        step_end("3) save_results", t0, extra=f"n_files={len(saved)}")

    # ---- 4) 二値化 ----
    t0 = step_begin("4) binarize")
    binarize(img, threshold)
    nz = int(np.count_nonzero(img))
    step_end("4) binarize", t0, extra=f"white={nz} ({nz / img.size:.6f})")

    # ---- 5) 二値画像の保存 ----
    t0 = step_begin("5) output_img")
    binary_path = output_img(out_dir / f"{tag}{cfg.output_suffix}.png", img)
    step_end("5) output_img", t0, extra=f"path={binary_path.name}")

    dt_all = time.perf_counter() - t_all0
    log(f"[DONE] pipeline total {dt_all:.3f}s")

    return {
        "img_path": str(img_path),
        "tag": tag,
        "width": int(loaded.width),
        "height": int(loaded.height),
        "bit_depth": int(cfg.bit_depth),
        "results": [r.to_dict() for r in results],
        "threshold_used": int(threshold),
        "white_ratio": float(nz / img.size),
        "binary_png": str(binary_path),
        "saved": saved,
    }


def _cfg_payload(cfg: Config, *, img_path: Path, shape: tuple) -> Dict[str, Any]:
    d = asdict(cfg)
    d["img_path"] = str(img_path)
    d["shape"] = [int(s) for s in shape]
    return d


def _find_project_root(any_path: Path) -> Path:
    p = any_path.resolve()
    for parent in [p] + list(p.parents):
        if (parent / "data").exists():
            return parent
    return Path.cwd().resolve()
