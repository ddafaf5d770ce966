# generate_sample_image.py
# -*- coding: utf-8 -*-
"""
横方向のグラデーション背景に、位置・大きさ・明るさランダムの楕円を描き、
ノイズを足したグレースケール画像を PNG で保存します（閾値ベンチマーク用）。

配置:
  workingdirectly/script/ に本スクリプトを置く想定
出力:
  workingdirectly/data/input/ に保存

ファイル名:
  sample_WWWW_HHHH_nNNN_bBB.png
    WWWW, HHHH : 画像サイズ (0埋め, 4桁)
    NNN        : 楕円の数 (0埋め, 3桁)
    BB         : bit depth (8 or 16)
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from pathlib import Path

import numpy as np
import imageio.v3 as iio
from PIL import Image, ImageDraw


@dataclass(frozen=True)
class Params:
    img_size: tuple[int, int] = (1920, 1080)  # (W, H)
    blob_number: int = 120
    blob_radius_max: int = 80
    noise_sigma: float = 6.0  # 8 bit 換算の標準偏差
    bit_depth: int = 8
    seed: int | None = None


def format_filename(params: Params) -> str:
    w, h = params.img_size
    return f"sample_{w:04d}_{h:04d}_n{params.blob_number:03d}_b{params.bit_depth:02d}.png"


def generate_sample_image(params: Params) -> np.ndarray:
    w, h = params.img_size
    rng = np.random.default_rng(params.seed)

    # 背景: 左が暗く右が明るいグラデーション
    ramp = np.linspace(40, 200, w, dtype=np.float64)
    img = Image.fromarray(np.tile(ramp, (h, 1)).astype(np.uint8))
    draw = ImageDraw.Draw(img)

    for _ in range(params.blob_number):
        cx = rng.uniform(0.0, w - 1.0)
        cy = rng.uniform(0.0, h - 1.0)
        rx = rng.uniform(4.0, params.blob_radius_max)
        ry = rng.uniform(4.0, params.blob_radius_max)
        level = int(rng.integers(0, 256))
        # 画像外にはみ出しても PIL がクリップして描画する
        draw.ellipse((cx - rx, cy - ry, cx + rx, cy + ry), fill=level)

    x = np.asarray(img, dtype=np.float64)
    x = x + rng.normal(0.0, params.noise_sigma, size=x.shape)

    if params.bit_depth == 16:
        return np.clip(np.rint(x * 257.0), 0, 65535).astype(np.uint16)
    return np.clip(np.rint(x), 0, 255).astype(np.uint8)


def main() -> None:
    ap = argparse.ArgumentParser(description="Generate a synthetic greyscale image for the threshold benchmark.")
    ap.add_argument("--width", type=int, default=Params.img_size[0])
    ap.add_argument("--height", type=int, default=Params.img_size[1])
    ap.add_argument("--blobs", type=int, default=Params.blob_number)
    ap.add_argument("--bit-depth", type=int, choices=(8, 16), default=Params.bit_depth)
    ap.add_argument("--seed", type=int, default=None)
    args = ap.parse_args()

    params = Params(
        img_size=(args.width, args.height),
        blob_number=args.blobs,
        bit_depth=args.bit_depth,
        seed=args.seed,
    )

    # workingdirectly/script/ に置かれる想定なので、親が workingdirectly
    script_dir = Path(__file__).resolve().parent
    working_dir = script_dir.parent

    out_dir = working_dir / "data" / "input"
    out_dir.mkdir(parents=True, exist_ok=True)

    out_path = out_dir / format_filename(params)
    iio.imwrite(out_path, generate_sample_image(params))

    print(f"Saved: {out_path}")


if __name__ == "__main__":
    main()
