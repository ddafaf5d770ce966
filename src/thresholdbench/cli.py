# Path: src/thresholdbench/cli.py
from __future__ import annotations

import argparse
import sys
from dataclasses import replace
from typing import List, Optional

from thresholdbench.config import CFG
from thresholdbench.errors import ImageDecodeError, ImageEncodeError, InvalidArgument
from thresholdbench.pipeline import run_pipeline


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="thresholdbench",
        description="Benchmark six threshold estimators for a target black ratio and save the binary image.",
    )
    ap.add_argument("image", nargs="?", default="sample_image.png", help="input image (converted to greyscale)")
    ap.add_argument("--ratio", type=float, default=CFG.ratio, help="fraction of pixels to turn black (0..1)")
    ap.add_argument("--stride", type=int, default=CFG.sample_stride, help="sample stride for Uniform Sample")
    ap.add_argument("--bit-depth", type=int, choices=(8, 16), default=CFG.bit_depth)
    ap.add_argument("--out-dir", default=None, help="output folder (default: <project root>/data/output)")
    ap.add_argument("--tag", default=None, help="output file prefix (default: image stem)")
    ap.add_argument("--no-save-results", action="store_true", help="skip csv / json / histogram")
    ap.add_argument("--quiet", action="store_true", help="hide [BEGIN]/[END] step lines")
    return ap


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    cfg = replace(
        CFG,
        ratio=float(args.ratio),
        sample_stride=int(args.stride),
        bit_depth=int(args.bit_depth),
        save_results=not args.no_save_results,
    )

    try:
        result = run_pipeline(
            args.image,
            cfg=cfg,
            out_dir=args.out_dir,
            out_tag=args.tag,
            verbose=not args.quiet,
        )
    except (ImageDecodeError, ImageEncodeError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1
    except InvalidArgument as e:
        print(f"error: {e}", file=sys.stderr)
        return 2

    print(f"Binary image: {result['binary_png']}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
