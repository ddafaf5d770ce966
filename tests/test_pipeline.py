import json
from dataclasses import replace

import numpy as np
import imageio.v3 as iio
import pytest

from thresholdbench.config import CFG, Config, validate_config
from thresholdbench.errors import ImageDecodeError, InvalidArgument
from thresholdbench.pipeline import run_pipeline


@pytest.fixture
def sample_png(tmp_path, image8):
    path = tmp_path / "sample_image.png"
    iio.imwrite(path, image8)
    return path


def test_run_pipeline_end_to_end(tmp_path, sample_png, capsys):
    out_dir = tmp_path / "out"
    res = run_pipeline(sample_png, out_dir=out_dir, verbose=False)

    assert res["tag"] == "sample_image"
    assert len(res["results"]) == 6
    assert res["threshold_used"] == res["results"][-1]["threshold"]

    binary = iio.imread(res["binary_png"])
    assert binary.shape == (48, 64)
    assert set(np.unique(binary).tolist()) <= {0, 255}
    assert res["binary_png"].endswith("sample_image_binary.png")

    for key in ("thresholds_csv", "used_config_json", "histogram_png"):
        assert (out_dir / res["saved"][key].split("/")[-1]).exists()

    payload = json.loads((out_dir / "sample_image__used_config.json").read_text(encoding="utf-8"))
    assert payload["threshold_used"] == res["threshold_used"]
    assert payload["used_config"]["ratio"] == CFG.ratio
    assert payload["used_config"]["sample_stride"] == CFG.sample_stride

    csv_lines = (out_dir / "sample_image__thresholds.csv").read_text(encoding="utf-8").splitlines()
    assert csv_lines[0] == "name,threshold,elapsed_s,destructive,black_ratio"
    assert len(csv_lines) == 7

    out = capsys.readouterr().out
    assert "Uniform Sample\n    Threshold: " in out
    assert "[BEGIN]" not in out


def test_run_pipeline_16bit_without_saving(tmp_path, sample_png):
    cfg = replace(CFG, bit_depth=16, save_results=False, ratio=0.5, sample_stride=1)
    out_dir = tmp_path / "out16"
    res = run_pipeline(sample_png, cfg=cfg, out_dir=out_dir, out_tag="run16", verbose=True)

    assert res["saved"] == {}
    assert not list(out_dir.glob("*.csv"))
    binary = iio.imread(out_dir / "run16_binary.png")
    assert set(np.unique(binary).tolist()) <= {0, 65535}
    exact = {r["threshold"] for r in res["results"][:3]}
    assert exact == {res["threshold_used"]}


def test_decode_failure_aborts_before_estimators(tmp_path, capsys):
    out_dir = tmp_path / "out"
    with pytest.raises(ImageDecodeError):
        run_pipeline(tmp_path / "missing.png", out_dir=out_dir, verbose=False)
    assert "Threshold:" not in capsys.readouterr().out
    assert not list(out_dir.glob("*.png"))


@pytest.mark.parametrize(
    "cfg",
    [
        Config(ratio=1.5),
        Config(sample_stride=0),
        Config(bit_depth=12),
        Config(hist_bins=0),
    ],
)
def test_invalid_config(cfg, sample_png, tmp_path):
    with pytest.raises(InvalidArgument):
        validate_config(cfg)
    with pytest.raises(InvalidArgument):
        run_pipeline(sample_png, cfg=cfg, out_dir=tmp_path / "out", verbose=False)
