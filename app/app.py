# app/app.py
import sys
from pathlib import Path
import tempfile

import numpy as np
import streamlit as st
import matplotlib.pyplot as plt

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"
sys.path.insert(0, str(SRC))

from thresholdbench.config import CFG
from thresholdbench.errors import ImageDecodeError, InvalidArgument
from thresholdbench.input_img import input_img
from thresholdbench.benchmark import chosen_threshold, run_benchmark
from thresholdbench.binarize import binarize
from thresholdbench.types import max_value
from thresholdbench.visualize_results import plot_histogram

st.set_page_config(layout="wide")
st.title("Threshold Benchmark GUI")


def crop_center(img: np.ndarray, size: int = 800) -> np.ndarray:
    if img.ndim < 2:
        return img
    h, w = img.shape[0], img.shape[1]
    if h <= size and w <= size:
        return img
    r0 = max(0, (h - size) // 2)
    c0 = max(0, (w - size) // 2)
    r1 = min(h, r0 + size)
    c1 = min(w, c0 + size)
    return img[r0:r1, c0:c1, ...]


def to_display8(img: np.ndarray) -> np.ndarray:
    # st.image は 8 bit 前提なので 16 bit は上位 8 bit を表示
    if img.dtype == np.uint16:
        return (img >> 8).astype(np.uint8)
    return img


# ----------------------------
# Sidebar: file uploader at top
# ----------------------------
st.sidebar.header("Input")
uploaded = st.sidebar.file_uploader(
    "Drag & drop here, or Browse file",
    type=["tif", "tiff", "png", "jpg", "jpeg", "bmp"],
)

# ----------------------------
# Sidebar: parameters
# ----------------------------
st.sidebar.header("Parameters")

ratio = float(
    st.sidebar.slider(
        "**ratio:**  \n fraction of pixels to turn black",
        min_value=0.0,
        max_value=1.0,
        value=float(CFG.ratio),
        step=0.01,
    )
)
sample_stride = int(
    st.sidebar.number_input(
        "**sample_stride:**  \n Uniform Sample looks at every n-th pixel",
        value=int(CFG.sample_stride),
        min_value=1,
        step=1,
    )
)
bit_depth = int(
    st.sidebar.radio(
        "**bit_depth:**",
        options=[8, 16],
        index=0 if int(CFG.bit_depth) == 8 else 1,
        horizontal=True,
    )
)
hist_bins = int(
    st.sidebar.number_input(
        "**hist_bins:**",
        value=int(CFG.hist_bins),
        min_value=1,
        step=1,
    )
)

# ----------------------------
# Main: fixed layout placeholders (always rendered)
# ----------------------------
blank_gray = np.zeros((800, 800), dtype=np.uint8)

c1, c2 = st.columns(2)
with c1:
    st.write("Greyscale")
    grey_ph = st.image(blank_gray)
with c2:
    st.write("Binarized (Uniform Sample threshold)")
    bin_ph = st.image(blank_gray)

st.markdown("---")

st.subheader("Thresholds and execution time")
table_ph = st.empty()

st.subheader("Histogram (x: intensity, y: % of pixels) with thresholds")
hist_ph = st.empty()

# ----------------------------
# If no file yet: keep placeholders and stop
# ----------------------------
if uploaded is None:
    table_ph.text("Upload an image to run the benchmark.")
    hist_ph.pyplot(plt.figure())
    plt.close("all")
    st.stop()

# ----------------------------
# With file: prepare temp path
# ----------------------------
file_bytes = uploaded.getvalue()

tmpdir = tempfile.TemporaryDirectory()
tmp_path = Path(tmpdir.name) / uploaded.name
tmp_path.write_bytes(file_bytes)

try:
    loaded = input_img(tmp_path, bit_depth)
    img = loaded.pixels
    results = run_benchmark(img, ratio, sample_stride, report=None)
except (ImageDecodeError, InvalidArgument) as e:
    st.error(str(e))
    tmpdir.cleanup()
    st.stop()

threshold = chosen_threshold(results)

grey_ph.image(crop_center(to_display8(img), 800))

table_ph.table(
    [
        {
            "estimator": r.name,
            "threshold": int(r.threshold),
            "time (s)": f"{r.elapsed_s:.3f}",
            "black ratio": f"{r.black_ratio:.4f}",
            "target": f"{ratio:.4f}",
        }
        for r in results
    ]
)

fig = plot_histogram(img, results, hist_bins=hist_bins, max_val=max_value(bit_depth))
hist_ph.pyplot(fig)
plt.close(fig)

img_bin = binarize(img.copy(), threshold)
bin_ph.image(crop_center(to_display8(img_bin), 800))

tmpdir.cleanup()
