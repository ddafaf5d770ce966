import numpy as np
import imageio.v3 as iio
import pytest

from thresholdbench.errors import ImageDecodeError, ImageEncodeError
from thresholdbench.input_img import input_img
from thresholdbench.output_img import output_img


def test_greyscale_png_loads_as_is(tmp_path, image8):
    path = tmp_path / "grey.png"
    iio.imwrite(path, image8)

    loaded = input_img(path, 8)
    assert loaded.pixels.dtype == np.uint8
    assert (loaded.height, loaded.width) == image8.shape
    assert loaded.channels == 1
    assert loaded.bit_depth == 8
    np.testing.assert_array_equal(loaded.pixels, image8)


def test_8bit_file_loaded_as_16bit(tmp_path):
    img = np.array([[0, 1, 128, 255]], dtype=np.uint8)
    path = tmp_path / "grey.png"
    iio.imwrite(path, img)

    loaded = input_img(path, 16)
    assert loaded.pixels.dtype == np.uint16
    np.testing.assert_array_equal(loaded.pixels, img.astype(np.uint16) * 257)


def test_rgb_is_converted_to_single_channel(tmp_path):
    rgb = np.zeros((4, 6, 3), dtype=np.uint8)
    rgb[..., 0] = 255
    rgb[:, 3:, :] = 255
    path = tmp_path / "rgb.png"
    iio.imwrite(path, rgb)

    loaded = input_img(path, 8)
    assert loaded.channels == 3
    assert loaded.pixels.shape == (4, 6)
    # 赤は 0.299*255、白は 255
    assert int(loaded.pixels[0, 0]) == 76
    assert int(loaded.pixels[0, 5]) == 255


def test_missing_file_raises_decode_error(tmp_path):
    with pytest.raises(ImageDecodeError):
        input_img(tmp_path / "nope.png", 8)


def test_garbage_file_raises_decode_error(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"this is not an image")
    with pytest.raises(ImageDecodeError):
        input_img(path, 8)


def test_output_img_writes_16bit_png(tmp_path):
    img = np.array([[0, 65535], [65535, 0]], dtype=np.uint16)
    path = output_img(tmp_path / "sub" / "binary.png", img)
    assert path.exists()
    back = iio.imread(path)
    np.testing.assert_array_equal(back.astype(np.uint16), img)


def test_output_img_rejects_non_2d(tmp_path):
    with pytest.raises(ImageEncodeError):
        output_img(tmp_path / "x.png", np.zeros((2, 2, 3), dtype=np.uint8))


def test_output_img_failure_is_surfaced(tmp_path):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    with pytest.raises(ImageEncodeError):
        output_img(blocker / "binary.png", np.zeros((2, 2), dtype=np.uint8))
