# Path: src/thresholdbench/errors.py

from __future__ import annotations


class InvalidArgument(ValueError):
    """Precondition violation: bad ratio, stride, bit depth, threshold or empty buffer."""


class ImageDecodeError(OSError):
    """The source image is missing or could not be decoded."""


class ImageEncodeError(OSError):
    """The binary image could not be written."""
