"""Tests for reading uploads into SourceImage."""

import asyncio

import numpy as np
import pytest
from PIL import Image

from errors import ImageDecodeError, UnreadableFileError
from image_loader import load_image, read_image, read_image_file, to_data_uri
from preprocessing import preprocess_image
from helpers import encode, noise_png, solid_png


class TestReadImage:
    def test_decodes_rgba_buffer(self):
        source = read_image(solid_png((10, 20, 30, 40), size=(7, 3)), filename="a.png")
        assert (source.width, source.height) == (7, 3)
        assert source.pixels.shape == (3, 7, 4)
        assert source.pixels[0, 0].tolist() == [10, 20, 30, 40]
        assert source.format == "PNG"
        assert source.mime_type == "image/png"
        assert source.filename == "a.png"

    def test_buffer_length_is_width_times_height_times_four(self):
        source = read_image(solid_png(size=(5, 9)))
        assert source.buffer_length == 5 * 9 * 4

    def test_rgb_jpeg_gets_opaque_alpha(self):
        data = encode(Image.new("RGB", (4, 4), (200, 200, 200)), fmt="JPEG")
        source = read_image(data)
        assert source.mime_type == "image/jpeg"
        assert np.all(source.pixels[:, :, 3] == 255)

    def test_pixels_are_read_only(self):
        source = read_image(solid_png())
        assert not source.pixels.flags.writeable
        with pytest.raises(ValueError):
            source.pixels[0, 0, 0] = 1

    def test_keeps_original_bytes(self):
        data = solid_png()
        assert read_image(data).data == data

    def test_16bit_grayscale_png_is_scaled_not_clipped(self):
        data = encode(Image.fromarray(np.full((4, 4), 100 * 257, dtype=np.uint16)))
        source = read_image(data)
        assert source.pixels[0, 0].tolist() == [100, 100, 100, 255]

    def test_16bit_grayscale_png_contrast_stretch(self):
        data = encode(Image.fromarray(np.full((4, 4), 100 * 257, dtype=np.uint16)))
        processed = preprocess_image(read_image(data), binarize=False)
        assert processed.pixels[0, 0].tolist() == [86, 86, 86, 255]

    def test_32bit_integer_tiff_is_scaled(self):
        data = encode(Image.fromarray(np.full((3, 3), 200 * 256, dtype=np.int32)), fmt="TIFF")
        source = read_image(data)
        assert source.pixels[0, 0].tolist() == [200, 200, 200, 255]

    def test_float_tiff_in_unit_range_is_scaled(self):
        data = encode(Image.fromarray(np.full((3, 3), 0.4, dtype=np.float32)), fmt="TIFF")
        source = read_image(data)
        assert source.pixels[0, 0].tolist() == [102, 102, 102, 255]

    def test_8bit_grayscale_unchanged(self):
        source = read_image(encode(Image.new("L", (2, 2), 37)))
        assert source.pixels[0, 0].tolist() == [37, 37, 37, 255]

    def test_empty_bytes_unreadable(self):
        with pytest.raises(UnreadableFileError, match="empty"):
            read_image(b"")

    def test_non_image_unreadable(self):
        with pytest.raises(UnreadableFileError):
            read_image(b"this is not an image at all", filename="notes.txt")

    def test_truncated_pixel_data_fails_decode(self):
        data = noise_png()
        with pytest.raises(ImageDecodeError):
            read_image(data[: len(data) // 2])

    def test_non_bytes_raises_type_error(self):
        with pytest.raises(TypeError, match="Expected bytes"):
            read_image("image.png")


class TestReadImageFile:
    def test_reads_from_disk(self, tmp_path):
        path = tmp_path / "scan.png"
        path.write_bytes(solid_png(size=(3, 2)))
        source = read_image_file(path)
        assert (source.width, source.height) == (3, 2)
        assert source.filename == "scan.png"

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            read_image_file(tmp_path / "missing.png")


def test_load_image_runs_async():
    source = asyncio.run(load_image(solid_png(size=(2, 2))))
    assert source.pixels.shape == (2, 2, 4)


def test_load_image_propagates_errors():
    with pytest.raises(UnreadableFileError):
        asyncio.run(load_image(b"garbage"))


def test_to_data_uri():
    assert to_data_uri(b"abc", "image/gif") == "data:image/gif;base64,YWJj"
