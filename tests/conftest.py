"""Shared fixtures and the --slow switch.

Tests that load a real OCR engine (EasyOCR models, the tesseract binary) are
marked ``slow`` and only run with ``pytest --slow``. Everything else uses the
recording fake engine from helpers.py.
"""
import pytest

from helpers import RecordingEngineFactory, solid_png


def pytest_addoption(parser):
    parser.addoption(
        "--slow",
        action="store_true",
        default=False,
        help="Also run tests that start a real OCR engine",
    )


def pytest_collection_modifyitems(config, items):
    if config.getoption("--slow"):
        return
    skip_slow = pytest.mark.skip(reason="needs a real OCR engine; pass --slow to include")
    for item in items:
        if "slow" in item.keywords:
            item.add_marker(skip_slow)


@pytest.fixture
def engine_factory():
    return RecordingEngineFactory()


@pytest.fixture
def failing_engine_factory():
    return RecordingEngineFactory(recognize_error=RuntimeError("model download failed"))


@pytest.fixture
def gray_png():
    return solid_png((100, 100, 100, 255), size=(8, 6))
