import importlib
import logging

import pytest

import cli.extract
import web.app
from helpers import RecordingEngineFactory, solid_png
from logging_utils import NOISY_LOGGERS, configure_logging, resolve_log_level, uvicorn_log_level
from ocrx import main as ocrx_main


ENTRYPOINTS = [
    "ocrx",
    "web.app",
]


@pytest.fixture(autouse=True)
def restore_logging():
    """Undo the level changes configure_logging makes to shared loggers."""
    root = logging.getLogger()
    saved = [(root, root.level)] + [(h, h.level) for h in root.handlers]
    saved += [(logging.getLogger(name), logging.getLogger(name).level) for name in NOISY_LOGGERS]
    yield
    for obj, level in saved:
        obj.setLevel(level)


@pytest.mark.parametrize("module_name", ENTRYPOINTS)
def test_entrypoint_help(module_name):
    module = importlib.import_module(module_name)
    assert hasattr(module, "main"), f"{module_name} missing main()"

    with pytest.raises(SystemExit) as excinfo:
        module.main(["--help"])

    assert excinfo.value.code == 0


def test_no_command_prints_help(capsys):
    assert ocrx_main([]) == 1
    assert "extract" in capsys.readouterr().out


def test_extract_prints_text(tmp_path, monkeypatch, capsys):
    factory = RecordingEngineFactory(text="Bonjour")
    monkeypatch.setattr(cli.extract, "get_engine_factory", lambda name=None: factory)
    image = tmp_path / "page.png"
    image.write_bytes(solid_png((100, 100, 100, 255)))

    assert ocrx_main(["-q", "extract", str(image), "-l", "fra", "--binarize"]) == 0
    assert "Bonjour" in capsys.readouterr().out.splitlines()
    assert factory.calls == [("acquire", "fra"), ("recognize", "fra"), ("close", "fra")]


def test_extract_missing_file(tmp_path, monkeypatch):
    factory = RecordingEngineFactory()
    monkeypatch.setattr(cli.extract, "get_engine_factory", lambda name=None: factory)

    assert ocrx_main(["extract", str(tmp_path / "missing.png")]) == 1
    assert factory.calls == []


def test_extract_unreadable_file(tmp_path, monkeypatch, capsys):
    factory = RecordingEngineFactory()
    monkeypatch.setattr(cli.extract, "get_engine_factory", lambda name=None: factory)
    notes = tmp_path / "notes.txt"
    notes.write_text("not an image")

    assert ocrx_main(["-q", "extract", str(notes)]) == 1
    assert capsys.readouterr().out.strip() == ""


def test_extract_rejects_unknown_language(tmp_path):
    with pytest.raises(SystemExit) as excinfo:
        ocrx_main(["extract", str(tmp_path / "a.png"), "-l", "xx"])
    assert excinfo.value.code == 2


def test_serve_passes_options(monkeypatch):
    seen = {}

    def fake_serve(host, port, backend, level):
        seen.update(host=host, port=port, backend=backend, level=level)

    monkeypatch.setattr(web.app, "serve", fake_serve)

    assert ocrx_main(["-v", "serve", "--port", "8080", "--backend", "tesseract"]) == 0
    assert seen == {"host": "localhost", "port": 8080, "backend": "tesseract", "level": logging.DEBUG}


@pytest.mark.parametrize(
    "kwargs, expected",
    [
        ({}, logging.INFO),
        ({"verbose": 1}, logging.DEBUG),
        ({"quiet": 1}, logging.WARNING),
        ({"quiet": 2}, logging.ERROR),
        ({"quiet": 5}, logging.ERROR),
        ({"verbose": 3}, logging.DEBUG),
        ({"log_level": "ERROR", "verbose": 3}, logging.ERROR),
    ],
)
def test_resolve_log_level(kwargs, expected):
    assert resolve_log_level(**kwargs) == expected


def test_uvicorn_log_level():
    assert uvicorn_log_level(logging.DEBUG) == "debug"
    assert uvicorn_log_level(logging.WARNING) == "warning"
    assert uvicorn_log_level(15) == "info"


def test_configure_logging_quiets_libraries():
    configure_logging()
    assert logging.getLogger("PIL").level == logging.WARNING
    assert logging.getLogger("easyocr").level == logging.WARNING

    configure_logging(verbose=1)
    assert logging.getLogger("PIL").level == logging.DEBUG

    configure_logging(quiet=2)
    assert logging.getLogger("PIL").level == logging.ERROR
