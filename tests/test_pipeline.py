"""Test the end-to-end generator and its script entry point.

Tests for src.arc_distance_field.pipeline and scripts/generate_arc_distance_field.py:
    - Output file name, size (786,450 bytes) and header bytes
    - Determinism: identical bytes and SHA-256 across runs
    - Idempotent overwrite of an existing file
    - Flip correctness against the returned blur buffer
    - Golden pixels survive into the file
    - Optional raw-field dump
    - Filesystem errors propagate unchanged
    - Buffer digests logged at DEBUG
    - Script puts the project root on sys.path
    - Script main() writes into the CWD

Test cases:
    - test_generate_writes_expected_file()
    - test_generate_header_bytes()
    - test_generate_deterministic()
    - test_generate_overwrites_existing_file()
    - test_generate_flip_correctness()
    - test_generate_golden_pixels_in_file()
    - test_generate_raw_field_dump()
    - test_generate_propagates_os_error()
    - test_generate_logs_buffer_digests_at_debug()
    - test_script_adds_project_root_to_path()
    - test_script_main_writes_to_cwd()

Run:
    pytest tests/test_pipeline.py -v
"""

import importlib.util
import logging
import sys
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

from src.arc_distance_field import (
    DEFAULT_PARAMS,
    ArcFieldParams,
    OverflowMode,
    generate,
    read_tga,
)
from src.arc_distance_field.pipeline import RAW_FIELD_NAME
from src.utils import hashing, logging_config

EXPECTED_SIZE = 786_450
SCRIPT_PATH = Path(__file__).parent.parent / "scripts" / "generate_arc_distance_field.py"


def _load_script():
    spec = importlib.util.spec_from_file_location("generate_arc_distance_field", SCRIPT_PATH)
    module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(module)
    return module


@pytest.fixture(scope="module")
def result(tmp_path_factory):
    return generate(DEFAULT_PARAMS, output_dir=tmp_path_factory.mktemp("arc"))


# ============================================================================
# OUTPUT FILE
# ============================================================================

def test_generate_writes_expected_file(result):
    assert result.output_path.name == "arc-distance-field.tga"
    assert result.output_path.stat().st_size == EXPECTED_SIZE == DEFAULT_PARAMS.tga_file_size
    assert result.raw_field_path is None


def test_generate_header_bytes(result):
    header = result.output_path.read_bytes()[:18]

    assert header[2] == 2
    assert header[12:14] == bytes([0x00, 0x02])
    assert header[14:16] == bytes([0x00, 0x02])
    assert header[16] == 24
    for offset in (0, 1, 3, 4, 5, 6, 7, 8, 9, 10, 11, 17):
        assert header[offset] == 0, f"header byte {offset}"


def test_generate_returns_buffers(result):
    assert result.raw_field.shape == (512, 512)
    assert result.blur_field.shape == (512, 512)
    assert result.raw_field.dtype == np.uint8
    assert result.blur_field.dtype == np.uint8
    assert result.sha256 == hashing.sha256_file(result.output_path)


def test_generate_deterministic(result, tmp_path):
    second = generate(DEFAULT_PARAMS, output_dir=tmp_path)

    assert second.sha256 == result.sha256
    assert second.output_path.read_bytes() == result.output_path.read_bytes()


def test_generate_overwrites_existing_file(result, tmp_path):
    target = tmp_path / "arc-distance-field.tga"
    target.write_bytes(b"stale" * 400_000)

    generate(DEFAULT_PARAMS, output_dir=tmp_path)

    assert target.stat().st_size == EXPECTED_SIZE
    assert hashing.verify_file_hash(target, result.sha256)
    assert not (tmp_path / "arc-distance-field.tga.tmp").exists()


def test_generate_flip_correctness(result):
    data = result.output_path.read_bytes()
    body = np.frombuffer(data, dtype=np.uint8, offset=18).reshape(512, 512, 3)
    blur = result.blur_field

    for y in (0, 1, 100, 255, 256, 511):
        for c in range(3):
            assert np.array_equal(body[512 - 1 - y, :, c], blur[y])

    assert np.array_equal(read_tga(result.output_path), blur)


def test_generate_golden_pixels_in_file(result):
    with Image.open(result.output_path) as img:
        pixels = np.asarray(img)

    assert pixels.shape == (512, 512, 3)
    assert tuple(pixels[0, 256]) == (99, 99, 99)
    assert tuple(pixels[0, 0]) == (77, 77, 77)


# ============================================================================
# OPTIONS
# ============================================================================

def test_generate_raw_field_dump(tmp_path):
    out = generate(ArcFieldParams(size=32), output_dir=tmp_path, write_raw_field=True)

    assert out.raw_field_path == tmp_path / RAW_FIELD_NAME
    assert np.array_equal(read_tga(out.raw_field_path), out.raw_field)
    assert out.output_path.stat().st_size == 18 + 32 * 32 * 3


def test_generate_clamp_changes_only_overflow(result, tmp_path):
    clamped = generate(ArcFieldParams(overflow=OverflowMode.CLAMP), output_dir=tmp_path)

    assert clamped.sha256 != result.sha256
    assert np.array_equal(clamped.raw_field, result.raw_field)
    differs = clamped.blur_field != result.blur_field
    assert np.all(result.raw_field[differs] <= 52)


def test_generate_propagates_os_error(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("file")

    with pytest.raises(OSError):
        generate(ArcFieldParams(size=8), output_dir=blocker)


def test_generate_logs_digest(tmp_path, caplog):
    with caplog.at_level(logging.INFO, logger="src.arc_distance_field"):
        out = generate(ArcFieldParams(size=16), output_dir=tmp_path)

    assert out.sha256 in caplog.text
    assert "Remapped field range" in caplog.text


def test_generate_logs_buffer_digests_at_debug(tmp_path, caplog):
    with caplog.at_level(logging.DEBUG, logger="src.arc_distance_field"):
        out = generate(ArcFieldParams(size=16), output_dir=tmp_path)

    assert f"Raw field sha256={hashing.sha256_array(out.raw_field)}" in caplog.text
    assert f"Remapped field sha256={hashing.sha256_array(out.blur_field)}" in caplog.text


# ============================================================================
# SCRIPT
# ============================================================================

def test_script_adds_project_root_to_path(monkeypatch):
    monkeypatch.setattr(sys, "path", list(sys.path))
    _load_script()

    assert sys.path[0] == str(SCRIPT_PATH.parent.parent)


def test_script_main_writes_to_cwd(result, tmp_path, monkeypatch):
    generate_arc_distance_field = _load_script()

    root = logging.getLogger()
    monkeypatch.chdir(tmp_path)
    # Restored on teardown: main() reconfigures logging and the excepthook
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    monkeypatch.setattr(root, "handlers", list(root.handlers))
    monkeypatch.setattr(generate_arc_distance_field, "shutdown", lambda: None)

    level = root.level
    try:
        generate_arc_distance_field.main()
    finally:
        logging_config.pop_context()
        root.setLevel(level)

    written = tmp_path / "arc-distance-field.tga"
    assert written.stat().st_size == EXPECTED_SIZE
    assert hashing.sha256_file(written) == result.sha256
