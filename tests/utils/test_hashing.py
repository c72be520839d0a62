"""
Tests for code artifact hashing.
"""

import base64
import hashlib

import pytest

from hello_infra.utils.hashing import source_code_hash


@pytest.fixture
def code_dir(tmp_path):
    root = tmp_path / "code"
    root.mkdir()
    (root / "index.py").write_text("def handler(event, context):\n    return {}\n")
    (root / "lib").mkdir()
    (root / "lib" / "util.py").write_text("VALUE = 1\n")
    return root


def test_single_file_matches_lambda_format(tmp_path):
    artifact = tmp_path / "function.zip"
    artifact.write_bytes(b"zip bytes")

    expected = base64.b64encode(hashlib.sha256(b"zip bytes").digest()).decode()
    assert source_code_hash(artifact) == expected


def test_directory_hash_is_stable(code_dir):
    assert source_code_hash(code_dir) == source_code_hash(str(code_dir))


def test_content_change_changes_hash(code_dir):
    before = source_code_hash(code_dir)
    (code_dir / "lib" / "util.py").write_text("VALUE = 2\n")

    assert source_code_hash(code_dir) != before


def test_rename_changes_hash(code_dir):
    before = source_code_hash(code_dir)
    (code_dir / "lib" / "util.py").rename(code_dir / "lib" / "helpers.py")

    assert source_code_hash(code_dir) != before


def test_bytecode_cache_ignored(code_dir):
    before = source_code_hash(code_dir)
    cache = code_dir / "__pycache__"
    cache.mkdir()
    (cache / "index.cpython-312.pyc").write_bytes(b"\x00\x01")

    assert source_code_hash(code_dir) == before


def test_missing_path(tmp_path):
    with pytest.raises(FileNotFoundError):
        source_code_hash(tmp_path / "missing")
