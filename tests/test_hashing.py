import hashlib

import pytest

from dep_cache.errors import HashError
from dep_cache.utils import CHUNK_SIZE, hash_file


def test_hash_file_matches_sha1(tmp_path):
    spec = tmp_path / "package.json"
    spec.write_bytes(b'{"a":1}')
    assert hash_file(spec) == hashlib.sha1(b'{"a":1}').hexdigest()


def test_empty_file_has_known_digest(tmp_path):
    spec = tmp_path / "empty"
    spec.write_bytes(b"")
    assert hash_file(spec) == "da39a3ee5e6b4b0d3255bfef95601890afd80709"


def test_identical_contents_share_a_key(tmp_path):
    a = tmp_path / "a.json"
    b = tmp_path / "nested" / "b.json"
    b.parent.mkdir()
    a.write_bytes(b'{"deps": ["x", "y"]}')
    b.write_bytes(b'{"deps": ["x", "y"]}')
    assert hash_file(a) == hash_file(b)


def test_single_byte_difference_changes_key(tmp_path):
    a = tmp_path / "a.json"
    b = tmp_path / "b.json"
    a.write_bytes(b'{"a":1}')
    b.write_bytes(b'{"a":2}')
    assert hash_file(a) != hash_file(b)


def test_streams_files_larger_than_a_chunk(tmp_path):
    data = b"0123456789abcdef" * (CHUNK_SIZE // 8 + 3)
    spec = tmp_path / "big.lock"
    spec.write_bytes(data)
    digest = hash_file(str(spec))
    assert digest == hashlib.sha1(data).hexdigest()
    assert digest == digest.lower() and len(digest) == 40


def test_missing_file_raises(tmp_path):
    with pytest.raises(HashError):
        hash_file(tmp_path / "nope.json")


def test_directory_raises(tmp_path):
    with pytest.raises(HashError):
        hash_file(tmp_path)
