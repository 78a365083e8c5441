# tests/test_storage.py
from pathlib import Path

import pytest

from studygenie.storage import LocalBlobStorage, UploadError, UploadSnapshot, validate_upload


def test_upload_reports_progress_and_returns_url(tmp_path):
    source = tmp_path / "notes.txt"
    source.write_bytes(b"x" * 250)
    storage = LocalBlobStorage(tmp_path / "bucket", chunk_size=100)
    snapshots = []
    url = storage.upload(source, on_progress=snapshots.append)
    assert [s.bytes_transferred for s in snapshots] == [100, 200, 250]
    assert all(s.total_bytes == 250 for s in snapshots)
    assert snapshots[-1].percent == 100.0
    assert url.startswith("file://")
    assert storage.object_path("notes.txt").read_bytes() == b"x" * 250


def test_upload_empty_file(tmp_path):
    source = tmp_path / "empty.txt"
    source.write_bytes(b"")
    snapshots = []
    LocalBlobStorage(tmp_path / "bucket").upload(source, on_progress=snapshots.append)
    assert snapshots == [UploadSnapshot(0, 0)]


def test_upload_rejects_unsupported_type(tmp_path):
    source = tmp_path / "photo.jpg"
    source.write_bytes(b"jpg")
    with pytest.raises(UploadError, match="PDF, DOCX, or TXT"):
        LocalBlobStorage(tmp_path / "bucket").upload(source)


def test_validate_upload_missing_file(tmp_path):
    with pytest.raises(UploadError, match="not found"):
        validate_upload(tmp_path / "missing.pdf")


def test_validate_upload_case_insensitive_suffix(tmp_path):
    source = tmp_path / "SYLLABUS.PDF"
    source.write_bytes(b"%PDF")
    assert validate_upload(source) == Path(source)


def test_transport_error_aborts_and_removes_partial(tmp_path):
    source = tmp_path / "big.docx"
    source.write_bytes(b"y" * 300)
    storage = LocalBlobStorage(tmp_path / "bucket", chunk_size=100)

    def failing_progress(snapshot):
        if snapshot.bytes_transferred >= 200:
            raise OSError("connection reset")

    with pytest.raises(UploadError, match="connection reset"):
        storage.upload(source, on_progress=failing_progress)
    assert not storage.object_path("big.docx").exists()


def test_reupload_of_stored_object_keeps_content(tmp_path):
    source = tmp_path / "notes.txt"
    source.write_bytes(b"hello world")
    storage = LocalBlobStorage(tmp_path / "bucket", chunk_size=4)
    storage.upload(source)
    stored = storage.object_path("notes.txt")
    storage.upload(stored)
    assert stored.read_bytes() == b"hello world"
    assert not stored.with_name("notes.txt.part").exists()


def test_failed_reupload_keeps_previous_object(tmp_path):
    source = tmp_path / "notes.txt"
    source.write_bytes(b"first version")
    storage = LocalBlobStorage(tmp_path / "bucket", chunk_size=4)
    storage.upload(source)
    source.write_bytes(b"second version, longer")

    def failing_progress(snapshot):
        if snapshot.bytes_transferred >= 8:
            raise OSError("connection reset")

    with pytest.raises(UploadError, match="connection reset"):
        storage.upload(source, on_progress=failing_progress)
    stored = storage.object_path("notes.txt")
    assert stored.read_bytes() == b"first version"
    assert not stored.with_name("notes.txt.part").exists()
