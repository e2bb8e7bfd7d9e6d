import io
import pytest
from starlette.datastructures import Headers, UploadFile
from docflow.errors import PayloadTooLarge
from docflow.uploads.storage import FileStorage


def make_upload(content: bytes, filename="scan.PDF", content_type="application/pdf"):
    return UploadFile(
        file=io.BytesIO(content),
        filename=filename,
        headers=Headers({"content-type": content_type}),
    )


def test_save_writes_file_with_unique_name(tmp_path):
    storage = FileStorage(tmp_path / "files", max_bytes=1024)

    first = storage.save(make_upload(b"hello"))
    second = storage.save(make_upload(b"hello"))

    assert first.path != second.path
    assert first.file_name == "scan.PDF"
    assert first.path.endswith(".PDF")
    assert first.mime_type == "application/pdf"
    assert first.size == 5
    with open(first.path, "rb") as fh:
        assert fh.read() == b"hello"


def test_save_strips_directories_from_client_name(tmp_path):
    storage = FileStorage(tmp_path, max_bytes=1024)
    stored = storage.save(make_upload(b"x", filename="../../etc/passwd"))
    assert stored.file_name == "passwd"
    assert stored.path.startswith(str(tmp_path))


def test_save_rejects_oversized_upload(tmp_path):
    storage = FileStorage(tmp_path, max_bytes=4)
    with pytest.raises(PayloadTooLarge):
        storage.save(make_upload(b"12345"))
    assert list(tmp_path.iterdir()) == []
