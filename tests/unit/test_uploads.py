"""
Tests for upload validation and storage.
"""

import pytest

from rashed.core.config import UploadConfig
from rashed.core.errors import UploadRejectedError
from rashed.core.uploads import (
    UploadStore,
    language_for,
    original_name,
    sanitize_filename,
)


@pytest.fixture
def store(tmp_path):
    return UploadStore(UploadConfig(directory=tmp_path / "uploads", max_size=1024))


@pytest.mark.unit
class TestFilenameHelpers:
    """Test name handling."""

    @pytest.mark.parametrize(
        "filename, language",
        [
            ("app.py", "python"),
            ("index.TSX", "typescript"),
            ("main.rs", "rust"),
            ("README.md", "markdown"),
            ("data.yaml", "yaml"),
        ],
    )
    def test_language_for(self, filename, language):
        assert language_for(filename) == language

    def test_sanitize_strips_directories(self):
        assert sanitize_filename("../../etc/passwd.txt") == "passwd.txt"
        assert sanitize_filename("C:\\Users\\x\\notes.md") == "notes.md"

    def test_sanitize_replaces_unsafe_characters(self):
        assert sanitize_filename('a<b>:c?.txt') == "a_b__c_.txt"

    def test_original_name(self):
        assert original_name("1700000000000-123456-my-file.py") == "my-file.py"
        assert original_name("plain.py") == "plain.py"


@pytest.mark.unit
class TestUploadStore:
    """Test validation and storage."""

    def test_validate_accepts_known_extension(self, store):
        result = store.validate("main.py", 10)
        assert result.is_valid
        assert result.extension == ".py"

    def test_validate_rejects_unknown_extension(self, store):
        result = store.validate("tool.exe", 10)
        assert not result.is_valid
        assert result.error == "Only common file types are allowed"
        assert result.status_code == 400

    def test_validate_rejects_oversize(self, store):
        result = store.validate("main.py", 2048)
        assert not result.is_valid
        assert result.status_code == 413

    def test_validate_flags_sanitized_name(self, store):
        result = store.validate("../main.py", 10)
        assert result.is_valid
        assert result.sanitized_filename == "main.py"
        assert result.warnings == ["Filename was sanitized"]

    def test_store_writes_file(self, store):
        info = store.store("main.py", b"print('hi')\n", "text/x-python")

        assert info["originalname"] == "main.py"
        assert info["size"] == 12
        assert info["mimetype"] == "text/x-python"
        assert info["filename"].endswith("-main.py")
        assert (store.directory / info["filename"]).read_bytes() == b"print('hi')\n"

    def test_store_rejects_disallowed_type(self, store):
        with pytest.raises(UploadRejectedError) as exc_info:
            store.store("virus.exe", b"MZ")
        assert exc_info.value.status_code == 400
        assert exc_info.value.message == "Only common file types are allowed"
        assert not store.directory.exists()

    def test_store_rejects_oversize(self, store):
        with pytest.raises(UploadRejectedError) as exc_info:
            store.store("big.txt", b"x" * 2048)
        assert exc_info.value.status_code == 413
        assert exc_info.value.message == "File too large"

    def test_list_files(self, store):
        assert store.list_files() == []

        store.store("a.md", b"# A")
        store.store("b-notes.txt", b"notes")

        files = store.list_files()
        assert sorted(f["originalname"] for f in files) == ["a.md", "b-notes.txt"]
        assert all("uploadedAt" in f for f in files)
