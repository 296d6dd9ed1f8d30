"""Tests for MediaStore."""
import re

import pytest

from app.core.exceptions import StorageError, ValidationError
from app.services.media_store import MediaStore, generate_filename, sanitize_extension

from conftest import JPEG_BYTES


def stored_files(media):
    return sorted(p.name for p in media.root.iterdir() if p.is_file())


class TestFilenames:
    """Tests for generated filenames."""

    def test_pattern(self):
        assert re.fullmatch(r"part_\d{13}_[0-9a-f]{8}\.jpg", generate_filename("brake pads.JPG"))

    def test_unique(self):
        assert len({generate_filename("a.png") for _ in range(50)}) == 50

    @pytest.mark.parametrize("name, ext", [
        ("photo.png", ".png"),
        ("../../etc/passwd", ""),
        ("noext", ""),
        (None, ""),
        ("evil.p/hp", ""),
    ])
    def test_sanitize_extension(self, name, ext):
        assert sanitize_extension(name) == ext


class TestMediaStore:
    """Tests for staging, promotion and deletion."""

    def test_ensure_ready_creates_dirs(self, tmp_path):
        media = MediaStore(tmp_path / "nested" / "media")
        media.ensure_ready()
        assert media.root.is_dir()
        assert media.staging.is_dir()
        assert stored_files(media) == []

    def test_staging_outside_served_root(self, media):
        assert media.root not in media.staging.parents
        assert media.staging != media.root

    def test_custom_staging_dir(self, tmp_path):
        media = MediaStore(tmp_path / "media", staging=tmp_path / "uploads-tmp")
        media.ensure_ready()
        staged = media.stage(JPEG_BYTES, "image/jpeg", "a.jpg")
        assert staged.path.parent == tmp_path / "uploads-tmp"

    def test_ensure_ready_fails_when_unwritable(self, tmp_path):
        blocker = tmp_path / "media"
        blocker.write_text("not a directory")
        with pytest.raises(StorageError):
            MediaStore(blocker).ensure_ready()

    def test_rejects_non_image_before_write(self, media):
        with pytest.raises(ValidationError):
            media.stage(b"%PDF-1.4", "application/pdf", "manual.pdf")
        with pytest.raises(ValidationError):
            media.stage(b"data", None, "x.jpg")
        assert list(media.staging.iterdir()) == []

    def test_rejects_oversized(self, tmp_path):
        media = MediaStore(tmp_path / "media", max_size=10)
        media.ensure_ready()
        with pytest.raises(ValidationError):
            media.stage(b"x" * 11, "image/png", "big.png")
        assert list(media.staging.iterdir()) == []

    def test_stage_then_commit(self, media):
        staged = media.stage(JPEG_BYTES, "image/jpeg", "pads.jpg")
        assert staged.path.parent == media.staging
        assert stored_files(media) == []

        public = media.commit(staged)
        assert public == f"/media/{staged.filename}"
        assert (media.root / staged.filename).read_bytes() == JPEG_BYTES
        assert not staged.path.exists()

    def test_discard(self, media):
        staged = media.stage(JPEG_BYTES, "image/jpeg", "pads.jpg")
        media.discard(staged)
        media.discard(staged)
        assert list(media.staging.iterdir()) == []

    def test_delete(self, media):
        public = media.commit(media.stage(JPEG_BYTES, "image/jpeg", "pads.jpg"))
        assert media.delete(public) is True
        assert stored_files(media) == []
        assert media.delete(public) is False

    @pytest.mark.parametrize("ref", [None, "", "https://cdn.example.com/a.jpg", "/media/", "/media/.staging"])
    def test_delete_ignores_foreign_refs(self, media, ref):
        assert media.delete(ref) is False

    def test_delete_stays_in_root(self, media, tmp_path):
        outside = tmp_path / "secret.jpg"
        outside.write_bytes(b"x")
        assert media.delete("/media/../secret.jpg") is False
        assert outside.exists()
