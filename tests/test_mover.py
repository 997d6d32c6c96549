"""Test the move engine."""

import errno
from pathlib import Path
from unittest.mock import patch

import pytest

from image_selector.core.errors import (
    DirectoryCreateError,
    InvalidPathError,
    MoveError,
)
from image_selector.core.mover import MoveEngine

CROSS_DEVICE = OSError(errno.EXDEV, "Invalid cross-device link")


@pytest.fixture
def photo(tmp_path):
    source = tmp_path / "src" / "photo.png"
    source.parent.mkdir()
    source.write_bytes(b"original")
    return source


class TestMove:
    """Test MoveEngine.move."""

    def test_move_without_collision(self, photo, tmp_path):
        """Test that the file ends up at dest/filename and leaves the source."""
        dest_dir = tmp_path / "keep"
        dest_dir.mkdir()

        result = MoveEngine().move(photo, dest_dir)

        assert result == dest_dir / "photo.png"
        assert not photo.exists()
        assert list(dest_dir.iterdir()) == [dest_dir / "photo.png"]
        assert result.read_bytes() == b"original"

    def test_move_creates_missing_directories(self, photo, tmp_path):
        """Test that the destination and its ancestors are created."""
        dest_dir = tmp_path / "sorted" / "2024" / "keep"

        result = MoveEngine().move(photo, dest_dir)

        assert dest_dir.is_dir()
        assert result == dest_dir / "photo.png"
        assert result.exists()

    def test_same_name_moves_never_overwrite(self, tmp_path):
        """Test that three same-named files get three distinct names."""
        dest_dir = tmp_path / "keep"
        engine = MoveEngine()

        results = []
        for index in range(3):
            source = tmp_path / f"src{index}" / "photo.png"
            source.parent.mkdir()
            source.write_bytes(f"content {index}".encode())
            results.append(engine.move(source, dest_dir))

        assert [p.name for p in results] == ["photo.png", "photo_.png", "photo__.png"]
        for index, result in enumerate(results):
            assert result.read_bytes() == f"content {index}".encode()

    def test_collision_preserves_inner_dots(self, tmp_path):
        """Test that only the last suffix is treated as the extension."""
        dest_dir = tmp_path / "keep"
        dest_dir.mkdir()
        (dest_dir / "scan.2024.png").touch()
        source = tmp_path / "scan.2024.png"
        source.touch()

        result = MoveEngine().move(source, dest_dir)

        assert result.name == "scan.2024_.png"

    def test_custom_separator_from_config(self, photo, tmp_path, config):
        """Test that the collision separator is read from configuration."""
        config.set("move.collision_separator", "-")
        dest_dir = tmp_path / "keep"
        dest_dir.mkdir()
        (dest_dir / "photo.png").touch()

        result = MoveEngine(config).move(photo, dest_dir)

        assert result.name == "photo-.png"

    @pytest.mark.parametrize("separator", ["", "/"])
    def test_invalid_separator_rejected(self, separator):
        """Test that separators that could not terminate or escape are refused."""
        with pytest.raises(ValueError):
            MoveEngine(separator=separator)

    def test_missing_source_raises_move_error(self, tmp_path):
        """Test that a vanished source is reported with both paths."""
        source = tmp_path / "gone.png"
        dest_dir = tmp_path / "keep"

        with pytest.raises(MoveError) as exc_info:
            MoveEngine().move(source, dest_dir)

        assert exc_info.value.source == source
        assert exc_info.value.destination == dest_dir / "gone.png"
        assert isinstance(exc_info.value.cause, FileNotFoundError)

    def test_source_without_file_name(self, tmp_path):
        """Test that a path with no file name is an internal error."""
        with pytest.raises(InvalidPathError):
            MoveEngine().move(Path("/"), tmp_path)

    def test_directory_create_failure(self, photo, tmp_path):
        """Test that an uncreatable destination leaves the source alone."""
        blocker = tmp_path / "blocker"
        blocker.write_text("not a directory")

        with pytest.raises(DirectoryCreateError) as exc_info:
            MoveEngine().move(photo, blocker / "keep")

        assert exc_info.value.path == blocker / "keep"
        assert photo.read_bytes() == b"original"

    def test_other_rename_failure(self, photo, tmp_path):
        """Test that a non cross-device failure is surfaced as MoveError."""
        dest_dir = tmp_path / "keep"
        denied = PermissionError(errno.EACCES, "Permission denied")

        with patch("image_selector.core.mover.os.rename", side_effect=denied):
            with pytest.raises(MoveError) as exc_info:
                MoveEngine().move(photo, dest_dir)

        assert exc_info.value.cause is denied
        assert photo.exists()
        assert not (dest_dir / "photo.png").exists()


class TestCrossDeviceMove:
    """Test the copy-then-delete fallback."""

    def test_falls_back_to_copy_and_delete(self, photo, tmp_path):
        """Test that EXDEV results in a copy at the destination and no source."""
        dest_dir = tmp_path / "other-volume"

        with patch("image_selector.core.mover.os.rename", side_effect=CROSS_DEVICE):
            result = MoveEngine().move(photo, dest_dir)

        assert result == dest_dir / "photo.png"
        assert result.read_bytes() == b"original"
        assert not photo.exists()

    def test_copy_failure_keeps_source(self, photo, tmp_path):
        """Test that a failed copy never deletes the source."""
        dest_dir = tmp_path / "other-volume"
        disk_full = OSError(errno.ENOSPC, "No space left on device")

        with patch("image_selector.core.mover.os.rename", side_effect=CROSS_DEVICE), \
                patch("image_selector.core.mover.shutil.copy2", side_effect=disk_full):
            with pytest.raises(MoveError) as exc_info:
                MoveEngine().move(photo, dest_dir)

        assert exc_info.value.cause is disk_full
        assert photo.read_bytes() == b"original"
        assert not (dest_dir / "photo.png").exists()

    def test_delete_failure_leaves_both_copies(self, photo, tmp_path):
        """Test that a failed source delete is reported, with the copy in place."""
        dest_dir = tmp_path / "other-volume"
        denied = PermissionError(errno.EACCES, "Permission denied")

        with patch("image_selector.core.mover.os.rename", side_effect=CROSS_DEVICE), \
                patch.object(Path, "unlink", side_effect=denied):
            with pytest.raises(MoveError) as exc_info:
                MoveEngine().move(photo, dest_dir)

        assert exc_info.value.cause is denied
        assert photo.exists()
        assert (dest_dir / "photo.png").read_bytes() == b"original"


class TestResolveDestination:
    """Test collision resolution on its own."""

    def test_free_name_returned_unchanged(self, tmp_path):
        target = tmp_path / "photo.png"
        assert MoveEngine().resolve_destination(target) == target

    def test_each_candidate_extends_the_previous(self, tmp_path):
        for name in ("photo.png", "photo_.png", "photo__.png"):
            (tmp_path / name).touch()

        result = MoveEngine().resolve_destination(tmp_path / "photo.png")

        assert result == tmp_path / "photo___.png"

    def test_file_without_extension(self, tmp_path):
        (tmp_path / "README").touch()

        result = MoveEngine().resolve_destination(tmp_path / "README")

        assert result == tmp_path / "README_"
