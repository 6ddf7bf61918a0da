import os
from datetime import datetime

import pytest

from exceptions.custom_exceptions import CaptionSaveError, ErrorStage
from utils.file_utils import save_to_filesystem, create_timestamped_filename


def test_save_creates_directory_and_adds_txt(tmp_path):
    output_dir = tmp_path / "nested" / "dir"
    path = save_to_filesystem("hello world", "captions", str(output_dir))
    assert path == os.path.join(str(output_dir), "captions.txt")
    with open(path, encoding="utf-8") as f:
        assert f.read() == "hello world"


def test_save_keeps_existing_extension(tmp_path):
    path = save_to_filesystem("# Title", "my_video.md", str(tmp_path))
    assert path.endswith("my_video.md")


def test_save_failure_is_persistence_error(tmp_path):
    blocker = tmp_path / "not-a-dir"
    blocker.write_text("x")
    with pytest.raises(CaptionSaveError) as exc_info:
        save_to_filesystem("content", "file.txt", str(blocker))
    error = exc_info.value
    assert error.stage == ErrorStage.PERSISTENCE
    assert error.status_code == 500
    assert error.message.startswith("Failed to save file:")
    assert isinstance(error.__cause__, OSError)


def test_create_timestamped_filename():
    now = datetime(2024, 5, 1, 14, 25, 1)
    assert create_timestamped_filename("My Video: Part 1", now=now) == "My Video Part 1_2024-05-01T14-25-01.txt"
    assert create_timestamped_filename("notes", "md", now=now) == "notes_2024-05-01T14-25-01.md"


def test_timestamped_filename_falls_back_for_punctuation_only_title():
    now = datetime(2024, 5, 1, 14, 25, 1)
    assert create_timestamped_filename("???", now=now) == "youtube_captions_2024-05-01T14-25-01.txt"
