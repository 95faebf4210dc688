from pathlib import Path

import pytest
from PIL import Image


@pytest.fixture
def make_image():
    """Factory writing a solid-colour image of the given size."""

    def _make(path: Path, size=(100, 100), color="red", mode="RGB") -> Path:
        Image.new(mode, size, color=color).save(path)
        return path

    return _make


class RecordingScope:
    """Access scope that records every grant."""

    def __init__(self):
        self.directories = []
        self.files = []

    def allow_directory(self, path, recursive):
        self.directories.append((path, recursive))

    def allow_file(self, path):
        self.files.append(path)


@pytest.fixture
def recording_scope():
    return RecordingScope()
