"""Tests for extension derivation from client filenames."""

import pytest

from zencloud.services.file_service import derive_extension


@pytest.mark.parametrize(
    ('filename', 'expected'),
    [
        ('a.txt', '.txt'),
        ('archive.tar.gz', '.gz'),
        ('.bashrc', '.bashrc'),
        ('README', ''),
        ('dir.d/README', ''),
        ('trailing.', '.'),
        ('', ''),
    ],
)
def test_derive_extension(filename, expected):
    """Test the suffix taken from the last dot of the last path element."""
    assert derive_extension(filename) == expected
