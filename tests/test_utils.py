"""Unit tests for utility functions."""

from davsync.utils import (
    build_remote_path,
    directory_segments,
    format_size,
    join_url,
    parent_directory,
)


class TestBuildRemotePath:
    """Tests for build_remote_path."""

    def test_without_prefix(self):
        assert build_remote_path("sub/a.txt") == "sub/a.txt"
        assert build_remote_path("sub/a.txt", "") == "sub/a.txt"

    def test_with_prefix(self):
        assert build_remote_path("a.txt", "remote/dir") == "remote/dir/a.txt"

    def test_trailing_slash_of_prefix_is_removed(self):
        assert build_remote_path("a.txt", "remote/dir/") == "remote/dir/a.txt"
        assert build_remote_path("a.txt", "remote//") == "remote/a.txt"


class TestJoinUrl:
    """Tests for join_url."""

    def test_single_separator(self):
        assert join_url("http://host/dav", "a.txt") == "http://host/dav/a.txt"
        assert join_url("http://host/dav/", "a.txt") == "http://host/dav/a.txt"

    def test_segments_are_percent_encoded(self):
        assert (
            join_url("http://host/dav", "my dir/#1.txt")
            == "http://host/dav/my%20dir/%231.txt"
        )


class TestRemoteDirectories:
    """Tests for parent_directory and directory_segments."""

    def test_parent_directory(self):
        assert parent_directory("a.txt") == ""
        assert parent_directory("sub/dir/b.txt") == "sub/dir"

    def test_directory_segments_root_first(self):
        assert directory_segments("sub/dir") == ["sub", "sub/dir"]
        assert directory_segments("/a//b/") == ["a", "a/b"]
        assert directory_segments("") == []


class TestFormatSize:
    """Tests for format_size."""

    def test_units(self):
        assert format_size(256) == "256 B"
        assert format_size(1536) == "1.5 KB"
        assert format_size(5 * 1024 * 1024) == "5.0 MB"
        assert format_size(2 * 1024 * 1024 * 1024) == "2.0 GB"
