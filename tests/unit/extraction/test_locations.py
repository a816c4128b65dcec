"""Unit tests for workspace-relative locations."""

import pytest

from command_refgen.extraction.locations import format_location, relativize_workspace_path


class TestRelativizeWorkspacePath:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("/github/workspace/src/bot/fun.py", "/src/bot/fun.py"),
            ("D:\\a\\github\\workspace\\src\\bot\\fun.py", "/src/bot/fun.py"),
            ("/home/me/bot/fun.py", "/home/me/bot/fun.py"),
            ("/github/workspace/github/workspace/x.py", "/github/workspace/x.py"),
            ("C:\\bot\\fun.py", "C:/bot/fun.py"),
        ],
    )
    def test_relativize(self, path, expected):
        assert relativize_workspace_path(path) == expected

    def test_custom_marker(self):
        assert relativize_workspace_path("/srv/checkout/bot.py", "srv/checkout") == "/bot.py"


class TestFormatLocation:
    def test_line_span(self):
        assert (
            format_location("/github/workspace/src/bot/fun.py", 10, 14)
            == "/src/bot/fun.py#L10-L14"
        )

    def test_single_line(self):
        assert format_location("fun.py", 3, 3) == "fun.py#L3-L3"
