"""Unit tests for anchor ids."""

import pytest

from command_refgen.core.diagnostics import DiagnosticSink
from command_refgen.render.anchors import AnchorRegistry, prepare_element_id


class TestPrepareElementId:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            ("Silverbot.Commands.Fun", "silverbot-commands-fun"),
            ("<module>", "module"),
            ("None Fun.ping(ctx)", "none+fun-pingctx"),
            ("", ""),
        ],
    )
    def test_normalization(self, value, expected):
        assert prepare_element_id(value) == expected

    @pytest.mark.parametrize("value", ["A.B C", "<module>", "x(y).Z", "already-normal"])
    def test_idempotent(self, value):
        once = prepare_element_id(value)
        assert prepare_element_id(once) == once


class TestAnchorRegistry:
    """Collisions within one document get numbered suffixes."""

    def test_first_reservation_unchanged(self):
        registry = AnchorRegistry(DiagnosticSink())
        assert registry.reserve("Bot.Fun") == "bot-fun"

    def test_collisions_are_suffixed_and_reported(self):
        sink = DiagnosticSink()
        registry = AnchorRegistry(sink)

        ids = [registry.reserve("Bot.Fun"), registry.reserve("bot.fun"), registry.reserve("BOT.FUN")]

        assert ids == ["bot-fun", "bot-fun-2", "bot-fun-3"]
        assert len(sink.warnings) == 2
        assert "Bot.Fun" in sink.warnings[0].message

    def test_distinct_names_do_not_warn(self):
        sink = DiagnosticSink()
        registry = AnchorRegistry(sink)

        registry.reserve("bot.fun.Fun")
        registry.reserve("bot.admin.Fun")

        assert sink.warnings == []
