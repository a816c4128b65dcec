"""Tests for the diagnostics sink."""

from command_refgen.core.diagnostics import Diagnostic, DiagnosticLevel, DiagnosticSink


class TestDiagnosticSink:
    def test_collects_in_order(self):
        sink = DiagnosticSink()
        sink.warning("first", source="a.py#L1-L2")
        sink.info("second")

        assert len(sink) == 2
        assert [d.message for d in sink.diagnostics] == ["first", "second"]
        assert [d.message for d in sink.warnings] == ["first"]

    def test_str_includes_source(self):
        assert str(Diagnostic(DiagnosticLevel.WARNING, "oops", "x.py")) == "x.py: oops"
        assert str(Diagnostic(DiagnosticLevel.INFO, "oops")) == "oops"
