"""Report files and GitHub Actions outputs."""

from .action_outputs import emit_action_outputs, summary_outputs
from .reports import ActionSummary, write_reports

__all__ = ["ActionSummary", "emit_action_outputs", "summary_outputs", "write_reports"]
