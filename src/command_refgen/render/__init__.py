"""Markdown rendering of metrics reports and command catalogs."""

from .anchors import AnchorRegistry, prepare_element_id
from .command_catalog import format_signature, render_command_catalog
from .diagram import to_mermaid_class_diagram
from .markdown import MarkdownDocument
from .metrics_report import render_metrics_report, severity_emoji

__all__ = [
    "AnchorRegistry",
    "MarkdownDocument",
    "format_signature",
    "prepare_element_id",
    "render_command_catalog",
    "render_metrics_report",
    "severity_emoji",
    "to_mermaid_class_diagram",
]
