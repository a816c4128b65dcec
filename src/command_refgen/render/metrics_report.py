"""CODE_METRICS.md rendering."""

from __future__ import annotations

import html
import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

from loguru import logger

from ..config.defaults import METRIC_DEFINITIONS, SYNTHETIC_TYPE_NAME
from ..config.settings import ActionInputs
from ..core.diagnostics import DiagnosticSink
from ..metrics.models import (
    ComplexityRating,
    MetricNode,
    SymbolKind,
    count_named_types,
    count_namespaces,
    find_highest_complexity,
)
from ..metrics.severity import Severity, classify_complexity
from .anchors import AnchorRegistry
from .diagram import to_mermaid_class_diagram
from .markdown import MarkdownDocument, append_maintained_by_bot

SEVERITY_EMOJI = {
    Severity.PASS: ":heavy_check_mark:",
    Severity.CAUTION: ":warning:",
    Severity.HIGH: ":radioactive:",
    Severity.CRITICAL: ":x:",
    Severity.EXTREME: ":exploding_head:",
}
UNKNOWN_EMOJI = ":question:"

MEMBER_TABLE_HEADERS = (
    "Member kind",
    "Line number",
    "Maintainability index",
    "Cyclomatic complexity",
    "Depth of inheritance",
    "Class coupling",
    "Lines of source / executable code",
)


def severity_emoji(severity: Severity | None) -> str:
    if severity is None:
        return UNKNOWN_EMOJI
    return SEVERITY_EMOJI[severity]


def format_complexity(rating: ComplexityRating) -> str:
    if rating.is_unknown:
        return f"N/A {UNKNOWN_EMOJI}"
    return f"{rating.value} {severity_emoji(rating.severity)}"


@dataclass(frozen=True)
class _Anchor:
    element_id: str
    display_name: str
    rating: ComplexityRating

    @property
    def emoji(self) -> str:
        return severity_emoji(self.rating.severity)

    @property
    def back_link(self) -> str:
        return (
            f'<a href="#{self.element_id}">:top: back to '
            f"{html.escape(self.display_name)}</a>"
        )


def render_metrics_report(
    metric_data: Mapping[str, MetricNode],
    inputs: ActionInputs,
    diagnostics: DiagnosticSink,
) -> str:
    """Render the metrics report of all analyzed projects.

    Args:
        metric_data: Assembly metrics keyed by project file path
        inputs: Repository identity used for source links
        diagnostics: Receives anchor collision warnings

    Returns:
        Markdown document text
    """
    document = MarkdownDocument()
    anchors = AnchorRegistry(diagnostics)
    diagrams: list[tuple[str, str, str]] = []

    document.append_linter_capture()
    document.append_header("Code Metrics", 1)
    document.append_paragraph(
        "This file is dynamically maintained by a bot, *please do not* edit this by hand. "
        "It represents various code metrics, such as cyclomatic complexity, "
        "maintainability index, and so on."
    )

    for file_path, assembly in sorted(metric_data.items(), key=lambda item: item[0]):
        assembly_anchor = _anchor(anchors, assembly)

        document.append_paragraph(f"<div id='{assembly_anchor.element_id}'></div>")
        document.append_header(f"{assembly.display_name} {assembly_anchor.emoji}", 2)
        document.append_paragraph(f"The *{Path(file_path).name}* project file contains:")
        document.append_list(
            [
                f"{count_namespaces(assembly):,} namespaces.",
                f"{count_named_types(assembly):,} named types.",
                f"{assembly.source_lines:,} total lines of source code.",
                f"Approximately {assembly.executable_lines:,} lines of executable code.",
                f"The highest cyclomatic complexity is {format_complexity(assembly_anchor.rating)}.",
            ]
        )

        namespaces = [child for child in assembly.children if child.kind is SymbolKind.NAMESPACE]
        for namespace in sorted(namespaces, key=lambda node: node.name):
            _render_namespace(document, anchors, namespace, inputs, diagrams)

        document.append_paragraph(assembly_anchor.back_link)

    _append_metric_definitions(document)
    _append_class_diagrams(document, diagrams)
    append_maintained_by_bot(document)
    document.append_linter_restore()

    logger.debug(f"Rendered metrics report with {len(diagrams)} class diagram(s)")
    return document.render()


def _render_namespace(
    document: MarkdownDocument,
    anchors: AnchorRegistry,
    namespace: MetricNode,
    inputs: ActionInputs,
    diagrams: list[tuple[str, str, str]],
) -> None:
    namespace_anchor = _anchor(anchors, namespace)
    _open_section(document, namespace_anchor)

    document.append_paragraph(
        f"The `{namespace.display_name}` namespace contains {len(namespace.children)} named types."
    )
    document.append_list(
        [
            f"{count_named_types(namespace):,} named types.",
            f"{namespace.source_lines:,} total lines of source code.",
            f"Approximately {namespace.executable_lines:,} lines of executable code.",
            f"The highest cyclomatic complexity is {format_complexity(namespace_anchor.rating)}.",
        ]
    )

    for type_node in sorted(namespace.children, key=lambda node: node.name):
        qualified = f"{namespace.display_name}.{type_node.display_name}"
        type_anchor = _anchor(anchors, type_node, seed=qualified)
        _open_section(document, type_anchor)

        document.append_list(
            [
                f"The `{type_node.display_name}` contains {len(type_node.children)} members.",
                f"{type_node.source_lines:,} total lines of source code.",
                f"Approximately {type_node.executable_lines:,} lines of executable code.",
                f"The highest cyclomatic complexity is {format_complexity(type_anchor.rating)}.",
            ]
        )
        rows = [
            _member_row(member, inputs)
            for member in sorted(type_node.children, key=lambda node: node.name)
        ]
        document.append_table(MEMBER_TABLE_HEADERS, rows)

        if type_node.display_name != SYNTHETIC_TYPE_NAME:
            class_name = type_node.display_name
            diagram_id = anchors.reserve(f"{qualified}-class-diagram")
            document.append_paragraph(
                f'<a href="#{diagram_id}">:link: to `{html.escape(class_name)}` class diagram</a>'
            )
            diagrams.append((diagram_id, class_name, to_mermaid_class_diagram(type_node)))

        document.append_paragraph(namespace_anchor.back_link)
        _close_section(document)

    _close_section(document)


def _anchor(anchors: AnchorRegistry, node: MetricNode, seed: str | None = None) -> _Anchor:
    """Reserve an anchor for a node; types are seeded with their namespace."""
    return _Anchor(
        element_id=anchors.reserve(seed or node.display_name),
        display_name=node.display_name,
        rating=find_highest_complexity(node),
    )


def _member_row(member: MetricNode, inputs: ActionInputs) -> list[str]:
    complexity = member.cyclomatic_complexity or 0
    return [
        str(member.kind),
        line_number_link(member, inputs),
        str(member.maintainability_index),
        f"{complexity} {SEVERITY_EMOJI[classify_complexity(complexity)]}",
        str(member.depth_of_inheritance or 0),
        str(member.coupled_type_count),
        f"{member.source_lines:,} / {member.executable_lines:,}",
    ]


def line_number_link(member: MetricNode, inputs: ActionInputs) -> str:
    """Link to the member's line on GitHub, or ``N/A`` without a location."""
    location = member.location
    if location is None:
        return "N/A"

    title = html.escape(member.display_name, quote=True)
    if not location.file_path:
        return f'[{location.line:,}](# "{title}")'

    relative = os.path.relpath(location.file_path, inputs.workspace_directory).replace("\\", "/")
    url = (
        f"https://github.com/{inputs.owner}/{inputs.name}/blob/{inputs.branch}/"
        f"{relative}#L{location.line}"
    )
    # an explicit anchor; GitHub treats bare links as site-relative
    return f"<a href='{url}' title='{title}'>{location.line:,}</a>"


def _open_section(document: MarkdownDocument, anchor: _Anchor) -> None:
    document.append_paragraph(
        "<details>\n"
        "<summary>\n"
        f'  <strong id="{anchor.element_id}">\n'
        f"    {html.escape(anchor.display_name)} {anchor.emoji}\n"
        "  </strong>\n"
        "</summary>\n"
        "<br>"
    )


def _close_section(document: MarkdownDocument) -> None:
    document.append_paragraph("</details>")


def _append_metric_definitions(document: MarkdownDocument) -> None:
    document.append_header("Metric definitions", 2)
    document.append_list(f"**{header}**: {definition}" for header, definition in METRIC_DEFINITIONS)


def _append_class_diagrams(document: MarkdownDocument, diagrams: list[tuple[str, str, str]]) -> None:
    document.append_header("Mermaid class diagrams", 2)
    for diagram_id, class_name, code in diagrams:
        document.append_paragraph(f'<div id="{diagram_id}"></div>')
        document.append_header(f"`{class_name}` class diagram", 5)
        document.append_code("mermaid", code)

