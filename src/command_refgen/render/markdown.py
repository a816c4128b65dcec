"""Minimal Markdown document builder."""

from __future__ import annotations

from collections.abc import Iterable, Sequence


class MarkdownDocument:
    """Accumulates Markdown blocks and joins them with blank lines.

    Example:
        document = MarkdownDocument()
        document.append_header("Code Metrics", 1)
        document.append_list(["3 namespaces.", "7 named types."])
        text = document.render()
    """

    def __init__(self) -> None:
        self._blocks: list[str] = []

    def append_header(self, text: str, level: int) -> MarkdownDocument:
        if not 1 <= level <= 6:
            raise ValueError(f"Header level must be between 1 and 6, got {level}")
        self._blocks.append(f"{'#' * level} {text}")
        return self

    def append_paragraph(self, text: str) -> MarkdownDocument:
        self._blocks.append(text)
        return self

    def append_emphasis(self, text: str) -> MarkdownDocument:
        self._blocks.append(f"*{text}*")
        return self

    def append_list(self, items: Iterable[str]) -> MarkdownDocument:
        lines = [f"- {item}" for item in items]
        if lines:
            self._blocks.append("\n".join(lines))
        return self

    def append_table(self, headers: Sequence[str], rows: Iterable[Sequence[str]]) -> MarkdownDocument:
        """Append a table with every column centered.

        Pipes inside cells are escaped so signatures like ``str | None`` do not
        split a row.
        """
        lines = [
            _table_row(headers),
            "|" + "|".join(":---:" for _ in headers) + "|",
        ]
        for row in rows:
            if len(row) != len(headers):
                raise ValueError(f"Expected {len(headers)} cells, got {len(row)}")
            lines.append(_table_row(row))
        self._blocks.append("\n".join(lines))
        return self

    def append_code(self, language: str, code: str) -> MarkdownDocument:
        self._blocks.append(f"```{language}\n{code.rstrip()}\n```")
        return self

    def append_linter_capture(self) -> MarkdownDocument:
        """Open a region where markdownlint is disabled."""
        return self.append_paragraph("<!-- markdownlint-capture -->\n<!-- markdownlint-disable -->")

    def append_linter_restore(self) -> MarkdownDocument:
        return self.append_paragraph("<!-- markdownlint-restore -->")

    def render(self) -> str:
        return "\n\n".join(self._blocks) + "\n"

    def __str__(self) -> str:
        return self.render()


def append_maintained_by_bot(document: MarkdownDocument) -> None:
    document.append_emphasis("**This file is maintained by a github action.**")


def _table_row(cells: Sequence[str]) -> str:
    escaped = [cell.replace("|", "\\|") for cell in cells]
    return "| " + " | ".join(escaped) + " |"
