"""Decorator and parameter-metadata parsing.

Every decorator on a command method parses into exactly one of the variants
below. The extractor folds them exhaustively, so adding a variant without
handling it is caught by the type checker (``assert_never``).
"""

from __future__ import annotations

import ast
from dataclasses import dataclass

from ..frontend.binder import SymbolBinder
from ..frontend.source import SourceModule


@dataclass(frozen=True)
class CommandName:
    """``@command("ping")``"""

    name: str


@dataclass(frozen=True)
class SlashCommandName:
    """``@slash_command("ping", "replies pong")``; description may be missing."""

    name: str
    description: str | None


@dataclass(frozen=True)
class DescriptionText:
    """``@description("...")``"""

    text: str


@dataclass(frozen=True)
class AliasList:
    """``@aliases("p", "pong")``"""

    aliases: tuple[str, ...]


@dataclass(frozen=True)
class RemainingTextMarker:
    """Marks an argument that consumes all trailing input."""

    written_name: str = "RemainingText"


@dataclass(frozen=True)
class MissingArguments:
    """A recognized decorator used without the arguments it needs."""

    kind: str
    written_name: str


@dataclass(frozen=True)
class Unrecognized:
    """A decorator whose meaning is unknown; kept by name."""

    written_name: str


Annotation = (
    CommandName
    | SlashCommandName
    | DescriptionText
    | AliasList
    | RemainingTextMarker
    | MissingArguments
    | Unrecognized
)


class AnnotationParser:
    """Parses decorators and ``Annotated`` metadata of one source module.

    Args:
        module: Module the expressions belong to
        decorator_names: Accepted names per decorator kind, matched against
            the last dotted segment of the written name
        binder: Resolves import aliases (``from bot import command as cmd``)
    """

    def __init__(
        self,
        module: SourceModule,
        decorator_names: dict[str, list[str]],
        binder: SymbolBinder | None = None,
    ) -> None:
        self.module = module
        self.binder = binder
        self._kinds: dict[str, str] = {}
        for kind, names in decorator_names.items():
            for name in names:
                self._kinds.setdefault(name, kind)

    def parse_decorator(self, decorator: ast.expr) -> Annotation:
        """Parse a decorator expression into its variant."""
        target, args, keywords = self._split_call(decorator)
        written = self.module.text_of(target)
        kind = self._kind_of(target, written)

        if kind == "command":
            name = self._positional_or_keyword(args, keywords, 0, "name")
            if name is None:
                return MissingArguments(kind, written)
            return CommandName(name)

        if kind == "slash_command":
            name = self._positional_or_keyword(args, keywords, 0, "name")
            if name is None:
                return MissingArguments(kind, written)
            description = self._positional_or_keyword(args, keywords, 1, "description")
            return SlashCommandName(name, description)

        if kind == "description":
            text = self._positional_or_keyword(args, keywords, 0, "text")
            if text is None:
                return MissingArguments(kind, written)
            return DescriptionText(text)

        if kind == "aliases":
            values = self._all_values(args, keywords)
            if not values:
                return MissingArguments(kind, written)
            return AliasList(tuple(values))

        if kind == "remaining_text":
            return RemainingTextMarker(written)

        return Unrecognized(written)

    def parse_parameter_metadata(self, annotation: ast.expr | None) -> tuple[str, list[Annotation]]:
        """Split a parameter annotation into its type text and metadata.

        ``Annotated[str, Description("who")]`` yields ``("str", [DescriptionText("who")])``;
        a plain annotation yields its text and no metadata; a missing one yields ``"Any"``.
        """
        if annotation is None:
            return "Any", []

        if isinstance(annotation, ast.Subscript) and self._is_annotated(annotation.value):
            elements = annotation.slice.elts if isinstance(annotation.slice, ast.Tuple) else [annotation.slice]
            if elements:
                type_text = self.module.text_of(elements[0])
                return type_text, [self.parse_decorator(meta) for meta in elements[1:]]

        return self.module.text_of(annotation), []

    # ── helpers ─────────────────────────────────────────────────────────

    def _kind_of(self, target: ast.expr, written: str) -> str | None:
        kind = self._kinds.get(written.rpartition(".")[2])
        if kind is None and self.binder is not None:
            resolved = self.binder.resolve_base(self.module, target)
            kind = self._kinds.get(resolved.name)
        return kind

    @staticmethod
    def _split_call(decorator: ast.expr) -> tuple[ast.expr, list[ast.expr], list[ast.keyword]]:
        if isinstance(decorator, ast.Call):
            return decorator.func, list(decorator.args), list(decorator.keywords)
        return decorator, [], []

    @staticmethod
    def _is_annotated(expr: ast.expr) -> bool:
        if isinstance(expr, ast.Name):
            return expr.id == "Annotated"
        if isinstance(expr, ast.Attribute):
            return expr.attr == "Annotated"
        return False

    def _value_text(self, expr: ast.expr) -> str:
        if isinstance(expr, ast.Constant) and isinstance(expr.value, str):
            return expr.value
        return self.module.text_of(expr)

    def _positional_or_keyword(
        self, args: list[ast.expr], keywords: list[ast.keyword], index: int, keyword: str
    ) -> str | None:
        if len(args) > index:
            return self._value_text(args[index])
        for kw in keywords:
            if kw.arg == keyword:
                return self._value_text(kw.value)
        return None

    def _all_values(self, args: list[ast.expr], keywords: list[ast.keyword]) -> list[str]:
        if len(args) == 1 and isinstance(args[0], (ast.List, ast.Tuple)):
            args = list(args[0].elts)
        values = [self._value_text(arg) for arg in args]
        values.extend(self._value_text(kw.value) for kw in keywords if kw.arg is not None)
        return values
