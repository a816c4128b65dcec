"""In-document anchor identifiers."""

from __future__ import annotations

from ..core.diagnostics import DiagnosticSink

_STRIPPED = str.maketrans({".": "-", " ": "+", "<": None, ">": None, "(": None, ")": None})


def prepare_element_id(value: str) -> str:
    """Normalize a display name into an element id.

    Lowercases, turns ``.`` into ``-`` and spaces into ``+``, and drops
    ``<``, ``>``, ``(`` and ``)``. Idempotent.

    Examples:
        >>> prepare_element_id("Bot.Commands.Fun")
        'bot-commands-fun'
        >>> prepare_element_id("<module>")
        'module'
    """
    return value.lower().translate(_STRIPPED)


class AnchorRegistry:
    """Hands out unique element ids within one document.

    The first display name normalizing to an id gets it unchanged; later ones
    get ``-2``, ``-3``, ... and a warning is recorded.
    """

    def __init__(self, diagnostics: DiagnosticSink) -> None:
        self.diagnostics = diagnostics
        self._owners: dict[str, str] = {}
        self._counts: dict[str, int] = {}

    def reserve(self, display_name: str) -> str:
        base = prepare_element_id(display_name)
        element_id = base
        while element_id in self._owners:
            self._counts[base] = self._counts.get(base, 1) + 1
            element_id = f"{base}-{self._counts[base]}"

        if element_id != base:
            self.diagnostics.warning(
                f"'{display_name}' collides with '{self._owners[base]}' on anchor "
                f"'{base}', using '{element_id}'",
                source=base,
            )
        self._owners[element_id] = display_name
        return element_id
