"""Builders that assemble Command and Argument records.

Extraction records what it learns as a sequence of immutable field updates and
finalizes each record once, after every decorator has been seen.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from .models import Argument, Command


@dataclass(frozen=True)
class FieldUpdate:
    """One change to a record field.

    Attributes:
        field: Field name on the target model
        value: New value, or the item to append
        append: Append ``value`` to a list field instead of replacing it
    """

    field: str
    value: Any
    append: bool = False


@dataclass
class _RecordBuilder:
    updates: list[FieldUpdate] = field(default_factory=list)

    def set(self, name: str, value: Any) -> None:
        self.updates.append(FieldUpdate(name, value))

    def append(self, name: str, value: Any) -> None:
        self.updates.append(FieldUpdate(name, value, append=True))

    def _fold(self, initial: dict[str, Any]) -> dict[str, Any]:
        values = dict(initial)
        for update in self.updates:
            if update.append:
                values[update.field] = [*(values.get(update.field) or []), update.value]
            else:
                values[update.field] = update.value
        return values


@dataclass
class ArgumentBuilder(_RecordBuilder):
    name: str = ""
    type: str = "Any"

    def build(self) -> Argument:
        return Argument(**self._fold({"name": self.name, "type": self.type}))


@dataclass
class CommandBuilder(_RecordBuilder):
    location: str = ""

    def add_argument(self, argument: Argument) -> None:
        self.append("arguments", argument)

    def build(self) -> Command:
        return Command(**self._fold({"location": self.location}))
