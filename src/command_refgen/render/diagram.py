"""Mermaid class diagrams for named types."""

from __future__ import annotations

from ..metrics.models import MetricNode, SymbolKind

_KIND_ORDER = {
    SymbolKind.FIELD: 1,
    SymbolKind.PROPERTY: 2,
    SymbolKind.METHOD: 3,
}

# Mermaid writes generics as Name~T~
_GENERIC_BRACKETS = str.maketrans({"[": "~", "]": "~"})


def class_diagram_name(display_name: str) -> str:
    """Class name used inside a diagram: the part after the first ``.``."""
    if "." in display_name:
        return display_name.split(".", 1)[1]
    return display_name


def to_mermaid_class_diagram(type_node: MetricNode) -> str:
    """Render a ``classDiagram`` for a type node.

    Args:
        type_node: Named type node whose children are its members

    Returns:
        Mermaid source, newline terminated

    Example output::

        classDiagram
        BaseCommandModule <|-- Fun : implements
        class Fun{
            -greeting$
            +ping(who: str) None
        }
    """
    owner = type_node.display_name
    class_name = class_diagram_name(owner)
    lines = ["classDiagram"]

    for interface in type_node.interfaces:
        if interface.is_generic:
            name = f"{interface.name}~{','.join(interface.type_arguments)}~"
        else:
            name = interface.name
        lines.append(f"{name.translate(_GENERIC_BRACKETS)} <|-- {class_name} : implements")

    lines.append(f"class {class_name}{{")
    # sorted() is stable, so members keep their order within a kind
    for member in sorted(type_node.children, key=lambda m: _KIND_ORDER.get(m.kind, 4)):
        lines.append(f"    {_member_line(member, owner, class_name)}")
    lines.append("}")

    return "\n".join(lines) + "\n"


def _classifier(member: MetricNode) -> str:
    if member.is_static:
        return "$"
    if member.is_abstract:
        return "*"
    return ""


def _member_line(member: MetricNode, owner: str, class_name: str) -> str:
    access = "-" if member.kind is SymbolKind.FIELD else "+"
    display = member.display_name

    if member.kind is not SymbolKind.METHOD:
        name = display.replace(f"{owner}.", "", 1)
        return f"{access}{name}{_classifier(member)}".translate(_GENERIC_BRACKETS)

    last_segment = owner.rpartition(".")[2]
    for ctor_prefix in (f"{owner}.__init__", f"{owner}.{last_segment}"):
        if display.startswith(f"{ctor_prefix}("):
            params = display[len(ctor_prefix) :]
            return f"{access}.ctor{params} {class_name}".translate(_GENERIC_BRACKETS)

    return_type = member.return_type or ""
    prefix = f"{return_type} {owner}."
    if return_type and "." not in return_type and display.startswith(prefix):
        signature = display[len(prefix) :]
    else:
        # qualified return types: take the leading token as the return type
        return_type, _, rest = display.partition(" ")
        signature = rest.replace(f"{owner}.", "", 1)

    return f"{access}{signature}{_classifier(member)} {return_type}".translate(_GENERIC_BRACKETS)
