"""Stylesheet document model: Declaration, Rule, AtRule and Stylesheet nodes."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, Union

Node = Union["Declaration", "Rule", "AtRule"]
Container = Union["Rule", "AtRule", "Stylesheet"]


@dataclass(eq=False)
class Declaration:
    """A single ``prop: value`` statement.

    ``value`` never includes the ``!important`` marker; it is reported through
    ``important`` instead.  ``start_pos``/``end_pos`` are character offsets into
    the stylesheet source, the end including the terminating semicolon when
    there is one.
    """

    prop: str
    value: str
    important: bool = False
    line: int = 1
    column: int = 1
    start_pos: int = 0
    end_pos: int = 0
    parent: Container | None = field(default=None, repr=False)

    def remove(self) -> None:
        """Detach this declaration from the document.

        Removing an already detached declaration does nothing.
        """
        parent = self.parent
        if parent is None:
            return
        root = _root_of(parent)
        parent.nodes.remove(self)
        self.parent = None
        if root is not None:
            root.removed.append(self)

    def __str__(self) -> str:
        important = " !important" if self.important else ""
        return f"{self.prop}: {self.value}{important}"


@dataclass(eq=False)
class Rule:
    """A selector followed by a ``{ ... }`` block."""

    selector: str
    nodes: list[Node] = field(default_factory=list)
    line: int = 1
    column: int = 1
    start_pos: int = 0
    end_pos: int = 0
    parent: Container | None = field(default=None, repr=False)


@dataclass(eq=False)
class AtRule:
    """An ``@name params`` statement, with or without a block.

    ``nodes`` is ``None`` for statement at-rules such as ``@import``.
    """

    name: str
    params: str = ""
    nodes: list[Node] | None = None
    line: int = 1
    column: int = 1
    start_pos: int = 0
    end_pos: int = 0
    parent: Container | None = field(default=None, repr=False)


@dataclass(eq=False)
class Stylesheet:
    """The root of a parsed stylesheet.

    Keeps the original source so that the document can be written back with
    removed declarations cut out (see :meth:`to_css`).
    """

    nodes: list[Node] = field(default_factory=list)
    source: str = ""
    source_name: str = "<input>"
    removed: list[Declaration] = field(default_factory=list, repr=False)

    def walk(self) -> Iterator[Node]:
        """Yield every node in document order (depth first)."""
        yield from _walk(self.nodes)

    def declarations(self) -> list[Declaration]:
        """Return all declarations still attached to the document."""
        return [n for n in self.walk() if isinstance(n, Declaration)]

    def to_css(self) -> str:
        """Return the source text with every removed declaration cut out.

        The whitespace preceding a removed declaration goes with it.
        """
        text = self.source
        for decl in sorted(self.removed, key=lambda d: d.start_pos, reverse=True):
            start = decl.start_pos
            while start > 0 and text[start - 1].isspace():
                start -= 1
            text = text[:start] + text[decl.end_pos:]
        return text


def _walk(nodes: list[Node]) -> Iterator[Node]:
    for node in nodes:
        yield node
        children = getattr(node, "nodes", None)
        if children:
            yield from _walk(children)


def _root_of(node: Container) -> Stylesheet | None:
    current: Container | None = node
    while current is not None and not isinstance(current, Stylesheet):
        current = current.parent
    return current
