"""Declaration block enumeration."""

from __future__ import annotations

from typing import Iterator

from declint.model.stylesheet import Declaration, Stylesheet


def each_declaration_block(root: Stylesheet) -> Iterator[list[Declaration]]:
    """Yield the direct declarations of every container in *root*.

    Nested blocks are independent scopes and are yielded before the block
    that contains them.  Each yielded list is a snapshot, so removing
    declarations from the document while consuming it is safe.
    """
    yield from _each(root)


def _each(container: object) -> Iterator[list[Declaration]]:
    nodes = getattr(container, "nodes", None)
    if not nodes:
        return
    decls: list[Declaration] = []
    for node in list(nodes):
        if isinstance(node, Declaration):
            decls.append(node)
        yield from _each(node)
    if decls:
        yield decls
