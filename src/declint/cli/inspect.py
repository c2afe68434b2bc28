"""CLI command: declint inspect -- display declaration blocks."""

from __future__ import annotations

import sys
from pathlib import Path

import click

from declint.model.stylesheet import AtRule, Rule
from declint.parser import ParseError, parse_stylesheet
from declint.validation.blocks import each_declaration_block


def _block_label(container: object) -> str:
    if isinstance(container, Rule):
        return container.selector
    if isinstance(container, AtRule):
        return f"@{container.name} {container.params}".rstrip()
    return "<root>"


@click.command()
@click.argument("cssfile", type=click.Path(exists=True, dir_okay=False))
def inspect(cssfile: str) -> None:
    """Parse a CSS file and display its declaration blocks.

    Blocks are listed innermost first, the order in which they are linted.
    """
    css_path = Path(cssfile)

    try:
        source = css_path.read_text(encoding="utf-8")
        stylesheet = parse_stylesheet(source, source_name=str(css_path))
    except ParseError as exc:
        click.echo(f"Parse error: {exc}", err=True)
        sys.exit(1)

    blocks = list(each_declaration_block(stylesheet))
    click.echo(f"File:         {css_path.name}")
    click.echo(f"Blocks:       {len(blocks)}")
    click.echo(f"Declarations: {sum(len(b) for b in blocks)}")

    for block in blocks:
        click.echo()
        click.echo(f"{_block_label(block[0].parent)}  (line {block[0].line})")
        for decl in block:
            click.echo(f"  {decl}  [{decl.line}:{decl.column}]")
