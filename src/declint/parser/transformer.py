"""Lark Transformer that converts a CSS parse tree into a Stylesheet model."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path

from lark import Lark, Token, Transformer
from lark.exceptions import LarkError, VisitError

from declint.model.stylesheet import AtRule, Declaration, Rule, Stylesheet
from declint.parser.errors import ParseError

GRAMMAR_PATH = Path(__file__).parent / "grammar.lark"

_IMPORTANT_RE = re.compile(r"\s*!\s*important\s*$", re.IGNORECASE)
_COMMENT_RE = re.compile(r"/\*[\s\S]*?\*/")


class _Chunk:
    """A run of tokens between statement delimiters."""

    def __init__(self, tokens: list[Token]):
        self.tokens = tokens

    @property
    def first(self) -> Token:
        return self.tokens[0]

    @property
    def start_pos(self) -> int:
        return self.tokens[0].start_pos

    @property
    def end_pos(self) -> int:
        return self.tokens[-1].end_pos


def _flatten(items: list[object]) -> list[Token]:
    tokens: list[Token] = []
    for item in items:
        if isinstance(item, list):
            tokens.extend(item)
        else:
            tokens.append(item)  # type: ignore[arg-type]
    return tokens


def _adopt(container: object, nodes: list[object]) -> None:
    for node in nodes:
        node.parent = container  # type: ignore[attr-defined]


class CssTransformer(Transformer):  # type: ignore[type-arg]
    """Transform a Lark parse tree into stylesheet nodes.

    Text is sliced from the original source rather than rebuilt from tokens,
    so selectors, at-rule params and values keep their spelling and inner
    whitespace.
    """

    def __init__(self, source: str):
        super().__init__()
        self._source = source

    # ---- helpers ----

    def _joined(self, tokens: list[Token]) -> str:
        """Source text spanning *tokens*, with comments between them removed."""
        parts: list[str] = []
        prev: Token | None = None
        for tok in tokens:
            if prev is not None:
                parts.append(_COMMENT_RE.sub("", self._source[prev.end_pos : tok.start_pos]))
            parts.append(self._source[tok.start_pos : tok.end_pos])
            prev = tok
        return "".join(parts).strip()

    def _declaration(self, chunk: _Chunk, end_pos: int) -> Declaration:
        colon = next(
            (i for i, tok in enumerate(chunk.tokens) if tok.type == "COLON"), None
        )
        if not colon:
            # No colon at all, or a chunk that starts with one.
            raise ParseError(
                f"Unknown word {str(chunk.first)!r}",
                line=chunk.first.line,
                column=chunk.first.column,
            )
        prop_tokens = chunk.tokens[:colon]
        value = self._joined(chunk.tokens[colon + 1 :])
        important = False
        match = _IMPORTANT_RE.search(value)
        if match:
            important = True
            value = value[: match.start()]
        first = prop_tokens[0]
        return Declaration(
            prop=self._source[first.start_pos : prop_tokens[-1].end_pos],
            value=value,
            important=important,
            line=first.line,
            column=first.column,
            start_pos=first.start_pos,
            end_pos=end_pos,
        )

    # ---- tokens ----

    def group(self, items: list[object]) -> list[Token]:
        return _flatten(items)

    def chunk(self, items: list[object]) -> _Chunk:
        return _Chunk(_flatten(items))

    # ---- statements ----

    def declaration(self, items: list[object]) -> Declaration:
        chunk, semi = items
        return self._declaration(chunk, end_pos=semi.end_pos)  # type: ignore[arg-type, union-attr]

    def last_declaration(self, items: list[object]) -> Declaration:
        (chunk,) = items
        return self._declaration(chunk, end_pos=chunk.end_pos)  # type: ignore[arg-type, union-attr]

    def rule(self, items: list[object]) -> Rule:
        chunk, _lbrace, body, rbrace = items
        rule = Rule(
            selector=self._joined(chunk.tokens),  # type: ignore[union-attr]
            nodes=body,  # type: ignore[arg-type]
            line=chunk.first.line,  # type: ignore[union-attr]
            column=chunk.first.column,  # type: ignore[union-attr]
            start_pos=chunk.start_pos,  # type: ignore[union-attr]
            end_pos=rbrace.end_pos,  # type: ignore[union-attr]
        )
        _adopt(rule, body)  # type: ignore[arg-type]
        return rule

    def at_rule(self, items: list[object]) -> AtRule:
        keyword = items[0]
        chunk = next((i for i in items if isinstance(i, _Chunk)), None)
        body = next((i for i in items if isinstance(i, list)), None)
        at_rule = AtRule(
            name=str(keyword)[1:],
            params=self._joined(chunk.tokens) if chunk else "",
            nodes=body,
            line=keyword.line,  # type: ignore[union-attr]
            column=keyword.column,  # type: ignore[union-attr]
            start_pos=keyword.start_pos,  # type: ignore[union-attr]
            end_pos=items[-1].end_pos,  # type: ignore[union-attr]
        )
        if body is not None:
            _adopt(at_rule, body)
        return at_rule

    def last_at_rule(self, items: list[object]) -> AtRule:
        keyword = items[0]
        chunk = items[1] if len(items) > 1 else None
        return AtRule(
            name=str(keyword)[1:],
            params=self._joined(chunk.tokens) if chunk else "",  # type: ignore[union-attr]
            line=keyword.line,  # type: ignore[union-attr]
            column=keyword.column,  # type: ignore[union-attr]
            start_pos=keyword.start_pos,  # type: ignore[union-attr]
            end_pos=chunk.end_pos if chunk else keyword.end_pos,  # type: ignore[union-attr]
        )

    def body(self, items: list[object]) -> list[object]:
        # Stray semicolons carry no meaning.
        return [item for item in items if not isinstance(item, Token)]

    def start(self, items: list[object]) -> list[object]:
        return items[0]  # type: ignore[return-value]


@lru_cache(maxsize=1)
def _css_parser() -> Lark:
    return Lark(
        GRAMMAR_PATH.read_text(encoding="utf-8"),
        parser="lalr",
        start="start",
    )


def parse_stylesheet(source: str, source_name: str = "<input>") -> Stylesheet:
    """Parse CSS source into a Stylesheet model.

    Raises :class:`ParseError` when the source is not well-formed.
    """
    try:
        tree = _css_parser().parse(source)
    except LarkError as e:
        # Try to extract line/column from Lark exceptions.
        line = getattr(e, "line", None)
        column = getattr(e, "column", None)
        raise ParseError(str(e), line=line, column=column) from e
    try:
        nodes = CssTransformer(source).transform(tree)
    except VisitError as e:
        if isinstance(e.orig_exc, ParseError):
            raise e.orig_exc from None
        raise
    stylesheet = Stylesheet(nodes=nodes, source=source, source_name=source_name)
    _adopt(stylesheet, nodes)
    return stylesheet
